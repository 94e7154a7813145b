from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.models import DocumentTag
from domain.schemas.document_schemas import DocumentTagCreate
from repositories import DocumentRepository, DocumentTagRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("lodging.documents")


class DocumentService:
    @staticmethod
    def list_tags(db: Session) -> List[DocumentTag]:
        return DocumentTagRepository(db).get_all_with_documents()

    @staticmethod
    def create_tag(db: Session, payload: DocumentTagCreate) -> DocumentTag:
        tag = DocumentTagRepository(db).create(
            DocumentTag(name=payload.name, description=payload.description)
        )
        logger.info("Created document tag %s (%s)", tag.id, tag.name)
        return tag

    @staticmethod
    def set_tag_documents(db: Session, tag_id: int, document_ids: List[int]) -> DocumentTag:
        """
        Replace the documents of a tag.

        Raises:
            NotFoundError: unknown tag, or one of the documents does not exist
        """
        tag = DocumentTagRepository(db).get_by_id(tag_id)
        if not tag:
            raise NotFoundError(f"Document tag not found: {tag_id}", code="unknown_document_tag")

        wanted = list(dict.fromkeys(document_ids))
        documents = DocumentRepository(db).get_by_ids(wanted)
        missing = set(wanted) - {d.id for d in documents}
        if missing:
            raise NotFoundError(
                f"Documents not found: {sorted(missing)}",
                details={"document_ids": sorted(missing)},
                code="unknown_document",
            )

        try:
            tag.documents = documents
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(tag)
        return tag
