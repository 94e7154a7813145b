"""
Document Repository - Data access layer for documents, tags and template attachments
"""

from typing import List
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Document, DocumentTag, TemplateAttachment


class DocumentRepository(BaseRepository[Document]):
    def __init__(self, db: Session):
        super().__init__(db, Document)


class DocumentTagRepository(BaseRepository[DocumentTag]):
    """Repository for document tags"""

    def __init__(self, db: Session):
        super().__init__(db, DocumentTag)

    def get_all_with_documents(self) -> List[DocumentTag]:
        return (
            self.db.query(DocumentTag)
            .options(selectinload(DocumentTag.documents))
            .order_by(DocumentTag.id)
            .all()
        )


class TemplateAttachmentRepository(BaseRepository[TemplateAttachment]):
    """Repository for e-mail template attachments"""

    def __init__(self, db: Session):
        super().__init__(db, TemplateAttachment)

    def get_with_documents(self, attachment_ids: List[int]) -> List[TemplateAttachment]:
        ids = list(dict.fromkeys(attachment_ids))
        if not ids:
            return []
        return (
            self.db.query(TemplateAttachment)
            .options(selectinload(TemplateAttachment.document))
            .filter(TemplateAttachment.id.in_(ids))
            .order_by(TemplateAttachment.id)
            .all()
        )
