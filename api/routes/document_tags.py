"""Document tag routes"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.models import get_db_session
from domain.schemas.document_schemas import (
    DocumentTagCreate,
    DocumentTagDocumentsUpdate,
    DocumentTagResponse,
)
from services.document_service import DocumentService

router = APIRouter(prefix="/document-tags", tags=["Documents"])
logger = logging.getLogger("lodging.api.document_tags")


@router.post("", response_model=DocumentTagResponse, status_code=status.HTTP_201_CREATED)
def create_document_tag(payload: DocumentTagCreate, db: Session = Depends(get_db_session)):
    return DocumentService.create_tag(db, payload)


@router.get("", response_model=List[DocumentTagResponse])
def list_document_tags(db: Session = Depends(get_db_session)):
    return DocumentService.list_tags(db)


@router.put("/{tag_id}/documents", response_model=DocumentTagResponse, responses=error_responses(404))
def set_document_tag_documents(
    tag_id: int, payload: DocumentTagDocumentsUpdate, db: Session = Depends(get_db_session)
):
    """Replace the documents carrying a tag"""
    return DocumentService.set_tag_documents(db, tag_id, payload.documents_ids)
