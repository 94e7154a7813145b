"""Invoice routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.models import get_db_session
from domain.schemas.invoice_schemas import CancelInvoicesRequest
from services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])
logger = logging.getLogger("lodging.api.invoices")


@router.post(
    "/cancel", status_code=status.HTTP_204_NO_CONTENT, responses=error_responses(404)
)
def cancel_invoices(payload: CancelInvoicesRequest, db: Session = Depends(get_db_session)):
    """Cancel emitted invoices and release (or cancel) their receivables"""
    count = InvoiceService.cancel_invoices(db, payload.ids, payload.is_receivables_pending)
    logger.info("Cancelled %d invoice(s)", count)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
