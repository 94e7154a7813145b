from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.enums import InvoiceStatus, ReceivableStatus
from repositories import InvoiceRepository, ReceivableRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("lodging.invoice")


class InvoiceService:
    @staticmethod
    def cancel_invoices(
        db: Session, invoice_ids: List[int], is_receivables_pending: bool = True
    ) -> int:
        """
        Cancel emitted invoices and release (or cancel) their receivables.

        Invoices that are not in status 'invoice' are left untouched. Every
        invoice is checked before anything is written, so an invoice without
        invoiced receivables aborts the whole request.

        Args:
            db: Database session
            invoice_ids: identifiers of the invoices to cancel
            is_receivables_pending: put receivables back to 'pending' (detached
                from the invoice) instead of cancelling them

        Returns:
            Number of cancelled invoices

        Raises:
            NotFoundError: no invoice matches the ids (unknown_invoice), or an
                invoice has no invoiced receivable (unknown_receivable)
        """
        invoice_repo = InvoiceRepository(db)
        receivable_repo = ReceivableRepository(db)

        invoices = invoice_repo.get_by_ids(invoice_ids)
        if not invoices:
            raise NotFoundError("unknown_invoice", code="unknown_invoice")

        targets = []
        for invoice in invoices:
            if invoice.status != InvoiceStatus.INVOICE:
                logger.debug("Skipping invoice %s with status %s", invoice.id, invoice.status)
                continue
            receivables = receivable_repo.get_invoiced(invoice.id, invoice.customer_id)
            if not receivables:
                raise NotFoundError("unknown_receivable", code="unknown_receivable")
            targets.append((invoice, receivables))

        try:
            for invoice, receivables in targets:
                for receivable in receivables:
                    if is_receivables_pending:
                        receivable.status = ReceivableStatus.PENDING.value
                        receivable.invoice_id = None
                        receivable.invoice_line_id = None
                    else:
                        receivable.status = ReceivableStatus.CANCELLED.value
                invoice.status = InvoiceStatus.CANCELLED.value
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info("Cancelled %d invoice(s)", len(targets))
        return len(targets)
