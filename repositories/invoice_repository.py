"""
Invoice Repository - Data access layer for invoices and receivables
"""

from typing import List
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import ReceivableStatus
from domain.models import Invoice, Receivable


class InvoiceRepository(BaseRepository[Invoice]):
    """Repository for invoice data access"""

    def __init__(self, db: Session):
        super().__init__(db, Invoice)


class ReceivableRepository(BaseRepository[Receivable]):
    """Repository for receivable data access"""

    def __init__(self, db: Session):
        super().__init__(db, Receivable)

    def get_invoiced(self, invoice_id: int, customer_id: int) -> List[Receivable]:
        """Receivables of a customer that were invoiced through the given invoice"""
        return (
            self.db.query(Receivable)
            .filter(
                Receivable.status == ReceivableStatus.INVOICED.value,
                Receivable.customer_id == customer_id,
                Receivable.invoice_id == invoice_id,
            )
            .order_by(Receivable.id)
            .all()
        )
