from pydantic import BaseModel, EmailStr, Field
from typing import List

from app.config import settings
from domain.enums import InvoiceRenderMode


class CancelInvoicesRequest(BaseModel):
    """Schema for cancelling emitted invoices"""

    ids: List[int] = Field(..., min_length=1, description="Identifiers of the invoices to cancel")
    is_receivables_pending: bool = Field(
        default=True,
        description="Put receivables back to pending instead of cancelling them",
    )


class SendInvoiceRequest(BaseModel):
    """Schema for sending an invoice by e-mail"""

    invoice_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, description="Subject of the message")
    message: str = Field(..., description="HTML body of the message")
    sender_email: EmailStr
    recipient_email: EmailStr
    attachments_ids: List[int] = Field(
        default_factory=list, description="Template attachments to join"
    )
    mode: InvoiceRenderMode = Field(default=InvoiceRenderMode.GROUPED)
    lang: str = Field(
        default_factory=lambda: settings.default_lang,
        pattern=r"^[a-z]{2}([-_][A-Za-z]{2})?$",
        description="ISO-639 language code",
    )
