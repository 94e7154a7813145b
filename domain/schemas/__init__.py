"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.booking_schemas import (
    BookingLineCreate,
    BookingLineGroupCreate,
    BookingLineGroupUpdate,
    BookingLineResponse,
    PriceAdapterResponse,
    BookingLineGroupResponse,
    CompositionHostData,
    CompositionGenerateRequest,
    RentalUnitResponse,
)
from domain.schemas.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOnchangeRequest,
    CustomerResponse,
)
from domain.schemas.order_schemas import (
    OrderLineCreate,
    OrderLinesUpdate,
    OrderLineResponse,
    OrderLineGroupResponse,
)
from domain.schemas.document_schemas import (
    DocumentTagCreate,
    DocumentTagDocumentsUpdate,
    DocumentSummary,
    DocumentTagResponse,
)
from domain.schemas.invoice_schemas import CancelInvoicesRequest, SendInvoiceRequest
from domain.schemas.identity_schemas import IdentitySummary, UserInfoResponse, SchemaResponse

__all__ = [
    # Booking schemas
    "BookingLineCreate",
    "BookingLineGroupCreate",
    "BookingLineGroupUpdate",
    "BookingLineResponse",
    "PriceAdapterResponse",
    "BookingLineGroupResponse",
    "CompositionHostData",
    "CompositionGenerateRequest",
    "RentalUnitResponse",
    # Customer schemas
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerOnchangeRequest",
    "CustomerResponse",
    # Order schemas
    "OrderLineCreate",
    "OrderLinesUpdate",
    "OrderLineResponse",
    "OrderLineGroupResponse",
    # Document schemas
    "DocumentTagCreate",
    "DocumentTagDocumentsUpdate",
    "DocumentSummary",
    "DocumentTagResponse",
    # Invoice schemas
    "CancelInvoicesRequest",
    "SendInvoiceRequest",
    # Identity schemas
    "IdentitySummary",
    "UserInfoResponse",
    "SchemaResponse",
]
