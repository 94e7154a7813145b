"""Services package - Business logic layer"""

from services.schema_service import SchemaService
from services.auth_service import AuthService
from services.invoice_service import InvoiceService
from services.invoice_mail_service import InvoiceMailService
from services.composition_service import CompositionService
from services.rental_unit_service import RentalUnitService
from services.price_adapter_service import PriceAdapterService
from services.booking_group_service import BookingGroupService
from services.customer_service import CustomerService
from services.order_service import OrderService
from services.document_service import DocumentService

__all__ = [
    "SchemaService",
    "AuthService",
    "InvoiceService",
    "InvoiceMailService",
    "CompositionService",
    "RentalUnitService",
    "PriceAdapterService",
    "BookingGroupService",
    "CustomerService",
    "OrderService",
    "DocumentService",
]
