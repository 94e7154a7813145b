"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository, IdentityRepository, GroupRepository
from repositories.customer_repository import (
    CustomerRepository,
    CustomerNatureRepository,
    CustomerTypeRepository,
    RateClassRepository,
)
from repositories.booking_repository import (
    BookingRepository,
    BookingLineGroupRepository,
    PriceAdapterRepository,
    SojournProductModelRepository,
    AssignmentRepository,
    ConsumptionRepository,
    CompositionRepository,
)
from repositories.rental_unit_repository import RentalUnitRepository, CenterRepository
from repositories.pricing_repository import (
    PriceListRepository,
    PriceRepository,
    DiscountListRepository,
    SeasonPeriodRepository,
    ProductRepository,
    ProductModelRepository,
)
from repositories.invoice_repository import InvoiceRepository, ReceivableRepository
from repositories.order_repository import OrderLineGroupRepository
from repositories.document_repository import (
    DocumentRepository,
    DocumentTagRepository,
    TemplateAttachmentRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "IdentityRepository",
    "GroupRepository",
    "CustomerRepository",
    "CustomerNatureRepository",
    "CustomerTypeRepository",
    "RateClassRepository",
    "BookingRepository",
    "BookingLineGroupRepository",
    "PriceAdapterRepository",
    "SojournProductModelRepository",
    "AssignmentRepository",
    "ConsumptionRepository",
    "CompositionRepository",
    "RentalUnitRepository",
    "CenterRepository",
    "PriceListRepository",
    "PriceRepository",
    "DiscountListRepository",
    "SeasonPeriodRepository",
    "ProductRepository",
    "ProductModelRepository",
    "InvoiceRepository",
    "ReceivableRepository",
    "OrderLineGroupRepository",
    "DocumentRepository",
    "DocumentTagRepository",
    "TemplateAttachmentRepository",
]
