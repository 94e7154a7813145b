"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.identity import Organisation, Identity, Group, User, user_group
from domain.models.customer import RateClass, CustomerType, CustomerNature, Customer
from domain.models.catalog import ProductModel, Product, PackLine, product_model_rental_unit
from domain.models.pricing import (
    PriceList,
    Price,
    DiscountList,
    Discount,
    DiscountCondition,
    SeasonType,
    SeasonPeriod,
)
from domain.models.realestate import Center, RentalUnit
from domain.models.booking import (
    Booking,
    BookingLineGroup,
    BookingLine,
    BookingPriceAdapter,
    SojournProductModel,
    SojournProductModelRentalUnitAssignement,
    Consumption,
    Composition,
    CompositionItem,
)
from domain.models.order import Order, OrderLineGroup, OrderLine
from domain.models.finance import Invoice, InvoiceLine, Receivable
from domain.models.documents import Document, DocumentTag, TemplateAttachment, document_tag

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Identity models
    "Organisation",
    "Identity",
    "Group",
    "User",
    "user_group",
    # Customer models
    "RateClass",
    "CustomerType",
    "CustomerNature",
    "Customer",
    # Catalog models
    "ProductModel",
    "Product",
    "PackLine",
    "product_model_rental_unit",
    # Pricing models
    "PriceList",
    "Price",
    "DiscountList",
    "Discount",
    "DiscountCondition",
    "SeasonType",
    "SeasonPeriod",
    # Real estate models
    "Center",
    "RentalUnit",
    # Booking models
    "Booking",
    "BookingLineGroup",
    "BookingLine",
    "BookingPriceAdapter",
    "SojournProductModel",
    "SojournProductModelRentalUnitAssignement",
    "Consumption",
    "Composition",
    "CompositionItem",
    # Order models
    "Order",
    "OrderLineGroup",
    "OrderLine",
    # Finance models
    "Invoice",
    "InvoiceLine",
    "Receivable",
    # Document models
    "Document",
    "DocumentTag",
    "TemplateAttachment",
    "document_tag",
]
