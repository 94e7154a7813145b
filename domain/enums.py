"""
Domain enums for the lodging application.
Contains all enumeration types used across the domain models.
"""

import enum


class BookingStatus(str, enum.Enum):
    """Booking lifecycle"""

    QUOTE = "quote"
    OPTION = "option"
    CONFIRMED = "confirmed"
    CHECKEDIN = "checkedin"
    CHECKEDOUT = "checkedout"
    INVOICED = "invoiced"
    BALANCED = "balanced"
    CANCELLED = "cancelled"


class SojournType(str, enum.Enum):
    """Kind of sojourn a booking line group is about"""

    GA = "GA"
    GG = "GG"


class QtyAccountingMethod(str, enum.Enum):
    """How the quantity of a product is derived from its sojourn"""

    ACCOMODATION = "accomodation"
    PERSON = "person"
    UNIT = "unit"


class DiscountType(str, enum.Enum):
    PERCENT = "percent"
    AMOUNT = "amount"


class InvoiceStatus(str, enum.Enum):
    PROFORMA = "proforma"
    INVOICE = "invoice"
    CANCELLED = "cancelled"


class ReceivableStatus(str, enum.Enum):
    PENDING = "pending"
    INVOICED = "invoiced"
    CANCELLED = "cancelled"


class InvoiceRenderMode(str, enum.Enum):
    """Level of detail of a rendered invoice"""

    SIMPLE = "simple"
    GROUPED = "grouped"
    DETAILED = "detailed"
