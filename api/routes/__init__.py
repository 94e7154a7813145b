"""API routes package"""

from . import (
    health,
    schema,
    userinfo,
    invoices,
    bookings,
    compositions,
    booking_line_groups,
    customers,
    order_line_groups,
    document_tags,
)

__all__ = [
    "health",
    "schema",
    "userinfo",
    "invoices",
    "bookings",
    "compositions",
    "booking_line_groups",
    "customers",
    "order_line_groups",
    "document_tags",
]
