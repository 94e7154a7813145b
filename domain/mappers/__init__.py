"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.customer_mapper import CustomerMapper
from domain.mappers.booking_mapper import BookingGroupMapper

__all__ = ["CustomerMapper", "BookingGroupMapper"]
