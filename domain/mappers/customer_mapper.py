"""
Customer domain mappers.
Handles transformation between ORM models and DTOs for customers.
"""

from domain.models import Customer
from domain.schemas.customer_schemas import CustomerResponse


class CustomerMapper:
    """Mapper for customer transformations."""

    @staticmethod
    def to_response(customer: Customer, count_booking_24: int = 0) -> CustomerResponse:
        """
        Convert Customer ORM model to CustomerResponse DTO.

        Args:
            customer: Customer ORM instance
            count_booking_24: number of bookings of the customer over the last 24 months

        Returns:
            CustomerResponse DTO, with the computed address
        """
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            rate_class_id=customer.rate_class_id,
            customer_nature_id=customer.customer_nature_id,
            customer_type_id=customer.customer_type_id,
            relationship=customer.partner_relationship,
            partner_identity_id=customer.partner_identity_id,
            address_street=customer.address_street,
            address_city=customer.address_city,
            address=customer.address,
            ref_account=customer.ref_account,
            customer_external_ref=customer.customer_external_ref,
            flag_latepayer=customer.flag_latepayer,
            flag_damage=customer.flag_damage,
            flag_nuisance=customer.flag_nuisance,
            count_booking_24=count_booking_24,
        )
