"""
Booking domain mappers.
"""

from domain.models import BookingLineGroup
from domain.schemas.booking_schemas import (
    BookingLineGroupResponse,
    BookingLineResponse,
    PriceAdapterResponse,
)


class BookingGroupMapper:
    """Mapper for booking line groups, with their lines and price adapters."""

    @staticmethod
    def to_response(group: BookingLineGroup) -> BookingLineGroupResponse:
        """Lines are listed by their order, group-level adapters first"""
        lines = sorted(group.booking_lines, key=lambda line: (line.order, line.id))
        adapters = sorted(
            group.price_adapters,
            key=lambda a: (a.booking_line_id is not None, a.booking_line_id or 0, a.id),
        )
        return BookingLineGroupResponse(
            **BookingLineGroupResponse.model_validate(group).model_dump(
                exclude={"booking_lines", "price_adapters"}
            ),
            booking_lines=[BookingLineResponse.model_validate(line) for line in lines],
            price_adapters=[PriceAdapterResponse.model_validate(a) for a in adapters],
        )
