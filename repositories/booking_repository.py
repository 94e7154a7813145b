"""
Booking Repository - Data access layer for bookings, sojourns and their records
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import (
    Booking,
    BookingLineGroup,
    BookingPriceAdapter,
    SojournProductModel,
    SojournProductModelRentalUnitAssignement,
    Consumption,
    Composition,
)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access"""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_with_groups(self, booking_id: int) -> Optional[Booking]:
        """Get a booking with its groups and their lines loaded"""
        return (
            self.db.query(Booking)
            .options(
                selectinload(Booking.booking_lines_groups).selectinload(BookingLineGroup.booking_lines)
            )
            .filter(Booking.id == booking_id)
            .first()
        )


class BookingLineGroupRepository(BaseRepository[BookingLineGroup]):
    """Repository for booking line groups (sojourns)"""

    def __init__(self, db: Session):
        super().__init__(db, BookingLineGroup)


class PriceAdapterRepository(BaseRepository[BookingPriceAdapter]):
    """Repository for booking price adapters"""

    def __init__(self, db: Session):
        super().__init__(db, BookingPriceAdapter)

    def delete_automatic(self, group: BookingLineGroup) -> int:
        """Remove the adapters of a group that were not entered manually"""
        adapters = [a for a in group.price_adapters if not a.is_manual_discount]
        for adapter in adapters:
            group.price_adapters.remove(adapter)
        self.db.flush()
        return len(adapters)


class SojournProductModelRepository(BaseRepository[SojournProductModel]):
    def __init__(self, db: Session):
        super().__init__(db, SojournProductModel)

    def get_by_group(self, booking_line_group_id: int) -> List[SojournProductModel]:
        return (
            self.db.query(SojournProductModel)
            .filter(SojournProductModel.booking_line_group_id == booking_line_group_id)
            .order_by(SojournProductModel.id)
            .all()
        )


class AssignmentRepository(BaseRepository[SojournProductModelRentalUnitAssignement]):
    """Repository for rental unit assignments of sojourn product models"""

    def __init__(self, db: Session):
        super().__init__(db, SojournProductModelRentalUnitAssignement)

    def get_by_lines(self, booking_line_ids: List[int]) -> List[SojournProductModelRentalUnitAssignement]:
        if not booking_line_ids:
            return []
        model = SojournProductModelRentalUnitAssignement
        return (
            self.db.query(model)
            .options(selectinload(model.rental_unit))
            .filter(model.booking_line_id.in_(booking_line_ids))
            .order_by(model.id)
            .all()
        )


class ConsumptionRepository(BaseRepository[Consumption]):
    """Repository for consumptions"""

    def __init__(self, db: Session):
        super().__init__(db, Consumption)

    def get_rental_unit_consumptions(
        self, center_id: int, date_from: date, date_to: date
    ) -> List[Consumption]:
        """Rental unit consumptions of a center between two dates (inclusive)"""
        return (
            self.db.query(Consumption)
            .filter(
                Consumption.center_id == center_id,
                Consumption.is_rental_unit.is_(True),
                Consumption.date >= date_from,
                Consumption.date <= date_to,
            )
            .order_by(Consumption.date, Consumption.id)
            .all()
        )


class CompositionRepository(BaseRepository[Composition]):
    def __init__(self, db: Session):
        super().__init__(db, Composition)

    def get_by_booking(self, booking_id: int) -> List[Composition]:
        return (
            self.db.query(Composition)
            .filter(Composition.booking_id == booking_id)
            .order_by(Composition.id)
            .all()
        )
