from typing import List, Dict, Any, Optional
from math import ceil
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.models import Booking, BookingLineGroup, Composition, CompositionItem, RentalUnit
from repositories import BookingRepository, CompositionRepository, AssignmentRepository
from app.exceptions import ServiceValidationError

logger = logging.getLogger("lodging.composition")

HOST_FIELDS = (
    "firstname",
    "lastname",
    "gender",
    "date_of_birth",
    "email",
    "phone",
    "address",
    "country",
)


class CompositionService:
    @staticmethod
    def collect_rental_units(db: Session, group: BookingLineGroup) -> List[RentalUnit]:
        """
        Rental units assigned to the accomodation lines of a group.

        Large units (capacity above 10) that have children are replaced by
        their children. Result is deduplicated and sorted by ascending capacity.
        """
        line_ids = [line.id for line in group.accomodations]
        units: Dict[int, RentalUnit] = {}
        for assignment in AssignmentRepository(db).get_by_lines(line_ids):
            unit = assignment.rental_unit
            if unit is None:
                continue
            if unit.has_children and unit.capacity > 10:
                for child in unit.children:
                    units.setdefault(child.id, child)
            else:
                units.setdefault(unit.id, unit)
        return sorted(units.values(), key=lambda u: u.capacity)

    @staticmethod
    def distribute(nb_pers: int, units: List[RentalUnit]) -> List[tuple]:
        """
        Spread the persons of a group over its rental units.

        Every unit but the last gets its share of nb_pers in proportion to its
        capacity (rounded up, bounded by what remains); the last unit gets the
        remainder.

        Returns:
            list of (rental unit, number of hosts)
        """
        result = []
        remainder = nb_pers
        total_capacity = sum(u.capacity for u in units)
        last_index = len(units) - 1
        for index, unit in enumerate(units):
            if index < last_index:
                assigned = ceil(nb_pers * unit.capacity / total_capacity) if total_capacity else 0
                assigned = min(assigned, remainder)
                remainder -= assigned
            else:
                assigned = remainder
            result.append((unit, assigned))
            if remainder <= 0:
                break
        return result

    @staticmethod
    def generate(db: Session, booking_id: int, data: Optional[List[Dict[str, Any]]] = None) -> Composition:
        """
        Replace the composition (hosts listing) of a booking by a new one,
        with one item per person, spread over the assigned rental units.

        Raises:
            ServiceValidationError: unknown booking
        """
        booking: Booking = BookingRepository(db).get_with_groups(booking_id)
        if not booking:
            raise ServiceValidationError("unknown_booking", code="unknown_booking")

        data = data or []
        composition_repo = CompositionRepository(db)

        try:
            for composition in composition_repo.get_by_booking(booking.id):
                db.delete(composition)
            db.flush()

            composition = composition_repo.create(Composition(booking_id=booking.id), commit=False)
            booking.composition_id = composition.id

            for group in booking.booking_lines_groups:
                # each sojourn fills its items from the first data entry
                item_index = 0
                units = CompositionService.collect_rental_units(db, group)
                for unit, assigned in CompositionService.distribute(group.nb_pers, units):
                    for _ in range(assigned):
                        values = {}
                        if item_index < len(data):
                            values = {k: v for k, v in data[item_index].items() if k in HOST_FIELDS}
                            item_index += 1
                        composition.composition_items.append(
                            CompositionItem(rental_unit_id=unit.id, **values)
                        )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info(
            "Generated composition %s for booking %s (%d items)",
            composition.id,
            booking.id,
            len(composition.composition_items),
        )
        return composition
