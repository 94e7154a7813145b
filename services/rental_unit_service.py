from typing import List, Dict, Any, Set, Iterable
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from domain.filters import Domain
from domain.models import BookingLineGroup, Consumption
from repositories import (
    BookingLineGroupRepository,
    SojournProductModelRepository,
    ConsumptionRepository,
    RentalUnitRepository,
    ProductModelRepository,
)

logger = logging.getLogger("lodging.rental_units")


def _group_range(group: BookingLineGroup):
    return (
        datetime.combine(group.date_from, group.time_from),
        datetime.combine(group.date_to, group.time_to),
    )


def _consumption_range(consumption: Consumption):
    return (
        datetime.combine(consumption.date, consumption.schedule_from),
        datetime.combine(consumption.date, consumption.schedule_to),
    )


def _intersects(a, b) -> bool:
    return max(a[0], b[0]) < min(a[1], b[1])


class RentalUnitService:
    @staticmethod
    def extend_to_relatives(db: Session, unit_ids: Iterable[int], levels: int = 2) -> Set[int]:
        """Add the parents and children of the given units, over a number of levels"""
        result = list(dict.fromkeys(unit_ids))
        repo = RentalUnitRepository(db)
        for _ in range(levels):
            for unit in repo.get_by_ids(result):
                if unit.parent_id and unit.parent_id not in result:
                    result.append(unit.parent_id)
                for child_id in unit.children_ids:
                    if child_id not in result:
                        result.append(child_id)
        return set(result)

    @staticmethod
    def get_assigned_units(db: Session, group: BookingLineGroup, product_model_id: int) -> Set[int]:
        """
        Units that cannot be proposed for the sojourn:

        - units already assigned to the same product model in the sojourn
        - fully assigned units of the other product models of the sojourn
        - units assigned to other sojourns of the booking that overlap in time
        """
        assigned: List[int] = []

        for spm in SojournProductModelRepository(db).get_by_group(group.id):
            for assignment in spm.rental_unit_assignments:
                unit = assignment.rental_unit
                if unit is None:
                    continue
                if spm.product_model_id == product_model_id:
                    assigned.append(unit.id)
                elif unit.capacity <= assignment.qty:
                    assigned.append(unit.id)

        booking = group.booking
        if booking is not None:
            group_range = _group_range(group)
            groups = {g.id: g for g in booking.booking_lines_groups}
            for assignment in booking.rental_unit_assignments:
                other = groups.get(assignment.booking_line_group_id)
                if other is None or other.id == group.id:
                    continue
                if _intersects(group_range, _group_range(other)):
                    assigned.append(assignment.rental_unit_id)

        return RentalUnitService.extend_to_relatives(db, assigned)

    @staticmethod
    def get_available_units(db: Session, center_id: int, product_model_id: int, date_from: datetime, date_to: datetime) -> List[int]:
        """Units of a center matching a product model and free of consumptions over a time range"""
        product_model = ProductModelRepository(db).get_by_id(product_model_id)
        if product_model is None:
            return []
        candidates = RentalUnitRepository(db).get_for_product_model(center_id, product_model)

        busy = []
        for consumption in ConsumptionRepository(db).get_rental_unit_consumptions(
            center_id, date_from.date(), date_to.date()
        ):
            if consumption.rental_unit_id and _intersects((date_from, date_to), _consumption_range(consumption)):
                busy.append(consumption.rental_unit_id)
        busy_ids = RentalUnitService.extend_to_relatives(db, busy, levels=1)

        return [u.id for u in candidates if u.id not in busy_ids]

    @staticmethod
    def search(db: Session, booking_line_group_id: int, product_model_id: int, domain: Any = None) -> List[Dict[str, Any]]:
        """
        Rental units that can be assigned to a sojourn for a product model,
        filtered by an optional domain and sorted by their order.
        """
        group = BookingLineGroupRepository(db).get_by_id(booking_line_group_id)
        if group is None:
            return []

        filter_domain = Domain(domain)
        date_from, date_to = _group_range(group)

        excluded = RentalUnitService.get_assigned_units(db, group, product_model_id)
        available = RentalUnitService.get_available_units(
            db, group.booking.center_id, product_model_id, date_from, date_to
        )
        units = RentalUnitRepository(db).get_by_ids([uid for uid in available if uid not in excluded])

        result = []
        for unit in units:
            row = {
                "id": unit.id,
                "name": unit.name,
                "capacity": unit.capacity,
                "order": unit.order,
                "is_accomodation": unit.is_accomodation,
            }
            if filter_domain.evaluate(row):
                result.append(row)

        result.sort(key=lambda r: r["order"])
        logger.debug(
            "%d rental unit(s) available for sojourn %s and model %s",
            len(result),
            booking_line_group_id,
            product_model_id,
        )
        return result
