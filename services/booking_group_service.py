from typing import Any, Dict, Optional
from datetime import timedelta
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.enums import DiscountType, QtyAccountingMethod
from domain.models import Booking, BookingLine, BookingLineGroup
from domain.schemas.booking_schemas import BookingLineGroupCreate
from repositories import (
    BookingRepository,
    BookingLineGroupRepository,
    PriceListRepository,
    PriceRepository,
    ProductRepository,
    RateClassRepository,
)
from services.price_adapter_service import PriceAdapterService
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("lodging.booking_groups")

# Fields with a cascade, in the order their handlers run
ONCHANGE_FIELDS = (
    "has_pack",
    "pack_id",
    "is_locked",
    "date_from",
    "date_to",
    "sojourn_type",
    "nb_pers",
    "rate_class_id",
)

NULLABLE_FIELDS = ("name", "pack_id")


def _apply_adapters(amount: float, adapters) -> float:
    """Subtract percent adapters, then amount adapters"""
    percent = sum(a.value for a in adapters if a.type == DiscountType.PERCENT)
    fixed = sum(a.value for a in adapters if a.type == DiscountType.AMOUNT)
    return amount * (1.0 - percent) - fixed


class BookingGroupService:
    # ------------------------------------------------------------------
    # Read / create / update
    # ------------------------------------------------------------------

    @staticmethod
    def get_group(db: Session, group_id: int) -> BookingLineGroup:
        group = BookingLineGroupRepository(db).get_by_id(group_id)
        if not group:
            raise NotFoundError(f"Booking line group not found: {group_id}", code="unknown_booking_line_group")
        if group.total is None or group.price is None:
            BookingGroupService.compute_totals(db, group)
            db.commit()
        return group

    @staticmethod
    def create_group(db: Session, payload: BookingLineGroupCreate) -> BookingLineGroup:
        """Create a sojourn within a booking, with its lines, prices and price adapters"""
        booking: Booking = BookingRepository(db).get_by_id(payload.booking_id)
        if not booking:
            raise NotFoundError(f"Booking not found: {payload.booking_id}", code="unknown_booking")
        if payload.date_to < payload.date_from:
            raise ServiceValidationError("date_to must not be before date_from", code="invalid_dates")
        if payload.pack_id is not None and ProductRepository(db).get_by_id(payload.pack_id) is None:
            raise NotFoundError(f"Pack not found: {payload.pack_id}", code="unknown_pack")

        rate_class_id = payload.rate_class_id
        if rate_class_id is None:
            if booking.customer is not None and booking.customer.rate_class_id:
                rate_class_id = booking.customer.rate_class_id
            else:
                default = RateClassRepository(db).get_default()
                if default is None:
                    raise ServiceValidationError("No rate class available", code="missing_rate_class")
                rate_class_id = default.id

        values = payload.model_dump(exclude={"booking_id", "rate_class_id", "booking_lines"}, exclude_none=True)
        try:
            group = BookingLineGroup(booking_id=booking.id, rate_class_id=rate_class_id, **values)
            group.booking = booking
            group.nb_nights = (group.date_to - group.date_from).days
            db.add(group)
            db.flush()

            product_repo = ProductRepository(db)
            for index, line_payload in enumerate(payload.booking_lines, start=1):
                product = product_repo.get_by_id(line_payload.product_id)
                if product is None:
                    raise NotFoundError(f"Product not found: {line_payload.product_id}", code="unknown_product")
                line = BookingLine(
                    booking_id=booking.id,
                    product_id=product.id,
                    product=product,
                    order=line_payload.order or index,
                    qty=line_payload.qty if line_payload.qty is not None else 1,
                    has_own_qty=line_payload.qty is not None,
                    qty_accounting_method=product.product_model.qty_accounting_method,
                )
                group.booking_lines.append(line)
            db.flush()

            if group.pack_id:
                BookingGroupService._on_pack_id(db, group)
            else:
                BookingGroupService._update_lines_price_id(db, group)
                BookingGroupService._update_quantities(group)
                BookingGroupService._update_price_adapters(db, group)
            BookingGroupService.compute_totals(db, group)
            db.commit()
        except (SQLAlchemyError, NotFoundError, ServiceValidationError):
            db.rollback()
            raise

        db.refresh(group)
        logger.info("Created booking line group %s for booking %s", group.id, booking.id)
        return group

    @staticmethod
    def update_group(db: Session, group_id: int, values: Dict[str, Any]) -> BookingLineGroup:
        """
        Write new values on a group, then run the cascade of each changed
        field (in declaration order) and refresh the totals.

        Args:
            db: Database session
            group_id: identifier of the group
            values: fields to write (only the ones sent by the client)

        Raises:
            NotFoundError: unknown group, pack or rate class
            ServiceValidationError: inconsistent dates
        """
        group = BookingLineGroupRepository(db).get_by_id(group_id)
        if not group:
            raise NotFoundError(f"Booking line group not found: {group_id}", code="unknown_booking_line_group")

        values = {k: v for k, v in values.items() if v is not None or k in NULLABLE_FIELDS}
        date_from = values.get("date_from", group.date_from)
        date_to = values.get("date_to", group.date_to)
        if date_to < date_from:
            raise ServiceValidationError("date_to must not be before date_from", code="invalid_dates")

        if values.get("pack_id") is not None:
            pack = ProductRepository(db).get_by_id(values["pack_id"])
            if pack is None:
                raise NotFoundError(f"Pack not found: {values['pack_id']}", code="unknown_pack")
        if values.get("rate_class_id") is not None and not RateClassRepository(db).exists(values["rate_class_id"]):
            raise NotFoundError(f"Rate class not found: {values['rate_class_id']}", code="unknown_rate_class")

        changed = [field for field, value in values.items() if getattr(group, field) != value]
        for field, value in values.items():
            setattr(group, field, value)

        try:
            db.flush()
            for field in ONCHANGE_FIELDS:
                if field in changed:
                    logger.debug("Group %s: running cascade for '%s'", group.id, field)
                    getattr(BookingGroupService, f"_on_{field}")(db, group)
            BookingGroupService.reset_totals(group)
            BookingGroupService.compute_totals(db, group)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

        db.refresh(group)
        logger.info("Updated booking line group %s (%s)", group.id, ", ".join(changed) or "no change")
        return group

    # ------------------------------------------------------------------
    # Field cascades
    # ------------------------------------------------------------------

    @staticmethod
    def _on_has_pack(db: Session, group: BookingLineGroup):
        if not group.has_pack:
            group.is_locked = False
            group.pack_id = None

    @staticmethod
    def _on_is_locked(db: Session, group: BookingLineGroup):
        if group.is_locked:
            BookingGroupService._update_price_id(db, group)

    @staticmethod
    def _on_pack_id(db: Session, group: BookingLineGroup):
        if group.pack_id is None:
            return
        group.pack = ProductRepository(db).get_by_id(group.pack_id)
        BookingGroupService._update_pack_id(db, group)

        model = group.pack.product_model
        if model.has_duration:
            group.date_to = group.date_from + timedelta(days=model.duration)
            BookingGroupService._on_date_to(db, group)

        if model.qty_accounting_method == QtyAccountingMethod.ACCOMODATION:
            group.nb_pers = model.capacity
        BookingGroupService._on_nb_pers(db, group)

        BookingGroupService._update_pack_quantities(group)

    @staticmethod
    def _on_rate_class_id(db: Session, group: BookingLineGroup):
        BookingGroupService._update_price_adapters(db, group)

    @staticmethod
    def _on_sojourn_type(db: Session, group: BookingLineGroup):
        BookingGroupService._update_price_adapters(db, group)

    @staticmethod
    def _on_date_from(db: Session, group: BookingLineGroup):
        group.nb_nights = (group.date_to - group.date_from).days
        BookingGroupService._update_price_adapters(db, group)
        BookingGroupService._update_lines_price_id(db, group)
        BookingGroupService._update_quantities(group)

    @staticmethod
    def _on_date_to(db: Session, group: BookingLineGroup):
        group.nb_nights = (group.date_to - group.date_from).days
        BookingGroupService._update_price_adapters(db, group)
        BookingGroupService._update_quantities(group)

    @staticmethod
    def _on_nb_pers(db: Session, group: BookingLineGroup):
        BookingGroupService._update_price_adapters(db, group)
        if group.has_pack:
            BookingGroupService._update_pack_quantities(group)
            return
        for line in group.booking_lines:
            if line.product.product_model.qty_accounting_method == QtyAccountingMethod.PERSON:
                line.qty = group.nb_pers * (group.nb_nights or 0)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _update_price_adapters(db: Session, group: BookingLineGroup):
        PriceAdapterService.update_price_adapters(db, group)

    @staticmethod
    def _update_pack_id(db: Session, group: BookingLineGroup):
        """Lock the group according to its pack and rebuild its lines from the pack lines"""
        pack = group.pack
        group.is_locked = True if pack.product_model.has_own_price else bool(pack.is_locked)
        BookingGroupService._on_is_locked(db, group)

        removed_ids = [line.id for line in group.booking_lines]
        for adapter in list(group.price_adapters):
            if adapter.booking_line_id in removed_ids:
                group.price_adapters.remove(adapter)
        for line in list(group.booking_lines):
            group.booking_lines.remove(line)
        db.flush()

        for order, pack_line in enumerate(pack.pack_lines, start=1):
            child = pack_line.child_product
            line = BookingLine(
                booking_id=group.booking_id,
                product_id=child.id,
                product=child,
                order=order,
                qty_accounting_method=child.product_model.qty_accounting_method,
            )
            if pack_line.has_own_qty:
                line.has_own_qty = True
                line.qty = pack_line.own_qty
            group.booking_lines.append(line)
        db.flush()
        BookingGroupService._update_lines_price_id(db, group)
        logger.debug("Group %s: %d line(s) created from pack %s", group.id, len(pack.pack_lines), pack.id)

    @staticmethod
    def _find_price(db: Session, group: BookingLineGroup, product_id: Optional[int]):
        """First price of a product among the price lists covering the arrival day, shortest list first"""
        if product_id is None:
            return None
        center = group.booking.center
        if center is None or center.price_list_category_id is None:
            return None
        price_repo = PriceRepository(db)
        for price_list in PriceListRepository(db).find_covering(center.price_list_category_id, group.date_from):
            price = price_repo.find(price_list.id, product_id)
            if price is not None:
                return price
        return None

    @staticmethod
    def _update_price_id(db: Session, group: BookingLineGroup):
        """Assign the price of the pack to a locked group"""
        price = BookingGroupService._find_price(db, group, group.pack_id)
        if price is None:
            group.price_id = None
            group.unit_price = 0.0
            group.vat_rate = 0.0
            logger.error("No matching price list found for group %s on %s", group.id, group.date_from)
            return
        group.price_id = price.id
        group.unit_price = price.price
        group.vat_rate = price.vat_rate

    @staticmethod
    def _update_lines_price_id(db: Session, group: BookingLineGroup):
        for line in group.booking_lines:
            price = BookingGroupService._find_price(db, group, line.product_id)
            if price is None:
                line.price_id = None
                line.unit_price = 0.0
                line.vat_rate = 0.0
                logger.warning("No price found for product %s of group %s", line.product_id, group.id)
                continue
            line.price_id = price.id
            line.unit_price = price.price
            line.vat_rate = price.vat_rate

    @staticmethod
    def _update_quantities(group: BookingLineGroup):
        if group.has_pack:
            BookingGroupService._update_pack_quantities(group)
            return
        nb_nights = group.nb_nights or 0
        for line in group.booking_lines:
            method = line.product.product_model.qty_accounting_method
            if method == QtyAccountingMethod.ACCOMODATION:
                line.qty = nb_nights
            elif method == QtyAccountingMethod.PERSON:
                line.qty = group.nb_pers * nb_nights

    @staticmethod
    def _update_pack_quantities(group: BookingLineGroup):
        """Quantities of lines coming from a pack: lines with their own quantity are kept"""
        nb_nights = group.nb_nights or 0
        for line in group.booking_lines:
            if line.has_own_qty:
                continue
            if line.qty_accounting_method == QtyAccountingMethod.ACCOMODATION:
                line.qty = nb_nights
            elif line.qty_accounting_method == QtyAccountingMethod.PERSON:
                line.qty = group.nb_pers * nb_nights

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    @staticmethod
    def reset_totals(group: BookingLineGroup):
        group.total = None
        group.price = None
        for line in group.booking_lines:
            line.total = None
            line.price = None
        if group.booking is not None:
            group.booking.total = None
            group.booking.price = None

    @staticmethod
    def compute_line_totals(group: BookingLineGroup, line: BookingLine):
        adapters = [a for a in group.price_adapters if a.booking_line_id == line.id]
        total = _apply_adapters(line.unit_price * line.qty, adapters)
        line.total = round(total, 4)
        line.price = round(total * (1.0 + line.vat_rate), 2)

    @staticmethod
    def _compute_group_totals(group: BookingLineGroup):
        for line in group.booking_lines:
            BookingGroupService.compute_line_totals(group, line)

        if group.is_locked and group.price_id:
            adapters = [a for a in group.price_adapters if a.booking_line_id is None]
            total = _apply_adapters(group.unit_price, adapters)
            group.total = round(total, 4)
            group.price = round(total * (1.0 + group.vat_rate), 2)
        else:
            group.total = round(sum(line.total for line in group.booking_lines), 4)
            group.price = round(sum(line.price for line in group.booking_lines), 2)

    @staticmethod
    def compute_totals(db: Session, group: BookingLineGroup):
        """Compute the totals of a group and of its booking"""
        BookingGroupService._compute_group_totals(group)
        booking = group.booking
        if booking is not None:
            for other in booking.booking_lines_groups:
                if other is not group and (other.total is None or other.price is None):
                    BookingGroupService._compute_group_totals(other)
            booking.total = round(sum(g.total for g in booking.booking_lines_groups), 4)
            booking.price = round(sum(g.price for g in booking.booking_lines_groups), 2)
        db.flush()
