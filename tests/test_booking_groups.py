"""
Tests for booking line groups (sojourns) and their cascades.

This test suite covers:
- Creation of a sojourn with its lines, prices and quantities
- Cascades run when a field changes (dates, number of persons, pack)
- Automatic price adapters (discount lists, conditions, guaranteed rate)
- Totals of lines, groups and bookings
"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_rate_class,
    make_center,
    make_customer,
    make_booking,
    make_product,
    make_pack,
    make_price_list,
    make_price,
    nights,
)
from domain.enums import QtyAccountingMethod, DiscountType, SojournType
from domain.models import (
    BookingLineGroup,
    DiscountList,
    Discount,
    DiscountCondition,
    SeasonType,
    SeasonPeriod,
)
from domain.schemas.booking_schemas import BookingLineGroupCreate, BookingLineCreate
from services.booking_group_service import BookingGroupService
from services.price_adapter_service import (
    PriceAdapterService,
    condition_holds,
    years_ago,
)
from app.exceptions import NotFoundError, ServiceValidationError


@pytest.fixture
def camp(db_session: Session):
    """A center with a price list and the products of a summer camp"""
    db = db_session
    rate_class = make_rate_class(db)
    center = make_center(db)
    customer = make_customer(db, rate_class=rate_class)
    booking = make_booking(db, center, customer)

    night = make_product(db, "Night in dormitory", QtyAccountingMethod.PERSON, is_accomodation=True)
    breakfast = make_product(db, "Breakfast", QtyAccountingMethod.PERSON, is_meal=True)
    sheets = make_product(db, "Sheets rental", QtyAccountingMethod.UNIT)

    price_list = make_price_list(db)
    make_price(db, price_list, night, 20.0)
    make_price(db, price_list, breakfast, 5.0)
    make_price(db, price_list, sheets, 8.0, vat_rate=0.0)
    db.commit()

    return {
        "rate_class": rate_class,
        "center": center,
        "customer": customer,
        "booking": booking,
        "night": night,
        "breakfast": breakfast,
        "sheets": sheets,
        "price_list": price_list,
    }


def create_camp_group(db: Session, camp, nb_pers: int = 10, count: int = 3, **kwargs):
    date_from, date_to = nights(count)
    payload = BookingLineGroupCreate(
        booking_id=camp["booking"].id,
        name="Scouts camp",
        date_from=date_from,
        date_to=date_to,
        nb_pers=nb_pers,
        booking_lines=[
            BookingLineCreate(product_id=camp["night"].id),
            BookingLineCreate(product_id=camp["breakfast"].id),
            BookingLineCreate(product_id=camp["sheets"].id, qty=2),
        ],
        **kwargs,
    )
    return BookingGroupService.create_group(db, payload)


def add_discount_list(db: Session, rate_class, rate_min: float = 0.0, category_id: int = 2) -> DiscountList:
    discount_list = DiscountList(
        name="Youth movements",
        rate_class_id=rate_class.id,
        discount_list_category_id=category_id,
        valid_from=date(2024, 1, 1),
        valid_until=date(2024, 12, 31),
        rate_min=rate_min,
    )
    db.add(discount_list)
    db.flush()
    return discount_list


def add_discount(db: Session, discount_list: DiscountList, value: float, *conditions, type=DiscountType.PERCENT):
    discount = Discount(discount_list_id=discount_list.id, name=f"{value}", value=value, type=type)
    for operand, op, expected in conditions:
        discount.conditions.append(DiscountCondition(operand=operand, operator=op, value=expected))
    db.add(discount)
    db.flush()
    return discount


def add_high_season(db: Session):
    season = SeasonType(name="high")
    db.add(season)
    db.flush()
    db.add(
        SeasonPeriod(
            season_category_id=1,
            season_type_id=season.id,
            date_from=date(2024, 6, 1),
            date_to=date(2024, 8, 31),
            year=2024,
        )
    )
    db.flush()


def line_of(group, product):
    return next(line for line in group.booking_lines if line.product_id == product.id)


# =============================================================================
# CREATION
# =============================================================================


def test_create_group_assigns_prices_and_quantities(db_session: Session, camp):
    group = create_camp_group(db_session, camp)

    assert group.nb_nights == 3
    assert group.rate_class_id == camp["rate_class"].id

    night = line_of(group, camp["night"])
    assert night.unit_price == 20.0
    assert night.qty == 30
    assert line_of(group, camp["breakfast"]).qty == 30
    sheets = line_of(group, camp["sheets"])
    assert sheets.qty == 2
    assert sheets.has_own_qty is True

    assert night.total == 600.0
    assert night.price == 636.0
    assert group.total == 766.0
    assert group.price == 811.0
    assert camp["booking"].total == 766.0


def test_create_group_unknown_booking(db_session: Session, camp):
    date_from, date_to = nights(2)
    payload = BookingLineGroupCreate(booking_id=999, date_from=date_from, date_to=date_to)
    with pytest.raises(NotFoundError) as exc:
        BookingGroupService.create_group(db_session, payload)
    assert exc.value.code == "unknown_booking"


def test_create_group_rejects_inverted_dates(db_session: Session, camp):
    payload = BookingLineGroupCreate(
        booking_id=camp["booking"].id, date_from=date(2024, 7, 5), date_to=date(2024, 7, 1)
    )
    with pytest.raises(ServiceValidationError):
        BookingGroupService.create_group(db_session, payload)


def test_line_without_price_is_zeroed(db_session: Session, camp):
    towel = make_product(db_session, "Towel", QtyAccountingMethod.UNIT)
    db_session.commit()
    date_from, date_to = nights(2)
    group = BookingGroupService.create_group(
        db_session,
        BookingLineGroupCreate(
            booking_id=camp["booking"].id,
            date_from=date_from,
            date_to=date_to,
            booking_lines=[BookingLineCreate(product_id=towel.id, qty=4)],
        ),
    )
    line = group.booking_lines[0]
    assert line.price_id is None
    assert line.unit_price == 0.0
    assert group.total == 0.0


# =============================================================================
# CASCADES
# =============================================================================


def test_date_to_change_recomputes_nights_and_quantities(db_session: Session, camp):
    group = create_camp_group(db_session, camp)

    group = BookingGroupService.update_group(db_session, group.id, {"date_to": date(2024, 7, 6)})

    assert group.nb_nights == 5
    assert line_of(group, camp["night"]).qty == 50
    assert line_of(group, camp["sheets"]).qty == 2
    assert group.total == 20.0 * 50 + 5.0 * 50 + 16.0


def test_date_from_change_reassigns_prices(db_session: Session, camp):
    group = create_camp_group(db_session, camp)
    summer = make_price_list(db_session, date(2024, 6, 15), date(2024, 7, 15), name="Summer")
    make_price(db_session, summer, camp["night"], 25.0)
    db_session.commit()

    group = BookingGroupService.update_group(db_session, group.id, {"date_from": date(2024, 7, 2)})

    assert group.nb_nights == 2
    # the shortest list covering the arrival day wins
    assert line_of(group, camp["night"]).unit_price == 25.0
    assert line_of(group, camp["breakfast"]).unit_price == 5.0
    assert line_of(group, camp["night"]).qty == 20


def test_nb_pers_change_updates_person_lines(db_session: Session, camp):
    group = create_camp_group(db_session, camp)

    group = BookingGroupService.update_group(db_session, group.id, {"nb_pers": 4})

    assert line_of(group, camp["night"]).qty == 12
    assert line_of(group, camp["breakfast"]).qty == 12
    assert line_of(group, camp["sheets"]).qty == 2


def test_unchanged_values_run_no_cascade(db_session: Session, camp, monkeypatch):
    group = create_camp_group(db_session, camp)
    calls = []
    monkeypatch.setattr(
        PriceAdapterService, "update_price_adapters", lambda db, g: calls.append(g.id)
    )

    BookingGroupService.update_group(db_session, group.id, {"nb_pers": 10, "name": "Scouts camp"})

    assert calls == []


def test_update_unknown_group(db_session: Session, camp):
    with pytest.raises(NotFoundError) as exc:
        BookingGroupService.update_group(db_session, 12345, {"nb_pers": 2})
    assert exc.value.code == "unknown_booking_line_group"


# =============================================================================
# PACKS
# =============================================================================


@pytest.fixture
def weekend_pack(db_session: Session, camp):
    pack = make_pack(
        db_session,
        "Weekend package",
        [(camp["night"], None), (camp["sheets"], 3)],
        qty_accounting_method=QtyAccountingMethod.ACCOMODATION,
        has_duration=True,
        duration=2,
        capacity=12,
        has_own_price=True,
    )
    make_price(db_session, camp["price_list"], pack, 900.0)
    db_session.commit()
    return pack


def test_pack_selection_rebuilds_the_sojourn(db_session: Session, camp, weekend_pack):
    group = create_camp_group(db_session, camp, count=5)

    group = BookingGroupService.update_group(
        db_session, group.id, {"has_pack": True, "pack_id": weekend_pack.id}
    )

    assert group.is_locked is True
    assert group.unit_price == 900.0
    assert group.date_to == date(2024, 7, 3)
    assert group.nb_nights == 2
    assert group.nb_pers == 12
    assert sorted(line.product_id for line in group.booking_lines) == sorted(
        [camp["night"].id, camp["sheets"].id]
    )
    assert line_of(group, camp["night"]).qty == 24
    assert line_of(group, camp["sheets"]).qty == 3
    # locked groups are charged the price of their pack
    assert group.total == 900.0
    assert group.price == 954.0


def test_pack_without_price_clears_group_price(db_session: Session, camp):
    pack = make_pack(
        db_session, "Custom package", [(camp["night"], None)], has_own_price=True
    )
    db_session.commit()
    group = create_camp_group(db_session, camp)

    group = BookingGroupService.update_group(db_session, group.id, {"has_pack": True, "pack_id": pack.id})

    assert group.is_locked is True
    assert group.price_id is None
    assert group.unit_price == 0.0
    assert group.total == line_of(group, camp["night"]).total


def test_dropping_the_pack_unlocks_the_group(db_session: Session, camp, weekend_pack):
    group = create_camp_group(db_session, camp)
    BookingGroupService.update_group(db_session, group.id, {"has_pack": True, "pack_id": weekend_pack.id})

    group = BookingGroupService.update_group(db_session, group.id, {"has_pack": False})

    assert group.is_locked is False
    assert group.pack_id is None


def test_unknown_pack(db_session: Session, camp):
    group = create_camp_group(db_session, camp)
    with pytest.raises(NotFoundError) as exc:
        BookingGroupService.update_group(db_session, group.id, {"has_pack": True, "pack_id": 4242})
    assert exc.value.code == "unknown_pack"


# =============================================================================
# PRICE ADAPTERS
# =============================================================================


def test_discounts_apply_to_group_and_accomodation_lines(db_session: Session, camp):
    discount_list = add_discount_list(db_session, camp["rate_class"])
    add_discount(db_session, discount_list, 0.10, ("nb_pers", ">=", "10"))
    add_discount(db_session, discount_list, 0.05, ("season", "=", "high"))
    add_high_season(db_session)
    db_session.commit()

    group = create_camp_group(db_session, camp)

    night = line_of(group, camp["night"])
    group_level = [a for a in group.price_adapters if a.booking_line_id is None]
    night_level = [a for a in group.price_adapters if a.booking_line_id == night.id]
    assert len(group_level) == 2
    assert len(night_level) == 2
    assert not [a for a in group.price_adapters if a.booking_line_id == line_of(group, camp["breakfast"]).id]

    assert night.total == 510.0
    assert group.total == 510.0 + 150.0 + 16.0


def test_discounts_follow_nb_pers(db_session: Session, camp):
    discount_list = add_discount_list(db_session, camp["rate_class"])
    add_discount(db_session, discount_list, 0.10, ("nb_pers", ">=", "10"))
    db_session.commit()
    group = create_camp_group(db_session, camp)
    assert len(group.price_adapters) == 2

    group = BookingGroupService.update_group(db_session, group.id, {"nb_pers": 8})

    assert group.price_adapters == []
    assert line_of(group, camp["night"]).total == 480.0


def test_guaranteed_rate_replaces_percent_discounts(db_session: Session, camp):
    discount_list = add_discount_list(db_session, camp["rate_class"], rate_min=0.2)
    add_discount(db_session, discount_list, 0.10)
    add_discount(db_session, discount_list, 15.0, type=DiscountType.AMOUNT)
    db_session.commit()

    _, discounts = PriceAdapterService.get_applicable_discounts(
        db_session, create_camp_group(db_session, camp)
    )

    percent = [d for d in discounts if d[1] == DiscountType.PERCENT]
    assert percent == [(None, DiscountType.PERCENT, 0.2)]
    assert len([d for d in discounts if d[1] == DiscountType.AMOUNT]) == 1


def test_ga_sojourns_use_their_own_discount_list(db_session: Session, camp):
    discount_list = add_discount_list(db_session, camp["rate_class"], category_id=1)
    add_discount(db_session, discount_list, 0.10)
    db_session.commit()

    group = create_camp_group(db_session, camp, sojourn_type=SojournType.GA)

    discounted = {a.booking_line_id for a in group.price_adapters}
    assert discounted == {
        None,
        line_of(group, camp["night"]).id,
        line_of(group, camp["breakfast"]).id,
    }


def test_missing_operand_fails_the_discount(db_session: Session, camp):
    discount_list = add_discount_list(db_session, camp["rate_class"])
    add_discount(db_session, discount_list, 0.10, ("season", "=", "high"))
    add_discount(db_session, discount_list, 0.05, ("nb_pers", "~", "3"))
    db_session.commit()

    group = create_camp_group(db_session, camp)

    # no season period: only the discount with an unknown operator applies
    assert {a.value for a in group.price_adapters} == {0.05}


def test_condition_comparisons():
    assert condition_holds(12, ">", "9") is True
    assert condition_holds("12", "<", "9") is False
    assert condition_holds("high", "=", "high") is True
    assert condition_holds("low", "=", "high") is False


def test_years_ago_on_leap_day():
    from datetime import datetime

    assert years_ago(datetime(2024, 2, 29, 12), 2) == datetime(2022, 2, 28, 12)


# =============================================================================
# API
# =============================================================================


def test_api_create_get_and_patch(db_session: Session, camp):
    date_from, date_to = nights(3)
    response = client.post(
        "/booking-line-groups",
        json={
            "booking_id": camp["booking"].id,
            "name": "Scouts camp",
            "date_from": date_from.isoformat(),
            "date_to": date_to.isoformat(),
            "nb_pers": 10,
            "booking_lines": [{"product_id": camp["night"].id}],
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["total"] == 600.0
    assert body["booking_lines"][0]["qty"] == 30

    group_id = body["id"]
    assert client.get(f"/booking-line-groups/{group_id}").json()["price"] == 636.0

    response = client.patch(f"/booking-line-groups/{group_id}", json={"nb_pers": 5})
    assert response.status_code == 200
    assert response.json()["booking_lines"][0]["qty"] == 15


def test_api_unknown_group(db_session: Session):
    response = client.get("/booking-line-groups/999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "unknown_booking_line_group"


def test_api_rejects_unknown_fields(db_session: Session, camp):
    group = create_camp_group(db_session, camp)
    response = client.patch(f"/booking-line-groups/{group.id}", json={"total": 0})
    assert response.status_code == 422


def test_api_create_with_unknown_pack(db_session: Session, camp):
    date_from, date_to = nights(2)
    response = client.post(
        "/booking-line-groups",
        json={
            "booking_id": camp["booking"].id,
            "has_pack": True,
            "pack_id": 999,
            "date_from": date_from.isoformat(),
            "date_to": date_to.isoformat(),
        },
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "unknown_pack"
    assert db_session.query(BookingLineGroup).count() == 0
