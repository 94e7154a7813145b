"""
Tests for the lookup of rental units that can be assigned to a sojourn.

This test suite covers:
- Candidates of a product model (explicit units, or all accomodation units)
- Units excluded by assignments (same sojourn, other sojourns of the booking)
- Units busy with consumptions, extended to their relatives
- Domain filtering and access control of the endpoint
"""

import json
from datetime import date

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    client,
    db_session,
    make_center,
    make_booking,
    make_group,
    make_product,
    make_rental_unit,
    make_user,
    auth_headers,
)
from domain.enums import QtyAccountingMethod
from domain.models import (
    Consumption,
    SojournProductModel,
    SojournProductModelRentalUnitAssignement,
)
from services.rental_unit_service import RentalUnitService


@pytest.fixture
def site(db_session: Session):
    """
    A center with a building split in two rooms, two standalone rooms and a hall.

    Building (20) -> Room 1 (4), Room 2 (4); Room 3 (6); Room 4 (2); Hall (40, not an accomodation)
    """
    db = db_session
    center = make_center(db)
    building = make_rental_unit(db, center, "Building", capacity=20, order=1)
    units = {
        "building": building,
        "room1": make_rental_unit(db, center, "Room 1", capacity=4, order=2, parent=building),
        "room2": make_rental_unit(db, center, "Room 2", capacity=4, order=3, parent=building),
        "room3": make_rental_unit(db, center, "Room 3", capacity=6, order=4),
        "room4": make_rental_unit(db, center, "Room 4", capacity=2, order=5),
        "hall": make_rental_unit(db, center, "Hall", capacity=40, order=6, is_accomodation=False),
    }
    room = make_product(db, "Room", QtyAccountingMethod.ACCOMODATION, is_accomodation=True)
    tent = make_product(db, "Tent pitch", QtyAccountingMethod.ACCOMODATION, is_accomodation=True)
    booking = make_booking(db, center)
    group = make_group(db, booking, date(2024, 7, 1), date(2024, 7, 4), nb_pers=10)
    db.commit()
    return {
        "center": center,
        "booking": booking,
        "group": group,
        "room_model": room.product_model,
        "tent_model": tent.product_model,
        **units,
    }


def assign(db: Session, group, product_model, unit, qty: int):
    spm = SojournProductModel(
        booking_id=group.booking_id,
        booking_line_group_id=group.id,
        product_model_id=product_model.id,
    )
    db.add(spm)
    db.flush()
    db.add(
        SojournProductModelRentalUnitAssignement(
            booking_id=group.booking_id,
            booking_line_group_id=group.id,
            sojourn_product_model_id=spm.id,
            rental_unit_id=unit.id,
            qty=qty,
        )
    )
    db.commit()


def names(rows):
    return [row["name"] for row in rows]


def test_all_accomodation_units_are_candidates(db_session: Session, site):
    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    assert names(rows) == ["Building", "Room 1", "Room 2", "Room 3", "Room 4"]
    assert rows[0] == {
        "id": site["building"].id,
        "name": "Building",
        "capacity": 20,
        "order": 1,
        "is_accomodation": True,
    }


def test_units_linked_to_the_product_model(db_session: Session, site):
    site["tent_model"].rental_units.append(site["room4"])
    db_session.commit()

    rows = RentalUnitService.search(db_session, site["group"].id, site["tent_model"].id)

    assert names(rows) == ["Room 4"]


def test_units_assigned_to_the_same_model_are_excluded(db_session: Session, site):
    assign(db_session, site["group"], site["room_model"], site["room4"], qty=1)

    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    assert "Room 4" not in names(rows)


def test_fully_assigned_units_of_other_models_are_excluded(db_session: Session, site):
    assign(db_session, site["group"], site["tent_model"], site["room3"], qty=6)
    assign(db_session, site["group"], site["tent_model"], site["room4"], qty=1)

    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    assert "Room 3" not in names(rows)
    assert "Room 4" in names(rows)


def test_exclusion_covers_parents_and_children(db_session: Session, site):
    assign(db_session, site["group"], site["room_model"], site["room1"], qty=4)

    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    # Room 1 -> Building -> Room 2
    assert names(rows) == ["Room 3", "Room 4"]


def test_overlapping_sojourns_of_the_booking(db_session: Session, site):
    overlapping = make_group(db_session, site["booking"], date(2024, 7, 3), date(2024, 7, 5))
    later = make_group(db_session, site["booking"], date(2024, 7, 10), date(2024, 7, 12))
    db_session.commit()
    assign(db_session, overlapping, site["room_model"], site["room3"], qty=2)
    assign(db_session, later, site["room_model"], site["room4"], qty=2)

    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    assert "Room 3" not in names(rows)
    assert "Room 4" in names(rows)


def test_units_with_consumptions_are_not_available(db_session: Session, site):
    db_session.add(
        Consumption(
            booking_id=site["booking"].id,
            center_id=site["center"].id,
            rental_unit_id=site["room1"].id,
            date=date(2024, 7, 2),
        )
    )
    db_session.commit()

    rows = RentalUnitService.search(db_session, site["group"].id, site["room_model"].id)

    assert names(rows) == ["Room 2", "Room 3", "Room 4"]


def test_domain_filters_the_rows(db_session: Session, site):
    rows = RentalUnitService.search(
        db_session, site["group"].id, site["room_model"].id, [["capacity", ">=", 6]]
    )
    assert names(rows) == ["Building", "Room 3"]


def test_unknown_sojourn_gives_an_empty_list(db_session: Session, site):
    assert RentalUnitService.search(db_session, 9999, site["room_model"].id) == []


# =============================================================================
# API
# =============================================================================


def test_api_lists_rental_units(db_session: Session, site):
    user = make_user(db_session)
    db_session.commit()

    response = client.get(
        "/bookings/rentalunits",
        params={
            "booking_line_group_id": site["group"].id,
            "product_model_id": site["room_model"].id,
            "domain": json.dumps([["capacity", "<", 5]]),
        },
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    assert names(response.json()) == ["Room 1", "Room 2", "Room 4"]


def test_api_rejects_malformed_domain(db_session: Session, site):
    user = make_user(db_session)
    db_session.commit()

    response = client.get(
        "/bookings/rentalunits",
        params={
            "booking_line_group_id": site["group"].id,
            "product_model_id": site["room_model"].id,
            "domain": "[capacity",
        },
        headers=auth_headers(user),
    )

    assert response.status_code == 400


def test_api_requires_authentication(db_session: Session, site):
    response = client.get(
        "/bookings/rentalunits",
        params={"booking_line_group_id": site["group"].id, "product_model_id": site["room_model"].id},
    )
    assert response.status_code == 401


def test_api_requires_booking_group(db_session: Session, site):
    user = make_user(db_session, login="guest@example.org", groups=())
    db_session.commit()

    response = client.get(
        "/bookings/rentalunits",
        params={"booking_line_group_id": site["group"].id, "product_model_id": site["room_model"].id},
        headers=auth_headers(user),
    )
    assert response.status_code == 403


@pytest.mark.parametrize("domain", ["5", "true", "0", '"capacity"'])
def test_api_rejects_domain_that_is_not_a_list(db_session: Session, site, domain):
    user = make_user(db_session)
    db_session.commit()

    response = client.get(
        "/bookings/rentalunits",
        params={
            "booking_line_group_id": site["group"].id,
            "product_model_id": site["room_model"].id,
            "domain": domain,
        },
        headers=auth_headers(user),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_param"
