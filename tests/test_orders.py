"""
Tests for order line groups and their stored totals.
"""

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session
from domain.models import Order, OrderLineGroup, OrderLine
from domain.schemas.order_schemas import OrderLineCreate
from services.order_service import OrderService


@pytest.fixture
def order_group(db_session: Session):
    order = Order(name="Bar", total=100.0, price=121.0)
    group = OrderLineGroup(name="Drinks", order_rel=order)
    group.order_lines = [
        OrderLine(name="Beer", qty=5, free_qty=1, unit_price=10.0, vat_rate=0.21, discount=0.1),
        OrderLine(name="Water", qty=2, unit_price=2.5),
    ]
    db_session.add(order)
    db_session.commit()
    return group


def test_compute_line():
    line = OrderLine(qty=5, free_qty=1, unit_price=10.0, vat_rate=0.21, discount=0.1)

    OrderService.compute_line(line)

    assert line.total == 36.0
    assert line.price == 43.56
    assert line.fare_benefit == 16.94


def test_compute_line_keeps_stored_values():
    line = OrderLine(qty=1, free_qty=0, unit_price=10.0, vat_rate=0.0, discount=0.0, total=8.0)

    OrderService.compute_line(line)

    assert line.total == 8.0
    assert line.price == 8.0


def test_get_group_computes_reset_totals(order_group, db_session: Session):
    group = OrderService.get_group(db_session, order_group.id)

    assert group.total == 41.0
    assert group.price == 48.56
    assert group.fare_benefit == 16.94
    # a new group total invalidates the order totals
    assert group.order_rel.total is None
    assert group.order_rel.price is None


def test_set_lines_resets_totals(order_group, db_session: Session):
    OrderService.get_group(db_session, order_group.id)

    group = OrderService.set_lines(
        db_session, order_group.id, [OrderLineCreate(name="Coffee", qty=3, unit_price=2.0)]
    )

    assert [line.name for line in group.order_lines] == ["Coffee"]
    assert group.total is None
    assert db_session.query(OrderLine).count() == 1
    assert OrderService.get_group(db_session, order_group.id).total == 6.0


def test_extra_group_keeps_line_totals(db_session: Session):
    order = Order(name="Shop", total=10.0)
    group = OrderLineGroup(name="Point of sale", is_extra=True, order_rel=order, total=10.0)
    group.order_lines = [OrderLine(name="Map", unit_price=10.0, total=10.0, price=10.0, fare_benefit=0.0)]
    db_session.add(order)
    db_session.flush()

    OrderService.reset_prices(group)

    assert group.total is None
    assert order.total is None
    assert group.order_lines[0].total == 10.0


def test_delete_group_resets_order(order_group, db_session: Session):
    order_id = order_group.order_id
    OrderService.delete_group(db_session, order_group.id)

    order = db_session.get(Order, order_id)
    assert order.order_line_groups == []
    assert order.total is None
    assert db_session.query(OrderLine).count() == 0


def test_api_order_line_groups(order_group, db_session: Session):
    response = client.get(f"/order-line-groups/{order_group.id}")
    assert response.status_code == 200
    assert response.json()["price"] == 48.56

    response = client.put(
        f"/order-line-groups/{order_group.id}/lines",
        json={"order_lines": [{"name": "Coffee", "qty": 3, "unit_price": 2.0, "vat_rate": 0.06}]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 6.0
    assert data["price"] == 6.36
    assert data["order_lines"][0]["fare_benefit"] == 0.0

    response = client.delete(f"/order-line-groups/{order_group.id}")
    assert response.json() == {"status": "ok", "deleted": order_group.id}
    assert client.get(f"/order-line-groups/{order_group.id}").status_code == 404


def test_api_invalid_discount(order_group, db_session: Session):
    response = client.put(
        f"/order-line-groups/{order_group.id}/lines", json={"order_lines": [{"name": "Coffee", "discount": 1.5}]}
    )
    assert response.status_code == 422
