import json
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.core.procedures import PROCEDURES
from app.crud import get_order_detail_store, get_order_store, order, order_detail
from app.crud.order_detail_sp import order_detail_sp
from app.crud.order_sp import order_sp, orders_from_rows
from app.models import Order, OrderDetail, OrderStatus

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _row(order_id, detail_id=None, **overrides):
    row = {
        "order_id": order_id,
        "customer_name": f"Customer {order_id}",
        "total_amount": Decimal("25.00"),
        "status": 0,
        "created_at": NOW,
        "updated_at": NOW,
        "detail_id": detail_id,
        "product_name": f"Product {detail_id}" if detail_id else None,
        "quantity": 1 if detail_id else None,
        "price": Decimal("5.00") if detail_id else None,
    }
    row.update(overrides)
    return row


def _result(rows=None, scalar=None):
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows or []
    result.scalar_one.return_value = scalar
    return result


def _call(db, index=0):
    sql, params = db.execute.call_args_list[index].args
    return str(sql), params


def test_factory_selects_backend():
    assert get_order_store(True) is order_sp
    assert get_order_store(False) is order
    assert get_order_detail_store(True) is order_detail_sp
    assert get_order_detail_store(False) is order_detail


def test_every_called_function_is_installed():
    for name in (
        "get_orders_paginated",
        "get_order_with_details",
        "create_order",
        "update_order",
        "delete_order",
        "add_order_detail",
        "delete_order_detail",
    ):
        assert name in PROCEDURES
        assert f"FUNCTION {name}(" in PROCEDURES[name]


def test_orders_from_rows_groups_details_and_keeps_row_order():
    rows = [_row(3, 5), _row(3, 6), _row(1), _row(2, 7)]

    result = orders_from_rows(rows)

    assert [o.id for o in result] == [3, 1, 2]
    assert [d.id for d in result[0].order_details] == [5, 6]
    assert result[1].order_details == []
    assert result[2].order_details[0].order_id == 2


def test_list_orders_calls_paginated_function():
    db = MagicMock()
    db.query.return_value.scalar.return_value = 10
    db.execute.return_value = _result([_row(4, 1), _row(5)])

    result = order_sp.list_orders(db, page=2, page_size=3)

    sql, params = _call(db)
    assert "get_orders_paginated" in sql
    assert params == {"page_number": 2, "page_size": 3}
    assert [o.id for o in result] == [4, 5]


def test_list_orders_past_last_row_skips_function_call():
    db = MagicMock()
    db.query.return_value.scalar.return_value = 10

    assert order_sp.list_orders(db, page=10**17, page_size=1000) == []
    db.execute.assert_not_called()


def test_list_orders_rejects_invalid_pagination():
    with pytest.raises(ValueError):
        order_sp.list_orders(MagicMock(), page=1, page_size=0)


def test_get_order_returns_none_when_no_rows():
    db = MagicMock()
    db.execute.return_value = _result([])

    assert order_sp.get_order(db, id=99) is None
    assert _call(db)[1] == {"order_id": 99}


def test_create_order_passes_details_and_reloads_order():
    db = MagicMock()
    db.execute.side_effect = [_result(scalar=11), _result([_row(11, 1), _row(11, 2)])]
    new_order = Order(customer_name="Acme", status=OrderStatus.PENDING)
    new_order.order_details = [
        OrderDetail(product_name="Widget", quantity=2, price=Decimal("10.00")),
        OrderDetail(product_name="Gadget", quantity=1, price=Decimal("5.00")),
    ]

    result = order_sp.create_order(db, db_obj=new_order)

    sql, params = _call(db, 0)
    assert "create_order" in sql
    assert params["customer_name"] == "Acme"
    assert params["status"] == 0
    assert json.loads(params["order_details"]) == [
        {"product_name": "Widget", "quantity": 2, "price": "10.00"},
        {"product_name": "Gadget", "quantity": 1, "price": "5.00"},
    ]
    assert "get_order_with_details" in _call(db, 1)[0]
    db.commit.assert_called_once()
    assert result.id == 11
    assert len(result.order_details) == 2


def test_update_order_returns_none_when_not_found():
    db = MagicMock()
    db.execute.return_value = _result(scalar=False)

    result = order_sp.update_order(
        db, db_obj=Order(id=99, customer_name="Nobody", status=OrderStatus.CANCELED)
    )

    assert result is None
    sql, params = _call(db)
    assert "update_order" in sql
    assert params == {"order_id": 99, "customer_name": "Nobody", "status": 2}
    assert db.execute.call_count == 1


def test_update_order_reloads_updated_order():
    db = MagicMock()
    db.execute.side_effect = [_result(scalar=True), _result([_row(1, customer_name="Renamed")])]

    result = order_sp.update_order(
        db, db_obj=Order(id=1, customer_name="Renamed", status=OrderStatus.PENDING)
    )

    assert result.customer_name == "Renamed"


@pytest.mark.parametrize("affected,expected", [(1, True), (0, False)])
def test_delete_order_reports_affected_rows(affected, expected):
    db = MagicMock()
    db.execute.return_value = _result(scalar=affected)

    assert order_sp.delete_order(db, id=1) is expected
    assert "delete_order" in _call(db)[0]


def test_add_order_detail_uses_generated_id():
    db = MagicMock()
    db.execute.return_value = _result(scalar=21)
    detail = OrderDetail(order_id=1, product_name="Extra", quantity=3, price=Decimal("2.50"))

    result = order_detail_sp.create(db, db_obj=detail)

    sql, params = _call(db)
    assert "add_order_detail" in sql
    assert params == {
        "order_id": 1,
        "product_name": "Extra",
        "quantity": 3,
        "price": Decimal("2.50"),
    }
    db.commit.assert_called_once()
    assert result is db.query.return_value.filter.return_value.first.return_value


@pytest.mark.parametrize("affected,expected", [(1, True), (0, False)])
def test_delete_order_detail_reports_affected_rows(affected, expected):
    db = MagicMock()
    db.execute.return_value = _result(scalar=affected)

    assert order_detail_sp.delete(db, id=3) is expected
    assert _call(db)[1] == {"order_detail_id": 3}
