"""
Component Tests: Order Transaction Manager

An order and all of its lines are persisted together or not at all.

Usage:
    pytest tests/component/tdd/order_service/test_order_transaction.py -v
"""
import logging
from decimal import Decimal

import pytest

from microservices.order_service.order_service import OrderService
from microservices.order_service.protocols import OrderTransactionError, OrderValidationError
from tests.fixtures import make_line_item, make_order_create_request

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


@pytest.fixture
def service(mock_order_repository):
    return OrderService(repository=mock_order_repository)


def _three_line_request():
    return make_order_create_request(line_items=[
        make_line_item(garment_id=1, quantity=2, unit_price=Decimal("10.00")),
        make_line_item(garment_id=2, quantity=1, unit_price=Decimal("25.50")),
        make_line_item(garment_id=1, quantity=3, unit_price=Decimal("9.99")),
    ])


class TestOrderCreation:

    async def test_persists_header_and_every_line(self, service, mock_order_repository):
        order_id = await service.create_order(_three_line_request())

        assert mock_order_repository.order_count == 1
        assert mock_order_repository.line_count == 3
        assert mock_order_repository.commits == 1

        order = await service.get_order(order_id)
        assert [item.garment_id for item in order.items] == [1, 2, 1]

    async def test_subtotals_computed_server_side(self, service):
        order_id = await service.create_order(_three_line_request())

        order = await service.get_order(order_id)

        assert [item.subtotal for item in order.items] == [
            Decimal("20.00"), Decimal("25.50"), Decimal("29.97"),
        ]
        for item in order.items:
            assert item.subtotal == item.unit_price * item.quantity

    async def test_sub_cent_price_is_stored_at_cent_precision(self, service, mock_order_repository):
        request = make_order_create_request(line_items=[
            make_line_item(garment_id=1, quantity=3, unit_price=Decimal("0.335")),
        ])

        order_id = await service.create_order(request)

        line = (await service.get_order(order_id)).items[0]
        assert line.unit_price == Decimal("0.34")
        assert line.subtotal == Decimal("1.02")
        assert line.subtotal == line.unit_price * line.quantity

    async def test_new_orders_start_in_initial_status(self, service):
        order_id = await service.create_order(make_order_create_request())

        order = await service.get_order(order_id)

        assert order.status_name == "new"

    async def test_order_ids_are_distinct(self, service):
        first = await service.create_order(make_order_create_request())
        second = await service.create_order(make_order_create_request())

        assert first != second

    async def test_total_mismatch_is_logged_not_rejected(self, service, mock_order_repository, caplog):
        request = make_order_create_request(total=Decimal("1.00"))

        with caplog.at_level(logging.WARNING):
            await service.create_order(request)

        assert mock_order_repository.order_count == 1
        assert "differs from line subtotals" in caplog.text


class TestOrderAtomicity:

    @pytest.mark.parametrize("failing_line", [1, 2, 3])
    async def test_failure_at_any_line_persists_nothing(self, service, mock_order_repository, failing_line):
        mock_order_repository.fail_on_line(failing_line)

        with pytest.raises(OrderTransactionError) as exc_info:
            await service.create_order(_three_line_request())

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert mock_order_repository.order_count == 0
        assert mock_order_repository.line_count == 0
        assert mock_order_repository.rollbacks == 1

    async def test_header_failure_persists_nothing(self, service, mock_order_repository):
        mock_order_repository.fail_on_header(ConnectionError("connection reset by peer"))

        with pytest.raises(OrderTransactionError, match="connection reset"):
            await service.create_order(make_order_create_request())

        assert mock_order_repository.order_count == 0
        mock_order_repository.assert_not_called("insert_order_line")

    async def test_stock_hook_runs_inside_the_transaction(self, service, mock_order_repository, monkeypatch):
        async def reject(tx, order_id, lines):
            raise RuntimeError("insufficient stock")

        monkeypatch.setattr(service, "_reserve_stock", reject)

        with pytest.raises(OrderTransactionError):
            await service.create_order(make_order_create_request())

        assert mock_order_repository.order_count == 0
        assert mock_order_repository.line_count == 0

    async def test_default_stock_hook_is_a_no_op(self, service, mock_order_repository):
        await service.create_order(make_order_create_request())

        assert mock_order_repository.commits == 1


class TestOrderValidation:

    @pytest.mark.parametrize("line_items", [
        [],
        [make_line_item(quantity=0)],
        [make_line_item(quantity=-2)],
        [make_line_item(unit_price=Decimal("-0.01"))],
    ])
    async def test_malformed_lines_rejected_before_transaction(self, service, mock_order_repository, line_items):
        with pytest.raises(OrderValidationError):
            await service.create_order(make_order_create_request(line_items=line_items, total=Decimal("0")))

        mock_order_repository.assert_not_called("transaction")

    async def test_blank_address_rejected(self, service, mock_order_repository):
        with pytest.raises(OrderValidationError, match="address"):
            await service.create_order(make_order_create_request(address="  "))

        mock_order_repository.assert_not_called("transaction")

    async def test_zero_price_line_is_allowed(self, service):
        order_id = await service.create_order(make_order_create_request(
            line_items=[make_line_item(unit_price=Decimal("0"), quantity=2)],
        ))

        order = await service.get_order(order_id)
        assert order.items[0].subtotal == Decimal("0.00")
