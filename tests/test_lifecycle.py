"""Tests for the order lifecycle and the admin status board"""

import pytest

from storefront.ordering.errors import InvalidTransitionError
from storefront.ordering.lifecycle import (
    OrderStatusBoard,
    can_transition,
    check_transition,
    is_terminal,
    next_status,
    notification_text,
)
from storefront.schemas.order import OrderStatus


def test_happy_path():
    status = OrderStatus.PENDING
    path = [status]
    while next_status(status):
        status = next_status(status)
        path.append(status)

    assert path == [
        OrderStatus.PENDING,
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.DELIVERED,
    ]


def test_cancel_from_any_open_state():
    for status in ("pending", "confirmed", "preparing", "ready"):
        assert can_transition(status, "cancelled")


def test_terminal_states():
    assert is_terminal("delivered")
    assert is_terminal("cancelled")
    assert not is_terminal("ready")
    assert not can_transition("cancelled", "preparing")
    assert not can_transition("delivered", "cancelled")


def test_skipping_steps_is_refused():
    with pytest.raises(InvalidTransitionError) as exc_info:
        check_transition("pending", "delivered")
    assert exc_info.value.current == "pending"
    assert exc_info.value.target == "delivered"


def test_notification_text():
    text = notification_text("Ana", "123456789", OrderStatus.READY)
    assert text == (
        "Olá, Ana! 📦\n\n"
        "Seu pedido está pronto! Aguardando retirada/entrega.\n\n"
        "Pedido: #123456789\n\n"
        "Obrigado pela preferência!"
    )


async def stored_as_written(order_id, status):
    return status.value


@pytest.mark.asyncio
async def test_board_cancel_then_advance_is_ignored():
    board = OrderStatusBoard([("o1", "pending")])

    await board.change_status("o1", "cancelled", stored_as_written)
    assert board.status_of("o1") == OrderStatus.CANCELLED

    advanced = await board.advance("o1", "preparing", stored_as_written)
    assert advanced is False
    assert board.status_of("o1") == OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_board_advance_along_lifecycle():
    board = OrderStatusBoard([("o1", "pending")])

    assert await board.advance("o1", OrderStatus.CONFIRMED, stored_as_written) is True
    assert board.status_of("o1") == OrderStatus.CONFIRMED


@pytest.mark.asyncio
async def test_board_shows_change_before_write_returns():
    board = OrderStatusBoard([("o1", "pending")])
    seen = []

    async def write(order_id, status):
        seen.append(board.status_of(order_id))
        return status.value

    await board.change_status("o1", "confirmed", write)
    assert seen == [OrderStatus.CONFIRMED]


@pytest.mark.asyncio
async def test_board_rolls_back_failed_write():
    board = OrderStatusBoard([("o1", "pending")])

    async def failing_write(order_id, status):
        raise ConnectionError("network down")

    with pytest.raises(ConnectionError):
        await board.change_status("o1", "confirmed", failing_write)

    assert board.status_of("o1") == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_board_keeps_stored_value():
    board = OrderStatusBoard([("o1", "pending")])

    async def write(order_id, status):
        return "preparing"

    assert await board.change_status("o1", "confirmed", write) == OrderStatus.PREPARING
    assert board.snapshot() == {"o1": OrderStatus.PREPARING}


def test_board_load_replaces_everything():
    board = OrderStatusBoard([("o1", "pending")])
    board.load([("o2", "ready")])

    assert board.status_of("o1") is None
    assert board.status_of("o2") == OrderStatus.READY
