"""
Order lifecycle.

pending -> confirmed -> preparing -> ready -> delivered, with cancelled
reachable from any non-terminal state. The stored status can be written
freely (admins correct mistakes by hand); the sequence is enforced by the
callers that go through `check_transition` or `OrderStatusBoard.advance`.
"""

from typing import Awaitable, Callable, Dict, Iterable, Optional, Tuple

import structlog

from storefront.ordering.errors import InvalidTransitionError
from storefront.schemas.order import OrderStatus

logger = structlog.get_logger()

TRANSITIONS: Dict[OrderStatus, Tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    OrderStatus.CONFIRMED: (OrderStatus.PREPARING, OrderStatus.CANCELLED),
    OrderStatus.PREPARING: (OrderStatus.READY, OrderStatus.CANCELLED),
    OrderStatus.READY: (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
    OrderStatus.DELIVERED: (),
    OrderStatus.CANCELLED: (),
}

STATUS_LABELS = {
    OrderStatus.PENDING: "Pendente",
    OrderStatus.CONFIRMED: "Confirmado",
    OrderStatus.PREPARING: "Preparando",
    OrderStatus.READY: "Pronto",
    OrderStatus.DELIVERED: "Entregue",
    OrderStatus.CANCELLED: "Cancelado",
}

STATUS_MESSAGES = {
    OrderStatus.PENDING: "Seu pedido foi recebido e está aguardando confirmação!",
    OrderStatus.CONFIRMED: "Seu pedido foi confirmado e logo será preparado!",
    OrderStatus.PREPARING: "Seu pedido está sendo preparado com carinho!",
    OrderStatus.READY: "Seu pedido está pronto! Aguardando retirada/entrega.",
    OrderStatus.DELIVERED: "Seu pedido foi entregue! Bom apetite!",
    OrderStatus.CANCELLED: "Infelizmente seu pedido foi cancelado.",
}


def is_terminal(status) -> bool:
    return not TRANSITIONS[OrderStatus(status)]


def allowed_transitions(status) -> Tuple[OrderStatus, ...]:
    return TRANSITIONS[OrderStatus(status)]


def next_status(status) -> Optional[OrderStatus]:
    """Next step on the happy path, None once terminal"""
    forward = [s for s in allowed_transitions(status) if s != OrderStatus.CANCELLED]
    return forward[0] if forward else None


def can_transition(current, target) -> bool:
    return OrderStatus(target) in allowed_transitions(current)


def check_transition(current, target) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(OrderStatus(current).value, OrderStatus(target).value)


def notification_text(customer_name: str, order_number: str, status) -> str:
    """Message sent to the customer when the order reaches `status`"""
    return (
        f"Olá, {customer_name}! 📦\n\n"
        f"{STATUS_MESSAGES[OrderStatus(status)]}\n\n"
        f"Pedido: #{order_number}\n\n"
        "Obrigado pela preferência!"
    )


StatusWriter = Callable[[str, OrderStatus], Awaitable[str]]


class OrderStatusBoard:
    """
    Admin-side view of order statuses.

    Status changes are shown immediately, replaced by the stored value once
    the write returns, and rolled back if the write fails.
    """

    def __init__(self, orders: Optional[Iterable[Tuple[str, str]]] = None):
        self._statuses: Dict[str, OrderStatus] = {}
        if orders:
            self.load(orders)

    def load(self, orders: Iterable[Tuple[str, str]]) -> None:
        """Replace the board with freshly fetched (order_id, status) pairs"""
        self._statuses = {str(order_id): OrderStatus(status) for order_id, status in orders}

    def status_of(self, order_id) -> Optional[OrderStatus]:
        return self._statuses.get(str(order_id))

    def snapshot(self) -> Dict[str, OrderStatus]:
        return dict(self._statuses)

    async def change_status(self, order_id, target, write: StatusWriter) -> OrderStatus:
        """Write any status with an optimistic local update"""
        order_id = str(order_id)
        target = OrderStatus(target)
        previous = self._statuses.get(order_id)
        
        self._statuses[order_id] = target
        try:
            stored = await write(order_id, target)
        except Exception:
            if previous is None:
                self._statuses.pop(order_id, None)
            else:
                self._statuses[order_id] = previous
            logger.warning(
                "Order status change rolled back",
                order_id=order_id,
                status=target.value,
            )
            raise
        
        self._statuses[order_id] = OrderStatus(stored)
        return self._statuses[order_id]

    async def advance(self, order_id, target, write: StatusWriter) -> bool:
        """Change status only along the lifecycle; otherwise do nothing"""
        current = self.status_of(order_id)
        if current is None or not can_transition(current, target):
            logger.info(
                "Ignoring status change outside the lifecycle",
                order_id=str(order_id),
                current=current.value if current else None,
                target=OrderStatus(target).value,
            )
            return False
        await self.change_status(order_id, target, write)
        return True
