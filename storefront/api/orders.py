"""Order management API endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from storefront.api.auth import require_admin
from storefront.models.order import Order
from storefront.ordering.lifecycle import STATUS_LABELS, check_transition, notification_text
from storefront.ordering.messaging import build_whatsapp_link, digits_only
from storefront.schemas.auth import CurrentUser
from storefront.schemas.order import (
    OrderListResponse,
    OrderNotificationResponse,
    OrderResponse,
    OrderStatus,
    OrderStatusUpdate,
)
from storefront.store import CatalogStore, get_store

router = APIRouter()
logger = structlog.get_logger()


async def _get_order_or_404(store: CatalogStore, order_id: UUID) -> Order:
    order = await store.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


async def write_status(store: CatalogStore, order_id, status: OrderStatus) -> Order:
    """Store any status; sequencing is the caller's business"""
    order = await store.update(Order, order_id, {"status": OrderStatus(status).value})
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[OrderStatus] = None,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """List orders, newest first"""
    filters = {"status": status.value} if status else None

    total = await store.count(Order, filters=filters)
    orders = await store.list(
        Order,
        filters=filters,
        order_by=("-created_at",),
        limit=page_size,
        offset=(page - 1) * page_size,
    )

    return OrderListResponse(
        items=[OrderResponse.model_validate(order) for order in orders],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Get order details"""
    return await _get_order_or_404(store, order_id)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    status_data: OrderStatusUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Set any status, for manual corrections"""
    order = await _get_order_or_404(store, order_id)
    previous = order.status

    order = await write_status(store, order_id, status_data.status)

    logger.info(
        "Order status overwritten",
        order_id=str(order_id),
        previous=previous,
        status=order.status,
        user_id=str(current_user.user_id),
    )
    return order


@router.post("/{order_id}/transition", response_model=OrderResponse)
async def transition_order(
    order_id: UUID,
    status_data: OrderStatusUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Move an order one step along its lifecycle, or cancel it"""
    order = await _get_order_or_404(store, order_id)
    previous = order.status

    check_transition(previous, status_data.status)
    order = await write_status(store, order_id, status_data.status)

    logger.info(
        "Order status changed",
        order_id=str(order_id),
        previous=previous,
        status=order.status,
        user_id=str(current_user.user_id),
    )
    return order


@router.get("/{order_id}/notification", response_model=OrderNotificationResponse)
async def get_order_notification(
    order_id: UUID,
    status: Optional[OrderStatus] = None,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Customer message for a status (the order's current one by default)"""
    order = await _get_order_or_404(store, order_id)
    status = status or OrderStatus(order.status)

    message = notification_text(order.customer_name, order.display_number, status)
    whatsapp_url = None
    if digits_only(order.customer_phone):
        whatsapp_url = build_whatsapp_link(order.customer_phone, message)

    return OrderNotificationResponse(
        status=status,
        label=STATUS_LABELS[status],
        message=message,
        whatsapp_url=whatsapp_url,
    )
