"""Checkout API endpoints"""

import asyncio
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import OperationalError, SQLAlchemyError
import structlog

from storefront.api.products import PRODUCT_OPTIONS, product_response
from storefront.api.settings import load_settings, settings_response
from storefront.config import settings
from storefront.models.catalog import CategoryAddon, Product
from storefront.models.order import Order
from storefront.ordering.cart import Cart
from storefront.ordering.composer import build_order_record, compose_order, compose_summary, generate_order_number
from storefront.ordering.errors import (
    CatalogItemNotFound,
    OrderValidationError,
    PersistenceError,
    StoreClosedError,
)
from storefront.ordering.hours import StoreState, local_now, store_state
from storefront.ordering.messaging import build_whatsapp_link, mask_phone, pix_receipt_text
from storefront.ordering.pricing import is_large_size
from storefront.schemas.catalog import AddonResponse
from storefront.schemas.order import (
    CartLineResponse,
    CheckoutLine,
    CheckoutPreviewResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
    PaymentMethod,
)
from storefront.store import CatalogStore, get_store

router = APIRouter()
logger = structlog.get_logger()


async def load_cart(store: CatalogStore, lines: List[CheckoutLine]) -> Cart:
    """Rebuild the cart from catalog rows so prices come from the store"""
    cart = Cart()

    for line in lines:
        product = await store.get(Product, line.product_id, options=PRODUCT_OPTIONS)
        if product is None or not product.is_active:
            raise CatalogItemNotFound("Um dos produtos do carrinho não está mais disponível")
        snapshot = product_response(product)

        variation = None
        if line.variation_id:
            variation = next((v for v in snapshot.variations if v.id == line.variation_id), None)
            if variation is None:
                raise CatalogItemNotFound(f"Tamanho indisponível para {snapshot.name}")
        elif snapshot.variations:
            raise OrderValidationError([f"Escolha um tamanho para {snapshot.name}"])

        second_flavor = None
        if line.second_flavor_id:
            if not is_large_size(variation):
                raise OrderValidationError(["Pizza meia a meia só está disponível no tamanho grande"])
            second = await store.get(Product, line.second_flavor_id, options=PRODUCT_OPTIONS)
            if second is None or not second.is_active:
                raise CatalogItemNotFound("O segundo sabor escolhido não está mais disponível")
            if second.id == product.id or second.category_id != product.category_id:
                raise OrderValidationError(["O segundo sabor deve ser outro produto da mesma categoria"])
            second_flavor = product_response(second)

        addons = []
        if line.addon_ids:
            offered = {}
            if product.category_id:
                rows = await store.list(
                    CategoryAddon,
                    filters={"category_id": product.category_id, "is_active": True},
                )
                offered = {row.id: row for row in rows}
            for addon_id in line.addon_ids:
                if addon_id not in offered:
                    raise CatalogItemNotFound(f"Adicional indisponível para {snapshot.name}")
                addons.append(AddonResponse.model_validate(offered[addon_id]))

        cart.add_item(snapshot, line.quantity, line.notes, variation, second_flavor, addons)

    return cart


async def find_stored_order(store: CatalogStore, record: dict) -> Optional[Order]:
    """The row for `record` if an interrupted attempt did commit it"""
    try:
        return await store.first(
            Order,
            filters={"order_number": record["order_number"], "created_at": record["created_at"]},
        )
    except SQLAlchemyError as e:
        logger.error("Order lookup after failed write failed", error=str(e))
        raise PersistenceError("Não foi possível registrar o pedido. Tente novamente.") from e


async def persist_order(store: CatalogStore, record: dict) -> Order:
    """
    Store the order, retrying once on a transient failure.

    Only the insert runs under the timeout. Before a retry the order is looked
    up, so a commit that went through late is not stored twice.

    Raises PersistenceError when every attempt failed.
    """
    attempts = settings.order_persist_retries + 1

    for attempt in range(1, attempts + 1):
        try:
            order = await asyncio.wait_for(
                store.insert(Order, record),
                timeout=settings.order_persist_timeout_seconds,
            )
        except (asyncio.TimeoutError, OperationalError) as e:
            await store.db.rollback()
            logger.warning(
                "Order persistence failed",
                attempt=attempt,
                attempts=attempts,
                error=str(e) or type(e).__name__,
            )
            stored = await find_stored_order(store, record)
            if stored is not None:
                logger.info("Order was stored despite the failure", order_id=str(stored.id))
                return stored
            continue
        except SQLAlchemyError as e:
            logger.error("Order persistence failed", error=str(e))
            raise PersistenceError("Não foi possível registrar o pedido. Tente novamente.") from e

        return await store.refresh(order)

    raise PersistenceError("Não foi possível registrar o pedido. Tente novamente.")


def _line_responses(cart: Cart) -> List[CartLineResponse]:
    return [
        CartLineResponse(
            key=str(item.key),
            product_id=item.product.id,
            name=item.product.name,
            variation=item.variation.name if item.variation else None,
            second_flavor=item.second_flavor.name if item.second_flavor else None,
            addons=[addon.name for addon in item.addons],
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
            notes=item.notes,
        )
        for item in cart.items
    ]


@router.post("/preview", response_model=CheckoutPreviewResponse)
async def preview_checkout(
    request: CheckoutRequest,
    store: CatalogStore = Depends(get_store),
):
    """Price the cart and show the message that would be sent, without saving"""
    cart = await load_cart(store, request.items)
    store_settings = await load_settings(store)
    store_info = settings_response(store_settings)

    now = datetime.utcnow()
    record = build_order_record(
        cart,
        request.customer,
        request.order_type,
        request.payment,
        request.notes,
        delivery_fee=store_info.delivery_fee,
        order_number=request.order_number or generate_order_number(now),
        created_at=now,
    )
    summary = compose_summary(
        record,
        store_name=store_info.store_name,
        pix_key=store_info.pix_key,
        timezone=settings.store_timezone,
    )

    return CheckoutPreviewResponse(
        lines=_line_responses(cart),
        item_count=cart.item_count,
        order_number=record["order_number"],
        subtotal=record["subtotal"],
        delivery_fee=record["delivery_fee"],
        total=record["total"],
        summary_text=summary,
        store_open=store_state(store_settings, local_now(settings.store_timezone)) == StoreState.OPEN,
    )


@router.post("", response_model=CheckoutResponse, status_code=201)
async def checkout(
    request: CheckoutRequest,
    store: CatalogStore = Depends(get_store),
):
    """
    Place an order.

    The order is stored first; the WhatsApp link is only returned once the
    write succeeded.
    """
    store_settings = await load_settings(store)
    state = store_state(store_settings, local_now(settings.store_timezone))
    if state != StoreState.OPEN:
        closed_message = store_settings.closed_message if store_settings else None
        raise StoreClosedError(state.value, closed_message or "A loja está fechada no momento")

    store_info = settings_response(store_settings)
    cart = await load_cart(store, request.items)

    composed = compose_order(
        cart,
        request.customer,
        request.order_type,
        request.payment,
        request.notes,
        store=store_info,
        accepted_terms=request.accepted_terms,
        order_number=request.order_number,
        require_table_number=settings.require_table_number,
        require_consent=settings.require_privacy_consent,
        timezone=settings.store_timezone,
    )

    order = await persist_order(store, composed.record)

    logger.info(
        "Order placed",
        order_id=str(order.id),
        order_number=composed.order_number,
        order_type=request.order_type.value,
        item_count=cart.item_count,
        total=round(order.total, 2),
        customer_phone=mask_phone(order.customer_phone),
    )

    pix_receipt_url = None
    if request.payment.method == PaymentMethod.PIX and store_info.pix_key:
        pix_receipt_url = build_whatsapp_link(
            store_info.whatsapp_number,
            pix_receipt_text(composed.order_number, order.total),
        )

    return CheckoutResponse(
        order=OrderResponse.model_validate(order),
        order_number=composed.order_number,
        summary_text=composed.summary_text,
        whatsapp_url=build_whatsapp_link(store_info.whatsapp_number, composed.summary_text),
        pix_receipt_url=pix_receipt_url,
    )
