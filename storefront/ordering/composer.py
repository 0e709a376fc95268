"""
Order composition.

Turns a cart plus the checkout form into the order record to persist and the
summary text handed to WhatsApp. The text is built from the record alone, so
it comes out the same every time for the same order.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone
from typing import List, Optional
from zoneinfo import ZoneInfo

from storefront.ordering.cart import Cart, CartItem
from storefront.ordering.errors import OrderValidationError
from storefront.ordering.pricing import format_money
from storefront.schemas.order import CustomerInfo, OrderType, PaymentInfo, PaymentMethod

PAYMENT_LABELS = {
    PaymentMethod.PIX: "PIX",
    PaymentMethod.CASH: "Dinheiro",
    PaymentMethod.CARD: "Cartão",
}


@dataclass
class ComposedOrder:
    """Everything checkout needs after composing"""
    order_number: str
    record: dict
    summary_text: str


def generate_order_number(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> str:
    """
    Short number customers can read out.

    Last six digits of the millisecond timestamp plus three random digits;
    collisions are possible and acceptable at a single store's volume.
    """
    now = now or datetime.utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)
    millis = int(now.timestamp() * 1000)
    suffix = (rng or random).randint(0, 999)
    return f"{str(millis)[-6:]}{suffix:03d}"


def delivery_charge(order_type: OrderType, delivery_fee) -> float:
    return float(delivery_fee or 0) if order_type == OrderType.DELIVERY else 0.0


def order_total(cart: Cart, order_type: OrderType, delivery_fee) -> float:
    return cart.total + delivery_charge(order_type, delivery_fee)


def validate_checkout(
    cart: Cart,
    customer: CustomerInfo,
    order_type: OrderType,
    payment: PaymentInfo,
    accepted_terms: bool,
    require_table_number: bool = True,
    require_consent: bool = True,
    total: Optional[float] = None,
) -> None:
    """
    Raise OrderValidationError listing every problem found.

    `total` is what the customer pays; cash change must cover it when given.
    """
    errors: List[str] = []

    if cart.is_empty():
        errors.append("Seu carrinho está vazio")

    name = (customer.name or "").strip()
    if not name:
        errors.append("Informe seu nome")
    elif len(name) < 2:
        errors.append("Nome deve ter pelo menos 2 caracteres")

    if not (customer.phone or "").strip():
        errors.append("Informe seu WhatsApp")

    if order_type == OrderType.DELIVERY and not (customer.address or "").strip():
        errors.append("Preencha o endereço de entrega")

    if order_type == OrderType.TABLE and require_table_number and customer.table_number is None:
        errors.append("Informe o número da mesa")

    if payment.method == PaymentMethod.CASH and payment.need_change:
        if payment.change_amount is None:
            errors.append("Informe o valor para troco")
        elif total is not None and payment.change_amount < total:
            errors.append("O valor para troco deve ser maior ou igual ao total do pedido")

    if require_consent and not accepted_terms:
        errors.append("Aceite os termos de uso e a política de privacidade para continuar")

    if errors:
        raise OrderValidationError(errors)


def line_snapshot(item: CartItem) -> dict:
    """JSON-safe copy of a cart line as it was priced"""
    variation = item.variation
    second_flavor = item.second_flavor
    return {
        "key": str(item.key),
        "name": item.display_name(),
        "product": {
            "id": str(item.product.id),
            "name": item.product.name,
            "price": float(item.product.price),
        },
        "variation": {
            "id": str(variation.id),
            "name": variation.name,
            "price": float(variation.price),
        } if variation is not None else None,
        "second_flavor": {
            "id": str(second_flavor.id),
            "name": second_flavor.name,
        } if second_flavor is not None else None,
        "addons": [
            {"id": str(addon.id), "name": addon.name, "price": float(addon.price)}
            for addon in item.addons
        ],
        "quantity": item.quantity,
        "notes": item.notes,
        "unit_price": item.unit_price,
        "subtotal": item.subtotal,
    }


def build_order_record(
    cart: Cart,
    customer: CustomerInfo,
    order_type: OrderType,
    payment: PaymentInfo,
    notes: Optional[str],
    delivery_fee: float,
    order_number: str,
    created_at: datetime,
) -> dict:
    """Column values for the Order row; status is left to the store"""
    subtotal = cart.total
    fee = delivery_charge(order_type, delivery_fee)
    is_delivery = order_type == OrderType.DELIVERY

    change_for = None
    if payment.method == PaymentMethod.CASH and payment.need_change:
        change_for = payment.change_amount

    return {
        "order_number": order_number,
        "customer_name": customer.name.strip(),
        "customer_phone": customer.phone.strip(),
        "order_type": order_type.value,
        "table_number": customer.table_number if order_type == OrderType.TABLE else None,
        "address": customer.address.strip() if is_delivery and customer.address else None,
        "address_complement": (
            customer.address_complement.strip()
            if is_delivery and customer.address_complement else None
        ),
        "items_json": [line_snapshot(item) for item in cart.items],
        "subtotal": subtotal,
        "delivery_fee": fee,
        "total": subtotal + fee,
        "payment_method": payment.method.value,
        "change_for": change_for,
        "notes": notes.strip() if notes and notes.strip() else None,
        "created_at": created_at,
    }


def _local(created_at: datetime, timezone: str) -> datetime:
    # Stored timestamps are naive UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=dt_timezone.utc)
    return created_at.astimezone(ZoneInfo(timezone))


def compose_summary(
    record: dict,
    store_name: str,
    pix_key: Optional[str] = None,
    timezone: str = "America/Sao_Paulo",
) -> str:
    """
    Order summary sent to the store over WhatsApp.

    Sections always come in this order and are left out entirely when they
    do not apply: header, order number and time, customer, items,
    fulfillment, values, payment, notes, closing.
    """
    order_type = OrderType(record["order_type"])
    sections: List[str] = []

    sections.append(f"🍔 *Novo Pedido - {store_name}*")

    created = _local(record["created_at"], timezone)
    sections.append(
        f"🧾 *Pedido:* #{record['order_number']}\n"
        f"🕐 *Data:* {created.strftime('%d/%m/%Y %H:%M')}"
    )

    sections.append(
        f"👤 *Cliente:* {record['customer_name']}\n"
        f"📱 *Telefone:* {record['customer_phone']}"
    )

    item_lines = ["📋 *Itens:*"]
    for line in record["items_json"]:
        item_lines.append(f"• {line['quantity']}x {line['name']} - {format_money(line['subtotal'])}")
        if line["addons"]:
            addon_names = ", ".join(addon["name"] for addon in line["addons"])
            item_lines.append(f"   ➕ {addon_names}")
        if line.get("notes"):
            item_lines.append(f"   📝 {line['notes']}")
    sections.append("\n".join(item_lines))

    if order_type == OrderType.DELIVERY:
        if record.get("address"):
            address = f"🏠 *Endereço:* {record['address']}"
            if record.get("address_complement"):
                address += f" - {record['address_complement']}"
            sections.append(address)
    elif order_type == OrderType.PICKUP:
        sections.append("🏪 *Retirada no local*")
    elif record.get("table_number") is not None:
        sections.append(f"🍽️ *Mesa:* {record['table_number']}")
    else:
        sections.append("🍽️ *Consumo no local*")

    values = [f"💰 *Subtotal:* {format_money(record['subtotal'])}"]
    if order_type == OrderType.DELIVERY:
        values.append(f"🚚 *Taxa de Entrega:* {format_money(record['delivery_fee'])}")
    values.append(f"💵 *TOTAL: {format_money(record['total'])}*")
    sections.append("\n".join(values))

    method = PaymentMethod(record["payment_method"])
    payment = [f"💳 *Pagamento:* {PAYMENT_LABELS[method]}"]
    if method == PaymentMethod.PIX and pix_key:
        payment.append(f"🔑 *Chave PIX:* {pix_key}")
    elif method == PaymentMethod.CASH:
        if record.get("change_for") is not None:
            change = record["change_for"] - record["total"]
            payment.append(f"💵 *Troco para:* {format_money(record['change_for'])}")
            if change > 0:
                payment.append(f"🪙 *Levar troco:* {format_money(change)}")
        else:
            payment.append("💵 *Não precisa de troco*")
    sections.append("\n".join(payment))

    if record.get("notes"):
        sections.append(f"📝 *Observações:* {record['notes']}")

    sections.append("Obrigado pela preferência! 🙏")

    return "\n\n".join(sections)


def compose_order(
    cart: Cart,
    customer: CustomerInfo,
    order_type: OrderType,
    payment: PaymentInfo,
    notes: Optional[str],
    store,
    accepted_terms: bool = False,
    now: Optional[datetime] = None,
    order_number: Optional[str] = None,
    require_table_number: bool = True,
    require_consent: bool = True,
    timezone: str = "America/Sao_Paulo",
) -> ComposedOrder:
    """
    Validate the checkout and build the record and summary text.

    `store` provides store_name, delivery_fee and pix_key. Nothing is
    persisted or sent here.
    """
    validate_checkout(
        cart,
        customer,
        order_type,
        payment,
        accepted_terms,
        require_table_number=require_table_number,
        require_consent=require_consent,
        total=order_total(cart, order_type, store.delivery_fee),
    )

    now = now or datetime.utcnow()
    order_number = order_number or generate_order_number(now)

    record = build_order_record(
        cart,
        customer,
        order_type,
        payment,
        notes,
        delivery_fee=store.delivery_fee,
        order_number=order_number,
        created_at=now,
    )
    summary = compose_summary(
        record,
        store_name=store.store_name,
        pix_key=store.pix_key,
        timezone=timezone,
    )

    return ComposedOrder(order_number=order_number, record=record, summary_text=summary)
