"""Messaging handoff: prefilled WhatsApp links and the texts sent through them"""

import re
from typing import Optional
from urllib.parse import quote

from storefront.config import settings
from storefront.ordering.pricing import format_money

_NON_DIGITS = re.compile(r"\D")


def digits_only(phone: Optional[str]) -> str:
    return _NON_DIGITS.sub("", phone or "")


def mask_phone(phone: Optional[str]) -> str:
    """Last 4 digits only, for logs"""
    digits = digits_only(phone)
    return f"***{digits[-4:]}" if digits else ""


def build_whatsapp_link(number: str, text: str, base_url: Optional[str] = None) -> str:
    """`<base>/<recipient>?text=<encoded text>`; opening it is left to the client"""
    base = (base_url or settings.whatsapp_base_url).rstrip("/")
    return f"{base}/{digits_only(number)}?text={quote(text, safe='')}"


def pix_receipt_text(order_number: str, total: float) -> str:
    """Message the customer sends along with the PIX receipt"""
    return (
        "📱 *Comprovante PIX*\n\n"
        f"Pedido: #{order_number}\n"
        f"Valor: {format_money(total)}\n\n"
        "_Segue o comprovante em anexo._"
    )
