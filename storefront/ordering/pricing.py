"""
Price resolution for cart lines.

Prices are plain floats and are only rounded when formatted for display.
A selected variation replaces the base price and disables any promotion;
a half-and-half line costs the pricier of its two flavors at the chosen size.
"""

from typing import Iterable, Optional

LARGE_SIZE_MARKERS = ("grande",)
LARGE_SIZE_NAMES = ("g",)


def resolve_price(product, variation=None, promotion=None) -> float:
    """Effective unit price of a product"""
    if variation is not None:
        return float(variation.price)
    if promotion is not None and promotion.is_active:
        return float(product.price) * (1 - float(promotion.discount_percent) / 100)
    return float(product.price)


def matching_variation(product, variation):
    """Variation of `product` with the same size name as `variation`, if any"""
    if variation is None:
        return None
    wanted = variation.name.strip().lower()
    for candidate in product.variations or []:
        if candidate.is_active and candidate.name.strip().lower() == wanted:
            return candidate
    return None


def second_flavor_price(second_flavor, variation=None) -> float:
    """Price of the second flavor at the size picked for the first one"""
    if variation is None:
        return resolve_price(second_flavor, None, second_flavor.promotion)
    same_size = matching_variation(second_flavor, variation)
    if same_size is None:
        # No own price table for this size, assume the first flavor's
        return float(variation.price)
    return float(same_size.price)


def addons_price(addons: Optional[Iterable]) -> float:
    return sum(float(addon.price) for addon in addons or [])


def line_unit_price(product, variation=None, second_flavor=None, addons=None) -> float:
    """Unit price of a cart line, add-ons included"""
    price = resolve_price(product, variation, product.promotion)
    if second_flavor is not None:
        price = max(price, second_flavor_price(second_flavor, variation))
    return price + addons_price(addons)


def is_large_size(variation) -> bool:
    """Whether a variation allows splitting the item into two flavors"""
    if variation is None:
        return False
    name = variation.name.strip().lower()
    return name in LARGE_SIZE_NAMES or any(marker in name for marker in LARGE_SIZE_MARKERS)


def format_money(value: float, symbol: str = "R$") -> str:
    return f"{symbol} {value:.2f}"
