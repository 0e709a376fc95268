"""
Cart aggregate.

Lines are identified by a structured key (product, variation, second flavor).
Adding a line whose key already exists sums the quantities and keeps the
existing line's notes and add-ons.
"""

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional

from storefront.ordering.pricing import line_unit_price


class CartKey(NamedTuple):
    """Identity of a cart line"""
    product_id: str
    variation_id: Optional[str] = None
    second_flavor_id: Optional[str] = None

    @classmethod
    def for_line(cls, product, variation=None, second_flavor=None) -> "CartKey":
        return cls(
            str(product.id),
            str(variation.id) if variation is not None else None,
            str(second_flavor.id) if second_flavor is not None else None,
        )

    def __str__(self) -> str:
        return ":".join(part or "" for part in self)


@dataclass
class CartItem:
    """A product in the cart with its selections"""
    product: object
    quantity: int = 1
    notes: Optional[str] = None
    variation: Optional[object] = None
    second_flavor: Optional[object] = None
    addons: List[object] = field(default_factory=list)

    @property
    def key(self) -> CartKey:
        return CartKey.for_line(self.product, self.variation, self.second_flavor)

    @property
    def unit_price(self) -> float:
        return line_unit_price(self.product, self.variation, self.second_flavor, self.addons)

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    def display_name(self) -> str:
        """`Pizza (Grande) + Calabresa` style label"""
        name = self.product.name
        if self.variation is not None:
            name += f" ({self.variation.name})"
        if self.second_flavor is not None:
            name += f" + {self.second_flavor.name}"
        return name


class Cart:
    """In-memory cart for one ordering session"""

    def __init__(self):
        self._items: Dict[CartKey, CartItem] = {}

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    def get(self, key: CartKey) -> Optional[CartItem]:
        return self._items.get(key)

    def add_item(
        self,
        product,
        quantity: int = 1,
        notes: Optional[str] = None,
        variation=None,
        second_flavor=None,
        addons=None,
    ) -> CartItem:
        """Add a product, merging with an existing line of the same key"""
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        
        key = CartKey.for_line(product, variation, second_flavor)
        existing = self._items.get(key)
        
        if existing is not None:
            existing.quantity += quantity
            return existing
        
        item = CartItem(
            product=product,
            quantity=quantity,
            notes=notes,
            variation=variation,
            second_flavor=second_flavor,
            addons=list(addons or []),
        )
        self._items[key] = item
        return item

    def remove_item(self, key: CartKey) -> None:
        self._items.pop(key, None)

    def update_quantity(self, key: CartKey, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            self.remove_item(key)
            return
        item = self._items.get(key)
        if item is not None:
            item.quantity = quantity

    def clear(self) -> None:
        self._items.clear()

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self._items.values())

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self.items)
