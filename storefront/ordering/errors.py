"""Ordering errors"""

from typing import List


class OrderingError(Exception):
    """Base error for the ordering pipeline"""
    pass


class OrderValidationError(OrderingError):
    """Checkout input is incomplete or inconsistent; nothing was persisted"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class CatalogItemNotFound(OrderingError):
    """A cart line references a product, variation or add-on that no longer exists"""
    pass


class StoreClosedError(OrderingError):
    """Ordering is not allowed right now"""

    def __init__(self, reason: str, message: str = ""):
        self.reason = reason
        super().__init__(message or f"Store is closed ({reason})")


class InvalidTransitionError(OrderingError):
    """The lifecycle does not allow moving an order to the requested status"""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move order from {current} to {target}")


class PersistenceError(OrderingError):
    """The order could not be stored; safe to retry"""
    pass
