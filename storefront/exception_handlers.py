"""
Exception handlers mapping ordering errors to HTTP responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
import structlog

from storefront.ordering.errors import (
    CatalogItemNotFound,
    InvalidTransitionError,
    OrderValidationError,
    PersistenceError,
    StoreClosedError,
)

logger = structlog.get_logger()


async def order_validation_handler(request: Request, exc: OrderValidationError):
    logger.info("Checkout rejected", path=request.url.path, errors=exc.errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": {"errors": exc.errors}},
    )


async def catalog_item_handler(request: Request, exc: CatalogItemNotFound):
    logger.info("Cart references unavailable item", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": {"errors": [str(exc)]}},
    )


async def store_closed_handler(request: Request, exc: StoreClosedError):
    logger.info("Order refused while store is closed", reason=exc.reason)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": {"reason": exc.reason, "message": str(exc)}},
    )


async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    logger.warning(
        "Order transition refused",
        path=request.url.path,
        current=exc.current,
        target=exc.target,
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": {
                "message": str(exc),
                "current": exc.current,
                "target": exc.target,
            }
        },
    )


async def persistence_handler(request: Request, exc: PersistenceError):
    logger.error("Order not stored", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(OrderValidationError, order_validation_handler)
    app.add_exception_handler(CatalogItemNotFound, catalog_item_handler)
    app.add_exception_handler(StoreClosedError, store_closed_handler)
    app.add_exception_handler(InvalidTransitionError, invalid_transition_handler)
    app.add_exception_handler(PersistenceError, persistence_handler)
