"""Store settings API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends
import structlog

from storefront.api.auth import require_admin
from storefront.config import settings
from storefront.models.settings import StoreSettings
from storefront.ordering.hours import (
    DEFAULT_CLOSING_TIME,
    DEFAULT_OPENING_TIME,
    StoreState,
    local_now,
    store_state,
    time_of_day,
)
from storefront.schemas.auth import CurrentUser
from storefront.schemas.settings import SettingsUpdate, SettingsResponse, StoreStatusResponse
from storefront.store import CatalogStore, get_store

router = APIRouter()
logger = structlog.get_logger()

# Optional fields an admin may blank out
CLEARABLE_FIELDS = ("store_address", "pix_key", "closed_message")


async def load_settings(store: CatalogStore) -> Optional[StoreSettings]:
    """The settings row, None until an admin saves one"""
    return await store.first(StoreSettings, order_by=("updated_at",))


def settings_response(store_settings: Optional[StoreSettings]) -> SettingsResponse:
    """Settings with defaults filled in for a store that was never configured"""
    if store_settings is None:
        return SettingsResponse(
            whatsapp_number=settings.default_whatsapp_number,
            store_name=settings.default_store_name,
        )
    return SettingsResponse.model_validate(store_settings)


def store_status(store_settings: Optional[StoreSettings]) -> StoreStatusResponse:
    now = local_now(settings.store_timezone)
    state = store_state(store_settings, now)
    return StoreStatusResponse(
        is_open=state == StoreState.OPEN,
        reason=state.value,
        closed_message=store_settings.closed_message if store_settings else None,
        opening_time=(store_settings.opening_time if store_settings else None) or DEFAULT_OPENING_TIME,
        closing_time=(store_settings.closing_time if store_settings else None) or DEFAULT_CLOSING_TIME,
        checked_at=time_of_day(now),
    )


@router.get("", response_model=SettingsResponse)
async def get_settings(store: CatalogStore = Depends(get_store)):
    """Public store settings"""
    return settings_response(await load_settings(store))


@router.get("/status", response_model=StoreStatusResponse)
async def get_store_status(store: CatalogStore = Depends(get_store)):
    """Whether the store takes orders right now"""
    return store_status(await load_settings(store))


@router.put("", response_model=SettingsResponse)
async def update_settings(
    settings_data: SettingsUpdate,
    current_user: CurrentUser = Depends(require_admin),
    store: CatalogStore = Depends(get_store),
):
    """Create or update the store settings"""
    updates = {
        field: value
        for field, value in settings_data.model_dump(exclude_unset=True).items()
        if value is not None or field in CLEARABLE_FIELDS
    }
    store_settings = await load_settings(store)
    
    if store_settings is None:
        data = {
            "whatsapp_number": settings.default_whatsapp_number,
            "store_name": settings.default_store_name,
            **updates,
        }
        store_settings = await store.create(StoreSettings, data)
    else:
        store_settings = await store.update(StoreSettings, store_settings.id, updates)
    
    logger.info(
        "Store settings updated",
        fields=sorted(updates),
        user_id=str(current_user.user_id),
    )
    
    return settings_response(store_settings)
