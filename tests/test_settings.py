"""Tests for store settings endpoints"""

from datetime import datetime

import pytest
from httpx import AsyncClient

import storefront.api.settings as settings_api


@pytest.mark.asyncio
async def test_defaults_before_configuration(client: AsyncClient):
    response = await client.get("/settings")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] is None
    assert data["store_name"] == "Espaço Imperial"
    assert data["whatsapp_number"] == "5511999999999"
    assert data["delivery_fee"] == 0


@pytest.mark.asyncio
async def test_admin_creates_then_updates_settings(admin_client: AsyncClient):
    response = await admin_client.put(
        "/settings",
        json={"store_name": "  Pizzaria Nova  ", "delivery_fee": 7.5, "opening_time": "9:00"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] is not None
    assert data["store_name"] == "Pizzaria Nova"
    assert data["opening_time"] == "09:00"

    response = await admin_client.put("/settings", json={"pix_key": "chave@pix.com"})
    assert response.json()["id"] == data["id"]
    assert response.json()["delivery_fee"] == 7.5
    assert response.json()["pix_key"] == "chave@pix.com"

    response = await admin_client.put("/settings", json={"pix_key": None, "store_name": None})
    assert response.json()["pix_key"] is None
    assert response.json()["store_name"] == "Pizzaria Nova"


@pytest.mark.asyncio
async def test_settings_are_validated(admin_client: AsyncClient):
    response = await admin_client.put("/settings", json={"whatsapp_number": "12-34"})
    assert response.status_code == 422

    response = await admin_client.put("/settings", json={"closing_time": "25:00"})
    assert response.status_code == 422

    response = await admin_client.put("/settings", json={"delivery_fee": 1000})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_settings_write_requires_admin(client: AsyncClient, user_headers):
    response = await client.put("/settings", json={"is_open": False}, headers=user_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_status_overnight(client: AsyncClient, store_settings, monkeypatch):
    monkeypatch.setattr(settings_api, "local_now", lambda timezone: datetime(2026, 3, 7, 1, 15))

    response = await client.get("/settings/status")

    assert response.status_code == 200
    assert response.json() == {
        "is_open": True,
        "reason": "open",
        "closed_message": "Abrimos às 18h!",
        "opening_time": "18:00",
        "closing_time": "02:00",
        "checked_at": "01:15",
    }


@pytest.mark.asyncio
async def test_status_outside_hours(client: AsyncClient, store_settings, monkeypatch):
    monkeypatch.setattr(settings_api, "local_now", lambda timezone: datetime(2026, 3, 7, 10, 0))

    response = await client.get("/settings/status")

    assert response.json()["is_open"] is False
    assert response.json()["reason"] == "outside_hours"


@pytest.mark.asyncio
async def test_maintenance_mode(admin_client: AsyncClient):
    await admin_client.put("/settings", json={"maintenance_mode": True})

    response = await admin_client.get("/settings/status")

    assert response.json()["is_open"] is False
    assert response.json()["reason"] == "maintenance"
