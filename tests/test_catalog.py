"""Tests for catalog endpoints"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.mark.asyncio
async def test_public_categories_hide_inactive(client: AsyncClient, test_menu):
    response = await client.get("/categories")

    assert response.status_code == 200
    assert [category["name"] for category in response.json()] == ["Lanches", "Pizzas", "Bebidas"]


@pytest.mark.asyncio
async def test_admin_sees_every_category(admin_client: AsyncClient, test_menu):
    response = await admin_client.get("/categories/all")

    assert response.status_code == 200
    assert len(response.json()) == 4


@pytest.mark.asyncio
async def test_catalog_writes_require_admin(client: AsyncClient, user_headers):
    response = await client.post("/categories", json={"name": "Doces"})
    assert response.status_code == 401

    response = await client.post("/categories", json={"name": "Doces"}, headers=user_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_category_crud(admin_client: AsyncClient):
    response = await admin_client.post("/categories", json={"name": "Doces", "sort_order": 5})
    assert response.status_code == 201
    category_id = response.json()["id"]

    response = await admin_client.put(f"/categories/{category_id}", json={"name": "Sobremesas"})
    assert response.status_code == 200
    assert response.json()["name"] == "Sobremesas"
    assert response.json()["sort_order"] == 5

    response = await admin_client.delete(f"/categories/{category_id}")
    assert response.status_code == 204

    response = await admin_client.delete(f"/categories/{category_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_category_name_is_validated(admin_client: AsyncClient):
    response = await admin_client.post("/categories", json={"name": ""})
    assert response.status_code == 422

    response = await admin_client.post("/categories", json={"name": "x" * 101})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_deleting_category_keeps_its_products(admin_client: AsyncClient, test_menu):
    burgers = test_menu["categories"]["burgers"]

    response = await admin_client.delete(f"/categories/{burgers.id}")
    assert response.status_code == 204

    response = await admin_client.get(f"/products/{test_menu['burger'].id}")
    assert response.status_code == 200
    assert response.json()["category_id"] is None
    assert response.json()["category"] is None


@pytest.mark.asyncio
async def test_public_products(client: AsyncClient, test_menu):
    response = await client.get("/products")

    assert response.status_code == 200
    names = {product["name"] for product in response.json()}
    assert names == {"Burger", "Calabresa", "Margherita", "Suco"}


@pytest.mark.asyncio
async def test_filter_products(client: AsyncClient, test_menu):
    pizzas = test_menu["categories"]["pizzas"]

    response = await client.get("/products", params={"category_id": str(pizzas.id)})
    assert {product["name"] for product in response.json()} == {"Calabresa", "Margherita"}

    response = await client.get("/products", params={"featured": "true"})
    assert [product["name"] for product in response.json()] == ["Burger"]


@pytest.mark.asyncio
async def test_product_detail(client: AsyncClient, test_menu):
    response = await client.get(f"/products/{test_menu['calabresa'].id}")

    assert response.status_code == 200
    data = response.json()
    assert data["category"]["name"] == "Pizzas"
    assert [variation["name"] for variation in data["variations"]] == ["Média", "Grande"]
    assert data["promotion"] is None


@pytest.mark.asyncio
async def test_product_carries_active_promotion(client: AsyncClient, test_menu):
    response = await client.get(f"/products/{test_menu['juice'].id}")

    assert response.json()["promotion"]["discount_percent"] == 10.0


@pytest.mark.asyncio
async def test_create_product_with_variations(admin_client: AsyncClient, test_menu):
    response = await admin_client.post(
        "/products",
        json={
            "category_id": str(test_menu["categories"]["pizzas"].id),
            "name": "Portuguesa",
            "price": 45,
            "variations": [
                {"name": "Média", "price": 45, "sort_order": 0},
                {"name": "Grande", "price": 58, "sort_order": 1},
            ],
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Portuguesa"
    assert [(v["name"], v["price"]) for v in data["variations"]] == [("Média", 45.0), ("Grande", 58.0)]

    response = await admin_client.get(f"/products/{data['id']}/variations")
    assert len(response.json()) == 2



@pytest.mark.asyncio
async def test_product_and_variations_are_written_together(admin_client: AsyncClient, test_menu, monkeypatch):
    commits = []
    commit = AsyncSession.commit

    async def counted_commit(self):
        commits.append(self)
        await commit(self)

    monkeypatch.setattr(AsyncSession, "commit", counted_commit)

    response = await admin_client.post(
        "/products",
        json={
            "category_id": str(test_menu["categories"]["pizzas"].id),
            "name": "Portuguesa",
            "price": 45,
            "variations": [
                {"name": "Média", "price": 45, "sort_order": 0},
                {"name": "Grande", "price": 58, "sort_order": 1},
            ],
        },
    )

    assert response.status_code == 201
    assert len(response.json()["variations"]) == 2
    assert len(commits) == 1


@pytest.mark.asyncio
async def test_create_product_in_unknown_category(admin_client: AsyncClient):
    response = await admin_client.post(
        "/products",
        json={"category_id": "00000000-0000-0000-0000-000000000000", "name": "X", "price": 1},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_and_delete_product(admin_client: AsyncClient, test_menu):
    product_id = test_menu["calabresa"].id

    response = await admin_client.put(f"/products/{product_id}", json={"is_featured": True, "price": 41})
    assert response.status_code == 200
    assert response.json()["is_featured"] is True
    assert response.json()["price"] == 41.0

    response = await admin_client.delete(f"/products/{product_id}")
    assert response.status_code == 204

    response = await admin_client.get(f"/products/{product_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_inactive_variations_only_for_admin(admin_client: AsyncClient, test_menu):
    product_id = test_menu["calabresa"].id
    variation_id = test_menu["calabresa_medium"].id

    response = await admin_client.put(
        f"/products/{product_id}/variations/{variation_id}",
        json={"is_active": False},
    )
    assert response.status_code == 200

    public = await admin_client.get(f"/products/{product_id}")
    assert [v["name"] for v in public.json()["variations"]] == ["Grande"]

    everything = await admin_client.get("/products/all")
    calabresa = next(p for p in everything.json() if p["id"] == str(product_id))
    assert len(calabresa["variations"]) == 2


@pytest.mark.asyncio
async def test_variation_belongs_to_product(admin_client: AsyncClient, test_menu):
    response = await admin_client.delete(
        f"/products/{test_menu['burger'].id}/variations/{test_menu['calabresa_medium'].id}"
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_new_promotion_replaces_active_one(admin_client: AsyncClient, test_menu):
    juice = test_menu["juice"]

    response = await admin_client.post(
        "/promotions",
        json={"product_id": str(juice.id), "discount_percent": 25},
    )
    assert response.status_code == 201

    response = await admin_client.get("/promotions", params={"product_id": str(juice.id)})
    active = [promotion for promotion in response.json() if promotion["is_active"]]
    assert [promotion["discount_percent"] for promotion in active] == [25.0]


@pytest.mark.asyncio
async def test_promotion_discount_is_bounded(admin_client: AsyncClient, test_menu):
    response = await admin_client.post(
        "/promotions",
        json={"product_id": str(test_menu["juice"].id), "discount_percent": 120},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_category_addons(admin_client: AsyncClient, test_menu):
    pizzas = test_menu["categories"]["pizzas"]

    response = await admin_client.post(
        "/category_addons",
        json={"category_id": str(pizzas.id), "name": "Borda de Cheddar", "price": 8, "sort_order": 1},
    )
    assert response.status_code == 201
    cheddar_id = response.json()["id"]

    response = await admin_client.put(f"/category_addons/{cheddar_id}", json={"is_active": False})
    assert response.status_code == 200

    response = await admin_client.get("/category_addons", params={"category_id": str(pizzas.id)})
    assert [addon["name"] for addon in response.json()] == ["Borda de Catupiry"]

    response = await admin_client.get("/category_addons/all", params={"category_id": str(pizzas.id)})
    assert len(response.json()) == 2

    response = await admin_client.delete(f"/category_addons/{cheddar_id}")
    assert response.status_code == 204
