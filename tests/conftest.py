"""Test configuration and fixtures"""

import time
from datetime import datetime
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.main import app
from storefront.config import settings
from storefront.database import Base, get_db
from storefront.models import (
    Category,
    CategoryAddon,
    Order,
    Product,
    ProductVariation,
    Promotion,
    Role,
    StoreSettings,
    UserRole,
)


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_token(user_id, email="user@example.com", audience=None, expires_in=3600):
    """Access token shaped like the identity provider's"""
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": "authenticated",
        "aud": audience or settings.auth_jwt_audience,
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


@pytest.fixture
async def test_engine():
    """Create test database"""
    # One shared connection so every session sees the same in-memory database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    """Create test client with a fresh database session per request"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user_id(session_factory):
    """Identity provider user holding the admin role"""
    user_id = uuid4()
    async with session_factory() as db:
        db.add(UserRole(user_id=user_id, role=Role.ADMIN))
        await db.commit()
    return user_id


@pytest.fixture
def admin_headers(admin_user_id):
    return {"Authorization": f"Bearer {make_token(admin_user_id, email='admin@example.com')}"}


@pytest.fixture
def user_headers():
    """Signed-in customer without any role"""
    return {"Authorization": f"Bearer {make_token(uuid4())}"}


@pytest.fixture
async def admin_client(client, admin_headers):
    """Create admin authenticated test client"""
    client.headers.update(admin_headers)
    return client


@pytest.fixture
async def test_menu(session_factory):
    """Burgers, pizzas with sizes and a border add-on, and a discounted juice"""
    async with session_factory() as db:
        burgers = Category(name="Lanches", sort_order=1)
        pizzas = Category(name="Pizzas", sort_order=2)
        drinks = Category(name="Bebidas", sort_order=3)
        hidden = Category(name="Sazonais", sort_order=4, is_active=False)
        db.add_all([burgers, pizzas, drinks, hidden])
        await db.flush()

        burger = Product(category_id=burgers.id, name="Burger", price=20.00, is_featured=True)
        calabresa = Product(category_id=pizzas.id, name="Calabresa", price=40.00)
        margherita = Product(category_id=pizzas.id, name="Margherita", price=42.00)
        juice = Product(category_id=drinks.id, name="Suco", price=10.00)
        retired = Product(category_id=burgers.id, name="Burger Antigo", price=15.00, is_active=False)
        db.add_all([burger, calabresa, margherita, juice, retired])
        await db.flush()

        calabresa_medium = ProductVariation(product_id=calabresa.id, name="Média", price=40.00, sort_order=0)
        calabresa_large = ProductVariation(product_id=calabresa.id, name="Grande", price=50.00, sort_order=1)
        margherita_medium = ProductVariation(product_id=margherita.id, name="Média", price=42.00, sort_order=0)
        margherita_large = ProductVariation(product_id=margherita.id, name="Grande", price=55.00, sort_order=1)
        border = CategoryAddon(category_id=pizzas.id, name="Borda de Catupiry", price=8.00)
        promotion = Promotion(product_id=juice.id, discount_percent=10)
        db.add_all([
            calabresa_medium,
            calabresa_large,
            margherita_medium,
            margherita_large,
            border,
            promotion,
        ])
        await db.commit()

    return {
        "categories": {"burgers": burgers, "pizzas": pizzas, "drinks": drinks, "hidden": hidden},
        "burger": burger,
        "calabresa": calabresa,
        "margherita": margherita,
        "juice": juice,
        "retired": retired,
        "calabresa_medium": calabresa_medium,
        "calabresa_large": calabresa_large,
        "margherita_large": margherita_large,
        "border": border,
        "promotion": promotion,
    }


@pytest.fixture
async def store_settings(session_factory):
    """Configured store open from 18:00 to 02:00"""
    async with session_factory() as db:
        row = StoreSettings(
            whatsapp_number="5511988887777",
            store_name="Espaço Imperial",
            delivery_fee=5.00,
            is_open=True,
            pix_key="pedidos@espacoimperial.com.br",
            opening_time="18:00",
            closing_time="02:00",
            closed_message="Abrimos às 18h!",
        )
        db.add(row)
        await db.commit()
    return row


@pytest.fixture
def evening(monkeypatch):
    """Pin the checkout clock inside opening hours"""
    import storefront.api.checkout as checkout_api

    monkeypatch.setattr(checkout_api, "local_now", lambda timezone: datetime(2026, 3, 6, 20, 30))


@pytest.fixture
async def test_order(session_factory):
    """Pending pickup order for two burgers"""
    async with session_factory() as db:
        order = Order(
            order_number="123456789",
            customer_name="Ana",
            customer_phone="(11) 99999-0000",
            order_type="pickup",
            items_json=[{"name": "Burger", "quantity": 2, "subtotal": 40.0, "addons": []}],
            subtotal=40.00,
            delivery_fee=0,
            total=40.00,
            payment_method="card",
            status="pending",
        )
        db.add(order)
        await db.commit()
    return order
