"""Tests for price resolution"""

from uuid import uuid4

import pytest

from storefront.ordering.pricing import (
    format_money,
    is_large_size,
    line_unit_price,
    resolve_price,
    second_flavor_price,
)
from storefront.schemas.catalog import AddonResponse, ProductResponse, PromotionResponse, VariationResponse


def variation(name, price, is_active=True):
    return VariationResponse(id=uuid4(), name=name, price=price, is_active=is_active)


def product(name, price, variations=(), discount=None):
    promotion = PromotionResponse(id=uuid4(), discount_percent=discount) if discount else None
    return ProductResponse(
        id=uuid4(),
        name=name,
        price=price,
        variations=list(variations),
        promotion=promotion,
    )


def test_base_price():
    assert resolve_price(product("Burger", 20)) == 20.0


def test_promotion_discounts_base_price():
    juice = product("Suco", 10, discount=10)
    assert resolve_price(juice, None, juice.promotion) == pytest.approx(9.0)


def test_inactive_promotion_is_ignored():
    juice = product("Suco", 10)
    promotion = PromotionResponse(id=uuid4(), discount_percent=50, is_active=False)
    assert resolve_price(juice, None, promotion) == 10.0


def test_variation_price_replaces_base_and_promotion():
    large = variation("Grande", 50)
    pizza = product("Calabresa", 40, [large], discount=20)
    assert resolve_price(pizza, large, pizza.promotion) == 50.0


def test_half_and_half_costs_the_pricier_flavor():
    calabresa_large = variation("Grande", 50)
    calabresa = product("Calabresa", 40, [variation("Média", 40), calabresa_large])
    margherita = product("Margherita", 42, [variation("Média", 42), variation("Grande", 55)])

    assert second_flavor_price(margherita, calabresa_large) == 55.0
    assert line_unit_price(calabresa, calabresa_large, margherita) == 55.0
    assert line_unit_price(margherita, margherita.variations[1], calabresa) == 55.0


def test_second_flavor_without_matching_size_uses_selected_price():
    large = variation("Grande", 50)
    calabresa = product("Calabresa", 40, [large])
    plain = product("Mussarela", 60)

    assert second_flavor_price(plain, large) == 50.0


def test_second_flavor_inactive_size_is_not_matched():
    large = variation("Grande", 50)
    other = product("Atum", 45, [variation("Grande", 70, is_active=False)])

    assert second_flavor_price(other, large) == 50.0


def test_addons_are_added_to_unit_price():
    burger = product("Burger", 20)
    addons = [
        AddonResponse(id=uuid4(), name="Queijo Extra", price=3),
        AddonResponse(id=uuid4(), name="Ovo", price=2.5),
    ]
    assert line_unit_price(burger, None, None, addons) == pytest.approx(25.5)


@pytest.mark.parametrize("name,expected", [
    ("Grande", True),
    ("G", True),
    ("Pizza Grande 35cm", True),
    ("Média", False),
    ("Gigante", False),
    ("Pequena", False),
])
def test_large_size_detection(name, expected):
    assert is_large_size(variation(name, 10)) is expected


def test_no_variation_is_not_large():
    assert is_large_size(None) is False


def test_format_money():
    assert format_money(40) == "R$ 40.00"
    assert format_money(9.999) == "R$ 10.00"
