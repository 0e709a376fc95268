#!/usr/bin/env python3
"""
Seed script to create a demo store with a small menu

Usage: python scripts/seed_demo.py [ADMIN_USER_ID]

ADMIN_USER_ID is the identity provider's user id to grant the admin role.
"""

import asyncio
import sys
import uuid


async def seed_demo_data(admin_user_id=None):
    """Seed demo data for development"""
    from sqlalchemy import select

    from storefront.database import SessionLocal, engine, Base
    from storefront.models import (
        Category,
        CategoryAddon,
        Product,
        ProductVariation,
        Promotion,
        Role,
        StoreSettings,
        UserRole,
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        result = await db.execute(select(StoreSettings).limit(1))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating store settings...")

        db.add(StoreSettings(
            whatsapp_number="5511999999999",
            store_name="Espaço Imperial",
            store_address="Rua das Flores, 123 - Centro",
            delivery_fee=5.00,
            is_open=True,
            pix_key="pedidos@espacoimperial.com.br",
            opening_time="18:00",
            closing_time="02:00",
            closed_message="Estamos fechados agora. Abrimos às 18h!",
        ))

        print("Creating menu...")

        menu = [
            {
                "name": "Pizzas",
                "sort_order": 1,
                "addons": [("Borda de Catupiry", 8.00), ("Borda de Cheddar", 8.00), ("Bacon Extra", 5.00)],
                "products": [
                    {"name": "Calabresa", "description": "Calabresa fatiada, cebola e azeitonas", "price": 40.00, "featured": True},
                    {"name": "Margherita", "description": "Mussarela, tomate e manjericão", "price": 42.00},
                    {"name": "Portuguesa", "description": "Presunto, ovos, cebola, ervilha e mussarela", "price": 45.00},
                    {"name": "Quatro Queijos", "description": "Mussarela, provolone, parmesão e gorgonzola", "price": 48.00, "promotion": 10},
                ],
                "sizes": [("Pequena", 0.75), ("Média", 1.0), ("Grande", 1.3)],
            },
            {
                "name": "Burgers",
                "sort_order": 2,
                "addons": [("Queijo Extra", 3.00), ("Ovo", 2.50)],
                "products": [
                    {"name": "Burger Clássico", "description": "Pão, carne 150g, queijo e salada", "price": 20.00, "featured": True},
                    {"name": "Burger Duplo", "description": "Duas carnes 150g, cheddar e bacon", "price": 28.00},
                ],
            },
            {
                "name": "Bebidas",
                "sort_order": 3,
                "products": [
                    {"name": "Refrigerante Lata", "description": "Coca-Cola, Guaraná ou Fanta", "price": 6.00},
                    {"name": "Suco Natural", "description": "Laranja, limão ou maracujá", "price": 9.00},
                ],
            },
        ]

        product_count = 0
        for category_data in menu:
            category = Category(name=category_data["name"], sort_order=category_data["sort_order"])
            db.add(category)
            await db.flush()

            for sort_order, (name, price) in enumerate(category_data.get("addons", [])):
                db.add(CategoryAddon(category_id=category.id, name=name, price=price, sort_order=sort_order))

            for item in category_data["products"]:
                product = Product(
                    category_id=category.id,
                    name=item["name"],
                    description=item["description"],
                    price=item["price"],
                    is_featured=item.get("featured", False),
                )
                db.add(product)
                await db.flush()
                product_count += 1

                for sort_order, (size, factor) in enumerate(category_data.get("sizes", [])):
                    db.add(ProductVariation(
                        product_id=product.id,
                        name=size,
                        price=round(item["price"] * factor, 2),
                        sort_order=sort_order,
                    ))

                if item.get("promotion"):
                    db.add(Promotion(product_id=product.id, discount_percent=item["promotion"]))

        if admin_user_id:
            db.add(UserRole(user_id=uuid.UUID(admin_user_id), role=Role.ADMIN))

        await db.commit()

        print(f"""
Demo data created successfully!

Store: Espaço Imperial
  Hours: 18:00 - 02:00
  WhatsApp: 5511999999999

Menu: {len(menu)} categories, {product_count} products
Admin: {admin_user_id or "none granted (pass a user id to grant one)"}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data(sys.argv[1] if len(sys.argv) > 1 else None))
