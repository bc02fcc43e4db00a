import asyncio

from catalog.db.database import Database
from catalog.schemas.category import CategoryIn
from catalog.schemas.product import ProductIn


# Sample categories
CATEGORIES_DATA = [
    ("Clothing", "Shirts, jackets and trousers"),
    ("Electronics", "Phones, laptops and accessories"),
    ("Home", "Furniture and decor"),
]

# Products per category: (name, price, stock, variants)
PRODUCTS_DATA = {
    "Clothing": [
        ("Oxford Shirt", 39.99, 25, [
            {"color": "white", "size": "M", "price": 39.99, "stock": 12},
            {"color": "blue", "size": "L", "price": 39.99, "stock": 4},
        ]),
        ("Denim Jacket", 89.99, 8, []),
        ("Linen Trousers", 59.99, 30, [
            {"color": "beige", "size": "32", "price": 59.99, "stock": 15},
        ]),
    ],
    "Electronics": [
        ("Wireless Earbuds", 129.99, 40, []),
        ("USB-C Charger", 24.99, 6, []),
    ],
    "Home": [
        ("Standing Desk", 399.99, 12, [
            {"color": "oak", "price": 399.99, "stock": 10},
            {"color": "walnut", "price": 449.99, "stock": 2},
        ]),
        ("Office Chair", 299.99, 15, []),
    ],
}


async def seed_database():
    database = Database()
    await database.connect()

    try:
        # Check if data exists
        if await database.categories.find_one({}):
            print("Database already seeded")
            return

        for name, description in CATEGORIES_DATA:
            category = CategoryIn(name=name, description=description)
            doc = await database.categories.create(category.model_dump(exclude_none=True))

            for product_name, price, stock, variants in PRODUCTS_DATA.get(name, []):
                product = ProductIn(
                    name=product_name,
                    price=price,
                    stock=stock,
                    category=str(doc["_id"]),
                    variants=variants
                )
                await database.products.create(product.model_dump(exclude_none=True))

        print("Database seeded successfully!")
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(seed_database())
