import pytest
from unittest.mock import AsyncMock, patch

from catalog.db.seed import CATEGORIES_DATA, PRODUCTS_DATA, seed_database


@pytest.fixture
def seed_db(database):
    database.connect = AsyncMock()
    database.disconnect = AsyncMock()
    with patch("catalog.db.seed.Database", return_value=database):
        yield database


class TestSeed:

    @pytest.mark.asyncio
    async def test_seeds_empty_database(self, seed_db):
        await seed_database()

        names = {d["name"] for d in seed_db.categories.docs.values()}
        assert names == {name for name, _ in CATEGORIES_DATA}
        assert len(seed_db.products.docs) == sum(len(p) for p in PRODUCTS_DATA.values())
        seed_db.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_products_reference_their_category(self, seed_db):
        await seed_database()

        clothing = next(d for d in seed_db.categories.docs.values() if d["name"] == "Clothing")
        shirt = next(d for d in seed_db.products.docs.values() if d["name"] == "Oxford Shirt")
        assert shirt["category"] == clothing["_id"]
        assert [v["color"] for v in shirt["variants"]] == ["white", "blue"]

    @pytest.mark.asyncio
    async def test_skips_when_already_seeded(self, seed_db):
        await seed_db.categories.create({"name": "Existing"})

        await seed_database()

        assert len(seed_db.categories.docs) == 1
        assert seed_db.products.docs == {}
