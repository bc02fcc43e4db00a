import copy
import re
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError

from catalog.db.gateway import parse_id
from catalog.dependencies import get_database
from catalog.main import app


class InMemoryGateway:
    """Dict-backed stand-in for a collection gateway (equality queries only)."""

    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    async def find(self, query=None):
        return [copy.deepcopy(d) for d in self.docs.values() if self._matches(d, query or {})]

    async def find_one(self, query):
        found = await self.find(query)
        return found[0] if found else None

    async def find_by_id(self, doc_id):
        oid = parse_id(doc_id)
        return copy.deepcopy(self.docs[oid]) if oid in self.docs else None

    async def create(self, fields):
        doc = {"_id": ObjectId(), **copy.deepcopy(fields)}
        self.docs[doc["_id"]] = doc
        return copy.deepcopy(doc)

    async def find_by_id_and_update(self, doc_id, fields):
        oid = parse_id(doc_id)
        if oid not in self.docs:
            return None
        self.docs[oid].update(copy.deepcopy(fields))
        return copy.deepcopy(self.docs[oid])

    async def find_by_id_and_delete(self, doc_id):
        oid = parse_id(doc_id)
        return self.docs.pop(oid, None)


class InMemoryCategoryGateway(InMemoryGateway):

    def _check_name(self, name, own_id=None):
        for oid, doc in self.docs.items():
            if doc["name"] == name and oid != own_id:
                raise DuplicateKeyError("E11000 duplicate key error collection: categories index: name_1")

    async def create(self, fields):
        self._check_name(fields["name"])
        return await super().create(fields)

    async def find_by_id_and_update(self, doc_id, fields):
        if "name" in fields:
            self._check_name(fields["name"], parse_id(doc_id))
        return await super().find_by_id_and_update(doc_id, fields)

    async def find_names(self, ids):
        return {oid: self.docs[oid]["name"] for oid in ids if oid in self.docs}


class InMemoryProductGateway(InMemoryGateway):

    def __init__(self, categories: InMemoryCategoryGateway):
        super().__init__()
        self.categories = categories

    async def create(self, fields):
        now = datetime.now(timezone.utc)
        doc = {**fields, "category": parse_id(fields["category"]), "created_at": now, "updated_at": now}
        return await super().create(doc)

    async def find_by_id_and_update(self, doc_id, fields):
        doc = dict(fields, updated_at=datetime.now(timezone.utc))
        if "category" in doc:
            doc["category"] = parse_id(doc["category"])
        return await super().find_by_id_and_update(doc_id, doc)

    async def search(self, q=None, category=None):
        docs = await self.find()
        if q:
            docs = [d for d in docs if re.search(re.escape(q), d["name"], re.IGNORECASE)]
        if category:
            oid = parse_id(category)
            docs = [d for d in docs if d["category"] == oid]
        return docs

    async def find_low_stock(self, threshold):
        return [
            d for d in await self.find()
            if d["stock"] < threshold or any(v["stock"] < threshold for v in d["variants"])
        ]

    async def populate_category(self, docs):
        names = await self.categories.find_names([d["category"] for d in docs])
        return [{**d, "category": {"_id": d["category"], "name": names.get(d["category"])}} for d in docs]


@pytest.fixture
def database():
    """In-memory replacement for the Database handle."""
    categories = InMemoryCategoryGateway()
    products = InMemoryProductGateway(categories)
    return SimpleNamespace(categories=categories, products=products)


@pytest.fixture
async def client(database):
    """Async test client wired to the in-memory database."""
    app.dependency_overrides[get_database] = lambda: database

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def category(database):
    """A stored category document."""
    return await database.categories.create({"name": "Clothing", "description": "Apparel"})


@pytest.fixture
def product_payload():
    """Builds a valid product body for a category id."""
    def build(category_id, **overrides) -> dict:
        payload = {
            "name": "Oxford Shirt",
            "description": "Cotton shirt",
            "price": 39.99,
            "stock": 20,
            "category": str(category_id),
            "variants": [{"color": "white", "size": "M", "price": 39.99, "stock": 12}],
            "discount": 10,
        }
        payload.update(overrides)
        return payload
    return build
