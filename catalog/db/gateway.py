"""Collection gateways: the only code that talks to MongoDB collections."""
import re
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection


def parse_id(value: Any) -> ObjectId | None:
    """Return the ObjectId for a 24-char hex string, None for anything else."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class CollectionGateway:
    """find / find_by_id / find_one / create / update / delete over one collection."""

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        pass

    async def find(self, query: dict | None = None) -> list[dict]:
        return await self.collection.find(query or {}).to_list()

    async def find_one(self, query: dict) -> dict | None:
        return await self.collection.find_one(query)

    async def find_by_id(self, doc_id: str) -> dict | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def create(self, fields: dict) -> dict:
        doc = dict(fields)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def find_by_id_and_update(self, doc_id: str, fields: dict) -> dict | None:
        """Apply a partial $set and return the document after the update."""
        oid = parse_id(doc_id)
        if oid is None:
            return None
        return await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": dict(fields)},
            return_document=ReturnDocument.AFTER
        )

    async def find_by_id_and_delete(self, doc_id: str) -> dict | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        return await self.collection.find_one_and_delete({"_id": oid})


class CategoryGateway(CollectionGateway):

    async def ensure_indexes(self) -> None:
        # Makes the name check atomic; racing inserts raise DuplicateKeyError
        await self.collection.create_index([("name", ASCENDING)], unique=True)

    async def find_names(self, ids: list[ObjectId]) -> dict[ObjectId, str]:
        if not ids:
            return {}
        docs = await self.collection.find(
            {"_id": {"$in": ids}}, {"name": 1}
        ).to_list()
        return {d["_id"]: d["name"] for d in docs}


class ProductGateway(CollectionGateway):
    """Products embed their variants and reference a category by ObjectId."""

    def __init__(self, collection: AsyncCollection, categories: CategoryGateway):
        super().__init__(collection)
        self.categories = categories

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("category", ASCENDING)])

    @staticmethod
    def _to_document(fields: dict) -> dict:
        doc = dict(fields)
        if "category" in doc:
            doc["category"] = parse_id(doc["category"])
        return doc

    async def create(self, fields: dict) -> dict:
        now = datetime.now(timezone.utc)
        doc = self._to_document(fields)
        doc["created_at"] = now
        doc["updated_at"] = now
        return await super().create(doc)

    async def find_by_id_and_update(self, doc_id: str, fields: dict) -> dict | None:
        doc = self._to_document(fields)
        doc["updated_at"] = datetime.now(timezone.utc)
        return await super().find_by_id_and_update(doc_id, doc)

    async def search(self, q: str | None = None, category: str | None = None) -> list[dict]:
        """Case-insensitive name substring and/or exact category; both are ANDed."""
        query: dict[str, Any] = {}
        if q:
            query["name"] = {"$regex": re.escape(q), "$options": "i"}
        if category:
            oid = parse_id(category)
            if oid is None:
                return []
            query["category"] = oid
        return await self.find(query)

    async def find_low_stock(self, threshold: int) -> list[dict]:
        # "variants.stock" matches when any element is below the threshold
        return await self.find({
            "$or": [
                {"stock": {"$lt": threshold}},
                {"variants.stock": {"$lt": threshold}},
            ]
        })

    async def populate_category(self, docs: list[dict]) -> list[dict]:
        """Replace each category ObjectId with {"_id", "name"}."""
        ids = list({d["category"] for d in docs if isinstance(d.get("category"), ObjectId)})
        names = await self.categories.find_names(ids)

        populated = []
        for doc in docs:
            ref = doc.get("category")
            populated.append({**doc, "category": {"_id": ref, "name": names.get(ref)}})
        return populated
