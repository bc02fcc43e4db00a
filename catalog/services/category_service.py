import logging

from pymongo.errors import DuplicateKeyError

from catalog.db.gateway import CategoryGateway
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.schemas.category import CategoryIn, CategoryOut
from catalog.services.validation import validate_payload

logger = logging.getLogger(__name__)

NAME_TAKEN = "Category name already exists"
NOT_FOUND = "Category not found"


class CategoryService:
    def __init__(self, categories: CategoryGateway):
        self.categories = categories

    async def create(self, payload: dict) -> CategoryOut:
        """Validate, check the name is free, then insert.

        Raises:
            AppException: VALIDATION on a bad payload, CONFLICT on a taken name
        """
        data = validate_payload(CategoryIn, payload)

        existing = await self.categories.find_one({"name": data.name})
        if existing:
            raise AppException(ErrorType.CONFLICT, NAME_TAKEN)

        try:
            doc = await self.categories.create(data.model_dump(exclude_none=True))
        except DuplicateKeyError:
            # Lost a race against a concurrent create with the same name
            raise AppException(ErrorType.CONFLICT, NAME_TAKEN)

        logger.info(f"Category created: {doc['_id']}")
        return CategoryOut.from_document(doc)

    async def list_all(self) -> list[CategoryOut]:
        docs = await self.categories.find()
        return [CategoryOut.from_document(d) for d in docs]

    async def get(self, category_id: str) -> CategoryOut:
        doc = await self.categories.find_by_id(category_id)
        if not doc:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        return CategoryOut.from_document(doc)

    async def update(self, category_id: str, payload: dict) -> CategoryOut:
        data = validate_payload(CategoryIn, payload)

        try:
            doc = await self.categories.find_by_id_and_update(
                category_id, data.model_dump(include=data.model_fields_set)
            )
        except DuplicateKeyError:
            raise AppException(ErrorType.CONFLICT, NAME_TAKEN)

        if not doc:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        logger.info(f"Category updated: {category_id}")
        return CategoryOut.from_document(doc)

    async def delete(self, category_id: str) -> dict:
        # Products referencing this category are left untouched
        deleted = await self.categories.find_by_id_and_delete(category_id)
        if not deleted:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        logger.info(f"Category deleted: {category_id}")
        return {"message": "Category deleted"}
