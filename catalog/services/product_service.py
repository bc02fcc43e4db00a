import logging

from catalog.db.gateway import CategoryGateway, ProductGateway
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.schemas.product import ProductIn, ProductOut
from catalog.services.validation import validate_payload

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 10

NOT_FOUND = "Product not found"
CATEGORY_NOT_FOUND = "Category not found"


class ProductService:
    def __init__(self, products: ProductGateway, categories: CategoryGateway):
        self.products = products
        self.categories = categories

    async def _require_category(self, category_id: str) -> None:
        category = await self.categories.find_by_id(category_id)
        if not category:
            raise AppException(ErrorType.NOT_FOUND, CATEGORY_NOT_FOUND)

    async def _render(self, docs: list[dict]) -> list[ProductOut]:
        populated = await self.products.populate_category(docs)
        return [ProductOut.from_document(d) for d in populated]

    async def create(self, payload: dict) -> ProductOut:
        """Validated write: schema, then category reference, then insert.

        Raises:
            AppException: VALIDATION on a bad payload, NOT_FOUND when the
                category does not exist
        """
        data = validate_payload(ProductIn, payload)
        await self._require_category(data.category)

        doc = await self.products.create(data.model_dump(exclude_none=True))
        logger.info(f"Product created: {doc['_id']}")

        [product] = await self._render([doc])
        return product

    async def update(self, product_id: str, payload: dict) -> ProductOut:
        data = validate_payload(ProductIn, payload)
        await self._require_category(data.category)

        # Only the fields present in the body are written
        doc = await self.products.find_by_id_and_update(
            product_id, data.model_dump(include=data.model_fields_set)
        )
        if not doc:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        logger.info(f"Product updated: {product_id}")

        [product] = await self._render([doc])
        return product

    async def delete(self, product_id: str) -> dict:
        deleted = await self.products.find_by_id_and_delete(product_id)
        if not deleted:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        logger.info(f"Product deleted: {product_id}")
        return {"message": "Product deleted"}

    async def list_all(self) -> list[ProductOut]:
        return await self._render(await self.products.find())

    async def get(self, product_id: str) -> ProductOut:
        doc = await self.products.find_by_id(product_id)
        if not doc:
            raise AppException(ErrorType.NOT_FOUND, NOT_FOUND)
        [product] = await self._render([doc])
        return product

    async def search(self, q: str | None = None, category: str | None = None) -> list[ProductOut]:
        docs = await self.products.search(q=q, category=category)
        return await self._render(docs)

    async def low_stock(self) -> list[ProductOut]:
        docs = await self.products.find_low_stock(LOW_STOCK_THRESHOLD)
        return await self._render(docs)
