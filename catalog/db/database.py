import logging

from pymongo import AsyncMongoClient

from catalog.config import Config
from catalog.db.gateway import CategoryGateway, ProductGateway

logger = logging.getLogger(__name__)


class Database:
    """Handle on the MongoDB client and the catalog collection gateways.

    Constructed explicitly and passed to request handlers; nothing is usable
    until connect() has completed.
    """

    def __init__(self, uri: str | None = None, name: str | None = None):
        self.uri = uri or Config.MONGO_URI
        self.name = name or Config.MONGO_DB_NAME
        self.client: AsyncMongoClient | None = None
        self.categories: CategoryGateway | None = None
        self.products: ProductGateway | None = None

    async def connect(self):
        """Open the client, verify the server answers and create indexes."""
        self.client = AsyncMongoClient(
            self.uri,
            tz_aware=True,
            serverSelectionTimeoutMS=Config.MONGO_TIMEOUT_MS
        )
        await self.client.admin.command("ping")

        database = self.client.get_default_database(default=self.name)
        self.categories = CategoryGateway(database["categories"])
        self.products = ProductGateway(database["products"], self.categories)

        await self.categories.ensure_indexes()
        await self.products.ensure_indexes()
        logger.info(f"MongoDB connected: database={database.name}")

    async def disconnect(self):
        """Close the client."""
        if self.client:
            await self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")
