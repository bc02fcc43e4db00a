from fastapi import Depends, Request

from catalog.db.database import Database
from catalog.services.category_service import CategoryService
from catalog.services.product_service import ProductService


def get_database(request: Request) -> Database:
    """The handle opened by the application lifespan."""
    return request.app.state.db


def get_category_service(database: Database = Depends(get_database)) -> CategoryService:
    return CategoryService(database.categories)


def get_product_service(database: Database = Depends(get_database)) -> ProductService:
    return ProductService(database.products, database.categories)
