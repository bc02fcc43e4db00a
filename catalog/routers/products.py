import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from catalog.dependencies import get_product_service
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.responses import send_success
from catalog.schemas.envelope import ErrorResponse, MessageOut, SuccessResponse
from catalog.schemas.product import ProductOut
from catalog.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

SERVER_ERROR = "Server error"


@router.get("", response_model=SuccessResponse[list[ProductOut]])
async def list_products(service: ProductService = Depends(get_product_service)):
    try:
        products = await service.list_all()
        return send_success(products)
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.post("", status_code=201, response_model=SuccessResponse[ProductOut])
async def create_product(
    payload: dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service)
):
    try:
        product = await service.create(payload)
        return send_success(product, status_code=201)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


# Registered before /{product_id} so the literal paths win
@router.get("/search", response_model=SuccessResponse[list[ProductOut]])
async def search_products(
    q: str | None = Query(None, description="Case-insensitive substring of the product name"),
    category: str | None = Query(None, description="Category id"),
    service: ProductService = Depends(get_product_service)
):
    try:
        products = await service.search(q=q, category=category)
        return send_success(products)
    except Exception as e:
        logger.error(f"Error searching products: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.get("/low-stock", response_model=SuccessResponse[list[ProductOut]])
async def low_stock_products(service: ProductService = Depends(get_product_service)):
    try:
        products = await service.low_stock()
        return send_success(products)
    except Exception as e:
        logger.error(f"Error fetching low-stock products: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.get("/{product_id}", response_model=SuccessResponse[ProductOut])
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        product = await service.get(product_id)
        return send_success(product)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error fetching product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.put("/{product_id}", response_model=SuccessResponse[ProductOut])
async def update_product(
    product_id: str,
    payload: dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service)
):
    try:
        product = await service.update(product_id, payload)
        return send_success(product)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error updating product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.delete("/{product_id}", response_model=SuccessResponse[MessageOut])
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        result = await service.delete(product_id)
        return send_success(result)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error deleting product: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)
