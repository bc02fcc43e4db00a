import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from catalog.dependencies import get_category_service
from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.responses import send_success
from catalog.schemas.category import CategoryOut
from catalog.schemas.envelope import ErrorResponse, MessageOut, SuccessResponse
from catalog.services.category_service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

SERVER_ERROR = "Server error"


@router.get("", response_model=SuccessResponse[list[CategoryOut]])
async def list_categories(service: CategoryService = Depends(get_category_service)):
    try:
        categories = await service.list_all()
        return send_success(categories)
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.post("", status_code=201, response_model=SuccessResponse[CategoryOut])
async def create_category(
    payload: dict[str, Any] = Body(...),
    service: CategoryService = Depends(get_category_service)
):
    try:
        category = await service.create(payload)
        return send_success(category, status_code=201)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.get("/{category_id}", response_model=SuccessResponse[CategoryOut])
async def get_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    try:
        category = await service.get(category_id)
        return send_success(category)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error fetching category: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.put("/{category_id}", response_model=SuccessResponse[CategoryOut])
async def update_category(
    category_id: str,
    payload: dict[str, Any] = Body(...),
    service: CategoryService = Depends(get_category_service)
):
    try:
        category = await service.update(category_id, payload)
        return send_success(category)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error updating category: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)


@router.delete("/{category_id}", response_model=SuccessResponse[MessageOut])
async def delete_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    try:
        result = await service.delete(category_id)
        return send_success(result)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, SERVER_ERROR)
