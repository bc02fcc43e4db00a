from datetime import datetime
from typing import Annotated, Any

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from catalog.schemas.category import TrimmedStr


def _check_object_id(value: str) -> str:
    if len(value) != 24 or not ObjectId.is_valid(value):
        raise ValueError("must be a valid 24 character hex id")
    return value


ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


def _reject_bool_number(value: Any) -> Any:
    # Lax mode would read true/false as 1/0
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


def _reject_bool_integer(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    return value


Number = Annotated[float, BeforeValidator(_reject_bool_number)]
Integer = Annotated[int, BeforeValidator(_reject_bool_integer)]


class VariantIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Omitted is fine, explicit null is not
    color: str = None
    size: str = None
    price: Number = Field(..., gt=0, allow_inf_nan=False)
    stock: Integer = Field(0, ge=0)


class ProductIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: TrimmedStr
    description: TrimmedStr = None
    price: Number = Field(..., gt=0, allow_inf_nan=False)
    stock: Integer = Field(0, ge=0)
    category: ObjectIdStr
    variants: list[VariantIn] = Field(default_factory=list)
    discount: Number = Field(0, ge=0, le=100, allow_inf_nan=False)


class VariantOut(BaseModel):
    color: str | None = None
    size: str | None = None
    price: float
    stock: int = 0


class CategoryRef(BaseModel):
    id: str
    # None when the referenced category has been deleted
    name: str | None = None


class ProductOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    stock: int = 0
    category: CategoryRef
    variants: list[VariantOut] = []
    discount: float = 0
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(None, serialization_alias="updatedAt")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ProductOut":
        """Build from a stored product, populated or not."""
        category = doc.get("category")
        if isinstance(category, dict):
            ref = CategoryRef(id=str(category["_id"]), name=category.get("name"))
        else:
            ref = CategoryRef(id=str(category))

        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            description=doc.get("description"),
            price=doc["price"],
            stock=doc.get("stock", 0),
            category=ref,
            variants=[VariantOut(**v) for v in doc.get("variants", [])],
            discount=doc.get("discount", 0),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at")
        )
