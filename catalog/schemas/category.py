from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CategoryIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: TrimmedStr
    description: TrimmedStr = None


class CategoryOut(BaseModel):
    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "CategoryOut":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            description=doc.get("description")
        )
