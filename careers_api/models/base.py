from bson import ObjectId
from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base for values handed between DAOs and services."""

    model_config = ConfigDict(frozen=True)


def new_id() -> str:
    return str(ObjectId())


def to_object_id(value: str):
    """Return ``ObjectId(value)``, or ``None`` when ``value`` is not a valid id."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
