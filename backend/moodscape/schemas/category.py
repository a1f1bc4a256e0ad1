"""Mood category schemas."""

from pydantic import BaseModel, Field


class CategoryIn(BaseModel):
    """Category to insert; a given id replaces the row with that id."""

    id: int | None = None
    name: str = Field(min_length=1, max_length=255)
    color: str = Field(min_length=1, max_length=16, description="Hex color, e.g. #FFAA00")


class Category(BaseModel):
    id: int
    name: str
    color: str

    model_config = {"from_attributes": True, "frozen": True}
