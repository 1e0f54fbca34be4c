"""Schemas for the read-only lookup tables."""

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class FileTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    extension: str
    category_id: int | None


class FileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    file_type_id: int | None
