"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PostFields(BaseModel):
    """Text fields of a create or edit request, collected from multipart form data."""

    title: str | None = None
    category: str | None = None
    description: str | None = None


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    category: str
    description: str
    creator_id: int
    thumbnail: str
    created_at: datetime
    updated_at: datetime
