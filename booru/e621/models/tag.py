"""Tag data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import TagCategory


class Tag(BaseModel):
    """Keyword used to describe posts."""

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    post_count: int = Field(..., ge=0)
    related_tags: str = ""
    related_tags_updated_at: datetime | None = None
    category: TagCategory
    is_locked: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)
