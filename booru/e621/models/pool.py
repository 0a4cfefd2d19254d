"""Pool data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import PoolCategory


class Pool(BaseModel):
    """An ordered group of posts."""

    id: int = Field(..., gt=0)
    name: str
    created_at: datetime
    updated_at: datetime
    creator_id: int
    description: str = ""
    is_active: bool
    category: PoolCategory
    is_deleted: bool = False
    post_ids: tuple[int, ...] = ()
    creator_name: str
    post_count: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)
