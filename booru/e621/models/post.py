"""Post data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import Rating


class PostFile(BaseModel):
    """Original file of a post. Most fields are absent for deleted posts."""

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    ext: str | None = None
    size: int | None = Field(default=None, ge=0)
    md5: str | None = None
    url: str | None = None

    model_config = ConfigDict(frozen=True)


class PostPreview(BaseModel):
    """Scaled-down rendition (preview or sample) of a post's file."""

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    url: str | None = None
    has: bool = True

    model_config = ConfigDict(frozen=True)


class PostScore(BaseModel):
    up: int = 0
    down: int = 0
    total: int = 0

    model_config = ConfigDict(frozen=True)


class PostTags(BaseModel):
    """Post tags grouped by category."""

    general: tuple[str, ...] = ()
    artist: tuple[str, ...] = ()
    copyright: tuple[str, ...] = ()
    character: tuple[str, ...] = ()
    species: tuple[str, ...] = ()
    invalid: tuple[str, ...] = ()
    meta: tuple[str, ...] = ()
    lore: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    def all(self) -> tuple[str, ...]:
        """Every tag of the post, category by category."""
        return (
            self.general
            + self.artist
            + self.copyright
            + self.character
            + self.species
            + self.invalid
            + self.meta
            + self.lore
        )


class PostFlags(BaseModel):
    pending: bool = False
    flagged: bool = False
    note_locked: bool = False
    status_locked: bool = False
    rating_locked: bool = False
    deleted: bool = False

    model_config = ConfigDict(frozen=True)


class PostRelationships(BaseModel):
    parent_id: int | None = None
    has_children: bool = False
    has_active_children: bool = False
    children: tuple[int, ...] = ()

    model_config = ConfigDict(frozen=True)


class Post(BaseModel):
    """A post (uploaded file plus its metadata)."""

    id: int = Field(..., gt=0)
    created_at: datetime
    updated_at: datetime | None = None
    file: PostFile
    preview: PostPreview | None = None
    sample: PostPreview | None = None
    score: PostScore = Field(default_factory=PostScore)
    tags: PostTags = Field(default_factory=PostTags)
    locked_tags: tuple[str, ...] = ()
    change_seq: int | None = None
    flags: PostFlags = Field(default_factory=PostFlags)
    rating: Rating
    fav_count: int = Field(default=0, ge=0)
    sources: tuple[str, ...] = ()
    pools: tuple[int, ...] = ()
    relationships: PostRelationships = Field(default_factory=PostRelationships)
    approver_id: int | None = None
    uploader_id: int | None = None
    description: str = ""
    comment_count: int = Field(default=0, ge=0)
    is_favorited: bool = False
    has_notes: bool = False
    duration: float | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_deleted(self) -> bool:
        return self.flags.deleted
