"""Data models for API records.

Architecture:
    This module exports the Pydantic v2 models decoded from API responses.
    All models are immutable (frozen=True); once yielded to the caller a
    record is never modified by the library.

Model Categories:
    - Records: Post, Pool, Tag
    - Post parts: PostFile, PostPreview, PostScore, PostTags, PostFlags,
      PostRelationships
    - Transport: Page (records of one response plus exhaustion flag)
"""

from .page import Page
from .pool import Pool
from .post import (
    Post,
    PostFile,
    PostFlags,
    PostPreview,
    PostRelationships,
    PostScore,
    PostTags,
)
from .tag import Tag

__all__ = [
    "Page",
    "Pool",
    "Post",
    "PostFile",
    "PostFlags",
    "PostPreview",
    "PostRelationships",
    "PostScore",
    "PostTags",
    "Tag",
]
