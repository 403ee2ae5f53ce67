"""Post Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - PostCreate.title / content: stripped, non-empty
    - PostUpdate keeps "absent" and "present" apart via model_fields_set;
      only present fields reach the PostPatch
    - An explicit null is rejected for every PostUpdate field; [] clears tags
    - Responses mirror the Post snapshot keys (id, title, content, tags, created_at)

Design Decisions:
    - model_fields_set over Optional-means-unset: the HTTP body is the only place the
      distinction exists, so it is resolved here and nowhere else
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from datetime import datetime

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator,
)

from app.core.post_types import Post, PostPatch, PostRead


def _strip_non_empty(v: str, name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{name} cannot be empty or whitespace")
    return v


class PostCreate(BaseModel):
    """Post creation — title and content required, tags optional."""
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_non_empty(v, "title")

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        return _strip_non_empty(v, "content")


class PostUpdate(BaseModel):
    """Partial post update — every field optional, none nullable."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None

    @model_validator(mode="after")
    def reject_explicit_null(self) -> "PostUpdate":
        nulls = [
            name for name in self.model_fields_set
            if getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(sorted(nulls))}")
        return self

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is None:
            return v
        return _strip_non_empty(v, info.field_name)

    def to_patch(self) -> PostPatch:
        return PostPatch(**{
            name: getattr(self, name) for name in self.model_fields_set
        })


class PostResponse(BaseModel):
    """Post response — public-facing post snapshot."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    tags: list[str]
    created_at: datetime | None = None

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls.model_validate(post)


class PostReadResponse(BaseModel):
    """Cache-aside read response — `cached` tells where the payload came from."""
    cached: bool
    data: PostResponse

    @classmethod
    def from_read(cls, read: PostRead) -> "PostReadResponse":
        return cls(cached=read.cached, data=PostResponse.from_post(read.post))
