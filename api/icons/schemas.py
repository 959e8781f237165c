"""
Icon record model and naming helpers.
"""

from __future__ import annotations

import re
import time

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CATEGORY = "objects"

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9-]")


def slugify(name: str) -> str:
    """
    Icon id from a display name: lowercase, whitespace runs to one hyphen,
    anything outside [a-z0-9-] dropped.

    >>> slugify("My Icon!")
    'my-icon'
    """
    slug = _WHITESPACE_RE.sub("-", (name or "").lower())
    return _NON_SLUG_RE.sub("", slug)


def display_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def now_ms() -> int:
    return int(time.time() * 1000)


class Icon(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    category: str = DEFAULT_CATEGORY
    tags: list[str] = Field(default_factory=list)
    path: str = Field(..., min_length=1)
    generated: bool = False
    generated_at: int | None = Field(default=None, alias="generatedAt")

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CATEGORY
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value: object) -> object:
        return [] if value is None else value

    def as_generated(self, *, at: int | None = None) -> "Icon":
        """
        Copy of this record stamped as model-produced. A record that is
        already generated keeps its own timestamp unless `at` is given.
        """
        if at is None:
            at = self.generated_at if self.generated and self.generated_at is not None else now_ms()
        return self.model_copy(update={"generated": True, "generated_at": at})

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class CreateIconRequest(BaseModel):
    """
    Body of POST /icons. Every field is optional here so that a missing id or
    path is reported as "Invalid icon data." rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    name: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    path: str | None = None
    generated: bool | None = None
    generated_at: int | None = Field(default=None, alias="generatedAt")
