"""Table of contents models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ChapterNode(BaseModel):
    """A chapter in a project's table of contents.

    Leaf-like nodes reference a document through ``url``; any node may
    carry a title and ordered children.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, validation_alias=AliasChoices("title", "name"))
    url: str | None = None
    children: list["ChapterNode"] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def normalize_children(cls, v: list | None) -> list:
        """Treat a missing children list as empty."""
        return v or []
