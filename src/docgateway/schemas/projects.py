"""Project and branch models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Project(BaseModel):
    """Project metadata as served by the project directory."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    access_limited: bool = Field(
        default=False,
        validation_alias=AliasChoices("access_limited", "accessLimited", "isAccessLimited"),
    )


class Branch(BaseModel):
    """A named version of a project."""

    model_config = ConfigDict(extra="ignore")

    name: str


class ExportRequest(BaseModel):
    """Identifiers of one export call."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    branch_name: str
