"""Registry document schemas using Pydantic.

This module defines the shape of model.json and versions/<version>.json
documents in the models registry. Field aliases follow the camelCase keys
used on disk and are the only accepted spelling: a snake_case key such as
created_at is kept as an unknown extra and does not satisfy createdAt.
Unknown keys are passed through untouched.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thynkai.config import DEFAULT_OWNER, DEFAULT_OWNER_NAME
from thynkai.formats import PLACEHOLDER_DIGEST, is_iso_date, is_semver, is_sha256_digest


class Modality(str, Enum):
    """Media type a model entry targets."""

    TEXT = "text"
    VISION = "vision"
    MULTIMODAL = "multimodal"


class Owner(BaseModel):
    """Contributor that owns a model entry."""

    model_config = ConfigDict(extra="allow")

    contributor_id: str = Field(
        default=DEFAULT_OWNER,
        alias="contributorId",
        description="Contributor identifier",
    )
    display_name: str = Field(
        default=DEFAULT_OWNER_NAME,
        alias="displayName",
        description="Human-readable owner name",
    )


class ModelEntry(BaseModel):
    """Root schema for model.json files.

    Fields are declared in the order the validator reports them, so the first
    validation error always names the first failing field.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="Canonical identifier, recommended org/name")
    name: str = Field(description="Display name")
    modality: Modality = Field(description="Modality, must match the models/<modality>/ folder")
    owner: dict[str, Any] = Field(description="Owner object (shape unchecked)")
    created_at: str = Field(alias="createdAt", description="ISO 8601 creation date")
    version: str = Field(description="Current version, must have a versions/<version>.json file")

    @field_validator("id", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only strings."""
        if not v.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: str) -> str:
        """Require an ISO 8601 date."""
        if not is_iso_date(v):
            msg = "must be an ISO 8601 date"
            raise ValueError(msg)
        return v

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Require a SemVer version string."""
        if not is_semver(v):
            msg = "must be SemVer (MAJOR.MINOR.PATCH)"
            raise ValueError(msg)
        return v


class BuiltWith(BaseModel):
    """Toolchain the artifact was built with."""

    model_config = ConfigDict(extra="allow")

    framework: str = Field(default="TODO", description="Training/inference framework")
    runtime: str = Field(default="TODO", description="Runtime environment")
    notes: str = Field(default="TODO", description="Free-form build notes")


class Artifact(BaseModel):
    """Pointer to the released model artifact."""

    model_config = ConfigDict(extra="allow")

    uri: str = Field(default="TODO", description="Where the artifact can be fetched")
    digest: str | None = Field(default=PLACEHOLDER_DIGEST, description="sha256:<64 hex>")
    built_with: BuiltWith = Field(
        default_factory=BuiltWith,
        alias="builtWith",
        description="Build toolchain",
    )

    @field_validator("digest")
    @classmethod
    def validate_digest(cls, v: str | None) -> str | None:
        """Require sha256:<64 hex> when a digest is given."""
        if v is not None and not is_sha256_digest(v):
            msg = "must be sha256: followed by 64 hex characters"
            raise ValueError(msg)
        return v


class VersionEntry(BaseModel):
    """Root schema for versions/<version>.json files."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    model_id: str = Field(alias="modelId", description="Owning model's id")
    version: str = Field(description="SemVer, must equal the file name stem")
    released_at: str = Field(alias="releasedAt", description="ISO 8601 release date")
    artifact: Artifact = Field(default_factory=Artifact, description="Released artifact")
    benchmarks: list[Any] = Field(default_factory=list, description="Benchmark results")

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Require a SemVer version string."""
        if not is_semver(v):
            msg = "must be SemVer (MAJOR.MINOR.PATCH)"
            raise ValueError(msg)
        return v
