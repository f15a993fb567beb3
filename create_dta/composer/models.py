"""Pydantic models for one composition run.

Defines the input record handed to the composer, the ``.dta.json`` metadata
record it persists, and the structured result it returns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PackageManager = Literal["npm", "yarn", "pnpm", "bun"]


def _iso_timestamp() -> str:
    """UTC timestamp in the ``2026-01-15T10:30:00.000Z`` form."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProjectComposition(BaseModel):
    """Validated options for one composition. Never mutated."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Directory and root package name")
    base_template_locator: str = Field(..., description="owner/repo[/subpath] to fetch")
    features: tuple[str, ...] = Field(default=(), description="Feature identifiers, applied in order")
    package_manager: PackageManager = Field(default="pnpm")
    skip_install: bool = Field(default=False)


class ProjectMetadataRecord(BaseModel):
    """Contents of ``<project>/.dta.json``.

    The serialised field names (``features``, ``baseTemplate``, ``createdAt``,
    ``cliVersion``) are read by other tooling and must not change.
    """

    model_config = ConfigDict(populate_by_name=True)

    features: list[str] = Field(default_factory=list)
    base_template: str = Field(..., alias="baseTemplate")
    created_at: str = Field(default_factory=_iso_timestamp, alias="createdAt")
    cli_version: str = Field(..., alias="cliVersion")

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class FeatureStatus(str, Enum):
    """Outcome of applying a single feature."""

    APPLIED = "applied"
    UNKNOWN_FEATURE = "unknown_feature"
    TEMPLATE_MISSING = "template_missing"


class FeatureOutcome(BaseModel):
    feature: str
    status: FeatureStatus
    source: Path | None = None
    destination: Path | None = None

    @property
    def applied(self) -> bool:
        return self.status is FeatureStatus.APPLIED


class InstallStatus(str, Enum):
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CompositionResult(BaseModel):
    """What a successful composition produced."""

    project_path: Path
    patched_manifests: list[str] = Field(default_factory=list)
    features: list[FeatureOutcome] = Field(default_factory=list)
    install_status: InstallStatus = InstallStatus.SKIPPED
    install_command: str | None = None

    @property
    def applied_features(self) -> list[str]:
        return [outcome.feature for outcome in self.features if outcome.applied]
