"""create-dta configuration.

Centralised, typed configuration for the composer. Settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from create_dta import __version__

# Pre-authored feature packages shipped with the tool.
DEFAULT_FEATURES_DIR = Path(__file__).parent / "features"

# Manifests present in the Turborepo example templates.
DEFAULT_MANIFEST_PATHS: list[str] = [
    "package.json",
    "apps/docs/package.json",
    "apps/web/package.json",
    "packages/ui/package.json",
    "packages/eslint-config/package.json",
    "packages/typescript-config/package.json",
]

PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "yarn", "pnpm", "bun")


class Config(BaseModel):
    """Global create-dta configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the ``ProjectComposer``.
    """

    manifest_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MANIFEST_PATHS),
        description="Manifest paths (relative to the project root) patched to pinned versions",
    )
    features_dir: Path = Field(
        default=DEFAULT_FEATURES_DIR,
        description="Directory holding one sub-directory per feature package",
    )
    metadata_filename: str = Field(default=".dta.json")
    readme_filename: str = Field(default="README.md")
    initial_version: str = Field(default="0.1.0")
    cli_version: str = Field(default=__version__)
    default_template: str = Field(default="with-tailwind")
    default_package_manager: str = Field(default="pnpm")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_DTA_FEATURES_DIR, CREATE_DTA_MANIFEST_PATHS,
            CREATE_DTA_PACKAGE_MANAGER, CREATE_DTA_DEFAULT_TEMPLATE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_DTA_FEATURES_DIR"):
            kwargs["features_dir"] = Path(os.environ["CREATE_DTA_FEATURES_DIR"])
        if os.environ.get("CREATE_DTA_MANIFEST_PATHS"):
            raw_paths = os.environ["CREATE_DTA_MANIFEST_PATHS"]
            kwargs["manifest_paths"] = [p.strip() for p in raw_paths.split(",") if p.strip()]
        if os.environ.get("CREATE_DTA_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["CREATE_DTA_PACKAGE_MANAGER"]
        if os.environ.get("CREATE_DTA_DEFAULT_TEMPLATE"):
            kwargs["default_template"] = os.environ["CREATE_DTA_DEFAULT_TEMPLATE"]
        return cls(**kwargs)
