"""Pinned package versions written into generated manifests."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DependencyGroup = Literal["dependencies", "devDependencies"]


class VersionCatalog(BaseModel):
    """Package name -> pinned version, split by manifest group."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    def group(self, group: DependencyGroup) -> dict[str, str]:
        """Return the mapping backing a manifest group."""
        if group == "dependencies":
            return self.dependencies
        if group == "devDependencies":
            return self.dev_dependencies
        raise ValueError(f"Unknown dependency group: {group!r}")

    def version_for(self, group: DependencyGroup, package: str) -> str | None:
        """Return the pinned version of *package* in *group*, or ``None``."""
        return self.group(group).get(package)


VERSION_CATALOG = VersionCatalog(
    dependencies={
        "next": "^16.0.1",
        "react": "^19.2.0",
        "react-dom": "^19.2.0",
    },
    devDependencies={
        "@next/eslint-plugin-next": "^16.0.1",
        "@tailwindcss/postcss": "^4.1.16",
        "@types/node": "^22.18.12",
        "@types/react": "^19.2.2",
        "@types/react-dom": "^19.2.2",
        "eslint": "^9.38.0",
        "eslint-config-prettier": "^10.1.8",
        "eslint-plugin-react": "^7.37.5",
        "eslint-plugin-react-hooks": "^7.0.1",
        "postcss": "^8.5.6",
        "prettier": "^3.6.2",
        "tailwindcss": "^4.1.16",
        "turbo": "^2.5.8",
        "typescript": "5.9.3",
        "typescript-eslint": "^8.46.2",
    },
)


def version_for(group: DependencyGroup, package: str) -> str | None:
    """Look up a pinned version in the default catalog."""
    return VERSION_CATALOG.version_for(group, package)
