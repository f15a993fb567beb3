"""Shared pytest fixtures for the create-dta test suite.

Provides reusable fixtures for:
- A minimal Turborepo template tree (what a fetch would produce)
- Stub fetch / install collaborators that record their invocations
- A private feature-package directory
- A composer wired to all of the above
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_dta.catalog.versions import VersionCatalog
from create_dta.composer import ProjectComposer, TemplateFetchError
from create_dta.config import Config


# ---------------------------------------------------------------------------
# Template fixture
# ---------------------------------------------------------------------------

TEMPLATE_MANIFESTS: dict[str, dict[str, Any]] = {
    "package.json": {
        "name": "with-tailwind",
        "private": True,
        "scripts": {"build": "turbo run build", "dev": "turbo run dev"},
        "devDependencies": {"prettier": "^3.2.5", "turbo": "^2.0.0", "typescript": "5.4.5"},
        "packageManager": "pnpm@9.0.0",
    },
    "apps/web/package.json": {
        "name": "web",
        "version": "0.1.0",
        "dependencies": {"@repo/ui": "workspace:*", "next": "14.2.3", "react": "18.3.1"},
        "devDependencies": {"@types/react": "18.3.3", "tailwindcss": "3.4.1"},
    },
    "apps/docs/package.json": {
        "name": "docs",
        "dependencies": {"next": "14.2.3", "react": "18.3.1", "react-dom": "18.3.1"},
    },
    "packages/ui/package.json": {
        "name": "@repo/ui",
        "peerDependencies": {"react": "^18"},
        "devDependencies": {"typescript": "5.4.5"},
    },
}


def write_template(root: Path, manifests: dict[str, dict[str, Any]] | None = None) -> Path:
    """Write a minimal Turborepo tree under *root*."""
    for relative, content in (manifests or TEMPLATE_MANIFESTS).items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(content, indent=2) + "\n", encoding="utf-8")
    (root / "turbo.json").write_text('{"tasks": {}}\n', encoding="utf-8")
    (root / "README.md").write_text("# Turborepo starter\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------


class StubFetcher:
    """Records every fetch and writes the template fixture into the destination."""

    def __init__(self, fail: bool = False, partial: bool = False) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.fail = fail
        self.partial = partial

    async def fetch(self, locator: str, destination: Path) -> None:
        self.calls.append((locator, destination))
        if self.partial:
            destination.mkdir(parents=True)
            (destination / "package.json").write_text("{}", encoding="utf-8")
        if self.fail:
            raise TemplateFetchError(f"Repository or ref not found: {locator}", locator)
        write_template(destination)


class StubInstaller:
    """Records install invocations and returns a fixed exit status."""

    def __init__(self, returncode: int = 0, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.returncode = returncode
        self.error = error

    async def __call__(self, package_manager: str, cwd: Path) -> int:
        self.calls.append((package_manager, cwd))
        if self.error is not None:
            raise self.error
        return self.returncode


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A fetched-looking template tree outside any project directory."""
    return write_template(tmp_path / "template")


@pytest.fixture
def features_dir(tmp_path: Path) -> Path:
    """Feature packages for ``rbac`` (complete) -- ``feature-flags`` is deliberately absent."""
    root = tmp_path / "features"
    rbac = root / "rbac"
    (rbac / "src").mkdir(parents=True)
    (rbac / "package.json").write_text('{"name": "@repo/rbac"}\n', encoding="utf-8")
    (rbac / "src" / "index.ts").write_text("export const rbac = true;\n", encoding="utf-8")
    return root


@pytest.fixture
def catalog() -> VersionCatalog:
    return VersionCatalog(
        dependencies={"next": "16.0.1", "react": "19.2.0", "react-dom": "19.2.0"},
        devDependencies={"typescript": "5.9.3", "tailwindcss": "4.1.16", "turbo": "2.5.8"},
    )


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory projects are created in."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def stub_installer() -> StubInstaller:
    return StubInstaller()


@pytest.fixture
def config(features_dir: Path) -> Config:
    return Config(features_dir=features_dir)


@pytest.fixture
def make_fetcher():
    """Factory for ``StubFetcher`` instances (``fail=``, ``partial=``)."""
    return StubFetcher


@pytest.fixture
def make_installer():
    """Factory for ``StubInstaller`` instances (``returncode=``, ``error=``)."""
    return StubInstaller


@pytest.fixture
def make_composer(config: Config, catalog: VersionCatalog, workspace: Path):
    """Build a composer rooted in ``workspace`` with the given collaborators."""
    def factory(fetcher: Any = None, installer: Any = None) -> ProjectComposer:
        return ProjectComposer(
            config,
            catalog=catalog,
            fetcher=fetcher or StubFetcher(),
            installer=installer or StubInstaller(),
            base_dir=workspace,
        )

    return factory


@pytest.fixture
def composer(make_composer, stub_fetcher: StubFetcher, stub_installer: StubInstaller) -> ProjectComposer:
    return make_composer(stub_fetcher, stub_installer)


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
