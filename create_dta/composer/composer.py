"""Project composition orchestrator.

Turns a ``ProjectComposition`` into a materialised monorepo:

1. Fetch the base template into ``<cwd>/<project_name>``.
2. Pin dependency versions in the known manifests.
3. Copy the selected feature packages into ``packages/<feature>/``.
4. Rename the root manifest and reset its version.
5. Write the ``.dta.json`` metadata record.
6. Regenerate ``README.md``.
7. Install dependencies (unless skipped).

Steps run strictly in order.  Only a pre-existing target directory and a
failed fetch abort the run; everything after the fetch reports problems and
carries on.  Nothing is rolled back: a run that fails part-way leaves the
target directory as it was at that moment.
"""

from __future__ import annotations

from pathlib import Path

from create_dta.catalog.versions import VERSION_CATALOG, VersionCatalog
from create_dta.composer.features import apply_feature
from create_dta.composer.fetch import GitHubTemplateFetcher, TemplateFetcher, TemplateFetchError
from create_dta.composer.install import Installer, install_command, run_install
from create_dta.composer.manifest import patch_manifests, update_root_manifest
from create_dta.composer.models import (
    CompositionResult,
    FeatureOutcome,
    FeatureStatus,
    InstallStatus,
    ProjectComposition,
    ProjectMetadataRecord,
)
from create_dta.composer.readme import render_readme
from create_dta.config import Config
from create_dta.utils import (
    print_detail,
    print_step,
    print_success,
    print_warning,
    save_json,
    write_text,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CompositionError(Exception):
    """Raised when a composition cannot continue."""

    def __init__(self, message: str, project_path: Path | None = None) -> None:
        self.project_path = project_path
        super().__init__(message)


class DirectoryExistsError(CompositionError):
    """The target directory already exists; nothing was touched."""


class CloneError(CompositionError):
    """The base template could not be fetched."""


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


class ProjectComposer:
    """Drives one or more compositions.

    Attributes:
        config: Paths, file names and versions used by every run.
        catalog: Pinned versions applied to manifests and shown in the README.
        fetcher: Collaborator that populates the target directory.
        installer: Collaborator that runs the package manager.
        base_dir: Directory project names are resolved against; the current
            working directory when ``None``.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        catalog: VersionCatalog = VERSION_CATALOG,
        fetcher: TemplateFetcher | None = None,
        installer: Installer = run_install,
        base_dir: Path | None = None,
    ) -> None:
        self.config = config or Config()
        self.catalog = catalog
        self.fetcher = fetcher or GitHubTemplateFetcher()
        self.installer = installer
        self.base_dir = base_dir

    def resolve_project_path(self, project_name: str) -> Path:
        base = self.base_dir if self.base_dir is not None else Path.cwd()
        return (base / project_name).resolve()

    # -- Public API --------------------------------------------------------

    async def compose(self, composition: ProjectComposition) -> CompositionResult:
        """Materialise *composition* on disk.

        Raises:
            DirectoryExistsError: The target directory already exists.
            CloneError: The base template could not be fetched.
        """
        project_path = self.resolve_project_path(composition.project_name)
        if project_path.exists():
            raise DirectoryExistsError(
                f"Directory {composition.project_name} already exists",
                project_path,
            )

        result = CompositionResult(project_path=project_path)

        # 1. Base template
        await self._fetch(composition.base_template_locator, project_path)

        # 2. Pinned versions
        print_step("Updating to pinned versions...")
        result.patched_manifests = await patch_manifests(
            project_path, self.config.manifest_paths, self.catalog
        )
        print_success("Versions updated")

        # 3. Features
        if composition.features:
            print_step("Adding features...")
        for feature in composition.features:
            outcome = await apply_feature(project_path, feature, self.config.features_dir)
            _report_feature(outcome)
            result.features.append(outcome)

        # 4. Root manifest
        await update_root_manifest(
            project_path, composition.project_name, self.config.initial_version
        )

        # 5. Metadata record
        record = ProjectMetadataRecord(
            features=list(composition.features),
            base_template=composition.base_template_locator,
            cli_version=self.config.cli_version,
        )
        await save_json(record.to_json_dict(), project_path / self.config.metadata_filename)

        # 6. README
        readme = render_readme(
            composition.project_name,
            self.catalog,
            composition.features,
            package_manager=composition.package_manager,
        )
        await write_text(project_path / self.config.readme_filename, readme)

        # 7. Install
        if not composition.skip_install:
            result.install_command = install_command(composition.package_manager)
            result.install_status = await self._install(composition, project_path)

        return result

    # -- Steps -------------------------------------------------------------

    async def _fetch(self, locator: str, project_path: Path) -> None:
        print_step(f"Cloning: {locator}...")
        try:
            await self.fetcher.fetch(locator, project_path)
        except (TemplateFetchError, OSError) as exc:
            raise CloneError(
                f"Failed to fetch template '{locator}': {exc}", project_path
            ) from exc
        print_success("Base cloned")

    async def _install(self, composition: ProjectComposition, project_path: Path) -> InstallStatus:
        manager = composition.package_manager
        print_step(f"Installing with {manager}...")
        try:
            returncode = await self.installer(manager, project_path)
        except OSError as exc:
            print_detail(f"  {exc}")
            returncode = -1

        if returncode == 0:
            print_success("Installed")
            return InstallStatus.SUCCEEDED

        print_warning("Install failed")
        print_detail(f"Run: cd {composition.project_name} && {manager} install")
        return InstallStatus.FAILED


def _report_feature(outcome: FeatureOutcome) -> None:
    if outcome.status is FeatureStatus.APPLIED:
        print_success(f"  + Copied to packages/{outcome.feature}/")
    elif outcome.status is FeatureStatus.UNKNOWN_FEATURE:
        print_warning(f"  Unknown feature: {outcome.feature}")
    else:
        print_warning(f"  Template not found: {outcome.feature}")
        print_detail(f"    Expected at: {outcome.source}")
