"""create-dta composer -- builds a monorepo from a base template and feature packages.

Quick usage::

    from create_dta.composer import ProjectComposer, ProjectComposition

    composition = ProjectComposition(
        project_name="my-app",
        base_template_locator="vercel/turborepo/examples/basic",
        features=("rbac", "feature-flags"),
        package_manager="pnpm",
    )
    result = await ProjectComposer().compose(composition)
"""

from create_dta.composer.composer import (
    CloneError,
    CompositionError,
    DirectoryExistsError,
    ProjectComposer,
)
from create_dta.composer.features import apply_feature
from create_dta.composer.fetch import GitHubTemplateFetcher, TemplateFetcher, TemplateFetchError
from create_dta.composer.install import INSTALL_COMMANDS, run_install
from create_dta.composer.manifest import patch_manifest, patch_manifests, update_root_manifest
from create_dta.composer.models import (
    CompositionResult,
    FeatureOutcome,
    FeatureStatus,
    InstallStatus,
    ProjectComposition,
    ProjectMetadataRecord,
)
from create_dta.composer.readme import render_readme

__all__ = [
    "CloneError",
    "CompositionError",
    "CompositionResult",
    "DirectoryExistsError",
    "FeatureOutcome",
    "FeatureStatus",
    "GitHubTemplateFetcher",
    "INSTALL_COMMANDS",
    "InstallStatus",
    "ProjectComposer",
    "ProjectComposition",
    "ProjectMetadataRecord",
    "TemplateFetchError",
    "TemplateFetcher",
    "apply_feature",
    "patch_manifest",
    "patch_manifests",
    "render_readme",
    "run_install",
    "update_root_manifest",
]
