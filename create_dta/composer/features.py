"""Copies pre-authored feature packages into ``packages/<feature>/``."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from create_dta.catalog.features import is_known_feature
from create_dta.composer.models import FeatureOutcome, FeatureStatus


def feature_destination(project_path: Path, feature: str) -> Path:
    return project_path / "packages" / feature


async def apply_feature(project_path: Path, feature: str, features_dir: Path) -> FeatureOutcome:
    """Layer the *feature* package onto the project at *project_path*.

    Unknown identifiers and missing source directories are reported through
    the returned outcome; neither writes anything.  Existing destination files
    always win over the packaged copy.
    """
    if not is_known_feature(feature):
        return FeatureOutcome(feature=feature, status=FeatureStatus.UNKNOWN_FEATURE)

    source = features_dir / feature
    destination = feature_destination(project_path, feature)
    if not source.is_dir():
        return FeatureOutcome(
            feature=feature,
            status=FeatureStatus.TEMPLATE_MISSING,
            source=source,
        )

    await asyncio.to_thread(copy_tree_no_overwrite, source, destination)
    return FeatureOutcome(
        feature=feature,
        status=FeatureStatus.APPLIED,
        source=source,
        destination=destination,
    )


def copy_tree_no_overwrite(source: Path, destination: Path) -> list[Path]:
    """Recursively copy *source* into *destination*, skipping existing files.

    Returns:
        The destination paths of the files that were written.
    """
    written: list[Path] = []
    destination.mkdir(parents=True, exist_ok=True)
    for item in sorted(source.rglob("*")):
        target = destination / item.relative_to(source)
        if item.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            continue
        if target.exists():
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item, target)
        written.append(target)
    return written
