"""Targeted version pinning for ``package.json`` manifests.

Only entries that already exist in a manifest *and* in the version catalog are
rewritten; everything else (unknown packages, scripts, workspaces, key order)
is written back exactly as it was read.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from create_dta.catalog.versions import DependencyGroup, VersionCatalog
from create_dta.utils import load_json, print_detail, print_warning, save_json

DEPENDENCY_GROUPS: tuple[DependencyGroup, ...] = ("dependencies", "devDependencies")


def pin_versions(manifest: dict[str, Any], catalog: VersionCatalog) -> bool:
    """Rewrite catalog-known entries of *manifest* in place.

    Returns ``True`` if any value changed.  Groups missing from the manifest
    are never created.
    """
    changed = False
    for group in DEPENDENCY_GROUPS:
        entries = manifest.get(group)
        if not isinstance(entries, dict):
            continue
        pinned = catalog.group(group)
        for package in entries:
            version = pinned.get(package)
            if version is not None and entries[package] != version:
                entries[package] = version
                changed = True
    return changed


async def patch_manifest(path: Path, catalog: VersionCatalog) -> bool:
    """Pin versions in a single manifest file.

    Returns ``False`` without touching the filesystem when *path* does not
    exist; ``True`` once the manifest has been rewritten.
    """
    if not path.is_file():
        return False

    manifest = await load_json(path)
    if isinstance(manifest, dict):
        pin_versions(manifest, catalog)
    await save_json(manifest, path)
    return True


async def patch_manifests(
    project_path: Path,
    manifest_paths: Iterable[str],
    catalog: VersionCatalog,
) -> list[str]:
    """Pin versions across every manifest in *manifest_paths*.

    Paths are relative to *project_path* and processed in order.  Templates
    routinely omit some of them, so a missing file is skipped silently.  A
    manifest that cannot be parsed is reported and left untouched.

    Returns:
        The relative paths that were rewritten.
    """
    patched: list[str] = []
    for relative in manifest_paths:
        try:
            written = await patch_manifest(project_path / relative, catalog)
        except json.JSONDecodeError as exc:
            print_warning(f"  Skipping {relative}: invalid JSON ({exc.msg} at line {exc.lineno})")
            continue
        if written:
            print_detail(f"  + {relative}")
            patched.append(relative)
    return patched


async def update_root_manifest(
    project_path: Path, project_name: str, version: str
) -> dict[str, Any] | None:
    """Set ``name`` and ``version`` on the project's root ``package.json``.

    The root manifest is created when the template did not ship one.  A root
    manifest that is not a JSON object is reported and left untouched, in
    which case ``None`` is returned.
    """
    path = project_path / "package.json"
    manifest: dict[str, Any] = {}
    if path.is_file():
        try:
            loaded = await load_json(path)
        except json.JSONDecodeError as exc:
            print_warning(f"  Skipping package.json: invalid JSON ({exc.msg} at line {exc.lineno})")
            return None
        if not isinstance(loaded, dict):
            print_warning("  Skipping package.json: not a JSON object")
            return None
        manifest = loaded

    manifest["name"] = project_name
    manifest["version"] = version
    await save_json(manifest, path)
    return manifest
