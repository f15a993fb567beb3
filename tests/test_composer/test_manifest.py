"""Tests for manifest version pinning (create_dta.composer.manifest).

Covers:
- Catalog-known entries take the pinned version, in both groups
- Unknown entries and other top-level fields are untouched
- Missing groups are never created
- Missing manifests are skipped without being created
- Root manifest rename
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_dta.catalog.versions import VERSION_CATALOG, VersionCatalog
from create_dta.composer.manifest import (
    patch_manifest,
    patch_manifests,
    pin_versions,
    update_root_manifest,
)
from create_dta.config import DEFAULT_MANIFEST_PATHS

pytestmark = pytest.mark.unit


def _write(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestPinVersions:
    def test_pins_known_entries(self, catalog: VersionCatalog):
        manifest = {
            "dependencies": {"next": "14.0.0", "left-pad": "1.0.0"},
            "devDependencies": {"typescript": "5.0.0", "vitest": "1.0.0"},
        }
        assert pin_versions(manifest, catalog) is True
        assert manifest == {
            "dependencies": {"next": "16.0.1", "left-pad": "1.0.0"},
            "devDependencies": {"typescript": "5.9.3", "vitest": "1.0.0"},
        }

    def test_groups_use_their_own_catalog(self, catalog: VersionCatalog):
        # typescript is only pinned as a dev dependency
        manifest = {"dependencies": {"typescript": "5.0.0"}}
        assert pin_versions(manifest, catalog) is False
        assert manifest == {"dependencies": {"typescript": "5.0.0"}}

    def test_no_groups_no_change(self, catalog: VersionCatalog):
        manifest = {"name": "x", "peerDependencies": {"react": "^18"}}
        assert pin_versions(manifest, catalog) is False
        assert manifest == {"name": "x", "peerDependencies": {"react": "^18"}}
        assert "dependencies" not in manifest
        assert "devDependencies" not in manifest

    def test_already_pinned_reports_no_change(self, catalog: VersionCatalog):
        manifest = {"dependencies": {"react": "19.2.0"}}
        assert pin_versions(manifest, catalog) is False

    def test_non_mapping_group_ignored(self, catalog: VersionCatalog):
        manifest = {"dependencies": ["next"]}
        assert pin_versions(manifest, catalog) is False
        assert manifest == {"dependencies": ["next"]}

    def test_every_default_catalog_entry(self):
        for group in ("dependencies", "devDependencies"):
            pinned = VERSION_CATALOG.group(group)
            manifest = {group: {package: "0.0.0" for package in pinned}}
            pin_versions(manifest, VERSION_CATALOG)
            assert manifest[group] == pinned


class TestPatchManifest:
    async def test_rewrites_file_preserving_other_fields(self, tmp_path: Path, catalog: VersionCatalog):
        original = {
            "name": "web",
            "private": True,
            "scripts": {"dev": "next dev --port 3000"},
            "dependencies": {"@repo/ui": "workspace:*", "next": "14.2.3", "react": "18.3.1"},
            "devDependencies": {"eslint": "^8", "tailwindcss": "3.4.1"},
            "browserslist": ["defaults"],
        }
        path = _write(tmp_path / "package.json", original)

        assert await patch_manifest(path, catalog) is True

        patched = _read(path)
        assert list(patched) == list(original)
        assert patched["dependencies"] == {
            "@repo/ui": "workspace:*",
            "next": "16.0.1",
            "react": "19.2.0",
        }
        assert patched["devDependencies"] == {"eslint": "^8", "tailwindcss": "4.1.16"}
        for key in ("name", "private", "scripts", "browserslist"):
            assert patched[key] == original[key]

    async def test_no_matches_is_semantically_identical(self, tmp_path: Path, catalog: VersionCatalog):
        original = {"name": "ui", "devDependencies": {"vitest": "1.0.0"}}
        path = _write(tmp_path / "package.json", original)

        await patch_manifest(path, catalog)

        assert _read(path) == original

    async def test_output_format(self, tmp_path: Path, catalog: VersionCatalog):
        path = _write(tmp_path / "package.json", {"dependencies": {"next": "1.0.0"}})
        await patch_manifest(path, catalog)
        assert path.read_text(encoding="utf-8") == (
            '{\n  "dependencies": {\n    "next": "16.0.1"\n  }\n}\n'
        )

    async def test_missing_file_not_created(self, tmp_path: Path, catalog: VersionCatalog):
        path = tmp_path / "apps" / "web" / "package.json"
        assert await patch_manifest(path, catalog) is False
        assert not path.exists()
        assert not (tmp_path / "apps").exists()


class TestPatchManifests:
    async def test_patches_present_manifests_in_order(self, template_dir: Path, catalog: VersionCatalog):
        patched = await patch_manifests(template_dir, DEFAULT_MANIFEST_PATHS, catalog)

        assert patched == [
            "package.json",
            "apps/docs/package.json",
            "apps/web/package.json",
            "packages/ui/package.json",
        ]
        web = _read(template_dir / "apps" / "web" / "package.json")
        assert web["dependencies"]["next"] == "16.0.1"
        assert web["dependencies"]["@repo/ui"] == "workspace:*"
        assert web["devDependencies"]["@types/react"] == "18.3.3"
        root = _read(template_dir / "package.json")
        assert root["devDependencies"]["turbo"] == "2.5.8"
        assert root["devDependencies"]["prettier"] == "^3.2.5"

    async def test_missing_manifests_never_created(self, template_dir: Path, catalog: VersionCatalog):
        await patch_manifests(template_dir, DEFAULT_MANIFEST_PATHS, catalog)
        assert not (template_dir / "packages" / "eslint-config").exists()
        assert not (template_dir / "packages" / "typescript-config").exists()

    async def test_empty_directory(self, tmp_path: Path, catalog: VersionCatalog):
        assert await patch_manifests(tmp_path, DEFAULT_MANIFEST_PATHS, catalog) == []
        assert list(tmp_path.iterdir()) == []

    async def test_invalid_json_is_skipped(self, tmp_path: Path, catalog: VersionCatalog):
        (tmp_path / "package.json").write_text("{oops", encoding="utf-8")
        _write(tmp_path / "apps" / "web" / "package.json", {"dependencies": {"react": "18"}})

        patched = await patch_manifests(
            tmp_path, ["package.json", "apps/web/package.json"], catalog
        )

        assert patched == ["apps/web/package.json"]
        assert (tmp_path / "package.json").read_text(encoding="utf-8") == "{oops"

    async def test_custom_manifest_list(self, template_dir: Path, catalog: VersionCatalog):
        patched = await patch_manifests(template_dir, ["apps/web/package.json"], catalog)
        assert patched == ["apps/web/package.json"]
        assert _read(template_dir / "apps" / "docs" / "package.json")["dependencies"]["next"] == "14.2.3"


class TestUpdateRootManifest:
    async def test_sets_name_and_version(self, template_dir: Path):
        manifest = await update_root_manifest(template_dir, "demo", "0.1.0")

        on_disk = _read(template_dir / "package.json")
        assert on_disk == manifest
        assert on_disk["name"] == "demo"
        assert on_disk["version"] == "0.1.0"
        assert on_disk["packageManager"] == "pnpm@9.0.0"
        # name keeps its original position
        assert list(on_disk)[0] == "name"

    async def test_creates_missing_root_manifest(self, tmp_path: Path):
        await update_root_manifest(tmp_path, "demo", "0.1.0")
        assert _read(tmp_path / "package.json") == {"name": "demo", "version": "0.1.0"}

    async def test_invalid_json_left_untouched(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("{oops", encoding="utf-8")

        assert await update_root_manifest(tmp_path, "demo", "0.1.0") is None
        assert (tmp_path / "package.json").read_text(encoding="utf-8") == "{oops"

    async def test_non_object_left_untouched(self, tmp_path: Path):
        (tmp_path / "package.json").write_text('["keep"]\n', encoding="utf-8")

        assert await update_root_manifest(tmp_path, "demo", "0.1.0") is None
        assert (tmp_path / "package.json").read_text(encoding="utf-8") == '["keep"]\n'
