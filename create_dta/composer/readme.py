"""README generation for freshly composed projects."""

from __future__ import annotations

from collections.abc import Sequence

from create_dta.catalog.versions import VersionCatalog
from create_dta.composer.templates import TemplateRenderer

README_TEMPLATE = "README.md.j2"

_renderer = TemplateRenderer()


def render_readme(
    project_name: str,
    catalog: VersionCatalog,
    features: Sequence[str],
    *,
    package_manager: str = "pnpm",
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the project README.

    Pure: the output depends only on the arguments.  Every feature is listed
    once in the stack checklist and once as a ``@repo/<feature>`` package; an
    empty *features* sequence renders the base-only variant.
    """
    versions = {
        "next": catalog.version_for("dependencies", "next") or "latest",
        "react": catalog.version_for("dependencies", "react") or "latest",
        "typescript": catalog.version_for("devDependencies", "typescript") or "latest",
        "tailwindcss": catalog.version_for("devDependencies", "tailwindcss") or "latest",
    }
    context = {
        "project_name": project_name,
        "versions": versions,
        "features": list(features),
        "package_manager": package_manager,
    }
    return (renderer or _renderer).render(README_TEMPLATE, context)
