"""Command line entry point for ``create-dta``.

Collects the options for one composition (from flags, or interactively when a
flag is missing), prints the resulting configuration and hands it to the
``ProjectComposer``.

Usage::

    create-dta my-app
    create-dta my-app -b basic -t rbac+feature-flags -m pnpm --skip-install
    create-dta my-app -b vercel/turborepo/examples/kitchen-sink
    create-dta --show-versions
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from pydantic import ValidationError
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from create_dta import __version__
from create_dta.catalog import (
    CUSTOM_TEMPLATE_KEY,
    FEATURE_REGISTRY,
    TURBOREPO_TEMPLATES,
    VERSION_CATALOG,
    resolve_locator,
)
from create_dta.composer import (
    CompositionError,
    InstallStatus,
    ProjectComposer,
    ProjectComposition,
)
from create_dta.config import PACKAGE_MANAGERS, Config
from create_dta.utils import console, print_error, print_summary_table, print_warning

DEFAULT_PROJECT_NAME = "my-tda-app"


# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-dta",
        description="Create a new DTA project with Turborepo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-dta my-app\n"
            "  create-dta my-app -b basic -t rbac+feature-flags --skip-install\n"
            "  create-dta my-app -b owner/repo/path -m npm\n"
        ),
    )
    parser.add_argument("project_name", nargs="?", help="Project name")
    parser.add_argument(
        "-t", "--template",
        dest="features",
        help="DTA features joined with '+', e.g. rbac+feature-flags",
    )
    parser.add_argument(
        "-b", "--base",
        help="Base Turborepo template key (with-tailwind, basic, ...) or owner/repo/path",
    )
    parser.add_argument(
        "-m", "--package-manager",
        choices=PACKAGE_MANAGERS,
        default=None,
        help="Package manager used for the install step (default: pnpm)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Skip installing dependencies",
    )
    parser.add_argument(
        "--show-versions",
        action="store_true",
        help="Print the pinned package versions and exit",
    )
    parser.add_argument(
        "--list-templates",
        action="store_true",
        help="Print the available base templates and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_features(value: str) -> list[str]:
    """Split ``rbac+with-feature-flags`` into ``["rbac", "feature-flags"]``."""
    features: list[str] = []
    for part in value.split("+"):
        name = part.strip()
        if name.startswith("with-"):
            name = name[len("with-"):]
        if name:
            features.append(name)
    return features


def _prompt_project_name() -> str:
    name = Prompt.ask("Project name", default=DEFAULT_PROJECT_NAME, console=console).strip()
    if not name:
        raise ValueError("Project name is required")
    return name


def _prompt_custom_locator() -> str:
    locator = Prompt.ask(
        "GitHub repository (owner/repo/path)",
        default="vercel/turborepo/examples/basic",
        console=console,
    ).strip()
    if "/" not in locator:
        raise ValueError("Invalid format. Example: owner/repo/path")
    return locator


def _prompt_base_template(default_key: str) -> str:
    print_templates()
    key = Prompt.ask(
        "Choose Turborepo base template",
        choices=list(TURBOREPO_TEMPLATES),
        default=default_key,
        console=console,
    )
    if key == CUSTOM_TEMPLATE_KEY:
        return _prompt_custom_locator()
    return resolve_locator(key)


def _prompt_features() -> list[str]:
    selected: list[str] = []
    for feature, descriptor in FEATURE_REGISTRY.items():
        if Confirm.ask(f"Add {descriptor.title}? ({descriptor.description})", default=False, console=console):
            selected.append(feature)
    return selected


def resolve_composition(args: argparse.Namespace, config: Config) -> ProjectComposition:
    """Turn parsed arguments (plus prompts for anything missing) into a composition."""
    if args.project_name is not None:
        name = args.project_name.strip()
    else:
        name = _prompt_project_name()

    if args.base:
        if args.base == CUSTOM_TEMPLATE_KEY:
            locator = _prompt_custom_locator()
        else:
            locator = resolve_locator(args.base)
    else:
        locator = _prompt_base_template(config.default_template)

    if args.features is not None:
        features = parse_features(args.features)
    else:
        features = _prompt_features()

    return ProjectComposition(
        project_name=name,
        base_template_locator=locator,
        features=tuple(features),
        package_manager=args.package_manager or config.default_package_manager,
        skip_install=args.skip_install,
    )


# ---------------------------------------------------------------------------
# Informational output
# ---------------------------------------------------------------------------


def print_versions() -> None:
    """Print the pinned dependency versions as two tables."""
    for title, group in (
        ("Dependencies", VERSION_CATALOG.dependencies),
        ("Dev Dependencies", VERSION_CATALOG.dev_dependencies),
    ):
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Package", no_wrap=True)
        table.add_column("Version", style="green")
        for package, version in group.items():
            table.add_row(package, version)
        console.print(table)
    console.print()


def print_templates() -> None:
    table = Table(title="Base templates", show_header=True, header_style="bold cyan")
    table.add_column("Key", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for key, descriptor in TURBOREPO_TEMPLATES.items():
        table.add_row(key, descriptor.display_name, descriptor.description)
    console.print(table)


def _print_configuration(composition: ProjectComposition) -> None:
    features = ", ".join(composition.features) if composition.features else "none (base only)"
    print_summary_table(
        {
            "Name": composition.project_name,
            "Base": composition.base_template_locator,
            "Manager": composition.package_manager,
            "Features": features,
        },
        title="Configuration",
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``create-dta``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_versions:
        print_versions()
        return
    if args.list_templates:
        print_templates()
        return

    console.print(Panel("[bold bright_blue]Create DTA App[/bold bright_blue]", expand=False))

    config = Config.from_env()
    try:
        composition = resolve_composition(args, config)
    except (ValueError, ValidationError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    _print_configuration(composition)

    composer = ProjectComposer(config)
    try:
        result = asyncio.run(composer.compose(composition))
    except CompositionError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    console.print()
    console.print("[bold green]Success![/bold green]")
    skipped = [outcome.feature for outcome in result.features if not outcome.applied]
    if skipped:
        print_warning(f"Features not applied: {', '.join(skipped)}")
    console.print("[dim]Next steps:[/dim]")
    console.print(f"[cyan]  cd {composition.project_name}[/cyan]")
    if result.install_status is not InstallStatus.SUCCEEDED:
        console.print(f"[cyan]  {composition.package_manager} install[/cyan]")
    console.print(f"[cyan]  {composition.package_manager} dev[/cyan]")


if __name__ == "__main__":
    main()
