"""Dependency installation for the generated project."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Callable

from create_dta.utils import run_command

INSTALL_COMMANDS: dict[str, str] = {
    "npm": "npm install",
    "yarn": "yarn install",
    "pnpm": "pnpm install",
    "bun": "bun install",
}

Installer = Callable[[str, Path], Awaitable[int]]


def install_command(package_manager: str) -> str:
    """Return the install command line for *package_manager*.

    Raises:
        ValueError: If the package manager is not supported.
    """
    try:
        return INSTALL_COMMANDS[package_manager]
    except KeyError:
        raise ValueError(
            f"Unsupported package manager '{package_manager}'. "
            f"Expected one of: {', '.join(INSTALL_COMMANDS)}"
        ) from None


async def run_install(package_manager: str, cwd: Path) -> int:
    """Run the install command in *cwd* and return its exit status.

    Output goes straight to the controlling terminal and the call blocks
    until the package manager exits.
    """
    returncode, _, _ = await run_command(
        install_command(package_manager),
        cwd=cwd,
        timeout=None,
        capture=False,
    )
    return returncode
