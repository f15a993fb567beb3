"""Fetching base templates from GitHub.

The composer only depends on the ``TemplateFetcher`` protocol.  The default
implementation, ``GitHubTemplateFetcher``, downloads a repository tarball from
codeload (no git history, no ``.git`` directory) and extracts the requested
sub-directory into the destination, much like ``degit`` does.

Locators use the form ``owner/repo[/sub/path][#ref]``::

    vercel/turborepo/examples/basic
    vercel/turborepo/examples/basic#main
"""

from __future__ import annotations

import asyncio
import io
import os
import re
import tarfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

import httpx

CODELOAD_URL = "https://codeload.github.com"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class TemplateFetchError(Exception):
    """Raised when a template cannot be fetched into its destination."""

    def __init__(self, message: str, locator: str = "") -> None:
        self.locator = locator
        super().__init__(message)


class TemplateFetcher(Protocol):
    async def fetch(self, locator: str, destination: Path) -> None:
        """Populate *destination* with the template named by *locator*."""
        ...


@dataclass(frozen=True)
class TemplateLocator:
    """A parsed ``owner/repo[/subpath][#ref]`` reference."""

    owner: str
    repo: str
    subpath: str = ""
    ref: str = "HEAD"

    @classmethod
    def parse(cls, locator: str) -> "TemplateLocator":
        """Parse *locator*, raising ``TemplateFetchError`` on malformed input."""
        raw = locator.strip()
        if raw.startswith("github:"):
            raw = raw[len("github:"):]

        ref = "HEAD"
        if "#" in raw:
            raw, ref = raw.split("#", 1)
            if not ref:
                raise TemplateFetchError(f"Empty ref in template locator '{locator}'", locator)

        parts = [part for part in raw.strip("/").split("/") if part]
        if len(parts) < 2:
            raise TemplateFetchError(
                f"Invalid template locator '{locator}'. Expected owner/repo[/path]",
                locator,
            )
        owner, repo, *rest = parts
        if not _NAME_PATTERN.match(owner) or not _NAME_PATTERN.match(repo):
            raise TemplateFetchError(
                f"Invalid owner or repository name in template locator '{locator}'",
                locator,
            )
        if any(part in (".", "..") for part in rest):
            raise TemplateFetchError(
                f"Template path must not contain '.' or '..' segments: '{locator}'",
                locator,
            )
        return cls(owner=owner, repo=repo, subpath="/".join(rest), ref=ref)

    @property
    def tarball_path(self) -> str:
        return f"/{self.owner}/{self.repo}/tar.gz/{self.ref}"


class GitHubTemplateFetcher:
    """Downloads GitHub tarballs with ``httpx`` and extracts one sub-directory.

    No timeout is applied to the download.  ``GITHUB_TOKEN`` is sent as a
    bearer token when set, which allows private templates.
    """

    def __init__(
        self,
        base_url: str = CODELOAD_URL,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token if token is not None else os.environ.get("GITHUB_TOKEN")
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"User-Agent": "create-dta"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            follow_redirects=True,
            timeout=httpx.Timeout(None),
            transport=self.transport,
        )

    async def download(self, locator: TemplateLocator) -> bytes:
        """Return the gzipped tarball for *locator*."""
        try:
            async with self._client() as client:
                response = await client.get(locator.tarball_path)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                message = (
                    f"Repository or ref not found: {locator.owner}/{locator.repo}#{locator.ref}"
                )
            else:
                message = f"GitHub returned HTTP {status} for {locator.owner}/{locator.repo}"
            raise TemplateFetchError(message) from exc
        except httpx.HTTPError as exc:
            raise TemplateFetchError(
                f"Could not download {locator.owner}/{locator.repo}: {exc}"
            ) from exc

    async def fetch(self, locator: str, destination: Path) -> None:
        parsed = TemplateLocator.parse(locator)
        archive = await self.download(parsed)
        try:
            extracted = await asyncio.to_thread(
                extract_subdirectory, archive, parsed.subpath, destination
            )
        except tarfile.TarError as exc:
            raise TemplateFetchError(f"Corrupt archive for '{locator}': {exc}", locator) from exc
        if extracted == 0:
            raise TemplateFetchError(
                f"No files found at '{parsed.subpath or '/'}' in {parsed.owner}/{parsed.repo}",
                locator,
            )


def extract_subdirectory(archive: bytes, subpath: str, destination: Path) -> int:
    """Extract the files below *subpath* of a GitHub tarball into *destination*.

    GitHub wraps every archive in a single ``<repo>-<sha>/`` directory, which
    is dropped.  Members that are not regular files or directories (links,
    devices) are ignored, as are members whose path would leave
    *destination*.  Nothing is created unless at least one file is written.

    Returns:
        The number of files written.
    """
    prefix = PurePosixPath(subpath).parts if subpath else ()
    written = 0
    directories: list[Path] = []

    with tarfile.open(fileobj=io.BytesIO(archive), mode="r:gz") as tar:
        for member in tar.getmembers():
            parts = PurePosixPath(member.name).parts[1:]
            if parts[: len(prefix)] != prefix:
                continue
            relative = parts[len(prefix):]
            if not relative or ".." in relative or PurePosixPath(member.name).is_absolute():
                continue

            target = destination.joinpath(*relative)
            if member.isdir():
                directories.append(target)
            elif member.isfile():
                source = tar.extractfile(member)
                if source is None:
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with source, target.open("wb") as handle:
                    handle.write(source.read())
                written += 1

    if written:
        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)
    return written
