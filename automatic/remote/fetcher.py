"""Fetch a skill document from a GitHub repository."""

from __future__ import annotations

import asyncio
import logging
import re
import tempfile
from pathlib import Path, PurePosixPath
from typing import Awaitable, Callable

import httpx

from automatic.constants import SKILL_FILENAME
from automatic.errors import RemoteFetchError
from automatic.registry.skills import SkillStore
from automatic.skills.parser import frontmatter_name
from automatic.utils import ensure_valid_name

logger = logging.getLogger(__name__)

RAW_HOST = "https://raw.githubusercontent.com"
CLONE_HOST = "https://github.com"
BRANCHES = ("main", "master")
FETCH_TIMEOUT = 15.0
USER_AGENT = "automatic/1.0"

_SOURCE_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")

GitRunner = Callable[..., Awaitable[tuple[int, str]]]


def candidate_urls(source: str, name: str) -> list[str]:
    urls: list[str] = []
    for branch in BRANCHES:
        base = f"{RAW_HOST}/{source}/{branch}"
        urls.extend(
            [
                f"{base}/skills/{name}/{SKILL_FILENAME}",
                f"{base}/.agents/skills/{name}/{SKILL_FILENAME}",
                f"{base}/.claude/skills/{name}/{SKILL_FILENAME}",
                f"{base}/{name}/{SKILL_FILENAME}",
                f"{base}/{SKILL_FILENAME}",
            ]
        )
    return urls


def matches_name(content: str, name: str) -> bool:
    declared = frontmatter_name(content)
    return declared is None or declared == name


def order_tree_candidates(paths: list[str], name: str) -> list[str]:
    """SKILL.md paths from a tree listing, exact directory matches first."""
    found = [p for p in paths if p == SKILL_FILENAME or p.endswith(f"/{SKILL_FILENAME}")]
    return sorted(found, key=lambda p: 0 if PurePosixPath(p).parent.name == name else 1)


async def _get_text(client: httpx.AsyncClient, url: str) -> str | None:
    try:
        response = await client.get(url, headers={"User-Agent": USER_AGENT})
    except httpx.HTTPError as exc:
        logger.debug("GET %s failed: %s", url, exc)
        return None
    if response.status_code != 200:
        logger.debug("GET %s returned %d", url, response.status_code)
        return None
    return response.text


async def _try_candidate(client: httpx.AsyncClient, url: str, name: str) -> str | None:
    content = await _get_text(client, url)
    if content is None or not matches_name(content, name):
        return None
    logger.info("Fetched skill '%s' from %s", name, url)
    return content


async def race_candidates(client: httpx.AsyncClient, urls: list[str], name: str) -> str | None:
    """Request every URL at once and return the first matching document."""
    pending = {asyncio.create_task(_try_candidate(client, url, name)) for url in urls}
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                if task.exception() is None and task.result() is not None:
                    return task.result()
        return None
    finally:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


async def run_git(*args: str, cwd: Path | None = None) -> tuple[int, str]:
    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.debug("Cannot run git: %s", exc)
        return 127, ""
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=FETCH_TIMEOUT)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning("git %s timed out after %.0fs", args[0], FETCH_TIMEOUT)
        return 124, ""
    if process.returncode != 0:
        logger.debug("git %s failed (rc=%d): %s", args[0], process.returncode, stderr.decode()[:200])
    return process.returncode or 0, stdout.decode()


async def list_repository_tree(source: str, git_runner: GitRunner = run_git) -> tuple[str, list[str]]:
    """Blobless shallow clone of ``source``; returns its branch and file list."""
    with tempfile.TemporaryDirectory(prefix="automatic-skill-") as tmp:
        checkout = Path(tmp) / "repo"
        code, _ = await git_runner(
            "clone",
            "--depth",
            "1",
            "--filter=blob:none",
            "--no-checkout",
            "--quiet",
            f"{CLONE_HOST}/{source}.git",
            str(checkout),
        )
        if code != 0:
            raise RemoteFetchError(f"git clone of {source} failed (is git installed?)")
        code, listing = await git_runner("ls-tree", "-r", "--name-only", "HEAD", cwd=checkout)
        if code != 0:
            raise RemoteFetchError(f"Could not list files of {source}")
        code, branch = await git_runner("rev-parse", "--abbrev-ref", "HEAD", cwd=checkout)
    branch = branch.strip() if code == 0 and branch.strip() else BRANCHES[0]
    return branch, [line for line in listing.splitlines() if line]


async def _fetch_from_tree(
    client: httpx.AsyncClient, source: str, name: str, git_runner: GitRunner
) -> str | None:
    branch, paths = await list_repository_tree(source, git_runner)
    for path in order_tree_candidates(paths, name):
        content = await _get_text(client, f"{RAW_HOST}/{source}/{branch}/{path}")
        if content is None:
            continue
        declared = frontmatter_name(content)
        if declared == name:
            return content
        if declared is None and (PurePosixPath(path).parent.name == name or path == SKILL_FILENAME):
            return content
    return None


async def fetch_remote_skill(
    source: str,
    name: str,
    client: httpx.AsyncClient | None = None,
    git_runner: GitRunner = run_git,
) -> str:
    """Return the SKILL.md of skill ``name`` published in GitHub repo ``source``.

    Static layouts on ``main`` and ``master`` are raced first. When none of
    them holds the skill, the repository tree is listed through a blobless
    clone and every SKILL.md in it is tried, exact directory names first.
    """
    if not _SOURCE_RE.match(source):
        raise RemoteFetchError(f"Invalid source '{source}', expected owner/repo")
    ensure_valid_name(name, "skill")

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=FETCH_TIMEOUT, follow_redirects=True)
    try:
        try:
            content = await asyncio.wait_for(
                race_candidates(client, candidate_urls(source, name), name),
                timeout=FETCH_TIMEOUT,
            )
        except asyncio.TimeoutError:
            logger.warning("Static lookup of '%s' in %s timed out", name, source)
            content = None
        if content is not None:
            return content

        logger.info("Falling back to a tree listing of %s for '%s'", source, name)
        try:
            content = await asyncio.wait_for(
                _fetch_from_tree(client, source, name, git_runner),
                timeout=FETCH_TIMEOUT,
            )
        except asyncio.TimeoutError as exc:
            raise RemoteFetchError(f"Timed out looking up '{name}' in {source}") from exc
        if content is None:
            raise RemoteFetchError(f"No SKILL.md for '{name}' found in {source}")
        return content
    finally:
        if owns_client:
            await client.aclose()


def install_remote_skill(
    store: SkillStore,
    source: str,
    name: str,
    client: httpx.AsyncClient | None = None,
    git_runner: GitRunner = run_git,
) -> Path:
    content = asyncio.run(fetch_remote_skill(source, name, client=client, git_runner=git_runner))
    path = store.save_skill(name, content)
    store.record_source(name, source, name)
    return path
