"""Managed regions inside user-authored text files.

A region is delimited by a start/end comment pair. Edits are computed as a
``ManagedRegion`` value (a span of the original text plus its replacement)
by pure functions, then applied with a single write.
"""

from __future__ import annotations

from dataclasses import dataclass

from automatic.constants import (
    RULES_END_MARKER,
    RULES_START_MARKER,
    SKILLS_END_MARKER,
    SKILLS_START_MARKER,
)


@dataclass(frozen=True)
class Markers:
    start: str
    end: str

    def wrap(self, body: str) -> str:
        return f"{self.start}\n{body}\n{self.end}"


RULES_MARKERS = Markers(RULES_START_MARKER, RULES_END_MARKER)
# written by older releases; only ever stripped
LEGACY_SKILLS_MARKERS = Markers(SKILLS_START_MARKER, SKILLS_END_MARKER)


@dataclass(frozen=True)
class ManagedRegion:
    start: int
    end: int
    replacement: str

    def apply(self, text: str) -> str:
        return text[: self.start] + self.replacement + text[self.end :]


def find_region(text: str, markers: Markers) -> tuple[int, int] | None:
    start = text.find(markers.start)
    if start == -1:
        return None
    end = text.find(markers.end, start + len(markers.start))
    if end == -1:
        return None
    return start, end + len(markers.end)


def plan_region(text: str, markers: Markers, section: str) -> ManagedRegion | None:
    """Edit that makes ``section`` the managed content of ``text``.

    ``section`` is the full marker-wrapped block, or "" to drop the region.
    An existing region is replaced in place; otherwise the section is
    appended after the user content. Returns None when nothing changes.
    """
    span = find_region(text, markers)
    if span is not None:
        start, end = span
        if section:
            if text[start:end] == section:
                return None
            return ManagedRegion(start, end, section)
        before = text[:start].rstrip()
        after = text[end:].lstrip()
        cut_start = len(before)
        cut_end = len(text) - len(after)
        if before and after:
            joiner = "\n\n"
        elif before:
            joiner = "\n"
        else:
            joiner = ""
        return ManagedRegion(cut_start, cut_end, joiner)

    if not section:
        return None
    cut_start = len(text.rstrip())
    prefix = "\n\n" if cut_start else ""
    return ManagedRegion(cut_start, len(text), f"{prefix}{section}\n")


def apply_section(text: str, markers: Markers, section: str) -> str:
    region = plan_region(text, markers, section)
    return text if region is None else region.apply(text)


def strip_region(text: str, markers: Markers) -> str:
    stripped = text
    while find_region(stripped, markers) is not None:
        stripped = apply_section(stripped, markers, "")
    return stripped


def user_body(text: str) -> str:
    """Text with every engine-managed region removed."""
    body = strip_region(text, LEGACY_SKILLS_MARKERS)
    body = strip_region(body, RULES_MARKERS)
    return body if body.strip() else ""
