"""Locate, insert, replace and remove managed blocks in config text.

All functions here are pure string transforms. They never raise on odd
input: a start marker without a matching end marker degrades to appending
a fresh block, and removing a block that is not there is a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class BlockSpan:
    """Location of a managed block, markers included."""

    start: int  # index of the first character of the start marker
    end: int  # index just past the last character of the end marker
    inner: str  # raw text strictly between the markers


@dataclass
class UpsertResult:
    """Outcome of an upsert.

    ``degraded`` is set when a start marker was found without a matching
    end marker and the new block was appended instead of replacing in place.
    The content is still valid; the orphan marker needs manual cleanup.
    """

    content: str
    changed: bool
    degraded: bool = False


def find_block(content: str, start_marker: str, end_marker: str) -> BlockSpan | None:
    """Find the block closed by the first end marker after the leftmost start marker.

    The end marker search begins at the start marker's position, so an end
    marker literal appearing earlier in unrelated content is ignored. When
    more than one start marker precedes that end marker, the span begins at
    the last of them: the earlier ones are orphans and stay where they are.
    """
    start_idx = content.find(start_marker)
    if start_idx == -1:
        return None

    end_idx = content.find(end_marker, start_idx)
    if end_idx == -1:
        return None

    # Orphaned start markers before the real block belong to the user text
    start_idx = content.rfind(start_marker, start_idx, end_idx)
    inner = content[start_idx + len(start_marker):end_idx]
    return BlockSpan(start=start_idx, end=end_idx + len(end_marker), inner=inner)


def _append(content: str, new_block: str) -> str:
    if not content:
        return new_block
    return content + "\n" + new_block


def upsert_block(
    content: str,
    start_marker: str,
    end_marker: str,
    new_block: str,
) -> UpsertResult:
    """Insert ``new_block`` or replace the existing block in place.

    ``new_block`` is expected to carry its own marker lines.

    - No start marker: append (first install). Always a change.
    - Start marker without end marker: append after the whole content and
      leave the orphan marker untouched. Later upserts replace only the
      appended block and keep reporting ``degraded`` while the orphan remains.
    - Both markers: replace start-of-start through end-of-end with
      ``new_block``. A newline separates it from what follows unless that
      text is empty or already starts with a newline, so a re-run never
      adds blank lines.
    """
    if start_marker not in content:
        return UpsertResult(content=_append(content, new_block), changed=True)

    span = find_block(content, start_marker, end_marker)
    if span is None:
        logger.warning(
            "Found '%s' without a matching '%s'; appending a new block. "
            "Remove the orphan marker by hand.",
            start_marker, end_marker,
        )
        return UpsertResult(
            content=_append(content, new_block), changed=True, degraded=True,
        )

    degraded = start_marker in content[:span.start]
    if degraded:
        logger.warning(
            "Found an orphan '%s' before the managed block; leaving it in place. "
            "Remove the orphan marker by hand.",
            start_marker,
        )

    before = content[:span.start]
    after = content[span.end:]
    new_content = before + new_block
    if after and not after.startswith("\n"):
        new_content += "\n"
    new_content += after
    return UpsertResult(content=new_content, changed=new_content != content, degraded=degraded)


def extract_block(content: str, start_marker: str, end_marker: str) -> tuple[str, bool]:
    """Return the trimmed text between the markers and whether it was found."""
    span = find_block(content, start_marker, end_marker)
    if span is None:
        return "", False
    return span.inner.strip(), True


def remove_block(content: str, start_marker: str, end_marker: str) -> str:
    """Delete the block, markers included, joining what surrounds it as is.

    No separator is inserted, so repeated removals do not pile up blank
    lines. Returns ``content`` unchanged if either marker is missing.
    """
    span = find_block(content, start_marker, end_marker)
    if span is None:
        return content
    return content[:span.start] + content[span.end:]
