"""Managed blocks inside shared, hand-edited config files.

A managed block is a region bounded by a start and an end marker line:

    # >>> gws work >>> DO NOT EDIT
    Host github.com-work
      ...
    # <<< gws work <<<

Everything between (and including) the markers belongs to gitws and is
rewritten freely. Anything outside the markers belongs to the user and is
never altered or reordered.
"""

from gitws.blocks.editor import (
    BlockSpan,
    UpsertResult,
    extract_block,
    find_block,
    remove_block,
    upsert_block,
)
from gitws.blocks.markers import (
    GIT_INCLUDE_IF,
    SSH_HOST,
    end_marker,
    marker_pair,
    start_marker,
)

__all__ = [
    "BlockSpan",
    "UpsertResult",
    "extract_block",
    "find_block",
    "remove_block",
    "upsert_block",
    "GIT_INCLUDE_IF",
    "SSH_HOST",
    "end_marker",
    "marker_pair",
    "start_marker",
]
