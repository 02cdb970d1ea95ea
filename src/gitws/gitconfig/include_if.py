"""The shared ``includeIf`` block in the global Git config.

All workspaces share one managed block. It is always re-rendered in full
from the registry, never patched incrementally, so adding or updating a
workspace can't leave duplicate stanzas behind.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gitws.blocks import GIT_INCLUDE_IF, extract_block, marker_pair, remove_block, upsert_block
from gitws.fsutil import ensure_dir, read_text, write_managed
from gitws.paths import global_gitconfig_path, include_if_condition, workspace_gitconfig_path
from gitws.registry.loader import Registry

logger = logging.getLogger(__name__)


def render_include_if_block(registry: Registry) -> str | None:
    """Render the block for every workspace, sorted by name.

    Returns None when there are no workspaces.
    """
    if not registry.workspaces:
        return None

    start, end = marker_pair(GIT_INCLUDE_IF)
    lines = [start]
    for name in registry.names():
        ws = registry.workspaces[name]
        lines.append(f'[includeIf "{include_if_condition(ws.root)}"]')
        lines.append(f"  path = {workspace_gitconfig_path(name)}")
    lines.append(end)
    return "\n".join(lines)


def sync_include_if(registry: Registry, config_path: Path | str | None = None) -> dict:
    """Bring the global Git config's includeIf block in line with the registry.

    The block is removed entirely once the last workspace is gone.

    Returns:
        Dict with keys: path, changed, degraded, backup.
    """
    path = Path(config_path) if config_path else global_gitconfig_path()
    content = read_text(path)
    start, end = marker_pair(GIT_INCLUDE_IF)
    block = render_include_if_block(registry)

    degraded = False
    if block is None:
        new_content = remove_block(content, start, end)
    else:
        result = upsert_block(content, start, end, block)
        new_content, degraded = result.content, result.degraded

    if new_content == content:
        return {"path": str(path), "changed": False, "degraded": degraded, "backup": None}

    ensure_dir(path.parent)
    backup = write_managed(path, content, new_content)
    logger.info("Updated includeIf block in %s (%d workspaces)", path, len(registry.workspaces))
    return {
        "path": str(path),
        "changed": True,
        "degraded": degraded,
        "backup": str(backup) if backup else None,
    }


def read_include_if_block(config_path: Path | str | None = None) -> str | None:
    path = Path(config_path) if config_path else global_gitconfig_path()
    start, end = marker_pair(GIT_INCLUDE_IF)
    text, found = extract_block(read_text(path), start, end)
    return text if found else None
