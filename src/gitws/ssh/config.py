"""Manage one ``Host`` block per workspace in the SSH client config.

Each workspace owns the region between its marker pair; the rest of the
file belongs to the user. Every modification backs the file up first and
replaces it atomically.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gitws.blocks import SSH_HOST, extract_block, marker_pair, remove_block, upsert_block
from gitws.fsutil import ensure_dir, read_text, write_managed
from gitws.paths import ssh_config_path

logger = logging.getLogger(__name__)

SSH_CONFIG_MODE = 0o600


def render_host_block(workspace: str, alias: str, host_name: str, key_path: Path | str) -> str:
    """Render the managed block for a workspace, marker lines included."""
    start, end = marker_pair(SSH_HOST, workspace)
    return (
        f"{start}\n"
        f"Host {alias}\n"
        f"  HostName {host_name}\n"
        "  User git\n"
        f"  IdentityFile {key_path}\n"
        "  IdentitiesOnly yes\n"
        f"{end}"
    )


def upsert_host_block(
    workspace: str,
    alias: str,
    host_name: str,
    key_path: Path | str,
    config_path: Path | str | None = None,
) -> dict:
    """Install or refresh a workspace's ``Host`` block.

    Returns:
        Dict with keys: path, changed, degraded, backup.
    """
    path = Path(config_path) if config_path else ssh_config_path()
    ensure_dir(path.parent, mode=0o700)

    content = read_text(path)
    start, end = marker_pair(SSH_HOST, workspace)
    block = render_host_block(workspace, alias, host_name, key_path)
    result = upsert_block(content, start, end, block)

    backup = None
    if result.changed:
        backup = write_managed(path, content, result.content, SSH_CONFIG_MODE)
        logger.info("Updated SSH block for '%s' in %s", workspace, path)

    return {
        "path": str(path),
        "changed": result.changed,
        "degraded": result.degraded,
        "backup": str(backup) if backup else None,
    }


def remove_host_block(workspace: str, config_path: Path | str | None = None) -> dict:
    """Remove a workspace's ``Host`` block; a missing block is not an error.

    Returns:
        Dict with keys: path, removed, backup.
    """
    path = Path(config_path) if config_path else ssh_config_path()
    content = read_text(path)
    start, end = marker_pair(SSH_HOST, workspace)
    new_content = remove_block(content, start, end)

    if new_content == content:
        return {"path": str(path), "removed": False, "backup": None}

    backup = write_managed(path, content, new_content, SSH_CONFIG_MODE)
    logger.info("Removed SSH block for '%s' from %s", workspace, path)
    return {"path": str(path), "removed": True, "backup": str(backup) if backup else None}


def read_host_block(workspace: str, config_path: Path | str | None = None) -> str | None:
    """Return the body of a workspace's ``Host`` block, or None if absent."""
    path = Path(config_path) if config_path else ssh_config_path()
    start, end = marker_pair(SSH_HOST, workspace)
    text, found = extract_block(read_text(path), start, end)
    return text if found else None
