"""SSH module — per-workspace keys and managed ``Host`` blocks."""

from gitws.ssh.config import (
    read_host_block,
    remove_host_block,
    render_host_block,
    upsert_host_block,
)
from gitws.ssh.keys import (
    backup_existing_key,
    check_connection,
    ensure_key,
    key_paths,
    read_public_key,
)

__all__ = [
    "read_host_block",
    "remove_host_block",
    "render_host_block",
    "upsert_host_block",
    "backup_existing_key",
    "check_connection",
    "ensure_key",
    "key_paths",
    "read_public_key",
]
