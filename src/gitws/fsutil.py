"""Crash-safe file replacement with timestamped backups.

Writes go to a temporary file in the target's own directory and are moved
into place with ``os.replace``, so a reader sees either the old content or
the new content, never a mix. Before a managed file is modified, its prior
content is copied to ``<name>.bak.<YYYYMMDDHHMMSS>``. Backups are never read
back or pruned by gitws; they exist for manual recovery.

There is no cross-process locking: two gitws processes editing the same
file at once resolve as last-writer-wins on the final rename.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def ensure_dir(path: Path | str, mode: int = 0o755) -> Path:
    """Create ``path`` (and parents) if missing."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True, mode=mode)
    return directory


def read_text(path: Path | str) -> str:
    """Return a file's text, or an empty string if it does not exist."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def backup_file(path: Path | str, now: datetime | None = None) -> Path | None:
    """Copy ``path`` to a timestamped sibling before it is modified.

    Args:
        path: File to snapshot.
        now: Timestamp to use (defaults to the current local time).

    Returns:
        Path of the new backup, or None if ``path`` does not exist.

    Raises:
        OSError: If the source cannot be read or the backup cannot be written.
    """
    source = Path(path)
    if not source.exists():
        return None

    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    backup = source.with_name(f"{source.name}.bak.{stamp}")
    # Two edits within the same second must not clobber the first snapshot
    counter = 0
    while backup.exists():
        counter += 1
        backup = source.with_name(f"{source.name}.bak.{stamp}.{counter:02d}")

    data = source.read_bytes()
    with open(backup, "xb") as f:
        f.write(data)
    os.chmod(backup, stat.S_IMODE(source.stat().st_mode))
    logger.debug("Backed up %s to %s", source, backup)
    return backup


def atomic_write(path: Path | str, data: bytes | str, mode: int = 0o644) -> None:
    """Replace ``path`` with ``data`` atomically.

    The temporary file lives in the same directory as ``path`` so the final
    rename never crosses filesystems. If anything fails before the rename,
    the temporary file is removed, the error propagates, and ``path`` is
    left exactly as it was.

    Args:
        path: Target file. Its parent directory must exist. A symlink is
            followed and the file it points at is replaced.
        data: New content; ``str`` is encoded as UTF-8.
        mode: Permission bits for the new file.
    """
    # Write through a symlink rather than replacing the link with a regular file
    target = Path(path).resolve()
    if isinstance(data, str):
        data = data.encode("utf-8")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    renamed = False
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
        renamed = True
    finally:
        if not renamed:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    logger.debug("Wrote %d bytes to %s", len(data), target)


def write_managed(
    path: Path | str,
    old_content: str,
    new_content: str,
    mode: int = 0o644,
) -> Path | None:
    """Back up and atomically rewrite a managed file if its content changed.

    A failed backup aborts the write: a destructive edit is never applied
    without a snapshot of what it replaces.

    An existing file keeps its permission bits; ``mode`` applies to new files.

    Returns:
        The backup path, or None when nothing was backed up (file was
        missing, or content is unchanged and nothing was written).
    """
    target = Path(path)
    if target.exists():
        if new_content == old_content:
            logger.debug("%s unchanged, not rewriting", target)
            return None
        mode = stat.S_IMODE(target.stat().st_mode)
    backup = backup_file(target)
    atomic_write(target, new_content, mode)
    return backup
