"""Per-workspace ed25519 keys."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path

from gitws.fsutil import BACKUP_TIMESTAMP_FORMAT, ensure_dir
from gitws.paths import ssh_dir

logger = logging.getLogger(__name__)

# ssh -T exits 255 when the connection itself failed; git hosts exit 1 on
# a successful handshake because they refuse a shell
SSH_CONNECT_FAILED = 255


def key_paths(workspace: str) -> tuple[Path, Path]:
    """Return ``(private, public)`` key paths for a workspace."""
    private = ssh_dir() / f"id_ed25519_gws_{workspace}"
    return private, private.with_name(private.name + ".pub")


def _run_keygen(private: Path, comment: str) -> None:
    subprocess.run(
        ["ssh-keygen", "-t", "ed25519", "-C", comment, "-f", str(private), "-N", "", "-q"],
        check=True,
        capture_output=True,
        text=True,
    )


def ensure_key(workspace: str, email: str) -> tuple[Path, Path, bool]:
    """Generate the workspace key unless it already exists.

    Returns:
        ``(private_path, public_path, created)``.

    Raises:
        subprocess.CalledProcessError: If ssh-keygen fails.
        FileNotFoundError: If ssh-keygen is not installed.
    """
    private, public = key_paths(workspace)
    if private.exists():
        return private, public, False

    ensure_dir(private.parent, mode=0o700)
    _run_keygen(private, f"{email} gws-{workspace}")
    os.chmod(private, 0o600)
    logger.info("Generated SSH key %s", private)
    return private, public, True


def backup_existing_key(private: Path | str, now: datetime | None = None) -> list[Path]:
    """Move a key pair aside to ``<name>.old-<timestamp>``.

    Returns:
        The backup paths created (empty if there was no key).
    """
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    private = Path(private)
    moved = []
    for path in (private, private.with_name(private.name + ".pub")):
        if not path.exists():
            continue
        target = path.with_name(f"{path.name}.old-{stamp}")
        shutil.move(str(path), str(target))
        moved.append(target)
    if moved:
        logger.info("Moved old key to %s", ", ".join(str(p) for p in moved))
    return moved


def read_public_key(public: Path | str) -> str:
    return Path(public).read_text().strip()


def check_connection(alias: str, timeout: int = 10) -> bool:
    """Try ``ssh -T <alias>``; True unless the connection itself failed."""
    try:
        result = subprocess.run(
            ["ssh", "-T", alias, "-o", f"ConnectTimeout={timeout}", "-o", "BatchMode=yes"],
            capture_output=True,
            text=True,
            timeout=timeout + 5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("ssh -T %s failed: %s", alias, e)
        return False
    return result.returncode != SSH_CONNECT_FAILED
