"""Create, rotate and remove workspaces.

Each operation touches several files (SSH config, global Git config, the
workspace's own Git config, the registry). Every file write is atomic and
backed up, but the operation as a whole is not transactional: if a later
step fails, earlier files keep their new content. Re-running the command
converges, since every step is idempotent.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from gitws.blocks import SSH_HOST, marker_pair
from gitws.errors import GitwsError, StepFailed
from gitws.gitconfig import remove_workspace_gitconfig, sync_include_if, write_workspace_gitconfig
from gitws.paths import default_root, expand_path
from gitws.providers import build_ssh_alias, resolve_host_name
from gitws.registry import Workspace, load_registry, require_workspace, save_registry
from gitws.registry.loader import SIGNING_METHODS
from gitws.ssh import (
    backup_existing_key,
    ensure_key,
    read_public_key,
    remove_host_block,
    upsert_host_block,
)
from gitws.ssh.keys import key_paths

logger = logging.getLogger(__name__)


def _step(step: str, func, *args, **kwargs):
    """Run one step, re-raising I/O and subprocess failures as StepFailed."""
    try:
        return func(*args, **kwargs)
    except subprocess.CalledProcessError as e:
        reason = (e.stderr or "").strip() or e
        raise StepFailed(step, reason) from e
    except OSError as e:
        raise StepFailed(step, e) from e


def _warn_degraded(result: dict, warnings: list[str]) -> None:
    if result.get("degraded"):
        warnings.append(
            f"{result['path']} has a start marker without an end marker; "
            "a fresh block was appended. Remove the orphan marker by hand."
        )


def init_workspace(
    name: str,
    email: str,
    provider: str | None = None,
    host_name: str | None = None,
    root: Path | str | None = None,
    signing: str = "none",
    gpg_key: str | None = None,
    display_name: str | None = None,
    force: bool = False,
    rotate_key: bool = False,
) -> dict:
    """Set up (or, with ``force``, refresh) a workspace.

    Args:
        name: Workspace name.
        email: Commit email for the workspace.
        provider: Known provider key (github, gitlab, bitbucket).
        host_name: Custom host name; mutually exclusive with ``provider``.
        root: Checkout root. Defaults to ~/code/<name>.
        signing: none, ssh or gpg.
        gpg_key: GPG key id, required with ``signing="gpg"``.
        display_name: user.name. Defaults to $USER, then the workspace name.
        force: Re-run on an existing workspace.
        rotate_key: Move the existing key aside and generate a new one.

    Returns:
        Dict describing what was configured.
    """
    # Rejects invalid names and names that would collide with a shared block
    marker_pair(SSH_HOST, name)
    if not email:
        raise ValueError("--email is required")
    if signing not in SIGNING_METHODS:
        raise ValueError(f"Invalid signing method '{signing}' (valid: {', '.join(SIGNING_METHODS)})")
    if signing == "gpg" and not gpg_key:
        raise ValueError("--gpg-key is required when using --signing gpg")

    real_host = resolve_host_name(provider, host_name)
    alias = build_ssh_alias(provider or host_name, name)
    expanded_root = expand_path(root) if root else default_root(name)
    user_name = display_name or os.environ.get("USER") or name

    registry = _step("load workspace registry", load_registry)
    if registry.get(name) and not force:
        raise GitwsError(f"workspace '{name}' already exists (use --force to overwrite)")

    warnings: list[str] = []
    moved_keys: list[Path] = []
    if rotate_key:
        private, _ = key_paths(name)
        moved_keys = _step("back up existing SSH key", backup_existing_key, private)

    private, public, created = _step("generate SSH key", ensure_key, name, email)

    ssh_result = _step(
        "update SSH config", upsert_host_block, name, alias, real_host, private,
    )
    _warn_degraded(ssh_result, warnings)

    ws = Workspace(
        email=email,
        provider=provider or "",
        host_name=real_host,
        ssh_alias=alias,
        ssh_key=str(private),
        root=str(expanded_root),
        signing=signing,
        name=user_name,
        gpg_key=gpg_key or "",
    )
    registry.set(name, ws)

    git_result = _step("update global gitconfig", sync_include_if, registry)
    _warn_degraded(git_result, warnings)

    gitconfig_path = _step("write workspace gitconfig", write_workspace_gitconfig, name, ws)
    _step("save workspace registry", save_registry, registry)
    public_key = _step("read public key", read_public_key, public)

    logger.info("Workspace '%s' initialized (alias %s)", name, alias)
    return {
        "workspace": name,
        "ssh_alias": alias,
        "host_name": real_host,
        "root": str(expanded_root),
        "email": email,
        "signing": signing,
        "private_key": str(private),
        "public_key_path": str(public),
        "public_key": public_key,
        "key_created": created,
        "moved_keys": [str(p) for p in moved_keys],
        "ssh_config": ssh_result,
        "gitconfig": git_result,
        "workspace_gitconfig": str(gitconfig_path),
        "warnings": warnings,
    }


def rotate_workspace(name: str) -> dict:
    """Replace a workspace's SSH key and point its ``Host`` block at it.

    The old key pair is kept next to the new one as ``.old-<timestamp>``.
    """
    registry = _step("load workspace registry", load_registry)
    ws = require_workspace(registry, name)

    moved = _step("back up existing SSH key", backup_existing_key, ws.ssh_key)
    private, public, _ = _step("generate SSH key", ensure_key, name, ws.email)

    warnings: list[str] = []
    ssh_result = _step(
        "update SSH config", upsert_host_block, name, ws.ssh_alias, ws.host_name, private,
    )
    _warn_degraded(ssh_result, warnings)

    ws.ssh_key = str(private)
    registry.set(name, ws)
    if ws.signing == "ssh":
        _step("write workspace gitconfig", write_workspace_gitconfig, name, ws)
    _step("save workspace registry", save_registry, registry)

    return {
        "workspace": name,
        "ssh_alias": ws.ssh_alias,
        "host_name": ws.host_name,
        "private_key": str(private),
        "public_key_path": str(public),
        "public_key": _step("read public key", read_public_key, public),
        "moved_keys": [str(p) for p in moved],
        "ssh_config": ssh_result,
        "warnings": warnings,
    }


def remove_workspace(name: str) -> dict:
    """Uninstall a workspace's managed configuration.

    Removes its SSH ``Host`` block, drops it from the shared includeIf
    block, deletes its Git config file and forgets it in the registry.
    Key files are left on disk.
    """
    registry = _step("load workspace registry", load_registry)
    ws = require_workspace(registry, name)

    ssh_result = _step("update SSH config", remove_host_block, name)

    registry.delete(name)
    git_result = _step("update global gitconfig", sync_include_if, registry)
    removed_file = _step("remove workspace gitconfig", remove_workspace_gitconfig, name)
    _step("save workspace registry", save_registry, registry)

    logger.info("Workspace '%s' removed", name)
    return {
        "workspace": name,
        "ssh_config": ssh_result,
        "gitconfig": git_result,
        "workspace_gitconfig_removed": removed_file,
        "kept_key": ws.ssh_key,
    }
