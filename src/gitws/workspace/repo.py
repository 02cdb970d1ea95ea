"""Repository-level operations: clone, status and fix.

A repository belongs to a workspace when its ``origin`` goes through the
workspace's SSH alias, when it lives under the workspace root, or (as a
last resort) when its remote host is used by exactly one workspace.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from gitws.errors import GitwsError, StepFailed
from gitws.git import (
    clone_repository,
    find_git_root,
    get_local_config,
    get_remote_url,
    hooks_installed,
    install_hooks,
    set_local_config,
    set_remote_url,
    signing_status,
    unset_local_config,
)
from gitws.registry import (
    Registry,
    Workspace,
    find_by_alias,
    find_by_host,
    find_by_path,
    load_registry,
    require_workspace,
)
from gitws.rewrite import build_ssh_url, extract_host, extract_ssh_host, parse_repo, rewrite_url

logger = logging.getLogger(__name__)

FIX_REWRITE_REMOTE = "rewrite-remote"
FIX_SET_IDENTITY = "set-identity"
FIX_ENABLE_GUARDS = "enable-guards"


def resolve_workspace(
    registry: Registry,
    repo: Path | str,
    remote_url: str | None = None,
) -> tuple[str, Workspace, str] | None:
    """Work out which workspace a repository belongs to.

    Returns:
        ``(name, workspace, matched_by)`` where matched_by is "alias",
        "path" or "host"; None if nothing matches.
    """
    if remote_url:
        alias = extract_ssh_host(remote_url)
        if alias:
            found = find_by_alias(registry, alias)
            if found:
                return found[0], found[1], "alias"

    found = find_by_path(registry, repo)
    if found:
        return found[0], found[1], "path"

    if remote_url:
        host = extract_host(remote_url)
        if host:
            found = find_by_host(registry, host)
            if found:
                return found[0], found[1], "host"
    return None


def apply_identity(repo: Path | str, ws: Workspace) -> None:
    """Pin the workspace identity and signing settings in the repo's local config."""
    set_local_config(repo, "user.name", ws.name)
    set_local_config(repo, "user.email", ws.email)
    if ws.signing == "ssh":
        set_local_config(repo, "gpg.format", "ssh")
        set_local_config(repo, "user.signingkey", f"{ws.ssh_key}.pub")
        set_local_config(repo, "commit.gpgsign", "true")
    elif ws.signing == "gpg":
        if ws.gpg_key:
            set_local_config(repo, "user.signingkey", ws.gpg_key)
        set_local_config(repo, "commit.gpgsign", "true")
    else:
        set_local_config(repo, "commit.gpgsign", "false")
        unset_local_config(repo, "gpg.format")
        unset_local_config(repo, "user.signingkey")


def clone_repo(
    workspace: str,
    url: str,
    branch: str | None = None,
    enable_guards: bool = False,
) -> dict:
    """Clone ``url`` through the workspace alias into ``<root>/<org>/<repo>``."""
    registry = load_registry()
    ws = require_workspace(registry, workspace)

    org, repo, ssh_url = rewrite_url(url, ws.ssh_alias)
    dest = Path(ws.root) / org / repo
    if dest.exists():
        raise GitwsError(f"destination {dest} already exists")

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        clone_repository(ssh_url, dest, branch)
    except subprocess.CalledProcessError as e:
        raise StepFailed("clone repository", (e.stderr or "").strip() or e) from e
    except OSError as e:
        raise StepFailed("clone repository", e) from e

    try:
        apply_identity(dest, ws)
        if enable_guards:
            install_hooks(dest, workspace, ws.email, ws.ssh_alias)
    except subprocess.CalledProcessError as e:
        raise StepFailed("configure repository", (e.stderr or "").strip() or e) from e

    return {
        "workspace": workspace,
        "repository": f"{org}/{repo}",
        "destination": str(dest),
        "ssh_url": ssh_url,
        "branch": branch or "default",
        "guards": enable_guards,
    }


def repo_status(path: Path | str, registry: Registry | None = None) -> dict:
    """Collect identity, remote and guard state for a repository."""
    root = find_git_root(path)
    registry = registry if registry is not None else load_registry()
    remote = get_remote_url(root)
    resolved = resolve_workspace(registry, root, remote)
    signing = signing_status(root)
    user_name = get_local_config(root, "user.name")
    user_email = get_local_config(root, "user.email")
    guards = hooks_installed(root)

    issues = []
    if not remote:
        issues.append("No origin remote configured")
    if not user_name:
        issues.append("No user.name configured")
    if not user_email:
        issues.append("No user.email configured")
    if resolved and user_email and user_email != resolved[1].email:
        issues.append(f"user.email is {user_email}, workspace expects {resolved[1].email}")
    if resolved and remote and extract_ssh_host(remote) != resolved[1].ssh_alias:
        issues.append(f"origin does not use the workspace alias {resolved[1].ssh_alias}")
    if not guards:
        issues.append("Guard hooks not installed")

    return {
        "repository": root.name,
        "path": str(root),
        "origin": remote,
        "remote_host": extract_host(remote) if remote else None,
        "workspace": resolved[0] if resolved else None,
        "matched_by": resolved[2] if resolved else None,
        "user_name": user_name,
        "user_email": user_email,
        "signing": signing,
        "guards": guards,
        "issues": issues,
    }


@dataclass
class Fix:
    kind: str
    description: str


def plan_fixes(
    path: Path | str,
    rewrite_remote: bool = False,
    set_identity: bool = False,
    enable_guards: bool = False,
    registry: Registry | None = None,
) -> dict:
    """Decide which fixes a repository needs.

    With no fix selected explicitly, every applicable fix is planned.

    Raises:
        GitwsError: If no workspace can be matched to the repository.
    """
    root = find_git_root(path)
    registry = registry if registry is not None else load_registry()
    remote = get_remote_url(root)
    resolved = resolve_workspace(registry, root, remote)
    if not resolved:
        raise GitwsError(f"no workspace matches {root} (by alias, root directory or host)")
    name, ws, _ = resolved

    everything = not (rewrite_remote or set_identity or enable_guards)
    fixes: list[Fix] = []

    if (everything or rewrite_remote) and remote and extract_ssh_host(remote) != ws.ssh_alias:
        org, repo = parse_repo(remote)
        fixes.append(Fix(
            FIX_REWRITE_REMOTE,
            f"Rewrite origin to {build_ssh_url(ws.ssh_alias, org, repo)}",
        ))

    if everything or set_identity:
        if (get_local_config(root, "user.name") != ws.name
                or get_local_config(root, "user.email") != ws.email):
            fixes.append(Fix(FIX_SET_IDENTITY, f"Set identity to {ws.name} <{ws.email}>"))

    if (everything or enable_guards) and not hooks_installed(root):
        fixes.append(Fix(FIX_ENABLE_GUARDS, "Install guard hooks"))

    return {"path": str(root), "workspace": name, "remote": remote, "fixes": fixes}


def apply_fixes(plan: dict, registry: Registry | None = None) -> dict:
    """Apply a plan from ``plan_fixes``.

    Each fix is attempted independently; failures are collected rather than
    stopping the remaining fixes.
    """
    registry = registry if registry is not None else load_registry()
    ws = require_workspace(registry, plan["workspace"])
    root = Path(plan["path"])

    applied = []
    errors = []
    for fix in plan["fixes"]:
        try:
            if fix.kind == FIX_REWRITE_REMOTE:
                _, _, new_url = rewrite_url(plan["remote"], ws.ssh_alias)
                set_remote_url(root, new_url)
                applied.append(f"Remote URL rewritten to {new_url}")
            elif fix.kind == FIX_SET_IDENTITY:
                apply_identity(root, ws)
                applied.append(f"User identity set to {ws.name} <{ws.email}>")
            elif fix.kind == FIX_ENABLE_GUARDS:
                install_hooks(root, plan["workspace"], ws.email, ws.ssh_alias)
                applied.append("Guard hooks installed")
        except (subprocess.CalledProcessError, OSError, ValueError) as e:
            logger.debug("Fix %s failed", fix.kind, exc_info=True)
            errors.append({"fix": fix.kind, "error": str(e)})

    return {"applied": applied, "errors": errors}
