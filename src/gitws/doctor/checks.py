"""Repository diagnostics.

Each check returns a list of Issue records; an empty list means the check
passed. Checks never modify anything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gitws.git import (
    get_local_config,
    get_remote_url,
    git_version,
    hooks_installed,
    signing_status,
)
from gitws.gitconfig import read_include_if_block
from gitws.paths import include_if_condition
from gitws.registry import Registry, load_registry
from gitws.rewrite import extract_ssh_host
from gitws.ssh import check_connection, read_host_block
from gitws.workspace.repo import resolve_workspace

ERROR = "error"
WARNING = "warning"
INFO = "info"


@dataclass
class Issue:
    level: str
    message: str
    fix: str = ""


def check_git(verbose: bool = False) -> list[Issue]:
    version = git_version()
    if version is None:
        return [Issue(ERROR, "Git is not installed or not in PATH", "Install Git")]
    if verbose:
        return [Issue(INFO, f"Git version: {version}")]
    return []


def check_remote(root: Path, registry: Registry) -> list[Issue]:
    remote = get_remote_url(root)
    if not remote:
        return [Issue(ERROR, "No origin remote configured", "git remote add origin <url>")]

    host = extract_ssh_host(remote)
    if host is None:
        return [Issue(WARNING, "Remote URL is not using SSH", "gitws fix --rewrite-remote")]

    aliases = {ws.ssh_alias for ws in registry.workspaces.values()}
    if host not in aliases:
        return [Issue(
            WARNING,
            f"Remote URL not using a gitws alias (current: {host})",
            "gitws fix --rewrite-remote",
        )]
    return []


def check_identity(root: Path) -> list[Issue]:
    issues = []
    if not get_local_config(root, "user.name"):
        issues.append(Issue(ERROR, "No user.name configured", "gitws fix --set-identity"))
    if not get_local_config(root, "user.email"):
        issues.append(Issue(ERROR, "No user.email configured", "gitws fix --set-identity"))
    return issues


def check_signing(root: Path) -> list[Issue]:
    status = signing_status(root)
    if not status.enabled:
        return []
    issues = []
    if not status.key:
        issues.append(Issue(
            ERROR,
            "Signing enabled but no signing key configured",
            "git config user.signingkey <key>",
        ))
    elif status.method == "ssh":
        if not status.key.endswith(".pub"):
            issues.append(Issue(WARNING, "SSH signing key should end with .pub", "gitws fix --set-identity"))
        elif not os.path.exists(os.path.expanduser(status.key)):
            issues.append(Issue(ERROR, f"SSH signing key not found: {status.key}", "gitws rotate <workspace>"))
    return issues


def check_guards(root: Path) -> list[Issue]:
    if hooks_installed(root):
        return []
    return [Issue(WARNING, "Guard hooks not installed", "gitws fix --enable-guards")]


def check_workspace(root: Path, registry: Registry, ssh: bool = False) -> list[Issue]:
    """Check the repo against the workspace it appears to belong to."""
    remote = get_remote_url(root)
    resolved = resolve_workspace(registry, root, remote)
    if not resolved:
        return [Issue(
            WARNING,
            "Repository does not match any gitws workspace",
            "gitws init <workspace> --root <dir>, or clone with gitws clone",
        )]

    name, ws, _ = resolved
    issues = []

    real_root = os.path.realpath(ws.root).rstrip(os.sep) + os.sep
    if not (os.path.realpath(root) + os.sep).startswith(real_root):
        issues.append(Issue(
            WARNING,
            f"Repository not in workspace root (expected under {ws.root})",
            "Move the repository or re-run gitws init with --root",
        ))

    email = get_local_config(root, "user.email")
    if email and email != ws.email:
        issues.append(Issue(
            ERROR,
            f"user.email is {email} but workspace '{name}' uses {ws.email}",
            "gitws fix --set-identity",
        ))

    if read_host_block(name) is None:
        issues.append(Issue(
            ERROR,
            f"No managed SSH block for workspace '{name}'",
            f"gitws init {name} --force ...",
        ))

    include_block = read_include_if_block() or ""
    if include_if_condition(ws.root) not in include_block:
        issues.append(Issue(
            WARNING,
            f"Global gitconfig has no includeIf entry for workspace '{name}'",
            f"gitws init {name} --force ...",
        ))

    if not Path(ws.ssh_key).exists():
        issues.append(Issue(ERROR, f"SSH key missing: {ws.ssh_key}", f"gitws rotate {name}"))
    elif ssh and not check_connection(ws.ssh_alias):
        issues.append(Issue(
            ERROR,
            f"SSH connection through {ws.ssh_alias} failed",
            f"Add the public key to {ws.host_name}, then retry: ssh -T {ws.ssh_alias}",
        ))
    return issues


def run_checks(
    root: Path | str,
    registry: Registry | None = None,
    verbose: bool = False,
    ssh: bool = False,
) -> list[Issue]:
    """Run every check against a repository root.

    With ``ssh``, also try a real connection through the workspace alias.
    """
    root = Path(root)
    registry = registry if registry is not None else load_registry()
    issues: list[Issue] = []
    issues += check_git(verbose)
    issues += check_remote(root, registry)
    issues += check_identity(root)
    issues += check_signing(root)
    issues += check_guards(root)
    issues += check_workspace(root, registry, ssh)
    return issues
