"""Look up workspaces in the registry."""

from __future__ import annotations

import os
from pathlib import Path

from gitws.errors import WorkspaceNotFound
from gitws.registry.loader import Registry, Workspace


def require_workspace(registry: Registry, name: str) -> Workspace:
    """Return a workspace or raise WorkspaceNotFound."""
    ws = registry.get(name)
    if ws is None:
        raise WorkspaceNotFound(name)
    return ws


def find_by_alias(registry: Registry, alias: str) -> tuple[str, Workspace] | None:
    """Find the workspace whose SSH alias is ``alias``."""
    for name in registry.names():
        ws = registry.workspaces[name]
        if ws.ssh_alias == alias:
            return name, ws
    return None


def find_by_path(registry: Registry, repo_path: Path | str) -> tuple[str, Workspace] | None:
    """Find the workspace whose root contains ``repo_path``.

    The longest matching root wins, so nested roots resolve to the innermost
    workspace. Matching is on whole path components.
    """
    target = os.path.realpath(str(repo_path))
    best: tuple[str, Workspace] | None = None
    best_len = -1
    for name in registry.names():
        ws = registry.workspaces[name]
        root = os.path.realpath(ws.root)
        if target == root or target.startswith(root.rstrip(os.sep) + os.sep):
            if len(root) > best_len:
                best, best_len = (name, ws), len(root)
    return best


def find_by_host(registry: Registry, host: str) -> tuple[str, Workspace] | None:
    """Find the single workspace whose real host name is ``host``.

    Returns None when no workspace, or more than one, uses that host; in the
    ambiguous case the caller has to decide by other means.
    """
    matches = [
        (name, registry.workspaces[name])
        for name in registry.names()
        if registry.workspaces[name].host_name == host
    ]
    if len(matches) == 1:
        return matches[0]
    return None
