"""Workspace module — the read/transform/write flows behind each command."""

from gitws.workspace.manager import init_workspace, remove_workspace, rotate_workspace
from gitws.workspace.repo import (
    apply_fixes,
    apply_identity,
    clone_repo,
    plan_fixes,
    repo_status,
    resolve_workspace,
)

__all__ = [
    "init_workspace",
    "remove_workspace",
    "rotate_workspace",
    "apply_fixes",
    "apply_identity",
    "clone_repo",
    "plan_fixes",
    "repo_status",
    "resolve_workspace",
]
