"""Git config module — shared includeIf block and per-workspace config files."""

from gitws.gitconfig.include_if import (
    read_include_if_block,
    render_include_if_block,
    sync_include_if,
)
from gitws.gitconfig.workspace_file import (
    remove_workspace_gitconfig,
    render_workspace_gitconfig,
    write_workspace_gitconfig,
)

__all__ = [
    "read_include_if_block",
    "render_include_if_block",
    "sync_include_if",
    "remove_workspace_gitconfig",
    "render_workspace_gitconfig",
    "write_workspace_gitconfig",
]
