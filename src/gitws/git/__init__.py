"""Git module — thin wrappers around the git binary and guard hooks."""

from gitws.git.commands import (
    clone_repository,
    find_git_root,
    get_local_config,
    get_remote_url,
    git_version,
    run_git,
    set_local_config,
    set_remote_url,
    signing_status,
    unset_local_config,
)
from gitws.git.hooks import hooks_installed, install_hooks

__all__ = [
    "clone_repository",
    "find_git_root",
    "get_local_config",
    "get_remote_url",
    "git_version",
    "run_git",
    "set_local_config",
    "set_remote_url",
    "signing_status",
    "unset_local_config",
    "hooks_installed",
    "install_hooks",
]
