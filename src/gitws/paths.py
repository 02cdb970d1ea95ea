"""Filesystem locations used by gitws.

Every location is resolved on each call so tests and callers can redirect
them through the environment.

Environment variables:
    GITWS_CONFIG_DIR — gitws state directory (default: ~/.gws)
    GITWS_SSH_DIR — SSH directory holding keys and config (default: ~/.ssh)
    GITWS_GITCONFIG — global Git config file (default: ~/.gitconfig)
"""

from __future__ import annotations

import os
from pathlib import Path


def expand_path(path: Path | str) -> Path:
    """Expand a leading ``~`` and return an absolute path."""
    return Path(os.path.expanduser(str(path))).absolute()


def config_dir() -> Path:
    """Return the gitws state directory."""
    env = os.environ.get("GITWS_CONFIG_DIR")
    if env:
        return expand_path(env)
    return Path.home() / ".gws"


def registry_path() -> Path:
    """Return the path to the workspace registry (config.yaml)."""
    return config_dir() / "config.yaml"


def workspace_gitconfig_path(name: str) -> Path:
    """Return the path of a workspace's own Git config file."""
    return config_dir() / "gitconfig" / name


def ssh_dir() -> Path:
    env = os.environ.get("GITWS_SSH_DIR")
    if env:
        return expand_path(env)
    return Path.home() / ".ssh"


def ssh_config_path() -> Path:
    return ssh_dir() / "config"


def global_gitconfig_path() -> Path:
    env = os.environ.get("GITWS_GITCONFIG")
    if env:
        return expand_path(env)
    return Path.home() / ".gitconfig"


def default_root(name: str) -> Path:
    """Return the default checkout root for a workspace (~/code/<name>)."""
    return Path.home() / "code" / name


def include_if_condition(root: Path | str) -> str:
    """Build the ``gitdir:`` condition for a workspace root.

    Git matches ``gitdir:`` as a prefix, so the expanded root always ends
    with a separator; otherwise ``~/code/work`` would also match
    ``~/code/work-old``.
    """
    expanded = str(expand_path(root))
    if not expanded.endswith(os.sep):
        expanded += os.sep
    return f"gitdir:{expanded}"
