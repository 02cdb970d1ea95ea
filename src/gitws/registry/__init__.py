"""Workspace registry — YAML record of every configured workspace."""

from gitws.registry.loader import Registry, Workspace, load_registry, save_registry
from gitws.registry.query import (
    find_by_alias,
    find_by_host,
    find_by_path,
    require_workspace,
)

__all__ = [
    "Registry",
    "Workspace",
    "load_registry",
    "save_registry",
    "find_by_alias",
    "find_by_host",
    "find_by_path",
    "require_workspace",
]
