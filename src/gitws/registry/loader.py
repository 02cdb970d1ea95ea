"""Load and save the workspace registry (~/.gws/config.yaml).

Layout:

    workspaces:
      work:
        email: you@work.com
        provider: github
        host_name: github.com
        ssh_alias: github-com-work
        ssh_key: /home/you/.ssh/id_ed25519_gws_work
        root: /home/you/code/work
        signing: none
        name: you
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml

from gitws.fsutil import atomic_write, ensure_dir
from gitws.paths import registry_path

logger = logging.getLogger(__name__)

SIGNING_METHODS = ("none", "ssh", "gpg")


@dataclass
class Workspace:
    email: str
    host_name: str
    ssh_alias: str
    ssh_key: str
    root: str
    provider: str = ""
    signing: str = "none"
    name: str = ""
    gpg_key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Workspace:
        known = {f.name for f in fields(cls)}
        return cls(**{k: ("" if v is None else str(v)) for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        if not data["gpg_key"]:
            del data["gpg_key"]
        return data


@dataclass
class Registry:
    """All configured workspaces, keyed by workspace name."""

    workspaces: dict[str, Workspace] = field(default_factory=dict)

    def get(self, name: str) -> Workspace | None:
        return self.workspaces.get(name)

    def set(self, name: str, workspace: Workspace) -> None:
        self.workspaces[name] = workspace

    def delete(self, name: str) -> bool:
        return self.workspaces.pop(name, None) is not None

    def names(self) -> list[str]:
        return sorted(self.workspaces)


def load_registry(path: Path | str | None = None) -> Registry:
    """Load the registry from disk.

    Args:
        path: Registry file. Defaults to ``paths.registry_path()``.

    Returns:
        The registry; empty if the file does not exist yet.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the YAML does not have the expected shape.
    """
    reg_path = Path(path) if path else registry_path()
    if not reg_path.exists():
        logger.debug("No registry at %s, starting empty", reg_path)
        return Registry()

    with open(reg_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{reg_path} is not a YAML mapping")

    raw = data.get("workspaces") or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{reg_path}: 'workspaces' must be a mapping")

    registry = Registry()
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"{reg_path}: workspace '{name}' must be a mapping")
        registry.set(str(name), Workspace.from_dict(entry))
    return registry


def save_registry(registry: Registry, path: Path | str | None = None) -> None:
    """Write the registry back to disk atomically."""
    reg_path = Path(path) if path else registry_path()
    ensure_dir(reg_path.parent)
    data = {
        "workspaces": {
            name: registry.workspaces[name].to_dict() for name in registry.names()
        },
    }
    atomic_write(reg_path, yaml.safe_dump(data, sort_keys=False, default_flow_style=False))
