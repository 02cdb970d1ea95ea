"""Per-workspace Git config (``~/.gws/gitconfig/<name>``).

The whole file belongs to gitws, so it is rendered from scratch and
written atomically rather than managed through marker blocks.
"""

from __future__ import annotations

from pathlib import Path

from gitws.fsutil import atomic_write, ensure_dir
from gitws.paths import workspace_gitconfig_path
from gitws.registry.loader import Workspace


def render_workspace_gitconfig(ws: Workspace) -> str:
    lines = [
        "[user]",
        f"  name = {ws.name}",
        f"  email = {ws.email}",
    ]
    if ws.signing == "ssh":
        lines.append(f"  signingkey = {ws.ssh_key}.pub")
    elif ws.signing == "gpg":
        lines.append(f"  signingkey = {ws.gpg_key}")

    lines += [
        "",
        "[commit]",
        f"  gpgsign = {'false' if ws.signing == 'none' else 'true'}",
    ]

    if ws.signing == "ssh":
        lines += [
            "",
            "[gpg]",
            "  format = ssh",
        ]
    return "\n".join(lines) + "\n"


def write_workspace_gitconfig(name: str, ws: Workspace) -> Path:
    path = workspace_gitconfig_path(name)
    ensure_dir(path.parent)
    atomic_write(path, render_workspace_gitconfig(ws))
    return path


def remove_workspace_gitconfig(name: str) -> bool:
    path = workspace_gitconfig_path(name)
    if not path.exists():
        return False
    path.unlink()
    return True
