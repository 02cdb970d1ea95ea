"""Marker line naming — the only place marker literals are formatted.

Markers must be stable across runs (so a re-run targets the same block) and
must never nest or overlap. Per-workspace markers embed the validated
workspace name, which cannot contain whitespace, so ``gws work >>>`` can
never match inside ``gws work2 >>>``.
"""

from __future__ import annotations

from gitws.providers import validate_workspace_name

# Namespaces
SSH_HOST = "ssh"
GIT_INCLUDE_IF = "includeIf"

# Namespaces with a single block shared by all workspaces
_SHARED = {GIT_INCLUDE_IF}
_NAMESPACES = {SSH_HOST, GIT_INCLUDE_IF}


def marker_pair(namespace: str, workspace: str | None = None) -> tuple[str, str]:
    """Return ``(start_marker, end_marker)`` for a block.

    Args:
        namespace: SSH_HOST (one block per workspace) or GIT_INCLUDE_IF
            (one block shared by every workspace).
        workspace: Workspace name; required for per-workspace namespaces
            and rejected for shared ones.

    Raises:
        ValueError: On an unknown namespace, a missing or unexpected
            workspace name, or an invalid or reserved workspace name.
    """
    if namespace not in _NAMESPACES:
        raise ValueError(f"Unknown marker namespace: {namespace}")

    if namespace in _SHARED:
        if workspace is not None:
            raise ValueError(f"Namespace '{namespace}' is shared and takes no workspace")
        label = namespace
    else:
        if workspace is None:
            raise ValueError(f"Namespace '{namespace}' requires a workspace name")
        label = validate_workspace_name(workspace)
        if label in _SHARED:
            raise ValueError(f"Workspace name '{workspace}' is reserved")

    return f"# >>> gws {label} >>> DO NOT EDIT", f"# <<< gws {label} <<<"


def start_marker(workspace: str) -> str:
    return marker_pair(SSH_HOST, workspace)[0]


def end_marker(workspace: str) -> str:
    return marker_pair(SSH_HOST, workspace)[1]
