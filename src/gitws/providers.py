"""Known Git hosting providers and SSH alias naming.

Single source of truth for provider host names and for the rules that turn
a provider (or custom host) plus workspace name into an SSH alias.
"""

from __future__ import annotations

import re

PROVIDER_HOSTS: dict[str, str] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}

# SSH host names are limited to 63 characters per label
MAX_ALIAS_LENGTH = 63

_WORKSPACE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_workspace_name(name: str) -> str:
    """Return ``name`` unchanged, or raise ValueError if it is not usable.

    Workspace names end up inside marker lines and file names, so they are
    restricted to letters, digits, dots, dashes and underscores.
    """
    if not _WORKSPACE_NAME.match(name or ""):
        raise ValueError(
            f"Invalid workspace name '{name}' "
            "(use letters, digits, '.', '-' or '_', starting with a letter or digit)"
        )
    return name


def resolve_host_name(provider: str | None, host_name: str | None) -> str:
    """Resolve the real host name from ``--host`` or ``--host-name``."""
    if provider and host_name:
        raise ValueError("--host and --host-name are mutually exclusive")
    if provider:
        host = PROVIDER_HOSTS.get(provider.lower())
        if not host:
            raise ValueError(
                f"Unknown provider: {provider} (supported: {', '.join(PROVIDER_HOSTS)})"
            )
        return host
    if host_name:
        return host_name
    raise ValueError("either --host or --host-name must be specified")


def build_ssh_alias(provider_or_host: str, workspace: str) -> str:
    """Build the SSH alias ``<host>-<workspace>`` as a valid host label.

    Known provider names are first mapped to their host name.
    """
    host = PROVIDER_HOSTS.get(provider_or_host, provider_or_host)
    alias = f"{host}-{workspace}".lower()
    alias = re.sub(r"[^a-z0-9-]", "-", alias)
    alias = re.sub(r"-+", "-", alias)
    alias = alias.strip("-")
    if len(alias) > MAX_ALIAS_LENGTH:
        alias = alias[:MAX_ALIAS_LENGTH].rstrip("-")
    return alias
