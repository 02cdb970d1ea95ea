"""Rewrite repository URLs onto a workspace SSH alias.

Accepted inputs:
    org/repo
    https://host/org/repo(.git)
    git@host:org/repo(.git)
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

_ORG_REPO = re.compile(r"^([A-Za-z0-9._-]+)/([A-Za-z0-9._-]+)$")
_SSH_URL = re.compile(r"^git@([^:]+):([^/]+)/([^/]+)$")
_SSH_HOST = re.compile(r"^git@([^:]+):")


def normalize_repo_name(repo: str) -> str:
    """Strip a trailing ``.git``."""
    return repo[:-4] if repo.endswith(".git") else repo


def parse_repo(value: str) -> tuple[str, str]:
    """Return ``(org, repo)`` from any accepted URL form.

    Raises:
        ValueError: If ``value`` is not a recognised repository reference.
    """
    value = value.strip()

    m = _ORG_REPO.match(value)
    if m:
        return m.group(1), normalize_repo_name(m.group(2))

    parsed = urlparse(value)
    if parsed.scheme == "https":
        parts = [p for p in parsed.path.strip("/").split("/") if p]
        if len(parts) >= 2:
            return parts[0], normalize_repo_name(parts[1])

    m = _SSH_URL.match(value)
    if m:
        return m.group(2), normalize_repo_name(m.group(3))

    raise ValueError(f"Unable to parse repository URL: {value}")


def build_ssh_url(alias: str, org: str, repo: str) -> str:
    return f"git@{alias}:{org}/{repo}.git"


def rewrite_url(value: str, alias: str) -> tuple[str, str, str]:
    """Return ``(org, repo, ssh_url)`` with the URL routed through ``alias``."""
    org, repo = parse_repo(value)
    return org, repo, build_ssh_url(alias, org, repo)


def extract_ssh_host(url: str) -> str | None:
    """Return the host part of a ``git@host:...`` URL, or None."""
    m = _SSH_HOST.match(url)
    return m.group(1) if m else None


def extract_host(url: str) -> str | None:
    """Return the host of an SSH or HTTPS remote URL, or None."""
    host = extract_ssh_host(url)
    if host:
        return host
    parsed = urlparse(url)
    if parsed.scheme in ("https", "http", "ssh"):
        return parsed.hostname
    return None
