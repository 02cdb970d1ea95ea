"""Run git commands against a working tree."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def run_git(args: list[str], cwd: Path | str | None = None) -> subprocess.CompletedProcess:
    """Run a git command and return the result without raising on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    return subprocess.run(
        ["git"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def _check(result: subprocess.CompletedProcess) -> str:
    if result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, result.args, result.stdout, result.stderr,
        )
    return result.stdout.strip()


def git_version() -> str | None:
    """Return ``git --version`` output, or None if git is not installed."""
    try:
        result = run_git(["--version"])
    except FileNotFoundError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def find_git_root(path: Path | str) -> Path:
    """Walk up from ``path`` to the directory containing ``.git``.

    Raises:
        FileNotFoundError: If ``path`` is not inside a git repository.
    """
    current = Path(path).resolve()
    for candidate in [current, *current.parents]:
        if (candidate / ".git").exists():
            return candidate
    raise FileNotFoundError(f"Not in a git repository: {path}")


def get_remote_url(repo: Path | str, remote: str = "origin") -> str | None:
    result = run_git(["remote", "get-url", remote], repo)
    if result.returncode == 0:
        return result.stdout.strip()
    return None


def set_remote_url(repo: Path | str, url: str, remote: str = "origin") -> None:
    _check(run_git(["remote", "set-url", remote, url], repo))


def get_local_config(repo: Path | str, key: str) -> str | None:
    """Return a repo-local config value, or None if unset."""
    result = run_git(["config", "--local", "--get", key], repo)
    if result.returncode == 0:
        return result.stdout.strip()
    return None


def set_local_config(repo: Path | str, key: str, value: str) -> None:
    _check(run_git(["config", "--local", key, value], repo))


def unset_local_config(repo: Path | str, key: str) -> None:
    # Exit status 5 means the key was not set
    result = run_git(["config", "--local", "--unset", key], repo)
    if result.returncode not in (0, 5):
        _check(result)


def clone_repository(url: str, dest: Path | str, branch: str | None = None) -> None:
    args = ["clone"]
    if branch:
        args += ["--branch", branch]
    args += [url, str(dest)]
    _check(run_git(args))


def _effective_config(repo: Path | str, key: str) -> str | None:
    """Look a key up in local config first, then global config."""
    value = get_local_config(repo, key)
    if value is not None:
        return value
    result = run_git(["config", "--global", "--get", key], repo)
    if result.returncode == 0:
        return result.stdout.strip()
    return None


@dataclass
class SigningStatus:
    enabled: bool
    method: str = ""
    key: str = ""


def signing_status(repo: Path | str) -> SigningStatus:
    """Report commit-signing settings as git would resolve them for ``repo``."""
    if _effective_config(repo, "commit.gpgsign") != "true":
        return SigningStatus(enabled=False)
    method = _effective_config(repo, "gpg.format") or "gpg"
    key = _effective_config(repo, "user.signingkey") or ""
    return SigningStatus(enabled=True, method=method, key=key)
