"""Guard hooks that stop commits and pushes under the wrong identity.

The hooks are generated per repository with the workspace's expected email
and SSH alias baked in, so they need no access to the gitws registry at
commit time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gitws.fsutil import atomic_write, ensure_dir
from gitws.git.commands import run_git

logger = logging.getLogger(__name__)

HOOK_NAMES = ("pre-commit", "pre-push")
HOOK_TAG = "# gitws guard hook"

_PRE_COMMIT = """#!/bin/sh
{tag}
# workspace: {workspace}
expected="{email}"
actual=$(git config user.email)
if [ "$actual" != "$expected" ]; then
    echo "gitws: refusing to commit as '$actual' in workspace '{workspace}' (expected '$expected')" >&2
    echo "gitws: run 'gitws fix --set-identity' to repair this repository" >&2
    exit 1
fi
exit 0
"""

_PRE_PUSH = """#!/bin/sh
{tag}
# workspace: {workspace}
# $1 = remote name, $2 = remote URL
case "$2" in
    *@{alias}:*) exit 0 ;;
esac
echo "gitws: refusing to push to '$2' from workspace '{workspace}' (expected host alias '{alias}')" >&2
echo "gitws: run 'gitws fix --rewrite-remote' to route this remote through the workspace key" >&2
exit 1
"""


def hooks_dir(repo: Path | str) -> Path:
    """Return the hooks directory git uses for ``repo``."""
    result = run_git(["rev-parse", "--git-path", "hooks"], repo)
    if result.returncode == 0 and result.stdout.strip():
        path = Path(result.stdout.strip())
        return path if path.is_absolute() else Path(repo) / path
    return Path(repo) / ".git" / "hooks"


def render_hooks(workspace: str, email: str, alias: str) -> dict[str, str]:
    """Return hook name → script content."""
    values = {"tag": HOOK_TAG, "workspace": workspace, "email": email, "alias": alias}
    return {
        "pre-commit": _PRE_COMMIT.format(**values),
        "pre-push": _PRE_PUSH.format(**values),
    }


def install_hooks(repo: Path | str, workspace: str, email: str, alias: str) -> list[Path]:
    """Write the guard hooks into ``repo``, replacing earlier gitws hooks.

    Hooks not written by gitws are left alone and reported with a warning.

    Returns:
        Paths of the hooks that were written.
    """
    directory = ensure_dir(hooks_dir(repo))
    written = []
    for name, script in render_hooks(workspace, email, alias).items():
        target = directory / name
        if target.exists() and HOOK_TAG not in target.read_text(errors="replace"):
            logger.warning("Not overwriting existing %s hook at %s", name, target)
            continue
        atomic_write(target, script, 0o755)
        written.append(target)
    return written


def hooks_installed(repo: Path | str) -> bool:
    """True if every gitws guard hook is present in ``repo``."""
    directory = hooks_dir(repo)
    for name in HOOK_NAMES:
        target = directory / name
        if not target.is_file() or HOOK_TAG not in target.read_text(errors="replace"):
            return False
    return True
