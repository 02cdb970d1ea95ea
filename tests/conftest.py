"""Shared test fixtures for gitws."""

import shutil
import subprocess
from pathlib import Path

import pytest

from gitws.registry import Registry, Workspace

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point HOME and every gitws location at a throwaway directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GITWS_CONFIG_DIR", str(home / ".gws"))
    monkeypatch.setenv("GITWS_SSH_DIR", str(home / ".ssh"))
    monkeypatch.setenv("GITWS_GITCONFIG", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.setenv("USER", "tester")
    return home


@pytest.fixture
def fake_keygen(monkeypatch):
    """Replace ssh-keygen with a stub that writes placeholder key files."""
    calls = []

    def _keygen(private, comment):
        calls.append((Path(private), comment))
        Path(private).write_text(f"PRIVATE KEY {len(calls)}\n")
        Path(str(private) + ".pub").write_text(f"ssh-ed25519 AAAAkey{len(calls)} {comment}\n")

    monkeypatch.setattr("gitws.ssh.keys._run_keygen", _keygen)
    return calls


def make_workspace(root, email="me@work.example", alias="github-com-work", **kwargs):
    values = {
        "email": email,
        "host_name": "github.com",
        "ssh_alias": alias,
        "ssh_key": "/keys/id_ed25519_gws_work",
        "root": str(root),
        "provider": "github",
        "signing": "none",
        "name": "Tester",
    }
    values.update(kwargs)
    return Workspace(**values)


@pytest.fixture
def registry(tmp_path):
    reg = Registry()
    reg.set("work", make_workspace(tmp_path / "code" / "work"))
    reg.set(
        "personal",
        make_workspace(
            tmp_path / "code" / "personal",
            email="me@home.example",
            alias="github-com-personal",
            ssh_key="/keys/id_ed25519_gws_personal",
        ),
    )
    return reg


def init_repo(path, origin=None):
    """Create a git repository at ``path``, optionally with an origin remote."""
    path.mkdir(parents=True, exist_ok=True)
    subprocess.run(["git", "init", "-q", str(path)], check=True, capture_output=True)
    if origin:
        subprocess.run(
            ["git", "remote", "add", "origin", origin],
            cwd=path, check=True, capture_output=True,
        )
    return path


def git_config(path, key):
    result = subprocess.run(
        ["git", "config", "--local", "--get", key],
        cwd=path, capture_output=True, text=True,
    )
    return result.stdout.strip() if result.returncode == 0 else None
