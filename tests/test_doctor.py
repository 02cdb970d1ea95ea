"""Tests for repository diagnostics."""

import subprocess

import pytest

from gitws.doctor import run_checks
from gitws.registry import Registry, load_registry
from gitws.workspace import apply_fixes, init_workspace, plan_fixes

from conftest import init_repo, requires_git

pytestmark = requires_git


@pytest.fixture
def workspace(tmp_path, home, fake_keygen):
    init_workspace("work", "me@work.example", provider="github", root=tmp_path / "code" / "work")
    return load_registry()


def _messages(issues, level=None):
    return [i.message for i in issues if level is None or i.level == level]


class TestRunChecks:
    def test_healthy_repo(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "org" / "app", origin="git@github-com-work:org/app.git")
        apply_fixes(plan_fixes(repo, registry=workspace), workspace)

        assert run_checks(repo, workspace) == []

    def test_verbose_reports_git_version(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github-com-work:org/app.git")
        apply_fixes(plan_fixes(repo, registry=workspace), workspace)

        issues = run_checks(repo, workspace, verbose=True)
        assert [i.level for i in issues] == ["info"]
        assert issues[0].message.startswith("Git version: git version")

    def test_fresh_clone_problems(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="https://github.com/org/app.git")
        issues = run_checks(repo, workspace)

        assert "Remote URL is not using SSH" in _messages(issues, "warning")
        assert "No user.email configured" in _messages(issues, "error")
        assert "Guard hooks not installed" in _messages(issues, "warning")
        assert all(i.fix for i in issues)

    def test_foreign_alias(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github.com:org/app.git")
        assert "Remote URL not using a gitws alias (current: github.com)" in _messages(run_checks(repo, workspace))

    def test_no_remote(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app")
        assert "No origin remote configured" in _messages(run_checks(repo, workspace), "error")

    def test_outside_any_workspace(self, tmp_path, home):
        repo = init_repo(tmp_path / "elsewhere", origin="git@github.com:org/app.git")
        assert "Repository does not match any gitws workspace" in _messages(run_checks(repo, Registry()))

    def test_wrong_email(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github-com-work:org/app.git")
        apply_fixes(plan_fixes(repo, registry=workspace), workspace)
        workspace.get("work").email = "other@work.example"

        messages = _messages(run_checks(repo, workspace), "error")
        assert any("but workspace 'work' uses other@work.example" in m for m in messages)

    def test_missing_managed_config(self, tmp_path, home, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github-com-work:org/app.git")
        (home / ".ssh" / "config").write_text("")
        (home / ".gitconfig").write_text("")
        (home / ".ssh" / "id_ed25519_gws_work").unlink()

        messages = _messages(run_checks(repo, workspace))
        assert "No managed SSH block for workspace 'work'" in messages
        assert "Global gitconfig has no includeIf entry for workspace 'work'" in messages
        assert any(m.startswith("SSH key missing") for m in messages)

    def test_ssh_connection_check(self, tmp_path, workspace, monkeypatch):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github-com-work:org/app.git")
        apply_fixes(plan_fixes(repo, registry=workspace), workspace)
        monkeypatch.setattr("gitws.doctor.checks.check_connection", lambda alias: False)

        issues = run_checks(repo, workspace, ssh=True)
        assert _messages(issues) == ["SSH connection through github-com-work failed"]

    def test_ssh_signing_key_suffix(self, tmp_path, workspace):
        repo = init_repo(tmp_path / "code" / "work" / "app", origin="git@github-com-work:org/app.git")
        apply_fixes(plan_fixes(repo, registry=workspace), workspace)
        for key, value in (("commit.gpgsign", "true"), ("gpg.format", "ssh"), ("user.signingkey", "/k/id")):
            subprocess.run(["git", "config", key, value], cwd=repo, check=True)

        assert "SSH signing key should end with .pub" in _messages(run_checks(repo, workspace), "warning")
