"""Tests for SSH keys and the managed Host blocks in the SSH config."""

import os
import stat
import subprocess
from datetime import datetime

import pytest

from gitws.ssh import (
    backup_existing_key,
    check_connection,
    ensure_key,
    key_paths,
    read_host_block,
    read_public_key,
    remove_host_block,
    render_host_block,
    upsert_host_block,
)
from gitws.ssh import keys

BLOCK = (
    "# >>> gws work >>> DO NOT EDIT\n"
    "Host github-com-work\n"
    "  HostName github.com\n"
    "  User git\n"
    "  IdentityFile /k/id_ed25519_gws_work\n"
    "  IdentitiesOnly yes\n"
    "# <<< gws work <<<"
)


class TestRenderHostBlock:
    def test_layout(self):
        assert render_host_block("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work") == BLOCK


class TestUpsertHostBlock:
    def test_creates_config(self, home):
        result = upsert_host_block("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work")
        config = home / ".ssh" / "config"
        assert result == {"path": str(config), "changed": True, "degraded": False, "backup": None}
        assert config.read_text() == BLOCK
        assert stat.S_IMODE(config.stat().st_mode) == 0o600

    def test_preserves_user_content_and_backs_up(self, home):
        config = home / ".ssh" / "config"
        config.parent.mkdir()
        user = "Host personal\n  HostName example.com\n"
        config.write_text(user)

        result = upsert_host_block("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work")

        assert config.read_text() == user + "\n" + BLOCK
        assert result["backup"].startswith(str(config) + ".bak.")
        assert open(result["backup"]).read() == user

    def test_rerun_is_noop(self, home):
        args = ("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work")
        upsert_host_block(*args)
        result = upsert_host_block(*args)
        assert not result["changed"]
        assert sorted(p.name for p in (home / ".ssh").iterdir()) == ["config"]

    def test_key_change_replaces_block(self, home):
        upsert_host_block("work", "github-com-work", "github.com", "/k/old")
        upsert_host_block("work", "github-com-work", "github.com", "/k/new")
        text = (home / ".ssh" / "config").read_text()
        assert "/k/new" in text
        assert "/k/old" not in text
        assert text.count("Host github-com-work") == 1

    def test_explicit_path(self, tmp_path):
        config = tmp_path / "ssh_config"
        upsert_host_block("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work", config)
        assert read_host_block("work", config).startswith("Host github-com-work")

    def test_symlinked_config_stays_a_symlink(self, tmp_path):
        real = tmp_path / "dotfiles" / "ssh_config"
        real.parent.mkdir()
        real.write_text("Host mine\n")
        config = tmp_path / "config"
        config.symlink_to(real)

        upsert_host_block("work", "github-com-work", "github.com", "/k/id_ed25519_gws_work", config)

        assert config.is_symlink()
        text = real.read_text()
        assert text.startswith("Host mine\n")
        assert "Host github-com-work" in text


class TestRemoveHostBlock:
    def test_removes_only_workspace_block(self, home):
        upsert_host_block("personal", "github-com-personal", "github.com", "/k/p")
        upsert_host_block("work", "github-com-work", "github.com", "/k/w")

        result = remove_host_block("work")

        assert result["removed"]
        assert read_host_block("work") is None
        assert read_host_block("personal") is not None

    def test_missing_block_is_noop(self, home):
        result = remove_host_block("work")
        assert result == {"path": str(home / ".ssh" / "config"), "removed": False, "backup": None}
        assert not (home / ".ssh" / "config").exists()


class TestKeys:
    def test_key_paths(self, home):
        private, public = key_paths("work")
        assert private == home / ".ssh" / "id_ed25519_gws_work"
        assert public == home / ".ssh" / "id_ed25519_gws_work.pub"

    def test_ensure_key_generates_once(self, home, fake_keygen):
        private, public, created = ensure_key("work", "me@work.example")
        assert created
        assert stat.S_IMODE(private.stat().st_mode) == 0o600
        assert fake_keygen[0][1] == "me@work.example gws-work"
        assert read_public_key(public).startswith("ssh-ed25519 ")

        _, _, created_again = ensure_key("work", "me@work.example")
        assert not created_again
        assert len(fake_keygen) == 1

    def test_keygen_failure_propagates(self, home, monkeypatch):
        def fail(private, comment):
            raise subprocess.CalledProcessError(1, ["ssh-keygen"], stderr="bad")

        monkeypatch.setattr(keys, "_run_keygen", fail)
        with pytest.raises(subprocess.CalledProcessError):
            ensure_key("work", "me@work.example")

    def test_backup_existing_key(self, home, fake_keygen):
        private, public, _ = ensure_key("work", "me@work.example")
        moved = backup_existing_key(private, datetime(2024, 3, 5, 14, 7, 9))
        assert [p.name for p in moved] == [
            "id_ed25519_gws_work.old-20240305140709",
            "id_ed25519_gws_work.pub.old-20240305140709",
        ]
        assert not private.exists()
        assert not public.exists()

    def test_backup_missing_key(self, home):
        assert backup_existing_key(home / ".ssh" / "missing") == []


class TestCheckConnection:
    def _fake_run(self, returncode):
        def run(*args, **kwargs):
            return subprocess.CompletedProcess(args[0], returncode, "", "")
        return run

    def test_auth_banner_counts_as_success(self, monkeypatch):
        # git hosts exit 1 after a successful handshake
        monkeypatch.setattr(keys.subprocess, "run", self._fake_run(1))
        assert check_connection("github-com-work")

    def test_connection_failure(self, monkeypatch):
        monkeypatch.setattr(keys.subprocess, "run", self._fake_run(255))
        assert not check_connection("github-com-work")

    def test_ssh_missing(self, monkeypatch):
        def run(*args, **kwargs):
            raise FileNotFoundError("ssh")

        monkeypatch.setattr(keys.subprocess, "run", run)
        assert not check_connection("github-com-work")


@pytest.mark.skipif(os.name != "posix", reason="permission bits")
class TestPermissions:
    def test_existing_config_mode_kept(self, home):
        config = home / ".ssh" / "config"
        config.parent.mkdir()
        config.write_text("Host a\n")
        os.chmod(config, 0o644)
        upsert_host_block("work", "github-com-work", "github.com", "/k/w")
        assert stat.S_IMODE(config.stat().st_mode) == 0o644
