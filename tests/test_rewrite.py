"""Tests for repository URL parsing and rewriting."""

import pytest

from gitws.rewrite import (
    extract_host,
    extract_ssh_host,
    normalize_repo_name,
    parse_repo,
    rewrite_url,
)


class TestRewriteURL:
    @pytest.mark.parametrize("value,alias,expected", [
        ("microsoft/vscode", "github-work",
         ("microsoft", "vscode", "git@github-work:microsoft/vscode.git")),
        ("https://github.com/microsoft/vscode.git", "github-work",
         ("microsoft", "vscode", "git@github-work:microsoft/vscode.git")),
        ("https://github.com/microsoft/vscode", "github-work",
         ("microsoft", "vscode", "git@github-work:microsoft/vscode.git")),
        ("git@github.com:microsoft/vscode.git", "github-work",
         ("microsoft", "vscode", "git@github-work:microsoft/vscode.git")),
        ("git@github.com:microsoft/vscode", "github-work",
         ("microsoft", "vscode", "git@github-work:microsoft/vscode.git")),
        ("https://gitlab.com/gitlab-org/gitlab.git", "gitlab-work",
         ("gitlab-org", "gitlab", "git@gitlab-work:gitlab-org/gitlab.git")),
    ])
    def test_rewrite(self, value, alias, expected):
        assert rewrite_url(value, alias) == expected

    def test_already_on_alias(self):
        _, _, url = rewrite_url("git@github-com-work:org/repo.git", "github-com-work")
        assert url == "git@github-com-work:org/repo.git"

    @pytest.mark.parametrize("value", ["not-a-url", "https://github.com/only", "ftp://x/a/b"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Unable to parse repository URL"):
            parse_repo(value)


class TestNormalizeRepoName:
    @pytest.mark.parametrize("value,expected", [
        ("vscode", "vscode"),
        ("vscode.git", "vscode"),
        ("my-repo.git", "my-repo"),
        ("my_repo", "my_repo"),
    ])
    def test_normalize(self, value, expected):
        assert normalize_repo_name(value) == expected


class TestExtractHost:
    @pytest.mark.parametrize("url,expected", [
        ("git@github.com:microsoft/vscode.git", "github.com"),
        ("git@github-work:microsoft/vscode.git", "github-work"),
        ("git@gitlab.com:gitlab-org/gitlab.git", "gitlab.com"),
        ("not-an-ssh-url", None),
        ("https://github.com/microsoft/vscode.git", None),
    ])
    def test_ssh_host(self, url, expected):
        assert extract_ssh_host(url) == expected

    @pytest.mark.parametrize("url,expected", [
        ("git@github.com:org/repo.git", "github.com"),
        ("https://gitlab.com/org/repo.git", "gitlab.com"),
        ("ssh://git@git.example.com/org/repo.git", "git.example.com"),
        ("/srv/git/repo.git", None),
    ])
    def test_any_host(self, url, expected):
        assert extract_host(url) == expected
