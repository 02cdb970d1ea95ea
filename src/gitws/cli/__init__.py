"""Command line interface for gitws.

Usage:
    gitws init <workspace> --email E (--host P | --host-name H) [--root R]
               [--signing none|ssh|gpg] [--gpg-key K] [--name N] [--force] [--rotate-key]
    gitws clone <workspace> <url-or-org/repo> [--branch B] [--enable-guards]
    gitws status [path] [--exit-non-zero]
    gitws doctor [path] [--ssh]
    gitws fix [path] [--yes] [--rewrite-remote] [--set-identity] [--enable-guards]
    gitws rotate <workspace> [--yes]
    gitws remove <workspace> [--yes]
    gitws list
    gitws show <workspace>
"""

import argparse
import logging
import sys

import yaml

from gitws import __version__
from gitws.cli.doctor import cmd_doctor
from gitws.cli.repo_cmds import cmd_clone, cmd_fix, cmd_status
from gitws.cli.workspace_cmds import cmd_init, cmd_list, cmd_remove, cmd_rotate, cmd_show
from gitws.errors import GitwsError
from gitws.providers import PROVIDER_HOSTS
from gitws.registry.loader import SIGNING_METHODS

EPILOG = """\
gitws edits ~/.ssh/config and ~/.gitconfig only inside its own marked
blocks and backs each file up (<file>.bak.<timestamp>) before changing it.
Running two gitws commands at the same time is not safe: there is no file
locking, and the last one to write a file wins.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitws",
        description="Per-workspace Git identities: SSH keys, host aliases and includeIf config",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # init
    init = sub.add_parser("init", help="Create or refresh a workspace")
    init.add_argument("workspace", help="Workspace name (e.g. work, personal)")
    init.add_argument("--email", required=True, help="Commit email for this workspace")
    host = init.add_mutually_exclusive_group(required=True)
    host.add_argument("--host", choices=sorted(PROVIDER_HOSTS), help="Known Git provider")
    host.add_argument("--host-name", help="Custom Git host name (e.g. git.example.com)")
    init.add_argument("--root", help="Checkout root (default: ~/code/<workspace>)")
    init.add_argument("--signing", choices=SIGNING_METHODS, default="none", help="Commit signing method")
    init.add_argument("--gpg-key", help="GPG key id (required with --signing gpg)")
    init.add_argument("--name", help="user.name for commits (default: $USER)")
    init.add_argument("--force", action="store_true", help="Overwrite an existing workspace")
    init.add_argument("--rotate-key", action="store_true", help="Move the existing key aside and generate a new one")

    # clone
    clone = sub.add_parser("clone", help="Clone a repository through a workspace alias")
    clone.add_argument("workspace", help="Workspace name")
    clone.add_argument("url", help="Repository URL or ORG/REPO")
    clone.add_argument("--branch", help="Branch to check out")
    clone.add_argument("--enable-guards", action="store_true", help="Install guard hooks in the new clone")

    # status
    status = sub.add_parser("status", help="Show identity and remote state of a repository")
    status.add_argument("path", nargs="?", default=".", help="Repository path (default: .)")
    status.add_argument(
        "--exit-non-zero", action="store_true", help="Exit with status 1 when issues are found",
    )

    # doctor
    doctor = sub.add_parser("doctor", help="Diagnose a repository's workspace setup")
    doctor.add_argument("path", nargs="?", default=".", help="Repository path (default: .)")
    doctor.add_argument("--ssh", action="store_true", help="Also test the SSH connection")

    # fix
    fix = sub.add_parser("fix", help="Correct remote, identity and guard hooks")
    fix.add_argument("path", nargs="?", default=".", help="Repository path (default: .)")
    fix.add_argument("--yes", "-y", action="store_true", help="Apply without asking")
    fix.add_argument("--rewrite-remote", action="store_true", help="Only rewrite the origin URL")
    fix.add_argument("--set-identity", action="store_true", help="Only set user.name/user.email")
    fix.add_argument("--enable-guards", action="store_true", help="Only install guard hooks")

    # rotate
    rotate = sub.add_parser("rotate", help="Generate a new SSH key for a workspace")
    rotate.add_argument("workspace", help="Workspace name")
    rotate.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # remove
    remove = sub.add_parser("remove", help="Remove a workspace's managed configuration")
    remove.add_argument("workspace", help="Workspace name")
    remove.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # list / show
    sub.add_parser("list", help="List configured workspaces")
    show = sub.add_parser("show", help="Show one workspace")
    show.add_argument("workspace", help="Workspace name")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("gitws").setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "init": cmd_init,
        "clone": cmd_clone,
        "status": cmd_status,
        "doctor": cmd_doctor,
        "fix": cmd_fix,
        "rotate": cmd_rotate,
        "remove": cmd_remove,
        "list": cmd_list,
        "show": cmd_show,
    }

    try:
        return dispatch[args.command](args)
    except (GitwsError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
