"""Workspace CLI commands: init, rotate, remove, list, show."""

import argparse

from gitws.cli.prompt import confirm
from gitws.registry import load_registry, require_workspace
from gitws.workspace import init_workspace, remove_workspace, rotate_workspace


def _print_file_result(label: str, result: dict) -> None:
    if result.get("changed") or result.get("removed"):
        state = "updated"
    else:
        state = "unchanged"
    print(f"  {label + ':':<16}{result['path']} ({state})")
    if result.get("backup"):
        print(f"  {'':<16}backup: {result['backup']}")


def _print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        print(f"  WARNING: {warning}")


def cmd_init(args: argparse.Namespace) -> int:
    result = init_workspace(
        args.workspace,
        args.email,
        provider=args.host,
        host_name=args.host_name,
        root=args.root,
        signing=args.signing,
        gpg_key=args.gpg_key,
        display_name=args.name,
        force=args.force,
        rotate_key=args.rotate_key,
    )

    print(f"\n  Workspace '{result['workspace']}' initialized")
    print(f"  {'─' * 50}")
    print(f"  {'SSH alias:':<16}{result['ssh_alias']}")
    print(f"  {'Host:':<16}{result['host_name']}")
    print(f"  {'Root:':<16}{result['root']}")
    print(f"  {'Email:':<16}{result['email']}")
    print(f"  {'Signing:':<16}{result['signing']}")
    key_state = "generated" if result["key_created"] else "reused"
    print(f"  {'SSH key:':<16}{result['private_key']} ({key_state})")
    for moved in result["moved_keys"]:
        print(f"  {'':<16}old key moved to {moved}")
    _print_file_result("SSH config", result["ssh_config"])
    _print_file_result("Git config", result["gitconfig"])
    print(f"  {'Identity file:':<16}{result['workspace_gitconfig']}")
    _print_warnings(result["warnings"])

    print("\n  Add this public key to your Git host:\n")
    print(f"  {result['public_key']}")
    print(f"\n  Then clone with: gitws clone {result['workspace']} <org>/<repo>\n")
    return 0


def cmd_rotate(args: argparse.Namespace) -> int:
    if not confirm(
        f"Rotate the SSH key for workspace '{args.workspace}'? "
        "The new key must be added to your Git host",
        args.yes,
    ):
        print("Aborted.")
        return 1

    result = rotate_workspace(args.workspace)
    print(f"\n  SSH key rotated for '{result['workspace']}'")
    print(f"  {'─' * 50}")
    print(f"  {'New key:':<16}{result['private_key']}")
    for moved in result["moved_keys"]:
        print(f"  {'Old key:':<16}{moved}")
    _print_file_result("SSH config", result["ssh_config"])
    _print_warnings(result["warnings"])
    print("\n  Add the new public key to your Git host:\n")
    print(f"  {result['public_key']}\n")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    if not confirm(f"Remove workspace '{args.workspace}' from SSH and Git config?", args.yes):
        print("Aborted.")
        return 1

    result = remove_workspace(args.workspace)
    print(f"\n  Workspace '{result['workspace']}' removed")
    print(f"  {'─' * 50}")
    _print_file_result("SSH config", result["ssh_config"])
    _print_file_result("Git config", result["gitconfig"])
    if result["workspace_gitconfig_removed"]:
        print(f"  {'Identity file:':<16}deleted")
    print(f"  {'SSH key kept:':<16}{result['kept_key']}\n")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    registry = load_registry()
    names = registry.names()
    if not names:
        print("No workspaces configured. Run 'gitws init <workspace>' to create one.")
        return 0

    print(f"\n  {'Workspace':<20} {'Alias':<32} {'Email':<32} {'Signing':<8}")
    print(f"  {'─' * 94}")
    for name in names:
        ws = registry.get(name)
        print(f"  {name:<20} {ws.ssh_alias:<32} {ws.email:<32} {ws.signing:<8}")
    print(f"\n  {len(names)} workspace(s)")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    registry = load_registry()
    ws = require_workspace(registry, args.workspace)

    print(f"\n  {args.workspace}")
    print(f"  {'─' * max(len(args.workspace), 40)}")
    for key, value in ws.to_dict().items():
        print(f"  {key + ':':<16}{value}")
    print()
    return 0
