"""Repository CLI commands: clone, status, fix."""

import argparse

from gitws.cli.prompt import confirm
from gitws.workspace import apply_fixes, clone_repo, plan_fixes, repo_status


def cmd_clone(args: argparse.Namespace) -> int:
    result = clone_repo(args.workspace, args.url, branch=args.branch, enable_guards=args.enable_guards)
    print(f"\n  Cloned {result['repository']}")
    print(f"  {'─' * 50}")
    print(f"  {'Workspace:':<16}{result['workspace']}")
    print(f"  {'Remote:':<16}{result['ssh_url']}")
    print(f"  {'Branch:':<16}{result['branch']}")
    print(f"  {'Guard hooks:':<16}{'installed' if result['guards'] else 'not installed'}")
    print(f"  {'Location:':<16}{result['destination']}\n")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    status = repo_status(args.path)
    signing = status["signing"]

    print(f"\n  {status['repository']}")
    print(f"  {'─' * max(len(status['repository']), 40)}")
    print(f"  {'Path:':<16}{status['path']}")
    print(f"  {'Origin:':<16}{status['origin'] or '(none)'}")
    if status["workspace"]:
        print(f"  {'Workspace:':<16}{status['workspace']} (matched by {status['matched_by']})")
    else:
        print(f"  {'Workspace:':<16}(none)")
    print(f"  {'User:':<16}{status['user_name'] or '(unset)'} <{status['user_email'] or '(unset)'}>")
    if signing.enabled:
        print(f"  {'Signing:':<16}{signing.method} ({signing.key or 'no key'})")
    else:
        print(f"  {'Signing:':<16}disabled")
    print(f"  {'Guard hooks:':<16}{'installed' if status['guards'] else 'not installed'}")

    if status["issues"]:
        print(f"\n  Issues ({len(status['issues'])}):")
        for issue in status["issues"]:
            print(f"    - {issue}")
        print("\n  Run 'gitws fix' to correct them.")
    print()

    if status["issues"] and args.exit_non_zero:
        return 1
    return 0


def cmd_fix(args: argparse.Namespace) -> int:
    plan = plan_fixes(
        args.path,
        rewrite_remote=args.rewrite_remote,
        set_identity=args.set_identity,
        enable_guards=args.enable_guards,
    )
    if not plan["fixes"]:
        print("No fixes needed.")
        return 0

    print(f"\n  Planned fixes for {plan['path']} (workspace '{plan['workspace']}'):")
    for fix in plan["fixes"]:
        print(f"    - {fix.description}")
    print()

    if not confirm("Apply these fixes?", args.yes):
        print("Aborted.")
        return 1

    result = apply_fixes(plan)
    for line in result["applied"]:
        print(f"  ✓ {line}")
    for error in result["errors"]:
        print(f"  ✗ {error['fix']}: {error['error']}")
    return 1 if result["errors"] else 0
