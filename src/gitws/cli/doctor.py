"""Doctor CLI command."""

import argparse

from gitws.doctor import run_checks
from gitws.git import find_git_root

_MARKS = {"error": "✗", "warning": "!", "info": "·"}


def cmd_doctor(args: argparse.Namespace) -> int:
    root = find_git_root(args.path)
    issues = run_checks(root, verbose=args.verbose, ssh=args.ssh)

    print(f"\n  Doctor: {root}")
    print(f"  {'─' * 50}")
    problems = [i for i in issues if i.level != "info"]
    for issue in issues:
        print(f"  {_MARKS.get(issue.level, '?')} [{issue.level.upper()}] {issue.message}")
        if issue.fix:
            print(f"      fix: {issue.fix}")

    errors = sum(1 for i in issues if i.level == "error")
    if not problems:
        print("  All checks passed.\n")
        return 0
    print(f"\n  {errors} error(s), {len(problems) - errors} warning(s)\n")
    return 1 if errors else 0
