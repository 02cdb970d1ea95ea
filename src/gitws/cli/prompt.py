"""Interactive confirmation."""

import os


def confirm(question: str, assume_yes: bool = False) -> bool:
    """Ask a yes/no question. ``--yes`` or a CI environment answers yes."""
    if assume_yes or os.environ.get("CI"):
        return True
    try:
        answer = input(f"{question} [y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")
