"""Exceptions raised by gitws operations."""


class GitwsError(Exception):
    """Base class for errors reported to the user by the CLI."""


class WorkspaceNotFound(GitwsError):
    def __init__(self, name: str):
        super().__init__(f"workspace '{name}' not found. Run 'gitws init {name}' first")
        self.name = name


class StepFailed(GitwsError):
    """A named step of a multi-step operation failed.

    The underlying exception is chained as ``__cause__``. Steps that already
    completed are not rolled back; each file write is atomic on its own.
    """

    def __init__(self, step: str, reason: object):
        super().__init__(f"failed to {step}: {reason}")
        self.step = step
