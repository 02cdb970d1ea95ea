"""Doctor module — diagnose identity and routing problems in a repository."""

from gitws.doctor.checks import Issue, run_checks

__all__ = ["Issue", "run_checks"]
