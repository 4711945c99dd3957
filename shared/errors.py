"""
Error taxonomy for git-wrapped.

Every failure surfaced to the command line derives from ``WrappedError`` so
the CLI can report it as a single line and exit non-zero.
"""

from typing import Optional


class WrappedError(Exception):
    """Base class for all git-wrapped failures."""


class ConfigurationError(WrappedError):
    """Missing or invalid command line input or settings."""


class RepositoryError(WrappedError):
    """The repository could not be opened or its history could not be read."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NoCommitsFoundError(WrappedError):
    """The author/year criteria matched no commits."""

    def __init__(
        self,
        message: str = "unable to generate a git-wrapped for the provided author, no commits were found!",
    ):
        super().__init__(message)


class StatisticsError(WrappedError):
    """Computing the change statistics of a commit failed."""

    def __init__(self, commit_hash: str, reason: str):
        super().__init__(f"unable to compute change statistics for commit {commit_hash}: {reason}")
        self.commit_hash = commit_hash
