"""Error taxonomy for gh-review-threads.

Every failure a command can hit is one of the classes below. Command handlers
catch ``ReviewThreadsError`` once, print the message to stderr and exit 1.
"""

from __future__ import annotations


class ReviewThreadsError(Exception):
    """Base class for all errors surfaced to the user."""

    exit_code = 1


class ValidationError(ReviewThreadsError):
    """Malformed or contradictory arguments, detected before any gh call."""


class ResolutionError(ReviewThreadsError):
    """The current repository or pull request could not be inferred."""


class TransportError(ReviewThreadsError):
    """gh exited non-zero (or could not be started)."""

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class ProtocolError(ReviewThreadsError):
    """gh succeeded but its output was undecodable or had an unexpected shape."""


class NotFoundError(ReviewThreadsError):
    """A well-formed response reported that the requested entity does not exist."""
