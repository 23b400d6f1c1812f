"""Review thread model, normalisation and filtering."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from gh_review_threads.errors import ProtocolError, ValidationError

# GitHub shows deleted accounts as "ghost".
GHOST_LOGIN = "ghost"


@dataclass(frozen=True)
class ReviewThreadComment:
    """A single comment inside a review thread."""

    id: str
    database_id: int | None
    body: str
    path: str
    line: int | None
    original_line: int | None
    author: str
    created_at: str
    url: str

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> ReviewThreadComment:
        author = node.get("author")
        return cls(
            id=node["id"],
            database_id=node.get("databaseId"),
            body=node.get("body") or "",
            path=node.get("path") or "",
            line=node.get("line"),
            original_line=node.get("originalLine"),
            author=(author or {}).get("login") or GHOST_LOGIN,
            created_at=node.get("createdAt") or "",
            url=node.get("url") or "",
        )


@dataclass(frozen=True)
class ReviewThread:
    """A review thread and its comments, in API order.

    ``raw`` is the node exactly as received so machine output can reproduce
    the upstream shape.
    """

    id: str
    is_resolved: bool
    comments: tuple[ReviewThreadComment, ...]
    raw: dict[str, Any]

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> ReviewThread:
        comment_nodes = (node.get("comments") or {}).get("nodes") or []
        if not comment_nodes:
            raise ProtocolError(f"Review thread {node.get('id')} has no comments.")
        return cls(
            id=node["id"],
            is_resolved=bool(node.get("isResolved")),
            comments=tuple(ReviewThreadComment.from_node(c) for c in comment_nodes),
            raw=node,
        )


class ThreadFilter(enum.Enum):
    """Which threads ``list`` shows."""

    ALL = "all"
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"

    @classmethod
    def from_flags(cls, resolved: bool, unresolved: bool) -> ThreadFilter:
        """Map the --resolved/--unresolved flags to a filter mode.

        Raises:
            ValidationError: If both flags are set.
        """
        if resolved and unresolved:
            raise ValidationError("--resolved and --unresolved are mutually exclusive.")
        if resolved:
            return cls.RESOLVED
        if unresolved:
            return cls.UNRESOLVED
        return cls.ALL

    def matches(self, thread: ReviewThread) -> bool:
        if self is ThreadFilter.RESOLVED:
            return thread.is_resolved
        if self is ThreadFilter.UNRESOLVED:
            return not thread.is_resolved
        return True


def _child(node: Any, key: str, where: str) -> Any:
    """Return ``node[key]`` (possibly None), insisting ``node`` is an object."""
    if not isinstance(node, dict):
        raise ProtocolError(f"Unexpected response shape at {where}.")
    return node.get(key)


def normalize(raw: Any) -> list[ReviewThread] | None:
    """Turn a review-thread listing payload into ReviewThread objects.

    Walks ``data.repository.pullRequest.reviewThreads.nodes``.

    Returns:
        The threads in API order, an empty list when the pull request has
        none, or None when the repository or pull request does not exist.

    Raises:
        ProtocolError: If the payload does not have the expected shape.
    """
    data = _child(raw, "data", "response")
    if data is None:
        raise ProtocolError("Response is missing 'data'.")

    repository = _child(data, "repository", "data")
    if repository is None:
        return None

    pull_request = _child(repository, "pullRequest", "data.repository")
    if pull_request is None:
        return None

    review_threads = _child(pull_request, "reviewThreads", "data.repository.pullRequest")
    if review_threads is None:
        raise ProtocolError("Response is missing 'reviewThreads'.")

    nodes = _child(review_threads, "nodes", "reviewThreads")
    if nodes is None:
        return []
    if not isinstance(nodes, list):
        raise ProtocolError("Unexpected response shape at reviewThreads.nodes.")

    try:
        return [ReviewThread.from_node(node) for node in nodes]
    except (KeyError, TypeError, AttributeError) as e:
        raise ProtocolError(f"Unexpected review thread shape: {e}") from e


def filter_threads(threads: Iterable[ReviewThread], mode: ThreadFilter) -> list[ReviewThread]:
    """Return the threads matching ``mode``, preserving order."""
    return [t for t in threads if mode.matches(t)]


def has_more_threads(raw: Any) -> bool:
    """Whether the listing payload reports threads beyond the first page."""
    try:
        page_info = raw["data"]["repository"]["pullRequest"]["reviewThreads"]["pageInfo"]
    except (KeyError, TypeError):
        return False
    return bool(page_info and page_info.get("hasNextPage"))


def display_location(comment: ReviewThreadComment) -> str:
    """Return ``path:line``, falling back to the original line, then the bare path."""
    line = comment.line if comment.line is not None else comment.original_line
    if line is None:
        return comment.path
    return f"{comment.path}:{line}"
