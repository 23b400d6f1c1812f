"""Render review threads for people or for machines."""

from __future__ import annotations

import copy
import json
from collections.abc import Sequence
from typing import Any

from gh_review_threads.threads.models import ReviewThread, ReviewThreadComment, display_location

NO_COMMENTS_MESSAGE = "No review comments found."
EMPTY_BODY_PLACEHOLDER = "(no body)"


def comment_identifier(comment: ReviewThreadComment) -> str:
    """Numeric database id when known (what ``reply`` takes), else the node id."""
    if comment.database_id is not None:
        return str(comment.database_id)
    return comment.id


def _indent(text: str, prefix: str = "  ") -> list[str]:
    if not text.strip():
        return [f"{prefix}{EMPTY_BODY_PLACEHOLDER}"]
    lines = text.splitlines()
    return [f"{prefix}{line}" if line else prefix.rstrip() for line in lines]


def format_thread(thread: ReviewThread) -> str:
    """Render one thread: header line, then id/location/author, body and URL per comment."""
    state = "resolved" if thread.is_resolved else "unresolved"
    lines = [f"[{thread.id}] {state}"]
    for comment in thread.comments:
        lines.append(f"  {comment_identifier(comment)} {display_location(comment)} (@{comment.author})")
        lines.extend(_indent(comment.body))
        lines.append(f"  {comment.url}")
    return "\n".join(lines)


def format_human(threads: Sequence[ReviewThread]) -> str:
    """Render threads in API order, each followed by a blank line.

    Returns the empty-result message when there is nothing to show.
    """
    if not threads:
        return NO_COMMENTS_MESSAGE + "\n"
    return "".join(format_thread(t) + "\n\n" for t in threads)


def format_machine(raw: dict[str, Any], threads: Sequence[ReviewThread]) -> str:
    """Render the upstream payload with only the given threads kept.

    The nested ``data.repository.pullRequest.reviewThreads.nodes`` shape is
    preserved.
    """
    payload = copy.deepcopy(raw)
    payload["data"]["repository"]["pullRequest"]["reviewThreads"]["nodes"] = [t.raw for t in threads]
    return json.dumps(payload, indent=2)
