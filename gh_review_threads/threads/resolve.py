"""Resolve or unresolve a review thread by its GraphQL node id."""

from __future__ import annotations

from typing import Any

import click

from gh_review_threads.errors import NotFoundError, ProtocolError, ReviewThreadsError, ValidationError
from gh_review_threads.gh.gateway import GhGateway
from gh_review_threads.gh.queries import RESOLVE_THREAD_MUTATION, UNRESOLVE_THREAD_MUTATION
from gh_review_threads.output import eprint


def set_thread_resolved(gateway: GhGateway, thread_id: str, resolved: bool) -> dict[str, Any]:
    """Run the resolve/unresolve mutation.

    Returns:
        The ``{id, isResolved}`` pair reported by GitHub.

    Raises:
        ValidationError: If ``thread_id`` is blank.
        TransportError: If gh fails.
        NotFoundError: If GitHub returns no thread.
    """
    thread_id = thread_id.strip()
    if not thread_id:
        raise ValidationError("Thread ID must not be empty.")

    if resolved:
        document, field = RESOLVE_THREAD_MUTATION, "resolveReviewThread"
    else:
        document, field = UNRESOLVE_THREAD_MUTATION, "unresolveReviewThread"

    data = gateway.execute(document, {"threadId": thread_id}).unwrap()

    try:
        payload = data["data"][field]
    except (KeyError, TypeError) as e:
        raise ProtocolError(f"Unexpected {field} response shape.") from e

    thread = payload.get("thread") if isinstance(payload, dict) else None
    if not thread:
        raise NotFoundError(f"Review thread {thread_id} not found.")
    return thread


def run(thread_id: str, *, resolved: bool = True, gateway: GhGateway | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    gateway = gateway or GhGateway()

    try:
        thread = set_thread_resolved(gateway, thread_id, resolved)
    except ReviewThreadsError as e:
        eprint(f"Error: {e}")
        return e.exit_code

    verb = "Resolved" if thread.get("isResolved") else "Unresolved"
    click.echo(f"{verb} thread {thread.get('id', thread_id)}.")
    return 0
