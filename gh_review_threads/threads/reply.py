"""Reply to a pull request review comment.

Replies go through the REST API and address the parent comment by its
numeric database id (the number ``list`` prints next to each comment):

1. ``GET repos/{owner}/{repo}/pulls/comments/{id}`` to find the pull request
   the comment belongs to (last segment of ``pull_request_url``).
2. ``POST repos/{owner}/{repo}/pulls/{number}/comments/{id}/replies``.

Step 2 never runs if step 1 fails. Step 1 is read-only, so a failure in
step 2 leaves nothing to undo.
"""

from __future__ import annotations

import re

import click

from gh_review_threads.errors import ProtocolError, ReviewThreadsError, ValidationError
from gh_review_threads.gh.gateway import GhGateway
from gh_review_threads.gh.queries import REVIEW_COMMENT_ENDPOINT, REVIEW_COMMENT_REPLIES_ENDPOINT
from gh_review_threads.gh.target import AmbientContext, GhContext, Target, resolve
from gh_review_threads.output import eprint

# GitHub comment bodies are limited to 65536 characters.
MAX_BODY_LENGTH = 60000
TRUNCATION_MARKER = "\n...[truncated]"


def parse_comment_id(value: str) -> int:
    """Parse a numeric review comment id.

    Raises:
        ValidationError: If the value is not a positive integer.
    """
    if not re.match(r"^\d+$", value.strip()) or int(value) == 0:
        raise ValidationError(f"Comment ID must be a numeric database id, got: '{value}'.")
    return int(value)


def prepare_body(body: str) -> str:
    """Validate and, if needed, truncate a reply body.

    Raises:
        ValidationError: If the body is empty or whitespace.
    """
    if not body.strip():
        raise ValidationError("Reply body must not be empty.")
    if len(body) > MAX_BODY_LENGTH:
        eprint(f"Warning: reply body truncated to {MAX_BODY_LENGTH} characters.")
        body = body[:MAX_BODY_LENGTH] + TRUNCATION_MARKER
    return body


def pull_request_number_from_url(url: object) -> int:
    """Extract the PR number from a ``pull_request_url``.

    Raises:
        ProtocolError: If the URL is missing or does not end in a number.
    """
    if not isinstance(url, str) or not url:
        raise ProtocolError("Review comment response has no pull_request_url.")
    last = url.rstrip("/").rsplit("/", 1)[-1]
    if not last.isdigit():
        raise ProtocolError(f"Could not determine pull request number from '{url}'.")
    return int(last)


def lookup_pull_request(gateway: GhGateway, target: Target, comment_id: int) -> int:
    """Find the pull request number a review comment belongs to."""
    endpoint = REVIEW_COMMENT_ENDPOINT.format(owner=target.owner, repo=target.repo, comment_id=comment_id)
    comment = gateway.rest(endpoint, hostname=target.host).unwrap()
    if not isinstance(comment, dict):
        raise ProtocolError("Unexpected review comment response.")
    return pull_request_number_from_url(comment.get("pull_request_url"))


def post_reply(gateway: GhGateway, target: Target, pr_number: int, comment_id: int, body: str) -> str:
    """Post the reply and return its html_url."""
    endpoint = REVIEW_COMMENT_REPLIES_ENDPOINT.format(
        owner=target.owner, repo=target.repo, pr_number=pr_number, comment_id=comment_id
    )
    created = gateway.rest(endpoint, method="POST", fields={"body": body}, hostname=target.host).unwrap()
    if not isinstance(created, dict) or not created.get("html_url"):
        raise ProtocolError("Reply was created but the response has no html_url.")
    return created["html_url"]


def reply_to_comment(
    comment_id: str,
    body: str,
    repo: str | None,
    *,
    gateway: GhGateway,
    context: AmbientContext,
) -> str:
    """Reply to a review comment and return the reply's URL.

    Raises:
        ReviewThreadsError: On any validation, resolution or gh failure.
    """
    parsed_id = parse_comment_id(comment_id)
    body = prepare_body(body)

    target = resolve(repo, context=context, require_pr=False)

    pr_number = lookup_pull_request(gateway, target, parsed_id)
    return post_reply(gateway, target, pr_number, parsed_id, body)


def run(
    comment_id: str,
    body: str,
    repo: str | None = None,
    *,
    gateway: GhGateway | None = None,
    context: AmbientContext | None = None,
) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    gateway = gateway or GhGateway()
    context = context or GhContext(gateway)

    try:
        url = reply_to_comment(comment_id, body, repo, gateway=gateway, context=context)
    except ReviewThreadsError as e:
        eprint(f"Error: {e}")
        return e.exit_code

    click.echo(url)
    return 0
