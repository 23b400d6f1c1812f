"""List review threads on a pull request.

Fetches up to 100 review threads (each with up to 100 comments) in a single
GraphQL query, optionally keeps only resolved or unresolved ones, and prints
them as text or as the upstream JSON shape.
"""

from __future__ import annotations

from collections.abc import Sequence

import click

from gh_review_threads.errors import NotFoundError, ReviewThreadsError, ValidationError
from gh_review_threads.gh.gateway import GhGateway
from gh_review_threads.gh.queries import LIST_REVIEW_THREADS_QUERY
from gh_review_threads.gh.target import AmbientContext, GhContext, resolve
from gh_review_threads.output import eprint
from gh_review_threads.threads.formatting import NO_COMMENTS_MESSAGE, format_human, format_machine
from gh_review_threads.threads.models import ThreadFilter, filter_threads, has_more_threads, normalize


def list_threads(
    pr_args: Sequence[str],
    repo: str | None,
    *,
    as_json: bool,
    resolved: bool,
    unresolved: bool,
    gateway: GhGateway,
    context: AmbientContext,
) -> str:
    """Fetch, filter and render the review threads of one pull request.

    Returns:
        The rendered output.

    Raises:
        ReviewThreadsError: On any validation, resolution or gh failure.
    """
    if len(pr_args) > 1:
        raise ValidationError(f"Expected at most one pull request argument, got {len(pr_args)}.")
    mode = ThreadFilter.from_flags(resolved, unresolved)

    target = resolve(repo, pr_args[0] if pr_args else None, context=context)

    variables = {"owner": target.owner, "repo": target.repo, "pr": target.pull_request}
    raw = gateway.execute(LIST_REVIEW_THREADS_QUERY, variables, hostname=target.host).unwrap()

    threads = normalize(raw)
    if threads is None:
        raise NotFoundError(f"Pull request #{target.pull_request} not found in {target.full_name}.")

    if has_more_threads(raw):
        eprint("Warning: pull request has more than 100 review threads; only the first 100 are shown.")

    selected = filter_threads(threads, mode)
    if not selected:
        return NO_COMMENTS_MESSAGE + "\n"
    if as_json:
        return format_machine(raw, selected) + "\n"
    return format_human(selected)


def run(
    pr_args: Sequence[str],
    repo: str | None = None,
    *,
    as_json: bool = False,
    resolved: bool = False,
    unresolved: bool = False,
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
        output = list_threads(
            pr_args,
            repo,
            as_json=as_json,
            resolved=resolved,
            unresolved=unresolved,
            gateway=gateway,
            context=context,
        )
    except ReviewThreadsError as e:
        eprint(f"Error: {e}")
        return e.exit_code

    click.echo(output, nl=False)
    return 0
