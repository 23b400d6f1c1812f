"""Review thread CLI commands."""

import sys

import click


@click.command("list")
@click.argument("pr", nargs=-1)
@click.option("--repo", "-R", "repo", metavar="OWNER/REPO", help="Repository in [HOST/]OWNER/REPO format")
@click.option("--json", "as_json", is_flag=True, help="Print the raw GraphQL payload")
@click.option("--resolved", is_flag=True, help="Only show resolved threads")
@click.option("--unresolved", is_flag=True, help="Only show unresolved threads")
def list_command(pr: tuple[str, ...], repo: str | None, as_json: bool, resolved: bool, unresolved: bool) -> None:
    """List review threads on a pull request.

    PR defaults to the pull request of the current branch; --repo defaults to
    the current repository.
    """
    from gh_review_threads.threads.listing import run  # noqa: PLC0415

    sys.exit(run(list(pr), repo, as_json=as_json, resolved=resolved, unresolved=unresolved))


@click.command("reply")
@click.argument("comment_id")
@click.option("--body", "-b", required=True, help="Reply text")
@click.option("--repo", "-R", "repo", metavar="OWNER/REPO", help="Repository in [HOST/]OWNER/REPO format")
def reply_command(comment_id: str, body: str, repo: str | None) -> None:
    """Reply to a review comment.

    COMMENT_ID: Numeric database id of the comment (shown by 'list')
    """
    from gh_review_threads.threads.reply import run  # noqa: PLC0415

    sys.exit(run(comment_id, body, repo))


@click.command("resolve")
@click.argument("thread_id")
def resolve_command(thread_id: str) -> None:
    """Mark a review thread as resolved.

    THREAD_ID: Thread node id (shown in brackets by 'list')
    """
    from gh_review_threads.threads.resolve import run  # noqa: PLC0415

    sys.exit(run(thread_id, resolved=True))


@click.command("unresolve")
@click.argument("thread_id")
def unresolve_command(thread_id: str) -> None:
    """Mark a review thread as unresolved.

    THREAD_ID: Thread node id (shown in brackets by 'list')
    """
    from gh_review_threads.threads.resolve import run  # noqa: PLC0415

    sys.exit(run(thread_id, resolved=False))
