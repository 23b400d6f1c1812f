"""Main CLI entry point for gh-review-threads."""

import click

from gh_review_threads.threads import commands as thread_commands


@click.group()
@click.version_option(package_name="gh-review-threads")
def cli() -> None:
    """Inspect and manage pull request review threads via the GitHub CLI."""
    pass


cli.add_command(thread_commands.list_command, name="list")
cli.add_command(thread_commands.reply_command, name="reply")
cli.add_command(thread_commands.resolve_command, name="resolve")
cli.add_command(thread_commands.unresolve_command, name="unresolve")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
