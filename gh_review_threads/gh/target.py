"""Resolve which repository and pull request a command operates on.

Explicit ``--repo`` / PR arguments win; anything omitted is inferred from the
current checkout through gh ("ambient context").
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from gh_review_threads.errors import ResolutionError, ValidationError
from gh_review_threads.gh.gateway import GhGateway

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
_PR_PATTERN = re.compile(r"^#?(\d+)$")
_PR_URL_PATTERN = re.compile(r"/([^/]+)/([^/]+)/pull/(\d+)/?$")


@dataclass(frozen=True)
class Target:
    """Repository (and optionally pull request) a command acts on."""

    owner: str
    repo: str
    pull_request: int | None = None
    host: str | None = None

    @property
    def full_name(self) -> str:
        """Return the repository as owner/repo."""
        return f"{self.owner}/{self.repo}"


class AmbientContext(Protocol):
    """Source of the current repository and pull request."""

    def current_repository(self) -> str: ...

    def current_pull_request(self) -> str: ...


class GhContext:
    """Ambient context backed by ``gh repo view`` / ``gh pr view``.

    Both lookups ask for URLs so the host (for GitHub Enterprise checkouts)
    and the pull request's repository are known.
    """

    def __init__(self, gateway: GhGateway) -> None:
        self.gateway = gateway

    def current_repository(self) -> str:
        result = self.gateway.run(["repo", "view", "--json", "url", "--jq", ".url"])
        if not result.ok:
            raise ResolutionError(result.error or "Could not determine the current repository.")
        name = result.data.strip()
        if not name:
            raise ResolutionError("Could not determine the current repository.")
        return name

    def current_pull_request(self) -> str:
        result = self.gateway.run(["pr", "view", "--json", "url", "--jq", ".url"])
        if not result.ok:
            raise ResolutionError(result.error or "Could not determine the current pull request.")
        url = result.data.strip()
        if not url:
            raise ResolutionError("Could not determine the current pull request.")
        return url


def parse_repository(value: str) -> tuple[str | None, str, str]:
    """Split a repository specifier into (host, owner, repo).

    Accepts ``OWNER/REPO`` and ``HOST/OWNER/REPO``; empty segments are
    ignored and the last two segments are owner and repo.

    Raises:
        ValidationError: If fewer than two segments remain or a name
            contains characters GitHub does not allow.
    """
    segments = [s for s in value.strip().split("/") if s]
    if len(segments) < 2:
        raise ValidationError(f"Invalid repository format: '{value}'. Expected OWNER/REPO or HOST/OWNER/REPO.")

    owner, repo = segments[-2], segments[-1]
    if not _NAME_PATTERN.match(owner) or not _NAME_PATTERN.match(repo):
        raise ValidationError(f"Invalid repository format: '{value}'. Expected OWNER/REPO or HOST/OWNER/REPO.")

    host = segments[-3] if len(segments) >= 3 else None
    return host, owner, repo


def parse_pull_request(value: str) -> int:
    """Parse a PR number such as ``42`` or ``#42``.

    Raises:
        ValidationError: If the value is not a positive integer.
    """
    match = _PR_PATTERN.match(value.strip())
    if not match or int(match.group(1)) == 0:
        raise ValidationError(f"Invalid pull request number: '{value}'.")
    return int(match.group(1))


def _ambient_pull_request(value: str, owner: str, repo: str) -> int:
    """Parse the current branch's PR (a number or a pull request URL).

    Raises:
        ResolutionError: If the value is unusable or the PR belongs to a
            repository other than owner/repo.
    """
    value = value.strip()
    match = _PR_PATTERN.match(value)
    if match:
        return int(match.group(1))

    match = _PR_URL_PATTERN.search(value)
    if not match:
        raise ResolutionError(f"Unexpected pull request from gh: '{value}'.")

    pr_owner, pr_repo, number = match.groups()
    if (pr_owner.lower(), pr_repo.lower()) != (owner.lower(), repo.lower()):
        raise ResolutionError(
            f"The current branch's pull request is {pr_owner}/{pr_repo}#{number}, not in {owner}/{repo}. "
            "Pass the pull request number explicitly."
        )
    return int(number)


def resolve(
    explicit_repo: str | None = None,
    explicit_pr: str | None = None,
    *,
    context: AmbientContext,
    require_pr: bool = True,
) -> Target:
    """Build the Target for this invocation.

    Args:
        explicit_repo: Value of ``--repo``, if given.
        explicit_pr: Positional PR argument, if given.
        context: Where to look up whatever was omitted.
        require_pr: Whether a pull request is needed at all.

    Raises:
        ValidationError: For malformed explicit values.
        ResolutionError: If an ambient lookup fails.
    """
    pr_number: int | None = None
    if explicit_pr is not None:
        pr_number = parse_pull_request(explicit_pr)

    repo_spec = explicit_repo if explicit_repo else context.current_repository()
    host, owner, repo = parse_repository(repo_spec)

    if pr_number is None and require_pr:
        pr_number = _ambient_pull_request(context.current_pull_request(), owner, repo)

    return Target(owner=owner, repo=repo, pull_request=pr_number, host=host)
