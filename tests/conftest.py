"""Shared fixtures: builders for review-thread GraphQL payloads."""

from collections.abc import Callable
from typing import Any

import pytest


def _comment(
    database_id: int | None = 1001,
    body: str = "Looks off by one.",
    path: str = "src/app.py",
    line: int | None = 10,
    original_line: int | None = 10,
    login: str | None = "alice",
    node_id: str | None = None,
) -> dict[str, Any]:
    return {
        "id": node_id or f"PRRC_{database_id}",
        "databaseId": database_id,
        "body": body,
        "path": path,
        "line": line,
        "originalLine": original_line,
        "author": {"login": login} if login else None,
        "createdAt": "2024-05-01T12:00:00Z",
        "url": f"https://github.com/octo/hello/pull/42#discussion_r{database_id}",
    }


def _thread(thread_id: str = "PRRT_1", is_resolved: bool = False, comments: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "id": thread_id,
        "isResolved": is_resolved,
        "comments": {"nodes": comments if comments is not None else [_comment()]},
    }


def _payload(threads: list[dict[str, Any]], has_next_page: bool = False) -> dict[str, Any]:
    return {
        "data": {
            "repository": {
                "pullRequest": {
                    "reviewThreads": {
                        "pageInfo": {"hasNextPage": has_next_page},
                        "nodes": threads,
                    }
                }
            }
        }
    }


@pytest.fixture
def make_comment() -> Callable[..., dict[str, Any]]:
    """Factory for a review comment node."""
    return _comment


@pytest.fixture
def make_thread() -> Callable[..., dict[str, Any]]:
    """Factory for a review thread node."""
    return _thread


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a full listing response."""
    return _payload


@pytest.fixture
def mixed_payload() -> dict[str, Any]:
    """Three threads: unresolved, resolved, unresolved."""
    return _payload(
        [
            _thread("PRRT_a", False, [_comment(1), _comment(2, body="Agreed.", login="bob")]),
            _thread("PRRT_b", True, [_comment(3, path="README.md", line=None, original_line=4)]),
            _thread("PRRT_c", False, [_comment(5, path="old.py", line=None, original_line=None)]),
        ]
    )
