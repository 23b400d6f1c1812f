"""Unit tests for output formatting.

This test suite covers:
- Human rendering of threads and comments
- The empty-result message
- Machine rendering that keeps the upstream nested shape
"""

import json
from collections.abc import Callable
from typing import Any

from gh_review_threads.threads.formatting import NO_COMMENTS_MESSAGE, format_human, format_machine, format_thread
from gh_review_threads.threads.models import ThreadFilter, filter_threads, normalize


class TestFormatHuman:
    """Tests for human-readable rendering."""

    def test_full_rendering(self, mixed_payload: dict[str, Any]) -> None:
        """Threads should render as header plus comment triples, blank-line separated."""
        threads = normalize(mixed_payload)
        assert threads is not None

        expected = (
            "[PRRT_a] unresolved\n"
            "  1 src/app.py:10 (@alice)\n"
            "  Looks off by one.\n"
            "  https://github.com/octo/hello/pull/42#discussion_r1\n"
            "  2 src/app.py:10 (@bob)\n"
            "  Agreed.\n"
            "  https://github.com/octo/hello/pull/42#discussion_r2\n"
            "\n"
            "[PRRT_b] resolved\n"
            "  3 README.md:4 (@alice)\n"
            "  Looks off by one.\n"
            "  https://github.com/octo/hello/pull/42#discussion_r3\n"
            "\n"
            "[PRRT_c] unresolved\n"
            "  5 old.py (@alice)\n"
            "  Looks off by one.\n"
            "  https://github.com/octo/hello/pull/42#discussion_r5\n"
            "\n"
        )
        assert format_human(threads) == expected

    def test_multiline_body_indented(
        self, make_payload: Callable[..., Any], make_thread: Callable[..., Any], make_comment: Callable[..., Any]
    ) -> None:
        """Every body line should be indented; blank lines stay blank."""
        threads = normalize(make_payload([make_thread(comments=[make_comment(body="First.\n\nSecond.")])]))
        assert threads is not None

        lines = format_thread(threads[0]).splitlines()

        assert lines[2:5] == ["  First.", "", "  Second."]

    def test_empty_body_placeholder(
        self, make_payload: Callable[..., Any], make_thread: Callable[..., Any], make_comment: Callable[..., Any]
    ) -> None:
        """An empty or whitespace-only body should render a visible placeholder."""
        comments = [make_comment(1, body=""), make_comment(2, body="  \n")]
        threads = normalize(make_payload([make_thread(comments=comments)]))
        assert threads is not None

        lines = format_thread(threads[0]).splitlines()

        assert lines[2] == "  (no body)"
        assert lines[5] == "  (no body)"

    def test_node_id_when_no_database_id(
        self, make_payload: Callable[..., Any], make_thread: Callable[..., Any], make_comment: Callable[..., Any]
    ) -> None:
        """Comments without databaseId should show their node id."""
        threads = normalize(make_payload([make_thread(comments=[make_comment(None, node_id="PRRC_node")])]))
        assert threads is not None

        assert format_thread(threads[0]).splitlines()[1].startswith("  PRRC_node ")

    def test_empty(self) -> None:
        """No threads should print the fixed message only."""
        assert format_human([]) == "No review comments found.\n"
        assert NO_COMMENTS_MESSAGE == "No review comments found."


class TestFormatMachine:
    """Tests for JSON rendering."""

    def test_keeps_nested_shape(self, mixed_payload: dict[str, Any]) -> None:
        """Output should be the upstream document with filtered nodes."""
        threads = normalize(mixed_payload)
        assert threads is not None
        unresolved = filter_threads(threads, ThreadFilter.UNRESOLVED)

        rendered = json.loads(format_machine(mixed_payload, unresolved))

        nodes = rendered["data"]["repository"]["pullRequest"]["reviewThreads"]["nodes"]
        assert [n["id"] for n in nodes] == ["PRRT_a", "PRRT_c"]
        assert rendered["data"]["repository"]["pullRequest"]["reviewThreads"]["pageInfo"] == {"hasNextPage": False}

    def test_does_not_mutate_input(self, mixed_payload: dict[str, Any]) -> None:
        """The original payload should be left untouched."""
        threads = normalize(mixed_payload)
        assert threads is not None

        format_machine(mixed_payload, [])

        assert len(mixed_payload["data"]["repository"]["pullRequest"]["reviewThreads"]["nodes"]) == 3

