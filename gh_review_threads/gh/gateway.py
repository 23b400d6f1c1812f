"""Synchronous request/response boundary around the GitHub CLI.

Every network call the tool makes goes through ``gh``, which is assumed to be
installed and authenticated. Calls are one-shot: no retries, no backoff and no
timeout (interrupt the process to abort a hung call).
"""

from __future__ import annotations

import json
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from gh_review_threads.errors import ProtocolError, TransportError
from gh_review_threads.output import eprint
from gh_review_threads.settings import Settings, load_settings


@dataclass(frozen=True)
class ApiResult:
    """Outcome of one gh invocation.

    On success ``data`` holds the decoded payload (or raw stdout for plain
    ``run`` calls). On failure ``error`` holds gh's stderr, ``returncode``
    its exit status and ``output`` whatever it printed on stdout.
    """

    ok: bool
    data: Any = None
    error: str = ""
    returncode: int = 0
    output: str = ""

    @classmethod
    def success(cls, data: Any) -> ApiResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str, returncode: int, output: str = "") -> ApiResult:
        return cls(ok=False, error=error, returncode=returncode, output=output)

    def unwrap(self) -> Any:
        """Return the payload, or raise ``TransportError`` for a failed call."""
        if not self.ok:
            raise TransportError(self.error or f"gh exited with status {self.returncode}", self.returncode)
        return self.data


def _field_args(fields: Mapping[str, Any]) -> list[str]:
    """Build gh field flags.

    Strings go through ``-f`` (raw, never read from a file even when they
    start with ``@``); integers and booleans go through ``-F`` so gh sends
    them typed.
    """
    args: list[str] = []
    for name, value in fields.items():
        if isinstance(value, bool):
            args.extend(["-F", f"{name}={'true' if value else 'false'}"])
        elif isinstance(value, int):
            args.extend(["-F", f"{name}={value}"])
        else:
            args.extend(["-f", f"{name}={value}"])
    return args


def _redact(args: Sequence[str]) -> str:
    """Render an argument vector for the debug echo with field values elided."""
    shown: list[str] = []
    elide_next = False
    for arg in args:
        if elide_next:
            shown.append(arg.split("=", 1)[0] + "=…")
            elide_next = False
            continue
        shown.append(arg)
        elide_next = arg in ("-f", "-F")
    return " ".join(shown)


def _decode(stdout: str) -> Any:
    try:
        return json.loads(stdout)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"gh returned invalid JSON: {e}") from e


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict):
            return first.get("message", "Unknown GraphQL error")
        return str(first)
    if isinstance(errors, dict):
        return errors.get("message", "Unknown GraphQL error")
    return str(errors)


def _only_not_found(payload: Any) -> bool:
    """Whether every GraphQL error is NOT_FOUND and a data object came back."""
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        return False
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors:
        return False
    return all(isinstance(e, dict) and e.get("type") == "NOT_FOUND" for e in errors)


def _not_found_payload(output: str) -> Any:
    """Decode a failed call's stdout if it only reports NOT_FOUND errors, else None."""
    try:
        payload = json.loads(output)
    except json.JSONDecodeError:
        return None
    return payload if _only_not_found(payload) else None


class GhGateway:
    """Runs gh subcommands and decodes their output."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or load_settings()

    def run(self, args: Sequence[str]) -> ApiResult:
        """Run ``gh <args>`` and return its raw stdout.

        Raises:
            TransportError: If the gh executable cannot be found.
        """
        cmd = [self.settings.gh_executable, *args]
        if self.settings.debug:
            eprint(f"+ {_redact(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise TransportError(f"'{self.settings.gh_executable}' is required but not installed.", 127) from e

        if result.returncode != 0:
            return ApiResult.failure((result.stderr or "").rstrip(), result.returncode, result.stdout or "")

        return ApiResult.success(result.stdout or "")

    def execute(
        self,
        document: str,
        variables: Mapping[str, Any],
        *,
        hostname: str | None = None,
    ) -> ApiResult:
        """Run a GraphQL query or mutation.

        Args:
            document: Constant GraphQL document text.
            variables: Values for the document's variables, each passed as
                its own gh field.
            hostname: GitHub host to target instead of gh's default.

        Returns:
            ApiResult with the decoded JSON payload on success.

        Raises:
            ProtocolError: If gh exits 0 but stdout is not JSON.
        """
        args = ["api", "graphql"]
        if hostname:
            args.extend(["--hostname", hostname])
        args.extend(["-f", f"query={document}"])
        args.extend(_field_args(variables))

        result = self.run(args)
        if not result.ok:
            # gh exits 1 on GraphQL errors but still prints the body. A body
            # whose only errors are NOT_FOUND carries the null node the
            # caller needs to report a missing entity.
            partial = _not_found_payload(result.output)
            if partial is not None:
                return ApiResult.success(partial)
            return result

        data = _decode(result.data)

        if isinstance(data, dict) and data.get("errors"):
            if _only_not_found(data):
                return ApiResult.success(data)
            return ApiResult.failure(_first_error_message(data["errors"]), 1)

        return ApiResult.success(data)

    def rest(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        fields: Mapping[str, Any] | None = None,
        hostname: str | None = None,
    ) -> ApiResult:
        """Run an authenticated REST call via ``gh api``.

        Raises:
            ProtocolError: If gh exits 0 but stdout is not JSON.
        """
        args = ["api"]
        if hostname:
            args.extend(["--hostname", hostname])
        # gh switches to POST whenever fields are present, so name the method
        # explicitly in that case.
        if method != "GET" or fields:
            args.extend(["--method", method])
        args.append(endpoint)
        if fields:
            args.extend(_field_args(fields))

        result = self.run(args)
        if not result.ok:
            return result

        return ApiResult.success(_decode(result.data))
