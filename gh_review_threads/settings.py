"""Environment-driven settings.

There are no config files; everything comes from the environment of the
current invocation.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

GH_EXECUTABLE_ENV = "GH_REVIEW_THREADS_GH"
DEBUG_ENV = "GH_REVIEW_THREADS_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one invocation."""

    gh_executable: str = "gh"
    debug: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings with defaults applied for unset or empty variables.
    """
    env = os.environ if environ is None else environ
    gh_executable = (env.get(GH_EXECUTABLE_ENV) or "").strip() or "gh"
    debug = (env.get(DEBUG_ENV) or "").strip().lower() in _TRUTHY
    return Settings(gh_executable=gh_executable, debug=debug)
