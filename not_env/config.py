"""
Bootstrap configuration.

Loads values from `.env` for local development while preserving real
environment variables in production, and captures the OS-level snapshot
the virtual environment keeps its two bootstrap coordinates in.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

URL_KEY = "NOT_ENV_URL"
API_KEY_KEY = "NOT_ENV_API_KEY"

# Service address and credential stay visible (and writable) after install.
PRESERVED_KEYS: tuple[str, str] = (URL_KEY, API_KEY_KEY)

BOOTSTRAP_TIMEOUT_SECONDS = 30.0


def load_environment() -> None:
    load_dotenv(find_dotenv(usecwd=True), override=False)


def capture_snapshot(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy the OS-level variables as they are right now."""
    return dict(os.environ if environ is None else environ)


@dataclass(frozen=True)
class BootstrapSettings:
    url: str | None
    api_key: str | None

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, str]) -> BootstrapSettings:
        return cls(url=snapshot.get(URL_KEY), api_key=snapshot.get(API_KEY_KEY))
