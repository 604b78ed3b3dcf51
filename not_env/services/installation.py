"""
Process-wide installation state — one virtual environment per process.

    UNINITIALIZED → FETCHING → INSTALLED   (terminal)
                             ↘ FAILED      (terminal)

`register()` is the entry point applications call (or trigger by importing
`not_env.register`); `get_environment()` is the accessor everything else
goes through.
"""

from __future__ import annotations

import enum
import logging
import os
import sys
from typing import MutableMapping

import httpx

from not_env.config import (
    BOOTSTRAP_TIMEOUT_SECONDS,
    BootstrapSettings,
    capture_snapshot,
    load_environment,
)
from not_env.errors import InstallationError, NotEnvError
from not_env.services.bootstrap import bootstrap
from not_env.services.environment import VirtualEnvironment

log = logging.getLogger(__name__)


class InstallState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    FETCHING = "fetching"
    INSTALLED = "installed"
    FAILED = "failed"


class Installation:
    def __init__(self) -> None:
        self._state = InstallState.UNINITIALIZED
        self._environment: VirtualEnvironment | None = None
        self._saved_environ: MutableMapping[str, str] | None = None
        self._error: BaseException | None = None

    @property
    def state(self) -> InstallState:
        return self._state

    @property
    def environment(self) -> VirtualEnvironment:
        if self._environment is None:
            raise InstallationError(f"not-env is not installed (state: {self._state.value})")
        return self._environment

    def install(
        self,
        *,
        client: httpx.Client | None = None,
        patch_os: bool = True,
        timeout: float = BOOTSTRAP_TIMEOUT_SECONDS,
    ) -> VirtualEnvironment:
        """Fetch once and install the virtual environment.

        Calling again after a successful install returns the same instance
        without fetching or patching anything.
        """
        if self._state is InstallState.INSTALLED:
            return self.environment
        if self._state is InstallState.FAILED:
            raise InstallationError(f"not-env bootstrap already failed: {self._error}")
        if self._state is InstallState.FETCHING:
            raise InstallationError("not-env bootstrap is already in progress")

        load_environment()
        snapshot = capture_snapshot()

        self._state = InstallState.FETCHING
        try:
            store = bootstrap(BootstrapSettings.from_snapshot(snapshot), client=client, timeout=timeout)
        except BaseException as exc:
            self._state = InstallState.FAILED
            self._error = exc
            raise

        self._environment = VirtualEnvironment(store, snapshot)
        if patch_os:
            self._saved_environ = os.environ
            os.environ = self._environment  # type: ignore[assignment]
        self._state = InstallState.INSTALLED
        log.info("Virtual environment installed (%d variables)", len(store))
        return self._environment

    def uninstall(self) -> None:
        """Put the original `os.environ` back. The state stays INSTALLED."""
        if self._saved_environ is not None:
            os.environ = self._saved_environ  # type: ignore[assignment]
            self._saved_environ = None


_installation: Installation | None = None


def get_installation() -> Installation:
    """Return (and lazily create) the process-wide installation."""
    global _installation
    if _installation is None:
        _installation = Installation()
    return _installation


def get_environment() -> VirtualEnvironment:
    """Return the installed virtual environment."""
    return get_installation().environment


def install(**kwargs) -> VirtualEnvironment:
    return get_installation().install(**kwargs)


def register(
    *,
    client: httpx.Client | None = None,
    patch_os: bool = True,
) -> VirtualEnvironment:
    """Install or die: any bootstrap failure prints one line and exits 1."""
    try:
        return install(client=client, patch_os=patch_os)
    except NotEnvError as exc:
        print(f"Failed to initialize not-env-sdk: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
