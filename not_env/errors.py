"""
Failure taxonomy.

Everything raised during bootstrap is fatal; `register` turns it into a
single diagnostic line and exit status 1.
"""

from __future__ import annotations


class NotEnvError(Exception):
    """Base class for every not-env failure."""


class ConfigurationError(NotEnvError):
    """A bootstrap coordinate is missing from the OS environment."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"{key} environment variable is required")


class ValidationError(NotEnvError):
    """The service address is not a usable http(s) URL."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid {url!r}: {reason}")


class NetworkError(NotEnvError):
    """The request never produced an HTTP response (connect, DNS, timeout)."""

    def __init__(self, url: str, detail: str, *, timed_out: bool = False) -> None:
        self.url = url
        self.detail = detail
        self.timed_out = timed_out
        prefix = "Request timed out" if timed_out else "Request failed"
        super().__init__(f"{prefix}: GET {url}: {detail}")


class ProtocolError(NotEnvError):
    """The service answered with something other than HTTP 200."""

    def __init__(self, url: str, status_code: int, server_message: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.server_message = server_message
        text = f"Failed to fetch variables: HTTP {status_code} from {url}"
        if server_message:
            text += f" - {server_message}"
        super().__init__(text)


class ParseError(NotEnvError):
    """A 200 response whose body is not a valid variables document."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Failed to parse response from {url}: {detail}")


class InstallationError(NotEnvError):
    """The virtual environment is not (and can no longer be) installed."""


class ReadOnlyVariableError(NotEnvError, TypeError):
    """Attempted to change a variable that came from the service."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"{key} is read-only: only NOT_ENV_URL and NOT_ENV_API_KEY can be changed")
