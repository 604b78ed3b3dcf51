"""
Bootstrap — the one blocking fetch that runs before application code.

Exactly one `GET {base}/variables` per process. Every failure is raised as
a `NotEnvError` subclass; the caller decides to exit.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any

import httpx
from pydantic import ValidationError as SchemaValidationError

from not_env.config import API_KEY_KEY, BOOTSTRAP_TIMEOUT_SECONDS, URL_KEY, BootstrapSettings
from not_env.errors import (
    ConfigurationError,
    NetworkError,
    ParseError,
    ProtocolError,
    ValidationError,
)
from not_env.models import ErrorResponse, VariablesResponse
from not_env.services.variable_store import VariableStore

log = logging.getLogger(__name__)


def validate_base_url(url: str) -> httpx.URL:
    """Parse the service address; only absolute http(s) URLs are accepted."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ValidationError(url, str(exc)) from exc

    if parsed.scheme not in ("http", "https"):
        raise ValidationError(url, "scheme must be http or https")
    if not parsed.host:
        raise ValidationError(url, "missing host")
    return parsed


def variables_url(base_url: str) -> str:
    """`https://host/api/` → `https://host/api/variables`."""
    return base_url.rstrip("/") + "/variables"


def _request_headers(api_key: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _server_message(response: httpx.Response) -> str:
    """Pull `error`/`message` out of an error body, else return it verbatim."""
    body = response.text
    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()

    if isinstance(payload, dict):
        try:
            summary = ErrorResponse.model_validate(payload).summary()
        except SchemaValidationError:
            summary = ""
        if summary:
            return summary
    return body.strip()


def _parse_variables(url: str, response: httpx.Response) -> VariableStore:
    try:
        payload: Any = json.loads(response.content)
    except ValueError as exc:
        raise ParseError(url, f"malformed JSON ({exc})") from exc

    if not isinstance(payload, dict):
        raise ParseError(url, f"expected a JSON object, got {type(payload).__name__}")

    try:
        document = VariablesResponse.model_validate(payload)
    except SchemaValidationError as exc:
        raise ParseError(url, f"unexpected response shape ({exc.error_count()} errors)") from exc

    return VariableStore.from_pairs(document.variables)


def _get(url: str, api_key: str, timeout: float, client: httpx.Client | None) -> httpx.Response:
    owns_client = client is None
    http = client if client is not None else httpx.Client()
    try:
        return http.get(url, headers=_request_headers(api_key), timeout=timeout)
    except httpx.TimeoutException as exc:
        raise NetworkError(url, f"no response within {timeout:g}s", timed_out=True) from exc
    except httpx.RequestError as exc:
        raise NetworkError(url, str(exc) or type(exc).__name__) from exc
    finally:
        if owns_client:
            http.close()


def fetch_variables(
    base_url: str,
    api_key: str,
    *,
    timeout: float = BOOTSTRAP_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> VariableStore:
    """GET `{base_url}/variables` and build the store from the response.

    The whole exchange, body included, must finish within *timeout*
    seconds of the request starting. Raises NetworkError, ProtocolError or
    ParseError. A caller-supplied client is used as-is and left open.
    """
    url = variables_url(base_url)
    result: dict[str, Any] = {}

    def _target() -> None:
        try:
            result["response"] = _get(url, api_key, timeout, client)
        except Exception as exc:
            result["exc"] = exc

    # Deadline covers the whole exchange, measured from request start.
    worker = threading.Thread(target=_target, name="not-env-bootstrap", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise NetworkError(url, f"no response within {timeout:g}s", timed_out=True)
    if "exc" in result:
        raise result["exc"]

    response: httpx.Response = result["response"]
    if response.status_code != 200:
        raise ProtocolError(url, response.status_code, _server_message(response))

    store = _parse_variables(url, response)
    log.info("Fetched %d variables ← %s", len(store), url)
    return store


def bootstrap(
    settings: BootstrapSettings,
    *,
    timeout: float = BOOTSTRAP_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> VariableStore:
    """Check the bootstrap coordinates, then perform the single fetch."""
    if not settings.url:
        raise ConfigurationError(URL_KEY)
    if not settings.api_key:
        raise ConfigurationError(API_KEY_KEY)

    validate_base_url(settings.url)
    log.info("Bootstrapping variables from %s", settings.url)
    return fetch_variables(settings.url, settings.api_key, timeout=timeout, client=client)
