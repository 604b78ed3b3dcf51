"""Shared fixtures: a clean bootstrap environment and stub-service clients."""

from __future__ import annotations

import os
from typing import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from not_env.services import installation as installation_module
from not_env.services.installation import Installation
from not_env.stub_service import create_app

SERVICE_URL = "http://localhost:9999"
API_KEY = "k1"


@pytest.fixture(autouse=True)
def _hermetic_os_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without coordinates, a .env file, or a patched os.environ."""
    original = os.environ
    monkeypatch.delenv("NOT_ENV_URL", raising=False)
    monkeypatch.delenv("NOT_ENV_API_KEY", raising=False)
    monkeypatch.setattr(installation_module, "load_environment", lambda: None)
    monkeypatch.setattr(installation_module, "_installation", None)
    yield
    os.environ = original


@pytest.fixture
def coordinates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOT_ENV_URL", SERVICE_URL)
    monkeypatch.setenv("NOT_ENV_API_KEY", API_KEY)


@pytest.fixture
def stub_client() -> Callable[..., TestClient]:
    """Factory for TestClients over a stub service holding the given pairs."""

    def _make(variables=(), api_key: str | None = API_KEY) -> TestClient:
        return TestClient(create_app(variables, api_key=api_key))

    return _make


@pytest.fixture
def installation() -> Iterator[Installation]:
    inst = Installation()
    yield inst
    inst.uninstall()


@pytest.fixture
def mock_client() -> Callable[..., httpx.Client]:
    """Factory for httpx clients whose requests go to *handler* instead of the network."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
