"""Test configuration and shared fixtures.

Provide isolated test settings, fake status endpoints and client fixtures for
the exporter test suite. Every outbound request is served by
`httpx.MockTransport`; no test touches the network or a `.env` file.
"""
from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from atlassian_status_exporter import main as main_module
from atlassian_status_exporter.config import Settings
from atlassian_status_exporter.core.http import build_http_client
from atlassian_status_exporter.core.types import ProbeTarget

Handler = Callable[[httpx.Request], httpx.Response]

TEST_HOST = "jira.example.com"
TEST_STATUS_URL = f"https://{TEST_HOST}/status"


# ==============================================================================
# CONFIGURATION FIXTURES
# ==============================================================================

@pytest.fixture(scope="session")
def mock_settings() -> Settings:
    """Provide isolated test configuration without external dependencies."""
    return Settings(
        ENVIRONMENT="development",
        LOG_LEVEL="debug",
        APP_URL=TEST_HOST,
        SVC_TIMEOUT=2,
        _env_file=None,  # Bypass any local environment file
    )


@pytest.fixture
def target(mock_settings: Settings) -> ProbeTarget:
    return mock_settings.probe_target()


# ==============================================================================
# FAKE STATUS ENDPOINT
# ==============================================================================

def _respond(status_code: int, body: bytes | str = b"") -> Handler:
    """Build a handler answering every request with a fixed status and body."""
    content = body.encode() if isinstance(body, str) else body

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return handler


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


@pytest.fixture
def respond() -> Callable[..., Handler]:
    """Provide the fixed-response handler builder."""
    return _respond


@pytest.fixture
def refuse() -> Handler:
    """Provide a handler that fails like a closed port."""
    return _refuse


@pytest.fixture
def make_http_client(mock_settings: Settings) -> Generator[Callable[[Handler], httpx.Client], None, None]:
    """Provide a factory of httpx clients backed by a fake status endpoint.

    Yields:
        Callable: Takes a request handler, returns a client; all clients are
            closed after the test.
    """
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> httpx.Client:
        client = build_http_client(mock_settings, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


# ==============================================================================
# APPLICATION FIXTURES
# ==============================================================================

@pytest.fixture
def status_endpoint() -> dict[str, Handler]:
    """Mutable holder for the handler behind the app's outbound client."""
    return {"handler": _respond(200, '{"state":"RUNNING"}')}


@pytest.fixture(scope="function")
def client(
    mock_settings: Settings,
    status_endpoint: dict[str, Handler],
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[TestClient, None, None]:
    """Provide an HTTP test client for the exporter app with a faked target.

    Args:
        mock_settings: Isolated test configuration.
        status_endpoint: Holder whose handler answers the probes.

    Yields:
        TestClient: FastAPI test client with the lifespan started.
    """
    def fake_build_http_client(settings: Settings) -> httpx.Client:
        transport = httpx.MockTransport(lambda request: status_endpoint["handler"](request))
        return build_http_client(settings, transport=transport)

    monkeypatch.setattr(main_module, "build_http_client", fake_build_http_client)
    main_module.app.state.settings = mock_settings

    with TestClient(main_module.app) as test_client:
        yield test_client

    main_module.app.state.settings = None
