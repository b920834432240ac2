"""httpx client factory for probing the monitored application."""

from typing import Optional

import httpx

from atlassian_status_exporter.config import Settings

USER_AGENT_TEMPLATE = "atlassian-status-exporter/{version}"


def build_http_client(
    settings: Settings,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the process-wide synchronous client used by every scrape.

    The client is safe for concurrent use from the server's threadpool. Its
    timeout bounds each connect, read, write and pool wait separately; the
    deadline for the whole scrape is enforced by `translator.probe`.

    Args:
        settings: Application settings.
        transport: Optional transport override (tests use `httpx.MockTransport`).

    Returns:
        A configured `httpx.Client`. The caller owns it and must close it.
    """
    return httpx.Client(
        timeout=settings.SVC_TIMEOUT,
        verify=settings.VERIFY_SSL,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT_TEMPLATE.format(version=settings.VERSION)},
        transport=transport,
    )
