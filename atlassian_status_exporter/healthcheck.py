"""HTTP health check probe for container orchestration.

Execute a lightweight HTTP GET request against the exporter's /health/live
endpoint. Return appropriate exit codes for container runtime health probes.
The monitored Atlassian application is never contacted.

Exit Codes:
    0: Healthy - Endpoint returned HTTP 200.
    1: Unhealthy - Connection failed or non-200 response.

Environment Variables:
    HEALTHCHECK_HOST: Target host address (default: 127.0.0.1).
    HEALTHCHECK_PORT: Target port number (default: SVC_PORT or 9997).
"""

import os
import sys
import urllib.request

TIMEOUT = 2  # seconds


def health_url() -> str:
    host = os.environ.get("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.environ.get("HEALTHCHECK_PORT") or os.environ.get("SVC_PORT", "9997")
    return f"http://{host}:{port}/health/live"


def check(url: str, timeout: float = TIMEOUT) -> int:
    """Return the process exit code for one probe of ``url``."""
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            return 0 if response.status == 200 else 1
    except OSError:
        # URLError, HTTPError (4xx, 5xx) and socket timeouts.
        return 1


if __name__ == "__main__":
    sys.exit(check(health_url()))
