"""Status translator: one probe of the /status endpoint, turned into metric values.

`probe` is the only piece of the exporter with decision logic. It never raises
for anything the monitored application or the network can do: unreachable
hosts, broken bodies and malformed JSON all degrade into fewer metrics or an
EMPTY/UNKNOWN classification.
"""

import time

import httpx
from pydantic import ValidationError

from atlassian_status_exporter.core.logging_config import get_logger
from atlassian_status_exporter.core.types import (
    DurationMetric,
    ProbeResult,
    ProbeTarget,
    ReachabilityMetric,
    StateMetric,
    StatusPayload,
    classify_state,
)

logger = get_logger(__name__)


def probe(target: ProbeTarget, client: httpx.Client) -> ProbeResult:
    """Probe the status endpoint once and translate the outcome.

    Args:
        target: Endpoint, label host and timeout.
        client: Shared HTTP client.

    Returns:
        ProbeResult: Reachability is always set. State is missing when the
        endpoint was unreachable. Duration is missing when unreachable and
        when the body was empty.
    """
    start = time.perf_counter()
    deadline = start + target.timeout

    logger.debug("get url", url=target.url)
    try:
        response = client.send(
            client.build_request("GET", target.url, timeout=target.timeout),
            stream=True,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning(
            "status endpoint unreachable",
            url=target.url,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return ProbeResult(reachability=ReachabilityMetric(up=False, url=target.host))

    try:
        http_code = str(response.status_code)
        reachability = ReachabilityMetric(up=True, http_code=http_code, url=target.host)
        logger.debug("set scrape_url_up metric", http_code=http_code)
        body = _read_body(response, target, deadline)
    finally:
        response.close()

    # Whitespace-only bodies are what a failed deployment serves.
    if not body.strip():
        logger.debug("response entity empty", url=target.host)
        state = StateMetric(classification=classify_state(""), http_code=http_code, url=target.host)
        return ProbeResult(reachability=reachability, state=state)

    raw_state = _decode_state(body)
    state = StateMetric(
        classification=classify_state(raw_state),
        http_code=http_code,
        url=target.host,
    )
    logger.debug("set state metric", state=raw_state, code=state.classification.code)

    duration = DurationMetric(seconds=time.perf_counter() - start, url=target.host)
    logger.debug("collect finished", duration_seconds=duration.seconds)
    return ProbeResult(reachability=reachability, state=state, duration=duration)


def _read_body(response: httpx.Response, target: ProbeTarget, deadline: float) -> bytes:
    """Read the streamed body, keeping whatever arrived before a failure.

    Reading stops early once the scrape deadline passes or MAX_BODY_BYTES is
    reached; both cases keep the bytes read so far, like a read error.
    """
    content = bytearray()
    try:
        for chunk in response.iter_bytes():
            remaining = target.max_body_bytes - len(content)
            if len(chunk) > remaining:
                content.extend(chunk[:remaining])
                logger.warning(
                    "status body exceeds size limit, truncated",
                    url=target.url,
                    max_body_bytes=target.max_body_bytes,
                )
                break
            content.extend(chunk)
            if time.perf_counter() >= deadline:
                logger.error(
                    "reading status body exceeded timeout",
                    url=target.url,
                    timeout=target.timeout,
                    bytes_read=len(content),
                )
                break
    except (httpx.HTTPError, httpx.StreamError) as exc:
        logger.error(
            "reading status body failed",
            url=target.url,
            error=str(exc),
            bytes_read=len(content),
        )
    return bytes(content)


def _decode_state(body: bytes) -> str:
    """Extract the ``state`` field, falling back to ``""`` on any decode failure."""
    try:
        payload = StatusPayload.model_validate_json(body)
    except ValidationError as exc:
        logger.error("error unmarshalling status body", error=str(exc))
        logger.info("problem unmarshalling the following string", body=body.decode("utf-8", errors="replace"))
        return ""
    return payload.state
