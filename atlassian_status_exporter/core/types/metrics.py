"""Defines the probe target and the metric values produced by one scrape.

These models are the boundary between the status translator and the
Prometheus adapter: the translator returns a `ProbeResult`, the collector
turns it into gauge metric families.
"""

from typing import Optional

from pydantic import Field

from .base import CanonicalModel
from .status import StateClassification

# A /status document is a few dozen bytes.
DEFAULT_MAX_BODY_BYTES = 64 * 1024


# ═══════════════════════════════════════════════════════════════════════════
# PROBE TARGET
# ═══════════════════════════════════════════════════════════════════════════

class ProbeTarget(CanonicalModel):
    """Immutable description of the endpoint to probe.

    Attributes:
        url: Full status URL, e.g. ``https://jira.example.com/status``.
        host: Application host, used as the ``url`` label on every metric.
        timeout: Seconds allowed for the whole scrape, body read included.
        max_body_bytes: Bytes of body kept before reading stops.
    """
    url: str = Field(min_length=1)
    host: str = Field(min_length=1)
    timeout: float = Field(gt=0)
    max_body_bytes: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0)


# ═══════════════════════════════════════════════════════════════════════════
# EMITTED METRICS
# ═══════════════════════════════════════════════════════════════════════════

class ReachabilityMetric(CanonicalModel):
    """Whether the probe obtained any HTTP response at all.

    Attributes:
        up: True when a response was received, whatever its status code.
        http_code: Status code as a string; empty when unreachable.
        url: Application host label.
    """
    up: bool
    http_code: str = ""
    url: str

    @property
    def value(self) -> float:
        return 1.0 if self.up else 0.0


class StateMetric(CanonicalModel):
    """Classified application state with the response's status code."""
    classification: StateClassification
    http_code: str
    url: str

    @property
    def value(self) -> float:
        return float(self.classification.code)

    @property
    def state_label(self) -> str:
        return self.classification.raw

    @property
    def description(self) -> str:
        return self.classification.description


class DurationMetric(CanonicalModel):
    """Wall time spent collecting, in seconds."""
    seconds: float = Field(ge=0)
    url: str


class ProbeResult(CanonicalModel):
    """Everything one scrape of the status endpoint produced.

    Attributes:
        reachability: Always present.
        state: Absent when the endpoint could not be reached.
        duration: Absent when unreachable or when the body was empty.
    """
    reachability: ReachabilityMetric
    state: Optional[StateMetric] = None
    duration: Optional[DurationMetric] = None
