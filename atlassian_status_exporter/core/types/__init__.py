# atlassian_status_exporter/core/types/__init__.py
"""
Public API for the exporter's type system.

This module exposes the value types exchanged between the status translator,
the Prometheus collector and the configuration layer.
"""

# ═══════════════════════════════════════════════════════════════════════════
# 1. BASE MODELS
# ═══════════════════════════════════════════════════════════════════════════
from .base import CanonicalModel

# ═══════════════════════════════════════════════════════════════════════════
# 2. STATE CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════
from .status import (
    ApplicationState,
    STATE_TABLE,
    StateClassification,
    StatusPayload,
    classify_state,
)

# ═══════════════════════════════════════════════════════════════════════════
# 3. PROBE TARGET & METRICS
# ═══════════════════════════════════════════════════════════════════════════
from .metrics import (
    DEFAULT_MAX_BODY_BYTES,
    ProbeTarget,
    ReachabilityMetric,
    StateMetric,
    DurationMetric,
    ProbeResult,
)

__all__ = [
    "CanonicalModel",
    "ApplicationState",
    "STATE_TABLE",
    "StateClassification",
    "StatusPayload",
    "classify_state",
    "DEFAULT_MAX_BODY_BYTES",
    "ProbeTarget",
    "ReachabilityMetric",
    "StateMetric",
    "DurationMetric",
    "ProbeResult",
]
