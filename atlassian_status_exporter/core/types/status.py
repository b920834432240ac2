"""Defines the classification of an Atlassian application's /status response.

The monitored application reports its lifecycle phase as a JSON document of
the form ``{"state": "RUNNING"}``. This module maps every possible reported
string onto a closed set of states, each with a fixed numeric code (the value
of the state gauge) and a human readable description.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from .base import CanonicalModel


# ═══════════════════════════════════════════════════════════════════════════
# STATE ENUMERATION
# ═══════════════════════════════════════════════════════════════════════════

class ApplicationState(str, Enum):
    """Lifecycle phase of the monitored application.

    The first five members are the values the application itself reports.
    EMPTY covers a response without a usable state (the web application failed
    to deploy), UNKNOWN covers any other string.
    """
    RUNNING = "RUNNING"
    ERROR = "ERROR"
    STARTING = "STARTING"
    STOPPING = "STOPPING"
    FIRST_RUN = "FIRST_RUN"
    EMPTY = "EMPTY"
    UNKNOWN = "UNKNOWN"

    @property
    def code(self) -> int:
        """Numeric value exported by the state gauge."""
        return STATE_TABLE[self][0]

    @property
    def description(self) -> str:
        return STATE_TABLE[self][1]


# Gauge value and description per state. Codes are part of the exported
# contract: dashboards and alerts compare against them.
STATE_TABLE: dict[ApplicationState, tuple[int, str]] = {
    ApplicationState.RUNNING: (0, "Running normally"),
    ApplicationState.ERROR: (1, "An error state"),
    ApplicationState.STARTING: (2, "Application is starting"),
    ApplicationState.STOPPING: (3, "Application is stopping"),
    ApplicationState.FIRST_RUN: (
        4,
        "Application is running for the first time and has not yet been configured",
    ),
    ApplicationState.EMPTY: (
        5,
        "Application failed to start up in an unexpected way (the web application failed to deploy)",
    ),
    ApplicationState.UNKNOWN: (6, "Unknown Response, go look at the Atlassian Application"),
}

# Strings the application puts on the wire. EMPTY and UNKNOWN are never sent.
_REPORTED_STATES: dict[str, ApplicationState] = {
    state.value: state
    for state in (
        ApplicationState.RUNNING,
        ApplicationState.ERROR,
        ApplicationState.STARTING,
        ApplicationState.STOPPING,
        ApplicationState.FIRST_RUN,
    )
}


# ═══════════════════════════════════════════════════════════════════════════
# CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════

class StateClassification(CanonicalModel):
    """The classified state of one /status response.

    Attributes:
        state: The matching enumeration member.
        raw: The state string exactly as reported. For UNKNOWN this is the
            unrecognised value; for EMPTY it is always the empty string.

    Example:
        >>> result = classify_state("STARTING")
        >>> result.code, result.description
        (2, 'Application is starting')
    """
    state: ApplicationState
    raw: str

    @property
    def code(self) -> int:
        return self.state.code

    @property
    def description(self) -> str:
        return self.state.description


def classify_state(raw: str) -> StateClassification:
    """Classify a reported state string.

    Total and pure: every input maps to exactly one state, and identical inputs
    always produce identical results. Matching is exact and case-sensitive.

    Args:
        raw: Value of the ``state`` field, or ``""`` when none was available.

    Returns:
        The classification carrying the state, its code and its description.
    """
    if raw == "":
        return StateClassification(state=ApplicationState.EMPTY, raw=raw)
    state = _REPORTED_STATES.get(raw, ApplicationState.UNKNOWN)
    return StateClassification(state=state, raw=raw)


# ═══════════════════════════════════════════════════════════════════════════
# WIRE FORMAT
# ═══════════════════════════════════════════════════════════════════════════

class StatusPayload(BaseModel):
    """JSON body returned by the application's /status endpoint.

    Only ``state`` is recognised, matched case-insensitively (``State`` and
    ``STATE`` count; the last matching key wins). Other keys are ignored. A
    missing ``state`` decodes to the empty string, a non-string ``state``
    fails validation.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        strict=True,
    )

    state: str = ""

    @model_validator(mode="before")
    @classmethod
    def match_state_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        matched = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() == "state":
                matched = {"state": value}
        return matched
