"""Defines the shared base model for the exporter's data structures.

Every value that flows through a scrape (probe target, classification,
emitted metrics) is an immutable Pydantic model built on `CanonicalModel`.
"""

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════
# BASE CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════

class CanonicalModel(BaseModel):
    """A base model providing shared configuration for all exporter data structures.

    This class enforces immutability (`frozen=True`) and prevents unknown fields
    (`extra='forbid'`). Strings are kept verbatim: label values must match
    exactly what the monitored application returned.

    Configuration:
        frozen: Prevents modification after creation; values are shared across threads.
        extra: Rejects unknown fields.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )
