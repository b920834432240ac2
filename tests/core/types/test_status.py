"""
Test suite for the /status state classification.

Validates the fixed state -> (code, description) table, the total
classification function and the decoding rules of the JSON payload.
"""

import pytest
from pydantic import ValidationError

from atlassian_status_exporter.core.types import (
    ApplicationState,
    STATE_TABLE,
    StateClassification,
    StatusPayload,
    classify_state,
)


# ═══════════════════════════════════════════════════════════════════════════
# 1. STATE TABLE
# ═══════════════════════════════════════════════════════════════════════════

EXPECTED_TABLE = [
    ("RUNNING", ApplicationState.RUNNING, 0, "Running normally"),
    ("ERROR", ApplicationState.ERROR, 1, "An error state"),
    ("STARTING", ApplicationState.STARTING, 2, "Application is starting"),
    ("STOPPING", ApplicationState.STOPPING, 3, "Application is stopping"),
    (
        "FIRST_RUN",
        ApplicationState.FIRST_RUN,
        4,
        "Application is running for the first time and has not yet been configured",
    ),
    (
        "",
        ApplicationState.EMPTY,
        5,
        "Application failed to start up in an unexpected way (the web application failed to deploy)",
    ),
    (
        "MAINTENANCE",
        ApplicationState.UNKNOWN,
        6,
        "Unknown Response, go look at the Atlassian Application",
    ),
]


class TestStateTable:
    """Fixed mapping of every state to its gauge value and description."""

    def test_every_state_has_an_entry(self) -> None:
        assert set(STATE_TABLE) == set(ApplicationState)

    def test_codes_are_unique_and_contiguous(self) -> None:
        codes = sorted(code for code, _ in STATE_TABLE.values())
        assert codes == list(range(7))

    @pytest.mark.parametrize("raw, state, code, description", EXPECTED_TABLE)
    def test_classification_matches_table(
        self, raw: str, state: ApplicationState, code: int, description: str
    ) -> None:
        result = classify_state(raw)

        assert result.state is state
        assert result.code == code
        assert result.description == description
        assert result.raw == raw


# ═══════════════════════════════════════════════════════════════════════════
# 2. CLASSIFICATION EDGE CASES
# ═══════════════════════════════════════════════════════════════════════════

class TestClassifyState:
    """Totality, purity and exact matching."""

    @pytest.mark.parametrize("raw", ["running", " RUNNING", "RUNNING\n", "EMPTY", "UNKNOWN", "null"])
    def test_near_misses_are_unknown(self, raw: str) -> None:
        # Member names that are never sent on the wire must not match either.
        result = classify_state(raw)

        assert result.state is ApplicationState.UNKNOWN
        assert result.code == 6
        assert result.raw == raw

    def test_is_pure(self) -> None:
        first = classify_state("STOPPING")
        for _ in range(3):
            assert classify_state("STOPPING") == first

    def test_result_is_immutable(self) -> None:
        result = classify_state("RUNNING")
        with pytest.raises(ValidationError):
            result.raw = "ERROR"

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            StateClassification(state=ApplicationState.RUNNING, raw="RUNNING", code=0)


# ═══════════════════════════════════════════════════════════════════════════
# 3. PAYLOAD DECODING
# ═══════════════════════════════════════════════════════════════════════════

class TestStatusPayload:
    """JSON body decoding rules."""

    def test_decodes_state(self) -> None:
        assert StatusPayload.model_validate_json(b'{"state":"FIRST_RUN"}').state == "FIRST_RUN"

    def test_ignores_extra_keys(self) -> None:
        payload = StatusPayload.model_validate_json(b'{"state":"ERROR","details":{"x":1}}')
        assert payload.state == "ERROR"

    def test_missing_state_is_empty(self) -> None:
        assert StatusPayload.model_validate_json(b"{}").state == ""

    @pytest.mark.parametrize("body", [b"not json", b'{"state": 5}', b"[]", b"null", b'{"state":'])
    def test_invalid_documents_fail(self, body: bytes) -> None:
        with pytest.raises(ValidationError):
            StatusPayload.model_validate_json(body)

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            (b'{"State":"RUNNING"}', "RUNNING"),
            (b'{"STATE":"ERROR"}', "ERROR"),
            (b'{"sTaTe":"STARTING","other":1}', "STARTING"),
        ],
    )
    def test_state_key_is_case_insensitive(self, body: bytes, expected: str) -> None:
        assert StatusPayload.model_validate_json(body).state == expected

    def test_last_matching_state_key_wins(self) -> None:
        payload = StatusPayload.model_validate_json(b'{"state":"RUNNING","State":"STOPPING"}')
        assert payload.state == "STOPPING"

    def test_state_value_stays_case_sensitive(self) -> None:
        assert StatusPayload.model_validate_json(b'{"State":"running"}').state == "running"
