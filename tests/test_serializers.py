"""Tests for JSON serialization of domain results."""

import json

from prayer_tracker.api.serializers import serialize_risk, serialize_score
from prayer_tracker.domain.stats import RiskStatus
from prayer_tracker.services.scoring import empty_score


def test_empty_score_serializes_normalized_score_as_float() -> None:
    payload = serialize_score(empty_score())

    assert payload["percentage"] == 100
    assert json.dumps(payload["normalized_score"]) == "10.0"
    assert payload["breakdown"] == []


def test_serialize_risk() -> None:
    payload = serialize_risk(RiskStatus(is_at_risk=True, consecutive_inactive_days=4))

    assert payload == {"is_at_risk": True, "consecutive_inactive_days": 4}
