from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from bag_verifier.engine.certificate import issue_certificate
from bag_verifier.engine.verdict import aggregate
from bag_verifier.schemas import VerdictResult


def test_verdict_result_roundtrip():
    result = aggregate([], [], ["Serial/date code text extracted"])
    as_dict = result.model_dump()
    assert VerdictResult(**as_dict) == result
    assert set(as_dict) == {
        "verdict",
        "confidence",
        "reasons",
        "missing_photos",
        "red_flags",
        "certificate",
    }


def test_verdict_must_be_known():
    with pytest.raises(ValidationError):
        VerdictResult(
            verdict="Probably Fine",
            confidence=50,
            reasons=[],
            missing_photos=[],
            red_flags=[],
        )


def test_verdict_result_is_frozen():
    result = aggregate([], [], [])
    with pytest.raises(ValidationError):
        result.confidence = 99


def test_certificate_for_each_verdict():
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    authentic = issue_certificate(aggregate([], [], []), "gucci", "marmont", now=now, certificate_id="TRC-TEST0001")
    assert authentic.certificate_id == "TRC-TEST0001"
    assert authentic.brand == "Gucci"
    assert authentic.item_name == "GG Marmont"
    assert authentic.decision_date == "2026-01-02T03:04:05+00:00"
    assert authentic.public_status == "Verified Authentic"
    assert authentic.certificate_eligible is True

    rejected = issue_certificate(aggregate([], ["a", "b", "c"], []), None, None, now=now)
    assert rejected.public_status == "Not Verified"
    assert rejected.certificate_eligible is False
    assert rejected.brand == "Unknown Brand"

    pending = issue_certificate(aggregate(["front"], [], []), None, None, now=now)
    assert pending.public_status == "Verification Pending"
    assert pending.certificate_eligible is False
