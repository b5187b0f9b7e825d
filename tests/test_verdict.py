from bag_verifier.engine.verdict import (
    INCONCLUSIVE,
    LIKELY_AUTHENTIC,
    LIKELY_NOT_AUTHENTIC,
    aggregate,
    error_result,
)


def test_missing_views_take_precedence():
    result = aggregate(["front"], ["a", "b", "c"], ["extra"])
    assert result.verdict == INCONCLUSIVE
    assert result.confidence == 30
    assert result.reasons == ["Missing or unclear required views", "extra"]
    assert result.missing_photos == ["front"]


def test_three_red_flags_reject():
    result = aggregate([], ["a", "b", "c"], [])
    assert result.verdict == LIKELY_NOT_AUTHENTIC
    assert result.confidence == 65
    assert result.reasons[0] == "Multiple technical inconsistencies detected"
    assert result.missing_photos == []


def test_model_rules_escalate_confidence():
    result = aggregate([], ["a", "b", "c"], [], model_flagged=True)
    assert result.confidence == 85


def test_fewer_than_three_red_flags_is_authentic():
    result = aggregate([], ["a", "b"], ["r"])
    assert result.verdict == LIKELY_AUTHENTIC
    assert result.confidence == 75
    assert result.reasons == ["All required views present; no universal red flags", "r"]
    assert result.red_flags == ["a", "b"]


def test_error_result_shape():
    result = error_result("Server error during verification")
    assert result.verdict == INCONCLUSIVE
    assert result.confidence == 0
    assert result.missing_photos == [] and result.red_flags == []
    assert result.certificate is None
