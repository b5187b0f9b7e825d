"""
Verdict aggregation.

The decision order is fixed and confidence is one of a handful of literal
values keyed to the branch that fired; it is never computed from a score.
"""

from __future__ import annotations

from typing import Sequence

from ..schemas import VerdictResult

LIKELY_AUTHENTIC = "Likely Authentic"
LIKELY_NOT_AUTHENTIC = "Likely Not Authentic"
INCONCLUSIVE = "Inconclusive"

MIN_RED_FLAGS_FOR_REJECTION = 3

CONFIDENCE_MISSING_VIEWS = 30
CONFIDENCE_REJECTED = 65
CONFIDENCE_REJECTED_MODEL_RULES = 85
CONFIDENCE_AUTHENTIC = 75
CONFIDENCE_ERROR = 0

REASON_MISSING_VIEWS = "Missing or unclear required views"
REASON_INCONSISTENCIES = "Multiple technical inconsistencies detected"
REASON_ALL_PRESENT = "All required views present; no universal red flags"
REASON_SERVER_ERROR = "Server error during verification"


def aggregate(
    missing_photos: Sequence[str],
    red_flags: Sequence[str],
    reasons: Sequence[str],
    model_flagged: bool = False,
) -> VerdictResult:
    if missing_photos:
        return VerdictResult(
            verdict=INCONCLUSIVE,
            confidence=CONFIDENCE_MISSING_VIEWS,
            reasons=[REASON_MISSING_VIEWS, *reasons],
            missing_photos=list(missing_photos),
            red_flags=list(red_flags),
        )

    if len(red_flags) >= MIN_RED_FLAGS_FOR_REJECTION:
        confidence = CONFIDENCE_REJECTED_MODEL_RULES if model_flagged else CONFIDENCE_REJECTED
        return VerdictResult(
            verdict=LIKELY_NOT_AUTHENTIC,
            confidence=confidence,
            reasons=[REASON_INCONSISTENCIES, *reasons],
            missing_photos=[],
            red_flags=list(red_flags),
        )

    return VerdictResult(
        verdict=LIKELY_AUTHENTIC,
        confidence=CONFIDENCE_AUTHENTIC,
        reasons=[REASON_ALL_PRESENT, *reasons],
        missing_photos=[],
        red_flags=list(red_flags),
    )


def error_result(reason: str) -> VerdictResult:
    """Safe default for validation failures and unexpected errors."""
    return VerdictResult(
        verdict=INCONCLUSIVE,
        confidence=CONFIDENCE_ERROR,
        reasons=[reason],
        missing_photos=[],
        red_flags=[],
    )
