"""
Pydantic schemas used by the FastAPI app.

`VerdictResult` is the JSON body of every /verify response, including
validation failures and server errors.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

Verdict = Literal["Likely Authentic", "Likely Not Authentic", "Inconclusive"]


class Certificate(BaseModel):
    """
    Public-facing certificate attached to an engine decision.

    Only `Likely Authentic` decisions are `certificate_eligible`; the block
    is still returned for the other verdicts so the upload form can show the
    pending / not-verified status.
    """

    model_config = ConfigDict(frozen=True)

    certificate_id: str
    brand: str
    item_name: str
    decision_date: str
    issuer: str
    public_status: str
    certificate_title: str
    certificate_statement: str
    certificate_eligible: bool


class VerdictResult(BaseModel):
    """
    Response payload for POST /verify.

    - verdict: one of the three fixed verdict strings
    - confidence: fixed literal keyed to the decision branch (0-100)
    - reasons: explanatory statements, led by the branch reason
    - missing_photos: required views not observed, in required-view order
    - red_flags: named inconsistencies / quality defects
    - certificate: absent on validation and server errors
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    confidence: int
    reasons: List[str]
    missing_photos: List[str]
    red_flags: List[str]
    certificate: Optional[Certificate] = None


class HealthResponse(BaseModel):
    """Simple health check response."""

    status: str


class LivenessResponse(BaseModel):
    """Fixed payload returned by GET /."""

    status: str
    service: str
