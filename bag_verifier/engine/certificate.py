"""
Certificate block returned alongside each engine decision.

Certificates are informational: nothing is stored, so the id only
identifies the response it was printed on.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from .. import config
from ..schemas import Certificate, VerdictResult
from .brand import brand_display_name, model_display_name
from .verdict import LIKELY_AUTHENTIC, LIKELY_NOT_AUTHENTIC

_STATUS = {
    LIKELY_AUTHENTIC: (
        "Verified Authentic",
        "This item has been verified authentic based on observable brand identifiers.",
    ),
    LIKELY_NOT_AUTHENTIC: (
        "Not Verified",
        "This item could not be verified: its photographs show multiple technical inconsistencies.",
    ),
}

_PENDING = (
    "Verification Pending",
    "A decision could not be reached from the photographs provided.",
)


def new_certificate_id() -> str:
    return f"TRC-{uuid.uuid4().hex[:8].upper()}"


def issue_certificate(
    result: VerdictResult,
    brand: Optional[str],
    model: Optional[str],
    now: Optional[datetime] = None,
    certificate_id: Optional[str] = None,
) -> Certificate:
    status, statement = _STATUS.get(result.verdict, _PENDING)
    decided_at = now or datetime.now(timezone.utc)
    return Certificate(
        certificate_id=certificate_id or new_certificate_id(),
        brand=brand_display_name(brand),
        item_name=model_display_name(model),
        decision_date=decided_at.isoformat(),
        issuer=config.ISSUER,
        public_status=status,
        certificate_title=status,
        certificate_statement=statement,
        certificate_eligible=result.verdict == LIKELY_AUTHENTIC,
    )
