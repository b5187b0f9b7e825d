"""
Per-request verification pipeline.

For one batch of uploads:

- classify every image into a view and grade its quality;
- infer brand and model from the filenames;
- read the serial from the first clear serial-bearing image (one OCR call
  at most);
- apply brand / model rules when a clear serial was observed;
- aggregate everything into a `VerdictResult` and attach a certificate.

All intermediate state lives in an `Evidence` instance local to the call.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from ..ocr.client import OcrClient
from ..schemas import VerdictResult
from .brand import brand_display_name, infer_brand, infer_model
from .certificate import issue_certificate
from .images import ClassifiedImage, UploadedImage
from .quality import (
    assess_serial_clarity,
    low_quality_flag,
    quality_tier,
    tier_rank,
    unclear_serial_flag,
)
from .rules import apply_brand_rules, apply_model_rules
from .serial import ExtractedSerialText, extract_serial, select_candidate, serial_reason
from .verdict import aggregate
from .views import REQUIRED_VIEWS, classify, is_serial_bearing

logger = logging.getLogger(__name__)


@dataclass
class Evidence:
    views_seen: Set[str] = field(default_factory=set)
    quality_by_view: Dict[str, str] = field(default_factory=dict)
    reasons: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    serial_present: bool = False
    model_flagged: bool = False

    def missing_views(self) -> List[str]:
        return [view for view in REQUIRED_VIEWS if view not in self.views_seen]


def classify_images(
    images: Sequence[UploadedImage], labels: Mapping[str, str]
) -> List[ClassifiedImage]:
    return [
        ClassifiedImage(image=image, view=classify(image.filename, labels.get(image.filename)))
        for image in images
    ]


def collect_view_evidence(classified: Sequence[ClassifiedImage]) -> Evidence:
    """
    Build views-seen / quality-by-view and the quality red flags.

    Poor images are flagged and never count toward coverage, whether or
    not they matched a view.
    """
    evidence = Evidence()
    for item in classified:
        image, view = item.image, item.view
        if is_serial_bearing(view):
            evidence.serial_present = True

        tier = quality_tier(image)
        if tier == "poor":
            evidence.red_flags.append(low_quality_flag(image))
            continue
        if view is None:
            continue

        evidence.views_seen.add(view)
        best = evidence.quality_by_view.get(view, "missing")
        if tier_rank(tier) > tier_rank(best):
            evidence.quality_by_view[view] = tier

        if is_serial_bearing(view) and not assess_serial_clarity(image, view).clear:
            evidence.red_flags.append(unclear_serial_flag(image))
    return evidence


async def verify_batch(
    images: Sequence[UploadedImage],
    labels: Mapping[str, str],
    ocr: OcrClient,
) -> VerdictResult:
    start = time.perf_counter()

    classified = classify_images(images, labels)
    evidence = collect_view_evidence(classified)

    brand = infer_brand(images)
    model = infer_model(brand, images)
    if brand is not None:
        evidence.reasons.append(f"Brand inferred from filenames: {brand_display_name(brand)}")

    candidate = select_candidate(classified)
    extracted: Optional[ExtractedSerialText] = None
    if candidate is not None:
        extracted = await extract_serial(candidate, ocr)
    evidence.reasons.append(serial_reason(evidence.serial_present, extracted))

    # Brand and model rules only run once a clear serial image was observed.
    if candidate is not None:
        brand_outcome = apply_brand_rules(brand, extracted.normalized if extracted else None)
        model_outcome = apply_model_rules(model, evidence.views_seen, evidence.quality_by_view)
        for outcome in (brand_outcome, model_outcome):
            evidence.reasons.extend(outcome.reasons)
            evidence.red_flags.extend(outcome.red_flags)
        evidence.model_flagged = bool(model_outcome.red_flags)

    result = aggregate(
        missing_photos=evidence.missing_views(),
        red_flags=evidence.red_flags,
        reasons=evidence.reasons,
        model_flagged=evidence.model_flagged,
    )
    certificate = issue_certificate(result, brand, model)

    latency_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "verified batch: images=%d verdict=%r confidence=%d missing=%d red_flags=%d "
        "brand=%s model=%s latency_ms=%d",
        len(images),
        result.verdict,
        result.confidence,
        len(result.missing_photos),
        len(result.red_flags),
        brand,
        model,
        latency_ms,
    )
    return result.model_copy(update={"certificate": certificate})
