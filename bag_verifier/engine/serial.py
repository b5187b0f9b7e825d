"""
Serial / date-code extraction.

OCR is the expensive step, so a request reads at most one image: the
first serial-bearing image clear enough to be worth reading. Any OCR
failure is downgraded to "no text extracted".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from starlette.concurrency import run_in_threadpool

from ..ocr.client import OcrClient
from .images import ClassifiedImage, UploadedImage
from .quality import assess_serial_clarity

logger = logging.getLogger(__name__)

REASON_TEXT_EXTRACTED = "Serial/date code text extracted"
REASON_UNREADABLE = "Serial/date code visible but unreadable"
REASON_NOT_OBSERVED = "No serial/date code observed"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class ExtractedSerialText:
    raw: str
    normalized: str


def normalize_serial(text: str) -> str:
    """Drop everything but ASCII letters and digits, then uppercase."""
    return _NON_ALNUM.sub("", text).upper()


def select_candidate(images: Sequence[ClassifiedImage]) -> Optional[UploadedImage]:
    for item in images:
        if item.view is None:
            continue
        if assess_serial_clarity(item.image, item.view).clear:
            return item.image
    return None


async def extract_serial(image: UploadedImage, ocr: OcrClient) -> Optional[ExtractedSerialText]:
    try:
        raw = await run_in_threadpool(ocr.extract_text, image.content)
    except Exception:
        # Clients are not supposed to raise; treat it as unavailability anyway.
        logger.warning("OCR client raised for %s", image.filename, exc_info=True)
        return None

    if not raw:
        return None

    normalized = normalize_serial(raw)
    if not normalized:
        return None
    return ExtractedSerialText(raw=raw, normalized=normalized)


def serial_reason(present: bool, extracted: Optional[ExtractedSerialText]) -> str:
    """The single serial-related reason for a request."""
    if extracted is not None:
        return REASON_TEXT_EXTRACTED
    if present:
        return REASON_UNREADABLE
    return REASON_NOT_OBSERVED
