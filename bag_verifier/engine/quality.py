"""
File-size based quality assessment.

No pixels are decoded: byte size stands in for resolution / legibility.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .images import UploadedImage
from .views import is_serial_bearing

# Ordered worst -> best; `missing` is the tier of a view nobody photographed.
QUALITY_TIERS: Tuple[str, ...] = ("missing", "poor", "fair", "good")

POOR_BELOW = 60_000
GOOD_FROM = 120_000
SERIAL_CLEAR_FROM = 80_000


@dataclass(frozen=True)
class SerialClarity:
    present: bool
    clear: bool


def quality_tier(image: UploadedImage) -> str:
    if image.byte_size < POOR_BELOW:
        return "poor"
    if image.byte_size < GOOD_FROM:
        return "fair"
    return "good"


def tier_rank(tier: str) -> int:
    return QUALITY_TIERS.index(tier)


def assess_serial_clarity(image: UploadedImage, view: str) -> SerialClarity:
    if not is_serial_bearing(view):
        return SerialClarity(present=False, clear=False)
    return SerialClarity(present=True, clear=image.byte_size >= SERIAL_CLEAR_FROM)


def low_quality_flag(image: UploadedImage) -> str:
    return f"Low-quality image: {image.filename}"


def unclear_serial_flag(image: UploadedImage) -> str:
    return f"Serial/date code image present but unclear: {image.filename}"
