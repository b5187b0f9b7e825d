"""
Configuration helpers for the verification service.

Everything is read once from environment variables at import time. The
verdict thresholds themselves are fixed and live next to the code that
applies them (see `engine/`); only deployment knobs belong here.
"""

from __future__ import annotations

import os
from typing import Optional


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


# External text-extraction (OCR) endpoint. When unset, serial text is never
# read and the pipeline reports the date code as unreadable.
OCR_URL: Optional[str] = os.environ.get("BAG_VERIFIER_OCR_URL") or None
OCR_API_KEY: Optional[str] = os.environ.get("BAG_VERIFIER_OCR_API_KEY") or None
OCR_TIMEOUT_S: float = _env_float("BAG_VERIFIER_OCR_TIMEOUT_S", 10.0)

# Upload limits enforced at the HTTP boundary.
MAX_IMAGES: int = _env_int("BAG_VERIFIER_MAX_IMAGES", 10)
MAX_IMAGE_BYTES: int = _env_int("BAG_VERIFIER_MAX_IMAGE_BYTES", 10 * 1024 * 1024)

# Name printed on issued certificates.
ISSUER: str = os.environ.get("BAG_VERIFIER_ISSUER", "The Real Carry")

LOG_LEVEL: str = os.environ.get("BAG_VERIFIER_LOG_LEVEL", "INFO").upper()

HOST: str = os.environ.get("BAG_VERIFIER_HOST", "0.0.0.0")
PORT: int = _env_int("BAG_VERIFIER_PORT", 8080)
