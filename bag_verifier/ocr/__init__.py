"""
Clients for the external text-extraction (OCR) capability.

Every client honours the same contract: `extract_text(image_bytes)`
returns the text it read, or None. It never raises.
"""

from .client import HttpOcrClient, OcrClient, UnavailableOcrClient, build_ocr_client

__all__ = ["HttpOcrClient", "OcrClient", "UnavailableOcrClient", "build_ocr_client"]
