"""
HTTP client for the OCR service.

The service receives the image as base64 JSON and answers with either a
plain `{"text": "..."}` body or a Gemini-style `candidates` payload; the
first text found is returned. Timeouts, network errors and unparseable
replies all map to None.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Callable, Dict, Optional, Protocol

import requests

from .. import config

logger = logging.getLogger(__name__)

OCR_PROMPT = (
    "Read the serial number or date code printed or embossed in this image. "
    "Reply with the characters only."
)


class OcrClient(Protocol):
    def extract_text(self, image_bytes: bytes) -> Optional[str]:
        ...


class UnavailableOcrClient:
    """Used when no OCR endpoint is configured."""

    def extract_text(self, image_bytes: bytes) -> Optional[str]:
        return None


def _text_from_payload(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None

    text = data.get("text")
    if isinstance(text, str):
        return text

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    first = candidates[0]
    if not isinstance(first, dict):
        return None
    content = first.get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    texts = [p.get("text", "") for p in parts if isinstance(p, dict) and "text" in p]
    joined = "\n".join(t for t in texts if t)
    return joined or None


class HttpOcrClient:
    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout_s: float = config.OCR_TIMEOUT_S,
        post: Optional[Callable[..., requests.Response]] = None,
    ) -> None:
        # Plain requests.post per call: the client holds no cookie jar or pool.
        self._url = url
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._post = post or requests.post

    @property
    def url(self) -> str:
        return self._url

    def _headers(self) -> Dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    def extract_text(self, image_bytes: bytes) -> Optional[str]:
        payload = {
            "prompt": OCR_PROMPT,
            "image": base64.b64encode(image_bytes).decode("ascii"),
        }
        try:
            resp = self._post(
                self._url,
                json=payload,
                headers=self._headers(),
                timeout=self._timeout_s,
            )
            resp.raise_for_status()
            return _text_from_payload(resp.json())
        except (requests.RequestException, ValueError) as exc:
            logger.warning("OCR request to %s failed: %s", self._url, exc)
            return None


def build_ocr_client() -> OcrClient:
    if not config.OCR_URL:
        logger.info("no OCR endpoint configured; serial text will not be read")
        return UnavailableOcrClient()
    return HttpOcrClient(config.OCR_URL, api_key=config.OCR_API_KEY)
