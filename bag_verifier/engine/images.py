"""
Request-scoped image records.

Uploads are wrapped once at the HTTP boundary and never mutated; the
engine only ever looks at the filename and the byte size, and hands the
raw bytes to the OCR client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    byte_size: int
    mime_type: str
    content: bytes

    @classmethod
    def from_bytes(cls, filename: str, content: bytes, mime_type: str) -> "UploadedImage":
        return cls(
            filename=filename,
            byte_size=len(content),
            mime_type=mime_type,
            content=content,
        )


@dataclass(frozen=True)
class ClassifiedImage:
    """An upload paired with the view it was classified as (if any)."""

    image: UploadedImage
    view: Optional[str]
