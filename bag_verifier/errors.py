"""
Exceptions raised at the request boundary.

Both are turned into an `Inconclusive` / confidence-0 response by the
/verify handler rather than an HTTP error.
"""

from __future__ import annotations


class LabelsError(ValueError):
    """The `labels` form field is not a JSON object."""


class UploadError(ValueError):
    """An upload breaks the count, media-type or size limits."""
