"""
View classification.

An image gets its view either from an explicit caller label or from the
first keyword hit in `VIEW_KEYWORDS`. The table is evaluated top to
bottom, so its order decides overlapping filenames:

- "handle base" is `handle_base`, not `bottom`
- "inside" is `interior`, not `side`
- "underside" is `bottom`, not `side`
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..errors import LabelsError

VIEW_LABELS: Tuple[str, ...] = (
    "front",
    "back",
    "side",
    "bottom",
    "top",
    "interior",
    "logo_stamp",
    "hardware",
    "handle_base",
    "stitching",
    "serial",
)

REQUIRED_VIEWS: Tuple[str, ...] = (
    "front",
    "back",
    "side",
    "bottom",
    "top",
    "interior",
    "logo_stamp",
    "hardware",
    "handle_base",
    "stitching",
)

SERIAL_BEARING_VIEWS = frozenset({"serial", "logo_stamp"})

VIEW_KEYWORDS: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("serial", ("serial", "date_code", "datecode", "code")),
    ("logo_stamp", ("stamp", "logo", "emboss")),
    ("handle_base", ("handle", "strap")),
    ("stitching", ("stitch", "seam")),
    ("hardware", ("zip", "hardware", "buckle", "clasp", "lock", "rivet")),
    ("interior", ("interior", "inside", "lining")),
    ("front", ("front",)),
    ("back", ("back", "rear")),
    ("bottom", ("bottom", "base", "underside")),
    ("side", ("side", "profile")),
    ("top", ("top",)),
)

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_filename(filename: str) -> str:
    return _SEPARATORS.sub("_", filename.strip().lower())


def classify(filename: str, explicit_label: Optional[str] = None) -> Optional[str]:
    """
    Return the view for `filename`, or None if nothing matches.

    A valid explicit label always wins; an invalid one is ignored and the
    filename keywords are used instead.
    """
    if explicit_label in VIEW_LABELS:
        return explicit_label

    name = normalize_filename(filename)
    for view, keywords in VIEW_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return view
    return None


def is_serial_bearing(view: Optional[str]) -> bool:
    return view in SERIAL_BEARING_VIEWS


def parse_labels(raw: Any) -> Dict[str, str]:
    """
    Parse the `labels` form field into a filename -> view mapping.

    Accepts a mapping, a JSON object, or a JSON string that itself encodes
    a JSON object. Entries whose value is not a known view are dropped.
    Raises `LabelsError` for malformed JSON or anything that is not an
    object.
    """
    if raw is None or raw == "":
        return {}

    value = raw
    # Clients sometimes JSON-encode the object twice.
    for _ in range(2):
        if not isinstance(value, str):
            break
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise LabelsError(f"labels is not valid JSON: {exc.msg}") from exc
        except RecursionError as exc:
            raise LabelsError("labels is nested too deeply") from exc

    if not isinstance(value, Mapping):
        raise LabelsError("labels must be a JSON object of filename -> view")

    return {
        str(filename): view
        for filename, view in value.items()
        if isinstance(view, str) and view in VIEW_LABELS
    }
