"""
Brand and model inference from filename hints.

Only filenames are consulted. A brand needs at least two corroborating
images so a single stray filename cannot switch on brand-specific rules.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .images import UploadedImage

logger = logging.getLogger(__name__)

MIN_BRAND_HITS = 2

# Vocabulary order is also the tie-break order.
BRAND_HINTS: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("louis_vuitton", ("lv", "louis", "vuitton")),
    ("gucci", ("gucci",)),
    ("chanel", ("chanel", "cc")),
    ("prada", ("prada",)),
    ("hermes", ("hermes", "birkin", "kelly")),
)

MODEL_HINTS: Dict[str, Sequence[Tuple[str, Tuple[str, ...]]]] = {
    "louis_vuitton": (
        ("neverfull", ("neverfull",)),
        ("speedy", ("speedy",)),
    ),
    "gucci": (
        ("marmont", ("marmont",)),
        ("dionysus", ("dionysus",)),
    ),
    "chanel": (
        ("classic_flap", ("classic", "flap")),
        ("boy", ("boy",)),
    ),
    "prada": (("galleria", ("galleria",)),),
    "hermes": (
        ("birkin", ("birkin",)),
        ("kelly", ("kelly",)),
    ),
}

BRAND_DISPLAY_NAMES = {
    "louis_vuitton": "Louis Vuitton",
    "gucci": "Gucci",
    "chanel": "Chanel",
    "prada": "Prada",
    "hermes": "Hermès",
}

MODEL_DISPLAY_NAMES = {
    "neverfull": "Neverfull",
    "speedy": "Speedy",
    "marmont": "GG Marmont",
    "dionysus": "Dionysus",
    "classic_flap": "Classic Flap",
    "boy": "Boy Bag",
    "galleria": "Galleria",
    "birkin": "Birkin",
    "kelly": "Kelly",
}

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def _hint_matches(hint: str, name: str, tokens: List[str]) -> bool:
    # Short hints ("lv", "cc") must be whole tokens, otherwise "silver"
    # would read as Louis Vuitton.
    if hint in tokens:
        return True
    return len(hint) > 3 and hint in name


def _matches_any(hints: Iterable[str], filename: str) -> bool:
    name = filename.lower()
    tokens = [t for t in _TOKEN_SPLIT.split(name) if t]
    return any(_hint_matches(hint, name, tokens) for hint in hints)


def tally_brands(images: Iterable[UploadedImage]) -> Counter:
    counts: Counter = Counter()
    for image in images:
        for brand, hints in BRAND_HINTS:
            if _matches_any(hints, image.filename):
                counts[brand] += 1
    return counts


def infer_brand(images: Sequence[UploadedImage]) -> Optional[str]:
    counts = tally_brands(images)
    if not counts:
        return None

    best = max(counts.values())
    if best < MIN_BRAND_HITS:
        logger.debug("brand hints too weak: %s", dict(counts))
        return None

    for brand, _ in BRAND_HINTS:
        if counts[brand] == best:
            return brand
    return None


def infer_model(brand: Optional[str], images: Sequence[UploadedImage]) -> Optional[str]:
    if brand is None:
        return None

    for model, hints in MODEL_HINTS.get(brand, ()):
        if any(_matches_any(hints, image.filename) for image in images):
            return model
    return None


def brand_display_name(brand: Optional[str]) -> str:
    if brand is None:
        return "Unknown Brand"
    return BRAND_DISPLAY_NAMES.get(brand, brand.replace("_", " ").title())


def model_display_name(model: Optional[str]) -> str:
    if model is None:
        return "Handbag"
    return MODEL_DISPLAY_NAMES.get(model, model.replace("_", " ").title())
