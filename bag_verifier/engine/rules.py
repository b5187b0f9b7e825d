"""
Brand- and model-specific rules.

Brand rules check the extracted serial against a fixed pattern. Model
rules add expectations on top of the required views: a named view must
have been photographed at `good` quality. Each rule yields either a
reason or a red flag, never both.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Set

from .brand import brand_display_name, model_display_name


@dataclass(frozen=True)
class SerialRule:
    pattern: re.Pattern
    label: str


@dataclass
class RuleOutcome:
    reasons: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)


BRAND_SERIAL_RULES: Dict[str, SerialRule] = {
    "louis_vuitton": SerialRule(re.compile(r"[A-Z0-9]{4,6}"), "date code"),
    "gucci": SerialRule(re.compile(r"\d{8,14}"), "serial number"),
    "chanel": SerialRule(re.compile(r"\d{7,8}"), "serial number"),
    "prada": SerialRule(re.compile(r"[A-Z0-9]{2,8}"), "authenticity code"),
    "hermes": SerialRule(re.compile(r"[A-Z]{1,2}"), "blind stamp"),
}

# model -> view that must be present at good quality
MODEL_REQUIRED_GOOD_VIEW: Dict[str, str] = {
    "neverfull": "interior",
    "speedy": "handle_base",
    "marmont": "hardware",
    "dionysus": "hardware",
    "classic_flap": "stitching",
    "boy": "logo_stamp",
    "galleria": "logo_stamp",
    "birkin": "hardware",
    "kelly": "stitching",
}


def apply_brand_rules(brand: Optional[str], normalized_serial: Optional[str]) -> RuleOutcome:
    outcome = RuleOutcome()
    rule = BRAND_SERIAL_RULES.get(brand) if brand else None
    if rule is None or not normalized_serial:
        return outcome

    name = brand_display_name(brand)
    if rule.pattern.fullmatch(normalized_serial):
        outcome.reasons.append(f"{name} {rule.label} format is consistent")
    else:
        outcome.red_flags.append(f"{name} {rule.label} format is inconsistent: {normalized_serial}")
    return outcome


def apply_model_rules(
    model: Optional[str],
    views_seen: Set[str],
    quality_by_view: Mapping[str, str],
) -> RuleOutcome:
    outcome = RuleOutcome()
    view = MODEL_REQUIRED_GOOD_VIEW.get(model) if model else None
    if view is None:
        return outcome

    name = model_display_name(model)
    if view in views_seen and quality_by_view.get(view) == "good":
        outcome.reasons.append(f"{name}: {view} photographed at good quality")
    else:
        outcome.red_flags.append(f"{name}: {view} view missing or below good quality")
    return outcome
