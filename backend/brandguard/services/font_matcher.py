"""
Font Matcher - checks text layer font families against approved brand fonts.
"""
from typing import Callable, List, Optional, Sequence

import structlog

from brandguard.models import (
    CategoryReport, DocumentSnapshot, FontRules, LayerSnapshot, Violation,
    ViolationCategory, ViolationType
)
from brandguard.utils import normalize_font_name

logger = structlog.get_logger()

UNNAMED_TEXT = "Unnamed Text"

# (normalized font name, normalized approved names) -> approved?
FontMatchPolicy = Callable[[str, Sequence[str]], bool]


def exact_match_policy(normalized: str, approved: Sequence[str]) -> bool:
    """Approve only an exact normalized name match."""
    return normalized in approved


def substring_match_policy(normalized: str, approved: Sequence[str]) -> bool:
    """
    Approve exact matches, or names where either side contains the other.

    Tolerates family variants ("Open Sans Bold" against "Open Sans") but can
    over-approve: a short approved name matches any longer name containing it.
    """
    if exact_match_policy(normalized, approved):
        return True
    return any(normalized in name or name in normalized for name in approved)


class FontMatcher:
    """Approves fonts through a pluggable match policy."""

    def __init__(self, rules: FontRules, policy: FontMatchPolicy = substring_match_policy):
        self.approved_fonts = [normalize_font_name(font.name) for font in rules.approved]
        self.default_font: Optional[str] = rules.default.name if rules.default else None
        self.policy = policy

    def is_approved(self, font_name: Optional[str]) -> bool:
        return self.policy(normalize_font_name(font_name), self.approved_fonts)

    def check_layer(self, layer: LayerSnapshot) -> Optional[Violation]:
        if not layer.is_text or not layer.font_family:
            return None
        if self.is_approved(layer.font_family):
            return None

        return Violation(
            layer_id=layer.id,
            layer_name=layer.name or UNNAMED_TEXT,
            category=ViolationCategory.FONT,
            subtype=ViolationType.FONT,
            current_value=layer.font_family,
            suggested_value=self.default_font,
            message=f"Font '{layer.font_family}' is not an approved brand font"
        )

    def check(self, snapshot: DocumentSnapshot) -> CategoryReport:
        """Scan text layers and collect font violations."""
        seen: List[str] = []
        violations: List[Violation] = []

        for layer in snapshot.layers:
            if layer.is_text and layer.font_family and layer.font_family not in seen:
                seen.append(layer.font_family)
            violation = self.check_layer(layer)
            if violation:
                violations.append(violation)

        logger.info(
            "font_check_completed",
            fonts=len(seen),
            violations=len(violations)
        )

        return CategoryReport(
            category=ViolationCategory.FONT,
            violations=violations,
            all_values=seen
        )
