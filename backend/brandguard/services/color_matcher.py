"""
Color Matcher - checks layer colors against the approved brand palette.
"""
from typing import List, Optional

import structlog

from brandguard.models import (
    BrandColor, CategoryReport, ColorRules, DocumentSnapshot, LayerSnapshot,
    Violation, ViolationCategory, ViolationType
)
from brandguard.utils import color_distance, hex_to_rgb

logger = structlog.get_logger()

UNNAMED_LAYER = "Unnamed Layer"


class ColorMatcher:
    """
    Euclidean RGB matching against an approved palette.
    A color is approved when its distance to the nearest palette entry is
    within the tolerance, boundary included.
    """

    def __init__(self, rules: ColorRules):
        self.approved_colors: List[BrandColor] = list(rules.approved)
        self.tolerance = rules.tolerance

    def is_approved(self, hex_color: Optional[str]) -> bool:
        """Check if a color is within tolerance of any approved color."""
        target = hex_to_rgb(hex_color)
        if target is None:
            return False

        return any(
            color_distance(target, brand_color.rgb) <= self.tolerance
            for brand_color in self.approved_colors
        )

    def find_closest_brand_color(self, hex_color: Optional[str]) -> Optional[BrandColor]:
        """
        Find the approved color nearest to hex_color.
        Ties go to the color declared first. None for malformed input or an
        empty palette.
        """
        target = hex_to_rgb(hex_color)
        if target is None:
            return None

        closest = None
        min_distance = float("inf")
        for brand_color in self.approved_colors:
            distance = color_distance(target, brand_color.rgb)
            # Strict comparison keeps the earliest of equidistant colors
            if distance < min_distance:
                min_distance = distance
                closest = brand_color

        return closest

    def check_layer(self, layer: LayerSnapshot) -> List[Violation]:
        """Test each color-bearing attribute of a layer independently."""
        candidates = [
            (ViolationType.FILL, layer.fill),
            (ViolationType.STROKE, layer.stroke),
        ]
        if layer.is_text:
            candidates.append((ViolationType.TEXT, layer.text_color))

        violations = []
        for subtype, color in candidates:
            if not color or self.is_approved(color):
                continue

            closest = self.find_closest_brand_color(color)
            violations.append(Violation(
                layer_id=layer.id,
                layer_name=layer.name or UNNAMED_LAYER,
                category=ViolationCategory.COLOR,
                subtype=subtype,
                current_value=color,
                suggested_value=closest.hex if closest else None,
                message=(
                    f"{subtype.value.capitalize()} color {color} is not in the brand palette"
                    + (f"; closest is {closest.name} ({closest.hex})" if closest else "")
                )
            ))
        return violations

    def check(self, snapshot: DocumentSnapshot) -> CategoryReport:
        """Scan every layer and collect color violations."""
        seen: List[str] = []
        violations: List[Violation] = []

        for layer in snapshot.layers:
            for color in (layer.fill, layer.stroke, layer.text_color if layer.is_text else None):
                if color and color not in seen:
                    seen.append(color)
            violations.extend(self.check_layer(layer))

        logger.info(
            "color_check_completed",
            layers=len(snapshot.layers),
            colors=len(seen),
            violations=len(violations)
        )

        return CategoryReport(
            category=ViolationCategory.COLOR,
            violations=violations,
            all_values=seen
        )
