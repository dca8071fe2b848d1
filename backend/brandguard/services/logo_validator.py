"""
Logo Geometry Validator - validates logo size, aspect ratio and placement.
"""
from dataclasses import dataclass
from typing import List, Optional

import structlog

from brandguard.models import (
    Bounds, CategoryReport, DocumentSnapshot, LayerSnapshot, LogoPosition,
    LogoRule, Violation, ViolationCategory, ViolationType
)
from brandguard.utils import aspect_ratio

logger = structlog.get_logger()

LOGO_NOT_FOUND_MESSAGE = 'No logo layer detected. Name a layer "logo" to enable validation.'


@dataclass(frozen=True)
class PositionCheck:
    """Result of checking a logo's placement."""
    allowed: bool
    position: LogoPosition
    reason: Optional[str] = None


def classify_position(bounds: Bounds, document_width: float, document_height: float) -> LogoPosition:
    """
    Place the box's center in the document's 3x3 grid.
    Only pure corners are reported as corners; every other cell is "center".
    """
    center_x = bounds.x + bounds.width / 2
    center_y = bounds.y + bounds.height / 2

    is_top = center_y < document_height / 3
    is_bottom = center_y > document_height * 2 / 3
    is_left = center_x < document_width / 3
    is_right = center_x > document_width * 2 / 3

    if is_top and is_left:
        return LogoPosition.TOP_LEFT
    if is_top and is_right:
        return LogoPosition.TOP_RIGHT
    if is_bottom and is_left:
        return LogoPosition.BOTTOM_LEFT
    if is_bottom and is_right:
        return LogoPosition.BOTTOM_RIGHT
    return LogoPosition.CENTER


class LogoGeometryValidator:
    """Finds the logo layer and checks it against a LogoRule."""

    def __init__(self, rules: LogoRule):
        self.rules = rules
        self.identifier = (rules.identifier or "logo").lower()

    def is_logo_layer(self, layer: LayerSnapshot) -> bool:
        if not layer.name:
            return False
        name = layer.name.lower()
        return self.identifier in name or name == "logo" or name == "brand"

    def find_logo(self, snapshot: DocumentSnapshot) -> Optional[LayerSnapshot]:
        """Return the first logo layer in document order."""
        return next((layer for layer in snapshot.layers if self.is_logo_layer(layer)), None)

    def edge_distances(self, bounds: Bounds, document_width: float, document_height: float) -> List[float]:
        """Distances from the box to the left, right, top and bottom edges."""
        return [
            bounds.x,
            document_width - (bounds.x + bounds.width),
            bounds.y,
            document_height - (bounds.y + bounds.height),
        ]

    def check_position(self, bounds: Bounds, document_width: float, document_height: float) -> PositionCheck:
        position = classify_position(bounds, document_width, document_height)

        if position not in self.rules.allowed_positions:
            return PositionCheck(False, position, "Position not in allowed list")

        min_distance = self.rules.min_distance_from_edge
        if any(d < min_distance for d in self.edge_distances(bounds, document_width, document_height)):
            return PositionCheck(False, position, "Too close to edge")

        return PositionCheck(True, position)

    def validate_layer(self, layer: LayerSnapshot, document_width: float, document_height: float) -> List[Violation]:
        """Violations for one logo layer, in width, height, aspect ratio, position order."""
        rules = self.rules
        bounds = layer.bounds
        width, height = bounds.width, bounds.height
        violations = []

        def violation(subtype: ViolationType, current, suggested, message: str) -> Violation:
            return Violation(
                layer_id=layer.id,
                layer_name=layer.name or "",
                category=ViolationCategory.LOGO,
                subtype=subtype,
                current_value=current,
                suggested_value=suggested,
                message=message
            )

        if width < rules.min_width:
            violations.append(violation(
                ViolationType.WIDTH, width, rules.min_width,
                f"Logo width ({round(width)}px) is below minimum ({rules.min_width:g}px)"
            ))

        if height < rules.min_height:
            violations.append(violation(
                ViolationType.HEIGHT, height, rules.min_height,
                f"Logo height ({round(height)}px) is below minimum ({rules.min_height:g}px)"
            ))

        ratio = aspect_ratio(width, height)
        ratio_range = rules.aspect_ratio
        if ratio < ratio_range.min or ratio > ratio_range.max:
            suggested = ratio_range.min if ratio < ratio_range.min else ratio_range.max
            violations.append(violation(
                ViolationType.ASPECT_RATIO, round(ratio, 2), suggested,
                f"Logo aspect ratio ({ratio:.2f}) is outside allowed range "
                f"({ratio_range.min:g} - {ratio_range.max:g})"
            ))

        position_check = self.check_position(bounds, document_width, document_height)
        if not position_check.allowed:
            violations.append(violation(
                ViolationType.POSITION, position_check.position.value, None,
                f"Logo position ({position_check.position.value}) is not allowed: {position_check.reason}"
            ))

        return violations

    def check(self, snapshot: DocumentSnapshot) -> CategoryReport:
        logo_layer = self.find_logo(snapshot)

        if logo_layer is None:
            logger.info("logo_not_found", identifier=self.identifier, layers=len(snapshot.layers))
            return CategoryReport(
                category=ViolationCategory.LOGO,
                found=False,
                violations=[Violation(
                    category=ViolationCategory.LOGO,
                    subtype=ViolationType.MISSING,
                    message=LOGO_NOT_FOUND_MESSAGE
                )]
            )

        violations = self.validate_layer(logo_layer, snapshot.width, snapshot.height)

        logger.info(
            "logo_check_completed",
            layer_id=logo_layer.id,
            violations=len(violations)
        )

        return CategoryReport(
            category=ViolationCategory.LOGO,
            violations=violations,
            all_values=[logo_layer.id]
        )
