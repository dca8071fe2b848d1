"""
Remediation - plans corrected values for violations and applies them through
a LayerMutator.

Planning is pure: it reads the snapshot, the rules and a report and returns
RemediationAction values. Execution is separate and tolerates per-action
failures.
"""
from typing import Dict, List, Optional

import structlog

from brandguard.exceptions import MutationError
from brandguard.models import (
    Bounds, BrandRules, CategoryFixResult, CategoryReport, ComplianceReport,
    DocumentSnapshot, RemediationAction, RemediationAttribute,
    ViolationCategory, ViolationType
)
from brandguard.services.logo_validator import LOGO_NOT_FOUND_MESSAGE, LogoGeometryValidator
from brandguard.services.sources import LayerMutator
from brandguard.utils import aspect_ratio

logger = structlog.get_logger()

COLOR_ATTRIBUTES = {
    ViolationType.FILL: RemediationAttribute.FILL,
    ViolationType.STROKE: RemediationAttribute.STROKE,
    ViolationType.TEXT: RemediationAttribute.TEXT_COLOR,
}


# ============================================================================
# PLANNING
# ============================================================================

class RemediationPlanner:
    """Derives target values for violations without applying them."""

    def __init__(self, rules: BrandRules):
        self.rules = rules
        self.logo_validator = LogoGeometryValidator(rules.logo)

    def plan_colors(self, report: CategoryReport) -> List[RemediationAction]:
        actions = []
        for violation in report.violations:
            if violation.suggested_value is None:
                logger.warning(
                    "remediation_skipped",
                    reason="no_closest_brand_color",
                    layer_id=violation.layer_id,
                    color=violation.current_value
                )
                continue

            actions.append(RemediationAction(
                layer_id=violation.layer_id,
                layer_name=violation.layer_name,
                category=ViolationCategory.COLOR,
                attribute=COLOR_ATTRIBUTES[violation.subtype],
                proposed_value=violation.suggested_value,
                fixes=[violation.subtype.value]
            ))
        return actions

    def plan_fonts(self, report: CategoryReport) -> List[RemediationAction]:
        default_font = self.rules.fonts.default
        if report.violations and default_font is None:
            logger.warning("remediation_skipped", reason="no_default_font", violations=report.violation_count)
            return []

        return [
            RemediationAction(
                layer_id=violation.layer_id,
                layer_name=violation.layer_name,
                category=ViolationCategory.FONT,
                attribute=RemediationAttribute.FONT_FAMILY,
                proposed_value=default_font.name,
                fixes=["font"]
            )
            for violation in report.violations
        ]

    def plan_logo(self, snapshot: DocumentSnapshot, report: CategoryReport) -> List[RemediationAction]:
        """
        Three sequential corrections over one bounds value:

        1. raise width/height to their minimums,
        2. fix the aspect ratio of the result by solving width / height ==
           the violated bound (height for a low ratio, width for a high one),
        3. if the resized box is still badly placed, move its origin to
           (minDistanceFromEdge, minDistanceFromEdge).

        Size corrections and the position correction come back as separate,
        ordered actions (step 1, step 2) for the same layer.
        """
        if not report.found or report.is_compliant:
            return []

        layer_id = report.violations[0].layer_id
        layer = snapshot.get_layer(layer_id)
        if layer is None:
            logger.warning("remediation_skipped", reason="logo_layer_missing", layer_id=layer_id)
            return []

        rules = self.rules.logo
        bounds = layer.bounds
        width, height = bounds.width, bounds.height
        size_fixes = []

        if width < rules.min_width:
            width = rules.min_width
            size_fixes.append("width")
        if height < rules.min_height:
            height = rules.min_height
            size_fixes.append("height")

        ratio = aspect_ratio(width, height)
        if ratio < rules.aspect_ratio.min:
            height = width / rules.aspect_ratio.min
            size_fixes.append("aspect ratio")
        elif ratio > rules.aspect_ratio.max:
            width = height * rules.aspect_ratio.max
            size_fixes.append("aspect ratio")

        resized = Bounds(x=bounds.x, y=bounds.y, width=width, height=height)
        actions = []
        if size_fixes:
            actions.append(RemediationAction(
                layer_id=layer.id,
                layer_name=layer.name or "",
                category=ViolationCategory.LOGO,
                attribute=RemediationAttribute.BOUNDS,
                proposed_value=resized,
                fixes=size_fixes,
                step=1
            ))

        position_check = self.logo_validator.check_position(resized, snapshot.width, snapshot.height)
        if not position_check.allowed:
            clearance = rules.min_distance_from_edge
            actions.append(RemediationAction(
                layer_id=layer.id,
                layer_name=layer.name or "",
                category=ViolationCategory.LOGO,
                attribute=RemediationAttribute.POSITION,
                proposed_value=resized.model_copy(update={"x": clearance, "y": clearance}),
                fixes=["position"],
                step=len(actions) + 1
            ))

        return actions

    def plan(self, snapshot: DocumentSnapshot, report: CategoryReport) -> List[RemediationAction]:
        """Plan the actions for one category report."""
        if report.category == ViolationCategory.COLOR:
            return self.plan_colors(report)
        if report.category == ViolationCategory.FONT:
            return self.plan_fonts(report)
        return self.plan_logo(snapshot, report)

    def plan_all(
        self,
        snapshot: DocumentSnapshot,
        report: ComplianceReport,
        categories: Optional[List[ViolationCategory]] = None
    ) -> List[RemediationAction]:
        if categories is None:
            categories = list(ViolationCategory)
        actions = []
        for category_report in report.categories():
            if category_report.category in categories:
                actions.extend(self.plan(snapshot, category_report))
        return actions


# ============================================================================
# EXECUTION
# ============================================================================

CATEGORY_NOUNS: Dict[ViolationCategory, str] = {
    ViolationCategory.COLOR: "color",
    ViolationCategory.FONT: "font",
    ViolationCategory.LOGO: "logo",
}


class RemediationExecutor:
    """
    Applies remediation actions through a LayerMutator.
    Each action is independent: a MutationError is counted and the
    remaining actions still run.
    """

    def __init__(self, mutator: LayerMutator):
        self.mutator = mutator

    def apply_action(self, action: RemediationAction) -> None:
        mutator = self.mutator
        attribute = action.attribute
        if attribute == RemediationAttribute.FILL:
            mutator.set_fill_color(action.layer_id, action.proposed_value)
        elif attribute == RemediationAttribute.STROKE:
            mutator.set_stroke_color(action.layer_id, action.proposed_value)
        elif attribute == RemediationAttribute.TEXT_COLOR:
            mutator.set_text_color(action.layer_id, action.proposed_value)
        elif attribute == RemediationAttribute.FONT_FAMILY:
            mutator.set_font_family(action.layer_id, action.proposed_value)
        else:
            mutator.set_bounds(action.layer_id, action.proposed_value)

    def apply(
        self,
        report: CategoryReport,
        actions: List[RemediationAction]
    ) -> CategoryFixResult:
        """Apply one category's actions, in step order per layer."""
        category = report.category
        noun = CATEGORY_NOUNS[category]

        if category == ViolationCategory.LOGO and not report.found:
            return CategoryFixResult(category=category, message=LOGO_NOT_FOUND_MESSAGE)
        if report.is_compliant:
            message = "Logo is already compliant" if category == ViolationCategory.LOGO \
                else f"No {noun} violations found"
            return CategoryFixResult(category=category, message=message)

        fixed = 0
        failed = 0
        applied_fixes: List[str] = []
        for action in sorted(actions, key=lambda a: a.step):
            try:
                self.apply_action(action)
            except MutationError as e:
                failed += 1
                logger.warning(
                    "remediation_failed",
                    category=category.value,
                    layer_id=action.layer_id,
                    attribute=action.attribute.value,
                    error=e.message
                )
                continue
            fixed += 1
            applied_fixes.extend(action.fixes)

        if category == ViolationCategory.LOGO:
            message = f"Fixed logo: {', '.join(applied_fixes)}" if fixed else "Could not fix logo violations"
        else:
            message = f"Fixed {fixed} {noun} violation(s)"
            if failed:
                message += f", {failed} could not be fixed"

        logger.info("remediation_applied", category=category.value, fixed=fixed, failed=failed)
        return CategoryFixResult(category=category, fixed=fixed, failed=failed, message=message)
