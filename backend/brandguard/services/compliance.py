"""
Compliance Aggregator - merges category reports and computes the score.
"""
import math
from typing import Iterable

import structlog

from brandguard.models import CategoryReport, ComplianceReport, ScoreBand, ViolationCategory

logger = structlog.get_logger()

# Points charged per pair of violations in a category, and the per-category cap
DEDUCTION_PER_PAIR = 10
MAX_CATEGORY_DEDUCTION = 30

SCORE_BANDS = [
    (90, ScoreBand.EXCELLENT),
    (70, ScoreBand.GOOD),
    (50, ScoreBand.NEEDS_IMPROVEMENT),
    (30, ScoreBand.POOR),
]


def category_deduction(violation_count: int) -> int:
    """Points lost by one category: 10 per started pair, capped at 30."""
    if violation_count <= 0:
        return 0
    return min(DEDUCTION_PER_PAIR * math.ceil(violation_count / 2), MAX_CATEGORY_DEDUCTION)


def calculate_score(violation_counts: Iterable[int]) -> int:
    """Compliance score in [0, 100] from per-category violation counts."""
    score = 100 - sum(category_deduction(count) for count in violation_counts)
    return max(0, round(score))


def score_band(score: int) -> ScoreBand:
    for threshold, band in SCORE_BANDS:
        if score >= threshold:
            return band
    return ScoreBand.CRITICAL


def describe(report: CategoryReport) -> str:
    """Human-readable summary line for a category report."""
    count = report.violation_count
    if report.category == ViolationCategory.COLOR:
        return "All colors match brand guidelines" if report.is_compliant \
            else f"{count} color violation(s) found"
    if report.category == ViolationCategory.FONT:
        return "All fonts are brand-approved" if report.is_compliant \
            else f"{count} font violation(s) found"
    if not report.found:
        return "Logo not found in document"
    return "Logo placement and size are correct" if report.is_compliant \
        else f"{count} logo violation(s) found"


class ComplianceAggregator:
    """Joins the color, font and logo reports into one ComplianceReport."""

    def aggregate(
        self,
        colors: CategoryReport,
        fonts: CategoryReport,
        logo: CategoryReport
    ) -> ComplianceReport:
        reports = [
            report.model_copy(update={"details": describe(report)})
            for report in (colors, fonts, logo)
        ]
        score = calculate_score(report.violation_count for report in reports)
        band = score_band(score)

        logger.info(
            "compliance_aggregated",
            score=score,
            band=band.value,
            color_violations=reports[0].violation_count,
            font_violations=reports[1].violation_count,
            logo_violations=reports[2].violation_count
        )

        return ComplianceReport(
            colors=reports[0],
            fonts=reports[1],
            logo=reports[2],
            score=score,
            band=band
        )
