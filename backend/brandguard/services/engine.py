"""
Compliance Engine - runs all brand checks on a snapshot, scores the result
and plans or applies fixes.
"""
import asyncio
from typing import List, Optional

import structlog

from brandguard.models import (
    BrandRules, ComplianceReport, DocumentSnapshot, FixSummary, RemediationAction,
    ViolationCategory
)
from brandguard.services.color_matcher import ColorMatcher
from brandguard.services.compliance import ComplianceAggregator
from brandguard.services.font_matcher import FontMatchPolicy, FontMatcher, substring_match_policy
from brandguard.services.logo_validator import LogoGeometryValidator
from brandguard.services.remediation import RemediationExecutor, RemediationPlanner
from brandguard.services.sources import LayerMutator

logger = structlog.get_logger()


class ComplianceEngine:
    """
    Façade over the checkers, the aggregator and the remediation planner.
    Holds no state beyond the rules it was built with.
    """

    def __init__(self, rules: BrandRules, font_policy: FontMatchPolicy = substring_match_policy):
        self.rules = rules
        self.color_matcher = ColorMatcher(rules.colors)
        self.font_matcher = FontMatcher(rules.fonts, policy=font_policy)
        self.logo_validator = LogoGeometryValidator(rules.logo)
        self.aggregator = ComplianceAggregator()
        self.planner = RemediationPlanner(rules)

    def check(self, snapshot: DocumentSnapshot) -> ComplianceReport:
        """Run all three checks and aggregate them."""
        return self.aggregator.aggregate(
            self.color_matcher.check(snapshot),
            self.font_matcher.check(snapshot),
            self.logo_validator.check(snapshot)
        )

    async def check_async(self, snapshot: DocumentSnapshot) -> ComplianceReport:
        """Run the three checks concurrently in worker threads, then aggregate."""
        colors, fonts, logo = await asyncio.gather(
            asyncio.to_thread(self.color_matcher.check, snapshot),
            asyncio.to_thread(self.font_matcher.check, snapshot),
            asyncio.to_thread(self.logo_validator.check, snapshot)
        )
        return self.aggregator.aggregate(colors, fonts, logo)

    def plan(
        self,
        snapshot: DocumentSnapshot,
        report: Optional[ComplianceReport] = None,
        categories: Optional[List[ViolationCategory]] = None
    ) -> List[RemediationAction]:
        report = report or self.check(snapshot)
        return self.planner.plan_all(snapshot, report, categories)

    def fix_all(self, snapshot: DocumentSnapshot, mutator: LayerMutator) -> FixSummary:
        """
        Plan and apply fixes for every category.
        Categories run independently; failed actions are counted in the summary.
        """
        report = self.check(snapshot)
        executor = RemediationExecutor(mutator)

        results = {}
        for category_report in report.categories():
            actions = self.planner.plan(snapshot, category_report)
            results[category_report.category] = executor.apply(category_report, actions)

        summary = FixSummary(
            colors=results[ViolationCategory.COLOR],
            fonts=results[ViolationCategory.FONT],
            logo=results[ViolationCategory.LOGO]
        )
        logger.info("fix_all_completed", total_fixed=summary.total_fixed, total_failed=summary.total_failed)
        return summary
