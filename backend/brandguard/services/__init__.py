"""
Services package initialization.
"""
from brandguard.services.color_matcher import ColorMatcher
from brandguard.services.font_matcher import FontMatcher, exact_match_policy, substring_match_policy
from brandguard.services.logo_validator import LogoGeometryValidator
from brandguard.services.compliance import ComplianceAggregator, calculate_score, score_band
from brandguard.services.remediation import RemediationExecutor, RemediationPlanner
from brandguard.services.engine import ComplianceEngine

__all__ = [
    "ColorMatcher",
    "FontMatcher",
    "exact_match_policy",
    "substring_match_policy",
    "LogoGeometryValidator",
    "ComplianceAggregator",
    "calculate_score",
    "score_band",
    "RemediationExecutor",
    "RemediationPlanner",
    "ComplianceEngine"
]
