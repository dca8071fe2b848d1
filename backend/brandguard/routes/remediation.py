"""
Remediation Routes - propose and apply fixes for brand violations.
"""
from fastapi import APIRouter, Depends
import structlog

from brandguard.config import Settings, get_settings
from brandguard.models import BrandRules, CheckRequest, FixResponse, PlanRequest, PlanResponse
from brandguard.routes.compliance import get_default_rules, resolve_snapshot
from brandguard.services.engine import ComplianceEngine
from brandguard.services.sources import InMemoryLayerMutator

logger = structlog.get_logger()

router = APIRouter(prefix="/remediation", tags=["Remediation"])


@router.post("/plan", response_model=PlanResponse)
async def plan_fixes(
    request: PlanRequest,
    settings: Settings = Depends(get_settings),
    default_rules: BrandRules = Depends(get_default_rules)
):
    """
    Propose corrected values for every violation in the requested categories.
    Nothing is applied; logo size and position fixes come back as ordered steps.
    """
    snapshot = resolve_snapshot(request.document, settings)
    engine = ComplianceEngine(request.rules or default_rules)
    report = await engine.check_async(snapshot)
    actions = engine.plan(snapshot, report, request.categories)

    logger.info("remediation_planned", actions=len(actions), score=report.score)
    return PlanResponse(actions=actions, report=report)


@router.post("/fix", response_model=FixResponse)
async def fix_all(
    request: CheckRequest,
    settings: Settings = Depends(get_settings),
    default_rules: BrandRules = Depends(get_default_rules)
):
    """
    Apply all fixes to a copy of the document and re-check it.
    Returns the fix summary, the corrected document and its new report.
    """
    snapshot = resolve_snapshot(request.document, settings)
    engine = ComplianceEngine(request.rules or default_rules)
    mutator = InMemoryLayerMutator(snapshot)

    summary = engine.fix_all(snapshot, mutator)
    fixed_snapshot = mutator.snapshot()
    report = await engine.check_async(fixed_snapshot)

    return FixResponse(summary=summary, document=fixed_snapshot, report=report)
