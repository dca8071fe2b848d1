"""
Compliance Routes - check documents against brand rules and compute scores.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
import structlog

from brandguard.config import Settings, get_settings, load_brand_rules
from brandguard.exceptions import ExtractionError
from brandguard.models import (
    BrandRules, CheckRequest, ComplianceReport, DocumentSnapshot, ScoreRequest, ScoreResponse
)
from brandguard.services.compliance import calculate_score, score_band
from brandguard.services.engine import ComplianceEngine
from brandguard.services.sources import FixtureSnapshotProvider, get_snapshot_provider

logger = structlog.get_logger()

router = APIRouter(prefix="/compliance", tags=["Compliance"])


def get_default_rules(settings: Settings = Depends(get_settings)) -> BrandRules:
    """Brand rules configured for this process."""
    return load_brand_rules(settings.brand_rules_path)


def resolve_snapshot(document: Optional[DocumentSnapshot], settings: Settings) -> DocumentSnapshot:
    """Fetch the snapshot from the configured source; a missing live payload is a client error."""
    provider = get_snapshot_provider(settings.snapshot_source, document)
    try:
        return provider.get_snapshot()
    except ExtractionError as e:
        logger.warning("snapshot_unavailable", source=settings.snapshot_source, error=e.message)
        raise HTTPException(status_code=400, detail=f"Document snapshot unavailable: {e.message}")


@router.post("/check", response_model=ComplianceReport)
async def check_document(
    request: CheckRequest,
    settings: Settings = Depends(get_settings),
    default_rules: BrandRules = Depends(get_default_rules)
):
    """
    Check a document snapshot against brand rules.

    Runs color, font and logo checks concurrently and returns:
    - per-category reports with violations and a details line
    - score: 0-100 compliance score
    - band: Excellent / Good / Needs Improvement / Poor / Critical
    """
    snapshot = resolve_snapshot(request.document, settings)
    engine = ComplianceEngine(request.rules or default_rules)
    report = await engine.check_async(snapshot)

    logger.info(
        "document_checked",
        layers=len(snapshot.layers),
        score=report.score,
        band=report.band.value
    )
    return report


@router.post("/score", response_model=ScoreResponse)
async def score_counts(request: ScoreRequest):
    """Compute the score and band for given per-category violation counts."""
    score = calculate_score([request.colors, request.fonts, request.logo])
    return ScoreResponse(score=score, band=score_band(score))


@router.get("/demo", response_model=ComplianceReport)
async def demo_report(default_rules: BrandRules = Depends(get_default_rules)):
    """Check the built-in fixture document. Useful for UI development."""
    snapshot = FixtureSnapshotProvider().get_snapshot()
    return await ComplianceEngine(default_rules).check_async(snapshot)


@router.get("/rules", response_model=BrandRules)
async def get_rules(default_rules: BrandRules = Depends(get_default_rules)):
    """Get the active brand rules."""
    return default_rules
