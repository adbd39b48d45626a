"""Adaptive learning API routes — feedback, weights and domain reputation."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from ...analysis.scoring import BASE_WEIGHTS, adjusted_weights
from ...dependencies import get_adaptive_learning

router = APIRouter(prefix="/learning", tags=["learning"])

ThreatLevel = Literal["low", "medium", "high"]


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., max_length=100_000)
    urls: list[str] = []
    predicted_threat_level: ThreatLevel = Field(..., alias="predictedThreatLevel")
    actual_threat_level: ThreatLevel = Field(..., alias="actualThreatLevel")
    features: dict[str, float] = {}


@router.post("/feedback")
async def submit_feedback(body: FeedbackRequest, learning=Depends(get_adaptive_learning)):
    """Record a correction; the engine adapts its weights and domain reputation."""
    entry = await learning.record_feedback(
        text=body.text,
        urls=body.urls,
        predicted=body.predicted_threat_level,
        actual=body.actual_threat_level,
        features=body.features,
    )
    return {
        "entry": entry.to_dict(),
        "weightAdjustments": learning.get_weight_adjustments(),
    }


@router.get("/weights")
async def get_weights(learning=Depends(get_adaptive_learning)):
    """Learned adjustments alongside the base and effective scoring weights."""
    adjustments = learning.get_weight_adjustments()
    return {
        "adjustments": adjustments,
        "baseWeights": dict(BASE_WEIGHTS),
        "effectiveWeights": adjusted_weights(adjustments),
    }


@router.get("/reputation/{domain}")
async def get_reputation(domain: str, learning=Depends(get_adaptive_learning)):
    """Accumulated phishing/legitimate verdicts for a domain."""
    reputation = learning.get_domain_reputation(domain)
    if reputation is None:
        raise HTTPException(status_code=404, detail=f"No reputation recorded for {domain}")
    return reputation.to_dict()


@router.get("/feedback")
async def get_recent_feedback(
    limit: int = Query(20, ge=1, le=100),
    learning=Depends(get_adaptive_learning),
):
    """Most recent feedback entries, newest first."""
    entries = learning.recent_feedback(limit)
    return {"entries": [entry.to_dict() for entry in entries], "count": len(entries)}
