"""Phishing analysis API routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...analysis.text_analyzer import analyze_text
from ...analysis.url_analyzer import analyze_url
from ...dependencies import get_enhanced_analyzer

router = APIRouter(prefix="/analysis", tags=["analysis"])

MAX_TEXT_LENGTH = 100_000


class TextRequest(BaseModel):
    text: str = Field(..., max_length=MAX_TEXT_LENGTH)


class UrlRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=4096)


@router.post("/text")
async def analyze_text_content(body: TextRequest):
    """Run the stateless base analysis over a piece of text."""
    return analyze_text(body.text).to_dict()


@router.post("/enhanced")
async def analyze_text_enhanced(body: TextRequest, analyzer=Depends(get_enhanced_analyzer)):
    """Analyze text with learned weights, reputation and threat-feed enrichment."""
    result = await analyzer.analyze(body.text)
    return result.to_dict()


@router.post("/url")
async def analyze_single_url(body: UrlRequest):
    """Risk report for one URL."""
    return analyze_url(body.url).to_dict()
