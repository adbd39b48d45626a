"""PhishLens detection core — URL extraction, URL risk analysis, text features and scoring."""

from .models import AnalysisResult, UrlAnalysisResult
from .text_analyzer import analyze_text
from .url_analyzer import analyze_url
from .url_extractor import extract_urls

__all__ = [
    "AnalysisResult",
    "UrlAnalysisResult",
    "analyze_text",
    "analyze_url",
    "extract_urls",
]
