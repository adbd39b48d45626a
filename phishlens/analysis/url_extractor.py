"""Lexical URL extraction from free-form text.

No network resolution happens here. Every pattern is linear so arbitrary
(and hostile) input is safe to scan.
"""

import re

_QUALIFIED_URL = re.compile(r"https?://[^\s]+", re.I)
_WWW_URL = re.compile(r"(?<!\S)www\.[^\s]+", re.I)
_SHORT_URL = re.compile(r"\b[A-Za-z0-9]{2,5}\.[A-Za-z]{2,3}/[A-Za-z0-9]{4,}\b")

_NON_URL_CHARS = re.compile(r"[^\w.\-/]")
_DOMAIN_SHAPE = re.compile(r"\w\.\w{2,}")
_PLAIN_NUMBER = re.compile(r"^\d+\.\d+$")

_TRAILING_PUNCTUATION = ".,;:!?)]}'\""


def _strip_trailing(candidate: str) -> str:
    return candidate.rstrip(_TRAILING_PUNCTUATION)


def _with_scheme(candidate: str) -> str:
    return f"http://{candidate}"


def _bare_token_candidate(token: str) -> str:
    """Return an implicit URL for a whitespace token, or "" when it is not one."""
    if "." not in token or "@" in token or "://" in token:
        return ""
    if token.lower().startswith("www.") or _PLAIN_NUMBER.match(token):
        return ""
    cleaned = _strip_trailing(_NON_URL_CHARS.sub("", token))
    if not _DOMAIN_SHAPE.search(cleaned):
        return ""
    return _with_scheme(cleaned)


def extract_urls(text: str) -> list[str]:
    """Find candidate URLs in ``text``.

    Recognized forms, in order: fully qualified ``http(s)://`` tokens,
    ``www.`` tokens, short ``xx.yy/path`` tokens and finally any other
    domain-looking word. Protocol-less forms get an ``http://`` prefix.
    The result is de-duplicated and keeps first-seen order.
    """
    if not text:
        return []

    found: list[str] = []
    consumed: list[tuple[int, int]] = []

    for match in _QUALIFIED_URL.finditer(text):
        found.append(_strip_trailing(match.group(0)))
        consumed.append(match.span())

    for match in _WWW_URL.finditer(text):
        found.append(_with_scheme(_strip_trailing(match.group(0))))
        consumed.append(match.span())

    for match in _SHORT_URL.finditer(text):
        start, end = match.span()
        if any(start < c_end and c_start < end for c_start, c_end in consumed):
            continue
        found.append(_with_scheme(_strip_trailing(match.group(0))))

    for token in text.split():
        candidate = _bare_token_candidate(token)
        if candidate:
            found.append(candidate)

    urls = []
    seen = set()
    for url in found:
        # A lone scheme or "www." left after stripping is not a URL
        if url.lower() in ("http://", "https://", "http://www"):
            continue
        if url not in seen:
            seen.add(url)
            urls.append(url)
    return urls
