"""
URL risk analyzer. Scores a single URL with lexical heuristics:
insecure transport, blocklisted fragments, suspicious TLDs, shorteners,
IP hosts, excessive subdomains, typosquatting, homograph characters and
risky path patterns.

Pure and offline: the same URL string always produces the same report and
no heuristic touches the network.
"""

import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit

import tldextract

from .lexicon import (
    BRAND_FRAGMENTS,
    CONFUSABLE_CHARS,
    LEGITIMATE_DOMAINS,
    SUSPICIOUS_DOMAIN_FRAGMENTS,
    SUSPICIOUS_TLDS,
    URL_RESOURCE_PATTERNS,
    URL_SHORTENERS,
)
from .models import SecurityFeatures, UrlAnalysisResult
from .policies import (
    HTTP_ONLY_REASON,
    INSECURE_HTTP_REASON,
    apply_url_policies,
    is_short_numeric_domain,
)

INVALID_URL_REASON = "Invalid URL format"
INVALID_URL_RISK = 50
MAX_HOST_LENGTH = 253

_SCHEME = re.compile(r"^(?:https?|ftp)://", re.I)
_IPV4_HOST = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")
_RANDOM_PATH_TAIL = re.compile(r"/[A-Za-z0-9]{6,}$")
_MALFORMED_HOST_CHARS = re.compile(r"[\s<>^|\"{}\\]")

# Bundled public-suffix snapshot only, never fetched over the network
_domain_extractor = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())

_brand_patterns = {
    fragment: re.compile("[^a-z0-9]?".join(re.escape(ch) for ch in fragment), re.I)
    for _, fragments in BRAND_FRAGMENTS
    for fragment in fragments
}


class InvalidUrl(ValueError):
    """Raised internally when a URL cannot be parsed into a usable host."""


def is_legitimate_domain(domain: str) -> bool:
    return domain.lower() in LEGITIMATE_DOMAINS


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute all cost 1)."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ch_a in enumerate(a, start=1):
        current = [i]
        for j, ch_b in enumerate(b, start=1):
            cost = 0 if ch_a == ch_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current
    return previous[-1]


def _strip_www(domain: str) -> str:
    return domain[4:] if domain.startswith("www.") else domain


def domain_core(domain: str) -> str:
    """Registrable label in front of the public suffix (``paypal`` for ``www.paypal.co.uk``)."""
    host = _strip_www(domain.lower())
    extracted = _domain_extractor(host)
    return extracted.domain or host.split(".")[0]


def _typosquat_candidates(core: str) -> list[str]:
    candidates = [core]
    for part in core.split("-"):
        if len(part) >= 4 and part != core and part not in candidates:
            candidates.append(part)
    return candidates


def find_impersonated_brand(domain: str) -> Optional[str]:
    """Return the brand a non-allow-listed domain looks like, if any."""
    if is_legitimate_domain(domain):
        return None

    candidates = _typosquat_candidates(domain_core(domain))
    for brand, fragments in BRAND_FRAGMENTS:
        for fragment in fragments:
            threshold = 1 if len(fragment) <= 4 else 2
            for candidate in candidates:
                if candidate != fragment and _brand_patterns[fragment].search(candidate):
                    return brand
                # Edit distance is at least the length difference
                if abs(len(candidate) - len(fragment)) > threshold:
                    continue
                distance = levenshtein_distance(candidate, fragment)
                if 0 < distance <= threshold:
                    return brand
    return None


def has_confusable_characters(domain: str) -> bool:
    return any(ch in CONFUSABLE_CHARS for ch in domain)


def has_excessive_subdomains(domain: str) -> bool:
    return len(_strip_www(domain).split(".")) > 3


def is_short_random_path(domain: str, path: str) -> bool:
    """Short first label (< 5 chars) followed by a random-looking path segment."""
    first_label = _strip_www(domain).split(".")[0]
    return len(first_label) < 5 and bool(_RANDOM_PATH_TAIL.search(path))


def _parse(url: str) -> SplitResult:
    target = url if _SCHEME.match(url) else f"http://{url}"
    try:
        parts = urlsplit(target)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise InvalidUrl(str(e)) from e

    host = parts.hostname
    if not host or len(host) > MAX_HOST_LENGTH:
        raise InvalidUrl(f"missing or oversized host in {url!r}")
    if _MALFORMED_HOST_CHARS.search(host) or ".." in host:
        raise InvalidUrl(f"malformed host in {url!r}")
    return parts


def host_of(url: str) -> Optional[str]:
    """Lowercase hostname of ``url`` (scheme optional), or None if it does not parse."""
    try:
        return _parse(url).hostname
    except InvalidUrl:
        return None


def _invalid_report(url: str) -> UrlAnalysisResult:
    return UrlAnalysisResult(
        url=url,
        suspicious=True,
        reasons=[INVALID_URL_REASON],
        risk_score=INVALID_URL_RISK,
    )


def _flag(report: UrlAnalysisResult, reason: str, points: int) -> None:
    report.suspicious = True
    report.reasons.append(reason)
    report.risk_score += points


def analyze_url(url: str) -> UrlAnalysisResult:
    """
    Produce a risk report for one URL. Never raises; unparseable input
    yields a fixed suspicious report with a risk score of 50.
    """
    try:
        parts = _parse(url)
    except InvalidUrl:
        return _invalid_report(url)

    domain = parts.hostname
    protocol = parts.scheme.lower()
    labels = domain.split(".")
    report = UrlAnalysisResult(
        url=url,
        domain=domain,
        protocol=protocol,
        tld=f".{labels[-1]}" if len(labels) > 1 else "",
        security_features=SecurityFeatures(https=protocol == "https"),
    )
    legitimate = is_legitimate_domain(domain)

    # Transport
    if not report.security_features.https:
        if legitimate:
            report.reasons.append(HTTP_ONLY_REASON)
            report.risk_score += 5
        else:
            report.reasons.append(INSECURE_HTTP_REASON)
            report.risk_score += 15

    if not legitimate:
        for fragment in SUSPICIOUS_DOMAIN_FRAGMENTS:
            if fragment in domain:
                _flag(report, f'Contains suspicious domain pattern: "{fragment}"', 20)

        for tld in SUSPICIOUS_TLDS:
            if domain.endswith(tld):
                _flag(report, f'Uses suspicious top-level domain: "{tld}"', 15)

    # Shorteners
    if not legitimate and is_short_numeric_domain(domain):
        _flag(report, "Uses suspicious short URL domain with numbers (likely a shortener)", 35)
        report.redirect_count = 1
    else:
        for shortener in URL_SHORTENERS:
            if shortener in domain:
                _flag(
                    report,
                    f'Uses URL shortener: "{shortener}" which can hide the true destination',
                    15,
                )
                report.redirect_count = 1

    if not legitimate and is_short_random_path(domain, parts.path):
        _flag(report, "Uses suspicious short domain with random alphanumeric path", 30)

    if _IPV4_HOST.match(domain):
        _flag(report, "Uses IP address instead of domain name", 30)

    if not legitimate and has_excessive_subdomains(domain):
        _flag(report, "Contains excessive subdomains which is unusual", 10)

    if not legitimate:
        brand = find_impersonated_brand(domain)
        if brand:
            report.brand_impersonation = brand
            _flag(report, f'Possible typosquatting attempt of "{brand}"', 25)

        if has_confusable_characters(domain):
            _flag(report, "Possible homograph attack using deceptive characters", 35)

    # Path and query patterns
    path = parts.path.lower()
    path_query = f"{parts.path}?{parts.query}".lower() if parts.query else path
    for pattern, message, component in URL_RESOURCE_PATTERNS:
        subject = path if component == "path" else path_query
        if not pattern.search(subject):
            continue
        if legitimate:
            report.reasons.append(f"{message} (but on a legitimate domain)")
            report.risk_score += 3
        else:
            _flag(report, message, 10)

    return apply_url_policies(report, legitimate)
