"""Static lexicons used by the URL and text analyzers.

Everything here is immutable module-level data shared by every analysis.
"""

import re

# Phishing keywords (case-insensitive substring match)
PHISHING_KEYWORDS = (
    "urgent", "account suspended", "verify immediately", "unusual activity",
    "login attempt", "click here", "confirm identity", "security alert",
    "update your information", "password expired", "limited offer", "act now",
    "payment failed", "unauthorized", "suspicious", "immediately", "verify",
)

URGENCY_WORDS = (
    "urgent", "immediately", "alert", "warning", "now", "quick", "fast",
    "important", "attention", "critical", "limited time",
)

# Matched at the start of a word so "rs" does not fire on "yours"
MONEY_TERMS = (
    "money", "cash", "credit", "debit", "bank", "account", "payment",
    "transfer", "withdraw", "deposit", "rs", "rupees", "usd", "euro",
    "dollar", "amount",
)

MISSPELLINGS = (
    "acct", "verifcation", "verificaton", "securty", "informaton",
    "accesing", "acount", "confirmaton",
)

# Brands looked for as whole words in message text
TEXT_BRANDS = (
    "amazon", "netflix", "paypal", "apple", "microsoft", "google",
    "facebook", "bank", "instagram", "twitter",
)

# Known-bad fragments seen inside phishing hostnames
SUSPICIOUS_DOMAIN_FRAGMENTS = (
    "amaz0n", "g00gle", "paypa1", "b4nk", "netfl1x", "apple-id",
    "microsoft-verify", "secure-login", "account-verify",
)

SUSPICIOUS_TLDS = (".xyz", ".info", ".tk", ".ml", ".cf", ".gq", ".top", ".online")

URL_SHORTENERS = (
    "bit.ly", "tinyurl.com", "goo.gl", "t.co", "is.gd", "ow.ly",
    "buff.ly", "rebrand.ly", "shorturl.at", "tiny.cc",
)

_LEGITIMATE_BASE = (
    "google.com", "microsoft.com", "apple.com", "amazon.com", "facebook.com",
    "twitter.com", "instagram.com", "linkedin.com", "netflix.com",
    "paypal.com", "youtube.com", "github.com", "wikipedia.org", "yahoo.com",
    "reddit.com",
)

# Exact-match allow-list, each domain plus its www. host
LEGITIMATE_DOMAINS = frozenset(
    host for domain in _LEGITIMATE_BASE for host in (domain, f"www.{domain}")
)

# Brand display name -> hostname fragments it is impersonated through
BRAND_FRAGMENTS = (
    ("Google", ("google",)),
    ("Amazon", ("amazon",)),
    ("Microsoft", ("microsoft", "outlook", "office365", "azure")),
    ("Apple", ("apple", "icloud")),
    ("PayPal", ("paypal",)),
    ("Facebook", ("facebook", "fb")),
    ("Instagram", ("instagram",)),
    ("Netflix", ("netflix",)),
    ("LinkedIn", ("linkedin",)),
    ("Twitter", ("twitter",)),
    ("Bank", ("bank", "chase", "wellsfargo", "bankofamerica", "citibank")),
)

CONFUSABLE_CHARS = frozenset(
    # Cyrillic and other script look-alikes
    "аеорсѕіјԁɡʏ"
    # Digits standing in for letters
    "0125"
    # Small capitals
    "ᴀʙᴄᴅᴇғ"
    # Dotted diacritics
    "ṇṃḍḥ"
)

# Letter sequences that render like a single letter: rn -> m, vv -> w
LOOKALIKE_SEQUENCES = (("rn", "m"), ("vv", "w"))

# (pattern, message, component) checked against the URL resource.
# component is "path" or "path_query"; both are lowercased first.
URL_RESOURCE_PATTERNS = (
    (re.compile(r"login|signin|account|password|verify|secure|auth"),
     "Contains sensitive authentication terms in URL", "path_query"),
    (re.compile(r"confirm|update|alert|warning"),
     "Contains urgent action terms in URL", "path_query"),
    (re.compile(r"\.(?:php|aspx|jsp)$"),
     "Uses executable script in URL", "path"),
    (re.compile(r"\.(?:exe|zip|rar|dll|dat)$"),
     "Links to executable or data file", "path"),
    (re.compile(r"[^\w\-./:?=&%]"),
     "Contains unusual characters in URL", "path_query"),
)

SENSITIVE_REQUEST_PATTERNS = (
    (re.compile(r"social security|ssn|national id|passport", re.I),
     "Requests for SSN/national ID"),
    (re.compile(r"credit card|card number|cvv|expiration date", re.I),
     "Requests for credit card information"),
    # Pair must sit within 200 chars so repeated "username" text stays linear
    (re.compile(r"username.{0,200}?password", re.I),
     "Requests for login credentials"),
    (re.compile(r"bank.{1,20}(?:account|routing)", re.I),
     "Requests for banking information"),
    (re.compile(r"click.{1,30}(?:link|here|confirm)", re.I),
     "Encourages clicking on links"),
    (re.compile(r"withdraw|deposit|transfer|credited|debited", re.I),
     "References to financial transactions"),
)
