"""
Profile link shortening for PDF display.

The full URL stays available for the link annotation; only the visible
text is shortened:
- https://www.linkedin.com/in/jdoe -> linkedin/jdoe
- https://github.com/jdoe          -> github/jdoe
- https://medium.com/@jdoe         -> medium/jdoe
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class ShortUrl:
    display_text: str
    full_url: str
    platform: str = "unknown"


URL_PATTERNS = {
    "linkedin": (re.compile(r"^https://(?:www\.)?linkedin\.com/in/([^/?#]+)", re.I), "linkedin/{}"),
    "github": (re.compile(r"^https://(?:www\.)?github\.com/([^/?#]+)", re.I), "github/{}"),
    "medium": (re.compile(r"^https://(?:www\.)?medium\.com/@([^/?#]+)", re.I), "medium/{}"),
}

# Partial URLs completed before validation
_PARTIAL_PREFIXES = (
    ("linkedin.com/in/", "https://www."),
    ("www.linkedin.com/in/", "https://"),
    ("github.com/", "https://"),
    ("www.github.com/", "https://"),
    ("medium.com/@", "https://"),
)


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Complete partial profile URLs; None when the result is not a valid URL."""
    if not url or not isinstance(url, str):
        return None

    trimmed = url.strip()
    lowered = trimmed.lower()
    for prefix, scheme in _PARTIAL_PREFIXES:
        if lowered.startswith(prefix):
            trimmed = scheme + trimmed
            break

    parsed = urlparse(trimmed)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return trimmed


def shorten_url(url: str) -> ShortUrl:
    """
    Shorten a profile URL for display.

    Raises:
        ValueError: If the URL is empty or invalid
    """
    normalized = normalize_url(url)
    if not normalized:
        raise ValueError(f"Invalid URL provided: {url}")

    for platform, (pattern, template) in URL_PATTERNS.items():
        match = pattern.match(normalized)
        if match:
            return ShortUrl(template.format(match.group(1)), normalized, platform)

    return ShortUrl(normalized, normalized, "unknown")


def is_supported_url(url: str) -> bool:
    try:
        return shorten_url(url).platform != "unknown"
    except ValueError:
        return False
