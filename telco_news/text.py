import re
from urllib.parse import urlparse

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_SCHEME = re.compile(r"^https?://")


def normalize_title(title: str) -> str:
    """Lower-case, drop punctuation and collapse whitespace for title comparison."""
    normalized = _NON_WORD.sub("", (title or "").lower())
    return _WHITESPACE.sub(" ", normalized).strip()


def normalize_url(url: str) -> str:
    """
    Canonical form used for URL comparison: hostname without ``www.`` plus
    path without the trailing slash. Scheme, query string and fragment are
    dropped. Unparseable input falls back to string-level cleanup.
    """
    url = url or ""
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        hostname = None

    if hostname:
        return re.sub(r"^www\.", "", hostname) + re.sub(r"/$", "", parsed.path)

    fallback = _SCHEME.sub("", url.lower())
    fallback = re.sub(r"^www\.", "", fallback)
    fallback = re.sub(r"/$", "", fallback)
    return fallback.split("?")[0]


def extract_domain(url: str) -> str:
    try:
        return (urlparse(url or "").hostname or "").lower()
    except ValueError:
        return ""
