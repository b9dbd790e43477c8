"""URL helpers."""
import re
from typing import Optional
from urllib.parse import quote, urljoin, urlparse, urlsplit, urlunsplit

# Tabs and newlines are dropped from anywhere in a URL, as browsers do
_URL_WHITESPACE_RE = re.compile(r"[\t\n\r]")

# Reserved characters and existing escapes are left alone when re-encoding
_PATH_SAFE = "/%:@!$&'()*+,;=~"
_QUERY_SAFE = "/%:@!$&'()*+,;=?~[]"


def resolve_url(url: Optional[str], base: str) -> Optional[str]:
    """
    Resolve a possibly relative URL against the page it was found on.

    The result is percent-encoded, so "/img/my image.jpg" becomes
    ".../img/my%20image.jpg". Returns None instead of raising when the
    result is not a usable URL.
    """
    if not url or not isinstance(url, str):
        return None

    url = _URL_WHITESPACE_RE.sub("", url.strip())
    if not url:
        return None

    try:
        parts = urlsplit(urljoin(base or "", url))
    except ValueError:
        return None

    if not parts.scheme:
        return None
    if parts.scheme in ("http", "https") and not parts.netloc:
        return None

    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=_PATH_SAFE),
        quote(parts.query, safe=_QUERY_SAFE),
        quote(parts.fragment, safe=_QUERY_SAFE),
    ))


def is_fetchable_url(url: object) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
