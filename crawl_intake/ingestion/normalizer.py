"""Canonicalization of a single candidate job URL.

Rules:
- a path without a host ("/docs") is never crawlable
- the scheme must be http or https; a missing scheme defaults to http,
  so "example.com/docs" becomes "http://example.com/docs"
- characters not allowed in a URL (spaces, non-ASCII) are percent-encoded
  in the path, query and fragment; existing escapes are kept
- the result is the standard serialization of the parsed URL, which is
  the identity used for deduplication and storage
"""

import re
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from .exceptions import InvalidURLError

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_SCHEME = "http"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Reserved and sub-delimiter characters, plus existing escapes, are left as is
_PATH_SAFE = "/:@!$&'()*+,;=%"
_QUERY_SAFE = _PATH_SAFE + "?"


def normalize_url(raw: str) -> str:
    """Validate ``raw`` and return its canonical absolute form.

    Raises:
        InvalidURLError: If the URL has no host, a disallowed scheme, or
            cannot be parsed

    Examples:
        >>> normalize_url("example.com")
        'http://example.com'
        >>> normalize_url("HTTPS://example.com/a?b=1")
        'https://example.com/a?b=1'
    """
    if raw.startswith("/"):
        raise InvalidURLError("Invalid URL, does not have host", raw)

    parts = _parse(raw)

    if parts.scheme and parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError("Invalid URL scheme", raw)

    if not parts.scheme:
        # "example.com/x" parses as a bare path; re-read it as a network location
        parts = _parse(f"//{raw}")._replace(scheme=DEFAULT_SCHEME)

    if not parts.hostname:
        raise InvalidURLError("Invalid URL, does not have host", raw)

    parts = parts._replace(
        path=quote(parts.path, safe=_PATH_SAFE),
        query=quote(parts.query, safe=_QUERY_SAFE),
        fragment=quote(parts.fragment, safe=_QUERY_SAFE),
    )
    return urlunsplit(parts)


def _parse(raw: str) -> SplitResult:
    if _CONTROL_CHARS.search(raw):
        raise InvalidURLError("Invalid URL, contains control character", raw)
    if _BAD_ESCAPE.search(raw):
        raise InvalidURLError("Invalid URL escape", raw)

    try:
        parts = urlsplit(raw)
        # Port is validated lazily by urllib
        parts.port
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL: {e}", raw) from e

    if any(ch.isspace() for ch in parts.netloc):
        raise InvalidURLError("Invalid URL, host contains whitespace", raw)

    return parts
