"""Request-scoped batch parsing and deduplication."""

from typing import Iterable, List

from .exceptions import BadRequestError, InvalidURLError
from .normalizer import normalize_url


def split_request_body(body: bytes) -> List[str]:
    """Split a raw request body into candidate lines on line feeds.

    A trailing carriage return is dropped from each line. Other line breaks
    such as form feed or vertical tab stay inside the line.

    Raises:
        BadRequestError: If the body is not valid UTF-8
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadRequestError("Unexpected error in input") from e
    return [line.rstrip("\r") for line in text.split("\n")]


def dedupe_urls(lines: Iterable[str]) -> List[str]:
    """Normalize candidate lines, dropping blanks and duplicates.

    Lines are processed in order; the first invalid one aborts the whole
    batch. Duplicates (after normalization) keep their first position.

    Args:
        lines: Candidate URL lines; surrounding whitespace is ignored

    Returns:
        Normalized URLs in first-seen order, possibly empty

    Raises:
        InvalidURLError: For the first line that fails normalization
    """
    seen = set()
    urls = []

    for line in lines:
        candidate = line.strip()
        if not candidate:
            continue

        try:
            url = normalize_url(candidate)
        except InvalidURLError as e:
            raise InvalidURLError(f"Invalid URL: {candidate}", candidate) from e

        if url in seen:
            continue
        seen.add(url)
        urls.append(url)

    return urls
