"""Turn a request in any supported mode into one plain-text string."""

import logging
from typing import Sequence

from linkdigest.article import fetch_article_text
from linkdigest.errors import ExtractionFailure, FailureKind
from linkdigest.models import MODES, ExtractionRequest, NormalizedContent
from linkdigest.utils import truncate
from linkdigest.youtube import fetch_youtube_transcript

logger = logging.getLogger(__name__)


def validate_request(request: ExtractionRequest) -> None:
    """Reject unknown modes and requests missing the field their mode needs."""
    if request.mode not in MODES:
        raise ExtractionFailure(FailureKind.INVALID_INPUT, "unknown mode")
    if request.mode in ("youtube", "article") and not (request.url or "").strip():
        raise ExtractionFailure(FailureKind.INVALID_INPUT, "url is required")
    if request.mode == "text" and not (request.text or "").strip():
        raise ExtractionFailure(FailureKind.INVALID_INPUT, "no text provided")


async def extract_text(
    request: ExtractionRequest,
    article_timeout: float = 15,
    languages: Sequence[str] = ("en",),
) -> str:
    if request.mode == "youtube":
        return await fetch_youtube_transcript(request.url.strip(), languages)
    if request.mode == "article":
        return await fetch_article_text(request.url.strip(), timeout=article_timeout)
    return request.text.strip()


async def normalize(
    request: ExtractionRequest,
    max_chars: int | None = None,
    marker: str | None = None,
    article_timeout: float = 15,
    languages: Sequence[str] = ("en",),
) -> NormalizedContent:
    """Extract plain text for ``request`` and apply the truncation limit.

    Args:
        request: Mode plus the url or text that mode needs.
        max_chars: Keep at most this many characters; None disables truncation.
        marker: Appended after the cut when the text was truncated.
        article_timeout: Seconds allowed for the article download.
        languages: Preferred transcript languages, most preferred first.

    Returns:
        The normalized, non-empty text.

    Raises:
        ExtractionFailure: When no usable text can be derived.
    """
    validate_request(request)
    text = await extract_text(request, article_timeout=article_timeout, languages=languages)
    if not text or not text.strip():
        raise ExtractionFailure(FailureKind.NOT_FOUND, "no text extracted")

    text, cut = truncate(text, max_chars, marker)
    if cut:
        logger.info("Truncated %s text to %s chars", request.mode, max_chars)
    return NormalizedContent(text=text, mode=request.mode, truncated=cut)
