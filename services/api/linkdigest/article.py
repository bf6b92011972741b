"""Article fetching and readability-based main-content extraction."""

import asyncio
import logging

import httpx
from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from linkdigest.errors import ExtractionFailure, FailureKind
from linkdigest.utils import collapse_whitespace

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 Chrome/120.0.0.0 Safari/537.36"
)
NO_ARTICLE_TEXT = "could not extract article text"
FETCH_FAILED = "failed to fetch article"


def extract_readable_text(html: str, url: str) -> str:
    """Run readability over ``html`` and render the main content as plain text.

    ``url`` anchors the document so relative links resolve against the page.
    The title is prepended on its own line when readability finds one.
    Returns an empty string when nothing usable is found.
    """
    try:
        doc = Document(html, url=url)
        content_html = doc.summary(html_partial=True)
        title = (doc.short_title() or "").strip()
        if title == "[no-title]":
            title = ""
    except Unparseable:
        return ""

    soup = BeautifulSoup(content_html, "html.parser")
    body = collapse_whitespace(soup.get_text("\n", strip=True))
    if not body:
        return ""
    if title and not body.startswith(title):
        return f"{title}\n\n{body}"
    return body


async def fetch_article_text(
    url: str,
    timeout: float = 15,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Download ``url`` and return its readable main text.

    Raises:
        ExtractionFailure: FetchError on transport errors or non-2xx status,
            NotFound when readability yields no text.
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        async with httpx.AsyncClient(follow_redirects=True, timeout=timeout, transport=transport) as client:
            r = await client.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.info("Article fetch failed url=%s err=%s", url, e.__class__.__name__)
        raise ExtractionFailure(FailureKind.FETCH_ERROR, FETCH_FAILED, details=str(e) or e.__class__.__name__)

    if not r.is_success:
        logger.info("Article fetch returned status=%s url=%s", r.status_code, url)
        raise ExtractionFailure(FailureKind.FETCH_ERROR, FETCH_FAILED, details=r.status_code)

    text = ""
    if r.text.strip():
        text = await asyncio.to_thread(extract_readable_text, r.text, url)
    if not text:
        raise ExtractionFailure(FailureKind.NOT_FOUND, NO_ARTICLE_TEXT)
    return text
