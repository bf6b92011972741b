import re
from urllib.parse import urlparse, parse_qs


def _host_matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


def extract_youtube_video_id(url: str | None) -> str | None:
    """Return the video id of a youtu.be short link or a youtube.com ?v= link."""
    if not url:
        return None
    try:
        u = urlparse(url.strip())
        host = (u.hostname or "").lower()
    except ValueError:
        return None
    if _host_matches(host, "youtu.be"):
        vid = u.path[1:]
        return vid or None
    if _host_matches(host, "youtube.com"):
        qs = parse_qs(u.query)
        if qs.get("v") and qs["v"][0]:
            return qs["v"][0]
    return None


def collapse_whitespace(text: str) -> str:
    # Keep paragraph breaks, squash everything else.
    t = text.replace("\r\n", "\n").replace("\r", "\n")
    t = re.sub(r"[ \t\f\v]+", " ", t)
    t = re.sub(r" *\n *", "\n", t)
    t = re.sub(r"\n{3,}", "\n\n", t)
    return t.strip()


def truncate(text: str, max_chars: int | None, marker: str | None = None) -> tuple[str, bool]:
    """Cut ``text`` to ``max_chars`` characters, appending ``marker`` when cut.

    Returns the resulting text and whether it was truncated.
    """
    if max_chars is None or len(text) <= max_chars:
        return text, False
    return text[:max_chars] + (marker or ""), True
