import asyncio
import logging
from typing import Iterable, Sequence

from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from linkdigest.errors import ExtractionFailure, FailureKind
from linkdigest.utils import extract_youtube_video_id

logger = logging.getLogger(__name__)

NO_SUBTITLES = "no subtitles available"


def join_segments(segments: Iterable) -> str:
    """Join transcript segment texts with single spaces, keeping their order."""
    return " ".join(seg.text for seg in segments)


def fetch_transcript_segments(video_id: str, languages: Sequence[str] = ("en",)) -> list:
    """Fetch the timed text segments of one transcript track.

    Prefers a manually created track in ``languages``, then a generated one,
    then whatever track the video has first. Blocking; run it off the event loop.
    """
    transcript_list = YouTubeTranscriptApi().list(video_id)
    try:
        transcript = transcript_list.find_manually_created_transcript(languages)
    except NoTranscriptFound:
        try:
            transcript = transcript_list.find_generated_transcript(languages)
        except NoTranscriptFound:
            available = list(transcript_list)
            if not available:
                return []
            transcript = available[0]
            logger.info(
                "No %s transcript for video_id=%s, using %s",
                ",".join(languages), video_id, transcript.language_code,
            )
    return list(transcript.fetch())


async def fetch_youtube_transcript(url: str, languages: Sequence[str] = ("en",)) -> str:
    vid = extract_youtube_video_id(url)
    if not vid:
        raise ExtractionFailure(FailureKind.INVALID_INPUT, "invalid youtube url")

    try:
        segments = await asyncio.to_thread(fetch_transcript_segments, vid, tuple(languages))
    except (TranscriptsDisabled, NoTranscriptFound, VideoUnavailable) as e:
        logger.info("No transcript for video_id=%s: %s", vid, e.__class__.__name__)
        raise ExtractionFailure(FailureKind.NOT_FOUND, NO_SUBTITLES, details=e.__class__.__name__)

    text = join_segments(segments)
    if not segments or not text.strip():
        raise ExtractionFailure(FailureKind.NOT_FOUND, NO_SUBTITLES)
    return text
