import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from linkdigest.errors import DigestError, FailureKind, SummarizationFailure
from linkdigest.models import ErrorResponse, ExtractionRequest, SummaryResponse, TranscriptResponse
from linkdigest.normalizer import normalize

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


@router.post(
    "/summarize",
    response_model=SummaryResponse | TranscriptResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize(payload: ExtractionRequest, request: Request):
    settings = request.app.state.settings
    summarizer = request.app.state.summarizer

    try:
        content = await normalize(
            payload,
            max_chars=settings.effective_max_chars,
            marker=settings.effective_marker,
            article_timeout=settings.article_timeout,
            languages=settings.transcript_languages_list,
        )

        if not settings.summarizes:
            return TranscriptResponse(transcript=content.text)

        if summarizer is None:
            raise SummarizationFailure(
                FailureKind.NOT_CONFIGURED,
                "summarization is not configured",
                details=f"{settings.credential_var} is not set",
            )
        summary = await summarizer.summarize(content.text)
        return SummaryResponse(summary=summary)
    except DigestError as e:
        logger.info("Request failed mode=%s kind=%s error=%s", payload.mode, e.kind.value, e.message)
        return JSONResponse(status_code=e.status_code, content=e.to_body())
    except Exception as e:
        logger.exception("Unexpected error handling mode=%s", payload.mode)
        return error_response(500, "Server error", str(e))
