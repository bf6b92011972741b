from typing import Any, Literal

from pydantic import BaseModel, Field

ModeType = Literal["youtube", "article", "text"]
MODES: tuple[str, ...] = ("youtube", "article", "text")


class ExtractionRequest(BaseModel):
    # Plain str so an unknown mode reaches the handler and is reported as such.
    mode: str = Field(..., description="youtube, article or text")
    url: str | None = Field(None, description="Video or article URL")
    text: str | None = Field(None, description="Raw text for text mode")


class NormalizedContent(BaseModel):
    text: str
    mode: ModeType
    truncated: bool = False


class SummaryResponse(BaseModel):
    summary: str


class TranscriptResponse(BaseModel):
    transcript: str


class ErrorResponse(BaseModel):
    error: str
    details: Any = None
