"""Summarization backends: HuggingFace inference and OpenAI chat completions."""

import json
import logging
from typing import Any, Protocol

import httpx

from linkdigest.errors import FailureKind, SummarizationFailure
from linkdigest.settings import Settings

logger = logging.getLogger(__name__)

HF_ENDPOINT = "https://api-inference.huggingface.co/models/{model}"
OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"

SYSTEM_PROMPT = """You are a summarization assistant. Summarize the content the user provides.

OUTPUT FORMAT:
- A one-line headline.
- 3 to 6 bullet points with the key facts or ideas.
- A short paragraph (2-4 sentences) tying the points together.
- Action items as a bullet list, only if the content implies any.

Write in the same language as the content. Do not invent facts that are not in it."""


class Summarizer(Protocol):
    name: str

    async def summarize(self, text: str) -> str: ...


def build_user_message(text: str) -> str:
    return f"Summarize the following content:\n\n{text}"


def _body_snippet(r: httpx.Response, limit: int = 500) -> str:
    return r.text[:limit]


def decode_hf_response(data: Any) -> str:
    """Decode a HuggingFace inference response into a summary string.

    Shapes, tried in order:
        1. ``[{"summary_text": "..."}, ...]``: the first summary text.
        2. ``{"error": "..."}``: raised as an UpstreamError carrying that message
           as its details.
        3. anything else: the payload serialized as JSON is returned as-is.

    Raises:
        SummarizationFailure: For shape 2.
    """
    if isinstance(data, list) and data and isinstance(data[0], dict):
        summary = data[0].get("summary_text")
        if isinstance(summary, str) and summary:
            return summary
    if isinstance(data, dict) and data.get("error"):
        err = data["error"]
        raise SummarizationFailure(
            FailureKind.UPSTREAM_ERROR,
            "summarization backend error",
            details=err if isinstance(err, str) else json.dumps(err, ensure_ascii=False),
        )
    return json.dumps(data, ensure_ascii=False)


def extract_chat_content(data: Any) -> str:
    """Pull the first choice's message content out of a chat completion."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not isinstance(content, str) or not content.strip():
        raise SummarizationFailure(
            FailureKind.UPSTREAM_ERROR,
            "unexpected response shape",
            details=json.dumps(data)[:500],
        )
    return content.strip()


class HuggingFaceSummarizer:
    """Extractive/abstractive summaries from a hosted inference model."""

    name = "huggingface"

    def __init__(
        self,
        token: str,
        model: str = "facebook/bart-large-cnn",
        timeout: float = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.model = model
        self.timeout = timeout
        self.transport = transport

    @property
    def url(self) -> str:
        return HF_ENDPOINT.format(model=self.model)

    async def summarize(self, text: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(self.url, headers=headers, json={"inputs": text})
        except httpx.HTTPError as e:
            logger.warning("HuggingFace request failed model=%s err=%s", self.model, e.__class__.__name__)
            raise SummarizationFailure(FailureKind.UPSTREAM_ERROR, "summarization request failed", details=str(e))

        try:
            data = r.json()
        except ValueError:
            data = None

        if r.is_success or (isinstance(data, dict) and data.get("error")):
            if data is None:
                # Non-JSON success body: serialized raw, like any other unknown shape.
                return json.dumps(r.text, ensure_ascii=False)
            try:
                return decode_hf_response(data)
            except SummarizationFailure as e:
                logger.warning("HuggingFace error status=%s model=%s error=%s", r.status_code, self.model, e.details)
                raise

        logger.warning("HuggingFace returned status=%s model=%s", r.status_code, self.model)
        raise SummarizationFailure(
            FailureKind.UPSTREAM_ERROR,
            f"summarization backend returned {r.status_code}",
            details=_body_snippet(r),
        )


class OpenAISummarizer:
    """Structured summaries from a chat-completion model."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def build_payload(self, text: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_message(text)},
            ],
            "temperature": 0.3,
        }

    async def summarize(self, text: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(OPENAI_ENDPOINT, headers=headers, json=self.build_payload(text))
        except httpx.HTTPError as e:
            logger.warning("OpenAI request failed model=%s err=%s", self.model, e.__class__.__name__)
            raise SummarizationFailure(FailureKind.UPSTREAM_ERROR, "summarization request failed", details=str(e))

        if not r.is_success:
            logger.warning("OpenAI returned status=%s model=%s", r.status_code, self.model)
            raise SummarizationFailure(
                FailureKind.UPSTREAM_ERROR,
                f"summarization backend returned {r.status_code}",
                details=_body_snippet(r),
            )
        try:
            data = r.json()
        except ValueError:
            raise SummarizationFailure(
                FailureKind.UPSTREAM_ERROR, "unexpected response shape", details=_body_snippet(r)
            )
        return extract_chat_content(data)


def build_summarizer(settings: Settings) -> Summarizer | None:
    """Create the summarizer for the configured profile.

    Returns None for the pass-through profile, and when the profile's
    credential is unset (a warning is logged in that case).
    """
    if not settings.summarizes:
        return None
    if not settings.credential:
        logger.warning(
            "%s is not set; summarization via %s is disabled",
            settings.credential_var, settings.summary_backend,
        )
        return None
    if settings.summary_backend == "openai":
        return OpenAISummarizer(settings.openai_api_key, settings.openai_model, settings.summary_timeout)
    return HuggingFaceSummarizer(settings.hf_token, settings.hf_model, settings.summary_timeout)
