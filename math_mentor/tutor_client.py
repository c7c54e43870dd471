"""Anthropic Claude integration for hints and full solution reviews.

Both public coroutines follow the same contract: they always return text
for the student and never raise. An empty model answer is replaced by a
fixed fallback, and any provider or transport failure is logged and
replaced by a fixed error message. Callers treat the result as the
tutor's reply whatever happened.
"""

from __future__ import annotations

import logging

import anthropic

from math_mentor.config import (
    ANALYSIS_MAX_TOKENS,
    ANALYSIS_THINKING_BUDGET,
    ANTHROPIC_API_KEY,
    HINT_MAX_TOKENS,
    HINT_THINKING_BUDGET,
    MODEL_NAME,
)
from math_mentor.media import (
    DEFAULT_MEDIA_TYPE,
    MAX_IMAGE_BASE64_BYTES,
    build_image_block,
    exceeds_size_limit,
)
from math_mentor.prompts import (
    ANALYSIS_EMPTY_FALLBACK,
    ANALYSIS_ERROR_MESSAGE,
    ANALYSIS_INSTRUCTION,
    HINT_EMPTY_FALLBACK,
    HINT_ERROR_MESSAGE,
    HINT_INSTRUCTION,
    SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

_client: anthropic.AsyncAnthropic | None = None


def _get_client() -> anthropic.AsyncAnthropic:
    global _client
    if _client is None:
        _client = anthropic.AsyncAnthropic(api_key=ANTHROPIC_API_KEY)
    return _client


def _build_messages(image_data: str, media_type: str, instruction: str) -> list[dict]:
    """A single user turn: the photo first, then the task instruction."""
    return [
        {
            "role": "user",
            "content": [
                build_image_block(image_data, media_type),
                {"type": "text", "text": instruction},
            ],
        }
    ]


def _extract_text(response) -> str:
    """Join the text blocks of a response, skipping thinking blocks."""
    parts = [
        block.text
        for block in getattr(response, "content", None) or []
        if getattr(block, "type", None) == "text" and getattr(block, "text", None)
    ]
    return "".join(parts).strip()


async def _ask_tutor(
    image_data: str,
    media_type: str,
    instruction: str,
    thinking_budget: int,
    max_tokens: int,
) -> str:
    if exceeds_size_limit(image_data):
        # Sent anyway; the API error is turned into the usual tutor message
        logger.warning(
            "Image is %d bytes of base64, above the %d byte API limit",
            len(image_data),
            MAX_IMAGE_BASE64_BYTES,
        )
    client = _get_client()
    response = await client.messages.create(
        model=MODEL_NAME,
        max_tokens=max_tokens,
        system=SYSTEM_PROMPT,
        messages=_build_messages(image_data, media_type, instruction),
        thinking={"type": "enabled", "budget_tokens": thinking_budget},
    )
    return _extract_text(response)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def request_hint(image_data: str, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Ask for a leading hint that does not reveal the answer.

    ``image_data`` is base64 image data without the data URI prefix.
    """
    try:
        text = await _ask_tutor(
            image_data,
            media_type,
            HINT_INSTRUCTION,
            HINT_THINKING_BUDGET,
            HINT_MAX_TOKENS,
        )
    except Exception:
        logger.exception("Error getting hint")
        return HINT_ERROR_MESSAGE
    return text or HINT_EMPTY_FALLBACK


async def request_full_analysis(image_data: str, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Ask for a step-by-step review listing every mistake and the fix."""
    try:
        text = await _ask_tutor(
            image_data,
            media_type,
            ANALYSIS_INSTRUCTION,
            ANALYSIS_THINKING_BUDGET,
            ANALYSIS_MAX_TOKENS,
        )
    except Exception:
        logger.exception("Error getting full analysis")
        return ANALYSIS_ERROR_MESSAGE
    return text or ANALYSIS_EMPTY_FALLBACK
