"""LangChain ChatAnthropic wrapper for layout suggestions."""

from __future__ import annotations

import logging

from bentogrid.config import settings
from bentogrid.llm.model_router import get_model_for_task
from bentogrid.llm.parser import fallback_suggestions, parse_suggestions
from bentogrid.llm.prompts import get_prompt_template
from bentogrid.models.grid import LayoutSuggestion

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Could not build a layout. Try another prompt, image or link."
NOT_CONFIGURED_MESSAGE = "[LLM not configured: set ANTHROPIC_API_KEY in .env]"


class LLMNotConfiguredError(RuntimeError):
    pass


def _split_data_url(image_base64: str) -> tuple[str, str]:
    """(media_type, base64 payload) from a data URL or a bare base64 string."""
    if image_base64.startswith("data:") and "," in image_base64:
        header, payload = image_base64.split(",", 1)
        media_type = header[len("data:"):].split(";", 1)[0] or "image/png"
        return media_type, payload
    return "image/png", image_base64


async def request_layout(prompt: str, columns: int, image_base64: str | None = None) -> str:
    """Raw model text for a layout request."""
    if not settings.anthropic_api_key:
        raise LLMNotConfiguredError(NOT_CONFIGURED_MESSAGE)

    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage

    task = "vision_layout" if image_base64 else "layout"
    model_id = get_model_for_task(task)
    llm = ChatAnthropic(
        model=model_id,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.llm_max_tokens,
    )

    template = get_prompt_template(task)
    text = template.format(columns=columns, half_columns=columns // 2, prompt=prompt)

    if image_base64:
        media_type, data = _split_data_url(image_base64)
        content: list | str = [
            {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": data}},
            {"type": "text", "text": text},
        ]
    else:
        content = text

    logger.info("Requesting %s from %s", task, model_id)
    response = await llm.ainvoke([HumanMessage(content=content)])
    if isinstance(response.content, str):
        return response.content
    return _join_text(response.content)


def _join_text(blocks: list) -> str:
    parts = []
    for block in blocks:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def get_layout_suggestions(
    prompt: str,
    columns: int,
    image_base64: str | None = None,
    rows: int | None = None,
) -> list[LayoutSuggestion]:
    """Suggestion records for a prompt; never empty.

    Any failure (no API key, request error, unparsable output) yields a single
    full-width fallback tile carrying the error message.
    """
    try:
        text = await request_layout(prompt, columns, image_base64)
        suggestions = parse_suggestions(text)
    except LLMNotConfiguredError as e:
        logger.warning("Layout suggestion skipped: %s", e)
        return fallback_suggestions(columns, str(e), rows=rows)
    except Exception as e:
        logger.warning("Layout suggestion failed: %s", e)
        return fallback_suggestions(columns, FAILURE_MESSAGE, rows=rows)

    logger.info("Model suggested %d tiles", len(suggestions))
    return suggestions
