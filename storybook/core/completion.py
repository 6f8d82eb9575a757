"""
Chat completion helpers for Venice.ai text models.

Structured steps ask for strict JSON via response_format. Some models
reject that option; those requests are repeated once without it and the
JSON is recovered from the raw text, including from fenced code blocks.
"""

import asyncio
import json
import logging
import re

import dspy

logger = logging.getLogger(__name__)

JSON_MODE = {"type": "json_object"}

UNSUPPORTED_RESPONSE_FORMAT = "response_format is not supported"

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)```", re.IGNORECASE)
_FENCED_ANY = re.compile(r"```\s*([\s\S]*?)```")


def parse_json_content(content: str):
    """
    Parse JSON returned by a model.

    Tries the content as-is, then the first ```json fenced block, then the
    first fenced block of any kind.

    Raises:
        ValueError: If the content is empty
        json.JSONDecodeError: If no parseable JSON is found
    """
    if not content:
        raise ValueError("No content received from model.")

    try:
        return json.loads(content)
    except json.JSONDecodeError:
        match = _FENCED_JSON.search(content) or _FENCED_ANY.search(content)
        if match:
            return json.loads(match.group(1))
        raise


def _error_detail_text(error: Exception) -> str:
    """Collect every error message the provider attached to a failure."""
    parts = [str(error)]

    body = getattr(error, "body", None)
    if isinstance(body, dict):
        details = body.get("details")
        if isinstance(details, dict):
            parts.extend(str(message) for message in details.get("_errors", []))
        for issue in body.get("issues", []) or []:
            if isinstance(issue, dict) and issue.get("message"):
                parts.append(str(issue["message"]))

    return " ".join(parts).lower()


def is_response_format_unsupported(error: Exception) -> bool:
    """True when the provider refused the request because of JSON mode."""
    return UNSUPPORTED_RESPONSE_FORMAT in _error_detail_text(error)


def _first_text(outputs) -> str:
    if not outputs:
        return ""
    first = outputs[0]
    if isinstance(first, dict):
        first = first.get("text") or ""
    return first or ""


async def complete(lm: dspy.LM, messages: list[dict], **kwargs) -> str:
    """Run one chat completion in a worker thread and return its text."""
    outputs = await asyncio.to_thread(lm, messages=messages, **kwargs)
    return _first_text(outputs)


async def complete_json(lm: dspy.LM, messages: list[dict]):
    """
    Run a chat completion that must return a JSON object.

    JSON mode is requested first; if the model does not support it the
    request is retried exactly once without it.
    """
    try:
        content = await complete(lm, messages, response_format=JSON_MODE)
    except Exception as e:
        if not is_response_format_unsupported(e):
            raise
        logger.warning(
            f"Model {getattr(lm, 'model', 'unknown')} does not support response_format JSON mode. "
            "Falling back to instruction-based parsing."
        )
        content = await complete(lm, messages)

    return parse_json_content(content)


async def predict(predictor: dspy.Module, lm: dspy.LM, **inputs):
    """Run a dspy predictor against an explicit LM in a worker thread."""

    def _run():
        with dspy.context(lm=lm):
            return predictor(**inputs)

    return await asyncio.to_thread(_run)
