"""
LLM configuration for the storybook generator.

All text generation goes through Venice.ai's OpenAI-compatible chat endpoint.
The endpoint is wrapped in a dspy.LM so every call shares dspy's litellm
plumbing (timeouts, provider routing, error types).

Includes:
- 30s timeout per LLM call
- No automatic retries; the pipeline decides what to retry
"""

import os

import dspy
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

VENICE_API_BASE = os.getenv("VENICE_API_BASE", "https://api.venice.ai/api/v1")

# Several deployment targets name the key differently
VENICE_API_KEY = (
    os.getenv("VENICE_API_KEY")
    or os.getenv("VENICE_TOKEN")
    or os.getenv("VITE_VENICE_API_KEY")
    or os.getenv("API_KEY")
    or ""
)

# Model used for story writing when the client does not pick one
DEFAULT_TEXT_MODEL = os.getenv("DEFAULT_TEXT_MODEL", "mistral-31-24b")

# Model used for the helper prompts (character description, image prompts)
PROMPT_MODEL = os.getenv("PROMPT_MODEL", "mistral-31-24b")

# Timeout for LLM calls (seconds)
LLM_TIMEOUT = 30


def is_venice_enabled() -> bool:
    """True when a Venice.ai API key is configured."""
    return bool(VENICE_API_KEY)


def get_text_lm(model: str = None) -> dspy.LM:
    """
    Get a dspy.LM bound to a Venice.ai chat model.

    Args:
        model: Venice model id. Defaults to DEFAULT_TEXT_MODEL.

    Raises:
        ValueError: If no Venice.ai API key is configured
    """
    if not VENICE_API_KEY:
        raise ValueError(
            "No API key found. Set VENICE_API_KEY (or VENICE_TOKEN) in .env"
        )

    return dspy.LM(
        f"openai/{model or DEFAULT_TEXT_MODEL}",
        api_base=VENICE_API_BASE,
        api_key=VENICE_API_KEY,
        max_tokens=4096,
        temperature=1.0,
        timeout=LLM_TIMEOUT,
        num_retries=0,
        cache=False,
    )
