"""
Configuration module for the storybook generator.

Re-exports all configuration for convenient access.
"""

from .llm import (
    DEFAULT_TEXT_MODEL,
    PROMPT_MODEL,
    VENICE_API_BASE,
    get_text_lm,
    is_venice_enabled,
)
from .story import STORY_CONSTANTS
from .image import IMAGE_CONSTANTS, get_image_client

__all__ = [
    # LLM
    "DEFAULT_TEXT_MODEL",
    "PROMPT_MODEL",
    "VENICE_API_BASE",
    "get_text_lm",
    "is_venice_enabled",
    # Story
    "STORY_CONSTANTS",
    # Image
    "IMAGE_CONSTANTS",
    "get_image_client",
]
