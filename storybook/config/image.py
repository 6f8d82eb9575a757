"""
Image generation configuration for the storybook generator.

Illustrations come from Venice.ai's /images/generations endpoint.
"""

import os

from dotenv import load_dotenv

from . import llm
from ..core.venice import VeniceClient

# Load environment variables from .env file
load_dotenv()

# Image generation constants
IMAGE_CONSTANTS = {
    "cover_size": "1792x1024",
    "page_size": "1024x1024",
    # Headroom kept below each model's prompt character limit
    "prompt_limit_buffer": 50,
    "timeout": 30,
    "models_timeout": 10,
    # "url" or "b64_json"
    "response_format": os.getenv("IMAGE_RESPONSE_FORMAT", "url"),
}


def get_image_client() -> VeniceClient:
    """
    Get a Venice.ai client for image generation and model listing.

    Uses the key resolved in config.llm. The caller owns the client and
    must close it (or use it as an async context manager).
    """
    return VeniceClient(
        api_key=llm.VENICE_API_KEY,
        base_url=llm.VENICE_API_BASE,
        timeout=IMAGE_CONSTANTS["timeout"],
    )
