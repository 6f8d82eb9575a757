"""Pydantic models for API requests and responses."""

from .requests import ExportRequest, ImageRequest, StoryRequest
from .responses import (
    BookResponse,
    ImageResponse,
    ModelsResponse,
    StoryTextResponse,
    StructuredPromptResponse,
    TestResponse,
)

__all__ = [
    "StoryRequest",
    "ImageRequest",
    "ExportRequest",
    "BookResponse",
    "StoryTextResponse",
    "ImageResponse",
    "StructuredPromptResponse",
    "ModelsResponse",
    "TestResponse",
]
