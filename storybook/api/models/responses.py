"""Pydantic models for API responses."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storybook.core.types import Book, ImageResult, StoryText


class CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookResponse(CamelResponse):
    """A complete illustrated book.

    Images are remote URLs or data URIs. `summary` and `metadata` are only
    present on offline books.
    """

    title: str
    story: list[str]
    cover_image_url: str
    page_image_urls: list[str]
    end_page_image_url: str
    character_description: Optional[str] = None
    summary: Optional[str] = None
    metadata: Optional[dict] = None

    @classmethod
    def from_book(cls, book: Book) -> "BookResponse":
        return cls(
            title=book.title,
            story=book.story,
            cover_image_url=book.cover_image_url,
            page_image_urls=book.page_image_urls,
            end_page_image_url=book.end_page_image_url,
            character_description=book.character_description,
            summary=book.summary,
            metadata=book.metadata or None,
        )


class StoryTextResponse(CamelResponse):
    """Story text without illustrations."""

    title: str
    story: list[str]
    character_description: Optional[str] = None
    fallback: Optional[bool] = None

    @classmethod
    def from_story(cls, story: StoryText, fallback: bool = None) -> "StoryTextResponse":
        return cls(
            title=story.title,
            story=story.story,
            character_description=story.character_description or None,
            fallback=fallback,
        )


class StructuredPromptResponse(BaseModel):
    style: str
    characters: str
    scene: str


class ImageResponse(CamelResponse):
    """A single generated illustration and the prompt that produced it."""

    image_url: str
    final_prompt: str
    structured_prompt: Optional[StructuredPromptResponse] = None
    fallback: Optional[bool] = None

    @classmethod
    def from_result(cls, result: ImageResult) -> "ImageResponse":
        structured = result.structured_prompt
        return cls(
            image_url=result.image_url,
            final_prompt=result.final_prompt,
            structured_prompt=StructuredPromptResponse(**structured.to_dict()) if structured else None,
            fallback=result.fallback or None,
        )


class ModelsResponse(CamelResponse):
    """Available text models and allow-listed image models."""

    text_models: list[dict]
    image_models: list[dict]
    fallback: Optional[bool] = None


class TestResponse(CamelResponse):
    """Connectivity check result."""

    __test__ = False

    message: str
    timestamp: Optional[str] = None
    python_version: Optional[str] = None
    fallback: Optional[bool] = None
    models_count: Optional[int] = None
    sample_models: Optional[list[str]] = None
