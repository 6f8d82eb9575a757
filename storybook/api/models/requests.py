"""Pydantic models for API requests.

Field names are camelCase on the wire, matching the browser client.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storybook.config import STORY_CONSTANTS
from storybook.core.types import Book


def _loose_text(value: Any) -> Any:
    """Accept numbers and other scalars as text; empty values become None."""
    if value is None or isinstance(value, str):
        return value
    return str(value) if value else None


def _model_id(value: Any) -> Any:
    """Non-string model ids become "" so the allow-list check rejects them."""
    if value is None or isinstance(value, str):
        return value
    return ""


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoryRequest(CamelModel):
    """Request body for generating a book or its text."""

    prompt: Optional[str] = Field(
        default=None,
        description="Story idea",
        examples=["a shy dragon who learns to share"],
    )
    grade_level: str = Field(default=STORY_CONSTANTS["default_grade_level"], description="Reader's grade, 1-5")
    language: str = STORY_CONSTANTS["default_language"]
    art_style: str = STORY_CONSTANTS["default_art_style"]
    text_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("textModel", "model", "text_model"),
        description="Venice.ai text model id",
    )
    image_model: Optional[str] = Field(default=None, description="Venice.ai image model id")

    @field_validator("grade_level", "language", "art_style", mode="before")
    @classmethod
    def blank_to_default(cls, value: Any, info) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return str(value)

    @field_validator("prompt", "text_model", mode="before")
    @classmethod
    def loose_strings(cls, value: Any) -> Any:
        return _loose_text(value)

    @field_validator("image_model", mode="before")
    @classmethod
    def non_string_model(cls, value: Any) -> Any:
        return _model_id(value)

    @property
    def clean_prompt(self) -> str:
        return (self.prompt or "").strip()


class ImageRequest(CamelModel):
    """Request body for generating a single illustration."""

    text: Optional[str] = Field(default=None, description="Page text or scene to illustrate")
    art_style: str = STORY_CONSTANTS["default_art_style"]
    image_model: Optional[str] = None
    character_description: Optional[str] = None
    is_cover: bool = False
    title: Optional[str] = None

    @field_validator("art_style", mode="before")
    @classmethod
    def blank_style_to_default(cls, value: Any) -> Any:
        return value or STORY_CONSTANTS["default_art_style"]

    @field_validator("text", "title", "character_description", mode="before")
    @classmethod
    def loose_text(cls, value: Any) -> Any:
        return _loose_text(value)

    @field_validator("image_model", mode="before")
    @classmethod
    def non_string_model(cls, value: Any) -> Any:
        return _model_id(value)


class ExportRequest(CamelModel):
    """A finished book sent back for PDF or HTML export."""

    title: str
    story: list[str]
    cover_image_url: str
    page_image_urls: list[str]
    end_page_image_url: str
    character_description: Optional[str] = None
    summary: Optional[str] = None
    metadata: dict = Field(default_factory=dict)
    signature: Optional[str] = Field(default=None, description="End-page signature line")

    def to_book(self) -> Book:
        return Book(
            title=self.title,
            story=list(self.story),
            cover_image_url=self.cover_image_url,
            page_image_urls=list(self.page_image_urls),
            end_page_image_url=self.end_page_image_url,
            character_description=self.character_description,
            summary=self.summary,
            metadata=dict(self.metadata or {}),
        )
