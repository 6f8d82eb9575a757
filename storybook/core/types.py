"""
Centralized domain types for the storybook generator.

All dataclasses that are used across multiple modules are defined here
to make data flow explicit and avoid circular imports.
"""

from dataclasses import dataclass, field, replace
from typing import Optional


# =============================================================================
# Style Types
# =============================================================================


@dataclass
class StyleDefinition:
    """Complete definition of an art style offered to the client."""

    name: str
    description: str  # Detailed visual specification handed to the art director
    best_for: list[str] = field(default_factory=list)


# =============================================================================
# Story Types
# =============================================================================


@dataclass
class Storyboard:
    """
    Intermediate plan produced before the prose is written.

    `pages` holds one short summary per page. The page count is requested
    from the model but not enforced.
    """

    title: str
    pages: list[str]
    character_description: str = ""
    theme: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_prompt_string(self) -> str:
        """Format the storyboard for inclusion in a writing prompt."""
        lines = [f"TITLE: {self.title}"]
        if self.theme:
            lines.append(f"THEME: {self.theme}")
        if self.character_description:
            lines.append(f"MAIN CHARACTER: {self.character_description}")
        for i, summary in enumerate(self.pages, 1):
            lines.append(f"Page {i}: {summary}")
        return "\n".join(lines)


@dataclass
class StoryText:
    """Title, page prose and the character description used for illustrations."""

    title: str
    story: list[str]
    character_description: str = ""

    @property
    def page_count(self) -> int:
        return len(self.story)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "story": list(self.story),
            "characterDescription": self.character_description,
        }


@dataclass
class Book:
    """
    The final assembled storybook.

    Image references are either remote URLs or data URIs.
    """

    title: str
    story: list[str]
    cover_image_url: str
    page_image_urls: list[str]
    end_page_image_url: str
    character_description: Optional[str] = None
    summary: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.story)

    @property
    def is_fallback(self) -> bool:
        return bool(self.metadata.get("fallback"))

    @property
    def full_text(self) -> str:
        return " ".join([self.title, *self.story])

    def image_urls(self) -> list[str]:
        """All image references in reading order: cover, pages, end page."""
        return [self.cover_image_url, *self.page_image_urls, self.end_page_image_url]

    def with_image_urls(self, urls: list[str]) -> "Book":
        """Return a copy with images replaced, given in image_urls() order."""
        if len(urls) != len(self.page_image_urls) + 2:
            raise ValueError(
                f"Expected {len(self.page_image_urls) + 2} image references, got {len(urls)}"
            )
        return replace(
            self,
            cover_image_url=urls[0],
            page_image_urls=list(urls[1:-1]),
            end_page_image_url=urls[-1],
        )

    def iter_pages(self):
        """Yield (page_number, text, image_url) for each story page."""
        for index, text in enumerate(self.story):
            image_url = self.page_image_urls[index] if index < len(self.page_image_urls) else None
            yield index + 1, text, image_url


# =============================================================================
# Image Types
# =============================================================================


@dataclass
class StructuredImagePrompt:
    """Three-part image prompt produced by the art director."""

    style: str
    characters: str
    scene: str

    def to_prompt_string(self) -> str:
        return f"Style: {self.style}. Characters: {self.characters}. Scene: {self.scene}"

    def to_dict(self) -> dict:
        return {"style": self.style, "characters": self.characters, "scene": self.scene}


@dataclass
class ImageResult:
    """Result of a single stand-alone illustration request."""

    image_url: str
    final_prompt: str
    structured_prompt: Optional[StructuredImagePrompt] = None
    fallback: bool = False
