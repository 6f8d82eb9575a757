"""
Module for planning a storybook before any prose is written.

Produces an 8-page storyboard (one short summary per page), a draft
description of the main character and the story's theme.
"""

import logging

import dspy

from storybook.config import STORY_CONSTANTS
from ..completion import complete_json
from ..types import Storyboard

logger = logging.getLogger(__name__)


class StoryFormatError(ValueError):
    """Raised when a model returns JSON without the fields a step needs."""


def coerce_text_list(value) -> list[str]:
    """
    Normalize a list of pages the model returned.

    Models sometimes return page objects instead of plain strings; the most
    descriptive string field of each object is used.
    """
    if not isinstance(value, list):
        return []

    items = []
    for item in value:
        if isinstance(item, dict):
            item = (
                item.get("text")
                or item.get("summary")
                or item.get("description")
                or item.get("content")
                or next((v for v in item.values() if isinstance(v, str)), "")
            )
        text = str(item).strip() if item is not None else ""
        if text:
            items.append(text)
    return items


class StoryboardGenerator:
    """
    Plan a children's storybook from a user prompt.

    One JSON-mode call to the text model. The page count is requested but
    not enforced; the model is trusted to return the right number of pages.
    """

    def __init__(self, lm: dspy.LM, page_count: int = STORY_CONSTANTS["page_count"]):
        self.lm = lm
        self.page_count = page_count

    def build_system_prompt(self, language: str, grade_level: str) -> str:
        return f"""
You are a world-class children's book editor planning a picture book before it is written.
Create a storyboard for a unique, captivating, and emotionally resonant {self.page_count}-page story
for a grade {grade_level} reader, based on the user's idea.
**CRITICAL INSTRUCTIONS:**
1.  Create a compelling title for the story.
2.  Plan EXACTLY {self.page_count} pages. Each page gets one or two sentences describing what happens.
3.  The storyboard must be written in {language}.
4.  Describe the main character's appearance, age and clothing so every illustration can match it.
5.  Name the story's theme in a few words.
6.  You MUST return a valid JSON object with the keys "title", "pages", "characterDescription" and "theme".
    "pages" is an array of {self.page_count} strings.
"""

    async def generate(self, prompt: str, language: str, grade_level: str) -> Storyboard:
        """
        Generate a storyboard.

        Args:
            prompt: The user's story idea
            language: Language the story will be written in
            grade_level: Target grade level ("1" to "5")

        Returns:
            Storyboard with title, page summaries, character description and theme

        Raises:
            StoryFormatError: If the model's JSON lacks a title or pages
        """
        messages = [
            {"role": "system", "content": self.build_system_prompt(language, grade_level)},
            {"role": "user", "content": f"The story idea is: {prompt}"},
        ]
        data = await complete_json(self.lm, messages)

        if not isinstance(data, dict):
            raise StoryFormatError("Storyboard response is not a JSON object")

        pages = coerce_text_list(data.get("pages"))
        title = str(data.get("title") or "").strip()
        if not title or not pages:
            raise StoryFormatError("Storyboard response is missing a title or pages")

        if len(pages) != self.page_count:
            logger.warning(f"Storyboard has {len(pages)} pages, expected {self.page_count}")

        return Storyboard(
            title=title,
            pages=pages,
            character_description=str(data.get("characterDescription") or "").strip(),
            theme=str(data.get("theme") or "").strip(),
        )
