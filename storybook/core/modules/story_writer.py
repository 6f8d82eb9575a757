"""
Module for writing the final page prose from a storyboard.

The writing style adapts to the reader's grade level by emulating
well-known children's authors for that age.
"""

import logging

import dspy

from storybook.config import STORY_CONSTANTS
from ..completion import complete_json
from ..types import Storyboard
from .storyboard_generator import StoryFormatError, coerce_text_list

logger = logging.getLogger(__name__)

GRADE_LEVEL_GUIDE = """**Grade Level Adaptations:**
- **1st-2nd Grade:** Write in the style of authors like Dr. Seuss or Eric Carle. Use simple, rhyming language, short sentences, and clear, foundational themes like friendship or discovery.
- **3rd-4th Grade:** Write in the style of authors like Roald Dahl or Beverly Cleary. Use more complex sentences, richer vocabulary, introduce humor, and explore themes of overcoming challenges or understanding others.
- **5th Grade & Up:** Write in the style of authors like C.S. Lewis or J.K. Rowling. Use sophisticated language, complex sentence structures, metaphors, and allegories. Tackle deeper themes like courage, morality, and the complexities of life."""


class StoryWriter:
    """
    Expand a storyboard into one full paragraph per page.

    One JSON-mode call; returns the (possibly revised) title and the pages.
    """

    def __init__(self, lm: dspy.LM, page_count: int = STORY_CONSTANTS["page_count"]):
        self.lm = lm
        self.page_count = page_count

    def build_system_prompt(self, language: str, grade_level: str) -> str:
        return f"""
You are a world-class children's book author. Your task is to write a unique, captivating, and emotionally resonant {self.page_count}-page story from the storyboard you are given. You must emulate the masters of children's literature, adapting your style to the requested grade level.
{GRADE_LEVEL_GUIDE}
The reader is in grade {grade_level}.
**CRITICAL INSTRUCTIONS:**
1.  Keep the storyboard's title unless you can make it more compelling.
2.  The story MUST be exactly {self.page_count} pages long. Do not provide less or more.
3.  The story must be written in {language}.
4.  You MUST return a valid JSON object with two keys: "title" and "story".
5.  ABSOLUTELY DO NOT use placeholder text like "-1" or fail to complete a page. Each of the {self.page_count} strings in the 'story' array must be a complete paragraph for that page.
"""

    async def write(
        self,
        storyboard: Storyboard,
        prompt: str,
        language: str,
        grade_level: str,
    ) -> tuple[str, list[str]]:
        """
        Write the story prose.

        Returns:
            Tuple of (title, pages)

        Raises:
            StoryFormatError: If the model's JSON has no story pages
        """
        messages = [
            {"role": "system", "content": self.build_system_prompt(language, grade_level)},
            {
                "role": "user",
                "content": f"The story idea is: {prompt}\n\nSTORYBOARD:\n{storyboard.to_prompt_string()}",
            },
        ]
        data = await complete_json(self.lm, messages)

        if not isinstance(data, dict):
            raise StoryFormatError("Story response is not a JSON object")

        story = coerce_text_list(data.get("story"))
        if not story:
            raise StoryFormatError("Story response has no pages")

        if len(story) != self.page_count:
            logger.warning(f"Story has {len(story)} pages, expected {self.page_count}")

        title = str(data.get("title") or "").strip() or storyboard.title
        return title, story
