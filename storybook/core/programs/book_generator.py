"""
Main program for generating illustrated storybooks.

Pipeline:
1. Storyboard: title, 8 page summaries, draft character description, theme
2. Prose: one paragraph per page, styled for the reader's grade level
3. Character description: one consistent look for the protagonist
4. Illustrations: cover + 8 pages + end page, generated concurrently,
   each prompt carrying the character description

Every step calls Venice.ai. Failures propagate; the HTTP layer decides
whether to fall back to the offline storyteller.
"""

import asyncio
import logging
import time
import uuid
from typing import Callable

import dspy

from storybook.config import IMAGE_CONSTANTS, PROMPT_MODEL, get_text_lm
from ..completion import predict
from ..modules.character_designer import CharacterDesigner
from ..modules.illustrator import Illustrator
from ..modules.story_writer import StoryWriter
from ..modules.storyboard_generator import StoryboardGenerator
from ..types import Book, StoryText
from ..venice import VeniceClient

logger = logging.getLogger(__name__)


class BookGenerator:
    """
    Complete storybook generation pipeline.

    Args:
        client: Venice.ai client for image generation
        text_model: Model that writes the storyboard and prose
        lm_factory: Builds a dspy.LM for a model id. Tests pass a fake.
        request_id: Tags every stage log line; generated when omitted
    """

    def __init__(
        self,
        client: VeniceClient,
        text_model: str = None,
        lm_factory: Callable[[str], dspy.LM] = get_text_lm,
        request_id: str = None,
    ):
        self.client = client
        self.request_id = request_id or uuid.uuid4().hex[:8]
        self.text_lm = lm_factory(text_model)
        self.prompt_lm = lm_factory(PROMPT_MODEL)

        self.storyboard_generator = StoryboardGenerator(self.text_lm)
        self.story_writer = StoryWriter(self.text_lm)
        self.character_designer = CharacterDesigner()
        self.illustrator = Illustrator(client, self.prompt_lm)

    async def write_story(self, prompt: str, language: str, grade_level: str) -> StoryText:
        """
        Write the story text: storyboard, prose, then character description.

        Args:
            prompt: The user's story idea
            language: Language to write in
            grade_level: Reader's grade level

        Returns:
            StoryText with title, pages and character description
        """
        start = time.time()
        storyboard = await self.storyboard_generator.generate(prompt, language, grade_level)
        logger.info(
            f'Storyboard ready: "{storyboard.title}" ({storyboard.page_count} pages)',
            extra={"request_id": self.request_id, "stage": "storyboard", "duration": round(time.time() - start, 2)},
        )

        start = time.time()
        title, story = await self.story_writer.write(storyboard, prompt, language, grade_level)
        logger.info(
            f'Successfully generated story: "{title}"',
            extra={"request_id": self.request_id, "stage": "story", "duration": round(time.time() - start, 2)},
        )

        start = time.time()
        character_description = await predict(
            self.character_designer,
            self.prompt_lm,
            title=title,
            story=story,
            draft_description=storyboard.character_description,
        )
        logger.info(
            f"Character Description: {character_description}",
            extra={"request_id": self.request_id, "stage": "character", "duration": round(time.time() - start, 2)},
        )

        return StoryText(title=title, story=story, character_description=character_description)

    async def illustrate(self, story: StoryText, art_style: str, image_model: str) -> Book:
        """
        Generate the cover, page and end-page illustrations concurrently.

        Any failed image fails the whole book.
        """
        start = time.time()
        character_description = story.character_description

        cover = self.illustrator.illustrate(
            f'A beautiful book cover for a story titled "{story.title}"',
            art_style,
            image_model,
            character_description,
            is_cover=True,
            title=story.title,
            size=IMAGE_CONSTANTS["cover_size"],
        )
        pages = [
            self.illustrator.illustrate(
                page_text,
                art_style,
                image_model,
                character_description,
                size=IMAGE_CONSTANTS["page_size"],
            )
            for page_text in story.story
        ]
        end_page = self.illustrator.illustrate(
            f'A beautiful "The End" illustration that matches the theme and style of the story '
            f'"{story.title}". Show a magical, whimsical "The End" sign or text integrated naturally '
            "into a scene that reflects the story's mood and setting.",
            art_style,
            image_model,
            character_description,
            size=IMAGE_CONSTANTS["page_size"],
        )

        images = await asyncio.gather(cover, *pages, end_page)
        logger.info(
            "All images generated successfully.",
            extra={"request_id": self.request_id, "stage": "illustrations", "duration": round(time.time() - start, 2)},
        )

        return Book(
            title=story.title,
            story=list(story.story),
            cover_image_url=images[0],
            page_image_urls=list(images[1:-1]),
            end_page_image_url=images[-1],
            character_description=character_description,
        )

    async def generate(
        self,
        prompt: str,
        language: str,
        grade_level: str,
        art_style: str,
        image_model: str,
    ) -> Book:
        """Generate a complete illustrated book."""
        story = await self.write_story(prompt, language, grade_level)
        return await self.illustrate(story, art_style, image_model)
