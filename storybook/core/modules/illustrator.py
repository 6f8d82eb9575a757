"""
Module for generating storybook illustrations with Venice.ai.

Each illustration takes two calls:
1. The text model acts as art director and writes the image prompt,
   embedding the shared character description for visual consistency.
2. The prompt is trimmed to the image model's limit and sent through the
   safety gate to the image endpoint.
"""

import json
import logging

import dspy

from storybook.config import IMAGE_CONSTANTS, STORY_CONSTANTS
from ..completion import complete_json, predict
from ..safety import (
    build_safe_image_payload,
    enforce_safe_image_model,
    get_prompt_character_limit,
    truncate_prompt,
)
from ..signatures.image_prompt import ImagePromptSignature
from ..types import ImageResult, StructuredImagePrompt
from ..venice import VeniceClient
from .illustration_styles import get_style_by_name, is_ghibli_style

logger = logging.getLogger(__name__)


def _as_text(value) -> str:
    if isinstance(value, str):
        return value.strip()
    if value is None:
        return ""
    return json.dumps(value, ensure_ascii=False)


class Illustrator:
    """
    Generate illustrations for a storybook.

    Args:
        client: Venice.ai client used for image generation
        lm: Text model used to write image prompts
    """

    def __init__(self, client: VeniceClient, lm: dspy.LM):
        self.client = client
        self.lm = lm
        self.prompt_writer = dspy.Predict(ImagePromptSignature)

    def build_art_direction(
        self,
        art_style: str,
        character_description: str,
        is_cover: bool = False,
        title: str = "",
    ) -> str:
        """Build the art director's instructions for one illustration."""
        title_rule = (
            f'CRITICAL: The image MUST prominently display the title text "{title}" as readable text '
            "integrated into the cover design - this could be on a sign, banner, building, or stylized "
            "lettering that fits the scene. The title text should be large, clear, and easily readable."
        )

        if is_ghibli_style(art_style):
            if is_cover:
                return (
                    "You are an expert art director specializing in the Studio Ghibli aesthetic for a children's "
                    "book cover. Create a rich, detailed, and imaginative image prompt that captures a playful "
                    f"cartoon style inspired by Ghibli. {title_rule} Emphasize lush, painterly backgrounds, "
                    "whimsical scenery, and the interplay of light and nature. The final image MUST be a cartoon "
                    f"that evokes the feeling of a Ghibli film. Art Style: {art_style}. The main character MUST "
                    f'match this description: "{character_description}".'
                )
            return (
                "You are an expert art director specializing in the Studio Ghibli aesthetic for a children's book. "
                "Create a rich, detailed, and imaginative image prompt that captures the provided text in a playful "
                "cartoon style inspired by Ghibli. Emphasize lush, painterly backgrounds, whimsical scenery, and the "
                "interplay of light and nature. The final image MUST be a cartoon that evokes the feeling of a Ghibli "
                f"film. The final output must be a single, descriptive paragraph. Art Style: {art_style}. The main "
                f'character MUST match this description: "{character_description}".'
            )

        if is_cover:
            return (
                "You are an expert art director creating a book cover illustration. Create a rich, detailed, and "
                "imaginative image prompt for an AI model. The prompt must generate a vibrant, friendly, and colorful "
                f"book cover in a playful cartoon style. {title_rule} The requested art style is a suggestion, but "
                "the final image MUST be a cartoon. The main character MUST match this description: "
                f'"{character_description}". Art Style: {art_style}.'
            )
        return (
            "You are an expert art director creating illustrations for a children's book. Create a rich, detailed, "
            "and imaginative image prompt for an AI model. The prompt must generate a vibrant, friendly, and colorful "
            "image in a playful cartoon style. It should capture the essence of the following text. Focus on scene, "
            "characters, emotion, and lighting. The final output should be a single, descriptive paragraph. The "
            "requested art style is a suggestion, but the final image MUST be a cartoon. The main character MUST "
            f'match this description: "{character_description}". Art Style: {art_style}.'
        )

    async def write_image_prompt(self, text: str, art_direction: str) -> str:
        """Ask the text model for an image prompt. Falls back to the raw text."""
        result = await predict(
            self.prompt_writer,
            self.lm,
            art_direction=art_direction,
            text=f'Text: "{text}"',
        )
        return (result.image_prompt or "").strip() or text

    async def illustrate(
        self,
        text: str,
        art_style: str,
        image_model: str,
        character_description: str,
        is_cover: bool = False,
        title: str = "",
        size: str = None,
    ) -> str:
        """
        Generate one illustration.

        Args:
            text: Page text or scene to illustrate
            art_style: Requested art style (display name)
            image_model: Requested image model; replaced by the default if not allowed
            character_description: Shared protagonist description
            is_cover: Cover illustrations must show the title
            title: Story title (covers only)
            size: Image size, e.g. "1024x1024"

        Returns:
            Image URL or data URI
        """
        safe_model = enforce_safe_image_model(image_model)
        raw_limit = get_prompt_character_limit(safe_model)
        prompt_limit = max(1, raw_limit - IMAGE_CONSTANTS["prompt_limit_buffer"])

        art_direction = self.build_art_direction(art_style, character_description, is_cover, title)
        image_prompt = await self.write_image_prompt(text, art_direction)

        if len(image_prompt) > prompt_limit:
            logger.info(
                f"Truncating long image prompt to {prompt_limit} chars to respect "
                f"{safe_model}'s {raw_limit}-character limit."
            )
            image_prompt = truncate_prompt(image_prompt, prompt_limit)

        payload = build_safe_image_payload(
            {
                "prompt": image_prompt,
                "n": 1,
                "size": size or IMAGE_CONSTANTS["page_size"],
                "response_format": IMAGE_CONSTANTS["response_format"],
            },
            safe_model,
        )
        return await self.client.generate_image(payload)

    # === STRUCTURED PROMPTS (single-image endpoint) ===

    def build_structured_system_prompt(self, art_style: str, character_description: str) -> str:
        """System prompt asking for a {style, characters, scene} JSON object."""
        style_desc = get_style_by_name(art_style).description

        return f"""You are a MASTER art director who PERFECTLY replicates artistic styles for children's books.

CRITICAL STYLE REQUIREMENT: The image MUST authentically match the "{art_style}" style. Study this description and follow it EXACTLY:

{style_desc}

Create a structured JSON prompt with three components:

1. "style": START with "{art_style} style:" then describe the visual style using the specifications above. Include specific details about colors, linework, textures, lighting, and composition that define this exact style.

2. "characters": Describe ALL characters in the scene with PRECISE age-appropriate details. If adults are present, they should be CLEARLY adults (mature faces, adult proportions, taller, parental age). If children are present, specify their approximate age and childlike proportions. ALWAYS include: "{character_description}" Specify exact ages, proportions, facial features, clothing, and expressions.

3. "scene": Describe the setting, composition, mood, lighting, specific actions, and background elements in the "{art_style}" aesthetic.

Return ONLY valid JSON with keys: style, characters, scene."""

    async def compose_structured_prompt(
        self,
        text: str,
        art_style: str,
        character_description: str,
        is_cover: bool = False,
        title: str = "Story",
    ) -> StructuredImagePrompt:
        """Ask the art director for a three-part structured prompt."""
        if is_cover:
            user_prompt = f'Create a stunning book cover in authentic "{art_style}" style for "{title}": {text}'
        else:
            user_prompt = f'Create an illustration in pure "{art_style}" style for: {text}'

        messages = [
            {"role": "system", "content": self.build_structured_system_prompt(art_style, character_description)},
            {"role": "user", "content": user_prompt},
        ]
        data = await complete_json(self.lm, messages)
        if not isinstance(data, dict):
            data = {}

        return StructuredImagePrompt(
            style=_as_text(data.get("style")) or f"{art_style} style",
            characters=_as_text(data.get("characters")) or character_description,
            scene=_as_text(data.get("scene")) or text,
        )

    async def illustrate_structured(
        self,
        text: str,
        art_style: str,
        image_model: str,
        character_description: str = None,
        is_cover: bool = False,
        title: str = None,
    ) -> ImageResult:
        """Generate one illustration from a structured prompt."""
        character_description = character_description or STORY_CONSTANTS["default_character_description"]
        structured = await self.compose_structured_prompt(
            text,
            art_style,
            character_description,
            is_cover=is_cover,
            title=title or "Story",
        )

        safe_model = enforce_safe_image_model(image_model)
        prompt_limit = get_prompt_character_limit(safe_model)
        final_prompt = structured.to_prompt_string()
        if len(final_prompt) > prompt_limit:
            logger.info(f"Truncating prompt from {len(final_prompt)} to {prompt_limit} chars")
            final_prompt = truncate_prompt(final_prompt, prompt_limit)

        payload = build_safe_image_payload(
            {
                "prompt": final_prompt,
                "n": 1,
                "size": IMAGE_CONSTANTS["cover_size"] if is_cover else IMAGE_CONSTANTS["page_size"],
                "response_format": IMAGE_CONSTANTS["response_format"],
            },
            safe_model,
        )
        image_url = await self.client.generate_image(payload)

        return ImageResult(
            image_url=image_url,
            final_prompt=final_prompt,
            structured_prompt=structured,
        )
