"""
DSPy Module for deriving the main character's look from the finished story.
"""

import json
import logging

import dspy

from ..signatures.character_description import CharacterDescriptionSignature

logger = logging.getLogger(__name__)


class CharacterDesigner(dspy.Module):
    """
    Produce one consistent description of the protagonist.

    The storyboard's draft description seeds the call; if the model
    returns nothing usable the draft is kept.
    """

    def __init__(self):
        super().__init__()
        self.describe = dspy.Predict(CharacterDescriptionSignature)

    def forward(self, title: str, story: list[str], draft_description: str = "") -> str:
        """
        Describe the main character.

        Args:
            title: Story title
            story: One paragraph per page
            draft_description: Description proposed by the storyboard

        Returns:
            A single-paragraph character description
        """
        result = self.describe(
            story=json.dumps({"title": title, "story": story}, ensure_ascii=False),
            draft_description=draft_description or "none",
        )
        description = (result.character_description or "").strip()

        if not description:
            logger.warning("Empty character description from model, keeping storyboard draft")
            return draft_description

        return description
