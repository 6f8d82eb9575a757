"""
Story generation constants for the storybook generator.
"""

import os

STORY_CONSTANTS = {
    "page_count": 8,
    "default_grade_level": "3",
    "default_language": "English",
    "default_art_style": "Classic storybook",
    "default_prompt": "a brave young explorer discovering a hidden world",
    "default_character_description": "a friendly children's book character",
    # Printed under the end-page illustration
    "signature": os.getenv("BOOK_SIGNATURE", "Made with lots of love"),
}
