# Story pipeline steps
from .storyboard_generator import StoryboardGenerator, StoryFormatError
from .story_writer import StoryWriter
from .character_designer import CharacterDesigner

# Illustration
from .illustrator import Illustrator
from .illustration_styles import ArtStyleType, get_all_style_names, get_style_by_name

# Offline fallback
from .offline_storyteller import build_fallback_book, build_fallback_story_text, create_fallback_image

__all__ = [
    # Story pipeline
    "StoryboardGenerator",
    "StoryFormatError",
    "StoryWriter",
    "CharacterDesigner",
    # Illustration
    "Illustrator",
    "ArtStyleType",
    "get_style_by_name",
    "get_all_style_names",
    # Offline fallback
    "build_fallback_book",
    "build_fallback_story_text",
    "create_fallback_image",
]
