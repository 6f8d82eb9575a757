# Storybook Generator - Core Domain

# Re-export types for convenient access
from .types import (
    StyleDefinition,
    Storyboard,
    StoryText,
    Book,
    StructuredImagePrompt,
    ImageResult,
)

__all__ = [
    "StyleDefinition",
    "Storyboard",
    "StoryText",
    "Book",
    "StructuredImagePrompt",
    "ImageResult",
]
