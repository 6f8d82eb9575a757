# Plain-text helper steps (structured steps use JSON mode, see core.completion)
from .character_description import CharacterDescriptionSignature
from .image_prompt import ImagePromptSignature

__all__ = [
    "CharacterDescriptionSignature",
    "ImagePromptSignature",
]
