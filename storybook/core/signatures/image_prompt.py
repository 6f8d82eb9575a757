"""
DSPy Signature for turning story text into an image generation prompt.
"""

import dspy


class ImagePromptSignature(dspy.Signature):
    """
    Write a rich, detailed, and imaginative prompt for an AI image model.

    Follow the art direction exactly. Focus on scene, characters, emotion,
    and lighting. The final output must be a single, descriptive paragraph.
    """

    art_direction: str = dspy.InputField(
        desc="Instructions from the art director: style, character description, cover rules"
    )

    text: str = dspy.InputField(desc="The story text or scene to illustrate")

    image_prompt: str = dspy.OutputField(
        desc="A single descriptive paragraph to send to the image model"
    )
