"""
DSPy Signature for deriving a consistent main-character description.

Every illustration prompt embeds this description, so it has to pin down
the protagonist's look precisely enough for ten separate image calls.
"""

import dspy


class CharacterDescriptionSignature(dspy.Signature):
    """
    Based on the following children's story, create a single, detailed character
    description for the main protagonist.

    Describe their appearance, gender, age, and clothing in a consistent manner.
    This description will be used to generate all illustrations, so keep every
    visual detail concrete (colors, hairstyle, outfit, distinctive items).
    Output ONLY the description as a single paragraph.
    """

    story: str = dspy.InputField(
        desc="The complete story as JSON with title and story (one paragraph per page)"
    )

    draft_description: str = dspy.InputField(
        desc="Draft description from the storyboard. Keep it unless the story contradicts it."
    )

    character_description: str = dspy.OutputField(
        desc="One paragraph describing the protagonist's appearance, gender, age and clothing"
    )
