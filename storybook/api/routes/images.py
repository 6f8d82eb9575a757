"""Single illustration endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from storybook.config import IMAGE_CONSTANTS, PROMPT_MODEL, is_venice_enabled
from storybook.core.modules import Illustrator, create_fallback_image
from storybook.core.safety import is_allowed_image_model
from storybook.core.types import ImageResult

from ..dependencies import LMFactory, Venice
from ..models.requests import ImageRequest
from ..models.responses import ImageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _size(value: str) -> tuple[int, int]:
    width, height = value.split("x")
    return int(width), int(height)


@router.post(
    "/generate-image",
    response_model=ImageResponse,
    response_model_exclude_none=True,
    summary="Generate one illustration",
    description=(
        "Build a structured style/characters/scene prompt for the text and generate one "
        "image with a safe Venice.ai model."
    ),
)
async def generate_image(client: Venice, lm_factory: LMFactory, request: Optional[ImageRequest] = None):
    """Generate a single illustration."""
    request = request or ImageRequest()
    text = (request.text or "").strip()
    if not text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required for image generation.",
        )
    if not is_allowed_image_model(request.image_model):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please select a permitted safe Venice.ai image model.",
        )

    if not is_venice_enabled():
        width, height = _size(IMAGE_CONSTANTS["cover_size" if request.is_cover else "page_size"])
        heading = (request.title or "Story") if request.is_cover else "Illustration"
        logger.warning("Venice.ai API key missing - returning placeholder illustration.")
        return ImageResponse.from_result(
            ImageResult(
                image_url=create_fallback_image(heading, text, width, height),
                final_prompt=text,
                fallback=True,
            )
        )

    try:
        illustrator = Illustrator(client, lm_factory(PROMPT_MODEL))
        result = await illustrator.illustrate_structured(
            text,
            request.art_style,
            request.image_model,
            character_description=request.character_description,
            is_cover=request.is_cover,
            title=request.title,
        )
    except Exception as e:
        logger.error(f"Error generating image: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to generate image.", "details": str(e)},
        ) from e

    logger.info("Image generated successfully")
    return ImageResponse.from_result(result)
