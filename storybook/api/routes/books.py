"""Book generation endpoints."""

import logging
import time
import uuid
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from storybook.config import DEFAULT_TEXT_MODEL, is_venice_enabled
from storybook.core.modules import build_fallback_book, build_fallback_story_text
from storybook.core.safety import is_allowed_image_model

from ..dependencies import GeneratorFactory, LMFactory, Venice
from ..logging import book_logger
from ..models.requests import StoryRequest
from ..models.responses import BookResponse, StoryTextResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_prompt(request: StoryRequest) -> str:
    prompt = request.clean_prompt
    if not prompt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A story prompt is required.",
        )
    return prompt


@router.post(
    "/story",
    response_model=BookResponse,
    response_model_exclude_none=True,
    summary="Generate a complete book",
    description=(
        "Write an 8-page story and illustrate the cover, every page and the end page. "
        "Falls back to an offline book when Venice.ai is unavailable."
    ),
)
async def create_story(
    client: Venice,
    generator_factory: GeneratorFactory,
    lm_factory: LMFactory,
    request: Optional[StoryRequest] = None,
):
    """Generate a complete illustrated book."""
    request = request or StoryRequest()
    prompt = _require_prompt(request)

    if not is_allowed_image_model(request.image_model):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please select a permitted safe Venice.ai image model.",
        )

    request_id = uuid.uuid4().hex[:8]

    if not is_venice_enabled():
        book_logger.fallback_used(request_id, "Venice.ai API key missing")
        book = build_fallback_book(prompt, request.language, request.grade_level, request.art_style)
        return BookResponse.from_book(book)

    text_model = request.text_model or DEFAULT_TEXT_MODEL
    book_logger.generation_started(request_id, text_model)
    start = time.time()

    try:
        generator = generator_factory(
            client, text_model=text_model, lm_factory=lm_factory, request_id=request_id
        )
        book = await generator.generate(
            prompt,
            request.language,
            request.grade_level,
            request.art_style,
            request.image_model,
        )
    except Exception as e:
        book_logger.generation_failed(request_id, e)
        try:
            book = build_fallback_book(prompt, request.language, request.grade_level, request.art_style)
        except Exception as fallback_error:
            logger.error(f"Fallback story generation failed: {fallback_error}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "Failed to generate the book.", "details": str(e)},
            ) from fallback_error
        book_logger.fallback_used(request_id, f"Venice.ai error: {e}")
        return BookResponse.from_book(book)

    book_logger.generation_completed(request_id, time.time() - start)
    return BookResponse.from_book(book)


@router.post(
    "/story-text-only",
    response_model=StoryTextResponse,
    response_model_exclude_none=True,
    summary="Generate story text",
    description="Write the story and character description without any illustrations.",
)
async def create_story_text(
    client: Venice,
    generator_factory: GeneratorFactory,
    lm_factory: LMFactory,
    request: Optional[StoryRequest] = None,
):
    """Generate the story text only."""
    request = request or StoryRequest()
    prompt = _require_prompt(request)
    request_id = uuid.uuid4().hex[:8]

    if not is_venice_enabled():
        book_logger.fallback_used(request_id, "Venice.ai API key missing")
        return StoryTextResponse.from_story(
            build_fallback_story_text(prompt, request.language), fallback=True
        )

    text_model = request.text_model or DEFAULT_TEXT_MODEL
    book_logger.generation_started(request_id, text_model)
    start = time.time()

    try:
        generator = generator_factory(
            client, text_model=text_model, lm_factory=lm_factory, request_id=request_id
        )
        story = await generator.write_story(prompt, request.language, request.grade_level)
    except Exception as e:
        book_logger.generation_failed(request_id, e, stage="story_text")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to generate story text.", "details": str(e)},
        ) from e

    book_logger.stage_completed(request_id, "story_text", time.time() - start)
    return StoryTextResponse.from_story(story)
