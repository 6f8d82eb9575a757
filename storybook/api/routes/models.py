"""Model listing endpoint."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, status

from storybook.config import IMAGE_CONSTANTS, is_venice_enabled
from storybook.core.modules.offline_storyteller import FALLBACK_IMAGE_MODEL, FALLBACK_TEXT_MODEL
from storybook.core.safety import SAFE_IMAGE_MODEL_IDS, is_allowed_image_model

from ..dependencies import Venice
from ..models.responses import ModelsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_online(model: dict) -> bool:
    spec = model.get("model_spec")
    return bool(spec) and not spec.get("offline")


def select_image_models(models: list[dict]) -> list[dict]:
    """Online, allow-listed image models in allow-list order."""
    available = {
        model.get("id"): model
        for model in models
        if _is_online(model) and is_allowed_image_model(model.get("id"))
    }
    return [available[model_id] for model_id in SAFE_IMAGE_MODEL_IDS if model_id in available]


@router.get(
    "/models",
    response_model=ModelsResponse,
    response_model_exclude_none=True,
    summary="List models",
    description="Text models and the safe image models currently offered by Venice.ai.",
)
async def list_models(client: Venice):
    """List available text and image models."""
    if not is_venice_enabled():
        return ModelsResponse(
            text_models=[FALLBACK_TEXT_MODEL],
            image_models=[FALLBACK_IMAGE_MODEL],
            fallback=True,
        )

    timeout = IMAGE_CONSTANTS["models_timeout"]
    try:
        text_models, image_models = await asyncio.gather(
            client.list_models("text", timeout=timeout),
            client.list_models("image", timeout=timeout),
        )
    except Exception as e:
        logger.error(f"Failed to fetch models: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not fetch models from Venice.ai",
        ) from e

    return ModelsResponse(
        text_models=[model for model in text_models if _is_online(model)],
        image_models=select_image_models(image_models),
    )
