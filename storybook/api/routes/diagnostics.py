"""Connectivity test endpoint."""

import logging
import platform
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query, status

from storybook.config import IMAGE_CONSTANTS, is_venice_enabled

from ..dependencies import Venice
from ..models.responses import TestResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route(
    "/test",
    methods=["GET", "POST"],
    response_model=TestResponse,
    response_model_exclude_none=True,
    summary="Test the server and the Venice.ai connection",
)
async def run_test(client: Venice, simple: bool = Query(default=False, description="Skip the Venice.ai call")):
    """Report server status, optionally listing Venice.ai text models."""
    enabled = is_venice_enabled()

    if simple or not enabled:
        return TestResponse(
            message=(
                "Storybook server is working!"
                if enabled
                else "Offline fallback mode active. Venice.ai API key not configured."
            ),
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            python_version=platform.python_version(),
            fallback=not enabled,
        )

    try:
        models = await client.list_models("text", timeout=IMAGE_CONSTANTS["models_timeout"])
    except Exception as e:
        logger.error(f"Test error: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Test failed", "details": str(e)},
        ) from e

    return TestResponse(
        message="Venice.ai API is working!",
        models_count=len(models),
        sample_models=[model.get("id") for model in models[:3]],
    )
