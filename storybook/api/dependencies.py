"""FastAPI dependency injection for provider clients and generators."""

from typing import Annotated, AsyncGenerator, Callable

import dspy
import httpx
from fastapi import Depends

from storybook.config import get_image_client, get_text_lm
from storybook.core.programs import BookGenerator
from storybook.core.venice import VeniceClient

from .config import EXPORT_FETCH_TIMEOUT


# Venice.ai client - one per request, closed when the response is sent
async def get_venice_client() -> AsyncGenerator[VeniceClient, None]:
    """Get a Venice.ai client for models and images."""
    async with get_image_client() as client:
        yield client


# Plain HTTP client for fetching illustrations during export
async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(timeout=EXPORT_FETCH_TIMEOUT) as client:
        yield client


def get_lm_factory() -> Callable[[str], dspy.LM]:
    """Get the factory that builds a dspy.LM for a model id."""
    return get_text_lm


def get_generator_factory() -> Callable[..., BookGenerator]:
    """Get the factory that builds a BookGenerator for a client and text model."""
    return BookGenerator


# Type aliases for cleaner route signatures
Venice = Annotated[VeniceClient, Depends(get_venice_client)]
HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
LMFactory = Annotated[Callable[[str], dspy.LM], Depends(get_lm_factory)]
GeneratorFactory = Annotated[Callable[..., BookGenerator], Depends(get_generator_factory)]
