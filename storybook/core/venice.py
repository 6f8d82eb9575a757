"""
Async HTTP client for the Venice.ai REST API.

Covers the endpoints that are not chat completions: model listing and
image generation. Chat completions go through dspy (see config.llm).
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class VeniceAPIError(Exception):
    """Raised when Venice.ai rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class VeniceClient:
    """
    Thin async wrapper around Venice.ai's models and images endpoints.

    One underlying httpx.AsyncClient is shared across calls so concurrent
    image requests reuse connections. Use as an async context manager or
    call aclose() when done.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "VeniceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise VeniceAPIError(f"Failed to connect to Venice.ai: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.error(f"Venice.ai {method} {path} failed with {response.status_code}: {body}")
            raise VeniceAPIError(
                f"Venice.ai request failed with status {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        return response.json()

    async def list_models(self, model_type: str = "text", timeout: float = None) -> list[dict]:
        """
        List available models of a given type ("text" or "image").

        Returns the raw model entries from the `data` array.
        """
        kwargs = {"params": {"type": model_type}}
        if timeout is not None:
            kwargs["timeout"] = timeout
        data = await self._request("GET", "/models", **kwargs)
        return data.get("data", [])

    async def generate_image(self, payload: dict) -> str:
        """
        Generate a single image.

        Args:
            payload: Request body for /images/generations. Callers are
                expected to pass it through the safety gate first.

        Returns:
            The image URL, or a base64 data URI when the provider answers
            with b64_json.
        """
        data = await self._request("POST", "/images/generations", json=payload)

        try:
            image = data["data"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise VeniceAPIError("No image found in Venice.ai response", body=data) from e

        if image.get("url"):
            return image["url"]
        if image.get("b64_json"):
            return f"data:image/png;base64,{image['b64_json']}"
        raise VeniceAPIError("No image found in Venice.ai response", body=data)
