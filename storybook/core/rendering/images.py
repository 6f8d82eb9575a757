"""
Image helpers for rendering: data URIs, fetching and rasterizing.

Exports must be self-contained, so every remote illustration is fetched
and inlined as a base64 data URI before rendering.
"""

import asyncio
import base64
import ipaddress
import logging
import socket
from io import BytesIO
from typing import Optional
from urllib.parse import unquote_to_bytes, urlsplit

import httpx
from PIL import Image, UnidentifiedImageError

from ..types import Book

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

# Largest illustration accepted from a remote host
MAX_IMAGE_BYTES = 15 * 1024 * 1024


class ImageFetchError(ValueError):
    """Raised when a remote illustration cannot be used in an export."""


class UnsafeImageURLError(ImageFetchError):
    """Raised for URLs the server must not fetch."""


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """
    Split a data URI into (mime type, raw bytes).

    Handles both base64 payloads and percent-encoded ones such as
    `data:image/svg+xml;utf8,...`.

    Raises:
        ValueError: If the string is not a data URI
    """
    if not uri.startswith("data:") or "," not in uri:
        raise ValueError("Not a data URI")

    header, payload = uri[5:].split(",", 1)
    params = header.split(";")
    mime = params[0] or "text/plain"

    if "base64" in params[1:]:
        return mime, base64.b64decode(payload)
    return mime, unquote_to_bytes(payload)


def to_data_uri(mime: str, data: bytes) -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def is_svg(uri: str) -> bool:
    return uri.startswith("data:image/svg+xml")


async def resolve_host(host: str) -> list[str]:
    """Resolve a host name to the IP addresses it points at."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ImageFetchError(f"Could not resolve image host {host}") from e
    return [info[4][0] for info in infos]


def _is_public_address(address: str) -> bool:
    ip = ipaddress.ip_address(address.split("%")[0])
    if ip.version == 6 and ip.ipv4_mapped:
        ip = ip.ipv4_mapped
    return ip.is_global


async def check_image_url(url: str) -> None:
    """
    Refuse URLs that would let an export reach the server's own network.

    Only https URLs whose host resolves to public addresses are fetched.

    Raises:
        UnsafeImageURLError: If the URL must not be fetched
    """
    parts = urlsplit(url)
    if parts.scheme != "https" or not parts.hostname:
        raise UnsafeImageURLError(f"Only https image URLs can be exported: {url[:100]}")

    host = parts.hostname
    try:
        addresses = [str(ipaddress.ip_address(host))]
    except ValueError:
        addresses = await resolve_host(host)

    if not addresses or not all(_is_public_address(address) for address in addresses):
        raise UnsafeImageURLError(f"Image host {host} is not a public address")


async def fetch_image_as_data_uri(client: httpx.AsyncClient, url: str, max_bytes: int = None) -> str:
    """
    Fetch an image and return it as a data URI. Data URIs pass through.

    The response must be `image/*` and no larger than `max_bytes`
    (MAX_IMAGE_BYTES by default). Redirects are not followed.

    Raises:
        UnsafeImageURLError: If the URL is not a public https URL
        ImageFetchError: If the response is not a usable image
        httpx.HTTPError: If the download fails
    """
    if url.startswith("data:"):
        return url

    await check_image_url(url)
    limit = max_bytes or MAX_IMAGE_BYTES

    async with client.stream("GET", url, follow_redirects=False) as response:
        response.raise_for_status()

        mime = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not mime.startswith("image/"):
            raise ImageFetchError(f"Expected an image from {url[:100]}, got {mime or 'no content type'}")

        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > limit:
            raise ImageFetchError(f"Image at {url[:100]} is larger than {limit} bytes")

        data = bytearray()
        async for chunk in response.aiter_bytes():
            data.extend(chunk)
            if len(data) > limit:
                raise ImageFetchError(f"Image at {url[:100]} is larger than {limit} bytes")

    return to_data_uri(mime, bytes(data))


async def inline_book_images(book: Book, client: Optional[httpx.AsyncClient] = None) -> Book:
    """
    Return a copy of the book with every image inlined as a data URI.

    Images are fetched concurrently. A failed or refused download fails
    the export.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=FETCH_TIMEOUT) as own_client:
            return await inline_book_images(book, own_client)

    urls = await asyncio.gather(
        *(fetch_image_as_data_uri(client, url) for url in book.image_urls())
    )
    return book.with_image_urls(list(urls))


def load_raster_image(uri: str) -> Optional[Image.Image]:
    """
    Decode a data URI into an RGB PIL image.

    Returns None for SVG placeholders and for payloads PIL cannot read,
    so the caller can draw a placeholder panel instead.
    """
    if not uri or is_svg(uri):
        return None

    try:
        _, data = decode_data_uri(uri)
        image = Image.open(BytesIO(data))
        image.load()
    except (ValueError, UnidentifiedImageError, OSError) as e:
        logger.warning(f"Could not decode illustration for PDF: {e}")
        return None

    if image.mode != "RGB":
        image = image.convert("RGB")
    return image
