"""Pytest fixtures for unit tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from storybook.api.dependencies import (
    get_generator_factory,
    get_lm_factory,
    get_venice_client,
)
from storybook.api.main import app
from storybook.config import llm
from storybook.core.rendering import images
from storybook.core.types import Book, StoryText
from storybook.core.venice import VeniceClient


class FakeLM:
    """
    Stand-in for dspy.LM.

    Replies are taken from `responses` in order. A reply that is an
    Exception is raised instead of returned. Every call is recorded.
    """

    def __init__(self, responses, model: str = "openai/fake-model"):
        self.responses = list(responses)
        self.model = model
        self.calls = []

    def __call__(self, messages=None, **kwargs):
        self.calls.append({"messages": messages, **kwargs})
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return [reply]


@pytest.fixture
def fake_lm_class():
    return FakeLM


@pytest.fixture
def sample_story_pages():
    return [f"Page {n}: Pip the otter splashes through the river." for n in range(1, 9)]


@pytest.fixture
def sample_story_text(sample_story_pages):
    return StoryText(
        title="Pip and the River",
        story=sample_story_pages,
        character_description="A small brown otter with a red scarf",
    )


@pytest.fixture
def sample_book(sample_story_pages):
    return Book(
        title="Pip and the River",
        story=sample_story_pages,
        cover_image_url="https://images.example/cover.png",
        page_image_urls=[f"https://images.example/page{n}.png" for n in range(1, 9)],
        end_page_image_url="https://images.example/end.png",
        character_description="A small brown otter with a red scarf",
    )


@pytest.fixture(autouse=True)
def public_image_hosts(monkeypatch):
    """Resolve every image host to a public address without real DNS."""
    resolved = {}

    async def fake_resolve(host):
        return resolved.get(host, ["93.184.216.34"])

    monkeypatch.setattr(images, "resolve_host", fake_resolve)
    return resolved


@pytest.fixture
def offline_mode(monkeypatch):
    """No Venice.ai key configured."""
    monkeypatch.setattr(llm, "VENICE_API_KEY", "")


@pytest.fixture
def online_mode(monkeypatch):
    """A Venice.ai key is configured (no real calls are made)."""
    monkeypatch.setattr(llm, "VENICE_API_KEY", "test-venice-key")


@pytest.fixture
def mock_venice_client():
    """Create a mock Venice.ai client."""
    return AsyncMock(spec=VeniceClient)


@pytest.fixture
def mock_generator():
    """Create a mock BookGenerator."""
    generator = MagicMock()
    generator.generate = AsyncMock()
    generator.write_story = AsyncMock()
    return generator


@pytest.fixture
def client_with_mocks(mock_venice_client, mock_generator):
    """TestClient with mocked provider client, LM factory and generator."""
    fake_lm = FakeLM([])

    app.dependency_overrides[get_venice_client] = lambda: mock_venice_client
    app.dependency_overrides[get_lm_factory] = lambda: (lambda model=None: fake_lm)
    app.dependency_overrides[get_generator_factory] = lambda: (lambda *args, **kwargs: mock_generator)

    with TestClient(app) as client:
        yield client, mock_venice_client, mock_generator, fake_lm

    app.dependency_overrides.clear()
