"""Unit tests for Illustrator with a mocked Venice.ai client."""

from unittest.mock import AsyncMock, patch

import dspy
import pytest

from storybook.core.modules.illustrator import Illustrator
from storybook.core.types import StructuredImagePrompt
from storybook.core.venice import VeniceClient


@pytest.fixture
def mock_client():
    client = AsyncMock(spec=VeniceClient)
    client.generate_image = AsyncMock(return_value="https://images.example/out.png")
    return client


def _sent_payload(client) -> dict:
    return client.generate_image.call_args.args[0]


class TestArtDirection:
    """Tests for the art director instructions."""

    def test_ghibli_variant(self, mock_client):
        direction = Illustrator(mock_client, lm=None).build_art_direction("Studio Ghibli", "a fox")
        assert "Studio Ghibli aesthetic" in direction
        assert '"a fox"' in direction

    def test_cover_requires_title_text(self, mock_client):
        direction = Illustrator(mock_client, lm=None).build_art_direction(
            "Old cartoon", "a fox", is_cover=True, title="Fox Goes Home"
        )
        assert 'display the title text "Fox Goes Home"' in direction

    def test_page_has_no_title_rule(self, mock_client):
        direction = Illustrator(mock_client, lm=None).build_art_direction("Old cartoon", "a fox")
        assert "title text" not in direction


class TestIllustrate:
    """Tests for page and cover illustration calls."""

    @pytest.mark.asyncio
    async def test_long_prompt_truncated_below_limit(self, mock_client):
        illustrator = Illustrator(mock_client, lm=None)
        with patch(
            "storybook.core.modules.illustrator.predict",
            AsyncMock(return_value=dspy.Prediction(image_prompt="x" * 3000)),
        ):
            url = await illustrator.illustrate("Page text", "Old cartoon", "qwen-image", "a fox")

        assert url == "https://images.example/out.png"
        assert len(_sent_payload(mock_client)["prompt"]) == 1400 - 50

    @pytest.mark.asyncio
    async def test_disallowed_model_replaced_and_flags_forced(self, mock_client):
        illustrator = Illustrator(mock_client, lm=None)
        with patch(
            "storybook.core.modules.illustrator.predict",
            AsyncMock(return_value=dspy.Prediction(image_prompt="a fox in a field")),
        ):
            await illustrator.illustrate("Page text", "Old cartoon", "nsfw-model", "a fox", size="1024x1024")

        payload = _sent_payload(mock_client)
        assert payload["model"] == "qwen-image"
        assert payload["safe_mode"] is True
        assert payload["hide_watermark"] is False
        assert payload["n"] == 1
        assert payload["size"] == "1024x1024"
        assert payload["prompt"] == "a fox in a field"

    @pytest.mark.asyncio
    async def test_empty_prompt_falls_back_to_text(self, mock_client):
        illustrator = Illustrator(mock_client, lm=None)
        with patch(
            "storybook.core.modules.illustrator.predict",
            AsyncMock(return_value=dspy.Prediction(image_prompt="   ")),
        ):
            await illustrator.illustrate("Pip jumps", "Old cartoon", "hidream", "an otter")

        assert _sent_payload(mock_client)["prompt"] == "Pip jumps"

    @pytest.mark.asyncio
    async def test_text_wrapped_for_prompt_writer(self, mock_client):
        illustrator = Illustrator(mock_client, lm=None)
        mock_predict = AsyncMock(return_value=dspy.Prediction(image_prompt="p"))
        with patch("storybook.core.modules.illustrator.predict", mock_predict):
            await illustrator.illustrate("Pip jumps", "Old cartoon", "hidream", "an otter")

        assert mock_predict.call_args.kwargs["text"] == 'Text: "Pip jumps"'


class TestStructuredIllustration:
    """Tests for the single-image structured prompt path."""

    @pytest.mark.asyncio
    async def test_structured_prompt_composed(self, mock_client, fake_lm_class):
        lm = fake_lm_class([{"style": "Old cartoon style: rubber hose", "characters": "a fox", "scene": "a barn"}])

        result = await Illustrator(mock_client, lm).illustrate_structured(
            "The fox dances", "Old cartoon", "venice-sd35", "a fox"
        )

        assert result.final_prompt == "Style: Old cartoon style: rubber hose. Characters: a fox. Scene: a barn"
        assert result.structured_prompt == StructuredImagePrompt(
            style="Old cartoon style: rubber hose", characters="a fox", scene="a barn"
        )
        assert result.image_url == "https://images.example/out.png"
        assert _sent_payload(mock_client)["size"] == "1024x1024"
        assert lm.calls[0]["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_cover_uses_wide_size(self, mock_client, fake_lm_class):
        lm = fake_lm_class([{"style": "s", "characters": "c", "scene": "x"}])

        await Illustrator(mock_client, lm).illustrate_structured(
            "cover", "Old cartoon", "qwen-image", is_cover=True, title="Fox"
        )

        assert _sent_payload(mock_client)["size"] == "1792x1024"
        assert 'for "Fox"' in lm.calls[0]["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_truncated_to_full_model_limit(self, mock_client, fake_lm_class):
        lm = fake_lm_class([{"style": "s" * 1000, "characters": "c" * 1000, "scene": "x"}])

        result = await Illustrator(mock_client, lm).illustrate_structured("t", "Old cartoon", "qwen-image")

        assert len(result.final_prompt) == 1400
        assert _sent_payload(mock_client)["prompt"] == result.final_prompt

    @pytest.mark.asyncio
    async def test_missing_fields_use_defaults(self, mock_client, fake_lm_class):
        lm = fake_lm_class([{}])

        result = await Illustrator(mock_client, lm).illustrate_structured("The fox dances", "Old cartoon", "hidream")

        assert result.structured_prompt.style == "Old cartoon style"
        assert result.structured_prompt.characters == "a friendly children's book character"
        assert result.structured_prompt.scene == "The fox dances"
