"""Unit tests for chat completion helpers and JSON recovery."""

import json

import pytest

from storybook.core.completion import (
    JSON_MODE,
    complete,
    complete_json,
    is_response_format_unsupported,
    parse_json_content,
)
from storybook.core.venice import VeniceAPIError


class TestParseJsonContent:
    """Tests for parsing model output into JSON."""

    def test_plain_json(self):
        assert parse_json_content('{"title": "Moon"}') == {"title": "Moon"}

    def test_json_fenced_block(self):
        content = 'Here is your story:\n```json\n{"title": "Moon", "story": ["a"]}\n```\nEnjoy!'
        assert parse_json_content(content) == {"title": "Moon", "story": ["a"]}

    def test_generic_fenced_block(self):
        content = 'Sure!\n```\n{"title": "Sun"}\n```'
        assert parse_json_content(content) == {"title": "Sun"}

    def test_json_block_preferred_over_generic(self):
        content = '```\nnot json\n```\n```json\n{"title": "Stars"}\n```'
        assert parse_json_content(content) == {"title": "Stars"}

    def test_empty_content_raises(self):
        with pytest.raises(ValueError, match="No content"):
            parse_json_content("")

    def test_unparseable_content_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_json_content("once upon a time there was no json")


class TestResponseFormatDetection:
    """Tests for recognizing JSON-mode rejections."""

    def test_detects_message_in_error_text(self):
        assert is_response_format_unsupported(Exception("Response_format is not supported by this model"))

    def test_detects_message_in_details(self):
        error = VeniceAPIError(
            "Venice.ai request failed with status 400",
            status_code=400,
            body={"details": {"_errors": ["response_format is not supported by this model"]}},
        )
        assert is_response_format_unsupported(error)

    def test_detects_message_in_issues(self):
        error = VeniceAPIError(
            "bad request",
            status_code=400,
            body={"issues": [{"message": "response_format is not supported"}]},
        )
        assert is_response_format_unsupported(error)

    def test_other_errors_not_detected(self):
        assert not is_response_format_unsupported(Exception("rate limited"))


class TestComplete:
    """Tests for running completions against a dspy.LM."""

    @pytest.mark.asyncio
    async def test_returns_first_output(self, fake_lm_class):
        lm = fake_lm_class(["hello"])
        assert await complete(lm, [{"role": "user", "content": "hi"}]) == "hello"

    @pytest.mark.asyncio
    async def test_dict_outputs(self):
        def call(messages=None, **kwargs):
            return [{"text": "from dict"}]

        assert await complete(call, []) == "from dict"

    @pytest.mark.asyncio
    async def test_json_mode_requested(self, fake_lm_class):
        lm = fake_lm_class([{"title": "Moon"}])

        result = await complete_json(lm, [{"role": "user", "content": "hi"}])

        assert result == {"title": "Moon"}
        assert lm.calls[0]["response_format"] == JSON_MODE

    @pytest.mark.asyncio
    async def test_retries_once_without_json_mode(self, fake_lm_class):
        lm = fake_lm_class([
            Exception("response_format is not supported"),
            '```json\n{"title": "Moon"}\n```',
        ])

        result = await complete_json(lm, [{"role": "user", "content": "hi"}])

        assert result == {"title": "Moon"}
        assert len(lm.calls) == 2
        assert "response_format" not in lm.calls[1]

    @pytest.mark.asyncio
    async def test_other_errors_propagate_without_retry(self, fake_lm_class):
        lm = fake_lm_class([RuntimeError("server exploded"), {"title": "never"}])

        with pytest.raises(RuntimeError, match="server exploded"):
            await complete_json(lm, [])
        assert len(lm.calls) == 1

    @pytest.mark.asyncio
    async def test_second_failure_propagates(self, fake_lm_class):
        lm = fake_lm_class([
            Exception("response_format is not supported"),
            RuntimeError("still broken"),
        ])

        with pytest.raises(RuntimeError, match="still broken"):
            await complete_json(lm, [])
        assert len(lm.calls) == 2
