"""Unit tests for the offline storyteller."""

from urllib.parse import unquote
from xml.etree import ElementTree

import pytest

from storybook.core.modules.offline_storyteller import (
    FALLBACK_CHARACTER_DESCRIPTION,
    LANGUAGE_CLOSERS,
    build_fallback_book,
    build_fallback_story_text,
    create_fallback_image,
    escape_for_svg,
)

SVG_PREFIX = "data:image/svg+xml;utf8,"


def _decode(uri: str) -> str:
    assert uri.startswith(SVG_PREFIX)
    return unquote(uri[len(SVG_PREFIX):])


class TestFallbackImage:
    """Tests for SVG placeholder images."""

    def test_is_svg_data_uri(self):
        uri = create_fallback_image("Title", "Body")
        svg = _decode(uri)
        assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert svg.rstrip().endswith("</svg>")

    def test_uri_payload_is_percent_encoded(self):
        uri = create_fallback_image("A title with spaces", "<b>")
        payload = uri[len(SVG_PREFIX):]
        assert " " not in payload
        assert "<" not in payload

    def test_dimensions_in_view_box(self):
        svg = _decode(create_fallback_image("Cover", "Body", 1792, 1024))
        assert 'viewBox="0 0 1792 1024"' in svg

    def test_text_is_escaped(self):
        svg = _decode(create_fallback_image("<script>alert(1)</script>", 'Tom & "Jerry"'))
        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg
        assert "Tom &amp; &quot;Jerry&quot;" in svg

    def test_title_and_body_are_truncated(self):
        svg = _decode(create_fallback_image("T" * 200, "B" * 500))
        assert "T" * 80 in svg
        assert "T" * 81 not in svg
        assert "B" * 160 in svg
        assert "B" * 161 not in svg

    @pytest.mark.parametrize(
        "title, body",
        [
            ("x" * 78 + "&co", "body"),
            ("x" * 79 + "'s", "y" * 158 + "<>"),
            ("title", "y" * 157 + "&amp; \"more\""),
        ],
    )
    def test_entities_at_the_cap_stay_well_formed(self, title, body):
        svg = _decode(create_fallback_image(title, body))
        root = ElementTree.fromstring(svg.encode("utf-8"))
        texts = [node.text for node in root.iter("{http://www.w3.org/2000/svg}text")]
        assert texts == [title[:80], body[:160]]

    def test_escape_for_svg(self):
        assert escape_for_svg("a & b < c > d \" e ' f") == "a &amp; b &lt; c &gt; d &quot; e &#39; f"
        assert escape_for_svg(42) == "42"


class TestFallbackStoryText:
    """Tests for the templated story text."""

    def test_always_eight_pages(self):
        story = build_fallback_story_text("a dragon who loves tea")
        assert story.page_count == 8

    def test_last_page_ends_with_closer(self):
        story = build_fallback_story_text("a dragon", "Spanish")
        assert story.story[-1].endswith(LANGUAGE_CLOSERS["Spanish"])
        assert story.story[0].startswith("Érase una vez!")

    def test_unknown_language_uses_english(self):
        story = build_fallback_story_text("a dragon", "Klingon")
        assert story.story[0].startswith("Once upon a time!")

    def test_title_capitalized_and_period_removed(self):
        story = build_fallback_story_text("a dragon who loves tea.")
        assert story.title == "A dragon who loves tea"

    def test_short_prompt_gets_default_title(self):
        assert build_fallback_story_text("cat").title == "A Magical Adventure"

    def test_empty_prompt_uses_default(self):
        story = build_fallback_story_text("")
        assert "a brave young explorer discovering a hidden world" in story.story[0]

    def test_has_character_description(self):
        assert build_fallback_story_text("x" * 10).character_description == FALLBACK_CHARACTER_DESCRIPTION


class TestFallbackBook:
    """Tests for the complete offline book."""

    @pytest.mark.parametrize("language", ["English", "Hindi", "Gujarati", "Martian"])
    def test_always_eight_pages_and_images(self, language):
        book = build_fallback_book("a shy robot learns to dance", language, "2", "Old cartoon")

        assert book.page_count == 8
        assert len(book.page_image_urls) == 8
        for url in book.image_urls():
            assert url.startswith(SVG_PREFIX)
            assert _decode(url).rstrip().endswith("</svg>")

    @pytest.mark.parametrize(
        "prompt",
        ["a" * 77 + " & friends", "a" * 78 + "'s garden party", "Tom & Jerry's " * 15],
    )
    def test_every_image_is_well_formed_xml(self, prompt):
        book = build_fallback_book(prompt)

        for url in book.image_urls():
            ElementTree.fromstring(_decode(url).encode("utf-8"))

    def test_cover_and_page_sizes(self):
        book = build_fallback_book("a shy robot learns to dance")
        assert 'viewBox="0 0 1792 1024"' in _decode(book.cover_image_url)
        assert 'viewBox="0 0 1024 1024"' in _decode(book.page_image_urls[0])
        assert 'viewBox="0 0 1024 1024"' in _decode(book.end_page_image_url)

    def test_metadata_and_summary(self):
        book = build_fallback_book("a shy robot", "French", "9")

        assert book.metadata == {"fallback": True, "language": "French"}
        assert book.is_fallback
        assert book.summary.startswith("Il était une fois, a story about a shy robot.")
        # Unknown grades use the grade 3 tone
        assert "warm storytelling" in book.summary

    def test_empty_language_defaults_to_english(self):
        book = build_fallback_book("a shy robot", "")
        assert book.metadata["language"] == "English"
