"""
Offline storyteller: deterministic stories and placeholder art.

Used when no Venice.ai key is configured, and as a safety net when the
generation pipeline fails, so the reader always gets a complete book.
Pictures are gradient SVG cards embedded as data URIs.
"""

import re
from urllib.parse import quote

from storybook.config import STORY_CONSTANTS
from ..safety import SAFE_IMAGE_MODEL_IDS
from ..types import Book, StoryText

FALLBACK_TEXT_MODEL = {
    "id": "mock-storyteller",
    "model_spec": {
        "name": "Offline Storyteller",
        "constraints": {"promptCharacterLimit": 1000},
    },
}

FALLBACK_IMAGE_MODEL = {
    "id": SAFE_IMAGE_MODEL_IDS[0] if SAFE_IMAGE_MODEL_IDS else "venice-sd35",
    "model_spec": {
        "name": "Offline Illustrator",
        "constraints": {"promptCharacterLimit": 1000},
    },
}

SVG_PALETTES = [
    ("#FFDFC8", "#FF9AA2", "#FFB7B2"),
    ("#D9F4FF", "#A0E7E5", "#B4F8C8"),
    ("#FFF3B0", "#FFCE6D", "#F6A6B2"),
    ("#E5E0FF", "#C4C1E0", "#A0C4FF"),
]

GRADE_TONES = {
    "1": "short, playful sentences with gentle rhymes",
    "2": "simple sentences filled with curiosity and friendship",
    "3": "warm storytelling with a dash of adventure and humour",
    "4": "imaginative scenes with lively dialogue and problem solving",
    "5": "rich descriptions, thoughtful emotions, and inspiring lessons",
}

LANGUAGE_OPENERS = {
    "English": "Once upon a time",
    "Spanish": "Érase una vez",
    "French": "Il était une fois",
    "German": "Es war einmal",
    "Hindi": "किसी समय की बात है",
    "Gujarati": "એક વખતની વાત છે",
}

LANGUAGE_CLOSERS = {
    "English": "Together they discovered that kindness makes every adventure brighter.",
    "Spanish": "Juntos descubrieron que la bondad hace cada aventura más brillante.",
    "French": "Ensemble, ils découvrirent que la gentillesse rend chaque aventure plus lumineuse.",
    "German": "Gemeinsam entdeckten sie, dass Freundlichkeit jedes Abenteuer heller macht.",
    "Hindi": "साथ मिलकर उन्होंने सीखा कि दया हर रोमांच को उज्ज्वल बनाती है।",
    "Gujarati": "સાથે મળીને તેમણે શીખ્યું કે દયા દરેક સાહસને ઝગમગતું બનાવે છે.",
}

STORY_BEATS = [
    "meets a surprising friend who understands their dreams",
    "follows sparkling clues that flutter in the air",
    "faces a puzzle that needs courage and creativity",
    "listens to the whispers of the wind for gentle guidance",
    "shares a laugh that echoes like chimes through the trees",
    "helps someone in need and feels their heart glow",
    "sees the path ahead sparkle with possibilities",
]

FALLBACK_CHARACTER_DESCRIPTION = (
    "A cheerful young explorer with bright curious eyes, a yellow raincoat, "
    "red boots and a well-worn satchel full of treasures."
)

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def escape_for_svg(text) -> str:
    """Escape text for safe inclusion in SVG markup and attributes."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def _num(value: float) -> str:
    return f"{value:g}"


def create_fallback_image(
    title: str,
    body: str,
    width: int = 1024,
    height: int = 1024,
    palette_index: int = 0,
) -> str:
    """
    Render a gradient placeholder card as an SVG data URI.

    Text is truncated before escaping so an entity is never cut in half;
    the title keeps 80 characters and the body 160.
    """
    palette = SVG_PALETTES[palette_index % len(SVG_PALETTES)]
    safe_title = escape_for_svg(str(title)[:80])
    safe_body = escape_for_svg(str(body)[:160])
    radius = max(width, height)

    svg = f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}">
  <defs>
    <linearGradient id="bg" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" stop-color="{palette[0]}" />
      <stop offset="70%" stop-color="{palette[1]}" />
      <stop offset="100%" stop-color="{palette[2]}" />
    </linearGradient>
  </defs>
  <rect width="{width}" height="{height}" fill="url(#bg)" rx="48" ry="48" />
  <g fill="#3c2a4d" font-family="'Baloo 2', 'Comic Sans MS', sans-serif" text-anchor="middle">
    <text x="{_num(width / 2)}" y="{_num(height / 2 - 40)}" font-size="{_num(max(32, width / 18))}" font-weight="700">{safe_title}</text>
    <text x="{_num(width / 2)}" y="{_num(height / 2 + 40)}" font-size="{_num(max(24, width / 26))}" opacity="0.75">{safe_body}</text>
  </g>
  <circle cx="{_num(width * 0.2)}" cy="{_num(height * 0.8)}" r="{_num(radius * 0.06)}" fill="#ffffff55" />
  <circle cx="{_num(width * 0.8)}" cy="{_num(height * 0.2)}" r="{_num(radius * 0.05)}" fill="#ffffff33" />
  <path d="M{_num(width * 0.2)} {_num(height * 0.25)} Q{_num(width * 0.3)} {_num(height * 0.05)} {_num(width * 0.5)} {_num(height * 0.18)} T{_num(width * 0.8)} {_num(height * 0.25)}" stroke="#ffffff55" stroke-width="14" fill="none" stroke-linecap="round" />
</svg>"""

    return f"data:image/svg+xml;utf8,{quote(svg, safe=_URI_COMPONENT_SAFE)}"


def _title_from_prompt(prompt: str) -> str:
    if len(prompt) <= 3:
        return "A Magical Adventure"
    title = re.sub(r"^[a-z]", lambda match: match.group(0).upper(), prompt)
    return re.sub(r"\.$", "", title)


def build_fallback_story_text(
    prompt: str = "",
    language: str = "English",
) -> StoryText:
    """Build the templated 8-page story text without any images."""
    cleaned_prompt = prompt or STORY_CONSTANTS["default_prompt"]
    opener = LANGUAGE_OPENERS.get(language, LANGUAGE_OPENERS["English"])
    closer = LANGUAGE_CLOSERS.get(language, LANGUAGE_CLOSERS["English"])

    beats = [*STORY_BEATS, closer]
    pages = [f"{opener}! Our hero inspired by {cleaned_prompt} {beat}" for beat in beats]

    return StoryText(
        title=_title_from_prompt(cleaned_prompt),
        story=pages,
        character_description=FALLBACK_CHARACTER_DESCRIPTION,
    )


def build_fallback_book(
    prompt: str = "",
    language: str = "English",
    grade_level: str = "3",
    art_style: str = "Classic storybook",
) -> Book:
    """
    Build a complete offline book.

    Always has exactly 8 pages and SVG data URI illustrations.
    """
    language = language or "English"
    cleaned_prompt = prompt or STORY_CONSTANTS["default_prompt"]
    text = build_fallback_story_text(cleaned_prompt, language)

    opener = LANGUAGE_OPENERS.get(language, LANGUAGE_OPENERS["English"])
    closer = LANGUAGE_CLOSERS.get(language, LANGUAGE_CLOSERS["English"])
    tone = GRADE_TONES.get(str(grade_level), GRADE_TONES["3"])

    cover_image_url = create_fallback_image(
        text.title, art_style or STORY_CONSTANTS["default_art_style"], 1792, 1024, 0
    )
    page_image_urls = [
        create_fallback_image(f"Page {index + 1}", page, 1024, 1024, index + 1)
        for index, page in enumerate(text.story)
    ]
    end_page_image_url = create_fallback_image("The End", closer, 1024, 1024, 5)

    return Book(
        title=text.title,
        story=text.story,
        cover_image_url=cover_image_url,
        page_image_urls=page_image_urls,
        end_page_image_url=end_page_image_url,
        character_description=text.character_description,
        summary=f"{opener}, a story about {cleaned_prompt}. Written with {tone}.",
        metadata={"fallback": True, "language": language},
    )
