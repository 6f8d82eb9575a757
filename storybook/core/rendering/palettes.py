"""
Page color palettes chosen from the story's own words.

A story about the sea gets ocean blues, a bedtime story gets night-sky
purples. Stories that match nothing, or match two themes equally, keep the
classic cream-and-pink look.
"""

import re
from dataclasses import dataclass

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class PagePalette:
    """Colors used to decorate story pages."""

    name: str
    background: RGB
    border: RGB
    text: RGB = (0, 0, 0)
    accent: RGB = (255, 182, 193)
    keywords: tuple[str, ...] = ()

    @staticmethod
    def to_hex(color: RGB) -> str:
        return "#{:02x}{:02x}{:02x}".format(*color)

    @staticmethod
    def to_unit(color: RGB) -> tuple[float, float, float]:
        return tuple(channel / 255 for channel in color)


CLASSIC_PALETTE = PagePalette(
    name="classic",
    background=(255, 255, 230),
    border=(255, 182, 193),
    accent=(255, 182, 193),
)

THEMED_PALETTES: list[PagePalette] = [
    PagePalette(
        name="ocean",
        background=(230, 246, 255),
        border=(94, 179, 214),
        accent=(160, 231, 229),
        keywords=("ocean", "sea", "wave", "fish", "beach", "whale", "mermaid", "island", "boat"),
    ),
    PagePalette(
        name="forest",
        background=(236, 250, 236),
        border=(120, 180, 120),
        accent=(180, 248, 200),
        keywords=("forest", "tree", "woods", "leaf", "leaves", "garden", "jungle", "meadow", "flower"),
    ),
    PagePalette(
        name="night",
        background=(236, 232, 255),
        border=(150, 130, 210),
        accent=(196, 193, 224),
        keywords=("night", "star", "moon", "space", "rocket", "planet", "dream", "sleep", "galaxy"),
    ),
    PagePalette(
        name="snow",
        background=(244, 250, 255),
        border=(160, 196, 255),
        accent=(210, 230, 255),
        keywords=("snow", "ice", "winter", "frost", "penguin", "cold", "igloo"),
    ),
    PagePalette(
        name="desert",
        background=(255, 243, 214),
        border=(230, 160, 90),
        accent=(255, 206, 109),
        keywords=("desert", "sun", "sand", "camel", "pyramid", "dune", "summer"),
    ),
    PagePalette(
        name="candy",
        background=(255, 236, 244),
        border=(246, 166, 178),
        accent=(255, 154, 162),
        keywords=("candy", "cake", "sweet", "cookie", "party", "birthday", "unicorn", "rainbow"),
    ),
]


def _keyword_hits(text: str, keywords: tuple[str, ...]) -> int:
    pattern = r"\b(?:" + "|".join(re.escape(keyword) for keyword in keywords) + r")\w*"
    return len(re.findall(pattern, text, flags=re.IGNORECASE))


def select_palette(text: str) -> PagePalette:
    """Pick the themed palette whose keywords appear most often in the text."""
    if not text:
        return CLASSIC_PALETTE

    scores = [(_keyword_hits(text, palette.keywords), palette) for palette in THEMED_PALETTES]
    best = max(score for score, _ in scores)
    winners = [palette for score, palette in scores if score == best]

    if best == 0 or len(winners) > 1:
        return CLASSIC_PALETTE
    return winners[0]
