"""
Art style definitions for storybook illustrations.

The client picks an art style by display name. Each style carries a
detailed visual specification that the art director copies into the
structured image prompt so the image model reproduces the look faithfully.
"""

from enum import Enum

from ..types import StyleDefinition


class ArtStyleType(Enum):
    """Art styles offered in the client's style picker."""

    STUDIO_GHIBLI = "Studio Ghibli"
    MIYAZAKI = "Hayao Miyazaki style"
    MIDCENTURY_CARTOON = "Midcentury American cartoon"
    AMAR_CHITRA_KATHA = "Amar Chitra Katha"
    CHACHA_CHAUDHARY = "Chacha Chaudhary"
    XKCD = "xkcd Comics"
    OLD_CARTOON = "Old cartoon"
    WARLI = "Indian Warli art"


ART_STYLES: dict[ArtStyleType, StyleDefinition] = {

    ArtStyleType.STUDIO_GHIBLI: StyleDefinition(
        name="Studio Ghibli",
        description="AUTHENTIC Studio Ghibli animation style: soft watercolor painted backgrounds with incredible depth, gentle hand-painted textures, characters with large expressive eyes and rosy cheeks, flowing natural hair movement, detailed clothing folds, warm golden lighting filtering through scenes, lush environmental details (grass blades, tree leaves, clouds), nostalgic peaceful atmosphere, painterly brushstrokes visible, color palette of soft pastels with rich accent colors, characters integrated naturally into detailed backgrounds, dreamlike quality reminiscent of My Neighbor Totoro, Spirited Away, and Kiki's Delivery Service",
        best_for=["nature", "wonder", "journeys", "gentle magic"],
    ),

    ArtStyleType.MIYAZAKI: StyleDefinition(
        name="Hayao Miyazaki style",
        description="Hayao Miyazaki's distinctive animation aesthetic: incredibly detailed natural environments (forests, meadows, skies), magical realism elements seamlessly integrated, characters with expressive large eyes and gentle features, dynamic cloud formations, glowing atmospheric lighting, sense of movement in hair and clothing, organic flowing shapes, rich color gradients, hand-painted watercolor backgrounds, depth through multiple layers, whimsical yet grounded character designs, environmental storytelling through background details, sense of wonder and adventure",
        best_for=["adventure", "flight", "forests", "magical realism"],
    ),

    ArtStyleType.MIDCENTURY_CARTOON: StyleDefinition(
        name="Midcentury American cartoon",
        description="1950s-60s midcentury American cartoon style: bold flat colors without gradients, clean geometric simplified shapes, limited color palette (primary colors dominant), thick black outlines around all elements, minimalist backgrounds with simple patterns, characters with simple rounded features, retro typography influences, sharp angular design elements, vintage advertising aesthetic, Chuck Jones / UPA animation influence, stylized proportions, graphic design sensibility",
        best_for=["humor", "cities", "inventions"],
    ),

    ArtStyleType.AMAR_CHITRA_KATHA: StyleDefinition(
        name="Amar Chitra Katha",
        description="Traditional Indian Amar Chitra Katha comic book illustration style: vibrant saturated colors, detailed traditional Indian clothing (saris, dhotis, jewelry), expressive faces with defined features, narrative comic panel composition, cultural and mythological visual elements, decorative borders and patterns, rich skin tones, detailed architecture (temples, palaces), dramatic poses and gestures, clear linework with color fills, educational illustration quality, authentic Indian cultural representation",
        best_for=["mythology", "history", "folklore"],
    ),

    ArtStyleType.CHACHA_CHAUDHARY: StyleDefinition(
        name="Chacha Chaudhary",
        description="Chacha Chaudhary Indian comic style: simple bold line art, thick black outlines, bright primary colors (red, yellow, blue), comic book panel layout, expressive cartoon faces with exaggerated features, simple backgrounds, Indian cultural elements (turbans, traditional clothing, Indian settings), humorous visual storytelling, clear readable compositions, cartoon proportions, retro Indian comic aesthetic from the 1970s-80s",
        best_for=["humor", "clever heroes", "village life"],
    ),

    ArtStyleType.XKCD: StyleDefinition(
        name="xkcd Comics",
        description="xkcd minimalist stick figure comic style: extremely simple black line drawings on pure white background, stick figure characters made of basic lines and circles, no color except black lines, no shading or gradients, clean geometric shapes, clever visual metaphors, mathematical or scientific diagram influence, minimalist environment suggestions, focus on ideas and concepts over visual detail, Randall Munroe's distinctive simple aesthetic",
        best_for=["science", "puzzles", "curiosity"],
    ),

    ArtStyleType.OLD_CARTOON: StyleDefinition(
        name="Old cartoon",
        description="Vintage 1930s-1940s classic animation style: rubber hose animation limbs (bendy, flowing), pie-cut eyes (wedge-shaped), white gloves on hands, exaggerated expressions and movements, grainy film texture, limited color palette (sepia tones or early Technicolor), hand-drawn cel animation aesthetic with visible ink lines, bouncy personality poses, vintage cartoon physics, classic Disney/Fleischer Studios influence, nostalgic aged appearance",
        best_for=["slapstick", "music", "silly"],
    ),

    ArtStyleType.WARLI: StyleDefinition(
        name="Indian Warli art",
        description="Authentic Indian Warli tribal art style: white figures on earthy brown/terracotta background, stick figure humans and animals made of simple circles, triangles, and lines, repetitive geometric patterns, circular dance formations (tarpa dance), ritualistic compositions, folk art simplicity, no perspective or depth, flat two-dimensional, symbolic representation over realism, tribal cultural storytelling, traditional Indian rural life themes, minimalist geometric aesthetic",
        best_for=["village life", "harvest", "celebration"],
    ),
}


def get_style_by_name(name: str) -> StyleDefinition:
    """Get a style by display name (case-insensitive). Defaults to Studio Ghibli."""
    wanted = (name or "").strip().lower()
    for style_type, style_def in ART_STYLES.items():
        if style_type.value.lower() == wanted:
            return style_def
    return ART_STYLES[ArtStyleType.STUDIO_GHIBLI]


def is_ghibli_style(art_style: str) -> bool:
    """True when the requested style asks for the Ghibli look."""
    return "ghibli" in (art_style or "").lower()


def get_all_style_names() -> list[str]:
    """Display names of all styles, in picker order."""
    return [style_type.value for style_type in ART_STYLES]
