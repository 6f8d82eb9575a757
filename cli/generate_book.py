#!/usr/bin/env python3
"""
CLI for generating illustrated storybooks.

Usage:
    python cli/generate_book.py "a shy dragon who learns to share"
    python cli/generate_book.py "a lost kitten finds home" --pdf --html
    python cli/generate_book.py "the moon's birthday party" --text-only --stdout
    python cli/generate_book.py "ocean friends" --offline --pdf
"""

import argparse
import asyncio
import json
import re
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storybook.config import STORY_CONSTANTS, get_image_client, is_venice_enabled
from storybook.core.modules import build_fallback_book, get_all_style_names
from storybook.core.programs import BookGenerator
from storybook.core.rendering import (
    StorybookPDFBuilder,
    inline_book_images,
    render_book_html,
)
from storybook.core.safety import DEFAULT_SAFE_IMAGE_MODEL, SAFE_IMAGE_MODEL_IDS


def _book_to_dict(book) -> dict:
    data = {
        "title": book.title,
        "story": book.story,
        "coverImageUrl": book.cover_image_url,
        "pageImageUrls": book.page_image_urls,
        "endPageImageUrl": book.end_page_image_url,
    }
    if book.character_description:
        data["characterDescription"] = book.character_description
    if book.summary:
        data["summary"] = book.summary
    if book.metadata:
        data["metadata"] = book.metadata
    return data


async def _generate(args):
    if args.offline or not is_venice_enabled():
        if args.verbose and not args.offline:
            print("No Venice.ai key configured - using the offline storyteller.")
        book = build_fallback_book(args.prompt, args.language, args.grade, args.style)
        return book, _book_to_dict(book)

    async with get_image_client() as client:
        generator = BookGenerator(client, text_model=args.text_model)

        if args.text_only:
            story = await generator.write_story(args.prompt, args.language, args.grade)
            return None, story.to_dict()

        book = await generator.generate(
            args.prompt, args.language, args.grade, args.style, args.image_model
        )
        if args.pdf or args.html:
            if args.verbose:
                print("Downloading illustrations...")
            book = await inline_book_images(book)
        return book, _book_to_dict(book)


def main():
    parser = argparse.ArgumentParser(
        description="Generate illustrated children's storybooks with Venice.ai",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Art styles:
    {", ".join(get_all_style_names())}

Image models:
    {", ".join(SAFE_IMAGE_MODEL_IDS)}
        """,
    )

    parser.add_argument("prompt", type=str, help="The story idea")
    parser.add_argument("--grade", type=str, default=STORY_CONSTANTS["default_grade_level"], help="Reader's grade level, 1-5 (default: 3)")
    parser.add_argument("--language", type=str, default=STORY_CONSTANTS["default_language"], help="Story language (default: English)")
    parser.add_argument("--style", type=str, default=STORY_CONSTANTS["default_art_style"], help="Art style for the illustrations")
    parser.add_argument("--text-model", type=str, default=None, help="Venice.ai text model id")
    parser.add_argument("--image-model", type=str, default=DEFAULT_SAFE_IMAGE_MODEL, help="Safe Venice.ai image model id")
    parser.add_argument("--output", "-o", type=str, default=None, help="Base file name (saved to output/ directory)")
    parser.add_argument("--text-only", action="store_true", help="Write the story text without illustrations")
    parser.add_argument("--pdf", action="store_true", help="Also write a PDF")
    parser.add_argument("--html", action="store_true", help="Also write a standalone HTML book")
    parser.add_argument("--offline", action="store_true", help="Use the offline storyteller")
    parser.add_argument("--stdout", action="store_true", help="Print the JSON to the terminal instead of saving it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress information")

    args = parser.parse_args()

    if args.image_model not in SAFE_IMAGE_MODEL_IDS:
        parser.error(f"--image-model must be one of: {', '.join(SAFE_IMAGE_MODEL_IDS)}")

    if args.verbose:
        print(f"Generating book for: {args.prompt}")

    book, data = asyncio.run(_generate(args))
    formatted = json.dumps(data, indent=2, ensure_ascii=False)

    if args.stdout:
        print(formatted)
        return

    output_dir = Path(__file__).parent.parent / "output"
    output_dir.mkdir(exist_ok=True)

    if args.output:
        base_name = Path(args.output).stem
    else:
        slug = re.sub(r"[^a-z0-9]+", "_", args.prompt.lower())[:30].strip("_")
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"{slug}_{timestamp}"

    json_path = output_dir / f"{base_name}.json"
    json_path.write_text(formatted, encoding="utf-8")
    print(f"Book saved to: {json_path}")

    if book is not None and args.pdf:
        pdf_path = output_dir / f"{base_name}.pdf"
        StorybookPDFBuilder().write(book, pdf_path)
        print(f"PDF saved to: {pdf_path}")

    if book is not None and args.html:
        html_path = output_dir / f"{base_name}.html"
        html_path.write_text(render_book_html(book), encoding="utf-8")
        print(f"HTML saved to: {html_path}")

    if args.verbose and book is not None:
        print("\n--- Generation Summary ---")
        print(f"Title: {book.title}")
        print(f"Pages: {book.page_count}")
        print(f"Offline: {book.is_fallback}")


if __name__ == "__main__":
    main()
