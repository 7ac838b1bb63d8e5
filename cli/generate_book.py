#!/usr/bin/env python3
"""
CLI for generating a fairy tale book without running the HTTP server.

Usage:
    python cli/generate_book.py --name "Мария" --age 5 --gender girl --topic "море"
    python cli/generate_book.py --name "Иван" --age 4 --gender boy --topic "space" --output ivan.json
    python cli/generate_book.py --name "Ана" --age 6 --gender girl --topic "forest" --prompt-only
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fairytale.api.config import get_settings
from fairytale.core.errors import BookServiceError, GatewayTransportError
from fairytale.core.extraction import extract_book
from fairytale.core.gateway import GeminiGateway
from fairytale.core.prompt import build_prompt
from fairytale.core.validation import validate_request


async def generate(request, api_key: str) -> dict:
    """Run prompt -> gateway -> extract for a validated request."""
    gateway = GeminiGateway()
    raw = await gateway.generate(build_prompt(request), request.model, api_key)
    return extract_book(raw)


def main():
    parser = argparse.ArgumentParser(
        description="Generate a personalized children's fairy tale book",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli/generate_book.py --name "Мария" --age 5 --gender girl --topic "море"
    python cli/generate_book.py --name "Иван" --age 4 --gender boy --topic "space" -o ivan.json
        """,
    )

    parser.add_argument("--name", required=True, help="Child's name (main character)")
    parser.add_argument("--age", type=int, required=True, help="Child's age in years")
    parser.add_argument("--gender", required=True, choices=["boy", "girl"], help="Child's gender")
    parser.add_argument("--topic", required=True, help="Theme or setting of the story")
    parser.add_argument("--model", default=None, help="Model ID (default: configured model)")

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the book JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--prompt-only",
        action="store_true",
        help="Print the generated prompt and exit without calling the model",
    )

    args = parser.parse_args()
    settings = get_settings()

    try:
        request = validate_request(
            {
                "name": args.name,
                "age": args.age,
                "gender": args.gender,
                "topic": args.topic,
                "model": args.model,
            },
            settings.default_model,
        )
    except BookServiceError as e:
        print(f"Error: {e.error}", file=sys.stderr)
        sys.exit(2)

    if args.prompt_only:
        print(build_prompt(request))
        return

    if not settings.gemini_api_key:
        print("Error: GEMINI_API_KEY is not set. Set it in the environment or .env file.", file=sys.stderr)
        sys.exit(1)

    try:
        book = asyncio.run(generate(request, settings.gemini_api_key))
    except BookServiceError as e:
        details = f" ({e.details})" if e.details else ""
        print(f"Error: {e.error}{details}", file=sys.stderr)
        sys.exit(1)
    except GatewayTransportError as e:
        print(f"Error: generation backend call failed: {e}", file=sys.stderr)
        sys.exit(1)

    formatted = json.dumps(book, ensure_ascii=False, indent=2)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(formatted, encoding="utf-8")
        print(f"Book saved to: {output_path} ({len(book['scenes'])} scenes)")
    else:
        print(formatted)


if __name__ == "__main__":
    main()
