#!/usr/bin/env python3
"""Terminal-based CLI for previewing how Text2Deck will chunk a text."""

import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from core.config import get_default_max_chars, get_default_max_words, get_max_slides
from core.errors import Text2DeckError
from core.slide_plan import build_plan
from core.splitter import (
    EmptyLineSplitter,
    MaxCharsSplitter,
    MaxWordsSplitter,
    NewLineSplitter,
    Splitter,
    describe_splitters,
    dump_splitter,
)


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  Text2Deck CLI")
    print("  Preview slide chunks before creating a deck")
    print("=" * 60)


def print_help() -> None:
    """Print available commands."""
    print("""
Available Commands:
  split     - Split a text file and show one chunk per slide
  plan      - Show the Slides batchUpdate request for a text file
  splitters - List the available splitting strategies
  help      - Show this help message
  exit      - Exit the application
  quit      - Exit the application
""")


def show_splitters() -> None:
    """Display the splitter catalogue."""
    catalogue = describe_splitters(get_default_max_words(), get_default_max_chars())
    print(f"\nSplitters ({len(catalogue)} available)")
    print("-" * 50)
    for i, item in enumerate(catalogue, 1):
        print(f"\n{i}. {item['name']} [{item['type']}]")
        print(f"   {item['description']}")
        for key, value in item.get("config", {}).items():
            print(f"   {key}: {value}")


def read_limit(prompt: str, default: int) -> int:
    raw = input(f"{prompt} [{default}]: ").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"Not a number, using {default}")
        return default
    if value < 1:
        print(f"Must be at least 1, using {default}")
        return default
    return value


def get_splitter_choice() -> Splitter:
    """Prompt user for splitter selection."""
    print("\nSelect splitter:")
    print("  1. New line (default)")
    print("  2. Empty line (paragraphs)")
    print("  3. Max words")
    print("  4. Max characters")

    choice = input("\nEnter choice [1]: ").strip()

    if choice == "2":
        return EmptyLineSplitter()
    elif choice == "3":
        return MaxWordsSplitter(max_words=read_limit("Max words", get_default_max_words()))
    elif choice == "4":
        return MaxCharsSplitter(max_chars=read_limit("Max characters", get_default_max_chars()))
    return NewLineSplitter()


def read_text() -> str | None:
    """Ask for a text file and return its contents."""
    print("\nPath to a UTF-8 text file:")
    raw_path = input("> ").strip()
    if not raw_path:
        print("Error: Please provide a file path.")
        return None

    path = Path(raw_path).expanduser()
    if not path.is_file():
        print(f"Error: File not found: {path}")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        print(f"Error: {path} is not valid UTF-8 text")
        return None


def preview(plan_only: bool = False) -> None:
    """Split a file interactively and print the chunks or the batch plan."""
    print("\n" + "-" * 40)
    print("Preview Batch Plan" if plan_only else "Preview Chunks")
    print("-" * 40)

    text = read_text()
    if text is None:
        return

    splitter = get_splitter_choice()

    try:
        chunks = splitter.split(text)
    except Text2DeckError as e:
        print(f"\nError: {e}")
        return

    print(f"\nSplitter: {json.dumps(dump_splitter(splitter))}")
    print(f"Slides: {len(chunks)}")
    if not chunks:
        print("Warning: this text produces no slides.")
        return
    if len(chunks) > get_max_slides():
        print(f"Warning: more than {get_max_slides()} slides, the API will refuse this.")

    if plan_only:
        plan = build_plan(chunks)
        print(json.dumps(plan.to_batch_update(), indent=2, ensure_ascii=False))
        return

    for i, chunk in enumerate(chunks, 1):
        first_line = chunk.splitlines()[0] if chunk else ""
        suffix = "..." if len(first_line) > 70 or "\n" in chunk else ""
        print(f"  {i:3d}. {first_line[:70]}{suffix}")


def main() -> None:
    """Main CLI loop."""
    # Load environment variables
    load_dotenv()

    print_header()
    print_help()

    while True:
        try:
            command = input("\ntext2deck> ").strip().lower()

            if command in ("exit", "quit", "q"):
                print("\nGoodbye!")
                sys.exit(0)

            elif command in ("help", "h", "?"):
                print_help()

            elif command == "splitters":
                show_splitters()

            elif command == "split":
                preview(plan_only=False)

            elif command == "plan":
                preview(plan_only=True)

            elif command == "":
                continue

            else:
                print(f"Unknown command: {command}")
                print("Type 'help' for available commands.")

        except KeyboardInterrupt:
            print("\n\nInterrupted. Type 'exit' to quit.")
        except EOFError:
            print("\nGoodbye!")
            sys.exit(0)


if __name__ == "__main__":
    main()
