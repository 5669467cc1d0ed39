"""Text splitting strategies.

A splitter is a small tagged configuration value. The ``type`` field is the
JSON tag, so a splitter received from the web API decodes straight into the
right model:

    {"type": "newline"}
    {"type": "empty_line"}
    {"type": "max_words", "max_words": 50}
    {"type": "max_chars", "max_chars": 500}
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from core.errors import InvalidSplitterError

DEFAULT_MAX_WORDS = 50
DEFAULT_MAX_CHARS = 500


class NewLineSplitter(BaseModel):
    """One chunk per non-blank line."""

    model_config = ConfigDict(frozen=True)

    type: Literal["newline"] = "newline"

    def split(self, text: str) -> list[str]:
        lines = (line.strip() for line in text.split("\n"))
        return [line for line in lines if line]


class EmptyLineSplitter(BaseModel):
    """One chunk per paragraph, paragraphs being separated by blank lines."""

    model_config = ConfigDict(frozen=True)

    type: Literal["empty_line"] = "empty_line"

    def split(self, text: str) -> list[str]:
        paragraphs = (p.strip() for p in text.replace("\r\n", "\n").split("\n\n"))
        return [p for p in paragraphs if p]


class MaxWordsSplitter(BaseModel):
    """Groups whitespace-separated words into chunks of at most ``max_words``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["max_words"] = "max_words"
    max_words: int = Field(default=DEFAULT_MAX_WORDS, ge=0)

    def split(self, text: str) -> list[str]:
        if self.max_words == 0:
            raise InvalidSplitterError("max_words must be greater than zero")

        words = text.split()
        return [
            " ".join(words[i : i + self.max_words])
            for i in range(0, len(words), self.max_words)
        ]


class MaxCharsSplitter(BaseModel):
    """Groups codepoints into chunks of at most ``max_chars``.

    Python strings index by codepoint, so slicing never cuts a multi-byte
    character in half. Chunks are not trimmed; a chunk made only of
    whitespace is dropped.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["max_chars"] = "max_chars"
    max_chars: int = Field(default=DEFAULT_MAX_CHARS, ge=0)

    def split(self, text: str) -> list[str]:
        if self.max_chars == 0:
            raise InvalidSplitterError("max_chars must be greater than zero")

        chunks = (
            text[i : i + self.max_chars] for i in range(0, len(text), self.max_chars)
        )
        return [chunk for chunk in chunks if chunk.strip()]


Splitter = Annotated[
    Union[NewLineSplitter, EmptyLineSplitter, MaxWordsSplitter, MaxCharsSplitter],
    Field(discriminator="type"),
]

_splitter_adapter: TypeAdapter[Any] = TypeAdapter(Splitter)


def parse_splitter(data: dict[str, Any] | str | bytes) -> Splitter:
    """Decode a splitter from its JSON form (a dict or a JSON document)."""
    if isinstance(data, (str, bytes)):
        return _splitter_adapter.validate_json(data)
    return _splitter_adapter.validate_python(data)


def dump_splitter(splitter: Splitter) -> dict[str, Any]:
    """Encode a splitter to its JSON-compatible dict form."""
    return splitter.model_dump(mode="json")


def describe_splitters(
    default_max_words: int = DEFAULT_MAX_WORDS,
    default_max_chars: int = DEFAULT_MAX_CHARS,
) -> list[dict[str, Any]]:
    """Human-readable catalogue of the available strategies."""
    return [
        {
            "type": "newline",
            "name": "New Line Splitter",
            "description": "Splits text by individual lines",
        },
        {
            "type": "empty_line",
            "name": "Empty Line Splitter",
            "description": "Splits text by empty lines (paragraphs)",
        },
        {
            "type": "max_words",
            "name": "Max Words Splitter",
            "description": "Splits text by maximum word count per slide",
            "config": {"max_words": f"number (default: {default_max_words})"},
        },
        {
            "type": "max_chars",
            "name": "Max Characters Splitter",
            "description": "Splits text by maximum character count per slide",
            "config": {"max_chars": f"number (default: {default_max_chars})"},
        },
    ]
