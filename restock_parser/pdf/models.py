from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedText:
    """A text layer found in a document."""

    text: str


@dataclass(frozen=True)
class TextRun:
    """A piece of page text and the vertical position it was drawn at."""

    text: str
    y: float
