from __future__ import annotations

from typing import Iterable

# Applied in order, as plain case-sensitive substring replacements.
REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("MS in Computer Science", "Masters in Computer Science"),
    ("BS in Computer Science", "Bachelors in Computer Science"),
)


def normalize(raw_text: str, replacements: Iterable[tuple[str, str]] = REPLACEMENTS) -> str:
    """Rewrite abbreviated values across the whole file before it is parsed."""
    text = raw_text
    for old, new in replacements:
        text = text.replace(old, new)
    return text


def collapse_list(value: str) -> str:
    """
    Turn a comma-separated cell into one item per line.

    Whitespace runs become a single space first, so "Math 101,  CS 201 ,CS305"
    becomes "Math 101\\n CS 201 \\nCS305". Items are trimmed when rendered.
    """
    return "\n".join(" ".join(value.split()).split(","))
