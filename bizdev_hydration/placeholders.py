"""Placeholder tokenizer for outreach templates.

Two placeholder forms are recognised::

    {{firstName}}                 variable, name matches ``\\w+``
    {{snippet:as_you_remember}}   snippet, slug is any run of non-``}``

A template is split once into literal and placeholder segments; callers map
placeholders to values and join the result.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .models import ValidationResult

_PLACEHOLDER_RE = re.compile(
    r"\{\{(?:snippet:(?P<slug>[^}]+)|(?P<name>\w+))\}\}",
    re.ASCII,
)


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class VariableTag:
    name: str
    raw: str


@dataclass(frozen=True)
class SnippetTag:
    """A ``{{snippet:...}}`` tag.  ``slug`` is already trimmed and may be empty."""

    slug: str
    raw: str


Segment = Literal | VariableTag | SnippetTag


def tokenize(template: str) -> list[Segment]:
    """Split *template* into literal, variable and snippet segments."""
    segments: list[Segment] = []
    pos = 0
    for match in _PLACEHOLDER_RE.finditer(template):
        if match.start() > pos:
            segments.append(Literal(template[pos:match.start()]))
        slug = match.group("slug")
        if slug is not None:
            segments.append(SnippetTag(slug=slug.strip(), raw=match.group(0)))
        else:
            segments.append(VariableTag(name=match.group("name"), raw=match.group(0)))
        pos = match.end()
    if pos < len(template):
        segments.append(Literal(template[pos:]))
    return segments


def render(segments: list[Segment], replace: Callable[[Segment], str | None]) -> str:
    """Join *segments*, substituting placeholders.

    *replace* returns the text for a placeholder segment, or ``None`` to keep
    the placeholder as written.
    """
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, Literal):
            parts.append(segment.text)
            continue
        value = replace(segment)
        parts.append(segment.raw if value is None else value)
    return "".join(parts)


def iter_variable_names(template: str) -> Iterator[str]:
    for segment in tokenize(template):
        if isinstance(segment, VariableTag):
            yield segment.name


def extract_variable_names(template: str | None) -> list[str]:
    """Distinct variable names in *template*, in first-seen order."""
    if not template:
        return []
    return list(dict.fromkeys(iter_variable_names(template)))


def validate(content: str | None) -> ValidationResult:
    """Report any ``{{variable}}`` placeholders still present in *content*."""
    missing = list(iter_variable_names(content or ""))
    return ValidationResult(valid=not missing, missing_variables=missing)
