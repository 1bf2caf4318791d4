"""Line-by-line section scanner shared by the explanation, notes and summary parsers.

A parser describes its sections as a table of :class:`SectionRule` objects.
:func:`scan_sections` walks the lines once: a line that starts with one of a
rule's trigger phrases closes the buffered section and opens the rule's
section, any other line is buffered. :func:`flush` then turns each buffered
section into content according to the rule's :class:`Extraction` kind.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .base import KeyTerm
from .text import collapse_whitespace, list_items, parse_term_line, split_paragraphs, split_sentences, strip_list_marker


class Extraction(Enum):
    POINTS = "points"
    ITEMS_OR_TEXT = "items_or_text"
    TEXT = "text"
    TERMS = "terms"


@dataclass(frozen=True, slots=True)
class SectionRule:
    section: Enum
    pattern: re.Pattern[str]
    extraction: Extraction = Extraction.POINTS
    min_length: int = 10
    limit: int | None = None

    def match(self, line: str) -> str | None:
        """Return the text trailing the trigger phrase, or ``None`` if *line* is not a trigger."""
        m = self.pattern.match(line)
        if not m:
            return None
        return m.group("rest").strip()


def section_rule(
    section: Enum,
    phrases: Sequence[str],
    extraction: Extraction = Extraction.POINTS,
    *,
    min_length: int = 10,
    limit: int | None = None,
) -> SectionRule:
    """Build a rule whose trigger is any of *phrases* (regex fragments) at line start.

    Heading markers before the phrase, a parenthetical aside after it and a
    ``:``/dash separator are all skipped.
    """
    alternatives = "|".join(phrases)
    pattern = re.compile(
        rf"^(?:#{{1,6}}\s*)?(?:{alternatives})\b\s*(?:\([^)]*\))?\s*[:\-–—]?\s*(?P<rest>.*)$",
        re.IGNORECASE,
    )
    return SectionRule(section=section, pattern=pattern, extraction=extraction, min_length=min_length, limit=limit)


@dataclass(slots=True)
class ScannedSection:
    rule: SectionRule | None
    lines: list[str] = field(default_factory=list)
    rest: str = ""


def match_rule(line: str, rules: Sequence[SectionRule]) -> tuple[SectionRule, str] | None:
    for rule in rules:
        rest = rule.match(line)
        if rest is not None:
            return rule, rest
    return None


def scan_sections(text: str, rules: Sequence[SectionRule]) -> list[ScannedSection]:
    """Split *text* into sections; lines before the first trigger form a rule-less preamble."""
    sections: list[ScannedSection] = []
    current = ScannedSection(rule=None)

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        hit = match_rule(line, rules)
        if hit is None:
            current.lines.append(line)
            continue

        if current.rule is not None or current.lines:
            sections.append(current)
        rule, rest = hit
        current = ScannedSection(rule=rule, lines=[rest] if rest else [], rest=rest)

    if current.rule is not None or current.lines:
        sections.append(current)
    return sections


# ---------------------------------------------------------------------------
# Flushing
# ---------------------------------------------------------------------------

def flush(section: ScannedSection) -> list:
    """Convert a buffered section into a list of strings (or key terms for TERMS rules)."""
    rule = section.rule
    if rule is None:
        return []
    if rule.extraction is Extraction.POINTS:
        return extract_points(section.lines, min_length=rule.min_length, limit=rule.limit)
    if rule.extraction is Extraction.ITEMS_OR_TEXT:
        return list_items(section.lines) or _as_list(extract_text(section.lines))
    if rule.extraction is Extraction.TEXT:
        return _as_list(extract_text(section.lines))
    return extract_terms(section.lines)


def extract_points(lines: Sequence[str], *, min_length: int, limit: int | None = None) -> list[str]:
    items = list_items(lines)
    if items:
        return items
    sentences = split_sentences(" ".join(lines), min_length)
    return sentences[:limit] if limit is not None else sentences


def extract_text(lines: Iterable[str]) -> str:
    return collapse_whitespace(" ".join(strip_list_marker(line) for line in lines))


def extract_terms(lines: Iterable[str]) -> list[KeyTerm]:
    terms = []
    for line in lines:
        term = parse_term_line(line)
        if term is not None:
            terms.append(term)
    return terms


def _as_list(text: str) -> list[str]:
    return [text] if text else []


# ---------------------------------------------------------------------------
# Whole-text fallback
# ---------------------------------------------------------------------------

def paragraph_fallback(
    text: str,
    rules: Sequence[SectionRule],
    *,
    lead_min_length: int,
    lead_limit: int,
    rest_min_length: int,
) -> tuple[list[str], list[str]]:
    """Derive (lead sentences, remaining sentences) from blank-line paragraphs.

    Trigger phrases are dropped first so a heading never becomes a sentence;
    text trailing a trigger on the same line is kept.
    """
    kept = []
    for line in text.split("\n"):
        hit = match_rule(line.strip(), rules) if line.strip() else None
        kept.append(hit[1] if hit else line)

    paragraphs = split_paragraphs("\n".join(kept))
    if not paragraphs:
        return [], []

    lead = split_sentences(paragraphs[0], lead_min_length)[:lead_limit]
    rest = [sentence for paragraph in paragraphs[1:] for sentence in split_sentences(paragraph, rest_min_length)]
    return lead, rest
