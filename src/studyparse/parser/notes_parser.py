"""Study-notes parser."""

from __future__ import annotations

import logging
import re
from enum import Enum

from .base import KeyTerm, NotesRecord, NotesSection, ParserSettings
from .text import (
    clean_inline,
    clean_items,
    clean_terms,
    collapse_whitespace,
    is_list_item,
    normalize,
    parse_term_line,
    strip_list_marker,
)

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"^(?:#{1,6}\s*|Title\s*:\s*)(?P<title>.+)$", re.IGNORECASE)
_HEADING_RE = re.compile(r"^(?:#{1,6}\s*|Section\b\s*\d*\s*[:.)\-–]?\s*|[IVX]+\.\s+)(?P<title>.+)$", re.IGNORECASE)
_TERMS_HEADER_RE = re.compile(r"^(?:Key\s+Terms?|Vocabulary|Glossary)\s*(?::\s*(?P<rest>.*))?$", re.IGNORECASE)
_INLINE_TERM_RE = re.compile(r"^(?:Key\s+Term|Term)\s*:\s*(?P<rest>.+)$", re.IGNORECASE)
_SUMMARY_RE = re.compile(r"^Summary\s*(?::\s*(?P<rest>.*))?$", re.IGNORECASE)


class NotesBlock(Enum):
    SECTION = "section"
    TERMS = "terms"
    SUMMARY = "summary"


class NotesParser:
    """Parse generated study notes into a :class:`NotesRecord`.

    Headings (``#``, ``Section n:``, ``I.``) open sections; a ``Key Terms``
    heading collects ``term: definition`` lines and a ``Summary`` heading or
    ``Summary:`` line fills the summary. Content seen before any heading lands
    in a default section.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()

    def parse(self, text: str) -> NotesRecord:
        cleaned = clean_inline(text)
        lines = [line.strip() for line in cleaned.split("\n") if line.strip()]

        title = ""
        sections: list[tuple[str, list[str]]] = []
        current: tuple[str, list[str]] | None = None
        key_terms: list[KeyTerm] = []
        summary_parts: list[str] = []
        block = NotesBlock.SECTION

        for index, line in enumerate(lines):
            listed = is_list_item(line)

            if not title and not listed and not sections and current is None:
                title_match = _TITLE_RE.match(line)
                candidate = title_match.group("title") if title_match else line
                if (title_match or index == 0) and not _is_block_label(candidate):
                    title = candidate
                    continue

            if not listed:
                heading = _HEADING_RE.match(line)
                label = heading.group("title").strip() if heading else line

                terms_header = _TERMS_HEADER_RE.match(label)
                summary_header = _SUMMARY_RE.match(label)
                inline_term = _INLINE_TERM_RE.match(label)

                if terms_header and not terms_header.group("rest"):
                    _close_section(sections, current)
                    current = None
                    block = NotesBlock.TERMS
                    continue
                if summary_header:
                    rest = (summary_header.group("rest") or "").strip()
                    if rest:
                        summary_parts = [rest]
                    else:
                        _close_section(sections, current)
                        current = None
                        block = NotesBlock.SUMMARY
                    continue
                if inline_term or terms_header:
                    match = inline_term or terms_header
                    term = parse_term_line(match.group("rest"))
                    if term is not None:
                        key_terms.append(term)
                    continue
                if heading:
                    _close_section(sections, current)
                    current = (label, [])
                    block = NotesBlock.SECTION
                    continue

            if block is NotesBlock.TERMS:
                term = parse_term_line(line)
                if term is not None:
                    key_terms.append(term)
                continue

            if block is NotesBlock.SUMMARY:
                summary_parts.append(strip_list_marker(line))
                continue

            content = strip_list_marker(line)
            if not content:
                continue
            if current is not None:
                current[1].append(content)
            elif not sections:
                logger.debug("Content before any heading; opening default section")
                current = (self.settings.default_notes_section, [content])

        _close_section(sections, current)

        title = collapse_whitespace(normalize(title))
        if not title and sections:
            title = self.settings.default_notes_title

        summary = collapse_whitespace(normalize(" ".join(summary_parts)))
        return NotesRecord(
            title=title,
            sections=tuple(
                NotesSection(title=collapse_whitespace(normalize(name)), content=clean_items(points))
                for name, points in sections
            ),
            key_terms=clean_terms(key_terms),
            summary=summary or None,
        )


def _close_section(sections: list[tuple[str, list[str]]], current: tuple[str, list[str]] | None) -> None:
    if current is not None:
        sections.append(current)


def _is_block_label(line: str) -> bool:
    return bool(_TERMS_HEADER_RE.match(line) or _SUMMARY_RE.match(line) or _INLINE_TERM_RE.match(line))
