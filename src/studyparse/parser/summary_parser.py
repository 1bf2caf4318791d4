"""Summary parser."""

from __future__ import annotations

import logging
from enum import Enum

from .base import KeyTerm, ParserSettings, SummaryRecord
from .scanner import Extraction, extract_terms, paragraph_fallback, scan_sections, section_rule
from .text import clean_items, clean_terms, collapse_whitespace, normalize

logger = logging.getLogger(__name__)


class SummarySection(Enum):
    MAIN = "main"
    TERMS = "terms"
    POINTS = "points"
    CONNECTIONS = "connections"


_SUMMARY_RULES = [
    section_rule(SummarySection.MAIN, ["Main Idea", r"Summary(?=\s*(?::|$))"], Extraction.TEXT),
    section_rule(SummarySection.TERMS, [r"Key Terms?", "Vocabulary"], Extraction.TERMS),
    section_rule(SummarySection.POINTS, [r"Key Points?", "Important"]),
    section_rule(SummarySection.CONNECTIONS, [r"Connections?", r"Relat\w*"]),
]


class SummaryParser:
    """Parse a summarizer response into a :class:`SummaryRecord`.

    Text before the first heading belongs to the main-idea section. Only
    ``Main Idea`` / ``Summary`` headings carry inline text.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()

    def parse(self, text: str) -> SummaryRecord:
        cleaned = normalize(text)
        if not cleaned:
            return SummaryRecord()

        main_idea = ""
        points: list[str] = []
        key_terms: list[KeyTerm] = []
        connections: list[str] = []

        for section in scan_sections(cleaned, _SUMMARY_RULES):
            tag = section.rule.section if section.rule is not None else SummarySection.MAIN
            # Heading-line text only counts for the main idea.
            lines = section.lines[1:] if section.rest else section.lines

            if tag is SummarySection.MAIN:
                if section.rest:
                    main_idea = section.rest
                for line in lines:
                    if not main_idea:
                        main_idea = line
                    else:
                        points.append(line)
            elif tag is SummarySection.TERMS:
                key_terms.extend(extract_terms(lines))
            elif tag is SummarySection.POINTS:
                points.extend(lines)
            else:
                connections.extend(lines)

        if not main_idea and not points:
            logger.debug("No main idea or points found; falling back to paragraphs")
            lead, rest = paragraph_fallback(
                cleaned,
                _SUMMARY_RULES,
                lead_min_length=self.settings.main_point_min_length,
                lead_limit=1,
                rest_min_length=self.settings.main_point_min_length,
            )
            main_idea = lead[0] if lead else ""
            points = rest

        return SummaryRecord(
            main_idea=collapse_whitespace(main_idea),
            points=clean_items(points),
            key_terms=clean_terms(key_terms),
            connections=clean_items(connections),
        )
