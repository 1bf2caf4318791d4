"""Concept-explanation parser."""

from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum

from .base import ExplanationRecord, ParserSettings
from .scanner import Extraction, SectionRule, flush, paragraph_fallback, scan_sections, section_rule
from .text import clean_inline, clean_items, clean_terms, collapse_whitespace

logger = logging.getLogger(__name__)


class ExplanationSection(Enum):
    MAIN = "main"
    DETAILED = "detailed"
    EXAMPLES = "examples"
    ANALOGY = "analogy"
    TERMS = "terms"
    STUDY = "study"
    TRICKS = "tricks"
    REVIEW = "review"


def build_explanation_rules(settings: ParserSettings) -> list[SectionRule]:
    # Order matters: "Key Takeaway" must reach MAIN before REVIEW's "Key Takeaways".
    return [
        section_rule(
            ExplanationSection.MAIN,
            ["Main Idea", r"Main Points?", "The Big Picture", "Key Takeaway"],
            min_length=settings.main_point_min_length,
            limit=settings.main_point_limit,
        ),
        section_rule(
            ExplanationSection.DETAILED,
            [
                "Detailed Explanation",
                "More Detail",
                "Breaking It Down",
                "Full Explanation",
                "Simple Definition",
                "In Simple Terms",
            ],
            min_length=settings.detail_min_length,
        ),
        section_rule(
            ExplanationSection.EXAMPLES,
            [r"Real[- ]?World Examples?", "Examples?", "In Real Life"],
            Extraction.ITEMS_OR_TEXT,
        ),
        section_rule(
            ExplanationSection.ANALOGY,
            ["Analogy", "Think Of It Like", "Easy Way To Remember"],
            Extraction.TEXT,
        ),
        section_rule(
            ExplanationSection.TERMS,
            [r"Key Terms?", r"Important (?:Words|Terms|Vocabulary)"],
            Extraction.TERMS,
        ),
        section_rule(
            ExplanationSection.STUDY,
            [r"Study Tips?", "How To Study", "Ways To Learn", "Study Strategies"],
            min_length=settings.tip_min_length,
        ),
        section_rule(
            ExplanationSection.TRICKS,
            [r"Common (?:Tricks|Mistakes|Misconceptions)", "Watch Out For", "Teacher Tricks", r"Tricky Parts?"],
            min_length=settings.tip_min_length,
        ),
        section_rule(
            ExplanationSection.REVIEW,
            ["Quick Review", "Remember", r"Key (?:Points?|Takeaways?)"],
            min_length=settings.tip_min_length,
        ),
    ]


class ExplanationParser:
    """Parse an explain-this-concept response into an :class:`ExplanationRecord`."""

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()
        self._rules = build_explanation_rules(self.settings)

    def parse(self, text: str) -> ExplanationRecord:
        cleaned = clean_inline(text)
        if not cleaned:
            return ExplanationRecord()

        collected: dict[ExplanationSection, list] = defaultdict(list)
        for section in scan_sections(cleaned, self._rules):
            if section.rule is not None:
                collected[section.rule.section].extend(flush(section))

        main_points = collected[ExplanationSection.MAIN]
        detailed_points = collected[ExplanationSection.DETAILED]
        if not main_points and not detailed_points:
            logger.debug("No main or detailed section found; falling back to paragraphs")
            main_points, detailed_points = paragraph_fallback(
                cleaned,
                self._rules,
                lead_min_length=self.settings.main_point_min_length,
                lead_limit=self.settings.main_point_limit,
                rest_min_length=self.settings.detail_min_length,
            )

        analogy = collapse_whitespace(" ".join(clean_items(collected[ExplanationSection.ANALOGY])))

        return ExplanationRecord(
            main_points=clean_items(main_points),
            detailed_points=clean_items(detailed_points),
            real_world_examples=clean_items(collected[ExplanationSection.EXAMPLES]),
            analogy=analogy,
            key_terms=clean_terms(collected[ExplanationSection.TERMS]),
            study_tips=clean_items(collected[ExplanationSection.STUDY]),
            common_tricks=clean_items(collected[ExplanationSection.TRICKS]),
            quick_review=clean_items(collected[ExplanationSection.REVIEW]),
        )
