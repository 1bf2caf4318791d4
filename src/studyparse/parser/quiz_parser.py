"""Quiz parser plus the answer check used when scoring a quiz."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from .base import ParserSettings, QuestionType, QuizQuestion, QuizRecord
from .text import collapse_whitespace, normalize

logger = logging.getLogger(__name__)

_BLOCK_SPLIT_RE = re.compile(r"(?=^[ \t]*(?:(?:Question|Q)\s*\d+|\d+[.)]\s))", re.IGNORECASE | re.MULTILINE)
_HEADER_RE = re.compile(r"^(?:Question|Q)\s*\d+|^\d+[.)]\s", re.IGNORECASE)
_HEADER_PREFIX_RE = re.compile(r"^(?:(?:Question|Q)\s*\d+|\d+(?=[.):]))?\s*[.):\-–]*\s*", re.IGNORECASE)

_OPTION_RE = re.compile(r"^\(?([A-D])[.):]\s*(.+)$", re.IGNORECASE)
_TRUE_FALSE_RE = re.compile(r"^(True|False)\b", re.IGNORECASE)
_ANSWER_RE = re.compile(r"^(?:Correct\s*Answer|Correct|Answer)\b\s*(?:is\b)?\s*[:\-–]?\s*(?P<rest>.+)$", re.IGNORECASE)
_EXPLANATION_RE = re.compile(r"^(?:Explanation|Why|Reason)\b\s*[:\-–]?\s*(?P<rest>.*)$", re.IGNORECASE)
_ANSWER_LETTER_RE = re.compile(r"^\(?([A-D])(?:[.):]\s*|$)", re.IGNORECASE)

_LETTERS = "ABCD"
_TRUE_FALSE_OPTIONS = ("True", "False")


class QuizParser:
    """Parse a generated practice quiz into a :class:`QuizRecord`.

    Questions without both question text and a correct answer are dropped;
    ids count only the questions that survive.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()

    def parse(self, text: str) -> QuizRecord:
        cleaned = normalize(text)
        if not cleaned:
            return QuizRecord()

        blocks = [block for block in _BLOCK_SPLIT_RE.split(cleaned) if block.strip()]
        # Intro chatter before the first numbered question is not a question.
        if len(blocks) > 1 and not _HEADER_RE.match(blocks[0].strip()):
            blocks = blocks[1:]

        questions: list[QuizQuestion] = []
        for block in blocks:
            question = self._parse_block(block, next_id=len(questions) + 1)
            if question is None:
                continue
            questions.append(question)

        return QuizRecord(questions=tuple(questions))

    def _parse_block(self, block: str, *, next_id: int) -> QuizQuestion | None:
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        if not lines:
            return None

        question_text = _HEADER_PREFIX_RE.sub("", lines[0], count=1).strip()
        body = lines[1:]
        if not question_text and body and not _OPTION_RE.match(body[0]):
            question_text, body = body[0], body[1:]

        if len(question_text) < self.settings.min_question_length:
            logger.debug("Skipping quiz block with no usable question: %r", lines[0])
            return None

        options: list[str] = []
        saw_true_false = False
        raw_answer = ""
        explanation = ""

        for line in body:
            option = _OPTION_RE.match(line)
            if option:
                options.append(option.group(2).strip())
            elif _TRUE_FALSE_RE.match(line):
                saw_true_false = True

            answer = _ANSWER_RE.match(line)
            if answer:
                raw_answer = answer.group("rest").strip()

            why = _EXPLANATION_RE.match(line)
            if why:
                explanation = why.group("rest").strip()

        if raw_answer:
            correct_answer = _resolve_answer(raw_answer, options)
        else:
            correct_answer = _fallback_answer(body)

        if not correct_answer:
            logger.debug("Dropping quiz question without an answer: %r", question_text)
            return None

        if options:
            question_type = QuestionType.MULTIPLE_CHOICE
        elif saw_true_false or correct_answer in _TRUE_FALSE_OPTIONS:
            question_type = QuestionType.TRUE_FALSE
        else:
            question_type = QuestionType.SHORT_ANSWER

        final_options: tuple[str, ...] | None = tuple(options) if options else None
        if question_type is QuestionType.TRUE_FALSE:
            final_options = _TRUE_FALSE_OPTIONS

        return QuizQuestion(
            id=next_id,
            question=collapse_whitespace(question_text),
            type=question_type,
            correct_answer=collapse_whitespace(correct_answer),
            explanation=collapse_whitespace(explanation),
            options=final_options,
        )


def _resolve_answer(raw: str, options: list[str]) -> str:
    """Reduce ``B) 4`` to ``4``, a bare ``B`` to option B's text and ``True, because`` to ``True``."""
    letter = _ANSWER_LETTER_RE.match(raw)
    if letter:
        rest = raw[letter.end():].strip()
        if rest:
            return rest
        index = _LETTERS.index(letter.group(1).upper())
        if index < len(options):
            return options[index]
        return letter.group(1).upper()

    true_false = _TRUE_FALSE_RE.match(raw)
    if true_false:
        return true_false.group(1).capitalize()
    return raw


def _fallback_answer(body: list[str]) -> str:
    for line in reversed(body):
        if _OPTION_RE.match(line) or _EXPLANATION_RE.match(line):
            continue
        return line
    return ""


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def is_answer_correct(correct_answer: str, user_answer: str) -> bool:
    """Lenient answer check used by the quiz screen.

    Case-insensitive; accepts an exact match, a user answer contained in the
    correct answer, or a user answer containing the correct answer's first
    character (so a bare option letter is accepted). A blank answer is wrong.
    """
    correct = correct_answer.lower().strip()
    given = user_answer.lower().strip()
    # Deliberately stricter than the lenient rules below: an empty string is a
    # substring of every answer, so blank input is rejected up front.
    if not given or not correct:
        return False
    return given == correct or given in correct or correct[0] in given


def score_quiz(questions: Iterable[QuizQuestion], answers: Mapping[int, str]) -> int:
    """Count the questions whose answer in *answers* (keyed by question id) is correct."""
    return sum(
        1 for question in questions if is_answer_correct(question.correct_answer, answers.get(question.id, ""))
    )
