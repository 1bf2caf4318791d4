"""JSON form of the study records, as handed to the persistence layer."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from studyparse.parser.base import (
    ExplanationRecord,
    FeatureType,
    Flashcard,
    FlashcardDeck,
    KeyTerm,
    NotesRecord,
    NotesSection,
    QuestionType,
    QuizQuestion,
    QuizRecord,
    SolverResult,
    SolverStep,
    StudyRecord,
    SummaryRecord,
)


class RecordDecodeError(ValueError):
    """Raised when stored JSON cannot be turned back into a record."""


def dump_record(record: StudyRecord, *, indent: int | None = 2) -> str:
    """Serialise *record* with camelCase keys and enum values."""
    return json.dumps(_to_json(record), ensure_ascii=False, indent=indent)


def load_record(feature: FeatureType | str, text: str) -> StudyRecord:
    """Rebuild the record for *feature* from :func:`dump_record` output."""
    feature = FeatureType(feature)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordDecodeError(f"Invalid JSON: {exc.msg} (line {exc.lineno})") from exc

    if not isinstance(data, dict):
        raise RecordDecodeError(f"Expected a JSON object for {feature.value}, got {type(data).__name__}")

    try:
        return _LOADERS[feature](data)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise RecordDecodeError(f"Malformed {feature.value} record: {exc!r}") from exc


def _to_json(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): _to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [_to_json(item) for item in value]
    return value


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def _list(data: dict, key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list, got {type(value).__name__}")
    return value


def _strings(data: dict, key: str) -> tuple[str, ...]:
    return tuple(str(item) for item in _list(data, key))


def _terms(data: dict) -> tuple[KeyTerm, ...]:
    terms = []
    for item in _list(data, "keyTerms"):
        # Explanation terms were historically stored as {term, meaning}.
        definition = item["definition"] if "definition" in item else item["meaning"]
        terms.append(KeyTerm(term=str(item["term"]), definition=str(definition)))
    return tuple(terms)


def _load_explanation(data: dict) -> ExplanationRecord:
    return ExplanationRecord(
        main_points=_strings(data, "mainPoints"),
        detailed_points=_strings(data, "detailedPoints"),
        real_world_examples=_strings(data, "realWorldExamples"),
        analogy=str(data.get("analogy") or ""),
        key_terms=_terms(data),
        study_tips=_strings(data, "studyTips"),
        common_tricks=_strings(data, "commonTricks"),
        quick_review=_strings(data, "quickReview"),
    )


def _load_quiz(data: dict) -> QuizRecord:
    questions = []
    for item in _list(data, "questions"):
        options = item.get("options")
        questions.append(
            QuizQuestion(
                id=int(item["id"]),
                question=str(item["question"]),
                type=QuestionType(item["type"]),
                correct_answer=str(item["correctAnswer"]),
                explanation=str(item.get("explanation") or ""),
                options=tuple(str(option) for option in options) if options is not None else None,
            )
        )
    return QuizRecord(questions=tuple(questions))


def _load_flashcards(data: dict) -> FlashcardDeck:
    cards = tuple(
        Flashcard(id=int(item["id"]), front=str(item["front"]), back=str(item["back"]))
        for item in _list(data, "cards")
    )
    return FlashcardDeck(cards=cards)


def _load_notes(data: dict) -> NotesRecord:
    sections = tuple(
        NotesSection(title=str(item["title"]), content=_strings(item, "content")) for item in _list(data, "sections")
    )
    summary = data.get("summary")
    return NotesRecord(
        title=str(data.get("title") or ""),
        sections=sections,
        key_terms=_terms(data),
        summary=str(summary) if summary is not None else None,
    )


def _load_solver(data: dict) -> SolverResult:
    steps = []
    for item in _list(data, "steps"):
        steps.append(
            SolverStep(
                number=int(item["number"]),
                title=str(item["title"]),
                explanation=str(item.get("explanation") or ""),
                goal=item.get("goal"),
                process=item.get("process"),
                result=item.get("result"),
                tip=item.get("tip"),
            )
        )
    return SolverResult(steps=tuple(steps), final_answer=str(data.get("finalAnswer") or ""))


def _load_summary(data: dict) -> SummaryRecord:
    return SummaryRecord(
        main_idea=str(data.get("mainIdea") or ""),
        points=_strings(data, "points"),
        key_terms=_terms(data),
        connections=_strings(data, "connections"),
    )


_LOADERS: dict[FeatureType, Callable[[dict], StudyRecord]] = {
    FeatureType.EXPLANATION: _load_explanation,
    FeatureType.QUIZ: _load_quiz,
    FeatureType.FLASHCARDS: _load_flashcards,
    FeatureType.NOTES: _load_notes,
    FeatureType.SOLVER: _load_solver,
    FeatureType.SUMMARY: _load_summary,
}
