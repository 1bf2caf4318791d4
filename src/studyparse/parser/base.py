"""Core record types produced by the study-content parsers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar


class FeatureType(str, Enum):
    EXPLANATION = "explanation"
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"
    NOTES = "notes"
    SOLVER = "solver"
    SUMMARY = "summary"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Thresholds and default strings shared by the parsers.

    Sentence lengths are exclusive minimums: a sentence must be longer than
    the value to survive a sentence-split fallback.
    """

    main_point_min_length: int = 10
    detail_min_length: int = 15
    tip_min_length: int = 10
    main_point_limit: int = 3
    min_question_length: int = 4
    default_notes_section: str = "Main Points"
    default_notes_title: str = "Study Notes"
    final_answer_placeholder: str = "See final step for the answer."


@dataclass(frozen=True, slots=True)
class KeyTerm:
    term: str
    definition: str


@dataclass(frozen=True, slots=True)
class ExplanationRecord:
    main_points: tuple[str, ...] = ()
    detailed_points: tuple[str, ...] = ()
    real_world_examples: tuple[str, ...] = ()
    analogy: str = ""
    key_terms: tuple[KeyTerm, ...] = ()
    study_tips: tuple[str, ...] = ()
    common_tricks: tuple[str, ...] = ()
    quick_review: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.main_points
            or self.detailed_points
            or self.real_world_examples
            or self.analogy
            or self.key_terms
            or self.study_tips
            or self.common_tricks
            or self.quick_review
        )


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    id: int
    question: str
    type: QuestionType
    correct_answer: str
    explanation: str = ""
    options: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class QuizRecord:
    questions: tuple[QuizQuestion, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.questions


@dataclass(frozen=True, slots=True)
class Flashcard:
    id: int
    front: str
    back: str


@dataclass(frozen=True, slots=True)
class FlashcardDeck:
    cards: tuple[Flashcard, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.cards


@dataclass(frozen=True, slots=True)
class NotesSection:
    title: str
    content: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class NotesRecord:
    title: str = ""
    sections: tuple[NotesSection, ...] = ()
    key_terms: tuple[KeyTerm, ...] = ()
    summary: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.sections or self.key_terms or self.summary)


@dataclass(frozen=True, slots=True)
class SolverStep:
    number: int
    title: str
    explanation: str = ""
    goal: str | None = None
    process: str | None = None
    result: str | None = None
    tip: str | None = None


@dataclass(frozen=True, slots=True)
class SolverResult:
    steps: tuple[SolverStep, ...] = ()
    final_answer: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.steps


@dataclass(frozen=True, slots=True)
class SummaryRecord:
    main_idea: str = ""
    points: tuple[str, ...] = ()
    key_terms: tuple[KeyTerm, ...] = ()
    connections: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.main_idea or self.points or self.key_terms or self.connections)


StudyRecord = ExplanationRecord | QuizRecord | FlashcardDeck | NotesRecord | SolverResult | SummaryRecord

RecordT = TypeVar("RecordT", covariant=True)


class Parser(Protocol[RecordT]):
    def parse(self, text: str) -> RecordT:  # pragma: no cover - structural protocol
        """Parse a model response into a typed record."""
