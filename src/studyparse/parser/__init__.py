"""Parser package."""

from .base import (
    ExplanationRecord,
    FeatureType,
    Flashcard,
    FlashcardDeck,
    KeyTerm,
    NotesRecord,
    NotesSection,
    ParserSettings,
    QuestionType,
    QuizQuestion,
    QuizRecord,
    SolverResult,
    SolverStep,
    StudyRecord,
    SummaryRecord,
)
from .explanation_parser import ExplanationParser
from .flashcard_parser import FlashcardParser
from .notes_parser import NotesParser
from .quiz_parser import QuizParser, is_answer_correct, score_quiz
from .solver_parser import SolverStepParser
from .summary_parser import SummaryParser
from .text import clean_inline, normalize

__all__ = [
    "ExplanationRecord",
    "FeatureType",
    "Flashcard",
    "FlashcardDeck",
    "KeyTerm",
    "NotesRecord",
    "NotesSection",
    "ParserSettings",
    "QuestionType",
    "QuizQuestion",
    "QuizRecord",
    "SolverResult",
    "SolverStep",
    "StudyRecord",
    "SummaryRecord",
    "ExplanationParser",
    "FlashcardParser",
    "NotesParser",
    "QuizParser",
    "SolverStepParser",
    "SummaryParser",
    "is_answer_correct",
    "score_quiz",
    "clean_inline",
    "normalize",
]
