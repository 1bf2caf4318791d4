"""Render parsed study records as Markdown documents."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from studyparse.parser.base import (
    ExplanationRecord,
    FlashcardDeck,
    NotesRecord,
    QuestionType,
    QuizQuestion,
    QuizRecord,
    SolverResult,
    SolverStep,
    StudyRecord,
    SummaryRecord,
)

_TEMPLATE_NAMES: dict[type, str] = {
    ExplanationRecord: "explanation.md.j2",
    QuizRecord: "quiz.md.j2",
    FlashcardDeck: "flashcards.md.j2",
    NotesRecord: "notes.md.j2",
    SolverResult: "solver.md.j2",
    SummaryRecord: "summary.md.j2",
}

_OPTION_LETTERS = "ABCD"
_BLANK_RUN_RE = re.compile(r"\n{3,}")


class MarkdownRenderer:
    """Render study records through the per-feature Markdown templates."""

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).resolve().parent.parent / "template"

        loader = FileSystemLoader(str(template_dir))
        self._env = Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)
        self._env.filters["option_label"] = _option_label
        self._env.globals["step_details"] = _step_details

    def render(self, record: StudyRecord, *, show_answers: bool = True) -> str:
        """Return *record* as Markdown; ``show_answers=False`` hides answers and card backs."""
        template_name = _TEMPLATE_NAMES.get(type(record))
        if template_name is None:
            raise TypeError(f"Cannot render {type(record).__name__}")

        template = self._env.get_template(template_name)
        text = template.render(record=record, show_answers=show_answers)
        return _BLANK_RUN_RE.sub("\n\n", text).strip() + "\n"


def _option_label(question: QuizQuestion, index: int) -> str:
    if question.type is QuestionType.MULTIPLE_CHOICE and index < len(_OPTION_LETTERS):
        return f"{_OPTION_LETTERS[index]}) "
    return "- "


def _step_details(step: SolverStep) -> list[tuple[str, str]]:
    fields = (("Goal", step.goal), ("Process", step.process), ("Result", step.result), ("Tip", step.tip))
    return [(label, value) for label, value in fields if value]
