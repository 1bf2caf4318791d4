"""Tests for the Markdown renderer.

Covers:
- Notes, flashcard and solver exports parse back to the same record
- Hidden answers for practice printouts
- Lettered options for multiple-choice questions
"""

from __future__ import annotations

from pathlib import Path

import pytest

from studyparse.parser import (
    ExplanationParser,
    FlashcardParser,
    NotesParser,
    QuizParser,
    SolverStepParser,
    SummaryParser,
)
from studyparse.renderer.markdown_renderer import MarkdownRenderer

NOTES = """\
# Photosynthesis

## Light Reactions
- Occur in the thylakoid
- Produce ATP

## Key Terms
- Chlorophyll: green pigment

Summary: Plants turn light into sugar.
"""

QUIZ = "Question 1: 2+2?\nA) 3\nB) 4\nAnswer: B) 4\nExplanation: basic addition"


def test_notes_export_layout() -> None:
    markdown = MarkdownRenderer().render(NotesParser().parse(NOTES))

    assert markdown == (
        "# Photosynthesis\n"
        "\n"
        "## Light Reactions\n"
        "- Occur in the thylakoid\n"
        "- Produce ATP\n"
        "\n"
        "## Key Terms\n"
        "- Chlorophyll: green pigment\n"
        "\n"
        "## Summary\n"
        "Plants turn light into sugar.\n"
    )


@pytest.mark.parametrize(
    "text",
    [NOTES, "- Stray point one here\n- Stray point two here\n\n## Later\n- More"],
)
def test_notes_export_parses_back(text: str) -> None:
    parser = NotesParser()
    record = parser.parse(text)
    assert parser.parse(MarkdownRenderer().render(record)) == record


def test_flashcard_export_parses_back() -> None:
    parser = FlashcardParser()
    deck = parser.parse("Card 1\nFront: Capital of France\nBack: Paris\n\nCard 2\nFront: Capital of Spain\nBack: Madrid")
    assert parser.parse(MarkdownRenderer().render(deck)) == deck


def test_solver_export_parses_back() -> None:
    parser = SolverStepParser()
    result = parser.parse(
        "Step 1: Subtract 3\nGoal: isolate 2x\n2x = 10\nStep 2\nx = 5\nFinal Answer: x=5"
    )
    markdown = MarkdownRenderer().render(result)

    assert "## Step 1: Subtract 3" in markdown
    assert "## Step 2\n" in markdown
    assert markdown.rstrip().endswith("**Final Answer:** x=5")
    assert parser.parse(markdown) == result


def test_explanation_export_parses_back() -> None:
    text = (
        "Main Idea\n- Energy is conserved\n\nAnalogy: Like money moving between accounts.\n\n"
        "Key Terms\n- Joule: unit of energy\n\nCommon Mistakes\n- Forgetting heat losses"
    )
    parser = ExplanationParser()
    record = parser.parse(text)
    markdown = MarkdownRenderer().render(record)

    assert "## Analogy\nLike money moving between accounts.\n" in markdown
    assert parser.parse(markdown) == record


def test_quiz_shows_lettered_options_and_answers() -> None:
    markdown = MarkdownRenderer().render(QuizParser().parse(QUIZ))

    assert "## Question 1\n2+2?\n" in markdown
    assert "A) 3\nB) 4\n" in markdown
    assert "**Answer:** 4" in markdown
    assert "**Explanation:** basic addition" in markdown


def test_hidden_answers() -> None:
    renderer = MarkdownRenderer()
    quiz = renderer.render(QuizParser().parse(QUIZ), show_answers=False)
    cards = renderer.render(FlashcardParser().parse("Card 1\nFront: Capital of France\nBack: Paris"), show_answers=False)

    assert "Answer" not in quiz
    assert "basic addition" not in quiz
    assert "Capital of France" in cards
    assert "Paris" not in cards


def test_summary_sections() -> None:
    record = SummaryParser().parse("Main Idea: Rivers shape valleys.\nKey Points:\n- Erosion carves rock")
    markdown = MarkdownRenderer().render(record)

    assert "## Main Idea\nRivers shape valleys.\n" in markdown
    assert "## Key Points\n- Erosion carves rock\n" in markdown
    assert "## Connections" not in markdown


def test_custom_template_dir(tmp_path: Path) -> None:
    (tmp_path / "flashcards.md.j2").write_text("{{ record.cards | length }} cards", encoding="utf-8")
    deck = FlashcardParser().parse("Card 1\nFront: a question\nBack: an answer")
    assert MarkdownRenderer(template_dir=tmp_path).render(deck) == "1 cards\n"


def test_unknown_record_type() -> None:
    with pytest.raises(TypeError):
        MarkdownRenderer().render("not a record")  # type: ignore[arg-type]
