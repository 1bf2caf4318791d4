"""Tests for the step-by-step solution parser.

Covers:
- Step headers with explanations and a final answer line
- Goal / Process / Result / Tip sub-fields and continuation lines
- Numbers taken from the source text
- Paragraph fallback and the final-answer placeholder
"""

from __future__ import annotations

from studyparse.parser.base import ParserSettings, SolverResult, SolverStep
from studyparse.parser.solver_parser import SolverStepParser

PLACEHOLDER = ParserSettings().final_answer_placeholder


def test_two_steps_and_final_answer() -> None:
    text = "Step 1: Subtract 3 from both sides\n2x = 10\nStep 2: Divide by 2\nx = 5\nFinal Answer: x=5"
    result = SolverStepParser().parse(text)

    assert result == SolverResult(
        steps=(
            SolverStep(number=1, title="Subtract 3 from both sides", explanation="2x = 10"),
            SolverStep(number=2, title="Divide by 2", explanation="x = 5"),
        ),
        final_answer="x=5",
    )


def test_labelled_fields_and_continuations() -> None:
    text = """\
**Step 1: Isolate x**
Goal: Get x alone
Process: Subtract 3
from both sides
Result: 2x = 4
Tip: Check your work
Answer: x = 2
"""
    result = SolverStepParser().parse(text)
    step = result.steps[0]

    assert step.title == "Isolate x"
    assert step.goal == "Get x alone"
    assert step.process == "Subtract 3 from both sides"
    assert step.result == "2x = 4"
    assert step.tip == "Check your work"
    assert step.explanation == ""
    assert result.final_answer == "x = 2"


def test_note_and_hint_fill_tip() -> None:
    result = SolverStepParser().parse("Step 1: Read carefully\nHint: underline the question")
    assert result.steps[0].tip == "underline the question"


def test_step_numbers_come_from_text() -> None:
    result = SolverStepParser().parse("Step 2: Expand\nx\nStep 5: Simplify\ny")
    assert [step.number for step in result.steps] == [2, 5]


def test_untitled_step_gets_default_title() -> None:
    result = SolverStepParser().parse("Step 1\nAdd the numbers")
    assert result.steps[0].title == "Step 1"
    assert result.steps[0].explanation == "Add the numbers"


def test_numbered_lines_are_steps() -> None:
    result = SolverStepParser().parse("1. Expand the brackets\n2. Collect like terms")
    assert [step.title for step in result.steps] == ["Expand the brackets", "Collect like terms"]


def test_answer_line_inside_step_is_not_explanation() -> None:
    result = SolverStepParser().parse("Step 1: Add\n2 + 3 = 5\nFinal Answer: 5\nDouble-check the sum")
    assert result.final_answer == "5"
    assert result.steps[0].explanation == "2 + 3 = 5 Double-check the sum"


def test_paragraph_fallback() -> None:
    text = "First we expand the brackets.\n\nThen we collect like terms.\n\nThe final answer is 7."
    result = SolverStepParser().parse(text)

    assert result.steps == (
        SolverStep(number=1, title="Step 1", explanation="First we expand the brackets."),
        SolverStep(number=2, title="Step 2", explanation="Then we collect like terms."),
        SolverStep(number=3, title="Step 3", explanation="The final answer is 7."),
    )
    assert result.final_answer == PLACEHOLDER


def test_paragraph_fallback_keeps_text_beside_answer_line() -> None:
    result = SolverStepParser().parse("Subtract 3 from both sides so 2x = 10.\nFinal Answer: x = 5")

    assert result.steps == (
        SolverStep(number=1, title="Step 1", explanation="Subtract 3 from both sides so 2x = 10."),
    )
    assert result.final_answer == "x = 5"


def test_empty_input() -> None:
    result = SolverStepParser().parse("")
    assert result.steps == ()
    assert result.final_answer == PLACEHOLDER
