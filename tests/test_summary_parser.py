"""Tests for the summary parser."""

from __future__ import annotations

from studyparse.parser.base import KeyTerm, SummaryRecord
from studyparse.parser.summary_parser import SummaryParser


def test_labelled_summary() -> None:
    text = """\
**Main Idea:** The water cycle moves water around Earth.

**Key Points:**
- Evaporation lifts water into the air
- Condensation forms clouds

**Key Terms:**
- Precipitation: water falling from clouds
- Runoff

**Connections:**
- Links to weather patterns
"""
    record = SummaryParser().parse(text)

    assert record == SummaryRecord(
        main_idea="The water cycle moves water around Earth.",
        points=("Evaporation lifts water into the air", "Condensation forms clouds"),
        key_terms=(KeyTerm(term="Precipitation", definition="water falling from clouds"),),
        connections=("Links to weather patterns",),
    )


def test_unlabelled_lines_fill_main_idea_then_points() -> None:
    text = "Volcanoes form where magma reaches the surface.\nThey are common at plate boundaries.\nSome are dormant for centuries."
    record = SummaryParser().parse(text)

    assert record.main_idea == "Volcanoes form where magma reaches the surface."
    assert record.points == ("They are common at plate boundaries.", "Some are dormant for centuries.")


def test_summary_heading_and_related_section() -> None:
    text = "## Summary\nPhotosynthesis feeds nearly every food chain.\n\nRelated topics:\n- Respiration\n- Food webs"
    record = SummaryParser().parse(text)

    assert record.main_idea == "Photosynthesis feeds nearly every food chain."
    assert record.points == ()
    assert record.connections == ("Respiration", "Food webs")


def test_trigger_lines_carry_no_content_outside_main() -> None:
    record = SummaryParser().parse("Main Idea: Rivers shape valleys.\nImportant: erosion\n- Rivers carve rock over time")
    assert record.points == ("Rivers carve rock over time",)


def test_empty_input() -> None:
    assert SummaryParser().parse("") == SummaryRecord()


def test_summary_word_in_prose_is_not_a_heading() -> None:
    record = SummaryParser().parse("Summary of Photosynthesis\nPlants make sugar from light.")

    assert record.main_idea == "Summary of Photosynthesis"
    assert record.points == ("Plants make sugar from light.",)


def test_paragraph_fallback_when_only_connections_exist() -> None:
    text = (
        "Connections:\nPhotosynthesis links to respiration. Both cycle carbon.\n\n"
        "Energy from sunlight ends up in food chains."
    )
    record = SummaryParser().parse(text)

    assert record.main_idea == "Photosynthesis links to respiration"
    assert record.points == ("Energy from sunlight ends up in food chains",)
    assert len(record.connections) == 2
