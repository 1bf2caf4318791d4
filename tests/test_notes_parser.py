"""Tests for the study-notes parser."""

from __future__ import annotations

from studyparse.parser.base import KeyTerm, NotesRecord, NotesSection, ParserSettings
from studyparse.parser.notes_parser import NotesParser

FULL_NOTES = """\
# Photosynthesis

## Light Reactions
- Occur in the **thylakoid**
- Produce ATP

## Calvin Cycle
- Builds glucose in the stroma

## Key Terms
- Chlorophyll: green pigment
- Stroma: fluid in the chloroplast
- not a term line

Summary: Plants turn light into sugar.
"""


def test_full_notes() -> None:
    record = NotesParser().parse(FULL_NOTES)

    assert record.title == "Photosynthesis"
    assert record.sections == (
        NotesSection(title="Light Reactions", content=("Occur in the thylakoid", "Produce ATP")),
        NotesSection(title="Calvin Cycle", content=("Builds glucose in the stroma",)),
    )
    assert record.key_terms == (
        KeyTerm(term="Chlorophyll", definition="green pigment"),
        KeyTerm(term="Stroma", definition="fluid in the chloroplast"),
    )
    assert record.summary == "Plants turn light into sugar."


def test_leading_bullets_go_to_default_section() -> None:
    text = "- Cells are the basic unit of life\n- All organisms are made of cells\n\n## Cell Parts\n- Nucleus holds DNA"
    record = NotesParser().parse(text)

    assert record.title == ParserSettings().default_notes_title
    assert record.sections[0] == NotesSection(
        title="Main Points",
        content=("Cells are the basic unit of life", "All organisms are made of cells"),
    )
    assert record.sections[1] == NotesSection(title="Cell Parts", content=("Nucleus holds DNA",))


def test_plain_title_and_numbered_sections() -> None:
    text = "Cell Biology Notes\nSection 1: Cells\n- Unit of life\nSection 2: Tissues\n- Groups of cells"
    record = NotesParser().parse(text)

    assert record.title == "Cell Biology Notes"
    assert [section.title for section in record.sections] == ["Cells", "Tissues"]
    assert record.sections[1].content == ("Groups of cells",)


def test_inline_term_and_summary_block() -> None:
    text = """\
# Water

## Movement
- Water moves through membranes
Term: Osmosis - movement of water across a membrane

## Summary
Water moves from high to low concentration.
It needs no energy.
"""
    record = NotesParser().parse(text)

    assert record.key_terms == (KeyTerm(term="Osmosis", definition="movement of water across a membrane"),)
    assert record.sections == (NotesSection(title="Movement", content=("Water moves through membranes",)),)
    assert record.summary == "Water moves from high to low concentration. It needs no energy."


def test_custom_default_section_name() -> None:
    record = NotesParser(ParserSettings(default_notes_section="Overview")).parse("- A stray point")
    assert record.sections == (NotesSection(title="Overview", content=("A stray point",)),)


def test_empty_input() -> None:
    assert NotesParser().parse("") == NotesRecord()


def test_terms_only_notes_are_not_empty() -> None:
    record = NotesParser().parse("Key Terms:\n- Osmosis: movement of water")

    assert record.title == ""
    assert record.sections == ()
    assert record.key_terms == (KeyTerm(term="Osmosis", definition="movement of water"),)
    assert not record.is_empty


def test_summary_only_notes_are_not_empty() -> None:
    assert not NotesRecord(summary="Cells are small.").is_empty
    assert NotesRecord(title="Only a title").is_empty
