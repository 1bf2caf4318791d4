"""studyparse CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from studyparse.parser import (
    ExplanationParser,
    FeatureType,
    FlashcardParser,
    NotesParser,
    ParserSettings,
    QuizParser,
    SolverStepParser,
    SummaryParser,
)
from studyparse.parser.base import Parser, StudyRecord
from studyparse.renderer import MarkdownRenderer, dump_record

logger = logging.getLogger(__name__)

EMPTY_RECORD_MESSAGE = "Could not parse the response, please try again."


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("feature", type=click.Choice([feature.value for feature in FeatureType], case_sensitive=False))
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "markdown"], case_sensitive=False),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--hide-answers", is_flag=True, help="Leave quiz answers and flashcard backs out of Markdown output")
@click.option("--verbose", "-v", is_flag=True, help="Log parser decisions to stderr")
def main(
    feature: str,
    input_path: Path,
    output: Path | None,
    output_format: str,
    hide_answers: bool,
    verbose: bool,
) -> None:
    """Parse a saved model response for FEATURE into a structured record.

    INPUT_PATH may be - to read the response from stdin.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = _read_input(input_path)
    parser = _select_parser(FeatureType(feature.lower()), ParserSettings())
    record = parser.parse(text)
    if record.is_empty:
        raise click.ClickException(EMPTY_RECORD_MESSAGE)

    if output_format.lower() == "markdown":
        rendered = MarkdownRenderer().render(record, show_answers=not hide_answers)
    else:
        rendered = dump_record(record) + "\n"

    if output is None:
        click.echo(rendered, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    logger.debug("Wrote %s record to %s", feature, output)
    click.echo(f"Parsed: {output}")


def _read_input(input_path: Path) -> str:
    try:
        with click.open_file(str(input_path), encoding="utf-8") as handle:
            return handle.read()
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"Input is not UTF-8 text: {input_path.name}") from exc


def _select_parser(feature: FeatureType, settings: ParserSettings) -> Parser[StudyRecord]:
    if feature is FeatureType.EXPLANATION:
        return ExplanationParser(settings)
    if feature is FeatureType.QUIZ:
        return QuizParser(settings)
    if feature is FeatureType.FLASHCARDS:
        return FlashcardParser()
    if feature is FeatureType.NOTES:
        return NotesParser(settings)
    if feature is FeatureType.SOLVER:
        return SolverStepParser(settings)
    if feature is FeatureType.SUMMARY:
        return SummaryParser(settings)
    raise click.ClickException(f"Unsupported feature: {feature.value}")


if __name__ == "__main__":  # pragma: no cover
    main()
