"""Step-by-step solution parser."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .base import ParserSettings, SolverResult, SolverStep
from .text import collapse_whitespace, normalize, split_paragraphs

logger = logging.getLogger(__name__)

_STEP_RE = re.compile(r"^Step\s*(?P<number>\d+)\b\s*[.:)\-–]?\s*(?P<title>.*)$", re.IGNORECASE)
_NUMBERED_RE = re.compile(r"^(?P<number>\d+)[.:)]\s+(?P<title>.+)$")
_ANSWER_RE = re.compile(r"^(?:Final\s*)?Answer\s*:\s*(?P<answer>.+)$", re.IGNORECASE)
_FIELD_RE = re.compile(r"^(?P<label>Goal|Process|Result|Tip|Note|Hint)\s*:\s*(?P<rest>.*)$", re.IGNORECASE)

_FIELD_NAMES = {
    "goal": "goal",
    "process": "process",
    "result": "result",
    "tip": "tip",
    "note": "tip",
    "hint": "tip",
}


@dataclass(slots=True)
class _StepDraft:
    number: int
    title: str
    parts: dict[str, list[str]] = field(default_factory=dict)
    active: str = "explanation"

    def open(self, name: str, text: str) -> None:
        self.parts[name] = [text] if text else []
        self.active = name

    def append(self, text: str) -> None:
        self.parts.setdefault(self.active, []).append(text)

    def build(self) -> SolverStep:
        def joined(name: str) -> str | None:
            value = collapse_whitespace(" ".join(self.parts.get(name, [])))
            return value or None

        return SolverStep(
            number=self.number,
            title=collapse_whitespace(self.title),
            explanation=joined("explanation") or "",
            goal=joined("goal"),
            process=joined("process"),
            result=joined("result"),
            tip=joined("tip"),
        )


class SolverStepParser:
    """Parse a worked solution into a :class:`SolverResult`.

    ``Final Answer:`` lines are picked up wherever they appear. Responses with
    no recognisable step headers fall back to one step per paragraph.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        self.settings = settings or ParserSettings()

    def parse(self, text: str) -> SolverResult:
        cleaned = normalize(text)
        final_answer = ""
        steps: list[SolverStep] = []
        draft: _StepDraft | None = None

        for raw_line in cleaned.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            answer = _ANSWER_RE.match(line)
            if answer:
                final_answer = collapse_whitespace(answer.group("answer"))
                continue

            header = _STEP_RE.match(line) or _NUMBERED_RE.match(line)
            if header:
                if draft is not None:
                    steps.append(draft.build())
                number = int(header.group("number"))
                draft = _StepDraft(number=number, title=header.group("title").strip() or f"Step {number}")
                continue

            if draft is None:
                continue

            labelled = _FIELD_RE.match(line)
            if labelled:
                draft.open(_FIELD_NAMES[labelled.group("label").lower()], labelled.group("rest").strip())
            else:
                draft.append(line)

        if draft is not None:
            steps.append(draft.build())

        if not steps:
            steps = _paragraph_steps(cleaned)

        return SolverResult(
            steps=tuple(steps),
            final_answer=final_answer or self.settings.final_answer_placeholder,
        )


def _paragraph_steps(text: str) -> list[SolverStep]:
    steps: list[SolverStep] = []
    for paragraph in split_paragraphs(text):
        kept = [line for line in paragraph.split("\n") if not _ANSWER_RE.match(line.strip())]
        explanation = collapse_whitespace(" ".join(kept))
        if not explanation:
            continue
        number = len(steps) + 1
        steps.append(SolverStep(number=number, title=f"Step {number}", explanation=explanation))
    if steps:
        logger.debug("No step headers found; built %d steps from paragraphs", len(steps))
    return steps
