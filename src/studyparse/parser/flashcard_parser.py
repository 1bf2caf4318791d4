"""Flashcard parser."""

from __future__ import annotations

import logging
import re

from .base import Flashcard, FlashcardDeck
from .text import collapse_whitespace, normalize

logger = logging.getLogger(__name__)

_BLOCK_SPLIT_RE = re.compile(r"(?=^[ \t]*(?:(?:Flash)?card\s*\d+|\d+[.)]\s*Front\b))", re.IGNORECASE | re.MULTILINE)
_CARD_PREFIX_RE = re.compile(r"^(?:(?:Flash)?card\s*\d+|\d+[.)])\s*[.):\-–]*\s*", re.IGNORECASE)
_FRONT_RE = re.compile(r"^(?:Front|Question|Q)\s*:\s*(?P<rest>.+)$", re.IGNORECASE)
_BACK_RE = re.compile(r"^(?:Back|Answer|A)\s*:\s*(?P<rest>.+)$", re.IGNORECASE)


class FlashcardParser:
    """Parse ``Card n / Front: / Back:`` blocks into a :class:`FlashcardDeck`."""

    def parse(self, text: str) -> FlashcardDeck:
        cleaned = normalize(text)
        if not cleaned:
            return FlashcardDeck()

        blocks = [block for block in _BLOCK_SPLIT_RE.split(cleaned) if block.strip()]
        if len(blocks) > 1 and not _CARD_PREFIX_RE.match(blocks[0].strip()):
            blocks = blocks[1:]

        cards: list[Flashcard] = []
        for block in blocks:
            sides = _parse_block(block)
            if sides is None:
                logger.debug("Dropping flashcard block without both sides: %r", block[:60])
                continue
            front, back = sides
            cards.append(Flashcard(id=len(cards) + 1, front=front, back=back))

        return FlashcardDeck(cards=tuple(cards))


def _parse_block(block: str) -> tuple[str, str] | None:
    lines = [line.strip() for line in block.split("\n") if line.strip()]
    if not lines:
        return None

    front: list[str] = []
    back: list[str] = []
    active: list[str] | None = None
    labelled = False

    for line in lines:
        unprefixed = _CARD_PREFIX_RE.sub("", line, count=1)
        front_match = _FRONT_RE.match(unprefixed)
        back_match = _BACK_RE.match(unprefixed)
        if front_match:
            front = [front_match.group("rest")]
            active = front
            labelled = True
        elif back_match:
            back = [back_match.group("rest")]
            active = back
            labelled = True
        elif active is not None:
            active.append(line)

    if not labelled and len(lines) >= 2:
        first = _CARD_PREFIX_RE.sub("", lines[0], count=1).strip()
        rest = lines[1:]
        if not first and len(rest) >= 2:
            first, rest = rest[0], rest[1:]
        if first:
            front, back = [first], rest

    front_text = collapse_whitespace(" ".join(front))
    back_text = collapse_whitespace(" ".join(back))
    if not front_text or not back_text:
        return None
    return front_text, back_text
