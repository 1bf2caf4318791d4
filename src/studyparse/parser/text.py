"""Markup cleanup and small text-splitting helpers shared by every parser."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .base import KeyTerm

# ---------------------------------------------------------------------------
# Markdown emphasis / code
# ---------------------------------------------------------------------------

_STAR_BULLET_RE = re.compile(r"^([ \t]*)[*+][ \t]+", re.MULTILINE)

_EMPHASIS_PATTERNS = (
    re.compile(r"\*\*\*(.+?)\*\*\*"),
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"(?<![\w*])\*(?![\s*])([^*\n]*?[^\s*])\*(?![\w*])"),
    re.compile(r"(?<!\w)___(.+?)___(?!\w)"),
    re.compile(r"(?<!\w)__(.+?)__(?!\w)"),
    re.compile(r"(?<![\w_])_(?![\s_])([^_\n]*?[^\s_])_(?![\w_])"),
)
_LEFTOVER_STARS_RE = re.compile(r"\*{2,}")

_CODE_FENCE_RE = re.compile(r"`{3,}[\w+-]*")
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")

# ---------------------------------------------------------------------------
# LaTeX-style math
# ---------------------------------------------------------------------------

_MATH_SYMBOLS = {
    "sqrt": "√",
    "cdot": "·",
    "times": "×",
    "div": "÷",
    "pm": "±",
    "mp": "∓",
    "leq": "≤",
    "le": "≤",
    "geq": "≥",
    "ge": "≥",
    "neq": "≠",
    "ne": "≠",
    "approx": "≈",
    "equiv": "≡",
    "infty": "∞",
    "pi": "π",
    "theta": "θ",
    "degree": "°",
    "circ": "°",
    "rightarrow": "→",
    "to": "→",
    "ldots": "…",
    "cdots": "…",
}
_MATH_SYMBOL_RE = re.compile(
    r"\\(" + "|".join(sorted(_MATH_SYMBOLS, key=len, reverse=True)) + r")(?![a-zA-Z])"
)

_WRAPPER_CMD_RE = re.compile(
    r"\\(?:text|textbf|textit|mathrm|mathbf|mathit|boxed|operatorname|emph)\{([^{}]*)\}"
)
_SQRT_CMD_RE = re.compile(r"\\sqrt\{([^{}]*)\}")
_FRAC_CMD_RE = re.compile(r"\\[dt]?frac\{([^{}]*)\}\{([^{}]*)\}")

_MATH_DELIM_RE = re.compile(r"\\[()\[\]]")
_SPACING_ESCAPE_RE = re.compile(r"\\[,;:! \\]")
_ESCAPED_CHAR_RE = re.compile(r"\\([%&#_])")
_ANY_COMMAND_RE = re.compile(r"\\[a-zA-Z]+")
_STRAY_BACKSLASH_RE = re.compile(r"\\")

# ---------------------------------------------------------------------------
# Line prefixes
# ---------------------------------------------------------------------------

_HEADING_PREFIX_RE = re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE)
_BULLET_PREFIX_RE = re.compile(r"^[ \t]*(?:[•▪◦‣][ \t]*|[-–][ \t]+)", re.MULTILINE)
_LIST_MARKER_RE = re.compile(r"^(?:[-–•▪◦‣]\s*|\d+[.)](?!\d)\s*)")

_INLINE_SPACE_RE = re.compile(r"[ \t\u00a0]+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize(raw: str) -> str:
    """Strip presentational markup from a model response.

    Removes emphasis, heading markers, inline code, math escapes (mapping the
    common ones to symbols), braces, dollar signs and leading bullets. Line
    structure and blank-line paragraph breaks are kept. The result is a fixed
    point: ``normalize(normalize(x)) == normalize(x)``.
    """
    return _clean_to_fixed_point(raw, structural=True)


def clean_inline(raw: str) -> str:
    """Like :func:`normalize` but keeps heading markers and bullets."""
    return _clean_to_fixed_point(raw, structural=False)


def _clean_to_fixed_point(raw: str, *, structural: bool) -> str:
    if not raw or not raw.strip():
        return ""
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    while True:
        cleaned = _clean_pass(text, structural=structural)
        if cleaned == text:
            return cleaned
        text = cleaned


def _clean_pass(text: str, *, structural: bool) -> str:
    text = _STAR_BULLET_RE.sub(r"\1- ", text)
    for pattern in _EMPHASIS_PATTERNS:
        text = pattern.sub(r"\1", text)
    text = _LEFTOVER_STARS_RE.sub("", text)

    if structural:
        text = _HEADING_PREFIX_RE.sub("", text)

    text = _CODE_FENCE_RE.sub("", text)
    text = _INLINE_CODE_RE.sub(r"\1", text)
    text = text.replace("`", "")

    text = _unwrap_math_commands(text)
    text = _MATH_SYMBOL_RE.sub(lambda m: _MATH_SYMBOLS[m.group(1)], text)
    text = _MATH_DELIM_RE.sub("", text)
    text = _SPACING_ESCAPE_RE.sub(" ", text)
    text = _ESCAPED_CHAR_RE.sub(r"\1", text)
    text = _ANY_COMMAND_RE.sub("", text)
    text = _STRAY_BACKSLASH_RE.sub("", text)
    text = text.replace("{", "").replace("}", "")
    text = text.replace("$", "")

    if structural:
        text = _BULLET_PREFIX_RE.sub("", text)

    return _tidy_whitespace(text)


def _unwrap_math_commands(text: str) -> str:
    # Innermost first so \frac{\sqrt{2}}{2} collapses fully.
    while True:
        updated = _WRAPPER_CMD_RE.sub(r"\1", text)
        updated = _SQRT_CMD_RE.sub(_replace_sqrt, updated)
        updated = _FRAC_CMD_RE.sub(r"\1/\2", updated)
        if updated == text:
            return text
        text = updated


def _replace_sqrt(match: re.Match[str]) -> str:
    radicand = match.group(1).strip()
    if len(radicand) <= 1 or radicand.isalnum():
        return f"√{radicand}"
    return f"√({radicand})"


def _tidy_whitespace(text: str) -> str:
    lines = [_INLINE_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()


# ---------------------------------------------------------------------------
# Splitting helpers
# ---------------------------------------------------------------------------

def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping empty paragraphs."""
    return [part.strip() for part in re.split(r"\n\s*\n", text) if part.strip()]


def split_sentences(text: str, min_length: int) -> list[str]:
    """Split on terminal punctuation, keeping sentences longer than *min_length*."""
    sentences = re.split(r"[.!?]+(?=\s|$)", collapse_whitespace(text))
    return [s.strip() for s in sentences if len(s.strip()) > min_length]


def is_list_item(line: str) -> bool:
    return bool(_LIST_MARKER_RE.match(line.strip()))


def strip_list_marker(line: str) -> str:
    return _LIST_MARKER_RE.sub("", line.strip(), count=1).strip()


def list_items(lines: Iterable[str]) -> list[str]:
    """Return the bullet / numbered lines of *lines* with their markers removed."""
    items = []
    for line in lines:
        if is_list_item(line):
            item = strip_list_marker(line)
            if item:
                items.append(item)
    return items


_TERM_LINE_RE = re.compile(r"^(?P<term>[^:–—]+?)\s*(?::|[–—]|\s-\s)\s*(?P<definition>.+)$")


def parse_term_line(line: str) -> KeyTerm | None:
    """Parse ``term: definition`` (or an en/em dash or spaced hyphen separator)."""
    match = _TERM_LINE_RE.match(strip_list_marker(line))
    if not match:
        return None
    term = match.group("term").strip()
    definition = match.group("definition").strip()
    if not term or not definition:
        return None
    return KeyTerm(term=term, definition=definition)


def clean_items(items: Iterable[str]) -> tuple[str, ...]:
    """Normalize each item onto a single line, dropping the ones left empty."""
    cleaned = (collapse_whitespace(normalize(item)) for item in items)
    return tuple(item for item in cleaned if item)


def clean_terms(terms: Iterable[KeyTerm]) -> tuple[KeyTerm, ...]:
    cleaned = []
    for term in terms:
        name = collapse_whitespace(normalize(term.term))
        definition = collapse_whitespace(normalize(term.definition))
        if name and definition:
            cleaned.append(KeyTerm(term=name, definition=definition))
    return tuple(cleaned)
