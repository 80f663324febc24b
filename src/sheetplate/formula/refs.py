"""
Cell reference extraction from formula text.

Three lexical shapes are recognised:
- Cell reference: A1, Sheet1!B2, 'My Sheet'!C3
- Area reference: two cell references joined by ':' (A1:B10, Sheet1!A1:A5)
- Jointed reference: U_(F8,F13), a synthetic operand combining several cells
  whose values are pre-combined by the template

Matching is left to right and order preserving. None or empty input yields an
empty list. Cell references inside a jointed span are not reported by
get_formula_cell_refs; use get_jointed_cell_refs and
get_cell_refs_from_jointed_cell_ref to read those.
"""

import re
from typing import Iterator, List, Optional

from sheetplate.spreadsheet.model import CellRef


SIMPLE_CELL_REF = r"[a-zA-Z]+[0-9]+"
CELL_REF = (
    r"([a-zA-Z]+[a-zA-Z0-9]*![a-zA-Z]+[0-9]+"
    r"|(?<!\d)[a-zA-Z]+[0-9]+"
    r"|'[^?\\/:'*]+'![a-zA-Z]+[0-9]+)"
)
AREA_REF = CELL_REF + ":" + SIMPLE_CELL_REF
JOINTED_CELL_REF = r"U_\([^)]+\)"
JOINTED_OPEN = "U_("

_cell_ref_pattern = re.compile(CELL_REF)
_area_ref_pattern = re.compile(AREA_REF)
_jointed_cell_ref_pattern = re.compile(JOINTED_CELL_REF)


class _JointedSpanTracker:
    """Tracks whether scan positions lie inside an open jointed span.

    A span is open from the character after ``U_(`` until the next ``)``.
    Positions must be queried in non-decreasing order; the text is walked
    once in total.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._cursor = 0
        self._open = False

    def is_open_at(self, pos: int) -> bool:
        text = self._text
        opener_len = len(JOINTED_OPEN)
        while self._cursor < pos:
            if text.startswith(JOINTED_OPEN, self._cursor):
                # An opener ending after pos is examined again on a later query
                if self._cursor + opener_len > pos:
                    break
                self._open = True
                self._cursor += opener_len
                continue
            if text[self._cursor] == ")":
                self._open = False
            self._cursor += 1
        return self._open


def _scan(text: Optional[str], pattern: re.Pattern, skip_jointed: bool = False) -> Iterator[str]:
    """Yield successive matches of ``pattern`` in ``text``.

    With ``skip_jointed`` a candidate starting inside an open jointed span is
    rejected and the scan resumes one character after the candidate's start,
    so a later, valid match overlapping the rejected candidate is still found.
    """
    if not text:
        return
    spans = _JointedSpanTracker(text) if skip_jointed else None
    pos = 0
    while pos <= len(text):
        match = pattern.search(text, pos)
        if match is None:
            return
        if spans is not None and spans.is_open_at(match.start()):
            pos = match.start() + 1
            continue
        yield match.group()
        pos = match.end() if match.end() > match.start() else match.end() + 1


def get_formula_cell_refs(formula: Optional[str]) -> List[str]:
    """Parse a formula and return the cell references used in it.

    Cell references that are part of a jointed span (``U_(...)``) are excluded.

    Args:
        formula: Formula text, e.g. "B4*(1+C4)"

    Returns:
        Cell references in order of occurrence, e.g. ["B4", "C4"]
    """
    return list(_scan(formula, _cell_ref_pattern, skip_jointed=True))


def get_jointed_cell_refs(formula: Optional[str]) -> List[str]:
    """Parse a formula and return its jointed cell references.

    Jointed cells are several cells combined with the notation
    ``U_(cell1,cell2)`` into a single operand. In "$[SUM(U_(F8,F13))]" the sum
    is computed over both F8 and F13.

    Args:
        formula: Formula text

    Returns:
        Jointed spans verbatim, e.g. ["U_(F8,F13)"]
    """
    return list(_scan(formula, _jointed_cell_ref_pattern))


def get_cell_refs_from_jointed_cell_ref(jointed_cell_ref: Optional[str]) -> List[str]:
    """Return the individual cell references of a jointed span.

    Args:
        jointed_cell_ref: A span such as "U_(F8,F13)"

    Returns:
        Cell references in the span, e.g. ["F8", "F13"]
    """
    return list(_scan(jointed_cell_ref, _cell_ref_pattern))


def formula_contains_jointed_cell_ref(formula: Optional[str]) -> bool:
    """Check whether a formula uses at least one jointed span."""
    if not formula:
        return False
    return _jointed_cell_ref_pattern.search(formula) is not None


def get_area_refs(formula: Optional[str]) -> List[str]:
    """Parse a formula and return its area references (e.g. "A1:A5")."""
    return list(_scan(formula, _area_ref_pattern))


def sheet_name_regex(cell_ref: CellRef) -> str:
    """Return a lookbehind guard for matching ``cell_ref`` in formula text.

    A reference formatted without its sheet name must not match a same-named
    cell that is qualified with another sheet (``Other!A1``).
    """
    return "(?<!!)" if cell_ref.ignore_sheet_name_in_format else ""


def get_strict_cell_name_regex(name: str) -> str:
    """Build a pattern matching the cell name ``name`` as a whole token.

    The name must not be preceded by an uppercase letter nor followed by a
    digit: "A1" matches in "A1+B2" but not in "BA1" or "A10". The name is
    escaped, so quoted sheet names and dots are matched literally.
    """
    return r"(?<![A-Z])" + re.escape(name) + r"(?!\d)"


def count_occurrences(text: str, ch: str) -> int:
    """Count how many times the character ``ch`` occurs in ``text``."""
    return text.count(ch)
