"""
Spreadsheet model classes.

This module provides the value types shared by the formula utilities:
- CellRef: A single cell identified by sheet, row and column
- SortAxis: The two orderings (row precedence, column precedence) used when
  grouping cell references into contiguous ranges
"""

import re
from enum import Enum
from typing import Callable, List, Optional, Tuple


_CELL_PATTERN = re.compile(r"^\$?([A-Z]+)\$?(\d+)$")
_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_.]+$")
_CELL_LIKE_NAME = re.compile(r"^([A-Za-z]{1,3})([0-9]+)$")
_BOOLEAN_LITERALS = ("TRUE", "FALSE")

MAX_COLUMNS = 16384
MAX_ROWS = 1048576


def col_to_letter(col: int) -> str:
    """Convert column number (0-indexed) to letter(s) for A1 notation.

    Args:
        col: Column number (0-indexed: 0 = A, 25 = Z, 26 = AA, etc.)

    Returns:
        Column letter(s) in A1 notation
    """
    col_1indexed = col + 1
    result = ""
    while col_1indexed > 0:
        col_1indexed -= 1
        result = chr(65 + (col_1indexed % 26)) + result
        col_1indexed //= 26
    return result


def letter_to_col(letters: str) -> int:
    """Convert column letter(s) to number (0-indexed).

    Args:
        letters: Column letter(s) in A1 notation (A, Z, AA, etc.)

    Returns:
        Column number (0-indexed: A = 0, Z = 25, AA = 26, etc.)
    """
    col_1indexed = 0
    for char in letters.upper():
        col_1indexed = col_1indexed * 26 + (ord(char) - 64)
    return col_1indexed - 1


class CellRef:
    """Identifies one spreadsheet cell.

    IMPORTANT: CellRef uses 0-indexed coordinates internally (Python convention),
    but renders 1-indexed A1 notation through ``cell_name``.

    CellRef is an immutable value: attributes are read-only, and equality and
    hashing are based on (sheet_name, row, col).

    Attributes:
        sheet_name: Sheet the cell belongs to (None for an unqualified cell)
        row: Row (0-indexed)
        col: Column (0-indexed)
        ignore_sheet_name_in_format: When True, ``cell_name`` omits the sheet
            prefix even if a sheet name is set
    """

    __slots__ = ("_sheet_name", "_row", "_col", "_ignore_sheet_name_in_format")

    def __init__(
        self,
        sheet_name: Optional[str],
        row: int,
        col: int,
        ignore_sheet_name_in_format: bool = False,
    ) -> None:
        """Initialize a CellRef with 0-indexed coordinates.

        Args:
            sheet_name: Sheet name, or None/"" for a cell with no sheet
            row: Row (0-indexed, non-negative)
            col: Column (0-indexed, non-negative)
            ignore_sheet_name_in_format: Omit the sheet prefix in ``cell_name``

        Raises:
            ValueError: If coordinates are negative
        """
        if row < 0 or col < 0:
            raise ValueError("Row and column must be non-negative (0-indexed)")

        object.__setattr__(self, "_sheet_name", sheet_name or None)
        object.__setattr__(self, "_row", row)
        object.__setattr__(self, "_col", col)
        object.__setattr__(self, "_ignore_sheet_name_in_format", ignore_sheet_name_in_format)

    def __setattr__(self, name, value):
        raise AttributeError("CellRef is immutable")

    @property
    def sheet_name(self) -> Optional[str]:
        return self._sheet_name

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def ignore_sheet_name_in_format(self) -> bool:
        return self._ignore_sheet_name_in_format

    @property
    def cell_name(self) -> str:
        """Formula notation of this cell (e.g. "A1", "Sheet2!B3", "'My Sheet'!C4")."""
        name = f"{col_to_letter(self._col)}{self._row + 1}"
        if self._sheet_name is None or self._ignore_sheet_name_in_format:
            return name
        return f"{format_sheet_name(self._sheet_name)}!{name}"

    @classmethod
    def from_a1(cls, notation: str, ignore_sheet_name_in_format: bool = False) -> "CellRef":
        """Parse a cell reference in A1 notation.

        Supports:
        - Plain cell: A1, ZZ100
        - Absolute markers: $A$1, A$1
        - Sheet-qualified: Sheet1!B3, 'My Sheet'!C4

        Args:
            notation: A1 notation string (1-indexed spreadsheet convention)
            ignore_sheet_name_in_format: Passed through to the new CellRef

        Returns:
            CellRef with 0-indexed coordinates

        Raises:
            ValueError: If notation is invalid
        """
        notation = notation.strip() if isinstance(notation, str) else ""
        if not notation:
            raise ValueError("Empty cell notation")

        sheet_name = None
        if "!" in notation:
            sheet_part, _, cell_part = notation.rpartition("!")
            if len(sheet_part) >= 2 and sheet_part[0] == "'" and sheet_part[-1] == "'":
                sheet_part = sheet_part[1:-1].replace("''", "'")
            if not sheet_part:
                raise ValueError(f"Invalid cell notation: {notation}")
            sheet_name = sheet_part
        else:
            cell_part = notation

        match = _CELL_PATTERN.match(cell_part.upper())
        if not match:
            raise ValueError(f"Invalid cell notation: {notation}")

        col_letters, row_str = match.groups()
        row = int(row_str) - 1
        if row < 0:
            raise ValueError(f"Invalid cell notation: {notation}")

        return cls(
            sheet_name,
            row,
            letter_to_col(col_letters),
            ignore_sheet_name_in_format=ignore_sheet_name_in_format,
        )

    def __repr__(self) -> str:
        return f"CellRef({self.cell_name!r})"

    def __str__(self) -> str:
        return self.cell_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellRef):
            return NotImplemented
        return (
            self._sheet_name == other._sheet_name
            and self._row == other._row
            and self._col == other._col
        )

    def __hash__(self) -> int:
        return hash((self._sheet_name, self._row, self._col))


def _looks_like_cell_ref(name: str) -> bool:
    match = _CELL_LIKE_NAME.match(name)
    if not match:
        return False
    col_letters, row_str = match.groups()
    return letter_to_col(col_letters) < MAX_COLUMNS and 0 < int(row_str) <= MAX_ROWS


def format_sheet_name(sheet_name: str) -> str:
    """Quote a sheet name for use in a formula when it is not a plain identifier.

    Besides names with spaces or punctuation, names starting with a digit
    ("2019"), names that read as a cell reference ("A1", "xfd10") and the
    boolean literals TRUE/FALSE are quoted.
    """
    if (
        _PLAIN_SHEET_NAME.match(sheet_name)
        and not sheet_name[0].isdigit()
        and not _looks_like_cell_ref(sheet_name)
        and sheet_name.upper() not in _BOOLEAN_LITERALS
    ):
        return sheet_name
    return "'" + sheet_name.replace("'", "''") + "'"


def _row_precedence_key(cell_ref: CellRef) -> Tuple[str, int, int]:
    return (cell_ref.sheet_name or "", cell_ref.row, cell_ref.col)


def _col_precedence_key(cell_ref: CellRef) -> Tuple[str, int, int]:
    return (cell_ref.sheet_name or "", cell_ref.col, cell_ref.row)


class SortAxis(Enum):
    """Primary axis used to order and group cell references.

    ROW_MAJOR orders by sheet, then row, then column; a contiguous run is a
    sequence of cells in one row with consecutive columns.
    COLUMN_MAJOR orders by sheet, then column, then row; a contiguous run is a
    sequence of cells in one column with consecutive rows.
    """
    ROW_MAJOR = "row"
    COLUMN_MAJOR = "col"

    @property
    def sort_key(self) -> Callable[[CellRef], Tuple[str, int, int]]:
        if self is SortAxis.ROW_MAJOR:
            return _row_precedence_key
        return _col_precedence_key

    def step(self) -> Tuple[int, int]:
        """Return the (row_delta, col_delta) between two adjacent cells of a run."""
        if self is SortAxis.ROW_MAJOR:
            return (0, 1)
        return (1, 0)

    def sort(self, cell_refs: List[CellRef]) -> List[CellRef]:
        """Return a sorted copy of ``cell_refs`` in this axis' precedence order."""
        return sorted(cell_refs, key=self.sort_key)
