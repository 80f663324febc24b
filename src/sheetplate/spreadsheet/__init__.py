"""
Spreadsheet model module.

This module provides the cell reference value type and the orderings used to
group cell references into ranges.
"""

from sheetplate.spreadsheet.model import (
    CellRef,
    SortAxis,
    col_to_letter,
    letter_to_col,
    format_sheet_name,
)

__all__ = [
    "CellRef",
    "SortAxis",
    "col_to_letter",
    "letter_to_col",
    "format_sheet_name",
]
