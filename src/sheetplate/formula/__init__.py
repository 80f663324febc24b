"""
Formula reference module.

This module provides the two halves of formula rewriting:
- refs: extraction of cell, area and jointed references from formula text
- ranges: grouping of expanded cell references into compact ranges
"""

from sheetplate.formula.refs import (
    get_formula_cell_refs,
    get_jointed_cell_refs,
    get_cell_refs_from_jointed_cell_ref,
    formula_contains_jointed_cell_ref,
    get_area_refs,
    sheet_name_regex,
    get_strict_cell_name_regex,
    count_occurrences,
)
from sheetplate.formula.ranges import (
    CellRange,
    group_by_axis,
    group_by_col_range,
    group_by_row_range,
    group_by_ranges,
    create_target_cell_ref,
    create_target_cell_ref_list_by_column,
    render_ranges,
)

__all__ = [
    "get_formula_cell_refs",
    "get_jointed_cell_refs",
    "get_cell_refs_from_jointed_cell_ref",
    "formula_contains_jointed_cell_ref",
    "get_area_refs",
    "sheet_name_regex",
    "get_strict_cell_name_regex",
    "count_occurrences",
    "CellRange",
    "group_by_axis",
    "group_by_col_range",
    "group_by_row_range",
    "group_by_ranges",
    "create_target_cell_ref",
    "create_target_cell_ref_list_by_column",
    "render_ranges",
]
