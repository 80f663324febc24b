"""
sheetplate - Formula reference utilities for template-driven spreadsheet reports.

When a report template repeats a row or column once per collection item, the
formulas that referred to the template cells must be rewritten to refer to
every produced cell. This package finds the cell references in formula text
and collapses the expanded cell lists back into compact ranges.

Usage:
    >>> from sheetplate import CellRef, get_formula_cell_refs, group_by_ranges, render_ranges
    >>> get_formula_cell_refs("B4*(1+C4)")
    ['B4', 'C4']
    >>> cells = [CellRef(None, row, 0) for row in range(5)] + [CellRef(None, 0, 2)]
    >>> render_ranges(group_by_ranges(cells, 0))
    'A1:A5,C1'

Key components:
- CellRef / SortAxis: cell value type and the two grouping orders
- formula.refs: cell, area and jointed (U_(...)) reference extraction
- formula.ranges: range grouping and rendering
- expression: template conditions and collection expressions
- utils: property access, grouping by property, stream reading
"""

from .spreadsheet import CellRef, SortAxis
from .formula import (
    CellRange,
    get_formula_cell_refs,
    get_jointed_cell_refs,
    get_cell_refs_from_jointed_cell_ref,
    formula_contains_jointed_cell_ref,
    get_area_refs,
    group_by_axis,
    group_by_col_range,
    group_by_row_range,
    group_by_ranges,
    create_target_cell_ref,
    render_ranges,
)
from .expression import Context, SafeExpressionEvaluator, is_condition_true
from .exceptions import *

# Version
__version__ = "0.1.0"

__all__ = [
    'CellRef',
    'SortAxis',
    'CellRange',
    'get_formula_cell_refs',
    'get_jointed_cell_refs',
    'get_cell_refs_from_jointed_cell_ref',
    'formula_contains_jointed_cell_ref',
    'get_area_refs',
    'group_by_axis',
    'group_by_col_range',
    'group_by_row_range',
    'group_by_ranges',
    'create_target_cell_ref',
    'render_ranges',
    'Context',
    'SafeExpressionEvaluator',
    'is_condition_true',
    'TemplateError',
    'EvaluationError',
    'PropertyAccessError',
]
