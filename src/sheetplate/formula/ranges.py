"""
Grouping of expanded cell references into contiguous ranges.

When a template formula refers to a cell whose row or column is repeated for
every item of a collection, the formula must be rewritten to refer to all
the produced cells. This module collapses such a list of cells into the most
compact notation: five cells A1, A2, A3, A4, A5 become "A1:A5".

A range is a list of CellRef where every step advances by exactly one along
the grouping axis, stays fixed on the other axis, and stays on one sheet.
"""

from typing import Iterable, List, Optional

from sheetplate.spreadsheet.model import CellRef, SortAxis


CellRange = List[CellRef]


def group_by_axis(cell_refs: Optional[Iterable[CellRef]], axis: SortAxis) -> List[CellRange]:
    """Group cell references into maximal contiguous runs along ``axis``.

    The input is copied and sorted by the axis' precedence order; it is never
    modified. A new range starts whenever the sheet changes or the next cell
    is not exactly one step further along the axis.

    Args:
        cell_refs: Cell references in any order
        axis: COLUMN_MAJOR for vertical runs, ROW_MAJOR for horizontal runs

    Returns:
        List of ranges in sorted order, each range a non-empty list of CellRef
    """
    if not cell_refs:
        return []
    ordered = axis.sort(list(cell_refs))
    if not ordered:
        return []

    row_step, col_step = axis.step()
    ranges: List[CellRange] = []
    current = [ordered[0]]
    previous = ordered[0]
    for cell_ref in ordered[1:]:
        contiguous = (
            cell_ref.sheet_name == previous.sheet_name
            and cell_ref.row - previous.row == row_step
            and cell_ref.col - previous.col == col_step
        )
        if contiguous:
            current.append(cell_ref)
        else:
            ranges.append(current)
            current = [cell_ref]
        previous = cell_ref
    ranges.append(current)
    return ranges


def group_by_col_range(cell_refs: Optional[Iterable[CellRef]]) -> List[CellRange]:
    """Group cell references into vertical runs (same column, consecutive rows)."""
    return group_by_axis(cell_refs, SortAxis.COLUMN_MAJOR)


def group_by_row_range(cell_refs: Optional[Iterable[CellRef]]) -> List[CellRange]:
    """Group cell references into horizontal runs (same row, consecutive columns)."""
    return group_by_axis(cell_refs, SortAxis.ROW_MAJOR)


def group_by_ranges(cell_refs: Optional[Iterable[CellRef]], target_range_count: int) -> List[CellRange]:
    """Group cell references into ranges for formula substitution.

    The caller usually knows how many ranges the template expanded into (one
    per repeated source row, for example). Column-major grouping is tried
    first; row-major grouping is used only when it, and not column-major
    grouping, produces exactly ``target_range_count`` ranges.

    Args:
        cell_refs: Cell references produced by template expansion
        target_range_count: Expected number of ranges, 0 for no preference

    Returns:
        List of ranges grouped by column or by row
    """
    if cell_refs is not None and not isinstance(cell_refs, list):
        cell_refs = list(cell_refs)
    col_ranges = group_by_col_range(cell_refs)
    if target_range_count == 0 or len(col_ranges) == target_range_count:
        return col_ranges
    row_ranges = group_by_row_range(cell_refs)
    if len(row_ranges) == target_range_count:
        return row_ranges
    return col_ranges


def create_target_cell_ref(target_cells: Optional[List[CellRef]]) -> str:
    """Render an ordered list of cells as a formula fragment.

    The list is not re-sorted. If every cell is exactly one row below, or
    exactly one column to the right of, the previous cell on the same sheet,
    the result is "first:last". Otherwise the cell names are joined with
    commas.

    Args:
        target_cells: Cells in their intended order

    Returns:
        "A1:A3", "A1,C5,B2" or "" for an empty list
    """
    if not target_cells:
        return ""

    first = target_cells[0]
    cell_names = [first.cell_name]
    row_range = True
    col_range = True
    previous = first
    for cell_ref in target_cells[1:]:
        if cell_ref.sheet_name != previous.sheet_name:
            row_range = False
            col_range = False
        if row_range and not (cell_ref.row - previous.row == 1 and cell_ref.col == previous.col):
            row_range = False
        if col_range and not (cell_ref.col - previous.col == 1 and cell_ref.row == previous.row):
            col_range = False
        previous = cell_ref
        cell_names.append(cell_ref.cell_name)

    if (row_range or col_range) and len(cell_names) > 1:
        return f"{cell_names[0]}:{cell_names[-1]}"
    return ",".join(cell_names)


def render_ranges(ranges: List[CellRange]) -> str:
    """Render grouped ranges as a comma separated formula fragment.

    Each range is rendered with create_target_cell_ref, so a multi-cell run
    becomes "first:last" and a single cell its own name.
    """
    return ",".join(create_target_cell_ref(cell_range) for cell_range in ranges)


def create_target_cell_ref_list_by_column(
    target_formula_cell_ref: CellRef,
    target_cells: List[CellRef],
    cell_refs_to_exclude: List[CellRef],
) -> List[CellRef]:
    """Select the target cells above a formula cell in the same column.

    Args:
        target_formula_cell_ref: Cell holding the rewritten formula
        target_cells: Candidate cells
        cell_refs_to_exclude: Cells that must not be returned

    Returns:
        Candidates in the formula cell's column with a smaller row, minus the
        excluded ones, in input order
    """
    col = target_formula_cell_ref.col
    return [
        target_cell
        for target_cell in target_cells
        if target_cell.col == col
        and target_cell.row < target_formula_cell_ref.row
        and target_cell not in cell_refs_to_exclude
    ]
