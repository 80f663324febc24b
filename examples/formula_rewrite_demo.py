"""
Formula rewrite demo: template formula → expanded report formula.

This script walks through what a report template engine does with a formula
such as ``SUM(C2)`` when row 2 is repeated once per employee:
1. Extract the cell references used by the template formula
2. Expand each reference to the cells produced for every employee
3. Group the produced cells into ranges and render the new formula

Usage:
    python examples/formula_rewrite_demo.py
"""

import pandas as pd

from sheetplate import (
    CellRef,
    Context,
    SafeExpressionEvaluator,
    get_formula_cell_refs,
    group_by_ranges,
    is_condition_true,
    render_ranges,
)
from sheetplate.utils import group_collection


def build_data() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["Alice", "Bob", "Charlie", "Diana", "Eve"],
        "dept": ["eng", "eng", "sales", "eng", "hr"],
        "salary": [90000, 120000, 65000, 95000, 80000],
    })


def expand(template_ref: CellRef, count: int, skip=()):
    """Cells produced for ``template_ref`` when its row repeats ``count`` times."""
    return [
        CellRef(template_ref.sheet_name, template_ref.row + i, template_ref.col)
        for i in range(count)
        if i not in skip
    ]


def main() -> None:
    employees = build_data()
    evaluator = SafeExpressionEvaluator()

    template_formula = "SUM(C2)"
    print(f"Template formula: {template_formula}")

    # Employees with a salary above the threshold are written to a separate area
    context = Context({"threshold": 100000})
    skipped = set()
    for i, row in enumerate(employees.to_dict(orient="records")):
        context.put_var("employee", row)
        if is_condition_true(evaluator, "employee['salary'] > threshold", context):
            skipped.add(i)

    for ref_name in get_formula_cell_refs(template_formula):
        produced = expand(CellRef.from_a1(ref_name), len(employees), skip=skipped)
        print(f"  {ref_name} expands to {[c.cell_name for c in produced]}")
        fragment = render_ranges(group_by_ranges(produced, 0))
        print(f"Report formula:   SUM({fragment})")

    print()
    print("Departments:")
    for group in group_collection(employees, "dept", "asc"):
        print(f"  {group.item['dept']}: {', '.join(e['name'] for e in group.items)}")


if __name__ == "__main__":
    main()
