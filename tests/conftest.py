"""Shared pytest configuration and fixtures for sheetplate tests."""

from typing import List

import pandas as pd
import pytest

from sheetplate.spreadsheet.model import CellRef


@pytest.fixture
def cells():
    """Factory building CellRefs from A1 notation strings."""
    def build(*names: str) -> List[CellRef]:
        return [CellRef.from_a1(name) for name in names]
    return build


@pytest.fixture
def column_run() -> List[CellRef]:
    """Five cells in column A, rows 1 to 5, on one sheet."""
    return [CellRef("Sheet1", row, 0) for row in range(5)]


@pytest.fixture
def grid() -> List[CellRef]:
    """A 3x2 block B2:C4 on one sheet, listed in scrambled order."""
    return [
        CellRef("Data", 3, 2),
        CellRef("Data", 1, 1),
        CellRef("Data", 2, 2),
        CellRef("Data", 3, 1),
        CellRef("Data", 1, 2),
        CellRef("Data", 2, 1),
    ]


@pytest.fixture
def employees() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Heidi"],
        "age": [30, 45, 28, 35, 50, 33, 29, 40],
        "dept": ["eng", "eng", "sales", "eng", "hr", "sales", "hr", "eng"],
        "salary": [90000, 120000, 65000, 95000, 80000, 70000, 75000, 110000],
    })
