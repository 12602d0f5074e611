"""
Worksheet row extraction

Reads an openpyxl worksheet into a Table of display strings.
"""

import datetime
import logging
from typing import Any, List

logger = logging.getLogger("table-processor")


def cell_to_text(value: Any) -> str:
    """
    Render a cell value as its display string.

    Args:
        value: Raw openpyxl cell value

    Returns:
        "" for empty cells, TRUE/FALSE for booleans, integral floats
        without a fractional part, ISO dates, everything else str()
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0, 0):
            return value.date().isoformat()
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _trim_trailing_empty(cells: List[str]) -> List[str]:
    end = len(cells)
    while end > 0 and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def sheet_to_rows(ws) -> List[List[str]]:
    """
    Read a worksheet into a Table.

    Rows start at row 1 and column 1 so leading blank rows/columns keep
    their positions. Trailing empty cells of each row and trailing empty
    rows of the sheet are dropped; empty rows in between stay as [].

    Args:
        ws: openpyxl Worksheet

    Returns:
        Rows in sheet order
    """
    rows: List[List[str]] = []
    max_row = ws.max_row or 0
    max_col = ws.max_column or 0
    if max_row == 0 or max_col == 0:
        return rows

    for values in ws.iter_rows(min_row=1, max_row=max_row, min_col=1, max_col=max_col, values_only=True):
        rows.append(_trim_trailing_empty([cell_to_text(v) for v in values]))

    while rows and not rows[-1]:
        rows.pop()

    logger.debug(f"Sheet {ws.title!r}: {len(rows)} rows")
    return rows
