# xgen_doc2rows/core/functions/table_ops.py
"""
Table operations

- concat_tables: append the rows of one table to another
- filter_first_block: block around the last row matching a marker
- filter_all_blocks: blocks following every row matching a marker

A block is a contiguous run of rows whose first cell is non-empty. It
ends at the first row whose first cell is "" (or that has no cells) or
at the end of the table. Markers match case-insensitively as substrings
of the first cell.
"""
import logging
from typing import List, Sequence

logger = logging.getLogger("table-processor")

Row = List[str]
Table = List[Row]


def concat_tables(first: Sequence[Row], second: Sequence[Row]) -> Table:
    """
    Return a new table with the rows of ``first`` followed by ``second``.

    Neither input is modified. Rows are not copied, deduplicated or aligned.
    """
    combined: Table = list(first)
    combined.extend(second)
    return combined


def _first_cell(row: Sequence[str]) -> str:
    return row[0] if len(row) > 0 else ""


def _matches(row: Sequence[str], marker: str) -> bool:
    if len(row) == 0:
        return False
    return marker in row[0].lower()


def _collect_block(rows: Sequence[Row], start: int) -> Table:
    block: Table = []
    for row in rows[start:]:
        if _first_cell(row) == "":
            break
        block.append(row)
    return block


def filter_first_block(marker: str, rows: Sequence[Row]) -> Table:
    """
    Return the block that starts at the last row matching ``marker``.

    The matching row is included. When several rows match, the last one
    wins. When none matches the block starts at row 0.

    Args:
        marker: Case-insensitive substring looked up in the first cell
        rows: Table to filter

    Returns:
        Rows of the block
    """
    logger.debug("filter_first_block(+)")
    needle = marker.lower()

    start = 0
    for i, row in enumerate(rows):
        if _matches(row, needle):
            start = i

    block = _collect_block(rows, start)
    logger.debug(f"filter_first_block(-) start={start}, rows={len(block)}")
    return block


def filter_all_blocks(marker: str, rows: Sequence[Row]) -> Table:
    """
    Return the blocks following every row matching ``marker``, flattened.

    Each block starts on the row after a match; the matching rows
    themselves are not included. Blocks are concatenated in the order
    the matches were found.

    Args:
        marker: Case-insensitive substring looked up in the first cell
        rows: Table to filter

    Returns:
        Rows of all blocks
    """
    logger.debug("filter_all_blocks(+)")
    needle = marker.lower()

    starts = [i for i, row in enumerate(rows) if _matches(row, needle)]

    result: Table = []
    for start in starts:
        result.extend(_collect_block(rows, start + 1))

    logger.debug(f"filter_all_blocks(-) matches={len(starts)}, rows={len(result)}")
    return result


__all__ = [
    "Row",
    "Table",
    "concat_tables",
    "filter_first_block",
    "filter_all_blocks",
]
