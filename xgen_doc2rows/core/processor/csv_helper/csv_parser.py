# csv_helper/csv_parser.py
"""
Delimited text parsing

Splits decoded text into rows with RFC-4180 quoting: a field wrapped in
double quotes may contain the delimiter, newlines and doubled quotes.
"""
import csv
import io
import logging
from typing import List, Optional

from xgen_doc2rows.core.errors import DecodeError
from xgen_doc2rows.core.processor.csv_helper.csv_constants import QUOTE_CHAR

logger = logging.getLogger("table-processor")

LINE_BREAKS = '\r\n'


def find_bare_quote(content: str, delimiter: str) -> Optional[int]:
    """
    Locate the first quote character inside a non-quoted field.

    A quote is only legal as the very first character of a field (opening
    a quoted field) or doubled inside a quoted field.

    Returns:
        1-based line number of the offending quote, or None
    """
    if QUOTE_CHAR not in content:
        return None

    line = 1
    field_start = True
    in_quotes = False
    i = 0
    n = len(content)
    while i < n:
        ch = content[i]
        if in_quotes:
            if ch == QUOTE_CHAR:
                if i + 1 < n and content[i + 1] == QUOTE_CHAR:
                    i += 1
                else:
                    in_quotes = False
            elif ch in LINE_BREAKS:
                line += 1
        elif ch == QUOTE_CHAR:
            if not field_start:
                return line
            in_quotes = True
            field_start = False
        elif ch == delimiter:
            field_start = True
        elif ch in LINE_BREAKS:
            line += 1
            field_start = True
        else:
            field_start = False
        i += 1
    return None


def parse_delimited(content: str, delimiter: str, stage: str = "parse_delimited:001") -> List[List[str]]:
    """
    Parse delimited text into a table.

    Blank lines produce no row. Cells are returned exactly as written
    (no trimming). The whole input is consumed; any malformed record
    aborts the parse.

    Args:
        content: Decoded text
        delimiter: Single-character field separator
        stage: Stage tag reported on failure

    Returns:
        Parsed rows in source order

    Raises:
        ValueError: If delimiter is not a single character
        DecodeError: On malformed quoting
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if delimiter == QUOTE_CHAR or delimiter in '\r\n':
        raise ValueError(f"invalid delimiter: {delimiter!r}")

    # carriage returns before newlines are dropped, inside quotes too
    content = content.replace('\r\n', '\n')

    reader = csv.reader(
        io.StringIO(content, newline=''),
        delimiter=delimiter,
        quotechar=QUOTE_CHAR,
        doublequote=True,
        skipinitialspace=False,
        strict=True,
    )

    bare_quote_line = find_bare_quote(content, delimiter)

    rows: List[List[str]] = []
    try:
        for row in reader:
            if bare_quote_line is not None and reader.line_num >= bare_quote_line:
                break
            if not row:
                continue
            rows.append(row)
    except csv.Error as e:
        logger.warning(f"Delimited parse error at line {reader.line_num}: {e}")
        raise DecodeError(
            stage,
            f"line {reader.line_num}: {e}",
            cause=e,
            line_number=reader.line_num,
            partial_rows=rows,
        ) from e

    if bare_quote_line is not None:
        logger.warning(f"Delimited parse error at line {bare_quote_line}: bare quote")
        raise DecodeError(
            stage,
            f"line {bare_quote_line}: bare {QUOTE_CHAR!r} in non-quoted field",
            line_number=bare_quote_line,
            partial_rows=rows,
        )

    return rows
