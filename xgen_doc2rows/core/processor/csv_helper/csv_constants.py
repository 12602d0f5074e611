# csv_helper/csv_constants.py
"""
Delimited source constants and types

Constants and data classes shared by the comma (CSV) and pipe (text)
readers.
"""
from dataclasses import dataclass
from typing import List


# === Encoding ===

# Tried in order after UTF-8 and chardet detection fail
ENCODING_CANDIDATES = [
    "utf-8-sig",
    "cp949",
    "euc-kr",
    "utf-16",
    "latin-1",    # fallback (accepts every byte)
]


# === Delimiters ===

COMMA_DELIMITER = ','
PIPE_DELIMITER = '|'

DELIMITER_NAMES = {
    COMMA_DELIMITER: 'comma (,)',
    PIPE_DELIMITER: 'pipe (|)',
}

QUOTE_CHAR = '"'


# === Data classes ===

@dataclass
class DelimitedSourceInfo:
    """Summary of one decoded delimited source, used for logging."""
    encoding: str
    delimiter: str
    row_count: int
    max_cols: int

    @classmethod
    def from_rows(cls, rows: List[List[str]], encoding: str, delimiter: str) -> "DelimitedSourceInfo":
        return cls(
            encoding=encoding,
            delimiter=delimiter,
            row_count=len(rows),
            max_cols=max((len(row) for row in rows), default=0),
        )

    def describe(self) -> str:
        name = DELIMITER_NAMES.get(self.delimiter, repr(self.delimiter))
        return (
            f"encoding={self.encoding}, delimiter={name}, "
            f"rows={self.row_count}, max_cols={self.max_cols}"
        )
