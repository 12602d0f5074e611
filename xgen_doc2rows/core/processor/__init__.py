# xgen_doc2rows/core/processor/__init__.py
"""
Processor - Source Type-specific Handler Module

Handler List:
- csv_handler: comma-delimited sources
- text_handler: pipe-delimited sources
- excel_handler: XLSX worksheets
- archive_handler: ZIP archives of the above

Helper Modules (subdirectories):
- csv_helper/: delimited text helpers
- excel_helper/: XLSX helpers

Usage Example:
    from xgen_doc2rows.core.processor import CSVHandler
    from xgen_doc2rows.core.processor import ArchiveHandler
"""

from xgen_doc2rows.core.processor.base_handler import BaseHandler

# === Delimited Handlers ===
from xgen_doc2rows.core.processor.csv_handler import CSVHandler, decode_delimited
from xgen_doc2rows.core.processor.text_handler import TextHandler

# === Spreadsheet Handler ===
from xgen_doc2rows.core.processor.excel_handler import ExcelHandler, decode_spreadsheet

# === Archive Handler ===
from xgen_doc2rows.core.processor.archive_handler import (
    ArchiveHandler,
    ArchiveResult,
    read_archive,
)

# === Helper Modules (subpackages) ===
from xgen_doc2rows.core.processor import csv_helper
from xgen_doc2rows.core.processor import excel_helper

__all__ = [
    "BaseHandler",
    # Delimited
    "CSVHandler",
    "TextHandler",
    "decode_delimited",
    # Spreadsheet
    "ExcelHandler",
    "decode_spreadsheet",
    # Archive
    "ArchiveHandler",
    "ArchiveResult",
    "read_archive",
    # Helper subpackages
    "csv_helper",
    "excel_helper",
]
