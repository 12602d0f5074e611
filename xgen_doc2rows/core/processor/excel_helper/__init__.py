# xgen_doc2rows/core/processor/excel_helper/__init__.py
"""
Excel Helper Module

Building blocks used by excel_handler.py.

Module Structure:
- excel_file_converter: XLSX bytes -> openpyxl Workbook
- excel_rows: worksheet -> Table of display strings
"""

from xgen_doc2rows.core.processor.excel_helper.excel_file_converter import XLSXFileConverter
from xgen_doc2rows.core.processor.excel_helper.excel_rows import (
    cell_to_text,
    sheet_to_rows,
)

__all__ = [
    "XLSXFileConverter",
    "cell_to_text",
    "sheet_to_rows",
]
