# xgen_doc2rows/core/processor/excel_handler.py
"""
Excel Handler - XLSX worksheet reader

Main Features:
- Opens the XLSX container via openpyxl (cached values, not formulas)
- Reads one worksheet, selected by exact name, into a Table
- Closes the workbook on every exit path

Class-based Handler:
- ExcelHandler class inherits from BaseHandler to manage config
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from xgen_doc2rows.core.errors import LocalFileError, OpenSpreadsheetError, SheetNotFoundError
from xgen_doc2rows.core.processor.base_handler import BaseHandler, make_current_file
from xgen_doc2rows.core.processor.excel_helper import sheet_to_rows

if TYPE_CHECKING:
    from xgen_doc2rows.core.table_processor import CurrentFile

logger = logging.getLogger("table-processor")


# ============================================================================
# ExcelHandler Class
# ============================================================================

class ExcelHandler(BaseHandler):
    """
    Excel Worksheet Handler (XLSX)

    Usage:
        handler = ExcelHandler(config={"sheet_name": "Data"})
        rows = handler.extract_rows(current_file)
    """

    def _create_file_converter(self):
        """Create XLSX file converter."""
        from xgen_doc2rows.core.processor.excel_helper.excel_file_converter import XLSXFileConverter
        return XLSXFileConverter()

    def extract_rows(
        self,
        current_file: "CurrentFile",
        sheet_name: Optional[str] = None,
        **kwargs
    ) -> List[List[str]]:
        """
        Read one worksheet of an XLSX source.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            sheet_name: Worksheet name (None for the configured one)

        Returns:
            Rows of the worksheet as display strings

        Raises:
            OpenSpreadsheetError: If the source is not a valid XLSX container
            SheetNotFoundError: If the worksheet does not exist
        """
        file_path = current_file.get("file_path", "unknown")
        sheet_name = self.sheet_name if sheet_name is None else sheet_name
        self.logger.debug(f"decode_spreadsheet(+) {file_path}, sheet={sheet_name!r}")

        if not self.file_converter.validate(current_file.get("file_data", b"")):
            self.logger.error(f"Not an XLSX container: {file_path}")
            raise OpenSpreadsheetError("decode_spreadsheet:001", "data is not a ZIP container")

        wb = self.convert_file(current_file, stage="decode_spreadsheet:001")
        try:
            if sheet_name not in wb.sheetnames:
                self.logger.error(f"Sheet {sheet_name!r} not found in {file_path}")
                raise SheetNotFoundError("decode_spreadsheet:002", sheet_name, wb.sheetnames)
            rows = sheet_to_rows(wb[sheet_name])
        finally:
            self.file_converter.close(wb)

        self.logger.info(f"XLSX processed {file_path}: sheet={sheet_name!r}, rows={len(rows)}")
        self.logger.debug("decode_spreadsheet(-)")
        return rows

    def extract_rows_from_path(self, file_path: str, sheet_name: Optional[str] = None) -> List[List[str]]:
        """
        Read one worksheet of an XLSX file on disk.

        Args:
            file_path: Path of the XLSX file
            sheet_name: Worksheet name (None for the configured one)
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise LocalFileError("decode_spreadsheet:003", file_path, cause=e) from e
        return self.extract_rows(make_current_file(data, file_path, file_path), sheet_name=sheet_name)


def decode_spreadsheet(data: bytes, sheet_name: str) -> List[List[str]]:
    """
    Decode an XLSX byte stream and return the rows of one worksheet.

    Raises:
        OpenSpreadsheetError: If the data is not a valid XLSX container
        SheetNotFoundError: If the worksheet does not exist
    """
    return ExcelHandler().extract_rows_from_bytes(data, sheet_name=sheet_name)


__all__ = ["ExcelHandler", "decode_spreadsheet"]
