# xgen_doc2rows/core/processor/excel_helper/excel_file_converter.py
"""
XLSXFileConverter - spreadsheet container converter

Converts raw XLSX bytes to an openpyxl Workbook.
"""
import zipfile
from io import BytesIO
from typing import Any, Optional, BinaryIO

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from xgen_doc2rows.core.errors import OpenSpreadsheetError
from xgen_doc2rows.core.functions.file_converter import BaseFileConverter


class XLSXFileConverter(BaseFileConverter):
    """
    XLSX file converter using openpyxl.

    Converts binary XLSX data to an openpyxl Workbook object.
    """

    # ZIP magic number (XLSX is a ZIP file)
    ZIP_MAGIC = b'PK\x03\x04'

    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        data_only: bool = True,
        stage: str = "open_spreadsheet:001",
        **kwargs
    ) -> Any:
        """
        Convert binary XLSX data to a Workbook.

        Args:
            file_data: Raw binary XLSX data
            file_stream: Optional stream over the same data
            data_only: If True, cached values instead of formulas
            stage: Stage tag reported on failure

        Returns:
            openpyxl.Workbook object

        Raises:
            OpenSpreadsheetError: If the data is not a valid XLSX container
        """
        stream = file_stream if file_stream is not None else BytesIO(file_data)
        stream.seek(0)
        try:
            return load_workbook(stream, data_only=data_only)
        except (zipfile.BadZipFile, InvalidFileException, KeyError, ValueError, OSError, EOFError) as e:
            raise OpenSpreadsheetError(stage, cause=e) from e

    def get_format_name(self) -> str:
        return "XLSX Workbook"

    def validate(self, file_data: bytes) -> bool:
        """Validate if data starts like a ZIP container."""
        if not file_data or len(file_data) < 4:
            return False
        return file_data[:4] == self.ZIP_MAGIC

    def close(self, converted_object: Any) -> None:
        """Close the workbook."""
        if converted_object is not None:
            converted_object.close()
