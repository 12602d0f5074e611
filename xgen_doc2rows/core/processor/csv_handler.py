# xgen_doc2rows/core/processor/csv_handler.py
"""
CSV Handler - comma-delimited source reader

Class-based handler for CSV sources inheriting from BaseHandler.
"""
import logging
from typing import List, Optional, TYPE_CHECKING

from xgen_doc2rows.core.errors import DecodeError
from xgen_doc2rows.core.processor.base_handler import BaseHandler
from xgen_doc2rows.core.processor.csv_helper import (
    COMMA_DELIMITER,
    DelimitedSourceInfo,
    parse_delimited,
)

if TYPE_CHECKING:
    from xgen_doc2rows.core.table_processor import CurrentFile

logger = logging.getLogger("table-processor")


class CSVHandler(BaseHandler):
    """CSV Source Handler Class"""

    delimiter = COMMA_DELIMITER
    stage_name = "read_csv"

    def _create_file_converter(self):
        """Create delimited-text file converter."""
        from xgen_doc2rows.core.processor.csv_helper.csv_file_converter import CSVFileConverter
        return CSVFileConverter()

    def extract_rows(
        self,
        current_file: "CurrentFile",
        encoding: Optional[str] = None,
        delimiter: Optional[str] = None,
        **kwargs
    ) -> List[List[str]]:
        """
        Read a delimited source into a Table.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            encoding: Encoding (None for the configured / auto-detected one)
            delimiter: Override the handler's delimiter

        Returns:
            Rows in source order

        Raises:
            DecodeError: On malformed quoting
        """
        file_path = current_file.get("file_path", "unknown")
        delimiter = self.delimiter if delimiter is None else delimiter
        self.logger.debug(f"{self.stage_name}(+) {file_path}")

        content, detected_encoding = self.convert_file(current_file, encoding=encoding or self.encoding)

        try:
            rows = parse_delimited(content, delimiter, stage=f"{self.stage_name}:001")
        except DecodeError as e:
            self.logger.error(f"Error decoding {file_path}: {e}")
            raise

        info = DelimitedSourceInfo.from_rows(rows, detected_encoding, delimiter)
        self.logger.info(f"{self.__class__.__name__} processed {file_path}: {info.describe()}")
        self.logger.debug(f"{self.stage_name}(-)")
        return rows


def decode_delimited(data: bytes, delimiter: str, encoding: Optional[str] = None) -> List[List[str]]:
    """
    Decode a delimited byte stream into a Table.

    Args:
        data: Raw bytes
        delimiter: Single-character separator ("," for CSV, "|" for text)
        encoding: Preferred encoding (None for auto-detect)

    Returns:
        Rows in source order

    Raises:
        ValueError: If delimiter is not a single character
        DecodeError: On malformed quoting
    """
    handler = CSVHandler()
    return handler.extract_rows_from_bytes(data, encoding=encoding, delimiter=delimiter)


__all__ = ["CSVHandler", "decode_delimited"]
