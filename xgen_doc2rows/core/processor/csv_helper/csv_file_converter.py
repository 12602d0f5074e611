# xgen_doc2rows/core/processor/csv_helper/csv_file_converter.py
"""
CSVFileConverter - delimited source converter

Converts raw CSV / pipe-delimited bytes to text with encoding detection.
"""
import logging
from typing import Optional, BinaryIO, Tuple

from xgen_doc2rows.core.functions.file_converter import TextFileConverter
from xgen_doc2rows.core.processor.csv_helper.csv_constants import ENCODING_CANDIDATES
from xgen_doc2rows.core.processor.csv_helper.csv_encoding import detect_bom

logger = logging.getLogger("table-processor")


class CSVFileConverter(TextFileConverter):
    """
    Delimited source converter.

    Extends TextFileConverter with BOM detection, which wins over any
    preferred encoding.
    """

    def __init__(self):
        super().__init__(encodings=ENCODING_CANDIDATES)

    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        encoding: Optional[str] = None,
        **kwargs
    ) -> Tuple[str, str]:
        """
        Convert raw bytes to text.

        Returns:
            Tuple of (decoded text, detected encoding)
        """
        bom_encoding = detect_bom(file_data)
        if bom_encoding:
            logger.debug(f"BOM detected: {bom_encoding}")
            try:
                text = file_data.decode(bom_encoding)
                self._detected_encoding = bom_encoding
                return text, bom_encoding
            except UnicodeDecodeError:
                pass

        text = super().convert(file_data, file_stream, encoding, **kwargs)
        return text, self._detected_encoding or 'utf-8'

    def get_format_name(self) -> str:
        enc = self._detected_encoding or 'unknown'
        return f"Delimited text ({enc})"
