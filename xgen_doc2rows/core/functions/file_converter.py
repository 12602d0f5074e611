# xgen_doc2rows/core/functions/file_converter.py
"""
BaseFileConverter - Abstract base class for source conversion

Turns raw source bytes into the object a handler reads rows from:
decoded text for delimited sources, a Workbook for spreadsheets,
a seekable stream for archives.

This is the FIRST step in the reading pipeline:
    Raw bytes -> FileConverter -> Workable object -> Handler builds the Table

Usage:
    class XLSXFileConverter(BaseFileConverter):
        def convert(self, file_data: bytes, file_stream: BinaryIO = None) -> Any:
            from openpyxl import load_workbook
            return load_workbook(BytesIO(file_data), data_only=True)

        def get_format_name(self) -> str:
            return "XLSX Workbook"
"""
import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Any, List, Optional, BinaryIO

import chardet

logger = logging.getLogger("table-processor")


class BaseFileConverter(ABC):
    """
    Abstract base class for source converters.

    Subclasses must implement:
    - convert(): Convert raw bytes to a workable object
    - get_format_name(): Return human-readable format name
    """

    @abstractmethod
    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        **kwargs
    ) -> Any:
        """
        Convert raw source bytes to a workable object.

        Args:
            file_data: Raw binary data
            file_stream: Optional stream over the same data
            **kwargs: Format-specific options

        Returns:
            Format-specific object (str, Workbook, BinaryIO, ...)
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name."""
        pass

    def validate(self, file_data: bytes) -> bool:
        """
        Check whether the data looks convertible by this converter.

        Default implementation accepts everything.
        """
        return True

    def close(self, converted_object: Any) -> None:
        """Release the converted object. Default does nothing."""
        pass


class PassThroughConverter(BaseFileConverter):
    """Returns a rewound stream over the data; used for archives."""

    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        **kwargs
    ) -> BinaryIO:
        if file_stream is not None:
            file_stream.seek(0)
            return file_stream
        return BytesIO(file_data)

    def get_format_name(self) -> str:
        return "Binary Stream"


class TextFileConverter(BaseFileConverter):
    """
    Converter for text-based sources.

    Decoding order:
    1. Caller-specified encoding
    2. UTF-8
    3. chardet detection (confidence above CHARDET_MIN_CONFIDENCE)
    4. Candidate encodings in order
    5. UTF-8 with replacement characters
    """

    DEFAULT_ENCODINGS = ['utf-8', 'utf-8-sig', 'cp949', 'euc-kr', 'latin-1']
    CHARDET_MIN_CONFIDENCE = 0.7
    CHARDET_SAMPLE_SIZE = 10000

    def __init__(self, encodings: Optional[List[str]] = None):
        self._encodings = encodings or self.DEFAULT_ENCODINGS
        self._detected_encoding: Optional[str] = None

    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        encoding: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Decode binary data to a text string.

        Args:
            file_data: Raw binary data
            file_stream: Ignored
            encoding: Preferred encoding (None for auto-detect)

        Returns:
            Decoded text
        """
        if encoding:
            try:
                result = file_data.decode(encoding)
                self._detected_encoding = encoding
                return result
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Preferred encoding {encoding} failed")

        try:
            result = file_data.decode('utf-8')
            self._detected_encoding = 'utf-8'
            return result
        except UnicodeDecodeError:
            pass

        detected = chardet.detect(file_data[:self.CHARDET_SAMPLE_SIZE])
        if detected and detected.get('encoding'):
            detected_enc = detected['encoding']
            confidence = detected.get('confidence', 0)
            logger.debug(f"chardet detected: {detected_enc} (confidence: {confidence})")
            if confidence > self.CHARDET_MIN_CONFIDENCE:
                try:
                    result = file_data.decode(detected_enc)
                    self._detected_encoding = detected_enc
                    return result
                except (UnicodeDecodeError, LookupError):
                    pass

        for enc in self._encodings:
            try:
                result = file_data.decode(enc)
                self._detected_encoding = enc
                return result
            except UnicodeDecodeError:
                continue

        self._detected_encoding = 'utf-8'
        return file_data.decode('utf-8', errors='replace')

    def get_format_name(self) -> str:
        if self._detected_encoding:
            return f"Text ({self._detected_encoding})"
        return "Text"

    @property
    def detected_encoding(self) -> Optional[str]:
        """Encoding picked by the last conversion."""
        return self._detected_encoding
