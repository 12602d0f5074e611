# xgen_doc2rows/core/processor/base_handler.py
"""
BaseHandler - Abstract base class for source handlers

Defines the base interface for all handlers that turn a source into rows.
Holds the config passed from TableProcessor and a lazily created,
format-specific file converter.

Each handler should override:
- _create_file_converter(): Provide format-specific file converter
- extract_rows(): Build the Table from a CurrentFile

Reading Pipeline:
    1. file_converter.convert() - Raw bytes -> workable object (text, Workbook, stream)
    2. Format-specific row extraction

Usage Example:
    class CSVHandler(BaseHandler):
        def _create_file_converter(self):
            return CSVFileConverter()

        def extract_rows(self, current_file: CurrentFile, **kwargs) -> List[List[str]]:
            content, encoding = self.convert_file(current_file)
            return parse_delimited(content, ",")
"""
import io
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from xgen_doc2rows.core.functions.file_converter import (
    BaseFileConverter,
    PassThroughConverter,
)

if TYPE_CHECKING:
    from xgen_doc2rows.core.table_processor import CurrentFile

logger = logging.getLogger("table-processor")

DEFAULT_SHEET_NAME = "Sheet1"


class BaseHandler(ABC):
    """
    Abstract base class for source handlers.

    Attributes:
        config: Configuration dictionary passed from TableProcessor
        file_converter: Format-specific file converter (lazy-initialized)
        logger: Logging instance
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize BaseHandler.

        Args:
            config: Configuration dictionary (passed from TableProcessor)
        """
        self._config = config or {}
        self._file_converter: Optional[BaseFileConverter] = None
        self._logger = logging.getLogger(f"table-processor.{self.__class__.__name__}")

    def _create_file_converter(self) -> BaseFileConverter:
        """
        Create format-specific file converter.

        Override this method in subclasses. The default hands the data
        through as a stream.
        """
        return PassThroughConverter()

    @property
    def config(self) -> Dict[str, Any]:
        """Configuration dictionary."""
        return self._config

    @property
    def file_converter(self) -> BaseFileConverter:
        """Format-specific file converter (lazy-initialized)."""
        if self._file_converter is None:
            converter = self._create_file_converter()
            self._file_converter = converter if converter is not None else PassThroughConverter()
        return self._file_converter

    @property
    def logger(self) -> logging.Logger:
        """Logger instance."""
        return self._logger

    @property
    def sheet_name(self) -> str:
        """Worksheet read from spreadsheet sources."""
        return self._config.get("sheet_name") or DEFAULT_SHEET_NAME

    @property
    def encoding(self) -> Optional[str]:
        """Preferred text encoding, None for auto-detect."""
        return self._config.get("encoding")

    @abstractmethod
    def extract_rows(self, current_file: "CurrentFile", **kwargs) -> Any:
        """
        Read the source into a Table.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            **kwargs: Handler-specific options

        Returns:
            Table (list of rows), or an ArchiveResult for archives
        """
        pass

    def convert_file(self, current_file: "CurrentFile", **kwargs) -> Any:
        """
        Convert the source bytes to a workable object.

        Convenience wrapper around self.file_converter.convert().
        """
        file_data = current_file.get("file_data", b"")
        file_stream = self.get_file_stream(current_file)
        self._logger.debug(f"Converting {current_file.get('file_name', 'unknown')} as {self.file_converter.get_format_name()}")
        return self.file_converter.convert(file_data, file_stream, **kwargs)

    def extract_rows_from_bytes(self, data: bytes, file_name: str = "<bytes>", **kwargs) -> Any:
        """Read rows straight from a byte string."""
        return self.extract_rows(make_current_file(data, file_name), **kwargs)

    def get_file_stream(self, current_file: "CurrentFile") -> io.BytesIO:
        """
        Get a rewound BytesIO stream from current_file.

        Falls back to a fresh stream over file_data.
        """
        stream = current_file.get("file_stream")
        if stream is not None:
            stream.seek(0)
            return stream
        return io.BytesIO(current_file.get("file_data", b""))


def make_current_file(data: bytes, file_name: str, file_path: Optional[str] = None) -> "CurrentFile":
    """
    Build a CurrentFile dict around in-memory bytes.

    Args:
        data: Source bytes
        file_name: Name used for logging and extension lookup
        file_path: Original path, if the data came from disk

    Returns:
        CurrentFile dict
    """
    ext = file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else ""
    return {
        "file_path": file_path or file_name,
        "file_name": file_name,
        "file_extension": ext,
        "file_data": data,
        "file_stream": io.BytesIO(data),
        "file_size": len(data),
    }


__all__ = [
    "BaseHandler",
    "DEFAULT_SHEET_NAME",
    "make_current_file",
]
