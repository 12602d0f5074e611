"""TableProcessor - Table Extraction Class

Main entry point of the xgen_doc2rows library. Reads CSV, pipe-delimited
text, XLSX and ZIP sources from local files, multipart uploads or URLs
into tables (lists of rows of string cells), and exposes the table
operations (concatenation, block filtering).

Usage Example:
    from xgen_doc2rows import TableProcessor

    processor = TableProcessor(config={"sheet_name": "Data"})

    # Local file, dispatched by extension
    rows = processor.extract_rows("report.csv")

    # ZIP archive over HTTP, one table per entry
    result = processor.fetch_archive("https://example.com/bhav.zip", "bhav.zip")
    for entry_name, rows in result.items():
        block = processor.filter_first_block("symbol", rows)
"""

import io
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypedDict, Union

import requests

from xgen_doc2rows.core.functions.form_upload import get_file_details
from xgen_doc2rows.core.functions.remote_fetcher import FetchConfig, RemoteFetcher
from xgen_doc2rows.core.functions.storage_backend import LocalStorageBackend, temporary_artifact
from xgen_doc2rows.core.functions.table_ops import (
    concat_tables,
    filter_all_blocks,
    filter_first_block,
)
from xgen_doc2rows.core.processor.archive_handler import ArchiveHandler, ArchiveResult
from xgen_doc2rows.core.processor.base_handler import BaseHandler, DEFAULT_SHEET_NAME, make_current_file
from xgen_doc2rows.core.processor.csv_handler import CSVHandler
from xgen_doc2rows.core.processor.excel_handler import ExcelHandler
from xgen_doc2rows.core.processor.text_handler import TextHandler

logger = logging.getLogger("table-processor")

Table = List[List[str]]


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing source information.

    Attributes:
        file_path: Path of the original file (or a descriptive name)
        file_name: File name (including extension)
        file_extension: File extension (lowercase, without dot)
        file_data: Binary data of the file
        file_stream: BytesIO stream (reusable)
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_extension: str
    file_data: bytes
    file_stream: io.BytesIO
    file_size: int


class TableProcessor:
    """
    xgen_doc2rows Main Table Extraction Class

    Attributes:
        config: Configuration dictionary
        supported_extensions: List of supported file extensions

    Example:
        >>> processor = TableProcessor()
        >>> rows = processor.extract_rows("data.csv")
        >>> block = processor.filter_first_block("header", rows)
    """

    # === Supported File Type Classifications ===
    DELIMITED_TYPES = frozenset(['csv', 'txt'])
    SPREADSHEET_TYPES = frozenset(['xlsx'])
    ARCHIVE_TYPES = frozenset(['zip'])

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        sheet_name: Optional[str] = None,
        encoding: Optional[str] = None,
        work_directory: Optional[str] = None,
        fail_fast: Optional[bool] = None,
        fetch_config: Optional[Union[FetchConfig, Dict[str, Any]]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize TableProcessor.

        Args:
            config: Configuration dictionary
                   - sheet_name: Worksheet read from xlsx sources (default "Sheet1")
                   - encoding: Preferred text encoding (default: auto-detect)
                   - work_directory: Where local artifacts are written (default ".")
                   - fail_fast: Archive error policy (default True)
                   - fetch: FetchConfig or dict of its fields
            sheet_name: Overrides config["sheet_name"]
            encoding: Overrides config["encoding"]
            work_directory: Overrides config["work_directory"]
            fail_fast: Overrides config["fail_fast"]
            fetch_config: Overrides config["fetch"]
            session: requests.Session used by the Remote Fetcher
        """
        self._config: Dict[str, Any] = dict(config or {})
        overrides = {
            "sheet_name": sheet_name,
            "encoding": encoding,
            "work_directory": work_directory,
            "fail_fast": fail_fast,
            "fetch": fetch_config,
        }
        for key, value in overrides.items():
            if value is not None:
                self._config[key] = value

        self._config.setdefault("sheet_name", DEFAULT_SHEET_NAME)
        self._config.setdefault("work_directory", ".")
        self._config.setdefault("fail_fast", True)
        self._config["fetch"] = FetchConfig.from_value(self._config.get("fetch"))

        self._logger = logging.getLogger("table-processor")
        self._storage = LocalStorageBackend(self._config["work_directory"])
        self._fetcher = RemoteFetcher(self._config["fetch"], session=session)
        self._supported_extensions = sorted(
            self.DELIMITED_TYPES | self.SPREADSHEET_TYPES | self.ARCHIVE_TYPES
        )

        self._csv_handler = CSVHandler(config=self._config)
        self._text_handler = TextHandler(config=self._config)
        self._excel_handler = ExcelHandler(config=self._config)
        self._archive_handler = ArchiveHandler(config=self._config)
        self._handler_registry: Dict[str, BaseHandler] = {
            'csv': self._csv_handler,
            'txt': self._text_handler,
            'xlsx': self._excel_handler,
            'zip': self._archive_handler,
        }

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def supported_extensions(self) -> List[str]:
        return list(self._supported_extensions)

    @property
    def storage(self) -> LocalStorageBackend:
        return self._storage

    @property
    def fetcher(self) -> RemoteFetcher:
        return self._fetcher

    def is_supported(self, file_extension: str) -> bool:
        return file_extension.lower().lstrip('.') in self._handler_registry

    # =========================================================================
    # Public Methods - Byte Sources
    # =========================================================================

    def decode_delimited(self, data: bytes, delimiter: str = ",") -> Table:
        """
        Decode delimited bytes into a Table.

        Raises:
            ValueError: If delimiter is not a single character
            DecodeError: On malformed quoting
        """
        return self._csv_handler.extract_rows_from_bytes(data, delimiter=delimiter)

    def read_csv(self, data: bytes) -> Table:
        """Decode comma-separated bytes."""
        return self._csv_handler.extract_rows_from_bytes(data, "<bytes>.csv")

    def read_text(self, data: bytes) -> Table:
        """Decode pipe-delimited bytes."""
        return self._text_handler.extract_rows_from_bytes(data, "<bytes>.txt")

    def decode_spreadsheet(self, data: bytes, sheet_name: Optional[str] = None) -> Table:
        """
        Decode XLSX bytes and return one worksheet.

        Raises:
            OpenSpreadsheetError: If the data is not a valid XLSX container
            SheetNotFoundError: If the worksheet does not exist
        """
        return self._excel_handler.extract_rows_from_bytes(data, "<bytes>.xlsx", sheet_name=sheet_name)

    def read_archive(self, data: bytes, fail_fast: Optional[bool] = None) -> ArchiveResult:
        """
        Read every recognised entry of a ZIP archive.

        Raises:
            ArchiveOpenError: If the data is not a ZIP archive
            ArchiveEntryError: On the first failing entry, in fail-fast mode
        """
        return self._archive_handler.read_archive(data, fail_fast=fail_fast)

    # =========================================================================
    # Public Methods - Local Files
    # =========================================================================

    def extract_rows(
        self,
        file_path: Union[str, Path],
        file_extension: Optional[str] = None,
        **kwargs
    ) -> Union[Table, ArchiveResult]:
        """
        Read a local file, dispatched by extension.

        Args:
            file_path: File path
            file_extension: File extension (if None, taken from file_path)
            **kwargs: Handler-specific options (sheet_name, encoding, fail_fast)

        Returns:
            Table, or ArchiveResult for zip files

        Raises:
            FileNotFoundError: If file cannot be found
            ValueError: If file format is not supported
        """
        file_path_str = str(file_path)

        if not os.path.exists(file_path_str):
            raise FileNotFoundError(f"File not found: {file_path_str}")

        if file_extension is None:
            file_extension = os.path.splitext(file_path_str)[1]
        ext = file_extension.lower().lstrip('.')

        if not self.is_supported(ext):
            raise ValueError(f"Unsupported file format: {ext}")

        self._logger.info(f"Extracting rows from: {file_path_str} (ext={ext})")
        current_file = self._create_current_file(file_path_str, ext)
        return self._handler_registry[ext].extract_rows(current_file, **kwargs)

    # =========================================================================
    # Public Methods - Uploads
    # =========================================================================

    def read_upload(
        self,
        form: Mapping[str, Any],
        field_name: str,
        file_extension: Optional[str] = None,
    ) -> Union[Table, ArchiveResult]:
        """
        Read the file uploaded under ``field_name`` of a multipart form.

        The format comes from ``file_extension`` or the upload's filename.
        Spreadsheets are written to the work directory under their
        sanitized filename, read from disk and removed again.

        Raises:
            FormFieldMissingError: If the field is absent
            ValueError: If the format is not supported
            LocalFileError: If the spreadsheet artifact cannot be written or removed
        """
        upload = get_file_details(form, field_name)
        ext = (file_extension or upload.file_extension).lower().lstrip('.')
        if not self.is_supported(ext):
            raise ValueError(f"Unsupported file format: {ext}")

        self._logger.info(f"Reading upload {upload.file_name} from field {field_name!r} (ext={ext})")

        if ext in self.SPREADSHEET_TYPES:
            with temporary_artifact(self._storage, upload.file_name) as artifact_path:
                self._storage.save(upload.data, artifact_path)
                return self._excel_handler.extract_rows_from_path(artifact_path)

        current_file = make_current_file(upload.data, upload.file_name)
        return self._handler_registry[ext].extract_rows(current_file)

    # =========================================================================
    # Public Methods - Remote Sources
    # =========================================================================

    def fetch(self, url: str) -> bytes:
        """Download ``url`` into memory."""
        return self._fetcher.fetch(url)

    def fetch_archive(self, url: str, file_name: str, fail_fast: Optional[bool] = None) -> ArchiveResult:
        """
        Download a ZIP archive and read every recognised entry.

        The body is written to ``file_name`` (sanitized) inside the work
        directory, read back as an archive, and the file is removed on
        success and on failure.

        Raises:
            RequestBuildError, TransportError: Download failures
            LocalFileError: Artifact cannot be written or removed
            ArchiveOpenError, ArchiveEntryError: Archive failures
        """
        self._logger.debug(f"fetch_archive(+) {url}")
        with temporary_artifact(self._storage, file_name) as artifact_path:
            self._fetcher.download(url, artifact_path)
            result = self._archive_handler.read_archive_file(artifact_path, fail_fast=fail_fast)
        self._logger.debug("fetch_archive(-)")
        return result

    # =========================================================================
    # Public Methods - Table Operations
    # =========================================================================

    @staticmethod
    def concat_tables(first: Sequence[List[str]], second: Sequence[List[str]]) -> Table:
        """Append the rows of ``second`` to those of ``first`` in a new table."""
        return concat_tables(first, second)

    @staticmethod
    def filter_first_block(marker: str, rows: Sequence[List[str]]) -> Table:
        """Block starting at the last row whose first cell contains ``marker``."""
        return filter_first_block(marker, rows)

    @staticmethod
    def filter_all_blocks(marker: str, rows: Sequence[List[str]]) -> Table:
        """Blocks following every row whose first cell contains ``marker``."""
        return filter_all_blocks(marker, rows)

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _create_current_file(self, file_path: str, ext: str) -> CurrentFile:
        """
        Create a CurrentFile dict from a file path.

        Reads the file at binary level.
        """
        file_path = os.path.abspath(file_path)
        with open(file_path, 'rb') as f:
            file_data = f.read()

        current_file = make_current_file(file_data, os.path.basename(file_path), file_path)
        current_file["file_extension"] = ext
        return current_file

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def close(self) -> None:
        """Release the HTTP session."""
        self._fetcher.close()

    def __enter__(self) -> "TableProcessor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TableProcessor(supported_extensions={self._supported_extensions})"


# === Module-level Convenience Functions ===

def create_processor(config: Optional[Dict[str, Any]] = None, **kwargs) -> TableProcessor:
    """
    Create a TableProcessor instance.

    Example:
        >>> processor = create_processor()
        >>> processor = create_processor({"sheet_name": "Data"}, work_directory="tmp")
    """
    return TableProcessor(config=config, **kwargs)


__all__ = [
    "TableProcessor",
    "CurrentFile",
    "create_processor",
]
