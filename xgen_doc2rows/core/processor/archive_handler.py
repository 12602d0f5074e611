# xgen_doc2rows/core/processor/archive_handler.py
"""
Archive Handler - ZIP archive reader

Visits every entry of a ZIP archive, dispatches recognised entries by
extension and collects one Table per entry:

    .csv  -> CSVHandler (comma)
    .txt  -> TextHandler (pipe)
    .xlsx -> ExcelHandler (configured sheet name)

Other entries are skipped. Extension matching is exact and case-sensitive.
"""
import logging
import zipfile
import zlib
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING, Union

from xgen_doc2rows.core.errors import (
    ArchiveEntryError,
    ArchiveOpenError,
    TableExtractionError,
)
from xgen_doc2rows.core.processor.base_handler import BaseHandler, make_current_file
from xgen_doc2rows.core.processor.csv_handler import CSVHandler
from xgen_doc2rows.core.processor.excel_handler import ExcelHandler
from xgen_doc2rows.core.processor.text_handler import TextHandler

if TYPE_CHECKING:
    from xgen_doc2rows.core.table_processor import CurrentFile

logger = logging.getLogger("table-processor")

CSV_EXTENSION = ".csv"
TEXT_EXTENSION = ".txt"
XLSX_EXTENSION = ".xlsx"


class ArchiveResult:
    """
    Container for the tables decoded from one archive.

    Behaves like a read-only mapping of entry name -> Table, in archive
    order. Entries that failed while errors were being collected are in
    ``errors`` instead. If an archive repeats an entry name, the later
    entry replaces the earlier one (a warning is logged).

    Example:
        >>> result = handler.read_archive(data)
        >>> for name, rows in result.items():
        ...     print(name, len(rows))
    """

    def __init__(
        self,
        tables: Optional[Dict[str, List[List[str]]]] = None,
        errors: Optional[Dict[str, TableExtractionError]] = None,
        skipped: Optional[List[str]] = None,
    ):
        self._tables = tables if tables is not None else {}
        self._errors = errors if errors is not None else {}
        self._skipped = skipped if skipped is not None else []

    @property
    def tables(self) -> Dict[str, List[List[str]]]:
        """Entry name -> Table for every decoded entry."""
        return self._tables

    @property
    def errors(self) -> Dict[str, TableExtractionError]:
        """Entry name -> error for entries that failed (collect mode only)."""
        return self._errors

    @property
    def skipped(self) -> List[str]:
        """Names of entries with an unrecognised extension."""
        return self._skipped

    @property
    def ok(self) -> bool:
        """True when no entry failed."""
        return not self._errors

    def items(self):
        return self._tables.items()

    def keys(self):
        return self._tables.keys()

    def values(self):
        return self._tables.values()

    def get(self, entry_name: str, default: Any = None) -> Any:
        return self._tables.get(entry_name, default)

    def __getitem__(self, entry_name: str) -> List[List[str]]:
        return self._tables[entry_name]

    def __contains__(self, entry_name: object) -> bool:
        return entry_name in self._tables

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"ArchiveResult(tables={len(self._tables)}, errors={len(self._errors)}, skipped={len(self._skipped)})"


def entry_extension(entry_name: str) -> str:
    """
    Return the extension of an archive entry name.

    The suffix of the last path element starting at its last dot,
    or "" when there is none. Case is preserved.
    """
    base = entry_name.rsplit('/', 1)[-1]
    idx = base.rfind('.')
    if idx < 0:
        return ""
    return base[idx:]


class ArchiveHandler(BaseHandler):
    """
    ZIP Archive Handler

    Usage:
        handler = ArchiveHandler(config={"sheet_name": "Sheet1", "fail_fast": True})
        result = handler.read_archive(zip_bytes)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self._entry_handlers: Optional[Dict[str, BaseHandler]] = None

    @property
    def fail_fast(self) -> bool:
        """Abort on the first failing entry (default) or collect errors."""
        return bool(self._config.get("fail_fast", True))

    def _get_entry_handlers(self) -> Dict[str, BaseHandler]:
        """Build and cache the extension -> handler registry."""
        if self._entry_handlers is None:
            self._entry_handlers = {
                CSV_EXTENSION: CSVHandler(config=self._config),
                TEXT_EXTENSION: TextHandler(config=self._config),
                XLSX_EXTENSION: ExcelHandler(config=self._config),
            }
        return self._entry_handlers

    def extract_rows(
        self,
        current_file: "CurrentFile",
        fail_fast: Optional[bool] = None,
        **kwargs
    ) -> ArchiveResult:
        """
        Read every recognised entry of an archive.

        Args:
            current_file: CurrentFile dict containing the archive bytes
            fail_fast: Override the configured error policy

        Returns:
            ArchiveResult keyed by entry name
        """
        return self.read_archive_stream(
            self.convert_file(current_file),
            source=current_file.get("file_path", "unknown"),
            fail_fast=fail_fast,
        )

    def read_archive(self, data: bytes, fail_fast: Optional[bool] = None) -> ArchiveResult:
        """
        Read an archive held in memory.

        Raises:
            ArchiveOpenError: If the data is not a ZIP archive
            ArchiveEntryError: On the first failing entry, in fail-fast mode
        """
        return self.extract_rows(make_current_file(data, "<archive>.zip"), fail_fast=fail_fast)

    def read_archive_file(self, file_path: str, fail_fast: Optional[bool] = None) -> ArchiveResult:
        """
        Read an archive from disk.

        Raises:
            ArchiveOpenError: If the file is missing or not a ZIP archive
            ArchiveEntryError: On the first failing entry, in fail-fast mode
        """
        return self.read_archive_stream(file_path, source=file_path, fail_fast=fail_fast)

    def read_archive_stream(
        self,
        source_file: Union[str, Any],
        source: str = "unknown",
        fail_fast: Optional[bool] = None,
    ) -> ArchiveResult:
        """
        Read an archive from a path or a seekable binary stream.

        Args:
            source_file: Path or file-like object accepted by zipfile.ZipFile
            source: Name used in log messages
            fail_fast: Override the configured error policy

        Returns:
            ArchiveResult keyed by entry name
        """
        if fail_fast is None:
            fail_fast = self.fail_fast
        self.logger.debug(f"read_archive(+) {source}")

        try:
            archive = zipfile.ZipFile(source_file)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError, ValueError) as e:
            self.logger.error(f"Cannot open archive {source}: {e}")
            raise ArchiveOpenError("read_archive:005", cause=e) from e

        result = ArchiveResult()
        handlers = self._get_entry_handlers()

        with archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue

                handler = handlers.get(entry_extension(info.filename))
                if handler is None:
                    self.logger.debug(f"Skipping unrecognised entry: {info.filename}")
                    result.skipped.append(info.filename)
                    continue

                if info.filename in result.tables or info.filename in result.errors:
                    self.logger.warning(f"Duplicate archive entry {info.filename}, later entry wins")
                    result.tables.pop(info.filename, None)
                    result.errors.pop(info.filename, None)

                try:
                    result.tables[info.filename] = self._read_entry(archive, info, handler)
                except ArchiveEntryError as e:
                    if fail_fast:
                        self.logger.error(f"Archive entry failed, aborting {source}: {e}")
                        raise
                    self.logger.warning(f"Archive entry failed, continuing: {e}")
                    result.errors[info.filename] = e

        self.logger.info(
            f"Archive processed {source}: {len(result.tables)} tables, "
            f"{len(result.errors)} errors, {len(result.skipped)} skipped"
        )
        self.logger.debug("read_archive(-)")
        return result

    def _read_entry(
        self,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        handler: BaseHandler,
    ) -> List[List[str]]:
        """Open one entry as its own stream and decode it."""
        try:
            with archive.open(info) as entry:
                data = entry.read()
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError, EOFError) as e:
            raise ArchiveEntryError("read_archive:006", info.filename, cause=e) from e

        try:
            return handler.extract_rows(make_current_file(data, info.filename))
        except TableExtractionError as e:
            raise ArchiveEntryError("read_archive:006", info.filename, cause=e) from e


def read_archive(data: bytes, sheet_name: Optional[str] = None, fail_fast: bool = True) -> ArchiveResult:
    """
    Read every recognised entry of a ZIP archive held in memory.

    Args:
        data: ZIP bytes
        sheet_name: Worksheet read from .xlsx entries (default "Sheet1")
        fail_fast: Abort on the first failing entry, or collect errors

    Returns:
        ArchiveResult keyed by entry name
    """
    config = {"fail_fast": fail_fast}
    if sheet_name:
        config["sheet_name"] = sheet_name
    return ArchiveHandler(config=config).read_archive(data)


__all__ = [
    "ArchiveHandler",
    "ArchiveResult",
    "entry_extension",
    "read_archive",
]
