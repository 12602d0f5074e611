# xgen_doc2rows/core/errors.py
"""
Error taxonomy for table extraction.

Every error carries a short stage identifier (function name and a sequence
number, e.g. "read_archive:006") so a failure can be traced to the exact
step, followed by the underlying cause's message.

Hierarchy:
    TableExtractionError
    ├── FormFieldMissingError
    ├── RequestBuildError
    ├── TransportError
    ├── LocalFileError
    ├── ArchiveOpenError
    ├── ArchiveEntryError
    ├── DecodeError
    ├── SheetNotFoundError
    └── OpenSpreadsheetError
"""
from typing import List, Optional, Sequence


class TableExtractionError(Exception):
    """
    Base class for all errors raised by xgen_doc2rows.

    Attributes:
        stage: Stage identifier ("function:sequence")
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        stage: str,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.stage = stage
        self.cause = cause
        if message is None:
            message = str(cause) if cause is not None else ""
        self.reason = message
        super().__init__(f"{stage} {message}".rstrip())


class FormFieldMissingError(TableExtractionError):
    """The requested multipart form field is not present."""

    def __init__(self, stage: str, field_name: str, message: Optional[str] = None):
        self.field_name = field_name
        super().__init__(stage, message or f"form field not found: {field_name!r}")


class RequestBuildError(TableExtractionError):
    """The HTTP request could not be built (malformed or unsupported URL)."""


class TransportError(TableExtractionError):
    """Network failure or non-2xx HTTP status."""

    def __init__(
        self,
        stage: str,
        url: str,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(stage, message, cause)


class LocalFileError(TableExtractionError):
    """A local artifact could not be created, written or deleted."""

    def __init__(
        self,
        stage: str,
        file_path: str,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.file_path = file_path
        super().__init__(stage, message, cause)


class ArchiveOpenError(TableExtractionError):
    """The byte stream is not a readable ZIP archive."""


class ArchiveEntryError(TableExtractionError):
    """One entry of an archive failed to decode."""

    def __init__(
        self,
        stage: str,
        entry_name: str,
        cause: Optional[BaseException] = None,
    ):
        self.entry_name = entry_name
        super().__init__(stage, f"{entry_name}: {cause}", cause)


class DecodeError(TableExtractionError):
    """
    A delimited text source could not be parsed.

    ``partial_rows`` holds the rows read before the failure. It is kept for
    diagnostics only; readers never return a partial table.
    """

    def __init__(
        self,
        stage: str,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
        line_number: Optional[int] = None,
        partial_rows: Optional[List[List[str]]] = None,
    ):
        self.line_number = line_number
        self.partial_rows = partial_rows or []
        super().__init__(stage, message, cause)


class SheetNotFoundError(TableExtractionError):
    """The requested worksheet does not exist in the workbook."""

    def __init__(self, stage: str, sheet_name: str, available: Sequence[str] = ()):
        self.sheet_name = sheet_name
        self.available = list(available)
        super().__init__(
            stage,
            f"sheet {sheet_name!r} does not exist (available: {', '.join(self.available) or 'none'})",
        )


class OpenSpreadsheetError(TableExtractionError):
    """The byte stream is not a valid XLSX container."""


__all__ = [
    "TableExtractionError",
    "FormFieldMissingError",
    "RequestBuildError",
    "TransportError",
    "LocalFileError",
    "ArchiveOpenError",
    "ArchiveEntryError",
    "DecodeError",
    "SheetNotFoundError",
    "OpenSpreadsheetError",
]
