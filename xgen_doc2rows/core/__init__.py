# xgen_doc2rows/core/__init__.py
"""
Core - Table Extraction Core Module

Module Structure:
- table_processor: Main TableProcessor class
- errors: Error taxonomy (TableExtractionError and its leaf kinds)
- processor/: Source type-specific handlers
    - csv_handler: comma-delimited sources
    - text_handler: pipe-delimited sources
    - excel_handler: XLSX worksheets
    - archive_handler: ZIP archives
- functions/: Shared building blocks
    - table_ops: concatenation and block filters
    - remote_fetcher: HTTP download
    - form_upload: multipart form extraction
    - storage_backend: local artifacts

Usage:
    from xgen_doc2rows import TableProcessor
    from xgen_doc2rows.core.processor import CSVHandler
    from xgen_doc2rows.core.functions import filter_first_block
"""

# === Main Class ===
from xgen_doc2rows.core.table_processor import TableProcessor, create_processor

# === Table Operations ===
from xgen_doc2rows.core.functions.table_ops import (
    concat_tables,
    filter_first_block,
    filter_all_blocks,
)

# === Errors ===
from xgen_doc2rows.core.errors import (
    TableExtractionError,
    FormFieldMissingError,
    RequestBuildError,
    TransportError,
    LocalFileError,
    ArchiveOpenError,
    ArchiveEntryError,
    DecodeError,
    SheetNotFoundError,
    OpenSpreadsheetError,
)

# === Explicit Subpackage Imports ===
from xgen_doc2rows.core import processor
from xgen_doc2rows.core import functions

__all__ = [
    # Main Class
    "TableProcessor",
    "create_processor",
    # Table Operations
    "concat_tables",
    "filter_first_block",
    "filter_all_blocks",
    # Errors
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
    # Subpackages
    "processor",
    "functions",
]
