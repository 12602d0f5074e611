# xgen_doc2rows/__init__.py
"""
xgen_doc2rows Library

Extracts tables (rows of string cells) from CSV, pipe-delimited text,
XLSX and ZIP sources, and slices them around marker rows.

Package Structure:
- core: Table extraction core module
    - TableProcessor: Main entry class
    - processor: Source type handlers (CSV, text, XLSX, ZIP)
    - functions: Table operations, HTTP fetch, uploads, local artifacts

Usage:
    from xgen_doc2rows import TableProcessor

    processor = TableProcessor()
    rows = processor.extract_rows("report.csv")
    block = processor.filter_first_block("header", rows)
"""

__version__ = "0.1.0"

# Expose core classes at top level
from xgen_doc2rows.core import (
    TableProcessor,
    create_processor,
    concat_tables,
    filter_first_block,
    filter_all_blocks,
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
from xgen_doc2rows.core.processor import (
    ArchiveResult,
    decode_delimited,
    decode_spreadsheet,
    read_archive,
)
from xgen_doc2rows.core.functions import FetchConfig, RemoteFetcher

# Explicit subpackages
from xgen_doc2rows import core

__all__ = [
    "__version__",
    # Core classes
    "TableProcessor",
    "create_processor",
    "ArchiveResult",
    "FetchConfig",
    "RemoteFetcher",
    # Readers
    "decode_delimited",
    "decode_spreadsheet",
    "read_archive",
    # Table operations
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
    "core",
]
