# xgen_doc2rows/core/functions/__init__.py
"""
Functions - shared building blocks

Modules:
- file_converter: BaseFileConverter, TextFileConverter, PassThroughConverter
- table_ops: concat_tables, filter_first_block, filter_all_blocks
- storage_backend: local artifacts (LocalStorageBackend, temporary_artifact)
- remote_fetcher: HTTP download (FetchConfig, RemoteFetcher)
- form_upload: multipart form extraction (get_file_details, UploadedFile)
"""

from xgen_doc2rows.core.functions.file_converter import (
    BaseFileConverter,
    PassThroughConverter,
    TextFileConverter,
)
from xgen_doc2rows.core.functions.table_ops import (
    Row,
    Table,
    concat_tables,
    filter_first_block,
    filter_all_blocks,
)
from xgen_doc2rows.core.functions.storage_backend import (
    LocalStorageBackend,
    sanitize_file_name,
    temporary_artifact,
)
from xgen_doc2rows.core.functions.remote_fetcher import (
    FetchConfig,
    RemoteFetcher,
)
from xgen_doc2rows.core.functions.form_upload import (
    UploadedFile,
    get_file_details,
)

__all__ = [
    # Converters
    "BaseFileConverter",
    "PassThroughConverter",
    "TextFileConverter",
    # Table operations
    "Row",
    "Table",
    "concat_tables",
    "filter_first_block",
    "filter_all_blocks",
    # Storage
    "LocalStorageBackend",
    "sanitize_file_name",
    "temporary_artifact",
    # Fetch
    "FetchConfig",
    "RemoteFetcher",
    # Upload
    "UploadedFile",
    "get_file_details",
]
