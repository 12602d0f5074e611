# csv_helper/__init__.py
"""
CSV Helper module

Building blocks used by csv_handler.py and text_handler.py.

Modules:
- csv_constants: constants and data classes
- csv_encoding: BOM detection
- csv_file_converter: bytes -> text conversion
- csv_parser: delimited text parsing
"""

# Constants
from xgen_doc2rows.core.processor.csv_helper.csv_constants import (
    ENCODING_CANDIDATES,
    COMMA_DELIMITER,
    PIPE_DELIMITER,
    DELIMITER_NAMES,
    QUOTE_CHAR,
    DelimitedSourceInfo,
)

# Encoding
from xgen_doc2rows.core.processor.csv_helper.csv_encoding import detect_bom

# Converter
from xgen_doc2rows.core.processor.csv_helper.csv_file_converter import CSVFileConverter

# Parser
from xgen_doc2rows.core.processor.csv_helper.csv_parser import parse_delimited

__all__ = [
    # Constants
    "ENCODING_CANDIDATES",
    "COMMA_DELIMITER",
    "PIPE_DELIMITER",
    "DELIMITER_NAMES",
    "QUOTE_CHAR",
    "DelimitedSourceInfo",
    # Encoding
    "detect_bom",
    # Converter
    "CSVFileConverter",
    # Parser
    "parse_delimited",
]
