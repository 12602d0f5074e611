# xgen_doc2rows/core/processor/text_handler.py
"""
Text Handler - pipe-delimited source reader

Same quoting rules as CSV with "|" as the field separator.
"""
from xgen_doc2rows.core.processor.csv_handler import CSVHandler
from xgen_doc2rows.core.processor.csv_helper import PIPE_DELIMITER


class TextHandler(CSVHandler):
    """Pipe-delimited Text Source Handler Class"""

    delimiter = PIPE_DELIMITER
    stage_name = "read_text"


__all__ = ["TextHandler"]
