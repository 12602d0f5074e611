# csv_helper/csv_encoding.py
"""
Byte order mark detection for delimited sources.
"""
import logging
from typing import Optional

logger = logging.getLogger("table-processor")


def detect_bom(data: bytes) -> Optional[str]:
    """
    Detect a BOM (Byte Order Mark).

    Args:
        data: Raw source bytes

    Returns:
        Encoding implied by the BOM, or None
    """
    if data.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'
    elif data.startswith(b'\xff\xfe\x00\x00'):
        return 'utf-32'
    elif data.startswith(b'\x00\x00\xfe\xff'):
        return 'utf-32'
    elif data.startswith(b'\xff\xfe'):
        return 'utf-16'
    elif data.startswith(b'\xfe\xff'):
        return 'utf-16'
    return None
