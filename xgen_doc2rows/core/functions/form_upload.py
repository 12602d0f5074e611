# xgen_doc2rows/core/functions/form_upload.py
"""
Upload extraction

Pulls an uploaded file out of a parsed multipart form. The form is any
mapping of field name -> uploaded value; supported values are:

- objects with a ``filename`` and a ``file`` stream (starlette UploadFile)
- objects with a ``filename`` and a ``read()`` method (werkzeug FileStorage)
- ``(file_name, bytes)`` tuples
- raw ``bytes``
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from xgen_doc2rows.core.errors import FormFieldMissingError, TableExtractionError

logger = logging.getLogger("table-processor")


@dataclass
class UploadedFile:
    """Content and name of one uploaded file."""
    file_name: str
    data: bytes
    content_type: Optional[str] = None

    @property
    def file_extension(self) -> str:
        """Lowercase extension without the dot, "" if none."""
        base = self.file_name.replace("\\", "/").rsplit("/", 1)[-1]
        if '.' not in base:
            return ""
        return base.rsplit('.', 1)[-1].lower()


def _read_value(value: Any) -> bytes:
    stream = getattr(value, "file", None)
    if stream is not None and hasattr(stream, "read"):
        if hasattr(stream, "seek"):
            stream.seek(0)
        return stream.read()
    if hasattr(value, "read"):
        return value.read()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"unsupported upload value: {type(value).__name__}")


def get_file_details(form: Mapping[str, Any], field_name: str) -> UploadedFile:
    """
    Read the uploaded file stored under ``field_name``.

    Args:
        form: Parsed multipart form
        field_name: Name of the file field

    Returns:
        UploadedFile with the whole content buffered

    Raises:
        FormFieldMissingError: If the field is absent or empty
        TableExtractionError: If the value cannot be read
    """
    logger.debug(f"get_file_details(+) {field_name}")

    value = form.get(field_name) if form is not None else None
    if value is None:
        raise FormFieldMissingError("get_file_details:001", field_name)

    if isinstance(value, tuple) and len(value) == 2:
        file_name, data = value
        upload = UploadedFile(file_name=file_name or field_name, data=bytes(data))
    else:
        try:
            data = _read_value(value)
        except (TypeError, OSError) as e:
            raise TableExtractionError("get_file_details:002", cause=e) from e
        if not data and getattr(value, "filename", None) == "":
            # browsers send an unnamed empty part when no file was chosen
            raise FormFieldMissingError("get_file_details:001", field_name)
        upload = UploadedFile(
            file_name=getattr(value, "filename", None) or field_name,
            data=data,
            content_type=getattr(value, "content_type", None),
        )

    logger.debug(f"get_file_details(-) {upload.file_name}: {len(upload.data)} bytes")
    return upload


__all__ = ["UploadedFile", "get_file_details"]
