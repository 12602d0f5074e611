"""Tests for multipart upload extraction and local artifact storage."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import io
import os

import pytest

from xgen_doc2rows import FormFieldMissingError, LocalFileError, TableExtractionError
from xgen_doc2rows.core.functions import (
    LocalStorageBackend,
    UploadedFile,
    get_file_details,
    sanitize_file_name,
    temporary_artifact,
)


class StreamUpload:
    """starlette UploadFile lookalike exposing a ``file`` stream."""

    def __init__(self, filename, data):
        self.filename = filename
        self.content_type = "text/csv"
        self.file = io.BytesIO(data)


class TestGetFileDetails:

    def test_read_method_value(self, make_upload):
        form = {"file": make_upload("prices.CSV", b"a,b\n", "text/csv")}
        upload = get_file_details(form, "file")
        assert upload.file_name == "prices.CSV"
        assert upload.data == b"a,b\n"
        assert upload.content_type == "text/csv"
        assert upload.file_extension == "csv"

    def test_file_stream_value_is_rewound(self):
        value = StreamUpload("data.txt", b"a|b\n")
        value.file.read()
        upload = get_file_details({"file": value}, "file")
        assert upload.data == b"a|b\n"

    def test_tuple_value(self):
        upload = get_file_details({"doc": ("book.xlsx", b"PK")}, "doc")
        assert upload == UploadedFile(file_name="book.xlsx", data=b"PK")

    def test_raw_bytes_named_after_field(self):
        upload = get_file_details({"report.csv": b"1,2\n"}, "report.csv")
        assert upload.file_name == "report.csv"
        assert upload.data == b"1,2\n"

    def test_missing_field(self):
        with pytest.raises(FormFieldMissingError) as excinfo:
            get_file_details({"other": b""}, "file")
        assert excinfo.value.field_name == "file"
        assert excinfo.value.stage == "get_file_details:001"

    def test_empty_unnamed_upload_counts_as_missing(self, make_upload):
        with pytest.raises(FormFieldMissingError) as excinfo:
            get_file_details({"file": make_upload("", b"")}, "file")
        assert excinfo.value.field_name == "file"

    def test_empty_named_upload_is_kept(self, make_upload):
        upload = get_file_details({"file": make_upload("empty.csv", b"")}, "file")
        assert upload.file_name == "empty.csv"
        assert upload.data == b""

    def test_unreadable_value(self):
        with pytest.raises(TableExtractionError) as excinfo:
            get_file_details({"file": 42}, "file")
        assert excinfo.value.stage == "get_file_details:002"

    @pytest.mark.parametrize("name,expected", [
        ("a.XLSX", "xlsx"),
        ("dir\\b.txt", "txt"),
        ("noext", ""),
        ("archive.tar.zip", "zip"),
    ])
    def test_file_extension(self, name, expected):
        assert UploadedFile(file_name=name, data=b"").file_extension == expected


class TestStorage:

    @pytest.mark.parametrize("name,expected", [
        ("report.xlsx", "report.xlsx"),
        ("../../etc/passwd", "passwd"),
        ("C:\\temp\\book.xlsx", "book.xlsx"),
    ])
    def test_sanitize_file_name(self, name, expected):
        assert sanitize_file_name(name) == expected

    @pytest.mark.parametrize("name", ["", ".", "..", "dir/", "  "])
    def test_sanitize_rejects_empty_names(self, name):
        with pytest.raises(LocalFileError):
            sanitize_file_name(name)

    def test_save_and_delete(self, tmp_path):
        storage = LocalStorageBackend(str(tmp_path))
        path = storage.resolve("a.bin")
        storage.save(b"data", path)
        assert storage.exists(path)
        assert storage.delete(path) is True
        assert storage.delete(path) is False
        assert not storage.exists(path)

    def test_reserve_never_reuses_existing_file(self, tmp_path):
        existing = tmp_path / "book.xlsx"
        existing.write_bytes(b"keep me")
        storage = LocalStorageBackend(str(tmp_path))
        first = storage.reserve("book.xlsx")
        second = storage.reserve("../book.xlsx")
        assert len({first, second, str(existing)}) == 3
        assert first.endswith("book.xlsx")
        assert os.path.dirname(first) == str(tmp_path)
        assert existing.read_bytes() == b"keep me"

    def test_save_into_missing_directory(self, tmp_path):
        storage = LocalStorageBackend(str(tmp_path))
        with pytest.raises(LocalFileError) as excinfo:
            storage.save(b"data", str(tmp_path / "missing" / "a.bin"))
        assert excinfo.value.stage == "save:001"

    def test_temporary_artifact_removed_on_success(self, tmp_path):
        storage = LocalStorageBackend(str(tmp_path / "work"))
        with temporary_artifact(storage, "x.zip") as path:
            storage.save(b"x", path)
            assert os.path.exists(path)
        assert not os.path.exists(path)

    def test_temporary_artifact_removed_on_error(self, tmp_path):
        storage = LocalStorageBackend(str(tmp_path))
        with pytest.raises(RuntimeError):
            with temporary_artifact(storage, "x.zip") as path:
                storage.save(b"x", path)
                raise RuntimeError("boom")
        assert not os.path.exists(path)

    def test_temporary_artifact_never_created(self, tmp_path):
        storage = LocalStorageBackend(str(tmp_path))
        with temporary_artifact(storage, "unused.zip"):
            pass
        assert list(tmp_path.iterdir()) == []
