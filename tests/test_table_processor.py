"""End-to-end tests for TableProcessor over local files, uploads and URLs."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from xgen_doc2rows import (
    ArchiveOpenError,
    ArchiveResult,
    FetchConfig,
    FormFieldMissingError,
    SheetNotFoundError,
    TableProcessor,
    TransportError,
    create_processor,
)


@pytest.fixture
def work_dir(tmp_path):
    return tmp_path / "work"


class TestConfiguration:

    def test_defaults(self):
        processor = TableProcessor()
        assert processor.config["sheet_name"] == "Sheet1"
        assert processor.config["fail_fast"] is True
        assert processor.config["fetch"] == FetchConfig()
        assert processor.supported_extensions == ["csv", "txt", "xlsx", "zip"]

    def test_keyword_overrides_config(self):
        processor = create_processor({"sheet_name": "A", "fetch": {"timeout": 3.0}}, sheet_name="B")
        assert processor.config["sheet_name"] == "B"
        assert processor.config["fetch"].timeout == 3.0

    def test_is_supported(self):
        processor = TableProcessor()
        assert processor.is_supported(".CSV")
        assert processor.is_supported("zip")
        assert not processor.is_supported("pdf")

    def test_context_manager(self):
        with TableProcessor() as processor:
            assert "TableProcessor" in repr(processor)


class TestLocalFiles:

    def test_csv(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_bytes(b"a,b\n1,2\n")
        assert TableProcessor().extract_rows(path) == [["a", "b"], ["1", "2"]]

    def test_txt(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_bytes(b"a|b\n")
        assert TableProcessor().extract_rows(str(path)) == [["a", "b"]]

    def test_xlsx(self, tmp_path, xlsx_bytes):
        path = tmp_path / "book.xlsx"
        path.write_bytes(xlsx_bytes)
        assert TableProcessor().extract_rows(path, sheet_name="Other") == [["only", "here"]]

    def test_zip(self, tmp_path, make_zip):
        path = tmp_path / "bundle.zip"
        path.write_bytes(make_zip({"a.csv": b"1\n", "b.txt": b"2|3\n"}))
        result = TableProcessor().extract_rows(path)
        assert isinstance(result, ArchiveResult)
        assert dict(result.items()) == {"a.csv": [["1"]], "b.txt": [["2", "3"]]}

    def test_explicit_extension(self, tmp_path):
        path = tmp_path / "export.dat"
        path.write_bytes(b"x|y\n")
        assert TableProcessor().extract_rows(path, file_extension="txt") == [["x", "y"]]

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "doc.pdf"
        path.write_bytes(b"%PDF")
        with pytest.raises(ValueError):
            TableProcessor().extract_rows(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TableProcessor().extract_rows(tmp_path / "missing.csv")


class TestReadUpload:

    def test_csv_upload(self, make_upload, work_dir):
        processor = TableProcessor(work_directory=str(work_dir))
        form = {"file": make_upload("prices.csv", b"a,b\n1,2\n")}
        assert processor.read_upload(form, "file") == [["a", "b"], ["1", "2"]]

    def test_txt_upload(self, make_upload):
        form = {"file": make_upload("prices.txt", b"a|b\n")}
        assert TableProcessor().read_upload(form, "file") == [["a", "b"]]

    def test_xlsx_upload_artifact_removed(self, make_upload, xlsx_bytes, work_dir):
        processor = TableProcessor(work_directory=str(work_dir))
        form = {"file": make_upload("book.xlsx", xlsx_bytes)}
        rows = processor.read_upload(form, "file")
        assert rows[0] == ["Symbol", "Price", "Qty"]
        assert list(work_dir.iterdir()) == []

    def test_xlsx_upload_artifact_removed_on_error(self, make_upload, xlsx_bytes, work_dir):
        processor = TableProcessor(work_directory=str(work_dir), sheet_name="Missing")
        form = {"file": make_upload("book.xlsx", xlsx_bytes)}
        with pytest.raises(SheetNotFoundError):
            processor.read_upload(form, "file")
        assert list(work_dir.iterdir()) == []

    def test_upload_name_cannot_escape_work_directory(self, make_upload, xlsx_bytes, tmp_path, work_dir):
        processor = TableProcessor(work_directory=str(work_dir))
        form = {"file": make_upload("../escaped.xlsx", xlsx_bytes)}
        processor.read_upload(form, "file")
        assert not (tmp_path / "escaped.xlsx").exists()
        assert list(work_dir.iterdir()) == []

    def test_xlsx_upload_leaves_existing_file_alone(self, make_upload, xlsx_bytes, work_dir):
        work_dir.mkdir()
        existing = work_dir / "book.xlsx"
        existing.write_bytes(b"not the upload")
        processor = TableProcessor(work_directory=str(work_dir))
        rows = processor.read_upload({"file": make_upload("book.xlsx", xlsx_bytes)}, "file")
        assert rows[0] == ["Symbol", "Price", "Qty"]
        assert existing.read_bytes() == b"not the upload"
        assert list(work_dir.iterdir()) == [existing]

    def test_zip_upload(self, make_upload, make_zip):
        form = {"file": make_upload("bundle.zip", make_zip({"a.csv": b"1,2\n"}))}
        result = TableProcessor().read_upload(form, "file")
        assert result["a.csv"] == [["1", "2"]]

    def test_extension_override(self):
        form = {"file": ("blob", b"a|b\n")}
        assert TableProcessor().read_upload(form, "file", file_extension="txt") == [["a", "b"]]

    def test_missing_field(self, make_upload):
        with pytest.raises(FormFieldMissingError):
            TableProcessor().read_upload({"other": make_upload("a.csv", b"")}, "file")

    def test_unsupported_upload(self, make_upload):
        with pytest.raises(ValueError):
            TableProcessor().read_upload({"file": make_upload("a.docx", b"")}, "file")


class TestRemoteSources:

    def test_fetch(self, fake_http):
        session, _ = fake_http(body=b"payload")
        assert TableProcessor(session=session).fetch("https://example.com/p") == b"payload"

    def test_fetch_archive(self, fake_http, make_zip, xlsx_bytes, work_dir):
        body = make_zip({"prices.csv": b"a,b\n", "book.xlsx": xlsx_bytes, "readme.md": b"#"})
        session, adapter = fake_http(body=body)
        processor = TableProcessor(work_directory=str(work_dir), session=session)
        result = processor.fetch_archive("https://example.com/bhav.zip", "bhav.zip")
        assert list(result) == ["prices.csv", "book.xlsx"]
        assert result.skipped == ["readme.md"]
        assert adapter.requests[0].url == "https://example.com/bhav.zip"
        assert list(work_dir.iterdir()) == []

    def test_fetch_archive_removes_artifact_on_bad_archive(self, fake_http, work_dir):
        session, _ = fake_http(body=b"<html>not a zip</html>")
        processor = TableProcessor(work_directory=str(work_dir), session=session)
        with pytest.raises(ArchiveOpenError):
            processor.fetch_archive("https://example.com/bhav.zip", "bhav.zip")
        assert list(work_dir.iterdir()) == []

    def test_fetch_archive_http_error(self, fake_http, work_dir):
        session, _ = fake_http(body=b"", status_code=503)
        processor = TableProcessor(work_directory=str(work_dir), session=session)
        with pytest.raises(TransportError):
            processor.fetch_archive("https://example.com/bhav.zip", "bhav.zip")
        assert list(work_dir.iterdir()) == []

    def test_fetched_tables_combine_with_filters(self, fake_http, make_zip, work_dir):
        body = make_zip({
            "a.csv": b"Title\nSYMBOL,PRICE\nABC,1\n,\nfooter\n",
            "b.csv": b"SYMBOL,PRICE\nXYZ,2\n",
        })
        session, _ = fake_http(body=body)
        processor = TableProcessor(work_directory=str(work_dir), session=session)
        result = processor.fetch_archive("https://example.com/x.zip", "x.zip")
        combined = processor.concat_tables(
            processor.filter_first_block("symbol", result["a.csv"]),
            processor.filter_all_blocks("symbol", result["b.csv"]),
        )
        assert combined == [["SYMBOL", "PRICE"], ["ABC", "1"], ["XYZ", "2"]]
