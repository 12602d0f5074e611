"""Shared test fixtures: in-memory XLSX/ZIP builders and an offline HTTP transport."""

import io
import zipfile
from typing import Dict, List, Optional

import pytest
import requests
from openpyxl import Workbook
from requests.adapters import BaseAdapter


def build_xlsx(sheets: Dict[str, List[list]]) -> bytes:
    """Build XLSX bytes with one worksheet per (name, rows) item."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def build_zip(entries: Dict[str, bytes]) -> bytes:
    """Build ZIP bytes from an entry name -> content mapping."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


class FakeAdapter(BaseAdapter):
    """Transport adapter answering every request from memory."""

    def __init__(self, body: bytes = b"", status_code: int = 200, exc: Optional[Exception] = None):
        super().__init__()
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.requests: List[requests.PreparedRequest] = []
        self.timeouts: list = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.exc is not None:
            raise self.exc
        response = requests.Response()
        response.status_code = self.status_code
        response.reason = "OK" if self.status_code == 200 else "Error"
        response.raw = io.BytesIO(self.body)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def xlsx_bytes():
    return build_xlsx({
        "Sheet1": [
            ["Symbol", "Price", "Qty"],
            ["ABC", 10.5, 3],
            ["XYZ", 2.0, None],
        ],
        "Other": [["only", "here"]],
    })


@pytest.fixture
def fake_http():
    """Return a factory mounting a FakeAdapter on a fresh session."""
    def _make(body: bytes = b"", status_code: int = 200, exc: Optional[Exception] = None):
        adapter = FakeAdapter(body=body, status_code=status_code, exc=exc)
        session = requests.Session()
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session, adapter
    return _make


class FakeUpload:
    """Minimal werkzeug FileStorage lookalike."""

    def __init__(self, filename: str, data: bytes, content_type: str = "application/octet-stream"):
        self.filename = filename
        self.content_type = content_type
        self._stream = io.BytesIO(data)

    def read(self) -> bytes:
        return self._stream.read()


@pytest.fixture
def make_upload():
    return FakeUpload


@pytest.fixture
def make_xlsx():
    return build_xlsx


@pytest.fixture
def make_zip():
    return build_zip
