# xgen_doc2rows/core/functions/remote_fetcher.py
"""
Remote Fetcher

Downloads a source over HTTP with a single GET. No retries; redirects
follow the requests defaults.

Usage Example:
    from xgen_doc2rows.core.functions.remote_fetcher import FetchConfig, RemoteFetcher

    fetcher = RemoteFetcher(FetchConfig(timeout=10.0))
    data = fetcher.fetch("https://example.com/report.zip")

    # Stream to disk and keep the bytes
    data = fetcher.download("https://example.com/report.zip", "report.zip")
"""
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Union

import requests

from xgen_doc2rows.core.errors import LocalFileError, RequestBuildError, TransportError

logger = logging.getLogger("table-processor.fetch")

DEFAULT_USER_AGENT = "PostmanRuntime/7.26.10"

DEFAULT_HEADERS = {
    "Accept": "*/*",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
}


@dataclass
class FetchConfig:
    """
    Remote Fetcher configuration.

    Attributes:
        user_agent: User-Agent header value
        timeout: Connect/read timeout in seconds (None waits forever)
        headers: Extra headers, merged over the defaults
        check_status: Reject non-2xx responses
        chunk_size: Streaming chunk size in bytes
    """
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = 30.0
    headers: Dict[str, str] = field(default_factory=dict)
    check_status: bool = True
    chunk_size: int = 64 * 1024

    @classmethod
    def from_value(cls, value: Union["FetchConfig", Mapping[str, Any], None]) -> "FetchConfig":
        """Build a FetchConfig from an instance, a dict or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        known = {f.name for f in fields(cls)}
        unknown = set(value) - known
        if unknown:
            raise ValueError(f"Unknown fetch config keys: {sorted(unknown)}")
        return cls(**dict(value))

    def build_headers(self) -> Dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        headers.update(DEFAULT_HEADERS)
        headers.update(self.headers)
        return headers


class RemoteFetcher:
    """
    HTTP GET downloader.

    Args:
        config: FetchConfig, dict of FetchConfig fields, or None for defaults
        session: requests.Session to send through (a private one by default)
    """

    def __init__(
        self,
        config: Union[FetchConfig, Mapping[str, Any], None] = None,
        session: Optional[requests.Session] = None,
    ):
        self._config = FetchConfig.from_value(config)
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> FetchConfig:
        return self._config

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def fetch(self, url: str) -> bytes:
        """
        Download the body of ``url`` into memory.

        Raises:
            RequestBuildError: Malformed or unsupported URL
            TransportError: Network failure, timeout or non-2xx status
        """
        return self._get(url, file_path=None)

    def download(self, url: str, file_path: str) -> bytes:
        """
        Download ``url``, writing the body to ``file_path`` as it streams.

        Returns:
            The downloaded bytes

        Raises:
            RequestBuildError: Malformed or unsupported URL
            TransportError: Network failure, timeout or non-2xx status
            LocalFileError: The local file cannot be created or written
        """
        return self._get(url, file_path=file_path)

    def _get(self, url: str, file_path: Optional[str]) -> bytes:
        logger.debug(f"fetch(+) {url}")
        try:
            prepared = self.session.prepare_request(
                requests.Request("GET", url, headers=self._config.build_headers())
            )
        except (requests.exceptions.MissingSchema, requests.exceptions.InvalidURL,
                requests.exceptions.InvalidSchema, ValueError) as e:
            raise RequestBuildError("fetch:001", cause=e) from e

        try:
            response = self.session.send(prepared, stream=True, timeout=self._config.timeout)
        except (requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL,
                requests.exceptions.MissingSchema) as e:
            raise RequestBuildError("fetch:001", cause=e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError("fetch:002", url, cause=e) from e

        with response:
            if self._config.check_status and not 200 <= response.status_code < 300:
                logger.error(f"Request to {url} returned HTTP {response.status_code}")
                raise TransportError(
                    "fetch:003",
                    url,
                    f"HTTP {response.status_code} {response.reason or ''}".rstrip(),
                    status_code=response.status_code,
                )
            data = self._read_body(response, url, file_path)

        logger.info(f"Fetched {url}: {len(data)} bytes (HTTP {response.status_code})")
        logger.debug("fetch(-)")
        return data

    def _read_body(self, response: requests.Response, url: str, file_path: Optional[str]) -> bytes:
        chunks = []
        out = None
        if file_path is not None:
            try:
                out = open(file_path, 'wb')
            except OSError as e:
                raise LocalFileError("fetch:004", file_path, cause=e) from e

        try:
            for chunk in response.iter_content(chunk_size=self._config.chunk_size):
                if not chunk:
                    continue
                chunks.append(chunk)
                if out is not None:
                    try:
                        out.write(chunk)
                    except OSError as e:
                        raise LocalFileError("fetch:005", file_path, cause=e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError("fetch:002", url, cause=e) from e
        finally:
            if out is not None:
                out.close()

        return b"".join(chunks)

    def close(self) -> None:
        """Close the session if this fetcher created it."""
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "RemoteFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "DEFAULT_USER_AGENT",
    "DEFAULT_HEADERS",
    "FetchConfig",
    "RemoteFetcher",
]
