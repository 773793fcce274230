"""
HTTP transport for vocabulary retrieval.

The ingestion pipeline only needs a status line, a redirect header and a
body chunk stream, so the transport is a small protocol. RequestsTransport is
the default implementation; tests substitute a fake.
"""

import logging
from typing import Iterator, Mapping, Optional, Protocol, runtime_checkable

import requests

from .constants import NetworkDefaults
from .errors import TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class TransportResponse(Protocol):
    """An in-flight response: status, headers and a lazily read body."""
    status_code: int
    reason: str
    headers: Mapping[str, str]
    
    def iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        """Yield body chunks; raise TransportError on a mid-stream failure."""
        ...
    
    def close(self) -> None:
        ...


@runtime_checkable
class Transport(Protocol):
    """Issues one request and returns its response once headers arrive."""
    
    def open(self, url: str) -> TransportResponse:
        """Raise TransportError if the request cannot be issued."""
        ...


class RequestsResponse:
    """TransportResponse backed by a streaming requests.Response."""
    
    def __init__(self, response: requests.Response, url: str):
        self._response = response
        self.url = url
        self.status_code = response.status_code
        self.reason = response.reason or ""
        self.headers = response.headers
    
    def iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        try:
            for chunk in self._response.iter_content(chunk_size=chunk_size):
                if chunk:
                    yield chunk
        except requests.exceptions.RequestException as e:
            logger.error(f"Connection lost while reading {self.url}: {e}")
            raise TransportError(f"Failed reading {self.url}: {e}", url=self.url)
    
    def close(self) -> None:
        self._response.close()


class RequestsTransport:
    """
    Transport built on a requests.Session.
    
    Redirects are never followed here; the pipeline follows them itself so
    each hop is a separate, sequential request.
    """
    
    def __init__(
        self,
        timeout: float = NetworkDefaults.TIMEOUT_SECONDS,
        user_agent: str = NetworkDefaults.USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
    
    def open(self, url: str) -> RequestsResponse:
        try:
            logger.debug(f"GET {url}")
            response = self.session.get(
                url,
                stream=True,
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error(f"Request to {url} timed out after {self.timeout}s")
            raise TransportError(f"Request to {url} timed out after {self.timeout} seconds", url=url)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for {url}: {e}")
            raise TransportError(f"Failed to connect to {url}: {e}", url=url)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}", url=url)
        
        return RequestsResponse(response, url)
