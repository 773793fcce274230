"""
Tests for the requests-backed transport.

requests.Session is replaced with a Mock; no network access is needed.

Run with:
    pytest tests/triples/test_transport.py -v
"""

from unittest.mock import Mock

import pytest
import requests

from vocabgraph.errors import TransportError
from vocabgraph.transport import RequestsResponse, RequestsTransport, Transport, TransportResponse

URL = "https://schema.org/version/latest/schemaorg-current-https.nt"


def _mock_response(status_code=200, reason="OK", headers=None, chunks=()):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.headers = headers or {}
    response.iter_content.return_value = iter(chunks)
    return response


@pytest.fixture
def mock_session():
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.mark.unit
class TestRequestsTransport:
    
    def test_satisfies_protocol(self, mock_session):
        transport = RequestsTransport(session=mock_session)
        
        assert isinstance(transport, Transport)
    
    def test_open_streams_without_following_redirects(self, mock_session):
        mock_session.get.return_value = _mock_response(302, "Found", {'location': '/elsewhere'})
        transport = RequestsTransport(timeout=5, session=mock_session)
        
        response = transport.open(URL)
        
        mock_session.get.assert_called_once_with(URL, stream=True, allow_redirects=False, timeout=5)
        assert isinstance(response, TransportResponse)
        assert response.status_code == 302
        assert response.headers['location'] == '/elsewhere'
    
    def test_user_agent_header(self, mock_session):
        RequestsTransport(user_agent="vocabgraph-test/1.0", session=mock_session)
        
        assert mock_session.headers["User-Agent"] == "vocabgraph-test/1.0"
    
    @pytest.mark.parametrize("exc,message", [
        (requests.exceptions.Timeout("slow"), "timed out"),
        (requests.exceptions.ConnectionError("Bad!!!"), "Bad!!!"),
        (requests.exceptions.RequestException("odd"), "odd"),
    ])
    def test_request_failures_become_transport_errors(self, mock_session, exc, message):
        mock_session.get.side_effect = exc
        
        with pytest.raises(TransportError, match=message) as exc_info:
            RequestsTransport(session=mock_session).open(URL)
        
        assert exc_info.value.url == URL


@pytest.mark.unit
class TestRequestsResponse:
    
    def test_iter_chunks_skips_keepalive_chunks(self):
        raw = _mock_response(chunks=[b'abc', b'', b'def'])
        
        chunks = list(RequestsResponse(raw, URL).iter_chunks(1024))
        
        assert chunks == [b'abc', b'def']
        raw.iter_content.assert_called_once_with(chunk_size=1024)
    
    def test_mid_stream_failure(self):
        def broken(chunk_size):
            yield b'abc'
            raise requests.exceptions.ChunkedEncodingError("So BAD!")
        
        raw = _mock_response()
        raw.iter_content.side_effect = broken
        chunks = RequestsResponse(raw, URL).iter_chunks(16)
        
        assert next(chunks) == b'abc'
        with pytest.raises(TransportError, match="So BAD!"):
            next(chunks)
    
    def test_close(self):
        raw = _mock_response()
        
        RequestsResponse(raw, URL).close()
        
        raw.close.assert_called_once()
