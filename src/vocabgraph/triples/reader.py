"""
Ingestion pipeline: from an address to a lazy sequence of validated Triples.

load() issues no request until the returned iterator is first advanced.
Redirects are followed one hop at a time; the body is fed chunk by chunk into
the tokenizer and vocabulary filter, and Triples are yielded in the order
their statements appear. A consumer that stops early closes the generator,
which closes the underlying response.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union
from urllib.parse import urljoin

from ..config import LoaderConfig
from ..constants import NetworkDefaults
from ..errors import TransportError
from ..transport import RequestsTransport, Transport, TransportResponse
from .terms import Triple
from .tokenizer import tokenize
from .vocabulary_filter import VocabularyFilter

logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _open_following_redirects(
    transport: Transport,
    url: str,
    max_redirects: int,
) -> TransportResponse:
    """Issue the request, following redirects until a non-redirect response."""
    current = url
    for _ in range(max_redirects + 1):
        logger.info(f"Requesting {current}")
        response = transport.open(current)
        status = response.status_code
        location = response.headers.get('location') or response.headers.get('Location')
        
        if status in NetworkDefaults.REDIRECT_STATUSES and location:
            response.close()
            target = urljoin(current, location)
            logger.info(f"Following redirect ({status}) from {current} to {target}")
            current = target
            continue
        
        if not _is_success(status):
            response.close()
            reason = response.reason or "Request failed"
            raise TransportError(
                f"Failed to load {current}: HTTP {status} {reason}",
                status_code=status,
                url=current,
            )
        return response
    
    raise TransportError(
        f"Exceeded {max_redirects} redirects while loading {url}",
        url=url,
    )


def _triples_from_chunks(chunks: Iterable[bytes], vocabulary_filter: VocabularyFilter) -> Iterator[Triple]:
    yield from vocabulary_filter.filter(tokenize(chunks))
    logger.info(f"Dropped {vocabulary_filter.dropped} out-of-vocabulary statements")


def load(
    url: Optional[str] = None,
    config: Optional[LoaderConfig] = None,
    transport: Optional[Transport] = None,
) -> Iterator[Triple]:
    """
    Lazily load validated Triples from a network address.
    
    Args:
        url: Starting address. Defaults to ``config.ontology_url``.
        config: Loader configuration (defaults used when omitted).
        transport: Transport capability; a RequestsTransport by default.
    
    Returns:
        A single-use iterator of Triples.
    
    Raises (while iterating):
        TransportError: Connection failure, mid-stream abort, non-success
            status or too many redirects.
        ParseError: Malformed statement or host-root vocabulary IRI.
    """
    config = config or LoaderConfig()
    target = url or config.ontology_url
    if transport is None:
        transport = RequestsTransport(timeout=config.timeout_seconds, user_agent=config.user_agent)
    
    response = _open_following_redirects(transport, target, config.max_redirects)
    try:
        yield from _triples_from_chunks(
            response.iter_chunks(config.chunk_size),
            VocabularyFilter(config.vocabulary_host),
        )
    finally:
        response.close()


def _read_file_chunks(path: Path, chunk_size: int) -> Iterator[bytes]:
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def load_file(
    file_path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
) -> Iterator[Triple]:
    """
    Lazily load validated Triples from a local N-Triples file.
    
    Raises (while iterating):
        FileNotFoundError: If the file doesn't exist.
        ParseError: Malformed statement or host-root vocabulary IRI.
    """
    config = config or LoaderConfig()
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")
    
    logger.info(f"Reading {path}")
    yield from _triples_from_chunks(
        _read_file_chunks(path, config.chunk_size),
        VocabularyFilter(config.vocabulary_host),
    )
