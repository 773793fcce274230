"""
Centralized test fixtures for the vocabgraph test suite.

This package provides reusable fixtures for testing, including:
- N-Triples sample content
- A fake transport serving scripted responses
- Configuration fixtures

Usage:
    from fixtures import SMALL_VOCABULARY_NT, FakeTransport, FakeResponse

Or use the pytest fixtures in conftest.py which import from here.
"""

from .ntriples_fixtures import (
    PERSON_MATH,
    PERSON_SCIENCE,
    SMALL_VOCABULARY_NT,
    SMALL_VOCABULARY_TRIPLES,
    SMALL_VOCABULARY_DROPPED,
    nt_line,
)

from .transport_fixtures import (
    FakeResponse,
    FakeTransport,
)

from .config_fixtures import (
    SAMPLE_LOADER_CONFIG,
)

__all__ = [
    'PERSON_MATH',
    'PERSON_SCIENCE',
    'SMALL_VOCABULARY_NT',
    'SMALL_VOCABULARY_TRIPLES',
    'SMALL_VOCABULARY_DROPPED',
    'nt_line',
    'FakeResponse',
    'FakeTransport',
    'SAMPLE_LOADER_CONFIG',
]
