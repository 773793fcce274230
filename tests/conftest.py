"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Whole-pipeline tests (fake transport, temp files)

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    sys.path.insert(1, tests_dir)

from fixtures import (
    SMALL_VOCABULARY_NT,
    SAMPLE_LOADER_CONFIG,
    FakeResponse,
    FakeTransport,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Whole-pipeline tests")


# =============================================================================
# N-Triples Fixtures
# =============================================================================

@pytest.fixture
def small_vocabulary_nt():
    """A small schema.org-shaped vocabulary with classes, properties and enums."""
    return SMALL_VOCABULARY_NT


@pytest.fixture
def temp_nt_file(tmp_path, small_vocabulary_nt):
    """Write the small vocabulary to a temporary .nt file."""
    nt_file = tmp_path / "vocabulary.nt"
    nt_file.write_text(small_vocabulary_nt, encoding='utf-8')
    return str(nt_file)


# =============================================================================
# Transport Fixtures
# =============================================================================

@pytest.fixture
def fake_transport():
    """A transport that serves queued FakeResponses."""
    return FakeTransport()


@pytest.fixture
def ok_response():
    """Factory for a 200 response with the given body chunks."""
    def _make(*chunks, error=None):
        return FakeResponse(200, "OK", chunks=[c.encode('utf-8') if isinstance(c, str) else c
                                               for c in chunks], error=error)
    return _make


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample loader configuration dictionary."""
    return json.loads(json.dumps(SAMPLE_LOADER_CONFIG))


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)
