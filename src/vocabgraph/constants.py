"""
Centralized configuration constants for the vocabulary graph loader.

This module provides a single source of truth for default values and
limits used throughout the package.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for the CLI.
    
    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    PARSE_ERROR = 2
    CONFIG_ERROR = 3
    TRANSPORT_ERROR = 4
    FILE_NOT_FOUND = 5
    CANCELLED = 7


# ============================================================================
# Vocabulary
# ============================================================================

class VocabularyDefaults:
    """Defaults describing the vocabulary being loaded."""
    
    ONTOLOGY_URL: Final[str] = "https://schema.org/version/latest/schemaorg-current-https.nt"
    """Default N-Triples dump to retrieve."""
    
    VOCABULARY_HOST: Final[str] = "schema.org"
    """Host that in-scope IRIs must belong to."""
    
    NETWORK_SCHEMES: Final[tuple[str, ...]] = ("http", "https")
    """Schemes treated as network references for the vocabulary host."""


# ============================================================================
# Network
# ============================================================================

class NetworkDefaults:
    """HTTP retrieval defaults."""
    
    TIMEOUT_SECONDS: Final[int] = 30
    """Connect/read timeout per request."""
    
    MAX_REDIRECTS: Final[int] = 20
    """Maximum number of redirect hops followed for one load."""
    
    CHUNK_SIZE: Final[int] = 64 * 1024
    """Bytes requested per body chunk."""
    
    REDIRECT_STATUSES: Final[tuple[int, ...]] = (301, 302, 303, 307, 308)
    """Status codes followed when a Location header is present."""
    
    USER_AGENT: Final[str] = "vocabgraph/0.1"
    """User-Agent header sent with every request."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""
    
    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""
    
    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""
    
    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""
    
    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""
    
    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""
    
    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""
