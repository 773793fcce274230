"""
Loader configuration.

LoaderConfig collects every knob of the ingestion pipeline. It can be built
directly, from a dictionary, or from a JSON file whose top level either is the
configuration or holds it under a "loader" key:

    {
        "loader": {
            "ontology_url": "https://schema.org/version/latest/schemaorg-current-https.nt",
            "timeout_seconds": 60,
            "include_deprecated": false
        }
    }
"""

import json
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

from .constants import NetworkDefaults, VocabularyDefaults
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class LoaderConfig:
    """Configuration for retrieving and resolving a vocabulary."""
    ontology_url: str = VocabularyDefaults.ONTOLOGY_URL
    vocabulary_host: str = VocabularyDefaults.VOCABULARY_HOST
    timeout_seconds: float = NetworkDefaults.TIMEOUT_SECONDS
    max_redirects: int = NetworkDefaults.MAX_REDIRECTS
    chunk_size: int = NetworkDefaults.CHUNK_SIZE
    include_deprecated: bool = True
    user_agent: str = NetworkDefaults.USER_AGENT
    
    def __post_init__(self) -> None:
        self.validate()
    
    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        if not isinstance(self.ontology_url, str) or not self.ontology_url.strip():
            raise ConfigError("ontology_url cannot be empty")
        if not isinstance(self.vocabulary_host, str) or not self.vocabulary_host.strip():
            raise ConfigError("vocabulary_host cannot be empty")
        if "/" in self.vocabulary_host or ":" in self.vocabulary_host:
            raise ConfigError(
                f"vocabulary_host must be a bare host name, got '{self.vocabulary_host}'"
            )
        if self.timeout_seconds <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_redirects < 0:
            raise ConfigError(f"max_redirects cannot be negative, got {self.max_redirects}")
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be positive, got {self.chunk_size}")
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'LoaderConfig':
        """Create LoaderConfig from a dictionary, ignoring unknown keys."""
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration must be a JSON object, got {type(config_dict).__name__}")
        
        loader_config = config_dict.get('loader', config_dict)
        if not isinstance(loader_config, dict):
            raise ConfigError("'loader' section must be a JSON object")
        
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(loader_config) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        
        try:
            return cls(**{k: v for k, v in loader_config.items() if k in known})
        except TypeError as e:
            raise ConfigError(f"Invalid configuration value: {e}")
    
    @classmethod
    def from_file(cls, config_path: str) -> 'LoaderConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ConfigError("config_path cannot be empty")
        
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {config_path} "
                f"at line {e.lineno}, column {e.colno}: {e.msg}"
            )
        except UnicodeDecodeError as e:
            raise ConfigError(f"Encoding error reading {config_path}: {e}")
        except PermissionError:
            raise ConfigError(f"Permission denied reading {config_path}")
        
        return cls.from_dict(config_dict)
