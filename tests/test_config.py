"""
Tests for LoaderConfig construction, validation and file loading.

Run with:
    pytest tests/test_config.py -v
"""

import json

import pytest

from vocabgraph.config import LoaderConfig
from vocabgraph.constants import NetworkDefaults, VocabularyDefaults
from vocabgraph.errors import ConfigError


@pytest.mark.unit
class TestLoaderConfig:
    
    def test_defaults(self):
        config = LoaderConfig()
        
        assert config.ontology_url == VocabularyDefaults.ONTOLOGY_URL
        assert config.vocabulary_host == "schema.org"
        assert config.max_redirects == NetworkDefaults.MAX_REDIRECTS
        assert config.include_deprecated is True
    
    @pytest.mark.parametrize("overrides,message", [
        ({"ontology_url": ""}, "ontology_url cannot be empty"),
        ({"vocabulary_host": ""}, "vocabulary_host cannot be empty"),
        ({"vocabulary_host": "https://schema.org/"}, "bare host name"),
        ({"timeout_seconds": 0}, "timeout_seconds must be positive"),
        ({"max_redirects": -1}, "max_redirects cannot be negative"),
        ({"chunk_size": 0}, "chunk_size must be positive"),
    ])
    def test_validation(self, overrides, message):
        with pytest.raises(ConfigError, match=message):
            LoaderConfig(**overrides)
    
    def test_from_dict_with_loader_section(self, sample_config):
        config = LoaderConfig.from_dict(sample_config)
        
        assert config.timeout_seconds == 60
        assert config.max_redirects == 5
        assert config.chunk_size == 4096
        assert config.include_deprecated is False
    
    def test_from_dict_flat(self):
        config = LoaderConfig.from_dict({"vocabulary_host": "example.com"})
        
        assert config.vocabulary_host == "example.com"
    
    def test_unknown_keys_warned(self, caplog):
        LoaderConfig.from_dict({"loader": {"retries": 3}})
        
        assert "Ignoring unknown configuration keys: retries" in caplog.text
    
    @pytest.mark.parametrize("data", [[1, 2], {"loader": "nope"}])
    def test_from_dict_rejects_non_objects(self, data):
        with pytest.raises(ConfigError):
            LoaderConfig.from_dict(data)
    
    def test_from_file(self, temp_config_file):
        config = LoaderConfig.from_file(temp_config_file)
        
        assert config.max_redirects == 5
    
    def test_from_file_missing(self, tmp_path):
        with pytest.raises(ConfigError, match="Configuration file not found"):
            LoaderConfig.from_file(str(tmp_path / "nope.json"))
    
    def test_from_file_invalid_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text('{"loader": {')
        
        with pytest.raises(ConfigError, match="Invalid JSON"):
            LoaderConfig.from_file(str(config_file))
    
    def test_from_file_invalid_value(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"loader": {"chunk_size": -5}}))
        
        with pytest.raises(ConfigError, match="chunk_size"):
            LoaderConfig.from_file(str(config_file))
