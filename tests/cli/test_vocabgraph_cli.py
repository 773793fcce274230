"""
Tests for the vocabgraph command line.

Run with:
    pytest tests/cli/test_vocabgraph_cli.py -v
"""

import json
import logging
from unittest.mock import patch

import pytest

from fixtures import PERSON_MATH
from vocabgraph import cli
from vocabgraph.constants import ExitCode
from vocabgraph.errors import TransportError
from vocabgraph.logging_setup import JSONFormatter, _clear_managed_handlers, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers installed by main() so later tests see a clean root logger."""
    yield
    _clear_managed_handlers()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.mark.integration
class TestMain:
    
    def test_file_to_json_output(self, temp_nt_file, tmp_path, capsys):
        output = tmp_path / "graph.json"
        
        code = cli.main(["--file", temp_nt_file, "--output", str(output), "--no-progress"])
        
        assert code == ExitCode.SUCCESS
        document = json.loads(output.read_text(encoding='utf-8'))
        assert "Person" in [c["name"] for c in document["classes"]]
        assert "Resolved 7 classes, 5 properties, 2 enum values (0 warnings)" in capsys.readouterr().err
    
    def test_nodeprecated(self, temp_nt_file, tmp_path):
        output = tmp_path / "graph.json"
        
        cli.main(["--file", temp_nt_file, "--output", str(output), "--nodeprecated", "--no-progress"])
        
        document = json.loads(output.read_text(encoding='utf-8'))
        assert "employees" not in [p["name"] for p in document["properties"]]
    
    def test_config_file_sets_deprecated_default(self, temp_nt_file, temp_config_file, tmp_path):
        output = tmp_path / "graph.json"
        
        cli.main(["--file", temp_nt_file, "--config", temp_config_file, "--output", str(output),
                  "--no-progress"])
        
        document = json.loads(output.read_text(encoding='utf-8'))
        assert "employees" not in [p["name"] for p in document["properties"]]
    
    def test_output_to_stdout(self, temp_nt_file, capsys):
        code = cli.main(["--file", temp_nt_file, "--output", "-", "--no-progress"])
        
        assert code == ExitCode.SUCCESS
        document = json.loads(capsys.readouterr().out)
        assert document["statistics"]["classes"] == 7
    
    def test_network_load(self, capsys):
        with patch.object(cli, "load", return_value=(t for t in ())) as mock_load:
            code = cli.main(["--ontology", "https://schema.org/version/latest/all.nt", "--no-progress"])
        
        assert code == ExitCode.SUCCESS
        assert mock_load.call_args[0][0] == "https://schema.org/version/latest/all.nt"
    
    def test_transport_error_exit_code(self):
        def failing(*args, **kwargs):
            raise TransportError("Failed to load https://schema.org/: HTTP 500 So Sad!", status_code=500)
            yield
        
        with patch.object(cli, "load", side_effect=failing):
            assert cli.main(["--no-progress"]) == ExitCode.TRANSPORT_ERROR
    
    def test_parse_error_exit_code(self, tmp_path):
        nt_file = tmp_path / "broken.nt"
        nt_file.write_text(PERSON_MATH + '<https://schema.org/> <https://schema.org/b> "c" .\n')
        
        assert cli.main(["--file", str(nt_file), "--no-progress"]) == ExitCode.PARSE_ERROR
    
    def test_schema_error_exit_code(self, tmp_path):
        nt_file = tmp_path / "orphan.nt"
        nt_file.write_text(
            '<https://schema.org/Monday> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> '
            '<https://schema.org/DayOfWeek> .\n'
        )
        
        assert cli.main(["--file", str(nt_file), "--no-progress"]) == ExitCode.PARSE_ERROR
    
    def test_config_error_exit_code(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")
        
        assert cli.main(["--config", str(config_file), "--no-progress"]) == ExitCode.CONFIG_ERROR
    
    def test_missing_file_exit_code(self, tmp_path):
        assert cli.main(["--file", str(tmp_path / "missing.nt"), "--no-progress"]) == ExitCode.FILE_NOT_FOUND
    
    def test_cancelled(self):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt
            yield
        
        with patch.object(cli, "load", side_effect=interrupted):
            assert cli.main(["--no-progress"]) == ExitCode.CANCELLED
    
    def test_source_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.main(["--file", "a.nt", "--ontology", "https://schema.org/a.nt"])


@pytest.mark.unit
class TestLoggingSetup:
    
    def test_json_formatter(self):
        record = logging.LogRecord("vocabgraph.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        
        payload = json.loads(JSONFormatter().format(record))
        
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "vocabgraph.test"
        assert "error_type" not in payload
    
    def test_json_formatter_expands_vocabulary_errors(self):
        record = logging.LogRecord("vocabgraph.test", logging.ERROR, __file__, 10, "failed", (), None)
        record.error = TransportError("HTTP 404", status_code=404, url="https://schema.org/a.nt")
        
        payload = json.loads(JSONFormatter().format(record))
        
        assert payload["error_type"] == "TransportError"
        assert payload["status_code"] == 404
        assert payload["url"] == "https://schema.org/a.nt"
        assert "line_number" not in payload
    
    def test_parse_error_line_number_in_json_log(self, tmp_path):
        nt_file = tmp_path / "broken.nt"
        nt_file.write_text(PERSON_MATH + '<https://schema.org/> <https://schema.org/b> "c" .\n')
        log_file = tmp_path / "vocabgraph.log"
        
        code = cli.main(["--file", str(nt_file), "--no-progress",
                         "--log-file", str(log_file), "--log-format", "json"])
        
        assert code == ExitCode.PARSE_ERROR
        records = [json.loads(line) for line in log_file.read_text(encoding='utf-8').splitlines()]
        errors = [r for r in records if r["level"] == "ERROR"]
        assert errors[-1]["error_type"] == "ParseError"
        assert errors[-1]["line_number"] == 2
    
    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "vocabgraph.log"
        
        actual = setup_logging("INFO", str(log_file), "json")
        logging.getLogger("vocabgraph.test").info("written")
        
        assert actual == str(log_file)
        lines = log_file.read_text(encoding='utf-8').splitlines()
        assert json.loads(lines[-1])["message"] == "written"
    
    def test_repeated_setup_replaces_handlers(self):
        root = logging.getLogger()
        setup_logging("INFO")
        before = len(root.handlers)
        
        setup_logging("DEBUG")
        
        assert len(root.handlers) == before
        assert root.level == logging.DEBUG
