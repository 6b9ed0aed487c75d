"""Tests for diagnostics module."""

import json

from epoch_date.diagnostics import DiagnosticConfig, create_logger


class TestLogger:
    def test_writes_json_entries_to_stderr(self, capsys):
        logger = create_logger("epoch-date", "converter", DiagnosticConfig(output_format="json"))
        logger.info("Pinned local date converter", {"zone": "Etc/GMT-14"})

        captured = capsys.readouterr()
        parsed = json.loads(captured.err.strip())

        assert captured.out == ""
        assert parsed["severity"] == "info"
        assert parsed["message"] == "Pinned local date converter"
        assert parsed["serviceName"] == "epoch-date"
        assert parsed["scopeId"] == "converter"
        assert parsed["fields"] == {"zone": "Etc/GMT-14"}

    def test_filters_below_minimum_severity(self, capsys):
        logger = create_logger(
            "epoch-date", None, DiagnosticConfig(minimum_severity="warn", output_format="json")
        )
        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("shown")

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["severity"] == "warn"

    def test_omits_scope_when_unset(self, capsys):
        logger = create_logger("epoch-date", None, DiagnosticConfig(output_format="json"))
        logger.info("no scope")

        assert "scopeId" not in json.loads(capsys.readouterr().err.strip())

    def test_human_format(self, capsys):
        logger = create_logger("epoch-date", "converter")
        logger.warn("Ignoring invalid logging setting", {"variable": "LOG_FORMAT"})

        output = capsys.readouterr().err
        assert "warn" in output
        assert 'process="epoch-date.converter"' in output
        assert "Ignoring invalid logging setting" in output
        assert 'variable="LOG_FORMAT"' in output
