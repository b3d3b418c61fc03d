"""Tests for structured logging configuration."""

import json
import logging
from pathlib import Path

from edge_prober.core.logging import configure_logging, get_logger


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_to_file(self, tmp_path: Path):
        log_file = tmp_path / "probe.log"
        configure_logging(level="DEBUG", json_format=True, log_file=log_file)

        get_logger("edge_prober.test_json").info("probe_passed", target="1.1.1.1:53/UDP")

        event = json.loads(log_file.read_text().splitlines()[-1])
        assert event["event"] == "probe_passed"
        assert event["target"] == "1.1.1.1:53/UDP"
        assert event["service"] == "edge-prober"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filters(self, tmp_path: Path):
        log_file = tmp_path / "probe.log"
        configure_logging(level="WARNING", json_format=True, log_file=log_file)

        logger = get_logger("edge_prober.test_level")
        logger.debug("probe_failed")
        logger.warning("probe_skipped")

        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert events == ["probe_skipped"]

    def test_reconfigure_replaces_handlers(self):
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
