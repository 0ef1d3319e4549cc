"""
Tests de la configuration loguru.
"""

import json

from loguru import logger

from moviebrowser.logging_config import configure_logging


class TestConfigureLogging:

    def test_file_sink_writes_json_with_extra_fields(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"

        configure_logging(log_level="WARNING", log_file=log_file)
        logger.bind(id=27205).debug("Favorite saved")
        logger.complete()
        logger.remove()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        saved = [r for r in records if r["record"]["message"] == "Favorite saved"]
        assert saved[0]["record"]["extra"]["id"] == 27205
        assert saved[0]["record"]["extra"]["app"] == "moviebrowser"

    def test_creates_log_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "app.log"

        configure_logging(log_file=log_file)
        logger.remove()

        assert log_file.parent.is_dir()
