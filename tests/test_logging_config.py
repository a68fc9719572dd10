"""Tests for logging_config.py."""

import logging

from rich.logging import RichHandler

from monorepo_health.logging_config import get_logger, setup_logging


class TestGetLogger:
    def test_root_logger(self):
        assert get_logger().name == "monorepo_health"

    def test_module_names_are_prefixed(self):
        assert get_logger("scoring").name == "monorepo_health.scoring"

    def test_package_names_kept(self):
        assert get_logger("monorepo_health.graph.builder").name == "monorepo_health.graph.builder"


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging().level == logging.WARNING
        assert setup_logging("verbose").level == logging.DEBUG
        assert setup_logging("quiet").level == logging.ERROR

    def test_unknown_verbosity_falls_back_to_warnings(self):
        assert setup_logging("chatty").level == logging.WARNING

    def test_rich_handler_installed(self):
        setup_logging()
        assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "health.log"
        logger = setup_logging(log_file=str(log_file))
        logger.warning("slow build detected")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "slow build detected" in log_file.read_text()
