"""
Tests for the shared logger configuration.
"""

import logging as std_logging

from video_analyzer.config import DevelopmentConfig, config
from video_analyzer.utils.logger import log_level, logging


def test_logger_uses_configured_level():
    """Test that the shared logger follows LOG_LEVEL from the configuration."""
    assert config is DevelopmentConfig
    assert config.LOG_LEVEL == "DEBUG"
    assert log_level == std_logging.DEBUG
    assert logging.name == "videoanalyzer"
    assert logging.level == std_logging.DEBUG


def test_debug_diagnostics_are_emitted(caplog):
    """Test that debug records from the caption strategies are not filtered out."""
    logging.debug("yt-dlp exited with 1: boom")

    assert "yt-dlp exited with 1: boom" in caplog.text
