"""
Centralized error handling for the application.
"""

import json
from typing import Any, Dict, List, Optional

from video_analyzer.config import config
from video_analyzer.utils.logger import logging


GENERIC_ERROR_MESSAGE = "Failed to analyze video. Please try again."


class AnalyzerError(Exception):
    """Base error carrying the HTTP status it should be reported with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidVideoIdError(AnalyzerError):
    """The video ID is missing or not 11 characters of [A-Za-z0-9_-]."""

    status_code = 400


class NoCaptionsError(AnalyzerError):
    """No caption source produced a usable transcript."""

    status_code = 400

    def __init__(self, message: str = "No captions available for this video", attempts: Optional[List[str]] = None):
        super().__init__(message)
        self.attempts = attempts or []


class VideoNotFoundError(AnalyzerError):
    """The metadata lookup reported that the video does not exist."""

    status_code = 404


class AnalysisParseError(AnalyzerError):
    """The model reply did not contain a JSON object."""

    status_code = 500


class StrategyError(Exception):
    """Raised inside a single caption strategy; never leaves the fetcher."""


def error_payload(error: Exception) -> Dict[str, Any]:
    """
    Build the JSON error body and status code for an exception.

    Args:
        error: The exception raised while handling a request

    Returns:
        Dictionary with ``status_code`` and ``content`` keys
    """
    if isinstance(error, NoCaptionsError):
        return {
            "status_code": error.status_code,
            "content": {"error": "This video does not have captions available."},
        }
    if isinstance(error, AnalyzerError):
        return {"status_code": error.status_code, "content": {"error": error.message}}
    return {"status_code": 500, "content": {"error": GENERIC_ERROR_MESSAGE}}


def log_diagnostic_info(context: Dict[str, Any]):
    """
    Log diagnostic information for debugging.

    Args:
        context: Dictionary of diagnostic information
    """
    if not getattr(config, "DEBUG", False):
        return

    try:
        logging.info(f"Diagnostic info: {json.dumps(context, default=str)}")
    except (TypeError, ValueError) as e:
        logging.error(f"Error logging diagnostic info: {str(e)}")
