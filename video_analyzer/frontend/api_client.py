"""
API client for communicating with the YouTube Video Analyzer backend.
"""

import requests
from typing import Dict, Any
from urllib.parse import urljoin

from video_analyzer.config import config
from video_analyzer.utils.helpers import extract_video_id


class ApiClient:
    """Client for interacting with the YouTube Video Analyzer API."""

    def __init__(self, base_url: str = config.PUBLIC_URL, timeout: float = 180):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API
            timeout: Seconds to wait for an analysis
        """
        self.base_url = base_url
        self.api_base = urljoin(base_url, "/api/")
        self.timeout = timeout

    def _url(self, endpoint: str) -> str:
        """Get the full URL for an endpoint."""
        return urljoin(self.api_base, endpoint)

    def analyze_video(self, url: str) -> Dict[str, Any]:
        """
        Request an analysis for a YouTube URL.

        Args:
            url: YouTube video URL or bare video ID

        Returns:
            Analysis dictionary, or ``{"error": ...}`` on failure
        """
        video_id = extract_video_id(url)
        if not video_id:
            return {"error": "Invalid YouTube URL format"}

        response = requests.post(
            self._url("analyze"),
            json={"videoId": video_id, "url": url},
            timeout=self.timeout,
        )

        if response.status_code >= 400:
            try:
                return {"error": response.json().get("error", response.reason)}
            except ValueError:
                return {"error": f"Request failed with status {response.status_code}"}

        return response.json()
