"""
Video metadata lookup.
"""

from typing import Optional

import requests
from pytubefix import YouTube
from pytubefix.exceptions import VideoUnavailable

from video_analyzer.core.strategies import watch_url
from video_analyzer.models.schemas import MetadataConfig, VideoMetadata
from video_analyzer.utils.error_handling import VideoNotFoundError
from video_analyzer.utils.helpers import parse_iso8601_duration
from video_analyzer.utils.logger import logging


YOUTUBE_DATA_API_URL = "https://www.googleapis.com/youtube/v3/videos"


class MetadataService:
    """Class to look up title, channel and duration for a video."""

    def __init__(self, config: Optional[MetadataConfig] = None):
        """
        Initialize the metadata service.

        Args:
            config: Metadata configuration; the Data API is used when it carries an API key
        """
        self.config = config or MetadataConfig()

    def get_video_info(self, video_id: str) -> VideoMetadata:
        """
        Fetch metadata for a video.

        Lookup failures other than "video not found" are logged and an
        empty VideoMetadata is returned so the analysis can still run.

        Raises:
            VideoNotFoundError: If the source reports the video does not exist
        """
        try:
            if self.config.api_key:
                return self._from_data_api(video_id)
            return self._from_pytubefix(video_id)
        except VideoNotFoundError:
            raise
        except Exception as e:
            logging.warning(f"Metadata lookup failed for {video_id}: {str(e)}")
            return VideoMetadata()

    def _from_data_api(self, video_id: str) -> VideoMetadata:
        response = requests.get(
            YOUTUBE_DATA_API_URL,
            params={
                "part": "snippet,contentDetails,statistics",
                "id": video_id,
                "key": self.config.api_key,
            },
            timeout=self.config.timeout,
        )
        response.raise_for_status()
        data = response.json()

        if not data.get("items"):
            raise VideoNotFoundError("Video not found")

        video = data["items"][0]
        snippet = video.get("snippet") or {}
        return VideoMetadata(
            title=snippet.get("title"),
            channel_title=snippet.get("channelTitle"),
            duration_seconds=parse_iso8601_duration((video.get("contentDetails") or {}).get("duration")),
            view_count=(video.get("statistics") or {}).get("viewCount", "0"),
            published_at=snippet.get("publishedAt"),
            description=snippet.get("description"),
        )

    def _from_pytubefix(self, video_id: str) -> VideoMetadata:
        yt = YouTube(watch_url(video_id))
        try:
            title = yt.title
        except VideoUnavailable as e:
            raise VideoNotFoundError(f"Video not found or unavailable: {video_id}") from e

        publish_date = yt.publish_date
        return VideoMetadata(
            title=title,
            channel_title=yt.author,
            duration_seconds=int(yt.length or 0),
            view_count=str(yt.views) if yt.views is not None else None,
            published_at=publish_date.isoformat() if publish_date else None,
            description=yt.description,
        )
