"""
Tests for the metadata service.
"""

from datetime import datetime
from unittest.mock import MagicMock, PropertyMock, patch

import pytest
import requests
from pytubefix.exceptions import VideoUnavailable

from video_analyzer.core.metadata import MetadataService
from video_analyzer.models.schemas import MetadataConfig, VideoMetadata
from video_analyzer.utils.error_handling import VideoNotFoundError


DATA_API_ITEM = {
    "snippet": {
        "title": "Building a Robot",
        "channelTitle": "Maker Channel",
        "publishedAt": "2024-03-05T16:00:00Z",
        "description": "We build a robot.",
    },
    "contentDetails": {"duration": "PT12M34S"},
    "statistics": {"viewCount": "1520000"},
}


@pytest.fixture
def mock_get():
    """Fixture to mock requests.get in the metadata module."""
    with patch("video_analyzer.core.metadata.requests.get") as mock:
        yield mock


def test_data_api_lookup(mock_get, metadata_config, test_video_id):
    """Test mapping a Data API item to VideoMetadata."""
    mock_get.return_value.json.return_value = {"items": [DATA_API_ITEM]}

    metadata = MetadataService(metadata_config).get_video_info(test_video_id)

    params = mock_get.call_args.kwargs["params"]
    assert params["id"] == test_video_id
    assert params["key"] == "test_youtube_key"
    assert mock_get.call_args.kwargs["timeout"] == metadata_config.timeout
    assert metadata == VideoMetadata(
        title="Building a Robot",
        channel_title="Maker Channel",
        duration_seconds=754,
        view_count="1520000",
        published_at="2024-03-05T16:00:00Z",
        description="We build a robot.",
    )


def test_data_api_video_not_found(mock_get, metadata_config, test_video_id):
    """Test that an empty item list raises VideoNotFoundError."""
    mock_get.return_value.json.return_value = {"items": []}

    with pytest.raises(VideoNotFoundError) as exc_info:
        MetadataService(metadata_config).get_video_info(test_video_id)
    assert exc_info.value.status_code == 404


def test_data_api_network_failure_is_best_effort(mock_get, metadata_config, test_video_id):
    """Test that a network error degrades to empty metadata."""
    mock_get.side_effect = requests.Timeout("slow")

    metadata = MetadataService(metadata_config).get_video_info(test_video_id)

    assert metadata == VideoMetadata()


@patch("video_analyzer.core.metadata.YouTube")
def test_pytubefix_lookup(mock_youtube, test_video_id):
    """Test reading metadata from pytubefix when no API key is configured."""
    yt = mock_youtube.return_value
    yt.title = "Building a Robot"
    yt.author = "Maker Channel"
    yt.length = 754
    yt.views = 1520000
    yt.publish_date = datetime(2024, 3, 5)
    yt.description = "We build a robot."

    metadata = MetadataService(MetadataConfig(api_key=None)).get_video_info(test_video_id)

    assert metadata.title == "Building a Robot"
    assert metadata.channel_title == "Maker Channel"
    assert metadata.duration_seconds == 754
    assert metadata.view_count == "1520000"
    assert metadata.published_at == "2024-03-05T00:00:00"


@patch("video_analyzer.core.metadata.YouTube")
def test_pytubefix_unavailable(mock_youtube, test_video_id):
    """Test that an unavailable video maps to VideoNotFoundError."""
    type(mock_youtube.return_value).title = PropertyMock(side_effect=VideoUnavailable(video_id=test_video_id))

    with pytest.raises(VideoNotFoundError):
        MetadataService(MetadataConfig(api_key=None)).get_video_info(test_video_id)


@patch("video_analyzer.core.metadata.YouTube", side_effect=RuntimeError("bot check"))
def test_pytubefix_other_failure_is_best_effort(mock_youtube, test_video_id):
    """Test that unexpected pytubefix errors degrade to empty metadata."""
    metadata = MetadataService(MetadataConfig(api_key=None)).get_video_info(test_video_id)
    assert metadata.title is None
    assert metadata.duration_seconds == 0
