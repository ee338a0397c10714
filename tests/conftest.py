"""
Configuration for pytest tests.
"""

import os
import pytest

# Set before video_analyzer.config is imported by any test module
os.environ.setdefault("GROQ_API_KEY", "test_api_key")
os.environ["YOUTUBE_API_KEY"] = ""
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"

from video_analyzer.models.schemas import (  # noqa: E402
    AnalysisConfig,
    AnalysisSchema,
    CaptionSegment,
    FetcherConfig,
    MetadataConfig,
    VideoMetadata,
)


@pytest.fixture(scope="session")
def test_video_id():
    """Return a test YouTube video ID."""
    return "dQw4w9WgXcQ"


@pytest.fixture
def fetcher_config():
    """Fetcher configuration with short timeouts and no default strategies."""
    return FetcherConfig(
        strategies=[],
        yt_dlp_path="yt-dlp",
        request_timeout=5,
        subtitle_timeout=10,
    )


@pytest.fixture
def metadata_config():
    """Metadata configuration using the Data API."""
    return MetadataConfig(api_key="test_youtube_key", timeout=5)


@pytest.fixture
def summary_config():
    """Analysis configuration for the summary/topics shape."""
    return AnalysisConfig(model="llama-3.3-70b-versatile", provider="groq", schema_type=AnalysisSchema.SUMMARY)


@pytest.fixture
def detailed_config():
    """Analysis configuration for the tldr/chapters shape."""
    return AnalysisConfig(model="llama-3.3-70b-versatile", provider="groq", schema_type=AnalysisSchema.DETAILED)


@pytest.fixture
def sample_segments():
    """Three caption segments as a strategy would return them."""
    return [
        CaptionSegment(text="Welcome back to the channel", offset_ms=0, duration_ms=2500),
        CaptionSegment(text="today we build a robot", offset_ms=2500, duration_ms=3000),
        CaptionSegment(text="let's get started", offset_ms=65000, duration_ms=2000),
    ]


@pytest.fixture
def sample_metadata():
    """Metadata as the Data API would report it."""
    return VideoMetadata(
        title="Building a Robot",
        channel_title="Maker Channel",
        duration_seconds=754,
        view_count="1520000",
        published_at="2024-03-05T16:00:00Z",
        description="We build a robot.",
    )
