"""
Data models for the YouTube video analyzer application.
"""
from enum import Enum
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from video_analyzer.config import config
from video_analyzer.utils.helpers import format_timestamp


class CaptionSegment(BaseModel):
    """A single normalized caption cue."""
    text: str
    offset_ms: int = Field(ge=0)
    duration_ms: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("text")
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Caption text must not be empty")
        return v


Transcript = List[CaptionSegment]


class CaptionTrack(BaseModel):
    """One language variant of a video's captions as exposed by the player."""
    language_code: str
    base_url: str = ""
    kind: Optional[str] = None
    name: Optional[str] = None


class VideoMetadata(BaseModel):
    """Best-effort video metadata; every field may be missing."""
    title: Optional[str] = None
    channel_title: Optional[str] = None
    duration_seconds: int = 0
    view_count: Optional[str] = None
    published_at: Optional[str] = None
    description: Optional[str] = None


class PreparedTranscript(BaseModel):
    """Transcript flattened into the text block sent to the model."""
    full_text: str
    total_duration_seconds: int


class AnalysisSchema(str, Enum):
    """Shapes the model can be asked to answer with."""
    SUMMARY = "summary"
    DETAILED = "detailed"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Topic(_CamelModel):
    """A key topic with the second it starts at."""
    title: str = ""
    description: str = ""
    timestamp: int = 0
    timestamp_formatted: str = ""

    def model_post_init(self, __context):
        self.timestamp_formatted = format_timestamp(self.timestamp)


class Chapter(_CamelModel):
    """A chapter marker in the detailed analysis."""
    timestamp: int = 0
    title: str = ""
    timestamp_formatted: str = ""

    def model_post_init(self, __context):
        self.timestamp_formatted = format_timestamp(self.timestamp)


class SummaryAnalysis(_CamelModel):
    """Summary plus chronologically ordered topics."""
    summary: str = ""
    topics: List[Topic] = []


class DetailedAnalysis(_CamelModel):
    """TL;DR style breakdown with chapters and takeaways."""
    tldr: str = ""
    key_topics: List[str] = []
    chapters: List[Chapter] = []
    key_takeaways: List[str] = []
    should_watch: str = ""


AnalysisResult = Union[SummaryAnalysis, DetailedAnalysis]


class FetcherConfig(BaseModel):
    """Configuration for caption acquisition."""
    strategies: List[str] = Field(default_factory=config.get_strategy_names)
    yt_dlp_path: str = config.YT_DLP_PATH
    request_timeout: float = config.METADATA_TIMEOUT
    subtitle_timeout: float = config.SUBTITLE_TIMEOUT
    languages: List[str] = ["en", "en-US", "en-GB"]


class MetadataConfig(BaseModel):
    """Configuration for video metadata lookups."""
    api_key: Optional[str] = config.YOUTUBE_API_KEY
    timeout: float = config.METADATA_TIMEOUT


class AnalysisConfig(BaseModel):
    """Configuration for the analysis request."""
    model: str = config.LLM_MODEL
    provider: str = config.LLM_PROVIDER
    temperature: float = 0.0
    max_tokens: int = config.LLM_MAX_TOKENS
    schema_type: AnalysisSchema = AnalysisSchema(config.ANALYSIS_SCHEMA)
