from pydantic import BaseModel
from typing import Optional, List


class AnalyzeRequest(BaseModel):
    """Model for requesting a video analysis."""
    videoId: Optional[str] = None
    url: Optional[str] = None


class ErrorResponse(BaseModel):
    """Model for error responses."""
    error: str


class TopicResponse(BaseModel):
    title: str
    description: str
    timestamp: int
    timestampFormatted: str


class ChapterResponse(BaseModel):
    timestamp: int
    title: str
    timestampFormatted: str


class AnalyzeResponse(BaseModel):
    """Model for analysis responses; only the fields of the configured shape are set."""
    videoId: str
    title: Optional[str] = None
    duration: str
    channelTitle: Optional[str] = None
    viewCount: Optional[str] = None
    publishedAt: Optional[str] = None
    summary: Optional[str] = None
    topics: Optional[List[TopicResponse]] = None
    tldr: Optional[str] = None
    keyTopics: Optional[List[str]] = None
    chapters: Optional[List[ChapterResponse]] = None
    keyTakeaways: Optional[List[str]] = None
    shouldWatch: Optional[str] = None
