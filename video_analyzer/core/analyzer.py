"""
Module for analyzing transcripts with an LLM and reshaping its JSON reply.
"""

import json
from typing import Any, Dict, List, Optional

from langchain.chat_models import init_chat_model
from langchain_core.prompts import ChatPromptTemplate

from video_analyzer.core.prompts import detailed_template, summary_template
from video_analyzer.models.schemas import (
    AnalysisConfig,
    AnalysisResult,
    AnalysisSchema,
    Chapter,
    DetailedAnalysis,
    SummaryAnalysis,
    Topic,
    VideoMetadata,
)
from video_analyzer.utils.error_handling import AnalysisParseError
from video_analyzer.utils.helpers import format_timestamp
from video_analyzer.utils.logger import logging


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Pull the first JSON object out of free-form model output.

    Args:
        text: Model reply, possibly wrapped in prose or code fences

    Returns:
        The decoded object

    Raises:
        AnalysisParseError: If no decodable object is present
    """
    decoder = json.JSONDecoder()
    position = text.find("{")
    while position != -1:
        try:
            value, _ = decoder.raw_decode(text, position)
        except ValueError:
            position = text.find("{", position + 1)
            continue
        if isinstance(value, dict):
            return value
        position = text.find("{", position + 1)

    raise AnalysisParseError("Failed to parse AI response")


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_seconds(value: Any) -> int:
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError):
        return 0


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _dict_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def build_summary_analysis(parsed: Dict[str, Any]) -> SummaryAnalysis:
    """Shape a decoded reply into a SummaryAnalysis, defaulting missing fields."""
    return SummaryAnalysis(
        summary=_as_text(parsed.get("summary")),
        topics=[
            Topic(
                title=_as_text(item.get("title")),
                description=_as_text(item.get("description")),
                timestamp=_as_seconds(item.get("timestamp")),
            )
            for item in _dict_items(parsed.get("topics"))
        ],
    )


def build_detailed_analysis(parsed: Dict[str, Any]) -> DetailedAnalysis:
    """Shape a decoded reply into a DetailedAnalysis, defaulting missing fields."""
    return DetailedAnalysis(
        tldr=_as_text(parsed.get("tldr")),
        key_topics=_string_list(parsed.get("keyTopics")),
        chapters=[
            Chapter(timestamp=_as_seconds(item.get("timestamp")), title=_as_text(item.get("title")))
            for item in _dict_items(parsed.get("chapters"))
        ],
        key_takeaways=_string_list(parsed.get("keyTakeaways")),
        should_watch=_as_text(parsed.get("shouldWatch")),
    )


class VideoAnalyzer:
    """Class to handle transcript analysis operations."""

    def __init__(self, config: Optional[AnalysisConfig] = None, llm=None):
        """
        Initialize the analyzer.

        Args:
            config: Model and output-shape configuration
            llm: Chat model to use; created with ``init_chat_model`` when omitted
        """
        self.config = config or AnalysisConfig()
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = init_chat_model(
                model=self.config.model,
                model_provider=self.config.provider,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        return self._llm

    def _prompt(self) -> ChatPromptTemplate:
        if self.config.schema_type == AnalysisSchema.SUMMARY:
            template = summary_template
        else:
            template = detailed_template
        return ChatPromptTemplate.from_messages([("human", template)])

    def complete(self, transcript_text: str, metadata: Optional[VideoMetadata] = None,
                 total_duration: int = 0) -> str:
        """
        Send the transcript to the model once and return its raw reply.

        Args:
            transcript_text: Timestamped transcript block
            metadata: Video metadata to embed in the detailed prompt
            total_duration: Fallback duration when metadata has none

        Returns:
            Reply text
        """
        metadata = metadata or VideoMetadata()
        variables = {"transcript": transcript_text}
        if self.config.schema_type == AnalysisSchema.DETAILED:
            variables.update(
                title=metadata.title or "Unknown",
                channel=metadata.channel_title or "Unknown",
                duration=format_timestamp(metadata.duration_seconds or total_duration),
            )

        prompt_value = self._prompt().invoke(variables)
        response = self.llm.invoke(prompt_value)

        content = response.content
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return content

    def analyze(self, transcript_text: str, metadata: Optional[VideoMetadata] = None,
                total_duration: int = 0) -> AnalysisResult:
        """
        Produce a structured analysis of a transcript.

        Args:
            transcript_text: Timestamped transcript block
            metadata: Video metadata to embed in the detailed prompt
            total_duration: Fallback duration when metadata has none

        Returns:
            SummaryAnalysis or DetailedAnalysis depending on configuration

        Raises:
            AnalysisParseError: If the reply holds no JSON object
        """
        logging.info(f"Requesting {self.config.schema_type.value} analysis from {self.config.provider}:{self.config.model}")
        reply = self.complete(transcript_text, metadata, total_duration)
        parsed = extract_json_object(reply)

        if self.config.schema_type == AnalysisSchema.SUMMARY:
            return build_summary_analysis(parsed)
        return build_detailed_analysis(parsed)
