"""
Transcript acquisition with ordered fallbacks, plus prompt formatting.
"""

import time
from typing import List, Optional, Sequence

from video_analyzer.core.strategies import build_strategies
from video_analyzer.models.schemas import CaptionSegment, FetcherConfig, PreparedTranscript, Transcript
from video_analyzer.utils.error_handling import NoCaptionsError
from video_analyzer.utils.helpers import format_timestamp
from video_analyzer.utils.logger import logging


def deduplicate_segments(segments: Sequence[CaptionSegment]) -> Transcript:
    """
    Collapse runs of consecutive segments with identical text.

    Auto-generated captions repeat each line while it scrolls; the first
    occurrence keeps its timing.
    """
    deduped: Transcript = []
    for segment in segments:
        if not deduped or deduped[-1].text != segment.text:
            deduped.append(segment)
    return deduped


class TranscriptFetcher:
    """Class to obtain a transcript by trying caption strategies in order."""

    def __init__(self, config: Optional[FetcherConfig] = None, strategies: Optional[list] = None):
        """
        Initialize the fetcher.

        Args:
            config: Fetcher configuration; defaults are read from the environment
            strategies: Explicit strategy objects, overriding ``config.strategies``
        """
        self.config = config or FetcherConfig()
        self.strategies = strategies if strategies is not None else build_strategies(self.config)

    def fetch(self, video_id: str) -> Transcript:
        """
        Return the first non-empty transcript any strategy produces.

        Args:
            video_id: 11 character YouTube video ID

        Returns:
            Deduplicated list of caption segments

        Raises:
            NoCaptionsError: If every strategy failed or came back empty
        """
        attempts: List[str] = []

        for strategy in self.strategies:
            name = getattr(strategy, "name", type(strategy).__name__)
            started = time.time()
            try:
                segments = strategy.fetch(video_id)
            except Exception as e:
                message = f"{name}: {type(e).__name__}: {e}"
                attempts.append(message)
                logging.warning(f"Caption strategy failed for {video_id} - {message}")
                continue

            if not segments:
                attempts.append(f"{name}: no segments")
                logging.warning(f"Caption strategy {name} returned no segments for {video_id}")
                continue

            transcript = deduplicate_segments(segments)
            logging.info(
                f"Transcript for {video_id} from {name}: {len(transcript)} segments "
                f"({len(segments) - len(transcript)} duplicates dropped) in {time.time() - started:.2f}s"
            )
            return transcript

        logging.error(f"No captions for {video_id} after {len(attempts)} attempts: {' | '.join(attempts)}")
        raise NoCaptionsError(attempts=attempts)


def prepare_transcript_for_analysis(transcript: Sequence[CaptionSegment]) -> PreparedTranscript:
    """
    Flatten a transcript into ``[M:SS] text`` lines.

    Args:
        transcript: Segments in chronological order

    Returns:
        Prompt text and the total duration in whole seconds
    """
    full_text = "".join(
        f"[{format_timestamp(segment.offset_ms // 1000)}] {segment.text}\n" for segment in transcript
    )

    total_duration = 0
    if transcript:
        last = transcript[-1]
        total_duration = (last.offset_ms + last.duration_ms) // 1000

    return PreparedTranscript(full_text=full_text, total_duration_seconds=total_duration)
