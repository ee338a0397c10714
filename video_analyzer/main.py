"""
Main entry point for the YouTube Video Analyzer application.
"""

import argparse
import json
import time
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from video_analyzer.core.analyzer import VideoAnalyzer
from video_analyzer.core.metadata import MetadataService
from video_analyzer.core.transcript_fetcher import TranscriptFetcher, prepare_transcript_for_analysis
from video_analyzer.models.schemas import VideoMetadata
from video_analyzer.utils.error_handling import InvalidVideoIdError, NoCaptionsError, log_diagnostic_info
from video_analyzer.utils.helpers import (
    extract_video_id,
    format_date,
    format_timestamp,
    format_view_count,
    is_valid_video_id,
    save_json,
)
from video_analyzer.utils.logger import logging


def build_response(video_id: str, metadata: VideoMetadata, analysis, total_duration: int) -> Dict[str, Any]:
    """
    Assemble the JSON payload returned to the front-end.

    Args:
        video_id: YouTube video ID
        metadata: Video metadata, possibly empty
        analysis: SummaryAnalysis or DetailedAnalysis
        total_duration: Duration derived from the transcript

    Returns:
        Dictionary with camelCase keys
    """
    response: Dict[str, Any] = {
        "videoId": video_id,
        "title": metadata.title,
        "duration": format_timestamp(metadata.duration_seconds or total_duration),
    }
    if metadata.channel_title:
        response["channelTitle"] = metadata.channel_title
    if metadata.view_count is not None:
        response["viewCount"] = format_view_count(metadata.view_count)
    if metadata.published_at:
        response["publishedAt"] = format_date(metadata.published_at)

    response.update(analysis.model_dump(by_alias=True))
    return response


def analyze_video(
    video_id: str,
    fetcher: Optional[TranscriptFetcher] = None,
    analyzer: Optional[VideoAnalyzer] = None,
    metadata_service: Optional[MetadataService] = None,
) -> Dict[str, Any]:
    """
    Run the full pipeline for one video: metadata, captions, analysis.

    Args:
        video_id: 11 character YouTube video ID
        fetcher: Transcript fetcher (default: strategies from configuration)
        analyzer: LLM analyzer (default: model from configuration)
        metadata_service: Metadata lookup (default: configured source)

    Returns:
        Response dictionary ready to serialize

    Raises:
        InvalidVideoIdError: If the ID is malformed
        NoCaptionsError: If no transcript could be obtained
        VideoNotFoundError: If the video does not exist
        AnalysisParseError: If the model reply cannot be parsed
    """
    if not is_valid_video_id(video_id):
        raise InvalidVideoIdError("Invalid video ID format")

    fetcher = fetcher or TranscriptFetcher()
    analyzer = analyzer or VideoAnalyzer()
    metadata_service = metadata_service or MetadataService()

    logging.info(f"Analyzing video: {video_id}")

    metadata = metadata_service.get_video_info(video_id)

    start_time = time.time()
    transcript = fetcher.fetch(video_id)
    logging.info(f"Transcript fetched: {len(transcript)} segments in {time.time() - start_time:.2f}s")

    if not transcript:
        raise NoCaptionsError()

    prepared = prepare_transcript_for_analysis(transcript)
    log_diagnostic_info({
        "video_id": video_id,
        "segments": len(transcript),
        "characters": len(prepared.full_text),
        "total_duration": prepared.total_duration_seconds,
    })

    start_time = time.time()
    analysis = analyzer.analyze(prepared.full_text, metadata, prepared.total_duration_seconds)
    logging.info(f"Analysis complete in {time.time() - start_time:.2f}s")

    return build_response(video_id, metadata, analysis, prepared.total_duration_seconds)


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="YouTube Video Analyzer")
    parser.add_argument("url", help="YouTube video URL or 11 character video ID")
    parser.add_argument("--output", help="Output file path for the analysis JSON")

    args = parser.parse_args()

    # Load environment variables
    load_dotenv()

    video_id = extract_video_id(args.url)
    if not video_id:
        parser.error("Could not find a video ID in the given URL")

    result = analyze_video(video_id)

    if args.output:
        save_json(result, args.output)
        logging.info(f"Analysis saved to: {args.output}")

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
