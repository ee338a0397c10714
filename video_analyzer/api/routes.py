"""
API routes for the YouTube Video Analyzer application.
"""

import traceback

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from video_analyzer.api.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from video_analyzer.config import config
from video_analyzer.main import analyze_video
from video_analyzer.utils.error_handling import AnalyzerError, NoCaptionsError, error_payload
from video_analyzer.utils.helpers import is_valid_video_id
from video_analyzer.utils.logger import logging

router = APIRouter(prefix="/api", tags=["youtube"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def analyze(request: AnalyzeRequest):
    """
    Analyze a YouTube video by ID.

    - Rejects malformed IDs before any external call
    - Fetches captions through the configured fallback chain
    - Returns the LLM analysis with formatted timestamps
    """
    video_id = request.videoId
    if not video_id:
        return JSONResponse(status_code=400, content={"error": "Video ID is required"})

    if not is_valid_video_id(video_id):
        return JSONResponse(status_code=400, content={"error": "Invalid video ID format"})

    try:
        return analyze_video(video_id)
    except AnalyzerError as e:
        if isinstance(e, NoCaptionsError):
            logging.error(f"No captions for {video_id}: {' | '.join(e.attempts)}")
        else:
            logging.error(f"Analysis error for {video_id}: {e.message}")
        payload = error_payload(e)
        return JSONResponse(status_code=payload["status_code"], content=payload["content"])
    except Exception as e:
        logging.error(f"Analysis error for {video_id}: {str(e)}")
        logging.error(traceback.format_exc())
        payload = error_payload(e)
        return JSONResponse(status_code=payload["status_code"], content=payload["content"])


@router.options("/analyze")
def analyze_preflight():
    """Answer CORS preflight requests that reach the route directly."""
    return Response(status_code=200)


@router.get("/health")
def health():
    """Report that the service is up."""
    return {"status": "ok", "version": config.APP_VERSION}
