"""
Tests for the HTTP surface.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from video_analyzer.api.app import app
from video_analyzer.utils.error_handling import AnalysisParseError, NoCaptionsError, VideoNotFoundError


SUMMARY_RESULT = {
    "videoId": "dQw4w9WgXcQ",
    "title": "Building a Robot",
    "duration": "12:34",
    "summary": "A robot build.",
    "topics": [{"title": "Intro", "description": "Start.", "timestamp": 65, "timestampFormatted": "1:05"}],
}


@pytest.fixture
def client():
    """Fixture returning a test client for the app."""
    return TestClient(app)


@pytest.fixture
def mock_analyze_video():
    """Fixture to mock the analysis pipeline behind the route."""
    with patch("video_analyzer.api.routes.analyze_video") as mock:
        mock.return_value = SUMMARY_RESULT
        yield mock


def test_analyze_success(client, mock_analyze_video, test_video_id):
    """Test a successful analysis round trip."""
    response = client.post(
        "/api/analyze",
        json={"videoId": test_video_id, "url": f"https://youtu.be/{test_video_id}"},
    )

    assert response.status_code == 200
    assert response.json() == SUMMARY_RESULT
    mock_analyze_video.assert_called_once_with(test_video_id)


def test_analyze_detailed_shape_drops_unused_fields(client, mock_analyze_video, test_video_id):
    """Test that only the fields of the chosen shape are serialized and title stays present."""
    mock_analyze_video.return_value = {
        "videoId": test_video_id,
        "title": None,
        "duration": "0:02",
        "tldr": "Short.",
        "keyTopics": [],
        "chapters": [{"timestamp": 0, "title": "Intro", "timestampFormatted": "0:00"}],
        "keyTakeaways": [],
        "shouldWatch": "Sure.",
    }

    body = client.post("/api/analyze", json={"videoId": test_video_id}).json()

    assert "summary" not in body
    assert "topics" not in body
    assert body["title"] is None
    assert "channelTitle" not in body
    assert body["chapters"][0]["timestampFormatted"] == "0:00"


@pytest.mark.parametrize("payload, message", [
    ({}, "Video ID is required"),
    ({"videoId": ""}, "Video ID is required"),
    ({"url": "https://youtu.be/dQw4w9WgXcQ"}, "Video ID is required"),
    ({"videoId": "short"}, "Invalid video ID format"),
    ({"videoId": "dQw4w9WgXc!"}, "Invalid video ID format"),
    ({"videoId": "dQw4w9WgXcQQ"}, "Invalid video ID format"),
])
def test_analyze_rejects_bad_ids(client, mock_analyze_video, payload, message):
    """Test that invalid IDs are rejected before the pipeline runs."""
    response = client.post("/api/analyze", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": message}
    mock_analyze_video.assert_not_called()


def test_analyze_rejects_unreadable_body(client, mock_analyze_video):
    """Test that a non-JSON body is a 400."""
    response = client.post("/api/analyze", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()
    mock_analyze_video.assert_not_called()


@pytest.mark.parametrize("error, status, message", [
    (NoCaptionsError(attempts=["ytdlp: boom"]), 400, "This video does not have captions available."),
    (VideoNotFoundError("Video not found"), 404, "Video not found"),
    (AnalysisParseError("Failed to parse AI response"), 500, "Failed to parse AI response"),
    (RuntimeError("connection reset"), 500, "Failed to analyze video. Please try again."),
])
def test_analyze_error_mapping(client, mock_analyze_video, test_video_id, error, status, message):
    """Test that pipeline errors map to their status codes."""
    mock_analyze_video.side_effect = error

    response = client.post("/api/analyze", json={"videoId": test_video_id})

    assert response.status_code == status
    assert response.json() == {"error": message}


def test_method_not_allowed(client):
    """Test that GET on the analyze route is a 405 with an error body."""
    response = client.get("/api/analyze")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_options_preflight(client):
    """Test that a CORS preflight short-circuits with 200."""
    response = client.options(
        "/api/analyze",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_options_without_cors_headers(client):
    """Test that a bare OPTIONS request is answered too."""
    assert client.options("/api/analyze").status_code == 200


def test_cors_header_on_post(client, mock_analyze_video, test_video_id):
    """Test that responses allow any origin."""
    response = client.post("/api/analyze", json={"videoId": test_video_id}, headers={"Origin": "https://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_root_and_health(client):
    """Test the informational endpoints."""
    assert client.get("/").json()["name"] == "YouTube Video Analyzer"
    assert client.get("/api/health").json()["status"] == "ok"
