"""
Main Streamlit application for the YouTube Video Analyzer.
"""

import os

import streamlit as st
from dotenv import load_dotenv

from video_analyzer.frontend.api_client import ApiClient
from video_analyzer.frontend.components import (
    header, sidebar, youtube_input, display_analysis,
    loading_spinner, display_error, youtube_embed,
)


load_dotenv()


def init_session_state():
    """Initialize session state variables."""
    if "api_url" not in st.session_state:
        st.session_state.api_url = os.getenv("API_URL", "http://localhost:8000")

    if "last_result" not in st.session_state:
        st.session_state.last_result = None


def process_youtube_url(url: str):
    """
    Ask the API to analyze a YouTube URL.

    Args:
        url: YouTube URL

    Returns:
        Analysis dictionary or ``{"error": ...}``
    """
    client = ApiClient(st.session_state.api_url)

    try:
        with loading_spinner("Fetching captions and analyzing. This can take a minute..."):
            return client.analyze_video(url)
    except Exception as e:
        return {"error": f"Error analyzing video: {str(e)}"}


def main():
    """Main application entry point."""
    header()
    init_session_state()
    sidebar()

    url = youtube_input()
    if url:
        st.session_state.last_result = process_youtube_url(url)

    result = st.session_state.last_result
    if not result:
        return

    if "error" in result:
        display_error(result["error"])
        return

    youtube_embed(result["videoId"])
    display_analysis(result)


if __name__ == "__main__":
    main()
