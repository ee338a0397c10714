"""
Reusable UI components for the Streamlit app.
"""

import streamlit as st
from typing import Dict, Any, List, Optional


def header():
    """Display the application header."""
    st.set_page_config(
        page_title="YouTube Video Analyzer",
        page_icon="🎬",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("🎬 YouTube Video Analyzer")
    st.markdown("""
    Find out what a video covers, and whether it's worth your time, before you watch it.
    """)
    st.divider()


def sidebar():
    """Display the sidebar with app information and options."""
    with st.sidebar:
        st.title("Video Analyzer")

        st.markdown("## About")
        st.info("""
        Paste a YouTube link and get:
        - A short summary of the video
        - Timestamped topics or chapters you can jump to
        - Takeaways and a watch/skip recommendation
        """)

        st.markdown("## Settings")
        st.text_input("API URL", key="api_url")


def youtube_input() -> Optional[str]:
    """
    Display a YouTube URL input field.

    Returns:
        The entered YouTube URL or None
    """
    with st.form(key="youtube_form"):
        url = st.text_input(
            "Enter YouTube URL",
            placeholder="https://www.youtube.com/watch?v=VIDEO_ID",
        )
        submit = st.form_submit_button("Analyze")

    if submit and url:
        return url

    return None


def timestamp_link(video_id: str, seconds: int, label: str) -> str:
    """Markdown link that opens the video at a given second."""
    return f"[{label}](https://www.youtube.com/watch?v={video_id}&t={seconds}s)"


def _video_details(result: Dict[str, Any]):
    details = [f"**Duration:** {result['duration']}"]
    if result.get("channelTitle"):
        details.append(f"**Channel:** {result['channelTitle']}")
    if result.get("viewCount"):
        details.append(f"**Views:** {result['viewCount']}")
    if result.get("publishedAt"):
        details.append(f"**Published:** {result['publishedAt']}")
    st.markdown(" · ".join(details))


def _bullets(items: List[str], numbered: bool = False):
    for i, item in enumerate(items, start=1):
        st.markdown(f"{i}. {item}" if numbered else f"- {item}")


def display_analysis(result: Dict[str, Any]):
    """
    Display the analysis returned by the API.

    Args:
        result: Analysis dictionary in either the summary or the detailed shape
    """
    video_id = result["videoId"]
    st.markdown(f"## {result.get('title') or video_id}")
    _video_details(result)

    if "tldr" in result:
        st.markdown("### TL;DR")
        st.markdown(result["tldr"])

        if result.get("keyTopics"):
            st.markdown("### Key Topics")
            _bullets(result["keyTopics"])

        if result.get("chapters"):
            st.markdown("### Chapters")
            for chapter in result["chapters"]:
                link = timestamp_link(video_id, chapter["timestamp"], chapter["timestampFormatted"])
                st.markdown(f"- {link} {chapter['title']}")

        if result.get("keyTakeaways"):
            st.markdown("### Key Takeaways")
            _bullets(result["keyTakeaways"], numbered=True)

        if result.get("shouldWatch"):
            st.markdown("### Should You Watch?")
            st.info(result["shouldWatch"])
    else:
        st.markdown("### Summary")
        st.markdown(result.get("summary", ""))

        st.markdown("### Topics")
        for topic in result.get("topics", []):
            link = timestamp_link(video_id, topic["timestamp"], topic["timestampFormatted"])
            st.markdown(f"**{link} {topic['title']}**")
            st.markdown(topic["description"])


def loading_spinner(message: str = "Processing..."):
    """
    Display a loading spinner with a message.

    Args:
        message: Message to display with the spinner
    """
    return st.spinner(message)


def display_error(message: str):
    """
    Display an error message.

    Args:
        message: Error message to display
    """
    st.error(message)


def youtube_embed(video_id: str):
    """
    Embed a YouTube video.

    Args:
        video_id: YouTube video ID
    """
    st.video(f"https://www.youtube.com/watch?v={video_id}")
