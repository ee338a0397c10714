"""
YouTube Video Analyzer.

Fetches a YouTube video's captions, condenses them into a timestamped
transcript and asks an LLM for a structured summary a viewer can skim
before deciding whether to watch.
"""

from video_analyzer.config import config

__version__ = config.APP_VERSION
