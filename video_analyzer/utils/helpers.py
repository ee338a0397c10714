"""
Helper utility functions for the YouTube video analyzer application.
"""

import html
import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")


def format_timestamp(seconds: float) -> str:
    """
    Format a number of seconds as ``H:MM:SS`` or ``M:SS``.

    Args:
        seconds: Position in seconds; fractions are truncated

    Returns:
        Display string such as ``"1:01:01"`` or ``"0:59"``
    """
    total = max(int(seconds), 0)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_iso8601_duration(duration: Optional[str]) -> int:
    """
    Convert an ISO-8601 ``PT#H#M#S`` duration to seconds.

    Args:
        duration: Duration string from the YouTube Data API

    Returns:
        Total seconds, or 0 when the string cannot be parsed
    """
    if not duration:
        return 0
    match = re.fullmatch(r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?", duration.strip())
    if not match:
        return 0
    days, hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def format_view_count(count: Any) -> str:
    """Shorten a view count to ``1.2M`` / ``3.4K`` style."""
    try:
        num = int(count)
    except (TypeError, ValueError):
        return "0"

    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)


def format_date(date_string: Optional[str]) -> Optional[str]:
    """Render an ISO date as ``Jan 5, 2024``; unparseable input is returned as is."""
    if not date_string:
        return date_string
    try:
        date = datetime.fromisoformat(date_string.replace("Z", "+00:00"))
    except ValueError:
        return date_string
    return f"{date.strftime('%b')} {date.day}, {date.year}"


def is_valid_video_id(video_id: Any) -> bool:
    """Check that a value is exactly 11 characters of ``[A-Za-z0-9_-]``."""
    return isinstance(video_id, str) and VIDEO_ID_PATTERN.fullmatch(video_id) is not None


def extract_video_id(url: str) -> Optional[str]:
    """Extract the video ID from a YouTube URL or a bare ID."""
    if not url:
        return None

    url = url.strip()
    if is_valid_video_id(url):
        return url

    # YouTube URL patterns
    patterns = [
        r"(?:v=)([0-9A-Za-z_-]{11})",
        r"(?:youtu\.be\/)([0-9A-Za-z_-]{11})",
        r"(?:embed\/|shorts\/|live\/)([0-9A-Za-z_-]{11})",
    ]

    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return match.group(1)

    return None


def decode_entities(text: str) -> str:
    """
    Decode HTML entities and collapse whitespace in caption text.

    Args:
        text: Raw caption text, possibly containing ``&amp;`` or ``&#39;``

    Returns:
        Single-line text with entities resolved
    """
    # Timed-text payloads are sometimes double-escaped (&amp;#39;)
    decoded = html.unescape(html.unescape(text))
    decoded = decoded.replace("\u00a0", " ")
    return re.sub(r"\s+", " ", decoded).strip()


def save_json(data: Dict[str, Any], filepath: str, pretty: bool = True) -> None:
    """
    Save data to a JSON file.

    Args:
        data: Data to save
        filepath: Path to save the file
        pretty: Whether to format the JSON for readability
    """
    with open(filepath, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)
