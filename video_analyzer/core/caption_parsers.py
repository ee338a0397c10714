"""
Parsers that normalize raw caption payloads into CaptionSegment lists.

YouTube serves captions in several shapes depending on who asks: yt-dlp
writes WebVTT or JSON3 files, the timed-text endpoint and the player's
caption ``baseUrl`` return XML (``<text start dur>`` for the legacy format,
``<p t d>`` for srv3), and ``fmt=json3`` returns an event stream. Every
parser here returns an empty list when it finds nothing usable so the
fetcher can treat "nothing parsed" like any other strategy failure.
"""

import json
import math
import re
from typing import Any, Dict, List, Optional, Union

from video_analyzer.models.schemas import CaptionSegment
from video_analyzer.utils.error_handling import NoCaptionsError
from video_analyzer.utils.helpers import decode_entities


VTT_TIMESTAMP = re.compile(
    r"^(?:(\d{1,2}):)?(\d{2}):(\d{2})\.(\d{3})\s*-->\s*(?:(?:(\d{1,2}):)?(\d{2}):(\d{2})\.(\d{3}))?"
)
VTT_CUE_TIME_LINE = re.compile(r"^\d{2}:\d{2}")
MARKUP_TAG = re.compile(r"<[^>]+>")
# Styling that some tracks carry double-escaped, so it only appears after decoding
STYLE_TAG = re.compile(r"</?(?:font|b|i|u|c)\b[^>]*>")

XML_TEXT_ELEMENT = re.compile(r"<text\b([^>]*)>(.*?)</text>", re.DOTALL)
XML_SRV3_ELEMENT = re.compile(r"<p\b([^>]*)>(.*?)</p>", re.DOTALL)
XML_ATTRIBUTE = re.compile(r'(\w+)="([^"]*)"')

DEFAULT_XML_DURATION = 2.0


def _vtt_seconds(hours: Optional[str], minutes: str, seconds: str) -> int:
    return int(hours or 0) * 3600 + int(minutes) * 60 + int(seconds)


def parse_vtt(content: str) -> List[CaptionSegment]:
    """
    Parse a WebVTT document.

    Args:
        content: Full VTT file contents

    Returns:
        One segment per cue with non-empty text, in file order
    """
    transcript = []
    lines = content.splitlines()

    for i, raw_line in enumerate(lines):
        match = VTT_TIMESTAMP.match(raw_line.strip())
        if not match:
            continue

        start = _vtt_seconds(*match.group(1, 2, 3))
        duration = 0
        if match.group(6) is not None:
            end = _vtt_seconds(*match.group(5, 6, 7))
            duration = max(end - start, 0)

        parts = []
        for text_line in lines[i + 1:]:
            text_line = text_line.strip()
            if not text_line:
                break
            if VTT_CUE_TIME_LINE.match(text_line) or text_line == "WEBVTT":
                continue
            clean = decode_entities(MARKUP_TAG.sub("", text_line))
            if clean:
                parts.append(clean)

        text = " ".join(parts)
        if text:
            transcript.append(
                CaptionSegment(text=text, offset_ms=start * 1000, duration_ms=duration * 1000)
            )

    return transcript


def parse_json3(content: Union[str, bytes, Dict[str, Any]]) -> List[CaptionSegment]:
    """
    Parse a JSON3 event stream (``{"events": [{"tStartMs", "dDurationMs", "segs"}]}``).

    Args:
        content: Raw JSON text or an already decoded dictionary

    Returns:
        One segment per event carrying text
    """
    if isinstance(content, (str, bytes)):
        try:
            data = json.loads(content)
        except ValueError:
            return []
    else:
        data = content

    if not isinstance(data, dict):
        return []

    transcript = []
    for event in data.get("events") or []:
        if not isinstance(event, dict):
            continue
        segs = event.get("segs")
        start = event.get("tStartMs")
        if not isinstance(segs, list) or isinstance(start, bool) or not isinstance(start, (int, float)) \
                or not math.isfinite(start):
            continue

        text = "".join(
            seg["utf8"] for seg in segs if isinstance(seg, dict) and isinstance(seg.get("utf8"), str)
        ).strip()
        if not text or text == "\n":
            continue

        text = decode_entities(text)
        if not text:
            continue

        duration = _to_float(event.get("dDurationMs")) or 0
        transcript.append(
            CaptionSegment(text=text, offset_ms=max(int(start), 0), duration_ms=max(int(duration), 0))
        )

    return transcript


def _attributes(raw: str) -> Dict[str, str]:
    return dict(XML_ATTRIBUTE.findall(raw))


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_xml(content: str) -> List[CaptionSegment]:
    """
    Parse timed-text XML.

    Handles the legacy ``<text start="1.5" dur="2.0">`` form (seconds) and the
    srv3 ``<p t="1500" d="2000">`` form (milliseconds).

    Args:
        content: Raw XML document

    Returns:
        Segments in document order

    Raises:
        NoCaptionsError: If the document contains no caption elements
    """
    transcript = []
    matched = False

    for attrs, body in XML_TEXT_ELEMENT.findall(content):
        matched = True
        values = _attributes(attrs)
        start = _to_float(values.get("start"))
        if start is None:
            continue
        duration = _to_float(values.get("dur"))
        if duration is None:
            duration = DEFAULT_XML_DURATION

        text = decode_entities(MARKUP_TAG.sub("", body))
        text = " ".join(STYLE_TAG.sub("", text).split())
        if text:
            transcript.append(
                CaptionSegment(
                    text=text,
                    offset_ms=max(round(start * 1000), 0),
                    duration_ms=max(round(duration * 1000), 0),
                )
            )

    if not matched:
        for attrs, body in XML_SRV3_ELEMENT.findall(content):
            matched = True
            values = _attributes(attrs)
            start = _to_float(values.get("t"))
            if start is None:
                continue
            duration = _to_float(values.get("d"))
            if duration is None:
                duration = DEFAULT_XML_DURATION * 1000

            # srv3 wraps words in <s> elements
            text = decode_entities(MARKUP_TAG.sub("", body))
            text = " ".join(STYLE_TAG.sub("", text).split())
            if text:
                transcript.append(
                    CaptionSegment(text=text, offset_ms=max(int(start), 0), duration_ms=max(int(duration), 0))
                )

    if not matched:
        raise NoCaptionsError("No captions found in XML")

    return transcript


def parse_caption_payload(content: str, fmt: Optional[str] = None) -> List[CaptionSegment]:
    """
    Dispatch a caption payload to the right parser.

    Args:
        content: Raw caption payload
        fmt: Known format (``vtt``, ``json3``, ``xml``/``srv3``); sniffed when omitted

    Returns:
        Parsed segments, possibly empty
    """
    if fmt is None:
        head = content.lstrip()[:16]
        if head.startswith("WEBVTT"):
            fmt = "vtt"
        elif head.startswith("{"):
            fmt = "json3"
        else:
            fmt = "xml"

    if fmt == "vtt":
        return parse_vtt(content)
    if fmt == "json3":
        return parse_json3(content)
    return parse_xml(content)
