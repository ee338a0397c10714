"""
Caption acquisition strategies.

Each strategy exposes a ``name`` and a ``fetch(video_id)`` method that either
returns caption segments or raises. The fetcher tries them in order, so a
strategy only has to worry about its own source.
"""

import json
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import requests
from pytubefix import YouTube
from youtube_transcript_api import YouTubeTranscriptApi

from video_analyzer.core.caption_parsers import parse_caption_payload, parse_xml
from video_analyzer.models.schemas import CaptionSegment, CaptionTrack, FetcherConfig
from video_analyzer.utils.error_handling import NoCaptionsError, StrategyError
from video_analyzer.utils.logger import logging


WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
INNERTUBE_PLAYER_URL = "https://www.youtube.com/youtubei/v1/player?prettyPrint=false"
TIMEDTEXT_URL = "https://www.youtube.com/api/timedtext"

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}

INNERTUBE_CLIENT = {
    "clientName": "ANDROID",
    "clientVersion": "20.10.38",
    "androidSdkVersion": 30,
    "hl": "en",
}
INNERTUBE_HEADERS = {
    "User-Agent": "com.google.android.youtube/20.10.38 (Linux; U; Android 11) gzip",
    "Content-Type": "application/json",
}


def watch_url(video_id: str) -> str:
    """Canonical watch page URL for a video ID."""
    return WATCH_URL.format(video_id=video_id)


def is_english(language_code: Optional[str]) -> bool:
    """True for ``en`` and any ``en-*`` variant."""
    if not language_code:
        return False
    code = language_code.lower()
    return code == "en" or code.startswith("en-")


def select_caption_track(tracks: Sequence[CaptionTrack]) -> Optional[CaptionTrack]:
    """
    Pick the caption track to download.

    Args:
        tracks: Tracks in the order the source lists them

    Returns:
        The first English track, else the first track, else None
    """
    for track in tracks:
        if is_english(track.language_code):
            return track
    return tracks[0] if tracks else None


def tracks_from_player_response(player_response: Dict[str, Any]) -> List[CaptionTrack]:
    """Read caption tracks out of a ``/player`` response or ``ytInitialPlayerResponse``."""
    status = (player_response.get("playabilityStatus") or {}).get("status")
    if status and status != "OK":
        reason = player_response["playabilityStatus"].get("reason", status)
        raise StrategyError(f"Video not playable: {reason}")

    renderer = (player_response.get("captions") or {}).get("playerCaptionsTracklistRenderer") or {}
    tracks = []
    for raw in renderer.get("captionTracks") or []:
        if not raw.get("baseUrl"):
            continue
        name = raw.get("name") or {}
        tracks.append(
            CaptionTrack(
                language_code=raw.get("languageCode", ""),
                base_url=raw["baseUrl"],
                kind=raw.get("kind"),
                name=name.get("simpleText") or "".join(r.get("text", "") for r in name.get("runs", [])),
            )
        )
    return tracks


class YtDlpSubtitleStrategy:
    """Download subtitles with the yt-dlp command line tool."""

    name = "ytdlp"
    formats = ("vtt", "json3")

    def __init__(self, config: FetcherConfig):
        self.config = config

    def _download(self, video_id: str, output_template: str, fmt: str) -> None:
        cmd = [
            self.config.yt_dlp_path,
            "--write-auto-sub",
            "--write-sub",
            "--sub-lang", "en.*,en",
            "--skip-download",
            "--sub-format", fmt,
            "-o", output_template,
            watch_url(video_id),
        ]
        logging.debug(f"Running: {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.config.subtitle_timeout,
            check=False,
        )
        if result.returncode != 0:
            logging.debug(f"yt-dlp exited with {result.returncode}: {result.stderr.strip()[:500]}")

    @staticmethod
    def _pick_file(directory: str, fmt: str) -> Optional[Path]:
        # yt-dlp names files <template>.<lang>.<ext>
        files = sorted(Path(directory).glob(f"*.{fmt}"))
        for path in files:
            if is_english(path.suffixes[-2].lstrip(".") if len(path.suffixes) >= 2 else None):
                return path
        return files[0] if files else None

    def fetch(self, video_id: str) -> List[CaptionSegment]:
        errors = []
        with tempfile.TemporaryDirectory(prefix=f"yt-{video_id}-") as tmp_dir:
            output_template = os.path.join(tmp_dir, video_id)
            for fmt in self.formats:
                try:
                    self._download(video_id, output_template, fmt)
                except subprocess.TimeoutExpired:
                    errors.append(f"{fmt} download timed out after {self.config.subtitle_timeout}s")
                    continue
                except FileNotFoundError:
                    raise StrategyError(f"yt-dlp not found at {self.config.yt_dlp_path}")

                subtitle_file = self._pick_file(tmp_dir, fmt)
                if subtitle_file is None:
                    errors.append(f"no {fmt} subtitle file written")
                    continue

                segments = parse_caption_payload(subtitle_file.read_text(encoding="utf-8"), fmt)
                if segments:
                    logging.info(f"yt-dlp: parsed {len(segments)} segments from {subtitle_file.name}")
                    return segments
                errors.append(f"{fmt} subtitle file had no usable cues")

        raise StrategyError("; ".join(errors) or "yt-dlp produced no subtitles")


class TranscriptApiStrategy:
    """Fetch captions through the youtube-transcript-api library."""

    name = "transcript_api"

    def __init__(self, config: FetcherConfig):
        self.config = config

    def fetch(self, video_id: str) -> List[CaptionSegment]:
        api = YouTubeTranscriptApi()
        available = list(api.list(video_id))
        tracks = [CaptionTrack(language_code=t.language_code, name=t.language) for t in available]
        chosen = select_caption_track(tracks)
        if chosen is None:
            raise StrategyError("no transcripts listed")

        transcript = available[tracks.index(chosen)]
        segments = []
        for snippet in transcript.fetch():
            text = snippet.text.replace("\n", " ").strip()
            if not text:
                continue
            segments.append(
                CaptionSegment(
                    text=text,
                    offset_ms=max(int(round(snippet.start * 1000)), 0),
                    duration_ms=max(int(round(snippet.duration * 1000)), 0),
                )
            )
        return segments


class PytubefixCaptionStrategy:
    """Read the caption tracks pytubefix exposes on a ``YouTube`` object."""

    name = "pytubefix"

    def __init__(self, config: FetcherConfig):
        self.config = config

    def fetch(self, video_id: str) -> List[CaptionSegment]:
        yt = YouTube(watch_url(video_id))
        captions = list(yt.captions)
        tracks = [CaptionTrack(language_code=c.code, name=c.name) for c in captions]
        chosen = select_caption_track(tracks)
        if chosen is None:
            raise StrategyError("video exposes no caption tracks")

        caption = captions[tracks.index(chosen)]
        logging.debug(f"pytubefix: using caption track {caption.code}")
        return parse_xml(caption.xml_captions)


class _PlayerCaptionStrategy:
    """Shared download step for strategies that discover tracks from player data."""

    def __init__(self, config: FetcherConfig):
        self.config = config

    def _player_response(self, video_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def fetch(self, video_id: str) -> List[CaptionSegment]:
        tracks = tracks_from_player_response(self._player_response(video_id))
        track = select_caption_track(tracks)
        if track is None:
            raise StrategyError("player response lists no caption tracks")

        response = requests.get(
            track.base_url, headers=BROWSER_HEADERS, timeout=self.config.subtitle_timeout
        )
        response.raise_for_status()
        if not response.text.strip():
            raise StrategyError(f"empty caption body for track {track.language_code}")
        return parse_caption_payload(response.text)


class WatchPageStrategy(_PlayerCaptionStrategy):
    """Scrape ``ytInitialPlayerResponse`` from the watch page."""

    name = "watch_page"
    marker = "ytInitialPlayerResponse"

    def _player_response(self, video_id: str) -> Dict[str, Any]:
        response = requests.get(
            watch_url(video_id),
            headers=BROWSER_HEADERS,
            cookies={"CONSENT": "YES+1"},
            timeout=self.config.request_timeout,
        )
        response.raise_for_status()
        page = response.text

        start = page.find(self.marker)
        if start == -1:
            raise StrategyError("watch page has no player response")
        brace = page.find("{", start)
        if brace == -1:
            raise StrategyError("watch page has no player response")
        try:
            player_response, _ = json.JSONDecoder().raw_decode(page, brace)
        except ValueError as e:
            raise StrategyError(f"could not decode player response: {e}")
        return player_response


class InnertubePlayerStrategy(_PlayerCaptionStrategy):
    """Ask the internal ``youtubei/v1/player`` endpoint for caption tracks."""

    name = "innertube"

    def _player_response(self, video_id: str) -> Dict[str, Any]:
        response = requests.post(
            INNERTUBE_PLAYER_URL,
            json={"context": {"client": INNERTUBE_CLIENT}, "videoId": video_id},
            headers=INNERTUBE_HEADERS,
            timeout=self.config.request_timeout,
        )
        response.raise_for_status()
        return response.json()


class TimedTextStrategy:
    """Query the timed-text endpoint over several language codes."""

    name = "timedtext"

    def __init__(self, config: FetcherConfig):
        self.config = config

    def fetch(self, video_id: str) -> List[CaptionSegment]:
        for lang in self.config.languages:
            for kind in (None, "asr"):
                params = {"v": video_id, "lang": lang}
                if kind:
                    params["kind"] = kind
                try:
                    response = requests.get(
                        TIMEDTEXT_URL, params=params, headers=BROWSER_HEADERS, timeout=self.config.request_timeout
                    )
                except requests.RequestException as e:
                    logging.debug(f"timedtext: lang={lang} kind={kind} failed: {e}")
                    continue
                if response.status_code != 200 or not response.text.strip():
                    continue
                try:
                    segments = parse_xml(response.text)
                except NoCaptionsError:
                    continue
                if segments:
                    logging.debug(f"timedtext: lang={lang} kind={kind} gave {len(segments)} segments")
                    return segments

        raise StrategyError(f"no timed text for languages {', '.join(self.config.languages)}")


STRATEGIES = {
    strategy.name: strategy
    for strategy in (
        YtDlpSubtitleStrategy,
        TranscriptApiStrategy,
        PytubefixCaptionStrategy,
        WatchPageStrategy,
        InnertubePlayerStrategy,
        TimedTextStrategy,
    )
}


def build_strategies(config: FetcherConfig) -> list:
    """
    Instantiate the configured strategies in priority order.

    Args:
        config: Fetcher configuration naming the strategies

    Returns:
        List of strategy instances

    Raises:
        ValueError: If a configured name is unknown
    """
    unknown = [name for name in config.strategies if name not in STRATEGIES]
    if unknown:
        raise ValueError(f"Unknown caption strategies: {', '.join(unknown)}")
    return [STRATEGIES[name](config) for name in config.strategies]
