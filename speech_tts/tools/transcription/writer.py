"""Persist transcription output as JSON and plain-text artifacts."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .sentences import Segment, Sentence


@dataclass
class TranscriptPaths:
    """Paths of the three files written for one transcription."""

    transcript_path: str
    text_path: str
    sentences_path: str


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def timestamp_basename() -> str:
    """Default artifact base name: the current UTC time with ':' and '.' replaced by '-'."""
    return utc_now_iso().replace(":", "-").replace(".", "-")


def format_timestamp(seconds: float) -> str:
    """Format seconds as HH:MM:SS.mmm (truncated to whole ms, wrapping at 24h)."""
    total_ms = int(seconds * 1000) % (24 * 3600 * 1000)
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, ms = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"


def render_transcript_text(
    segments: list[Segment],
    detected_language: Optional[str],
    transcribed_at: str,
) -> str:
    """Render the human-readable transcript."""
    content = "Audio Transcript\n"
    content += f"Transcribed: {transcribed_at}\n"
    content += f"Detected Language: {detected_language or 'unknown'}\n\n"
    for segment in segments:
        start = format_timestamp(segment.start)
        end = format_timestamp(segment.end)
        content += f"[{start} - {end}]: {segment.text.strip()}\n\n"
    return content


def write_transcript_artifacts(
    output_dir: Path,
    base_name: str,
    raw_segments: list[dict],
    sentences: list[Sentence],
    detected_language: Optional[str],
    metadata: dict,
) -> TranscriptPaths:
    """Write the transcript JSON, the readable transcript and the sentence JSON.

    Each file is written independently; if a later write fails the earlier
    files are left in place.

    Args:
        output_dir: Directory to write into (created if missing).
        base_name: Shared file name prefix.
        raw_segments: Segments exactly as returned by the provider.
        sentences: Aggregated sentences.
        detected_language: Language reported by the provider, if any.
        metadata: Common metadata (audio_file, model, settings).

    Returns:
        TranscriptPaths for the written files.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    transcript_path = output_dir / f"{base_name}_transcript.json"
    text_path = output_dir / f"{base_name}_transcript.txt"
    sentences_path = output_dir / f"{base_name}_sentences.json"

    transcript_data = {
        "detected_language": detected_language or "unknown",
        "segments": raw_segments,
        "metadata": {"transcribed_at": utc_now_iso(), **metadata},
    }
    transcript_path.write_text(json.dumps(transcript_data, indent=2))

    segments = [Segment.from_dict(s) for s in raw_segments]
    text_path.write_text(render_transcript_text(segments, detected_language, utc_now_iso()))

    sentence_data = {
        "sentence_timestamps": [s.to_dict() for s in sentences],
        "metadata": {
            "transcribed_at": utc_now_iso(),
            **metadata,
            "detected_language": detected_language,
        },
    }
    sentences_path.write_text(json.dumps(sentence_data, indent=2))

    return TranscriptPaths(
        transcript_path=str(transcript_path),
        text_path=str(text_path),
        sentences_path=str(sentences_path),
    )
