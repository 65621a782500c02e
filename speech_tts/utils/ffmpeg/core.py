"""Core ffprobe/ffmpeg helpers and data classes."""

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AudioValidation:
    """Result of audio file validation."""

    valid: bool
    duration_ms: Optional[int] = None
    format: Optional[str] = None
    error: Optional[str] = None


@dataclass
class AudioProperties:
    """Audio stream properties from ffprobe."""

    sample_rate: int
    channels: int
    codec: Optional[str] = None
    channel_layout: Optional[str] = None
    bit_depth: Optional[int] = None
    bit_rate: Optional[int] = None
    duration_ms: Optional[int] = None
    format: Optional[str] = None
    format_long_name: Optional[str] = None
    tags: dict = field(default_factory=dict)


def check_ffmpeg() -> bool:
    """Check if ffmpeg is installed and available."""
    try:
        subprocess.run(["ffmpeg", "-version"], capture_output=True, check=True)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def ensure_parent_dir(output_path: str) -> None:
    """Create the parent directory of an output file if needed."""
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)


def run_ffmpeg(args: list[str]) -> None:
    """Run ffmpeg with -y, raising RuntimeError with its stderr on failure."""
    try:
        subprocess.run(["ffmpeg", "-y", *args], capture_output=True, check=True)
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else e.stderr
        raise RuntimeError(f"ffmpeg failed: {(stderr or '').strip()[-500:]}") from e


def get_audio_duration(file_path: str) -> int:
    """Get the duration of an audio file in milliseconds."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Audio file not found: {file_path}")

    try:
        result = subprocess.run(
            [
                "ffprobe",
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                file_path,
            ],
            capture_output=True,
            text=True,
            check=True,
        )
        seconds = float(result.stdout.strip())
        return round(seconds * 1000)
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"Failed to get audio duration: {e.stderr}")


def parse_probe(probe: dict) -> AudioProperties:
    """Build AudioProperties from ffprobe JSON output."""
    streams = probe.get("streams") or [{}]
    stream = streams[0]
    fmt = probe.get("format", {})

    bits = stream.get("bits_per_sample") or stream.get("bits_per_raw_sample")
    bit_depth = int(bits) if bits and int(bits) > 0 else None
    bit_rate = stream.get("bit_rate") or fmt.get("bit_rate")
    duration = fmt.get("duration") or stream.get("duration")

    return AudioProperties(
        sample_rate=int(stream.get("sample_rate", 44100)),
        channels=int(stream.get("channels", 2)),
        codec=stream.get("codec_name"),
        channel_layout=stream.get("channel_layout"),
        bit_depth=bit_depth,
        bit_rate=int(bit_rate) if bit_rate else None,
        duration_ms=round(float(duration) * 1000) if duration else None,
        format=fmt.get("format_name"),
        format_long_name=fmt.get("format_long_name"),
        tags=fmt.get("tags") or {},
    )


def get_audio_properties(file_path: str) -> AudioProperties:
    """Get audio file properties: stream, container and tag metadata.

    Raises:
        FileNotFoundError: If file doesn't exist.
        RuntimeError: If ffprobe fails.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Audio file not found: {file_path}")

    try:
        result = subprocess.run(
            [
                "ffprobe",
                "-v",
                "error",
                "-select_streams",
                "a:0",
                "-show_entries",
                "stream=codec_name,sample_rate,channels,channel_layout,bits_per_sample,"
                "bits_per_raw_sample,bit_rate,duration"
                ":format=duration,format_name,format_long_name,bit_rate:format_tags",
                "-of",
                "json",
                file_path,
            ],
            capture_output=True,
            text=True,
            check=True,
        )
        return parse_probe(json.loads(result.stdout))
    except (subprocess.CalledProcessError, json.JSONDecodeError, KeyError, ValueError) as e:
        raise RuntimeError(f"Failed to get audio properties: {e}")


def validate_audio_file(file_path: str) -> AudioValidation:
    """Validate that an audio file exists and is readable."""
    if not os.path.exists(file_path):
        return AudioValidation(valid=False, error="File not found")

    try:
        result = subprocess.run(
            [
                "ffprobe",
                "-v",
                "error",
                "-show_entries",
                "format=duration,format_name",
                "-of",
                "json",
                file_path,
            ],
            capture_output=True,
            text=True,
            check=True,
        )
        probe = json.loads(result.stdout)

        return AudioValidation(
            valid=True,
            duration_ms=round(float(probe["format"]["duration"]) * 1000),
            format=probe["format"]["format_name"],
        )
    except (subprocess.CalledProcessError, json.JSONDecodeError, KeyError) as e:
        return AudioValidation(valid=False, error=f"Invalid audio file: {e}")
