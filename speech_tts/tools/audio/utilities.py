"""Audio metadata, conversion and manipulation functions."""

from pathlib import Path
from typing import Optional

from ...utils.ffmpeg import (
    SUPPORTED_FORMATS,
    check_ffmpeg,
    validate_audio_file,
    get_audio_duration,
    get_audio_properties,
    adjust_audio_volume as _adjust_volume,
    apply_audio_fade as _apply_fade,
    change_audio_speed as _change_speed,
    concatenate_audio_files as _concat_files,
    convert_audio_format as _convert_format,
    normalize_audio as _normalize,
    trim_audio_file as _trim,
)

from .types import (
    AudioInfo,
    AudioMetadata,
    ConcatenateResult,
    ConvertResult,
    FadeResult,
    NormalizeResult,
    SpeedResult,
    TrimResult,
    VolumeResult,
)


def is_ffmpeg_available() -> bool:
    """Check if ffmpeg is installed."""
    return check_ffmpeg()


def _require_ffmpeg() -> None:
    if not check_ffmpeg():
        raise RuntimeError("ffmpeg is not installed or not in PATH")


def _require_input(input_path: str) -> Path:
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    return path


def _check_format(output_format: str) -> None:
    if output_format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format: {output_format}. Use one of {', '.join(SUPPORTED_FORMATS)}."
        )


def _derived_output_path(input_path: str, suffix: str, output_path: Optional[str]) -> str:
    """Default output path: ``<stem>_<suffix><ext>`` next to the input."""
    if output_path:
        return output_path
    path = Path(input_path)
    return str(path.with_name(f"{path.stem}_{suffix}{path.suffix}"))


def get_audio_info(audio_path: str) -> AudioInfo:
    """Get information about an audio file.

    Args:
        audio_path: Path to the audio file.

    Returns:
        AudioInfo with duration, format, size, and validity.
    """
    path = Path(audio_path)

    if not path.exists():
        return AudioInfo(path=audio_path, exists=False, error="File not found")

    if not check_ffmpeg():
        return AudioInfo(
            path=audio_path,
            exists=True,
            size_bytes=path.stat().st_size,
            valid=False,
            error="ffprobe not available - install ffmpeg to get audio metadata",
        )

    validation = validate_audio_file(audio_path)

    if not validation.valid:
        return AudioInfo(path=audio_path, exists=True, valid=False, error=validation.error)

    return AudioInfo(
        path=audio_path,
        exists=True,
        format=validation.format,
        duration_ms=validation.duration_ms,
        size_bytes=path.stat().st_size,
        valid=True,
    )


def get_audio_metadata(audio_path: str) -> AudioMetadata:
    """Get detailed metadata: codec, sample rate, channels, bit rate, tags.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        RuntimeError: If ffprobe is missing or fails.
    """
    path = _require_input(audio_path)
    _require_ffmpeg()

    props = get_audio_properties(audio_path)
    return AudioMetadata(
        path=audio_path,
        format=props.format,
        format_long_name=props.format_long_name,
        codec=props.codec,
        duration_ms=props.duration_ms,
        duration_seconds=props.duration_ms / 1000 if props.duration_ms is not None else None,
        sample_rate=props.sample_rate,
        channels=props.channels,
        channel_layout=props.channel_layout,
        bit_depth=props.bit_depth,
        bit_rate=props.bit_rate,
        size_bytes=path.stat().st_size,
        tags=props.tags,
    )


def convert_audio(
    input_path: str,
    output_format: str = "mp3",
    output_path: Optional[str] = None,
) -> ConvertResult:
    """Convert an audio file to a different format.

    Args:
        input_path: Path to the input audio file.
        output_format: Target format (mp3, wav, m4a, ogg, flac). Default: mp3.
        output_path: Optional output path. Defaults to the input path with the
            new extension.

    Raises:
        RuntimeError: If ffmpeg is not installed.
        FileNotFoundError: If input file doesn't exist.
        ValueError: If output format is unsupported.
    """
    _require_ffmpeg()
    _check_format(output_format)
    input_path_obj = _require_input(input_path)

    if output_path is None:
        output_path = str(input_path_obj.with_suffix(f".{output_format}"))
    if Path(output_path).resolve() == input_path_obj.resolve():
        raise ValueError("Output path must differ from input path")

    input_size = input_path_obj.stat().st_size
    _convert_format(input_path, output_path, output_format)
    output_size = Path(output_path).stat().st_size

    return ConvertResult(
        input_path=input_path,
        output_path=output_path,
        input_format=input_path_obj.suffix.lstrip("."),
        output_format=output_format,
        input_size_bytes=input_size,
        output_size_bytes=output_size,
        compression_ratio=round(input_size / output_size, 2) if output_size else 0,
        duration_ms=get_audio_duration(output_path),
    )


def normalize_audio(
    input_path: str,
    output_path: Optional[str] = None,
    target_lufs: float = -16.0,
) -> NormalizeResult:
    """Normalize loudness to a LUFS target (default -16, podcast standard)."""
    _require_ffmpeg()
    _require_input(input_path)

    output_path = _derived_output_path(input_path, "normalized", output_path)
    _normalize(input_path, output_path, target_lufs)

    return NormalizeResult(
        input_path=input_path,
        output_path=output_path,
        target_lufs=target_lufs,
        duration_ms=get_audio_duration(output_path),
    )


def trim_audio(
    input_path: str,
    start_ms: Optional[float] = None,
    end_ms: Optional[float] = None,
    output_path: Optional[str] = None,
) -> TrimResult:
    """Cut an audio file down to [start_ms, end_ms].

    Raises:
        ValueError: If neither bound is given, a bound is negative, or end <= start.
    """
    _require_ffmpeg()
    _require_input(input_path)

    if start_ms is None and end_ms is None:
        raise ValueError("Specify start_ms and/or end_ms")
    if (start_ms is not None and start_ms < 0) or (end_ms is not None and end_ms < 0):
        raise ValueError("start_ms and end_ms must be non-negative")
    if start_ms is not None and end_ms is not None and end_ms <= start_ms:
        raise ValueError(f"end_ms ({end_ms}) must be greater than start_ms ({start_ms})")

    original_duration = get_audio_duration(input_path)
    output_path = _derived_output_path(input_path, "trimmed", output_path)
    _trim(input_path, output_path, start_ms, end_ms)

    return TrimResult(
        input_path=input_path,
        output_path=output_path,
        original_duration_ms=original_duration,
        trimmed_duration_ms=get_audio_duration(output_path),
        start_ms=start_ms,
        end_ms=end_ms,
    )


def adjust_volume(
    input_path: str,
    volume: Optional[float] = None,
    volume_db: Optional[float] = None,
    output_path: Optional[str] = None,
) -> VolumeResult:
    """Scale volume by a multiplier or by a dB offset (dB wins if both are given)."""
    _require_ffmpeg()
    _require_input(input_path)

    if volume is None and volume_db is None:
        raise ValueError("Specify volume or volume_db")
    if volume_db is None and volume < 0:
        raise ValueError("volume must be non-negative")

    output_path = _derived_output_path(input_path, "volume", output_path)
    _adjust_volume(input_path, output_path, volume if volume is not None else 1.0, volume_db)

    return VolumeResult(
        input_path=input_path,
        output_path=output_path,
        volume=volume,
        volume_db=volume_db,
        duration_ms=get_audio_duration(output_path),
    )


def apply_fade(
    input_path: str,
    fade_in_ms: float = 0,
    fade_out_ms: float = 0,
    output_path: Optional[str] = None,
) -> FadeResult:
    """Fade in from silence and/or fade out to silence."""
    _require_ffmpeg()
    _require_input(input_path)

    if fade_in_ms < 0 or fade_out_ms < 0:
        raise ValueError("Fade durations must be non-negative")

    output_path = _derived_output_path(input_path, "faded", output_path)
    _apply_fade(input_path, output_path, fade_in_ms, fade_out_ms)

    return FadeResult(
        input_path=input_path,
        output_path=output_path,
        fade_in_ms=fade_in_ms,
        fade_out_ms=fade_out_ms,
        duration_ms=get_audio_duration(output_path),
    )


def change_speed(
    input_path: str,
    speed: float,
    output_path: Optional[str] = None,
) -> SpeedResult:
    """Speed up or slow down audio without shifting pitch (0.5x to 4x)."""
    _require_ffmpeg()
    _require_input(input_path)

    original_duration = get_audio_duration(input_path)
    output_path = _derived_output_path(input_path, f"{speed}x", output_path)
    _change_speed(input_path, output_path, speed)

    return SpeedResult(
        input_path=input_path,
        output_path=output_path,
        speed=speed,
        original_duration_ms=original_duration,
        new_duration_ms=get_audio_duration(output_path),
    )


def concatenate_audio(
    audio_paths: list[str],
    output_path: str,
    output_format: Optional[str] = None,
    gap_ms: float = 0,
) -> ConcatenateResult:
    """Join audio files in order, with optional silence between them.

    Args:
        audio_paths: Files to join, in order.
        output_path: Path for the joined file.
        output_format: Output format; inferred from the output extension if None.
        gap_ms: Silence between consecutive files in milliseconds.
    """
    _require_ffmpeg()

    if not audio_paths:
        raise ValueError("No audio paths provided")
    if gap_ms < 0:
        raise ValueError("gap_ms must be non-negative")

    output_format = output_format or Path(output_path).suffix.lstrip(".") or "mp3"
    _check_format(output_format)

    for path in audio_paths:
        _require_input(path)

    _concat_files(audio_paths, output_path, output_format, gap_ms)

    return ConcatenateResult(
        output_path=output_path,
        input_count=len(audio_paths),
        total_duration_ms=get_audio_duration(output_path),
        output_format=output_format,
        gap_ms=gap_ms,
    )
