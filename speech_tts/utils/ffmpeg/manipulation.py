"""Audio manipulation utilities (trimming, volume, fades, speed, joining)."""

import os
import subprocess
from typing import Optional

from .core import ensure_parent_dir, get_audio_duration, run_ffmpeg
from .format import codec_args, convert_audio_format

MIN_SPEED = 0.5
MAX_SPEED = 4.0


def trim_audio_file(
    input_path: str,
    output_path: str,
    start_ms: Optional[float] = None,
    end_ms: Optional[float] = None,
) -> None:
    """Trim an audio file to the specified start and end times.

    Args:
        input_path: Path to input audio file.
        output_path: Path for output audio file.
        start_ms: Start time in milliseconds (None = start from beginning).
        end_ms: End time in milliseconds (None = go to end of file).
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    ensure_parent_dir(output_path)

    window = []
    if start_ms is not None:
        window.extend(["-ss", str(start_ms / 1000)])
    if end_ms is not None:
        if start_ms is not None:
            window.extend(["-t", str((end_ms - start_ms) / 1000)])
        else:
            window.extend(["-to", str(end_ms / 1000)])

    # Copy codec for lossless trim when possible
    try:
        subprocess.run(
            ["ffmpeg", "-y", "-i", input_path, *window, "-c", "copy", output_path],
            capture_output=True,
            check=True,
        )
    except subprocess.CalledProcessError:
        # Re-encode if stream copy fails (e.g. container change)
        run_ffmpeg(["-i", input_path, *window, output_path])


def adjust_audio_volume(
    input_path: str,
    output_path: str,
    volume: float = 1.0,
    volume_db: Optional[float] = None,
) -> None:
    """Adjust the volume of an audio file.

    Args:
        input_path: Path to input audio file.
        output_path: Path for output audio file.
        volume: Volume multiplier (1.0 = original, 2.0 = double, 0.5 = half).
        volume_db: Volume adjustment in dB (overrides volume if specified).
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    ensure_parent_dir(output_path)

    if volume_db is not None:
        filter_str = f"volume={volume_db}dB"
    else:
        filter_str = f"volume={volume}"

    run_ffmpeg(["-i", input_path, "-af", filter_str, output_path])


def apply_audio_fade(
    input_path: str,
    output_path: str,
    fade_in_ms: float = 0,
    fade_out_ms: float = 0,
) -> None:
    """Apply fade in and/or fade out to audio."""
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    if fade_in_ms <= 0 and fade_out_ms <= 0:
        convert_audio_format(input_path, output_path, os.path.splitext(output_path)[1].lstrip("."))
        return

    ensure_parent_dir(output_path)

    duration_secs = get_audio_duration(input_path) / 1000

    filters = []
    if fade_in_ms > 0:
        filters.append(f"afade=t=in:st=0:d={fade_in_ms / 1000}")
    if fade_out_ms > 0:
        fade_out_secs = fade_out_ms / 1000
        fade_out_start = max(0, duration_secs - fade_out_secs)
        filters.append(f"afade=t=out:st={fade_out_start}:d={fade_out_secs}")

    run_ffmpeg(["-i", input_path, "-af", ",".join(filters), output_path])


def atempo_chain(speed: float) -> list[str]:
    """Split a speed factor into atempo filters (each limited to 0.5-2.0)."""
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed}")

    filters = []
    remaining = speed
    while remaining > 2.0:
        filters.append("atempo=2.0")
        remaining /= 2.0
    if remaining != 1.0 or not filters:
        filters.append(f"atempo={remaining}")
    return filters


def change_audio_speed(input_path: str, output_path: str, speed: float = 1.0) -> None:
    """Change playback speed without changing pitch."""
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    filter_str = ",".join(atempo_chain(speed))
    ensure_parent_dir(output_path)
    run_ffmpeg(["-i", input_path, "-af", filter_str, output_path])


def concatenate_audio_files(
    input_files: list[str],
    output_path: str,
    format: str = "mp3",
    gap_ms: float = 0,
    sample_rate: int = 44100,
) -> None:
    """Join audio files end to end, optionally with silence between them.

    Inputs are resampled to a common rate and stereo layout so files of
    different formats can be joined.

    Args:
        input_files: Audio files in playback order.
        output_path: Path for output audio file.
        format: Output format (mp3, wav, m4a, ogg, flac).
        gap_ms: Milliseconds of silence between consecutive files.
        sample_rate: Sample rate of the joined output.
    """
    if not input_files:
        raise ValueError("No input files provided")

    for file in input_files:
        if not os.path.exists(file):
            raise FileNotFoundError(f"Input file not found: {file}")

    ensure_parent_dir(output_path)

    inputs = []
    for file in input_files:
        inputs.extend(["-i", file])

    labels = []
    filters = []
    for i in range(len(input_files)):
        filters.append(f"[{i}:a]aresample={sample_rate},aformat=channel_layouts=stereo[a{i}]")
        labels.append(f"[a{i}]")

    if gap_ms > 0 and len(input_files) > 1:
        # One lavfi silence input reused via asplit
        silence_index = len(input_files)
        gap_count = len(input_files) - 1
        inputs.extend(
            [
                "-f",
                "lavfi",
                "-t",
                str(gap_ms / 1000),
                "-i",
                f"anullsrc=r={sample_rate}:cl=stereo",
            ]
        )
        gap_labels = [f"[g{i}]" for i in range(gap_count)]
        if gap_count == 1:
            filters.append(f"[{silence_index}:a]anull{gap_labels[0]}")
        else:
            filters.append(f"[{silence_index}:a]asplit={gap_count}{''.join(gap_labels)}")

        interleaved = []
        for i, label in enumerate(labels):
            interleaved.append(label)
            if i < gap_count:
                interleaved.append(gap_labels[i])
        labels = interleaved

    filters.append(f"{''.join(labels)}concat=n={len(labels)}:v=0:a=1[out]")

    run_ffmpeg(
        [
            *inputs,
            "-filter_complex",
            ";".join(filters),
            "-map",
            "[out]",
            *codec_args(format),
            output_path,
        ]
    )
