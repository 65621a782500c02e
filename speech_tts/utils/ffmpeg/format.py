"""Audio format conversion and loudness normalization."""

import os

from .core import ensure_parent_dir, get_audio_properties, run_ffmpeg

CODECS = {
    "mp3": ["-c:a", "libmp3lame", "-q:a", "2"],
    "wav": ["-c:a", "pcm_s16le"],
    "m4a": ["-c:a", "aac", "-b:a", "192k"],
    "ogg": ["-c:a", "libvorbis", "-q:a", "5"],
    "flac": ["-c:a", "flac"],
}

SUPPORTED_FORMATS = tuple(CODECS)


def codec_args(format: str) -> list[str]:
    """ffmpeg codec arguments for an output format (empty lets ffmpeg choose)."""
    return list(CODECS.get(format, []))


def convert_audio_format(input_path: str, output_path: str, format: str = "mp3") -> None:
    """Convert audio file to a specific format."""
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    ensure_parent_dir(output_path)
    run_ffmpeg(["-i", input_path, *codec_args(format), output_path])


def normalize_audio(input_path: str, output_path: str, target_lufs: float = -16.0) -> None:
    """Normalize audio loudness (default -16 LUFS, the podcast standard).

    Preserves the original sample rate of the input file.
    """
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Input file not found: {input_path}")

    ensure_parent_dir(output_path)

    # loudnorm upsamples internally
    props = get_audio_properties(input_path)

    run_ffmpeg(
        [
            "-i",
            input_path,
            "-af",
            f"loudnorm=I={target_lufs}:TP=-1.5:LRA=11",
            "-ar",
            str(props.sample_rate),
            output_path,
        ]
    )
