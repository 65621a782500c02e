"""FFmpeg wrapper functions for audio processing.

This package provides a clean interface to ffmpeg for common audio operations:
- Metadata probing and validation
- Format conversion and loudness normalization
- Manipulation (trimming, volume, fades, speed, joining)
"""

from .core import (
    AudioProperties,
    AudioValidation,
    check_ffmpeg,
    get_audio_duration,
    get_audio_properties,
    parse_probe,
    run_ffmpeg,
    validate_audio_file,
)
from .format import (
    SUPPORTED_FORMATS,
    codec_args,
    convert_audio_format,
    normalize_audio,
)
from .manipulation import (
    MAX_SPEED,
    MIN_SPEED,
    adjust_audio_volume,
    apply_audio_fade,
    atempo_chain,
    change_audio_speed,
    concatenate_audio_files,
    trim_audio_file,
)

__all__ = [
    # Data classes
    "AudioProperties",
    "AudioValidation",
    # Core utilities
    "check_ffmpeg",
    "get_audio_duration",
    "get_audio_properties",
    "parse_probe",
    "run_ffmpeg",
    "validate_audio_file",
    # Format conversion
    "SUPPORTED_FORMATS",
    "codec_args",
    "convert_audio_format",
    "normalize_audio",
    # Manipulation
    "MAX_SPEED",
    "MIN_SPEED",
    "adjust_audio_volume",
    "apply_audio_fade",
    "atempo_chain",
    "change_audio_speed",
    "concatenate_audio_files",
    "trim_audio_file",
]
