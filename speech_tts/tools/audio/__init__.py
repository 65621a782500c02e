"""Audio utilities built on ffmpeg."""

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
from .utilities import (
    adjust_volume,
    apply_fade,
    change_speed,
    concatenate_audio,
    convert_audio,
    get_audio_info,
    get_audio_metadata,
    is_ffmpeg_available,
    normalize_audio,
    trim_audio,
)

__all__ = [
    # Types
    "AudioInfo",
    "AudioMetadata",
    "ConcatenateResult",
    "ConvertResult",
    "FadeResult",
    "NormalizeResult",
    "SpeedResult",
    "TrimResult",
    "VolumeResult",
    # Functions
    "adjust_volume",
    "apply_fade",
    "change_speed",
    "concatenate_audio",
    "convert_audio",
    "get_audio_info",
    "get_audio_metadata",
    "is_ffmpeg_available",
    "normalize_audio",
    "trim_audio",
]
