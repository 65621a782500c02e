"""Data classes for audio tool results."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AudioInfo:
    """Basic information about an audio file."""

    path: str
    exists: bool
    format: Optional[str] = None
    duration_ms: Optional[int] = None
    size_bytes: Optional[int] = None
    valid: bool = False
    error: Optional[str] = None


@dataclass
class AudioMetadata:
    """Detailed stream and container metadata of an audio file."""

    path: str
    format: Optional[str]
    format_long_name: Optional[str]
    codec: Optional[str]
    duration_ms: Optional[int]
    duration_seconds: Optional[float]
    sample_rate: int
    channels: int
    channel_layout: Optional[str] = None
    bit_depth: Optional[int] = None
    bit_rate: Optional[int] = None
    size_bytes: int = 0
    tags: dict = field(default_factory=dict)


@dataclass
class ConvertResult:
    """Result of an audio conversion operation."""

    input_path: str
    output_path: str
    input_format: str
    output_format: str
    input_size_bytes: int
    output_size_bytes: int
    compression_ratio: float
    duration_ms: int


@dataclass
class NormalizeResult:
    """Result of audio normalization."""

    input_path: str
    output_path: str
    target_lufs: float
    duration_ms: int


@dataclass
class TrimResult:
    """Result of audio trimming operation."""

    input_path: str
    output_path: str
    original_duration_ms: int
    trimmed_duration_ms: int
    start_ms: Optional[float]
    end_ms: Optional[float]


@dataclass
class VolumeResult:
    """Result of volume adjustment."""

    input_path: str
    output_path: str
    volume: Optional[float]
    volume_db: Optional[float]
    duration_ms: int


@dataclass
class FadeResult:
    """Result of applying fades."""

    input_path: str
    output_path: str
    fade_in_ms: float
    fade_out_ms: float
    duration_ms: int


@dataclass
class SpeedResult:
    """Result of a speed change."""

    input_path: str
    output_path: str
    speed: float
    original_duration_ms: int
    new_duration_ms: int


@dataclass
class ConcatenateResult:
    """Result of audio concatenation."""

    output_path: str
    input_count: int
    total_duration_ms: int
    output_format: str
    gap_ms: float = 0
