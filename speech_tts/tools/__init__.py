"""Tool implementations for the Speech TTS MCP server."""

from .audio import (
    get_audio_info,
    get_audio_metadata,
    convert_audio,
    normalize_audio,
    is_ffmpeg_available,
)
from .transcription import (
    aggregate_sentences,
    transcribe_audio,
)
from .tts import (
    generate,
    get_engine,
    get_available_engines,
    get_tts_info,
    list_engines,
)

__all__ = [
    # Audio tools
    "get_audio_info",
    "get_audio_metadata",
    "convert_audio",
    "normalize_audio",
    "is_ffmpeg_available",
    # Transcription
    "aggregate_sentences",
    "transcribe_audio",
    # TTS tools
    "generate",
    "get_engine",
    "get_available_engines",
    "get_tts_info",
    "list_engines",
]
