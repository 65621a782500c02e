"""Text-to-Speech module with pluggable engine architecture.

Engines:
- replicate: Replicate-hosted TTS model (MiniMax Speech by default)
- elevenlabs: ElevenLabs API voices

Usage:
    from speech_tts.tools.tts import get_engine, generate

    engine = get_engine("elevenlabs")
    engine.configure_api_key(api_key)

    result = generate(
        text="Hello world",
        output_path="hello.mp3",
        engine="elevenlabs",
        voice_id="JBFqnCBsd6RMkjVDRZzb",
    )
"""

from pathlib import Path
from typing import Type

from .base import EngineInfo, TTSEngine, TTSResult
from .elevenlabs import ElevenLabsEngine, extension_for_format
from .replicate_tts import ReplicateTTSEngine


# ============================================================================
# Engine Registry
# ============================================================================

_engine_registry: dict[str, Type[TTSEngine]] = {}
_engine_instances: dict[str, TTSEngine] = {}


def register_engine(engine_class: Type[TTSEngine]) -> Type[TTSEngine]:
    """Register a TTS engine class.

    Can be used as a decorator or called directly.
    """
    temp_instance = engine_class()
    _engine_registry[temp_instance.engine_id] = engine_class
    return engine_class


def get_engine(engine_id: str) -> TTSEngine:
    """Get a TTS engine instance by ID.

    Raises:
        ValueError: If engine not found
    """
    if engine_id not in _engine_registry:
        available = list(_engine_registry.keys())
        raise ValueError(f"Engine '{engine_id}' not found. Available: {available}")

    if engine_id not in _engine_instances:
        _engine_instances[engine_id] = _engine_registry[engine_id]()

    return _engine_instances[engine_id]


def list_engines() -> dict[str, EngineInfo]:
    """List all registered TTS engines with their info."""
    return {engine_id: get_engine(engine_id).get_info() for engine_id in _engine_registry}


def get_available_engines() -> list[str]:
    """Get IDs of engines whose SDK is installed and credentials are configured."""
    return [engine_id for engine_id in _engine_registry if get_engine(engine_id).is_available()]


# ============================================================================
# Unified Generation Interface
# ============================================================================


def generate(
    text: str,
    output_path: str | Path,
    engine: str = "replicate",
    **kwargs,
) -> TTSResult:
    """Generate audio using the specified TTS engine.

    Args:
        text: The text to synthesize.
        output_path: Where to save the audio.
        engine: Engine ID ('replicate' or 'elevenlabs').
        **kwargs: Engine-specific parameters.

    Returns:
        TTSResult with status and output path.

    Raises:
        ValueError: If text is empty or the engine is unknown.
    """
    if not text or not text.strip():
        raise ValueError("Text cannot be empty")

    tts_engine = get_engine(engine)
    return tts_engine.generate(text=text, output_path=Path(output_path), **kwargs)


def get_tts_info() -> dict:
    """Get information about all TTS engines, including setup instructions."""
    info = {}
    for engine_id, engine_info in list_engines().items():
        engine = get_engine(engine_id)
        info[engine_id] = {
            "name": engine_info.name,
            "description": engine_info.description,
            "requirements": engine_info.requirements,
            "default_model": engine_info.default_model,
            "output_format": engine_info.output_format,
            "parameters": engine_info.parameters,
            "available": engine.is_available(),
            "setup": None if engine.is_available() else engine.get_setup_instructions(),
        }
    return info


register_engine(ReplicateTTSEngine)
register_engine(ElevenLabsEngine)


__all__ = [
    "EngineInfo",
    "TTSEngine",
    "TTSResult",
    "ElevenLabsEngine",
    "ReplicateTTSEngine",
    "extension_for_format",
    "generate",
    "get_available_engines",
    "get_engine",
    "get_tts_info",
    "list_engines",
    "register_engine",
]
