"""TTS tools - text-to-speech via Replicate and ElevenLabs."""

from pathlib import Path
from typing import Optional

from ...tools.transcription import timestamp_basename
from ...tools.tts import extension_for_format, generate, get_engine
from ...tools.tts.elevenlabs import DEFAULT_MODEL as ELEVENLABS_MODEL
from ...tools.tts.elevenlabs import DEFAULT_OUTPUT_FORMAT, DEFAULT_VOICE_ID
from ...tools.tts.replicate_tts import DEFAULT_MODEL as REPLICATE_MODEL
from ...tools.tts.replicate_tts import DEFAULT_VOICE
from ..config import get_output_dir, get_setting, resolve_output_path, to_dict


def speech_output_path(filename: Optional[str], extension: str) -> str:
    """Resolve where generated speech is written.

    A bare filename goes into the output directory; a missing extension is
    added; no filename gives ``speech_<timestamp>.<ext>``.
    """
    if not filename:
        return str(get_output_dir() / f"speech_{timestamp_basename()}.{extension}")
    if not Path(filename).suffix:
        filename = f"{filename}.{extension}"
    return resolve_output_path(filename)


def _configured_engine(engine_id: str, setting: str):
    engine = get_engine(engine_id)
    engine.configure_api_key(get_setting(setting))
    return engine


def register_tts_tools(mcp):
    """Register TTS tools with the MCP server."""

    @mcp.tool()
    def text_to_speech(
        text: str,
        voice_id: str = DEFAULT_VOICE,
        speed: Optional[float] = None,
        volume: Optional[float] = None,
        pitch: Optional[int] = None,
        emotion: Optional[str] = None,
        language_boost: Optional[str] = None,
        model: str = REPLICATE_MODEL,
        filename: Optional[str] = None,
    ) -> dict:
        """Generate speech with a Replicate-hosted TTS model (MiniMax Speech).

        Args:
            text: Text to speak.
            voice_id: Preset voice (e.g. Wise_Woman, Deep_Voice_Man, Calm_Woman).
            speed: 0.5-2.0.
            volume: 0-10.
            pitch: Semitones, -12 to 12.
            emotion: auto, neutral, happy, sad, angry, fearful, disgusted, surprised.
            language_boost: Language hint (e.g. English, Spanish).
            model: Replicate model reference.
            filename: Output file name or path (defaults to a timestamped mp3).
        """
        try:
            _configured_engine("replicate", "replicate_api_token")
            output_path = speech_output_path(filename, "mp3")
            result = generate(
                text=text,
                output_path=output_path,
                engine="replicate",
                model=model,
                voice_id=voice_id,
                speed=speed,
                volume=volume,
                pitch=pitch,
                emotion=emotion,
                language_boost=language_boost,
            )
        except Exception as e:
            return {"status": "error", "message": str(e)}
        return to_dict(result)

    @mcp.tool()
    def elevenlabs_tts(
        text: str,
        voice_id: str = DEFAULT_VOICE_ID,
        model_id: str = ELEVENLABS_MODEL,
        output_format: str = DEFAULT_OUTPUT_FORMAT,
        stability: Optional[float] = None,
        similarity_boost: Optional[float] = None,
        style: Optional[float] = None,
        use_speaker_boost: Optional[bool] = None,
        speed: Optional[float] = None,
        filename: Optional[str] = None,
    ) -> dict:
        """Generate speech with ElevenLabs.

        Args:
            text: Text to speak.
            voice_id: ElevenLabs voice ID (see list_elevenlabs_voices).
            model_id: eleven_multilingual_v2, eleven_flash_v2_5, eleven_turbo_v2_5, eleven_v3.
            output_format: codec_samplerate_bitrate, e.g. mp3_44100_128.
            stability: 0-1, higher is more consistent.
            similarity_boost: 0-1, adherence to the original voice.
            style: 0-1, style exaggeration.
            use_speaker_boost: Boost similarity to the speaker.
            speed: 0.7-1.2.
            filename: Output file name or path (defaults to a timestamped file).
        """
        try:
            _configured_engine("elevenlabs", "elevenlabs_api_key")
            output_path = speech_output_path(filename, extension_for_format(output_format))
            result = generate(
                text=text,
                output_path=output_path,
                engine="elevenlabs",
                voice_id=voice_id,
                model_id=model_id,
                output_format=output_format,
                stability=stability,
                similarity_boost=similarity_boost,
                style=style,
                use_speaker_boost=use_speaker_boost,
                speed=speed,
            )
        except Exception as e:
            return {"status": "error", "message": str(e)}
        return to_dict(result)

    @mcp.tool()
    def list_elevenlabs_voices() -> dict:
        """List voices available to the configured ElevenLabs account."""
        try:
            engine = _configured_engine("elevenlabs", "elevenlabs_api_key")
            voices = engine.list_voices()
        except Exception as e:
            return {"status": "error", "message": str(e)}
        return {"status": "success", "count": len(voices), "voices": voices}
