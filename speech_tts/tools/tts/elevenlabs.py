"""ElevenLabs TTS engine."""

import sys
from pathlib import Path
from typing import Optional

from .base import EngineInfo, TTSEngine, TTSResult

DEFAULT_VOICE_ID = "JBFqnCBsd6RMkjVDRZzb"  # George
DEFAULT_MODEL = "eleven_multilingual_v2"
DEFAULT_OUTPUT_FORMAT = "mp3_44100_128"

MODELS = {
    "eleven_multilingual_v2": "Most lifelike, 29 languages",
    "eleven_flash_v2_5": "Ultra-low latency, 32 languages",
    "eleven_turbo_v2_5": "Balanced quality and latency, 32 languages",
    "eleven_v3": "Most expressive, supports audio tags",
}

OUTPUT_FORMATS = [
    "mp3_22050_32",
    "mp3_44100_32",
    "mp3_44100_64",
    "mp3_44100_96",
    "mp3_44100_128",
    "mp3_44100_192",
    "pcm_16000",
    "pcm_22050",
    "pcm_24000",
    "pcm_44100",
    "ulaw_8000",
]


def extension_for_format(output_format: str) -> str:
    """File extension for an ElevenLabs output format (e.g. mp3_44100_128 -> mp3)."""
    codec = output_format.split("_", 1)[0]
    return {"pcm": "pcm", "ulaw": "ulaw"}.get(codec, codec)


class ElevenLabsEngine(TTSEngine):
    """Text-to-speech through the ElevenLabs API."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key
        self._client = None

    @property
    def name(self) -> str:
        return "ElevenLabs"

    @property
    def engine_id(self) -> str:
        return "elevenlabs"

    def configure_api_key(self, api_key: Optional[str]) -> None:
        """Set the ElevenLabs API key."""
        if api_key != self._api_key:
            self._api_key = api_key
            self._client = None

    def is_available(self) -> bool:
        try:
            import elevenlabs  # noqa: F401

            return bool(self._api_key)
        except ImportError:
            return False

    def _get_client(self):
        if not self._api_key:
            raise ValueError("ElevenLabs API key not configured. Set ELEVENLABS_API_KEY")
        if self._client is None:
            from elevenlabs.client import ElevenLabs

            self._client = ElevenLabs(api_key=self._api_key)
        return self._client

    def get_info(self) -> EngineInfo:
        return EngineInfo(
            name=self.name,
            description="ElevenLabs hosted voices with stability/similarity/style controls",
            requirements="elevenlabs SDK, ELEVENLABS_API_KEY",
            default_model=DEFAULT_MODEL,
            output_format=DEFAULT_OUTPUT_FORMAT,
            parameters={
                "voice_id": {"default": DEFAULT_VOICE_ID},
                "model_id": {"default": DEFAULT_MODEL, "options": MODELS},
                "output_format": {"default": DEFAULT_OUTPUT_FORMAT, "options": OUTPUT_FORMATS},
                "stability": {"default": None, "range": [0, 1]},
                "similarity_boost": {"default": None, "range": [0, 1]},
                "style": {"default": None, "range": [0, 1]},
                "use_speaker_boost": {"default": None},
                "speed": {"default": None, "range": [0.7, 1.2]},
            },
        )

    def get_setup_instructions(self) -> str:
        return (
            "Install the elevenlabs SDK (pip install elevenlabs) and set "
            "ELEVENLABS_API_KEY from https://elevenlabs.io/app/settings/api-keys"
        )

    def list_voices(self) -> list[dict]:
        """List voices available to the configured account."""
        response = self._get_client().voices.get_all()
        return [
            {
                "voice_id": voice.voice_id,
                "name": voice.name,
                "category": getattr(voice, "category", None),
                "labels": getattr(voice, "labels", None) or {},
            }
            for voice in response.voices
        ]

    def generate(
        self,
        text: str,
        output_path: Path,
        voice_id: str = DEFAULT_VOICE_ID,
        model_id: str = DEFAULT_MODEL,
        output_format: str = DEFAULT_OUTPUT_FORMAT,
        stability: Optional[float] = None,
        similarity_boost: Optional[float] = None,
        style: Optional[float] = None,
        use_speaker_boost: Optional[bool] = None,
        speed: Optional[float] = None,
        **kwargs,
    ) -> TTSResult:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format '{output_format}'. Options: {OUTPUT_FORMATS}")

        settings = {
            key: value
            for key, value in {
                "stability": stability,
                "similarity_boost": similarity_boost,
                "style": style,
                "use_speaker_boost": use_speaker_boost,
                "speed": speed,
            }.items()
            if value is not None
        }

        try:
            client = self._get_client()
            request = {
                "voice_id": voice_id,
                "text": text,
                "model_id": model_id,
                "output_format": output_format,
            }
            if settings:
                from elevenlabs import VoiceSettings

                request["voice_settings"] = VoiceSettings(**settings)

            print(f"ElevenLabs: {model_id} / {voice_id}, {len(text)} characters", file=sys.stderr)
            audio = client.text_to_speech.convert(**request)

            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                for chunk in audio:
                    if chunk:
                        f.write(chunk)
        except Exception as e:
            return TTSResult(
                status="error",
                output_path=None,
                engine=self.engine_id,
                model=model_id,
                error=str(e),
            )

        return TTSResult(
            status="success",
            output_path=str(path),
            engine=self.engine_id,
            model=model_id,
            format=extension_for_format(output_format),
            size_bytes=path.stat().st_size,
            metadata={"voice_id": voice_id, "output_format": output_format, **settings},
        )
