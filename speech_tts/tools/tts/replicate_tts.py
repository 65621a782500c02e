"""Replicate-hosted TTS engine (MiniMax Speech by default)."""

import sys
from pathlib import Path
from typing import Optional

from ..inference import ReplicateRunner, save_output_file, sparse_params
from .base import EngineInfo, TTSEngine, TTSResult

DEFAULT_MODEL = "minimax/speech-02-turbo"
DEFAULT_VOICE = "Wise_Woman"

EMOTIONS = ["auto", "neutral", "happy", "sad", "angry", "fearful", "disgusted", "surprised"]

VOICES = [
    "Wise_Woman",
    "Friendly_Person",
    "Inspirational_girl",
    "Deep_Voice_Man",
    "Calm_Woman",
    "Casual_Guy",
    "Lively_Girl",
    "Patient_Man",
    "Young_Knight",
    "Determined_Man",
    "Lovely_Girl",
    "Decent_Boy",
    "Imposing_Manner",
    "Elegant_Man",
    "Abbess",
    "Sweet_Girl_2",
    "Exuberant_Girl",
]


class ReplicateTTSEngine(TTSEngine):
    """Text-to-speech through a Replicate model."""

    def __init__(self, api_token: Optional[str] = None):
        self._runner = ReplicateRunner(api_token)

    @property
    def name(self) -> str:
        return "Replicate TTS"

    @property
    def engine_id(self) -> str:
        return "replicate"

    def configure_api_key(self, api_token: Optional[str]) -> None:
        """Set the Replicate API token."""
        if api_token != self._runner.api_token:
            self._runner = ReplicateRunner(api_token)

    def is_available(self) -> bool:
        return self._runner.is_available() and bool(self._runner.api_token)

    def get_info(self) -> EngineInfo:
        return EngineInfo(
            name=self.name,
            description="MiniMax Speech hosted on Replicate: preset voices with emotion control",
            requirements="replicate SDK, REPLICATE_API_TOKEN",
            default_model=DEFAULT_MODEL,
            output_format="mp3",
            parameters={
                "voice_id": {"default": DEFAULT_VOICE, "options": VOICES},
                "speed": {"default": 1.0, "range": [0.5, 2.0]},
                "volume": {"default": 1.0, "range": [0, 10]},
                "pitch": {"default": 0, "range": [-12, 12]},
                "emotion": {"default": "auto", "options": EMOTIONS},
                "sample_rate": {"default": 32000},
                "bitrate": {"default": 128000},
                "language_boost": {"default": None},
                "english_normalization": {"default": False},
            },
        )

    def get_setup_instructions(self) -> str:
        return (
            "Install the replicate SDK (pip install replicate) and set "
            "REPLICATE_API_TOKEN from https://replicate.com/account/api-tokens"
        )

    def generate(
        self,
        text: str,
        output_path: Path,
        model: str = DEFAULT_MODEL,
        voice_id: Optional[str] = DEFAULT_VOICE,
        speed: Optional[float] = None,
        volume: Optional[float] = None,
        pitch: Optional[int] = None,
        emotion: Optional[str] = None,
        sample_rate: Optional[int] = None,
        bitrate: Optional[int] = None,
        language_boost: Optional[str] = None,
        english_normalization: Optional[bool] = None,
        **kwargs,
    ) -> TTSResult:
        if emotion is not None and emotion not in EMOTIONS:
            raise ValueError(f"Unknown emotion '{emotion}'. Options: {EMOTIONS}")

        model_input = {
            "text": text,
            **sparse_params(
                voice_id=voice_id,
                speed=speed,
                volume=volume,
                pitch=pitch,
                emotion=emotion,
                sample_rate=sample_rate,
                bitrate=bitrate,
                language_boost=language_boost,
                english_normalization=english_normalization,
            ),
        }

        try:
            print(f"Running {model} on {len(text)} characters", file=sys.stderr)
            output = self._runner.run(model, model_input)
            if not output:
                raise RuntimeError("No output received from Replicate API")
            path = save_output_file(output, output_path)
        except Exception as e:
            return TTSResult(
                status="error",
                output_path=None,
                engine=self.engine_id,
                model=model,
                error=str(e),
            )

        return TTSResult(
            status="success",
            output_path=str(path),
            engine=self.engine_id,
            model=model,
            format=path.suffix.lstrip(".") or "mp3",
            size_bytes=path.stat().st_size,
            metadata={k: v for k, v in model_input.items() if k != "text"},
        )
