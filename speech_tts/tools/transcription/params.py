"""WhisperX model reference and request parameter shaping."""

from typing import Any, Optional

from ..inference import sparse_params

WHISPERX_MODEL = "victor-upmeet/whisperx"
WHISPERX_VERSION = "84d2ad2d6194fe98a17d2b60bef1c7f910c46b2f6fd38996ca457afd9c8abfcb"
WHISPERX_MODEL_REF = f"{WHISPERX_MODEL}:{WHISPERX_VERSION}"

# Handler-side defaults; anything not listed here is left to the provider
WHISPERX_DEFAULTS = {
    "language": "en",
    "batch_size": 64,
    "temperature": 0,
    "vad_onset": 0.5,
    "vad_offset": 0.363,
    "align_output": True,
    "diarization": True,
    "debug": False,
}

WHISPERX_OPTIONS = (
    "language",
    "language_detection_min_prob",
    "language_detection_max_tries",
    "initial_prompt",
    "batch_size",
    "temperature",
    "vad_onset",
    "vad_offset",
    "align_output",
    "diarization",
    "huggingface_access_token",
    "min_speakers",
    "max_speakers",
    "debug",
)


def build_whisperx_input(audio_url: str, **options: Optional[Any]) -> dict:
    """Build the WhisperX input bag for an uploaded audio URL.

    Raises:
        ValueError: If an unknown option is passed.
    """
    unknown = set(options) - set(WHISPERX_OPTIONS)
    if unknown:
        raise ValueError(f"Unknown WhisperX option(s): {sorted(unknown)}")

    return {"audio_file": audio_url, **sparse_params(**options)}
