"""Speech-to-text via WhisperX on Replicate.

Pipeline for one request:
1. Make sure the storage bucket exists and upload the audio file.
2. Run WhisperX on the public URL with a sparse parameter bag.
3. Group the returned segments into sentences.
4. Write the transcript JSON, readable transcript and sentence JSON.

Usage:
    from speech_tts.tools.transcription import transcribe_audio

    result = transcribe_audio(
        "interview.wav",
        storage=SupabaseStorage(url, key),
        runner=ReplicateRunner(token),
    )
    if result.status == "success":
        print(result.sentences_path)
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from ..inference import sparse_params
from ..storage import SupabaseStorage
from .params import (
    WHISPERX_DEFAULTS,
    WHISPERX_MODEL,
    WHISPERX_MODEL_REF,
    WHISPERX_OPTIONS,
    build_whisperx_input,
)
from .sentences import Segment, Sentence, aggregate_sentences, ends_sentence
from .writer import (
    TranscriptPaths,
    format_timestamp,
    render_transcript_text,
    timestamp_basename,
    write_transcript_artifacts,
)


@dataclass
class TranscriptionResult:
    """Result of an audio-to-text request."""

    status: str  # "success" or "error"
    audio_file: str
    detected_language: Optional[str] = None
    segment_count: int = 0
    sentence_count: int = 0
    duration: float = 0.0  # End of the last segment, in seconds
    transcript_path: Optional[str] = None
    text_path: Optional[str] = None
    sentences_path: Optional[str] = None
    output_dir: Optional[str] = None
    error: Optional[str] = None


def transcribe_audio(
    audio_file: str,
    storage: SupabaseStorage,
    runner: Callable[[str, dict], Any],
    output_dir: str | Path = "audio",
    filename: Optional[str] = None,
    language: Optional[str] = WHISPERX_DEFAULTS["language"],
    language_detection_min_prob: Optional[float] = None,
    language_detection_max_tries: Optional[int] = None,
    initial_prompt: Optional[str] = None,
    batch_size: Optional[int] = WHISPERX_DEFAULTS["batch_size"],
    temperature: Optional[float] = WHISPERX_DEFAULTS["temperature"],
    vad_onset: Optional[float] = WHISPERX_DEFAULTS["vad_onset"],
    vad_offset: Optional[float] = WHISPERX_DEFAULTS["vad_offset"],
    align_output: Optional[bool] = WHISPERX_DEFAULTS["align_output"],
    diarization: Optional[bool] = WHISPERX_DEFAULTS["diarization"],
    huggingface_access_token: Optional[str] = None,
    min_speakers: Optional[int] = None,
    max_speakers: Optional[int] = None,
    debug: Optional[bool] = WHISPERX_DEFAULTS["debug"],
) -> TranscriptionResult:
    """Transcribe an audio file and save transcript and sentence timestamps.

    Any failure (storage, inference, file writes) is reported in the returned
    result rather than raised. Nothing is retried.

    Args:
        audio_file: Path to the local audio file.
        storage: Storage client used to publish the file.
        runner: Callable ``(model_ref, input) -> output`` running the model.
        output_dir: Directory for the three output files.
        filename: Base name for output files (defaults to a UTC timestamp).
        Remaining arguments are WhisperX options; None leaves the provider default.

    Returns:
        TranscriptionResult with counts and file paths.
    """
    try:
        storage.ensure_bucket()
        audio_url = storage.upload_file(audio_file)
        print(f"Uploaded {audio_file} to {audio_url}", file=sys.stderr)

        model_input = build_whisperx_input(
            audio_url,
            language=language,
            language_detection_min_prob=language_detection_min_prob,
            language_detection_max_tries=language_detection_max_tries,
            initial_prompt=initial_prompt,
            batch_size=batch_size,
            temperature=temperature,
            vad_onset=vad_onset,
            vad_offset=vad_offset,
            align_output=align_output,
            diarization=diarization,
            huggingface_access_token=huggingface_access_token,
            min_speakers=min_speakers,
            max_speakers=max_speakers,
            debug=debug,
        )

        output = runner(WHISPERX_MODEL_REF, model_input)
        if not output:
            raise RuntimeError("No output received from Replicate API")

        detected_language = output.get("detected_language")
        raw_segments = output.get("segments") or []
        print(
            f"WhisperX returned {len(raw_segments)} segments (language: {detected_language})",
            file=sys.stderr,
        )

        segments = [Segment.from_dict(s) for s in raw_segments]
        sentences = aggregate_sentences(segments)

        metadata = {
            "audio_file": audio_file,
            "model": WHISPERX_MODEL,
            "settings": {
                "language": language,
                "temperature": temperature,
                "diarization": diarization,
                "align_output": align_output,
            },
        }
        paths = write_transcript_artifacts(
            output_dir=Path(output_dir),
            base_name=filename or timestamp_basename(),
            raw_segments=raw_segments,
            sentences=sentences,
            detected_language=detected_language,
            metadata=metadata,
        )

        return TranscriptionResult(
            status="success",
            audio_file=audio_file,
            detected_language=detected_language,
            segment_count=len(segments),
            sentence_count=len(sentences),
            duration=segments[-1].end if segments else 0.0,
            transcript_path=paths.transcript_path,
            text_path=paths.text_path,
            sentences_path=paths.sentences_path,
            output_dir=str(output_dir),
        )
    except Exception as e:
        print(f"Error transcribing {audio_file}: {e}", file=sys.stderr)
        return TranscriptionResult(status="error", audio_file=audio_file, error=str(e))


def format_summary(result: TranscriptionResult) -> str:
    """Render a transcription result as the text returned to the agent."""
    if result.status != "success":
        return f"Error transcribing audio: {result.error}"

    return (
        "Audio transcription completed successfully!\n"
        "\n"
        f"Segments: {result.segment_count}\n"
        f"Sentences: {result.sentence_count}\n"
        f"Duration: {result.duration:.2f} seconds\n"
        "\n"
        "Files saved:\n"
        f"- Full transcript with timestamps: {result.transcript_path}\n"
        f"- Human-readable transcript: {result.text_path}\n"
        f"- Sentence-level timestamps: {result.sentences_path}\n"
        "\n"
        f"Audio directory: {result.output_dir}"
    )


def get_transcription_info() -> dict:
    """Describe the transcription model and its default parameters."""
    return {
        "model": WHISPERX_MODEL,
        "model_ref": WHISPERX_MODEL_REF,
        "description": "WhisperX on Replicate: transcription with word-level alignment "
        "and optional speaker diarization",
        "defaults": dict(WHISPERX_DEFAULTS),
        "options": list(WHISPERX_OPTIONS),
        "outputs": ["<name>_transcript.json", "<name>_transcript.txt", "<name>_sentences.json"],
    }


__all__ = [
    "Segment",
    "Sentence",
    "TranscriptPaths",
    "TranscriptionResult",
    "WHISPERX_DEFAULTS",
    "WHISPERX_MODEL",
    "WHISPERX_MODEL_REF",
    "aggregate_sentences",
    "build_whisperx_input",
    "ends_sentence",
    "format_summary",
    "format_timestamp",
    "get_transcription_info",
    "render_transcript_text",
    "sparse_params",
    "timestamp_basename",
    "transcribe_audio",
    "write_transcript_artifacts",
]
