"""Transcription tools - speech-to-text."""

from typing import Optional

from ...tools.inference import ReplicateRunner
from ...tools.storage import DEFAULT_BUCKET, SupabaseStorage
from ...tools.transcription import format_summary, transcribe_audio
from ..config import get_output_dir, get_setting


def _make_storage() -> SupabaseStorage:
    return SupabaseStorage(
        url=get_setting("supabase_url"),
        key=get_setting("supabase_key"),
        bucket=get_setting("supabase_bucket", DEFAULT_BUCKET),
    )


def register_transcription_tools(mcp):
    """Register transcription tools with the MCP server."""

    @mcp.tool(name="audio_to_text")
    def audio_to_text(
        audio_file: str,
        language: Optional[str] = "en",
        language_detection_min_prob: Optional[float] = None,
        language_detection_max_tries: Optional[int] = None,
        initial_prompt: Optional[str] = None,
        batch_size: Optional[int] = 64,
        temperature: Optional[float] = 0,
        vad_onset: Optional[float] = 0.5,
        vad_offset: Optional[float] = 0.363,
        align_output: Optional[bool] = True,
        diarization: Optional[bool] = True,
        huggingface_access_token: Optional[str] = None,
        min_speakers: Optional[int] = None,
        max_speakers: Optional[int] = None,
        debug: Optional[bool] = False,
        filename: Optional[str] = None,
    ) -> str:
        """Transcribe audio to text with timestamps using WhisperX.

        Saves the full transcript (JSON), a readable transcript (TXT) and
        sentence-level timestamps (JSON) to the output directory.

        Args:
            audio_file: Path to the audio file to transcribe.
            language: ISO code of the spoken language; None or "" detects it.
            language_detection_min_prob: Detection stops once this probability is reached.
            language_detection_max_tries: Maximum detection attempts.
            initial_prompt: Prompt text for the first window.
            batch_size: Parallelization of input audio transcription.
            temperature: Sampling temperature.
            vad_onset: VAD onset.
            vad_offset: VAD offset.
            align_output: Align output for accurate word-level timestamps.
            diarization: Assign speaker ID labels (needs huggingface_access_token).
            huggingface_access_token: HuggingFace read token for diarization models.
            min_speakers: Minimum number of speakers if diarization is on.
            max_speakers: Maximum number of speakers if diarization is on.
            debug: Print compute/inference times and memory usage.
            filename: Base name for the saved files (defaults to a timestamp).
        """
        try:
            runner = ReplicateRunner(get_setting("replicate_api_token"))
            output_dir = get_output_dir()
            storage = _make_storage()
        except Exception as e:
            return f"Error transcribing audio: {e}"

        with storage:
            result = transcribe_audio(
                audio_file,
                storage=storage,
                runner=runner,
                output_dir=output_dir,
                filename=filename,
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
        return format_summary(result)
