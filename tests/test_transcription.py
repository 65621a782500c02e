"""Tests for the audio-to-text pipeline."""

import json
from pathlib import Path

import pytest

from speech_tts.tools.transcription import (
    WHISPERX_MODEL_REF,
    TranscriptionResult,
    format_summary,
    get_transcription_info,
    transcribe_audio,
)


class TestTranscribeAudio:
    """Tests for transcribe_audio with fake storage and inference."""

    def test_success(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test the full pipeline from upload to written files."""
        result = transcribe_audio(
            str(audio_file),
            storage=fake_storage,
            runner=fake_runner,
            output_dir=tmp_path / "out",
            filename="talk",
        )

        assert result.status == "success"
        assert result.error is None
        assert result.detected_language == "en"
        assert result.segment_count == 3
        assert result.sentence_count == 2
        assert result.duration == 3.25
        assert Path(result.transcript_path).exists()
        assert Path(result.text_path).exists()
        assert Path(result.sentences_path).name == "talk_sentences.json"
        assert fake_storage.calls == ["ensure_bucket", ("upload_file", str(audio_file))]

    def test_request_uses_uploaded_url_and_defaults(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test the model reference and the sparse input sent to the model."""
        transcribe_audio(str(audio_file), fake_storage, fake_runner, output_dir=tmp_path)

        model, model_input = fake_runner.calls[0]
        assert model == WHISPERX_MODEL_REF
        assert model_input == {
            "audio_file": "https://storage.example/audio/123-interview.wav",
            "language": "en",
            "batch_size": 64,
            "temperature": 0,
            "vad_onset": 0.5,
            "vad_offset": 0.363,
            "align_output": True,
            "diarization": True,
            "debug": False,
        }

    def test_unset_options_not_sent(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test that None options are left to the provider."""
        transcribe_audio(
            str(audio_file),
            fake_storage,
            fake_runner,
            output_dir=tmp_path,
            language=None,
            diarization=None,
            min_speakers=2,
        )

        model_input = fake_runner.calls[0][1]
        assert "language" not in model_input
        assert "diarization" not in model_input
        assert "huggingface_access_token" not in model_input
        assert model_input["min_speakers"] == 2

    def test_settings_recorded_in_metadata(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test that the request settings are saved alongside the transcript."""
        result = transcribe_audio(
            str(audio_file), fake_storage, fake_runner, output_dir=tmp_path, temperature=0.2
        )

        transcript = json.loads(Path(result.transcript_path).read_text())
        assert transcript["metadata"]["settings"] == {
            "language": "en",
            "temperature": 0.2,
            "diarization": True,
            "align_output": True,
        }
        assert transcript["metadata"]["audio_file"] == str(audio_file)

    def test_default_filename_is_timestamp(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test that output files get a timestamp base name when none is given."""
        result = transcribe_audio(str(audio_file), fake_storage, fake_runner, output_dir=tmp_path)

        assert Path(result.transcript_path).name.endswith("Z_transcript.json")

    def test_no_segments(self, tmp_path, audio_file, fake_storage, runner_factory):
        """Test output without segments: zero counts, files still written."""
        runner = runner_factory({"detected_language": "fr"})

        result = transcribe_audio(str(audio_file), fake_storage, runner, output_dir=tmp_path)

        assert result.status == "success"
        assert result.segment_count == 0
        assert result.sentence_count == 0
        assert result.duration == 0.0
        assert Path(result.sentences_path).exists()

    @pytest.mark.parametrize(
        "fail_on,message",
        [
            ("list", "Failed to list buckets: denied"),
            ("create", "Failed to create audio bucket: denied"),
            ("upload", "Failed to upload file to Supabase: denied"),
        ],
    )
    def test_storage_failures_reported(
        self, tmp_path, audio_file, fake_runner, storage_factory, fail_on, message
    ):
        """Test that storage errors become error results and the model is not called."""
        storage = storage_factory(fail_on=fail_on)

        result = transcribe_audio(str(audio_file), storage, fake_runner, output_dir=tmp_path)

        assert result.status == "error"
        assert result.error == message
        assert fake_runner.calls == []

    def test_empty_model_output(self, tmp_path, audio_file, fake_storage, runner_factory):
        """Test that a missing model result is an error and nothing is written."""
        result = transcribe_audio(
            str(audio_file), fake_storage, runner_factory(None), output_dir=tmp_path / "out"
        )

        assert result.status == "error"
        assert result.error == "No output received from Replicate API"
        assert not (tmp_path / "out").exists()

    def test_write_failure_reported(self, tmp_path, audio_file, fake_storage, fake_runner):
        """Test that an unwritable output directory is reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = transcribe_audio(
            str(audio_file), fake_storage, fake_runner, output_dir=blocker / "out"
        )

        assert result.status == "error"
        assert result.error


class TestFormatSummary:
    """Tests for the text returned to the agent."""

    def test_success_summary(self):
        result = TranscriptionResult(
            status="success",
            audio_file="a.wav",
            segment_count=3,
            sentence_count=2,
            duration=3.256,
            transcript_path="/o/x_transcript.json",
            text_path="/o/x_transcript.txt",
            sentences_path="/o/x_sentences.json",
            output_dir="/o",
        )

        summary = format_summary(result)

        assert summary.startswith("Audio transcription completed successfully!")
        assert "Segments: 3\n" in summary
        assert "Sentences: 2\n" in summary
        assert "Duration: 3.26 seconds" in summary
        assert "- Sentence-level timestamps: /o/x_sentences.json" in summary
        assert summary.endswith("Audio directory: /o")

    def test_error_summary(self):
        result = TranscriptionResult(status="error", audio_file="a.wav", error="boom")

        assert format_summary(result) == "Error transcribing audio: boom"


class TestTranscriptionInfo:
    """Tests for get_transcription_info."""

    def test_lists_model_and_defaults(self):
        info = get_transcription_info()

        assert info["model"] == "victor-upmeet/whisperx"
        assert info["defaults"]["vad_offset"] == 0.363
        assert "huggingface_access_token" in info["options"]
