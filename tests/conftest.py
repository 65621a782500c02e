"""Shared fixtures for speech-tts tests."""

import pytest

from speech_tts.server import config
from speech_tts.tools.storage import StorageError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear credential env vars."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_FILE", config_dir / "config.json")
    for env_name in config.ENV_SETTINGS.values():
        monkeypatch.delenv(env_name, raising=False)
    yield config_dir


@pytest.fixture
def work_dir(tmp_path, monkeypatch):
    """Run the test from an empty working directory."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    yield cwd


@pytest.fixture
def audio_file(tmp_path):
    """A small placeholder audio file on disk."""
    path = tmp_path / "interview.wav"
    path.write_bytes(b"RIFF0000WAVEfmt ")
    yield path


class FakeStorage:
    """Records storage calls and optionally fails at a given step."""

    def __init__(self, fail_on=None, message="denied"):
        self.fail_on = fail_on
        self.message = message
        self.calls = []

    def ensure_bucket(self):
        self.calls.append("ensure_bucket")
        if self.fail_on == "list":
            raise StorageError(f"Failed to list buckets: {self.message}")
        if self.fail_on == "create":
            raise StorageError(f"Failed to create audio bucket: {self.message}")
        return False

    def upload_file(self, file_path):
        self.calls.append(("upload_file", file_path))
        if self.fail_on == "upload":
            raise StorageError(f"Failed to upload file to Supabase: {self.message}")
        return "https://storage.example/audio/123-interview.wav"


class FakeRunner:
    """Returns a canned model output and records what it was called with."""

    def __init__(self, output):
        self.output = output
        self.calls = []

    def __call__(self, model, model_input):
        self.calls.append((model, model_input))
        return self.output


@pytest.fixture
def whisperx_output():
    """A WhisperX-style response with three segments forming two sentences."""
    return {
        "detected_language": "en",
        "segments": [
            {"start": 0.0, "end": 1.5, "text": " Hello there."},
            {"start": 1.6, "end": 2.4, "text": " How are", "speaker": "SPEAKER_00"},
            {"start": 2.4, "end": 3.25, "text": " you today?"},
        ],
    }


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def fake_runner(whisperx_output):
    return FakeRunner(whisperx_output)


@pytest.fixture
def storage_factory():
    return FakeStorage


@pytest.fixture
def runner_factory():
    return FakeRunner
