"""Tests for server configuration."""

from pathlib import Path

from speech_tts.server import config


class TestConfigFile:
    """Tests for loading and saving the config file."""

    def test_missing_file_is_empty(self):
        assert config._load_config() == {}

    def test_round_trip(self, isolated_config):
        config._save_config({"output_directory": "/tmp/x"})

        assert (isolated_config / "config.json").exists()
        assert config._load_config() == {"output_directory": "/tmp/x"}

    def test_corrupt_file_ignored(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text("{not json")

        assert config._load_config() == {}


class TestSettings:
    """Tests for get_setting."""

    def test_environment_wins(self, monkeypatch):
        config._save_config({"replicate_api_token": "from-file"})
        monkeypatch.setenv("REPLICATE_API_TOKEN", "from-env")

        assert config.get_setting("replicate_api_token") == "from-env"

    def test_file_fallback(self):
        config._save_config({"supabase_url": "https://p.supabase.co"})

        assert config.get_setting("supabase_url") == "https://p.supabase.co"

    def test_default(self):
        assert config.get_setting("supabase_bucket", "audio") == "audio"


class TestOutputDir:
    """Tests for output directory resolution."""

    def test_default_is_audio_in_cwd(self, work_dir):
        output_dir = config.get_output_dir()

        assert output_dir == work_dir / "audio"
        assert output_dir.is_dir()

    def test_configured_directory(self, tmp_path):
        target = tmp_path / "transcripts"
        config._save_config({"output_directory": str(target)})

        assert config.get_output_dir() == target
        assert target.is_dir()

    def test_bare_filename_goes_to_output_dir(self, work_dir):
        assert config.resolve_output_path("hello.mp3") == str(work_dir / "audio" / "hello.mp3")

    def test_path_with_directory_kept(self, tmp_path):
        path = tmp_path / "nested" / "hello.mp3"

        assert config.resolve_output_path(str(path)) == str(path)
        assert Path(path).parent.is_dir()


class TestToDict:
    """Tests for to_dict."""

    def test_dataclass(self):
        from speech_tts.tools.transcription import Segment

        assert config.to_dict(Segment(0, 1, "a")) == {"start": 0, "end": 1, "text": "a"}

    def test_passthrough_and_wrap(self):
        assert config.to_dict({"a": 1}) == {"a": 1}
        assert config.to_dict(5) == {"value": 5}
