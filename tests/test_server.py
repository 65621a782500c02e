"""Tests for the MCP server wiring and tool functions."""

import asyncio
from pathlib import Path

import httpx
import pytest

from speech_tts.server import config
from speech_tts.server.app import create_server
from speech_tts.server.tools import register_all_tools
from speech_tts.server.tools.discovery import credentials_status
from speech_tts.server.tools.transcription import _make_storage
from speech_tts.server.tools.tts import speech_output_path


class ToolCollector:
    """Collects the functions registered through ``@mcp.tool()``."""

    def __init__(self):
        self.tools = {}

    def tool(self, name=None, **kwargs):
        def decorator(fn):
            self.tools[name or fn.__name__] = fn
            return fn

        return decorator


@pytest.fixture
def tools():
    collector = ToolCollector()
    register_all_tools(collector)
    return collector.tools


class TestServer:
    """Tests for server creation."""

    def test_tools_registered(self):
        server = create_server()

        names = {tool.name for tool in asyncio.run(server.list_tools())}

        assert {
            "audio_to_text",
            "text_to_speech",
            "elevenlabs_tts",
            "list_elevenlabs_voices",
            "get_model_info",
            "get_audio_metadata",
            "join_audio_files",
            "set_output_directory",
        } <= names

    def test_audio_to_text_schema(self):
        server = create_server()

        tool = next(t for t in asyncio.run(server.list_tools()) if t.name == "audio_to_text")

        assert tool.inputSchema["required"] == ["audio_file"]
        assert "huggingface_access_token" in tool.inputSchema["properties"]


class TestAudioToTextTool:
    """Tests for the audio_to_text tool."""

    def test_missing_storage_credentials(self, tools, audio_file):
        result = tools["audio_to_text"](str(audio_file))

        assert result.startswith("Error transcribing audio: Supabase URL and key are required")

    def test_storage_client_closed(self, tools, audio_file, work_dir, monkeypatch):
        """Test that the storage HTTP client is closed once the tool returns."""
        monkeypatch.setenv("SUPABASE_URL", "https://p.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "secret")
        created = []

        class RecordingClient(httpx.Client):
            def __init__(self, **kwargs):
                unavailable = httpx.MockTransport(
                    lambda request: httpx.Response(503, json={"message": "unavailable"})
                )
                super().__init__(transport=unavailable, **kwargs)
                created.append(self)

        monkeypatch.setattr(httpx, "Client", RecordingClient)

        result = tools["audio_to_text"](str(audio_file))

        assert result == "Error transcribing audio: Failed to list buckets: unavailable"
        assert len(created) == 1
        assert created[0].is_closed

    def test_storage_from_settings(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://p.supabase.co/")
        monkeypatch.setenv("SUPABASE_KEY", "secret")
        monkeypatch.setenv("SUPABASE_BUCKET", "speech")

        storage = _make_storage()

        assert storage.url == "https://p.supabase.co"
        assert storage.bucket == "speech"

    def test_default_bucket(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://p.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "secret")

        assert _make_storage().bucket == "audio"


class TestTTSTools:
    """Tests for TTS tool helpers."""

    def test_speech_output_path_default(self, work_dir):
        path = Path(speech_output_path(None, "mp3"))

        assert path.parent == work_dir / "audio"
        assert path.name.startswith("speech_")
        assert path.suffix == ".mp3"

    def test_speech_output_path_adds_extension(self, work_dir):
        assert speech_output_path("greeting", "wav") == str(work_dir / "audio" / "greeting.wav")

    def test_speech_output_path_keeps_extension(self, tmp_path):
        target = tmp_path / "out" / "hello.mp3"

        assert speech_output_path(str(target), "wav") == str(target)

    def test_elevenlabs_without_key(self, tools, work_dir):
        result = tools["elevenlabs_tts"]("Hello")

        assert result["status"] == "error"
        assert "ELEVENLABS_API_KEY" in result["error"]

    def test_empty_text(self, tools, work_dir):
        result = tools["text_to_speech"]("")

        assert result == {"status": "error", "message": "Text cannot be empty"}


class TestDiscoveryTools:
    """Tests for get_model_info and credential reporting."""

    def test_credentials_status(self, monkeypatch):
        monkeypatch.setenv("REPLICATE_API_TOKEN", "r8_x")

        status = credentials_status()

        assert status == {
            "REPLICATE_API_TOKEN": True,
            "ELEVENLABS_API_KEY": False,
            "SUPABASE_URL": False,
            "SUPABASE_KEY": False,
        }

    def test_model_info_transcription_only(self, tools):
        info = tools["get_model_info"]("transcription")

        assert info["server"] == "speech-tts"
        assert info["transcription"]["model"] == "victor-upmeet/whisperx"
        assert "tts" not in info
        assert isinstance(info["ffmpeg_available"], bool)

    def test_model_info_all(self, tools):
        info = tools["get_model_info"]()

        assert set(info["tts"]) == {"replicate", "elevenlabs"}
        assert info["tts"]["elevenlabs"]["available"] is False


class TestOutputDirectoryTools:
    """Tests for the output directory tools."""

    def test_set_and_reset(self, tools, tmp_path, work_dir):
        target = tmp_path / "speech"

        result = tools["set_output_directory"](str(target))

        assert result == {"status": "success", "output_directory": str(target.resolve()), "created": True}
        assert tools["get_output_directory"]()["is_default"] is False

        reset = tools["set_output_directory"]("default")

        assert reset["output_directory"] == str(work_dir / "audio")
        assert "output_directory" not in config._load_config()

    def test_missing_input_file(self, tools, tmp_path):
        result = tools["trim_audio_file"](str(tmp_path / "missing.wav"), start_ms=0, end_ms=10)

        assert result["status"] == "error"
