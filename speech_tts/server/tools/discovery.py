"""Discovery tools for models, credentials and system capabilities."""

from typing import Literal, Optional

from ...tools.audio import is_ffmpeg_available
from ...tools.transcription import get_transcription_info
from ...tools.tts import get_engine, get_tts_info
from ..config import ENV_SETTINGS, VERSION, get_setting


def _configure_engines() -> None:
    get_engine("replicate").configure_api_key(get_setting("replicate_api_token"))
    get_engine("elevenlabs").configure_api_key(get_setting("elevenlabs_api_key"))


def credentials_status() -> dict:
    """Which credentials are configured (values are never returned)."""
    return {
        env_name: bool(get_setting(key))
        for key, env_name in ENV_SETTINGS.items()
        if key != "supabase_bucket"
    }


def register_discovery_tools(mcp):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    def get_model_info(
        subsystem: Optional[Literal["transcription", "tts", "all"]] = "all",
    ) -> dict:
        """Get information about the models behind each tool.

        Args:
            subsystem: transcription, tts, or all (default).

        Returns model identifiers, default parameters, which credentials are
        configured, and whether ffmpeg is available for the audio tools.
        """
        _configure_engines()
        result = {"server": "speech-tts", "version": VERSION}

        if subsystem in ("transcription", "all"):
            info = get_transcription_info()
            info["requires"] = ["REPLICATE_API_TOKEN", "SUPABASE_URL", "SUPABASE_KEY"]
            result["transcription"] = info

        if subsystem in ("tts", "all"):
            result["tts"] = get_tts_info()

        result["credentials"] = credentials_status()
        result["ffmpeg_available"] = is_ffmpeg_available()
        return result
