"""MCP tool modules for the speech-tts server.

This package contains modular tool definitions organized by category:
- discovery: Model info and configuration checks
- transcription: Speech-to-text (audio_to_text)
- tts: Text-to-speech via Replicate and ElevenLabs
- audio: Audio metadata, conversion and editing
"""

from .discovery import register_discovery_tools
from .transcription import register_transcription_tools
from .tts import register_tts_tools
from .audio import register_audio_tools


def register_all_tools(mcp):
    """Register all tool modules with the MCP server."""
    register_discovery_tools(mcp)
    register_transcription_tools(mcp)
    register_tts_tools(mcp)
    register_audio_tools(mcp)


__all__ = ["register_all_tools"]
