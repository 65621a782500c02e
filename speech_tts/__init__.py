"""Speech TTS - speech-to-text, text-to-speech and audio utilities MCP server."""

__version__ = "1.0.0"
