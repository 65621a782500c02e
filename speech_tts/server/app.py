#!/usr/bin/env python3
"""Speech TTS - speech-to-text, text-to-speech and audio utilities MCP server.

Transcription:
- WhisperX on Replicate, with the audio published through Supabase Storage.
  Saves the transcript, a readable transcript and sentence-level timestamps.

Text-to-speech:
- Replicate: MiniMax Speech preset voices with emotion control
- ElevenLabs: hosted voices with stability/similarity/style controls

Plus ffmpeg-based audio utilities for metadata, conversion and editing.

Credentials are read from REPLICATE_API_TOKEN, ELEVENLABS_API_KEY,
SUPABASE_URL and SUPABASE_KEY, falling back to ~/.config/speech-tts/config.json.
"""

import sys

from mcp.server.fastmcp import FastMCP

from .config import VERSION
from .tools import register_all_tools


def create_server() -> FastMCP:
    """Create the MCP server with all tools registered."""
    server = FastMCP("speech-tts")
    register_all_tools(server)
    return server


# Initialize MCP server
mcp = create_server()


# ============================================================================
# Server Entry Point
# ============================================================================


def main():
    """Run the MCP server."""
    print(f"speech-tts MCP server {VERSION} running on stdio", file=sys.stderr)
    mcp.run()


if __name__ == "__main__":
    main()
