"""Audio tools - metadata, format conversion, and editing."""

from pathlib import Path
from typing import Optional

from ...tools.audio import (
    adjust_volume,
    apply_fade,
    change_speed,
    concatenate_audio,
    convert_audio,
    get_audio_info,
    get_audio_metadata as _get_audio_metadata,
    is_ffmpeg_available,
    normalize_audio,
    trim_audio,
)
from ..config import (
    DEFAULT_OUTPUT_DIR,
    _load_config,
    _save_config,
    get_output_dir,
    resolve_output_path,
    to_dict,
)


def _error(e: Exception) -> dict:
    return {"status": "error", "message": str(e)}


def _resolve(output_path: Optional[str]) -> Optional[str]:
    return resolve_output_path(output_path) if output_path else None


def register_audio_tools(mcp):
    """Register audio processing tools with the MCP server."""

    # ========== File Info & Config ==========

    @mcp.tool()
    def get_audio_file_info(audio_path: str) -> dict:
        """Get audio file info: format, duration, size, validity."""
        return to_dict(get_audio_info(audio_path))

    @mcp.tool()
    def get_audio_metadata(audio_path: str) -> dict:
        """Get detailed audio metadata: codec, sample rate, channels, bit rate, tags."""
        try:
            return {"status": "success", **to_dict(_get_audio_metadata(audio_path))}
        except (FileNotFoundError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def set_output_directory(directory: str) -> dict:
        """Set default output directory for transcripts and generated audio.

        Args:
            directory: Path, or "default" to reset to ./audio.
        """
        if directory.lower() == "default":
            config = _load_config()
            config.pop("output_directory", None)
            _save_config(config)
            output_dir = get_output_dir()
            return {"status": "success", "output_directory": str(output_dir), "created": False}

        output_dir = Path(directory).expanduser().resolve()
        created = not output_dir.exists()
        output_dir.mkdir(parents=True, exist_ok=True)

        config = _load_config()
        config["output_directory"] = str(output_dir)
        _save_config(config)

        return {"status": "success", "output_directory": str(output_dir), "created": created}

    @mcp.tool()
    def get_output_directory() -> dict:
        """Get current default output directory."""
        output_dir = get_output_dir()
        return {
            "output_directory": str(output_dir),
            "exists": output_dir.exists(),
            "is_default": "output_directory" not in _load_config(),
            "default": str(DEFAULT_OUTPUT_DIR),
        }

    @mcp.tool()
    def check_ffmpeg_available() -> dict:
        """Check if ffmpeg is installed."""
        available = is_ffmpeg_available()
        return {
            "available": available,
            "install": None if available else "brew install ffmpeg (macOS) or apt install ffmpeg",
        }

    # ========== Processing ==========

    @mcp.tool()
    def convert_audio_format(
        input_path: str,
        output_format: str = "mp3",
        output_path: Optional[str] = None,
    ) -> dict:
        """Convert audio to a different format (mp3, wav, m4a, ogg, flac)."""
        try:
            return to_dict(convert_audio(input_path, output_format, _resolve(output_path)))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def normalize_audio_levels(
        input_path: str,
        target_lufs: float = -16.0,
        output_path: Optional[str] = None,
    ) -> dict:
        """Normalize loudness to a LUFS target (-16 podcast, -14 streaming)."""
        try:
            return to_dict(normalize_audio(input_path, _resolve(output_path), target_lufs))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    # ========== Manipulation ==========

    @mcp.tool()
    def trim_audio_file(
        input_path: str,
        start_ms: Optional[float] = None,
        end_ms: Optional[float] = None,
        output_path: Optional[str] = None,
    ) -> dict:
        """Trim audio to the range [start_ms, end_ms] (either bound optional)."""
        try:
            return to_dict(trim_audio(input_path, start_ms, end_ms, _resolve(output_path)))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def adjust_audio_volume(
        input_path: str,
        volume: Optional[float] = None,
        volume_db: Optional[float] = None,
        output_path: Optional[str] = None,
    ) -> dict:
        """Change volume by multiplier (2.0 = double) or by dB (+6, -3)."""
        try:
            return to_dict(adjust_volume(input_path, volume, volume_db, _resolve(output_path)))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def apply_audio_fade(
        input_path: str,
        fade_in_ms: float = 0,
        fade_out_ms: float = 0,
        output_path: Optional[str] = None,
    ) -> dict:
        """Apply fade in and/or fade out."""
        try:
            return to_dict(apply_fade(input_path, fade_in_ms, fade_out_ms, _resolve(output_path)))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def change_audio_speed(
        input_path: str,
        speed: float,
        output_path: Optional[str] = None,
    ) -> dict:
        """Change playback speed without changing pitch (0.5-4.0)."""
        try:
            return to_dict(change_speed(input_path, speed, _resolve(output_path)))
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)

    @mcp.tool()
    def join_audio_files(
        audio_paths: list[str],
        output_path: str,
        output_format: Optional[str] = None,
        gap_ms: float = 0,
    ) -> dict:
        """Concatenate audio files in order with optional silence between them.

        Args:
            audio_paths: Files to join, in order.
            output_path: Output file (bare names go to the output directory).
            output_format: mp3, wav, m4a, ogg or flac (default: from extension).
            gap_ms: Silence between files, e.g. 300-400 between dialogue lines.
        """
        try:
            return to_dict(
                concatenate_audio(audio_paths, resolve_output_path(output_path), output_format, gap_ms)
            )
        except (FileNotFoundError, ValueError, RuntimeError) as e:
            return _error(e)
