"""Server configuration utilities."""

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Optional

# Server version
VERSION = "1.0.0"

# Configuration paths
CONFIG_DIR = Path.home() / ".config" / "speech-tts"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_OUTPUT_DIR = Path("audio")

# Config keys that may also come from the environment
ENV_SETTINGS = {
    "replicate_api_token": "REPLICATE_API_TOKEN",
    "elevenlabs_api_key": "ELEVENLABS_API_KEY",
    "supabase_url": "SUPABASE_URL",
    "supabase_key": "SUPABASE_KEY",
    "supabase_bucket": "SUPABASE_BUCKET",
}


def _load_config() -> dict:
    """Load configuration from file."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text())
        except (json.JSONDecodeError, IOError):
            pass
    return {}


def _save_config(config: dict) -> None:
    """Save configuration to file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config, indent=2))


def get_setting(key: str, default: Optional[str] = None) -> Optional[str]:
    """Look up a setting, preferring its environment variable over the config file."""
    env_name = ENV_SETTINGS.get(key)
    if env_name:
        value = os.environ.get(env_name)
        if value:
            return value
    return _load_config().get(key, default)


def get_output_dir() -> Path:
    """Get the configured output directory, creating it if needed.

    Relative paths (including the default ``audio``) resolve against the
    current working directory.
    """
    config = _load_config()
    output_dir = Path(config.get("output_directory", str(DEFAULT_OUTPUT_DIR))).expanduser()
    if not output_dir.is_absolute():
        output_dir = Path.cwd() / output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def resolve_output_path(output_path: str) -> str:
    """Resolve output path, using default directory if path is just a filename."""
    path = Path(output_path)
    # Bare filenames land in the configured output dir
    if path.parent == Path(".") or str(path.parent) == "":
        return str(get_output_dir() / path.name)
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


def to_dict(obj) -> dict:
    """Convert dataclass to dict, handling nested objects."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": obj}
