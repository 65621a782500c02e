"""Base classes and interfaces for TTS engines."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class TTSResult:
    """Result from a TTS generation."""

    status: str  # "success" or "error"
    output_path: Optional[str]
    engine: str
    model: Optional[str] = None
    format: Optional[str] = None
    size_bytes: int = 0
    duration_ms: Optional[int] = None
    error: Optional[str] = None
    metadata: dict = field(default_factory=dict)


@dataclass
class EngineInfo:
    """Information about a TTS engine."""

    name: str
    description: str
    requirements: str
    default_model: str
    output_format: str
    parameters: dict = field(default_factory=dict)


class TTSEngine(ABC):
    """Abstract base class for TTS engines."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this engine."""
        pass

    @property
    @abstractmethod
    def engine_id(self) -> str:
        """Unique identifier for this engine (e.g., 'replicate', 'elevenlabs')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the SDK is installed and credentials are configured."""
        pass

    @abstractmethod
    def get_info(self) -> EngineInfo:
        """Get detailed information about this engine."""
        pass

    @abstractmethod
    def generate(self, text: str, output_path: Path, **kwargs) -> TTSResult:
        """Synthesize text to an audio file.

        Args:
            text: Text to speak.
            output_path: Where to save the audio.
            **kwargs: Engine-specific parameters.
        """
        pass

    def get_setup_instructions(self) -> str:
        """Get setup instructions for this engine."""
        return f"No setup instructions available for {self.name}."
