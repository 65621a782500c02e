"""Replicate model runner and output helpers."""

from pathlib import Path
from typing import Any, Optional

import httpx

DOWNLOAD_TIMEOUT = 120.0


def sparse_params(**params: Any) -> dict:
    """Build a fresh dict holding only the parameters that were actually given.

    ``None`` means "not given". Empty strings are treated the same way so that
    e.g. ``language=""`` falls back to provider-side language detection.
    """
    result = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, str) and not value:
            continue
        result[key] = value
    return result


class ReplicateRunner:
    """Runs Replicate models with a lazily created client.

    Args:
        api_token: Replicate API token. Falls back to the SDK's own
            REPLICATE_API_TOKEN handling when None.
    """

    def __init__(self, api_token: Optional[str] = None):
        self.api_token = api_token
        self._client = None

    def is_available(self) -> bool:
        """Check if the replicate SDK is installed."""
        try:
            import replicate  # noqa: F401

            return True
        except ImportError:
            return False

    def _get_client(self):
        if self._client is None:
            import replicate

            self._client = replicate.Client(api_token=self.api_token)
        return self._client

    def run(self, model: str, input: dict) -> Any:
        """Run a model to completion and return its raw output."""
        return self._get_client().run(model, input=input)

    __call__ = run


def read_output_file(output: Any) -> bytes:
    """Read the bytes of a file-valued model output.

    Replicate returns file outputs either as file-like objects (with ``read``)
    or as plain URLs; a single-element list is unwrapped.
    """
    if isinstance(output, (list, tuple)):
        if not output:
            raise ValueError("Model returned an empty list")
        output = output[0]

    if hasattr(output, "read"):
        return output.read()

    url = str(output)
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"Unexpected model output: {url[:100]}")

    response = httpx.get(url, timeout=DOWNLOAD_TIMEOUT, follow_redirects=True)
    response.raise_for_status()
    return response.content


def save_output_file(output: Any, output_path: str | Path) -> Path:
    """Write a file-valued model output to disk."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(read_output_file(output))
    return path
