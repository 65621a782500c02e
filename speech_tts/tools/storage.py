"""Supabase Storage client for publishing audio files.

Uploaded audio must be reachable through a public URL so that Replicate can
fetch it. Only the handful of Storage REST endpoints needed for that are
wrapped here:

- GET  /storage/v1/bucket                 list buckets
- POST /storage/v1/bucket                 create a bucket
- POST /storage/v1/object/{bucket}/{path} upload an object

Public objects are served from /storage/v1/object/public/{bucket}/{path}.
"""

import mimetypes
import sys
import time
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

DEFAULT_BUCKET = "audio"
DEFAULT_CONTENT_TYPE = "audio/wav"
REQUEST_TIMEOUT = 60.0


class StorageError(RuntimeError):
    """Raised when a Storage API request fails."""


def _error_message(response: httpx.Response) -> str:
    """Extract the error message from a Storage API error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return data.get("message") or data.get("error") or str(data)
    return str(data)


class SupabaseStorage:
    """Minimal Supabase Storage client.

    Args:
        url: Project URL, e.g. https://<ref>.supabase.co
        key: Service role (or anon) key.
        bucket: Bucket used by upload_file().
        client: Optional pre-built httpx.Client (used by tests).
    """

    def __init__(
        self,
        url: str,
        key: str,
        bucket: str = DEFAULT_BUCKET,
        client: Optional[httpx.Client] = None,
    ):
        if not url or not key:
            raise ValueError("Supabase URL and key are required (set SUPABASE_URL and SUPABASE_KEY)")
        self.url = url.rstrip("/")
        self.bucket = bucket
        # A caller-supplied client is left open for the caller to close
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=REQUEST_TIMEOUT)
        self._headers = {"apikey": key, "Authorization": f"Bearer {key}"}

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SupabaseStorage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _endpoint(self, path: str) -> str:
        return f"{self.url}/storage/v1/{path}"

    def list_buckets(self) -> list[dict]:
        """List all buckets in the project."""
        try:
            response = self._client.get(self._endpoint("bucket"), headers=self._headers)
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to list buckets: {e}") from e
        if response.is_error:
            raise StorageError(f"Failed to list buckets: {_error_message(response)}")
        return response.json()

    def create_bucket(self, name: str, public: bool = True) -> None:
        """Create a bucket."""
        try:
            response = self._client.post(
                self._endpoint("bucket"),
                headers=self._headers,
                json={"id": name, "name": name, "public": public},
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to create {name} bucket: {e}") from e
        if response.is_error:
            raise StorageError(f"Failed to create {name} bucket: {_error_message(response)}")

    def ensure_bucket(self, name: Optional[str] = None, public: bool = True) -> bool:
        """Create the bucket if it does not exist yet.

        Returns:
            True if the bucket was created.
        """
        name = name or self.bucket
        buckets = self.list_buckets()
        if any(bucket.get("name") == name for bucket in buckets):
            return False
        print(f"Creating storage bucket: {name}", file=sys.stderr)
        self.create_bucket(name, public=public)
        return True

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = DEFAULT_CONTENT_TYPE,
        upsert: bool = False,
    ) -> str:
        """Upload bytes to ``bucket/path`` and return the object's public URL."""
        headers = {
            **self._headers,
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        try:
            response = self._client.post(
                self._endpoint(f"object/{bucket}/{quote(path)}"),
                headers=headers,
                content=data,
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to upload file to Supabase: {e}") from e
        if response.is_error:
            raise StorageError(f"Failed to upload file to Supabase: {_error_message(response)}")
        return self.get_public_url(bucket, path)

    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return self._endpoint(f"object/public/{bucket}/{quote(path)}")

    def upload_file(self, file_path: str, upsert: bool = False) -> str:
        """Upload a local audio file under a timestamped name and return its public URL.

        The object is stored as ``audio/<epoch-ms>-<filename>`` inside the
        configured bucket.

        Raises:
            FileNotFoundError: If the file does not exist.
            StorageError: If the upload fails.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {file_path}")

        content_type = mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE
        object_path = f"audio/{int(time.time() * 1000)}-{path.name}"
        return self.upload(
            self.bucket,
            object_path,
            path.read_bytes(),
            content_type=content_type,
            upsert=upsert,
        )
