"""
Blob Store Module.

Remote storage is an opaque key-value blob store with two operations:
put bytes under a key and list what is stored. Implementations raise
UploadError / ListError; InvoiceStorage turns those into structured
results.

Implementations:
    - InMemoryBlobStore: process-local, for tests and offline use
    - HttpBlobStore: Vercel-Blob-style REST API over aiohttp

Author: ML Engineering Team
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from config import get_config
from gst_invoice.utils.exceptions import ListError, UploadError
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BlobInfo:
    """
    Metadata of a stored blob.

    Attributes:
        url: Public URL
        download_url: URL that forces a download
        pathname: Key within the store
        size: Size in bytes
        uploaded_at: ISO-8601 upload time
    """
    url: str
    download_url: str
    pathname: str
    size: int
    uploaded_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_api(cls, data: Dict[str, Any], size: Optional[int] = None) -> 'BlobInfo':
        """Build from a REST API payload (camelCase keys)."""
        return cls(
            url=data.get('url', ''),
            download_url=data.get('downloadUrl', data.get('url', '')),
            pathname=data.get('pathname', ''),
            size=int(data.get('size', size or 0)),
            uploaded_at=data.get('uploadedAt', ''),
        )


class BlobStore(ABC):
    """Contract of a remote blob store."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> BlobInfo:
        """
        Store bytes under a key.

        Raises:
            UploadError: If the store rejects the upload.
        """

    @abstractmethod
    async def list(self) -> List[BlobInfo]:
        """
        List every stored blob.

        Raises:
            ListError: If listing fails.
        """


class InMemoryBlobStore(BlobStore):
    """
    Blob store kept in a dictionary.

    Attributes:
        base_url: Prefix for generated URLs
        blobs: pathname -> (BlobInfo, bytes)
    """

    def __init__(
        self,
        base_url: str = "memory://invoices",
        clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.blobs: Dict[str, tuple] = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def put(self, key: str, data: bytes, content_type: str) -> BlobInfo:
        if not key:
            raise UploadError(key, "Empty key")

        url = f"{self.base_url}/{key}"
        info = BlobInfo(
            url=url,
            download_url=f"{url}?download=1",
            pathname=key,
            size=len(data),
            uploaded_at=self._clock().isoformat(),
        )
        self.blobs[key] = (info, bytes(data))
        logger.debug(f"Stored {key} ({len(data)} bytes, {content_type})")
        return info

    async def list(self) -> List[BlobInfo]:
        return [info for info, _ in self.blobs.values()]

    def get_bytes(self, key: str) -> bytes:
        return self.blobs[key][1]


class HttpBlobStore(BlobStore):
    """
    Blob store over the Vercel Blob REST API.

    Each call is a single request with no retry; failures surface once.

    Attributes:
        base_url: API root
        token: Read-write bearer token
        api_version: Value of the x-api-version header

    Example:
        >>> store = HttpBlobStore.from_config()
        >>> info = await store.put("Invoice-VMP-19102026-0417.pdf", data, "application/pdf")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        api_version: str = "7",
        access: str = "public"
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.api_version = str(api_version)
        self.access = access

    @classmethod
    def from_config(cls) -> 'HttpBlobStore':
        token_env = get_config("storage.token_env", "BLOB_READ_WRITE_TOKEN")
        return cls(
            base_url=get_config("storage.base_url", "https://blob.vercel-storage.com"),
            token=os.environ.get(token_env, ""),
            api_version=get_config("storage.api_version", "7"),
            access=get_config("storage.access", "public"),
        )

    def _headers(self) -> Dict[str, str]:
        return {
            'authorization': f"Bearer {self.token}",
            'x-api-version': self.api_version,
        }

    async def put(self, key: str, data: bytes, content_type: str) -> BlobInfo:
        if not self.token:
            raise UploadError(key, "No storage token configured")

        headers = self._headers()
        headers.update({
            'x-content-type': content_type,
            'x-add-random-suffix': '0',
            'x-vercel-blob-access': self.access,
        })
        url = f"{self.base_url}/{quote(key)}"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.put(url, data=data, headers=headers) as response:
                    status, payload = response.status, await _read_payload(response)
        except aiohttp.ClientError as e:
            raise UploadError(key, str(e)) from e

        if status != 200:
            raise UploadError(key, _error_reason(payload, status))
        if payload is None:
            raise UploadError(key, "Storage returned an unreadable response")

        info = BlobInfo.from_api(payload, size=len(data))
        logger.info(f"Uploaded {info.pathname} ({info.size} bytes)")
        return info

    async def list(self) -> List[BlobInfo]:
        if not self.token:
            raise ListError("No storage token configured")

        blobs: List[BlobInfo] = []
        cursor = None

        try:
            async with aiohttp.ClientSession() as session:
                while True:
                    params = {'limit': '1000'}
                    if cursor:
                        params['cursor'] = cursor

                    async with session.get(self.base_url, params=params, headers=self._headers()) as response:
                        status, payload = response.status, await _read_payload(response)

                    if status != 200:
                        raise ListError(_error_reason(payload, status))
                    if payload is None:
                        raise ListError("Storage returned an unreadable response")

                    blobs.extend(BlobInfo.from_api(b) for b in payload.get('blobs') or [])

                    if not payload.get('hasMore'):
                        break
                    cursor = payload.get('cursor')
                    if not cursor:
                        raise ListError("Listing has more pages but no cursor")
        except aiohttp.ClientError as e:
            raise ListError(str(e)) from e

        logger.debug(f"Listed {len(blobs)} blob(s)")
        return blobs


async def _read_payload(response: aiohttp.ClientResponse) -> Optional[Dict[str, Any]]:
    """JSON object body of a response, or None when the body is not one."""
    try:
        payload = await response.json(content_type=None)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _error_reason(payload: Optional[Dict[str, Any]], status: int) -> str:
    """Message from an ``{"error": {"message": ...}}`` body, else the status."""
    error = (payload or {}).get('error')
    if isinstance(error, dict):
        error = error.get('message')
    return str(error) if error else f"HTTP {status}"


def create_blob_store(backend: Optional[str] = None) -> BlobStore:
    """
    Build the blob store named by ``storage.backend`` (memory or http).
    """
    backend = (backend or get_config("storage.backend", "memory")).lower()
    if backend == "http":
        return HttpBlobStore.from_config()
    if backend == "memory":
        return InMemoryBlobStore()
    raise ValueError(f"Unknown storage backend: {backend}")
