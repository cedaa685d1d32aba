import logging
from typing import Optional, Protocol

import httpx

from tripsplit.core.config import settings
from tripsplit.core.errors import StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return its public URL."""

    async def delete(self, url: str) -> None:
        ...


class HttpBlobStore:
    """
    Object storage bucket behind an HTTP API (Supabase-style):

        POST   {base}/object/{bucket}/{key}          upload
        DELETE {base}/object/{bucket}/{key}          remove
        GET    {base}/object/public/{bucket}/{key}   public URL
    """

    def __init__(
        self,
        bucket: str,
        base_url: str = settings.STORAGE_URL,
        api_key: str = settings.STORAGE_API_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.transport = transport
        self.timeout = timeout

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{key}"

    def key_from_url(self, url: str) -> str:
        marker = f"/{self.bucket}/"
        if marker not in url:
            raise StorageError(f"URL does not belong to bucket {self.bucket}")
        return url.split(marker, 1)[1]

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        await self._request(
            "POST",
            key,
            content=data,
            headers={
                "Content-Type": content_type,
                "Cache-Control": "3600",
                "x-upsert": "false",
            },
        )
        return self.public_url(key)

    async def delete(self, url: str) -> None:
        await self._request("DELETE", self.key_from_url(url))

    async def _request(self, method: str, key: str, **kwargs):
        headers = {"Authorization": f"Bearer {self.api_key}", **kwargs.pop("headers", {})}
        url = f"{self.base_url}/object/{self.bucket}/{key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                res = await client.request(method, url, headers=headers, **kwargs)
                res.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Blob %s %s failed: %s", method, key, e)
            raise StorageError(f"Blob {method.lower()} failed for {key}") from e
