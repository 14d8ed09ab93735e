"""Cloudflare Workers KV store accessed through the REST API."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..core.errors import StorageUnavailable
from .base import KeyValueStore

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudflare.com/client/v4"


class CloudflareKVStore(KeyValueStore):
    """One Workers KV namespace; each key maps to one KV value."""

    name = "cloudflare"

    def __init__(
        self,
        account_id: Optional[str],
        namespace_id: Optional[str],
        api_token: Optional[str],
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        missing = [
            label
            for label, value in (
                ("CLOUDFLARE_ACCOUNT_ID", account_id),
                ("CLOUDFLARE_KV_NAMESPACE_ID", namespace_id),
                ("CLOUDFLARE_API_TOKEN", api_token),
            )
            if not value
        ]
        if missing:
            raise StorageUnavailable(
                f"Cloudflare KV store misconfigured, missing: {', '.join(missing)}"
            )

        self._base_url = (
            f"{API_BASE}/accounts/{account_id}/storage/kv/namespaces/{namespace_id}"
        )
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {api_token}"}

    def _value_url(self, key: str) -> str:
        return f"{self._base_url}/values/{quote(key, safe='')}"

    def get(self, key: str) -> Optional[str]:
        try:
            r = self._client.get(self._value_url(key), headers=self._headers)
        except httpx.HTTPError as exc:
            raise StorageUnavailable(f"Cloudflare KV read failed: {exc}") from exc

        if r.status_code == 404:
            return None
        if r.is_error:
            logger.error("Cloudflare KV read of %r returned %s", key, r.status_code)
            raise StorageUnavailable(
                f"Cloudflare KV read failed with status {r.status_code}"
            )
        return r.text

    def put(self, key: str, value: str) -> None:
        try:
            r = self._client.put(
                self._value_url(key),
                headers={**self._headers, "Content-Type": "text/plain"},
                content=value.encode("utf-8"),
            )
        except httpx.HTTPError as exc:
            raise StorageUnavailable(f"Cloudflare KV write failed: {exc}") from exc

        if r.is_error:
            logger.error("Cloudflare KV write of %r returned %s", key, r.status_code)
            raise StorageUnavailable(
                f"Cloudflare KV write failed with status {r.status_code}"
            )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["API_BASE", "CloudflareKVStore"]
