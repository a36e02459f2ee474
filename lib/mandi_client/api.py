from __future__ import annotations

import asyncio
import io
from typing import Any, Iterable

import httpx

from .client import ApiClient, create_api_client
from .settings import ClientConfig
from .session import SessionManager
from .storage import FileStorage, MemoryStorage


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None}
    return cleaned or None


def _is_file_value(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, io.IOBase, tuple))


def _split_form(data: dict[str, Any]) -> tuple[dict[str, str], dict[str, Any]]:
    fields: dict[str, str] = {}
    files: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if _is_file_value(value):
            files[key] = value
        else:
            fields[key] = str(value)
    return fields, files


class ApiService:
    """Generic REST verbs over an injected ``ApiClient``."""

    def __init__(self, client: ApiClient):
        self._client = client

    @property
    def client(self) -> ApiClient:
        return self._client

    async def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        return await self._client.get(url, params=_clean_params(params))

    async def get_file(self, url: str, params: dict[str, Any] | None = None) -> bytes:
        r = await self._client.get(url, params=_clean_params(params))
        return r.content

    async def get_multiple(self, urls: Iterable[str], params: dict[str, Any] | None = None) -> list[httpx.Response]:
        return list(await asyncio.gather(*(self.get(u, params) for u in urls)))

    async def create(self, url: str, data: Any) -> httpx.Response:
        return await self._client.post(url, json=data)

    async def update_patch(self, url: str, data: Any) -> httpx.Response:
        return await self._client.patch(url, json=data)

    async def update(self, url: str, data: Any) -> httpx.Response:
        return await self._client.put(url, json=data)

    async def delete(self, url: str) -> httpx.Response:
        return await self._client.delete(url)

    async def create_with_file(self, url: str, data: dict[str, Any]) -> httpx.Response:
        fields, files = _split_form(data)
        return await self._client.post(url, data=fields, files=files or None)

    async def update_with_file(self, url: str, data: dict[str, Any]) -> httpx.Response:
        fields, files = _split_form(data)
        return await self._client.patch(url, data=fields, files=files or None)


def create_api_service(
    cfg: ClientConfig | None = None,
    *,
    session: SessionManager | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[ApiService, SessionManager]:
    if session is None:
        session = SessionManager(MemoryStorage(), FileStorage())
        session.restore_session()
    client = create_api_client(cfg, token_provider=session.token, transport=transport)
    return ApiService(client), session
