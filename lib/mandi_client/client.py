from __future__ import annotations

from typing import Any

import httpx

from .interceptors import (
    InterceptorChain,
    TokenProvider,
    bearer_token_interceptor,
    storage_token_provider,
)
from .settings import ClientConfig
from .storage import FileStorage, KeyValueStorage


class ApiClient:
    """Async HTTP client bound to the API base path.

    Every request goes through ``interceptors`` before it is sent. Responses
    are returned as-is, whatever their status.
    """

    def __init__(
        self,
        cfg: ClientConfig,
        *,
        interceptors: InterceptorChain | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._cfg = cfg
        self.interceptors = interceptors if interceptors is not None else InterceptorChain()
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url,
            timeout=cfg.timeout_s,
            headers={"User-Agent": cfg.user_agent},
            event_hooks={"request": [self.interceptors.run]},
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        return await self._client.request(method, path, **kwargs)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("HEAD", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("OPTIONS", path, **kwargs)


def create_api_client(
    cfg: ClientConfig | None = None,
    *,
    token_provider: TokenProvider | None = None,
    storage: KeyValueStorage | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Build the client with its bearer-token interceptor.

    The token comes from ``token_provider`` if given, otherwise from
    ``cfg.token_key`` in ``storage`` (a ``FileStorage`` by default). It is
    looked up again for every request.
    """
    cfg = cfg or ClientConfig()
    if token_provider is None:
        token_provider = storage_token_provider(storage or FileStorage(), cfg.token_key)

    chain = InterceptorChain()
    chain.add(bearer_token_interceptor(token_provider))
    return ApiClient(cfg, interceptors=chain, transport=transport)
