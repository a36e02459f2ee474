from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, NoReturn

import httpx

from .storage import KeyValueStorage

TokenProvider = Callable[[], str | None]
RequestHandler = Callable[[httpx.Request], httpx.Request | Awaitable[httpx.Request]]
ErrorHandler = Callable[[BaseException], Any]


@dataclass(frozen=True)
class RequestInterceptor:
    on_request: RequestHandler | None = None
    on_error: ErrorHandler | None = None


def reject(error: BaseException) -> NoReturn:
    raise error


def storage_token_provider(storage: KeyValueStorage, key: str) -> TokenProvider:
    def _read() -> str | None:
        return storage.get(key)

    return _read


def authorize_request(request: httpx.Request, token_provider: TokenProvider) -> httpx.Request:
    """Set ``Authorization: Bearer <token>`` when the provider has a token.

    Empty tokens count as missing. No other header is touched.
    """
    token = token_provider()
    if token:
        request.headers["Authorization"] = f"Bearer {token}"
    return request


def bearer_token_interceptor(token_provider: TokenProvider) -> RequestInterceptor:
    return RequestInterceptor(
        on_request=lambda request: authorize_request(request, token_provider),
        on_error=reject,
    )


def _adopt(request: httpx.Request, result: Any) -> httpx.Request:
    if result is request:
        return request
    if not isinstance(result, httpx.Request):
        raise TypeError(f"request interceptor returned {type(result).__name__}, expected httpx.Request")
    # httpx sends the original object, so the replacement is copied onto it
    request.method = result.method
    request.url = result.url
    request.headers = result.headers
    request.stream = result.stream
    request.extensions = result.extensions
    # drop the cached body of the original so .content follows the new stream
    request.__dict__.pop("_content", None)
    if isinstance(result.stream, httpx.ByteStream):
        request.read()
    return request


class InterceptorChain:
    """Ordered request interceptors, run by httpx before each send.

    Interceptors run in registration order. Once one fails, the remaining
    ``on_error`` handlers see the exception; a handler that returns recovers
    the chain, one that raises replaces the error. An error still
    pending at the end is raised to the caller unchanged.
    """

    def __init__(self) -> None:
        self._interceptors: list[RequestInterceptor | None] = []

    def use(
        self,
        on_request: RequestHandler | None = None,
        on_error: ErrorHandler | None = None,
    ) -> int:
        self._interceptors.append(RequestInterceptor(on_request=on_request, on_error=on_error))
        return len(self._interceptors) - 1

    def add(self, interceptor: RequestInterceptor) -> int:
        return self.use(interceptor.on_request, interceptor.on_error)

    def eject(self, handle: int) -> None:
        if 0 <= handle < len(self._interceptors):
            self._interceptors[handle] = None

    def __len__(self) -> int:
        return sum(1 for i in self._interceptors if i is not None)

    async def run(self, request: httpx.Request) -> httpx.Request:
        error: BaseException | None = None
        for interceptor in list(self._interceptors):
            if interceptor is None:
                continue
            if error is None:
                if interceptor.on_request is None:
                    continue
                try:
                    result = interceptor.on_request(request)
                    if inspect.isawaitable(result):
                        result = await result
                    request = _adopt(request, result)
                except Exception as exc:
                    error = exc
            else:
                if interceptor.on_error is None:
                    continue
                try:
                    result = interceptor.on_error(error)
                    if inspect.isawaitable(result):
                        result = await result
                    if result is not None:
                        request = _adopt(request, result)
                    error = None
                except Exception as exc:
                    error = exc
        if error is not None:
            raise error
        return request
