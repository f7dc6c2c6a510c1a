"""httpx-backed transport implementing IHttpTransport.

Relative request paths (the default backend URL is ``/``) are resolved
against ``base_url``, the origin the cache is serving.  Status codes are
passed through untouched; only failures to obtain any response at all are
translated into :class:`TransportError`.
"""

from __future__ import annotations

import httpx
import structlog

from hotzenplotz.interfaces.http_transport import IHttpTransport, TransportResponse
from hotzenplotz.utils.errors import TransportError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 20.0
_DEFAULT_HEADERS = {
    "User-Agent": "hotzenplotz/0.1",
    "Accept": "application/json",
}


class HttpxTransport(IHttpTransport):
    """GET-only transport on top of a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    base_url:
        Origin used to resolve relative paths.  Empty means every path
        must already be absolute.
    timeout:
        Per-request timeout in seconds.  A request that exceeds it fails
        with :class:`TransportError`.
    http_client:
        Pre-built client to use instead of creating one.  An injected
        client is not closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = _DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )

    async def fetch(self, path: str) -> TransportResponse:
        try:
            response = await self._client.get(path)
        except httpx.TimeoutException as exc:
            raise TransportError(message=f"Timeout fetching {path}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(message=f"HTTP error fetching {path}: {exc}") from exc

        logger.debug("transport_response", path=path, status_code=response.status_code)
        return TransportResponse(status_code=response.status_code, body_loader=response.json)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
