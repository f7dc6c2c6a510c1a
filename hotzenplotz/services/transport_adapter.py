"""Builds collection request paths and validates backend responses."""

from __future__ import annotations

from typing import Any

import structlog

from hotzenplotz.interfaces.http_transport import IHttpTransport
from hotzenplotz.models.config import normalize_backend_url
from hotzenplotz.utils.errors import BackendError, MalformedResponseError

logger = structlog.get_logger(logger_name=__name__)


class TransportAdapter:
    """Fetches raw collection records from ``<backend_url><name>.json``.

    No retry is attempted on any failure; errors go straight to the caller.
    """

    def __init__(self, transport: IHttpTransport, backend_url: str = "/") -> None:
        self._transport = transport
        self._backend_url = normalize_backend_url(backend_url)

    @property
    def backend_url(self) -> str:
        return self._backend_url

    def build_path(self, name: str) -> str:
        return f"{self._backend_url}{name}.json"

    async def fetch_records(self, name: str) -> list[Any]:
        """GET the collection and return its raw records.

        Raises
        ------
        BackendError
            If the status code is outside [200, 300).
        MalformedResponseError
            If the body is not valid JSON or not a JSON array.
        TransportError
            Propagated from the transport when no response was obtained.
        """
        path = self.build_path(name)
        response = await self._transport.fetch(path)

        if not 200 <= response.status_code < 300:
            logger.warning("backend_error", collection=name, path=path, status_code=response.status_code)
            raise BackendError(path=path, status_code=response.status_code, collection=name)

        # Body is only decoded once the status is known to be good.
        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                message=f"Response from {path} is not valid JSON: {exc}",
                collection=name,
            ) from exc

        if not isinstance(body, list):
            raise MalformedResponseError(
                message=f"Expected a JSON array from {path}, got {type(body).__name__}",
                collection=name,
            )
        return body
