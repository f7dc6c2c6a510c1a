"""Abstract base class for the HTTP transport.

The cache needs exactly one network primitive: GET a path and hand back the
status code plus a lazily decoded JSON body.  Implementations may use httpx,
aiohttp, or an in-process fake.  The body is only decoded when
:meth:`TransportResponse.json` is called, which the Transport Adapter does
after the status check.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TransportResponse:
    """Status code plus a deferred JSON decoder."""

    status_code: int
    body_loader: Callable[[], Any] = field(repr=False)

    def json(self) -> Any:
        """Decode and return the body.  May raise ``ValueError``."""
        return self.body_loader()


class IHttpTransport(ABC):
    """Contract for the network transport."""

    @abstractmethod
    async def fetch(self, path: str) -> TransportResponse:
        """Issue a GET request for *path*.

        Parameters
        ----------
        path:
            Absolute URL or a path relative to the transport's origin.

        Returns
        -------
        TransportResponse
            Any status code is returned as-is; callers decide what counts
            as failure.

        Raises
        ------
        TransportError
            When no response could be obtained at all.
        """

    async def aclose(self) -> None:
        """Release any network resources held by the transport."""
