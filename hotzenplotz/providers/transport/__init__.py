"""Network transports.

HttpxTransport wraps a shared ``httpx.AsyncClient``.  Swap in any other
IHttpTransport (aiohttp, an in-process fake) without touching the cache.
"""

from hotzenplotz.providers.transport.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport"]
