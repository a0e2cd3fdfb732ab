__all__ = [
    "use_httpx_client",
]

from ._httpx import use_httpx_client
