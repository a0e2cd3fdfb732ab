from contextlib import contextmanager
from typing import Iterator

from httpx import Client, HTTPTransport, Timeout

from teams_calls.config import settings


@contextmanager
def get_httpx_client() -> Iterator[Client]:
    """Get pre-configured httpx client."""
    timeout = Timeout(settings.HTTP_TIMEOUT)
    # Failed requests are never retried
    transport = HTTPTransport(retries=0)
    with Client(timeout=timeout, transport=transport) as client:
        yield client


@contextmanager
def use_httpx_client(client: Client | None = None) -> Iterator[Client]:
    """Yield `client` as-is, or a pre-configured one closed on exit."""
    if client is not None:
        yield client
        return
    with get_httpx_client() as new_client:
        yield new_client
