import logging

from typing import Iterator

import httpx

from teams_calls.exceptions import FetchError, InvalidArgumentError
from teams_calls.models import CallRecord
from teams_calls.utils import use_httpx_client

logger = logging.getLogger(__name__)

NEXT_LINK_KEYS = ("@odata.NextLink", "@odata.nextLink")


def _get_page(
    client: httpx.Client,
    url: str,
    access_token: str,
) -> tuple[list[CallRecord], str | None]:
    try:
        response = client.get(url, headers={"Authorization": access_token})
    except httpx.HTTPError as exc:
        raise FetchError(f"Request to {url} failed: {exc}", url=url) from exc
    if not response.is_success:
        raise FetchError(
            f"Request to {url} failed with status {response.status_code}",
            url=url,
            status_code=response.status_code,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchError(
            f"Response from {url} is not valid JSON",
            url=url,
            status_code=response.status_code,
        ) from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("value"), list):
        raise FetchError(
            f"Response from {url} doesn't contain a 'value' list",
            url=url,
            status_code=response.status_code,
        )

    next_link = None
    for key in NEXT_LINK_KEYS:
        if payload.get(key):
            next_link = str(payload[key])
            break
    return payload["value"], next_link


def fetch_all(
    initial_url: str,
    access_token: str,
    *,
    httpx_client: httpx.Client | None = None,
) -> Iterator[CallRecord]:
    """
    Yield records from `initial_url` and every page linked after it.

    Pages are requested one at a time, on demand, following the
    '@odata.NextLink' continuation until a page has none. A failed page
    raises FetchError and ends the sequence.

    Parameters
    ----------
    initial_url : str
        Fully-formed query URL of the first page.
    access_token : str
        Access token, sent as-is in the Authorization header.
    httpx_client : httpx.Client | None, optional
        Client used to send the requests, by default a pre-configured one.

    Yields
    ------
    CallRecord
        Records in the order they were received.

    """
    if not access_token:
        raise InvalidArgumentError("access_token is required")

    with use_httpx_client(httpx_client) as client:
        url: str | None = initial_url
        page_number = 0
        while url:
            page_number += 1
            records, url = _get_page(client, url, access_token)
            logger.debug("Page %d returned %d records", page_number, len(records))
            yield from records
