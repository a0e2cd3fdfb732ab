"""
PSTN and direct routing call records queries.

Both queries accept either an explicit date range or a trailing number of
days and return a lazy sequence of records, see `teams_calls.paging.fetch_all`.

"""

import datetime
import enum
import logging

from typing import Iterator

import httpx

from pydantic import ValidationError

from teams_calls.config import settings
from teams_calls.exceptions import InvalidArgumentError
from teams_calls.models import CallRecord, CallRecordsQuery, DateRange

from .paging import fetch_all

logger = logging.getLogger(__name__)


class CallType(enum.StrEnum):
    PSTN = "getPstnCalls"
    DIRECT_ROUTING = "getDirectRoutingCalls"


def _validate_query(
    start_date: str | None,
    end_date: str | None,
    days: int | None,
) -> CallRecordsQuery:
    try:
        return CallRecordsQuery(start_date=start_date, end_date=end_date, days=days)
    except ValidationError as exc:
        messages = "; ".join(
            error["msg"].removeprefix("Value error, ") for error in exc.errors()
        )
        raise InvalidArgumentError(f"Invalid call records query: {messages}") from exc


def build_call_records_url(
    call_type: CallType,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    days: int | None = None,
    today: datetime.date | None = None,
) -> str:
    """
    Build the first page URL of a call records query.

    Parameters
    ----------
    call_type : CallType
        Kind of call records to query.
    start_date : str | None, optional
        First day (YYYY-MM-DD), used verbatim. Requires `end_date`.
    end_date : str | None, optional
        Day after the last one (YYYY-MM-DD), used verbatim. Requires `start_date`.
    days : int | None, optional
        Number of days to query, today included, between 1 and 90.
        Can't be combined with `start_date`/`end_date`.
    today : datetime.date | None, optional
        Reference day for `days`, by default the current UTC date.

    Returns
    -------
    str
        Query URL.

    Raises
    ------
    InvalidArgumentError
        If both or neither of the date range and `days` are provided,
        or if `days` is out of range.

    """
    query = _validate_query(start_date, end_date, days)
    if query.days is not None:
        date_range = DateRange.trailing_days(query.days, today=today)
        start_date, end_date = date_range.start_str, date_range.end_str
    else:
        start_date, end_date = query.start_date, query.end_date
    return (
        f"{settings.GRAPH_BASE_URL}/communications/callRecords/"
        f"{CallType(call_type)}(fromDateTime={start_date},toDateTime={end_date})"
    )


def get_call_records(
    call_type: CallType,
    access_token: str,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    days: int | None = None,
    today: datetime.date | None = None,
    httpx_client: httpx.Client | None = None,
) -> Iterator[CallRecord]:
    """
    Query call records of the given type.

    Arguments are validated immediately; pages are only requested
    while the returned iterator is consumed.

    """
    call_type = CallType(call_type)
    if not access_token:
        raise InvalidArgumentError("access_token is required")
    url = build_call_records_url(
        call_type,
        start_date=start_date,
        end_date=end_date,
        days=days,
        today=today,
    )
    logger.info("Querying %s: %s", call_type.name, url)
    return fetch_all(url, access_token, httpx_client=httpx_client)


def get_pstn_calls(
    access_token: str,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    days: int | None = None,
    today: datetime.date | None = None,
    httpx_client: httpx.Client | None = None,
) -> Iterator[CallRecord]:
    """Query calling plan (PSTN) call records."""
    return get_call_records(
        CallType.PSTN,
        access_token,
        start_date=start_date,
        end_date=end_date,
        days=days,
        today=today,
        httpx_client=httpx_client,
    )


def get_direct_routing_calls(
    access_token: str,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    days: int | None = None,
    today: datetime.date | None = None,
    httpx_client: httpx.Client | None = None,
) -> Iterator[CallRecord]:
    """Query direct routing call records."""
    return get_call_records(
        CallType.DIRECT_ROUTING,
        access_token,
        start_date=start_date,
        end_date=end_date,
        days=days,
        today=today,
        httpx_client=httpx_client,
    )
