import datetime

import httpx
import pytest
import respx

from teams_calls.calls import (
    CallType,
    build_call_records_url,
    get_direct_routing_calls,
    get_pstn_calls,
)
from teams_calls.config import settings
from teams_calls.exceptions import InvalidArgumentError

CALL_RECORDS_URL = f"{settings.GRAPH_BASE_URL}/communications/callRecords"


@pytest.mark.parametrize("days", range(1, 91))
def test_trailing_days_match_date_range(days: int, today: datetime.date):
    tomorrow = today + datetime.timedelta(days=1)
    start = tomorrow - datetime.timedelta(days=days)

    assert build_call_records_url(
        CallType.PSTN, days=days, today=today
    ) == build_call_records_url(
        CallType.PSTN,
        start_date=start.strftime("%Y-%m-%d"),
        end_date=tomorrow.strftime("%Y-%m-%d"),
    )


def test_seven_days_url(today: datetime.date):
    url = build_call_records_url(CallType.PSTN, days=7, today=today)

    assert url == (
        f"{CALL_RECORDS_URL}/getPstnCalls"
        "(fromDateTime=2020-04-02,toDateTime=2020-04-09)"
    )


def test_direct_routing_url():
    url = build_call_records_url(
        CallType.DIRECT_ROUTING, start_date="2020-04-01", end_date="2020-04-09"
    )

    assert url == (
        f"{CALL_RECORDS_URL}/getDirectRoutingCalls"
        "(fromDateTime=2020-04-01,toDateTime=2020-04-09)"
    )


def test_date_range_is_used_verbatim():
    # Explicit ranges aren't bound to the trailing days limit
    url = build_call_records_url(
        CallType.PSTN, start_date="2019-01-01", end_date="2020-01-01"
    )

    assert url.endswith("(fromDateTime=2019-01-01,toDateTime=2020-01-01)")


def test_trailing_days_default_to_utc_today():
    url = build_call_records_url(CallType.PSTN, days=1)
    tomorrow = datetime.datetime.now(datetime.UTC).date() + datetime.timedelta(days=1)

    assert url.endswith(f"toDateTime={tomorrow:%Y-%m-%d})")


@pytest.mark.parametrize("days", [0, -1, 91, 365])
def test_days_out_of_range(
    days: int,
    mock_router: respx.MockRouter,
    httpx_client: httpx.Client,
):
    with pytest.raises(InvalidArgumentError):
        get_pstn_calls("token", days=days, httpx_client=httpx_client)

    assert len(mock_router.calls) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"start_date": "2020-04-01", "end_date": "2020-04-09", "days": 7},
        {"start_date": "2020-04-01", "days": 7},
        {"start_date": "2020-04-01"},
        {"end_date": "2020-04-09"},
        {"start_date": "", "end_date": ""},
    ],
)
def test_invalid_modes(
    kwargs: dict,
    mock_router: respx.MockRouter,
    httpx_client: httpx.Client,
):
    with pytest.raises(InvalidArgumentError):
        get_direct_routing_calls("token", httpx_client=httpx_client, **kwargs)

    assert len(mock_router.calls) == 0


def test_empty_access_token(mock_router: respx.MockRouter):
    with pytest.raises(InvalidArgumentError):
        get_pstn_calls("", days=7)

    assert len(mock_router.calls) == 0


def test_pstn_calls_two_pages(
    mock_router: respx.MockRouter,
    httpx_client: httpx.Client,
    today: datetime.date,
):
    first_url = build_call_records_url(CallType.PSTN, days=7, today=today)
    next_url = f"{CALL_RECORDS_URL}/next?$skiptoken=2"
    first_route = mock_router.get(first_url).mock(
        return_value=httpx.Response(
            200,
            json={
                "value": [{"id": "a", "duration": 10}, {"id": "b", "duration": 20}],
                "@odata.NextLink": next_url,
            },
        )
    )
    mock_router.get(next_url).mock(
        return_value=httpx.Response(200, json={"value": [{"id": "c", "duration": 30}]})
    )

    records = list(
        get_pstn_calls("token", days=7, today=today, httpx_client=httpx_client)
    )

    assert [record["id"] for record in records] == ["a", "b", "c"]
    assert "fromDateTime=2020-04-02,toDateTime=2020-04-09" in str(
        first_route.calls.last.request.url
    )


def test_direct_routing_calls_share_pagination(
    mock_router: respx.MockRouter,
    httpx_client: httpx.Client,
):
    first_url = build_call_records_url(
        CallType.DIRECT_ROUTING, start_date="2020-04-01", end_date="2020-04-09"
    )
    next_url = f"{CALL_RECORDS_URL}/next?$skiptoken=1"
    mock_router.get(first_url).mock(
        return_value=httpx.Response(
            200,
            json={"value": [{"id": 1}], "@odata.NextLink": next_url},
        )
    )
    mock_router.get(next_url).mock(
        return_value=httpx.Response(200, json={"value": [{"id": 2}]})
    )

    records = get_direct_routing_calls(
        "token",
        start_date="2020-04-01",
        end_date="2020-04-09",
        httpx_client=httpx_client,
    )

    assert list(records) == [{"id": 1}, {"id": 2}]
