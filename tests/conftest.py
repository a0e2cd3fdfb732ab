import os

# Settings are read when the package is imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["SENTRY_DSN"] = ""
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
for key in ("TENANT_ID", "CLIENT_ID", "CLIENT_SECRET", "CREDENTIALS_SECRET_NAME"):
    os.environ.pop(key, None)

import datetime  # noqa: E402

from typing import Generator  # noqa: E402

import httpx  # noqa: E402
import moto  # noqa: E402
import pytest  # noqa: E402
import respx  # noqa: E402

from teams_calls.config import settings  # noqa: E402

TENANT_ID = "11111111-2222-3333-4444-555555555555"
TODAY = datetime.date(2020, 4, 8)


@pytest.fixture(scope="function")
def tenant_id() -> str:
    return TENANT_ID


@pytest.fixture(scope="function")
def today() -> datetime.date:
    return TODAY


@pytest.fixture(scope="function")
def token_url() -> str:
    return f"{settings.LOGIN_BASE_URL}/{TENANT_ID}/oauth2/v2.0/token"


@pytest.fixture(scope="function")
def mock_router() -> Generator[respx.MockRouter, None, None]:
    """Mock every request; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture(scope="function")
def httpx_client(mock_router: respx.MockRouter) -> Generator[httpx.Client, None, None]:
    with httpx.Client() as client:
        yield client


@pytest.fixture(scope="function")
def mock_aws_resources() -> Generator[None, None, None]:
    with moto.mock_aws():
        yield None
