from pydantic import BaseModel


class Metadata(BaseModel):
    report_in_sentry: bool
    """If True, report the error in Sentry."""
    sentry_fingerprint: str | None
    """
    If provided, all errors with the same fingerprint will be grouped together
    in the same issue in Sentry.
    See https://docs.sentry.io/platforms/python/usage/sdk-fingerprinting
    """

    model_config = {
        "extra": "forbid",
    }


class TeamsCallsError(Exception):
    """Base class for all call records client errors."""

    def __init__(
        self,
        message,
        *args,
        report_in_sentry: bool = True,
        sentry_fingerprint: str | None = None,
        **kwargs,
    ):
        super().__init__(message, *args, **kwargs)
        self.metadata: Metadata = Metadata(
            report_in_sentry=report_in_sentry,
            sentry_fingerprint=sentry_fingerprint,
        )


class AuthError(TeamsCallsError):
    """Token exchange failed or no credential was available."""


class FetchError(TeamsCallsError):
    """A call records page request failed."""

    def __init__(
        self,
        message,
        *args,
        url: str | None = None,
        status_code: int | None = None,
        **kwargs,
    ):
        kwargs.setdefault("sentry_fingerprint", "teams-calls-fetch-error")
        super().__init__(message, *args, **kwargs)
        self.url = url
        self.status_code = status_code


class InvalidArgumentError(TeamsCallsError, ValueError):
    """Query parameters are malformed or contradictory."""

    def __init__(self, message, *args, **kwargs):
        kwargs.setdefault("report_in_sentry", False)
        super().__init__(message, *args, **kwargs)
