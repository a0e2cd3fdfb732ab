from typing import Literal

from pydantic import HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import ENV_FILES, get_env_value, get_secret


class Settings(BaseSettings):
    PROJECT_SLUG: str = "teams-calls"
    PROJECT_VERSION: str = "0.1.0"

    ENVIRONMENT: Literal[
        "testing",  # Used during testing (locally and in CI)
        "development",  # Used during development
        "staging",  # Used during UAT
        "production",  # Used in production
    ] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Microsoft identity platform
    TENANT_ID: str | None = None
    CLIENT_ID: str | None = None
    CLIENT_SECRET: SecretStr | None = None
    LOGIN_BASE_URL: str = "https://login.microsoftonline.com"
    GRAPH_SCOPE: str = "https://graph.microsoft.com/.default"

    # Microsoft Graph
    GRAPH_BASE_URL: str = "https://graph.microsoft.com/beta"
    HTTP_TIMEOUT: float = 30
    """Timeout, in seconds, applied to every request."""

    # AWS
    AWS_REGION: str | None = None
    CREDENTIALS_SECRET_NAME: str | None = None
    """Secrets Manager secret with 'client_id' and 'client_secret' keys."""
    SENTRY_DSN_SECRET_NAME: str | None = None
    """Secrets Manager secret with a 'dsn' key."""

    @field_validator("LOGIN_BASE_URL", "GRAPH_BASE_URL")
    @classmethod
    def strip_trailing_slash(
        cls,
        value: str,
    ) -> str:
        return value.rstrip("/")

    @property
    def SENTRY_DSN(self) -> HttpUrl | None:  # noqa: N802
        env_value = get_env_value("SENTRY_DSN")
        if env_value is not None:
            if env_value.strip(" ").lower() in {
                "",
                "null",
                "none",
            }:
                return None
            return HttpUrl(env_value)
        if self.ENVIRONMENT == "testing" or self.SENTRY_DSN_SECRET_NAME is None:
            return None
        sentry_dsn = get_secret(
            self.SENTRY_DSN_SECRET_NAME,
            region_name=self.AWS_REGION,
        )["dsn"]
        if sentry_dsn is None or sentry_dsn.strip(" ").lower() in {
            "",
            "null",
            "none",
        }:
            return None
        return HttpUrl(sentry_dsn)

    # Model configuration
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
    )


settings = Settings()
