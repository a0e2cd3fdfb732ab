"""
OAuth2 client-credentials token exchange against the Microsoft identity platform.

"""

import logging
import uuid

from typing import Protocol

import httpx

from pydantic import SecretStr, ValidationError

from teams_calls.config import settings
from teams_calls.config.utils import get_secret
from teams_calls.exceptions import AuthError, InvalidArgumentError
from teams_calls.models import Credential
from teams_calls.utils import use_httpx_client

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    def get(self) -> Credential | None: ...


class StaticCredentialProvider:
    """Provide a credential known upfront, by default the configured one."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | SecretStr | None = None,
    ) -> None:
        self.client_id = client_id if client_id is not None else settings.CLIENT_ID
        if client_secret is None:
            client_secret = settings.CLIENT_SECRET
        if isinstance(client_secret, SecretStr):
            client_secret = client_secret.get_secret_value()
        self.client_secret = client_secret

    def get(self) -> Credential | None:
        if not self.client_id or not self.client_secret:
            return None
        try:
            return Credential(
                client_id=self.client_id,
                client_secret=self.client_secret,
            )
        except ValidationError:
            return None


class SecretsManagerCredentialProvider:
    """
    Read the credential from an AWS Secrets Manager secret.

    The secret must be a JSON object with 'client_id' and 'client_secret' keys.

    """

    def __init__(
        self,
        secret_name: str | None = None,
        region_name: str | None = None,
    ) -> None:
        self.secret_name = secret_name or settings.CREDENTIALS_SECRET_NAME
        self.region_name = region_name or settings.AWS_REGION

    def get(self) -> Credential | None:
        if self.secret_name is None:
            return None
        secret = get_secret(self.secret_name, region_name=self.region_name)
        try:
            return Credential(
                client_id=secret.get("client_id"),
                client_secret=secret.get("client_secret"),
            )
        except ValidationError:
            logger.warning(
                "Secret '%s' does not hold a client_id/client_secret pair",
                self.secret_name,
            )
            return None


def validate_tenant_id(tenant_id: str | None) -> str:
    if tenant_id is None or tenant_id.strip() == "":
        raise InvalidArgumentError("tenant_id is required")
    tenant_id = tenant_id.strip()
    try:
        uuid.UUID(tenant_id)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"tenant_id must be a GUID, got '{tenant_id}'"
        ) from exc
    return tenant_id


def exchange_token(
    client_id: str,
    client_secret: str | SecretStr,
    tenant_id: str,
    *,
    httpx_client: httpx.Client | None = None,
) -> str:
    """
    Exchange application credentials for an access token.

    Parameters
    ----------
    client_id : str
        Application (client) ID.
    client_secret : str | SecretStr
        Client secret value.
    tenant_id : str
        Directory (tenant) ID, GUID-formatted.
    httpx_client : httpx.Client | None, optional
        Client used to send the request, by default a pre-configured one.

    Returns
    -------
    str
        Bearer access token, valid for about an hour.

    Raises
    ------
    InvalidArgumentError
        If tenant_id is missing or not a GUID.
    AuthError
        If client_id or client_secret is blank (no request is sent), if the
        token endpoint can't be reached or rejects the credential, or if it
        doesn't return an access token.

    """
    tenant_id = validate_tenant_id(tenant_id)
    if isinstance(client_secret, SecretStr):
        client_secret = client_secret.get_secret_value()
    try:
        credential = Credential(client_id=client_id, client_secret=client_secret)
    except ValidationError as exc:
        logger.warning("Client credential is incomplete, access token not requested")
        raise AuthError(
            "Client ID and client secret are required to request an access token",
            report_in_sentry=False,
        ) from exc
    url = f"{settings.LOGIN_BASE_URL}/{tenant_id}/oauth2/v2.0/token"
    data = {
        "client_id": credential.client_id,
        "client_secret": credential.client_secret.get_secret_value(),
        "scope": settings.GRAPH_SCOPE,
        "grant_type": "client_credentials",
    }

    logger.info("Requesting access token for tenant %s", tenant_id)
    with use_httpx_client(httpx_client) as client:
        try:
            response = client.post(url, data=data)
        except httpx.HTTPError as exc:
            raise AuthError(f"Token request failed: {exc}") from exc

    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not response.is_success:
        message = f"Token request failed with status {response.status_code}"
        if isinstance(payload, dict) and "error" in payload:
            message += f": {payload['error']}"
            if payload.get("error_description"):
                message += f" - {payload['error_description']}"
        raise AuthError(message, sentry_fingerprint="teams-calls-auth-error")
    if not isinstance(payload, dict):
        raise AuthError("Token endpoint returned a malformed response")
    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or access_token == "":
        raise AuthError("Token endpoint response doesn't contain an access_token")
    return access_token


def get_access_token(
    tenant_id: str,
    credential_provider: CredentialProvider,
    *,
    httpx_client: httpx.Client | None = None,
) -> str:
    """
    Obtain a credential from `credential_provider` and exchange it for a token.

    No request is sent when the provider has no credential to give.

    """
    tenant_id = validate_tenant_id(tenant_id)
    credential = credential_provider.get()
    if credential is None:
        logger.warning("No client credential available, access token not requested")
        raise AuthError(
            "Client ID and client secret are required to request an access token",
            report_in_sentry=False,
        )
    return exchange_token(
        credential.client_id,
        credential.client_secret,
        tenant_id,
        httpx_client=httpx_client,
    )
