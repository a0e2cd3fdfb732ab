import os
import pathlib
import warnings

from functools import cache

import boto3
import orjson

from dotenv import dotenv_values

ENV_FILES: tuple[pathlib.Path, ...] = (
    # .env file in the same directory as this module
    pathlib.Path(__file__).parent.resolve() / ".env",
    # .env file in the root of the project
    pathlib.Path(__file__).parent.parent.parent.resolve() / ".env",
)


@cache
def get_env_value(key: str) -> str | None:
    """
    Used by properties to mimic pydantic's default behavior when fetching values
    from environment and .env files.

    Parameters
    ----------
    key : str
        The name of the environment variable to fetch.

    Returns
    -------
    str | None
        The value of the environment variable, or None if it doesn't exist.

    """
    # Check environment variables first
    try:
        return os.environ[key]
    except KeyError:
        pass

    # Check .env files
    for env_file in ENV_FILES:
        if not env_file.exists():
            continue
        env_values = dotenv_values(env_file)
        try:
            return env_values[key]
        except KeyError:
            pass

    return None


def get_secret(
    name: str,
    region_name: str | None = None,
) -> dict[str, str | None]:
    """
    Get secret from AWS Secrets Manager.

    The value is fetched on every call and is not kept around by this module.

    Parameters
    ----------
    name : str
        Name of the secret.
    region_name : str | None, optional
        AWS region of the secret, by default the region configured for boto3.

    Returns
    -------
    dict[str, str | None]
        Dictionary with key-value pairs as declared in the JSON secret string.

    """
    secret_value = str(
        boto3.client("secretsmanager", region_name=region_name).get_secret_value(
            SecretId=name
        )["SecretString"]
    )
    secret_dict: dict[str, str | None] = {}
    for key, value in orjson.loads(secret_value).items():
        if value is None:
            secret_dict[key] = None
        else:
            secret_dict[key] = str(value)
            if "changeme" in str(value).lower():
                warnings.warn(f"'{key}' is not set on the '{name}' secret")
    return secret_dict
