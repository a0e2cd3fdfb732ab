from pydantic import SecretStr

from .base import BaseModel


class Credential(BaseModel):
    """Application (client) credential used for the client-credentials grant."""

    client_id: str
    client_secret: SecretStr

    model_config = {
        "frozen": True,
    }
