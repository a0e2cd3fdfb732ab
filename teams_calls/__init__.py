"""
Client for Microsoft Teams PSTN and direct routing call records.

"""

__all__ = [
    "AuthError",
    "CallType",
    "FetchError",
    "InvalidArgumentError",
    "TeamsCallsError",
    "exchange_token",
    "fetch_all",
    "get_access_token",
    "get_direct_routing_calls",
    "get_pstn_calls",
]

from .auth import exchange_token, get_access_token
from .calls import CallType, get_direct_routing_calls, get_pstn_calls
from .exceptions import AuthError, FetchError, InvalidArgumentError, TeamsCallsError
from .paging import fetch_all
