"""
Pydantic models used across the client.

"""

__all__ = [
    "CallRecord",
    "CallRecordsQuery",
    "Credential",
    "DateRange",
    "MAX_DAYS",
]

from typing import Any

from .credential import Credential
from .date_range import DateRange
from .query import MAX_DAYS, CallRecordsQuery

CallRecord = dict[str, Any]
"""Call record as returned by Microsoft Graph, passed through untouched."""
