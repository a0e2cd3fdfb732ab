from typing import Self

from pydantic import Field, model_validator

from .base import BaseModel

MAX_DAYS = 90
"""Call records are retained upstream for this many days."""


class CallRecordsQuery(BaseModel):
    """
    Parameters of a call records query.

    Either both `start_date` and `end_date` (YYYY-MM-DD, used verbatim)
    or `days` must be provided.

    """

    start_date: str | None = None
    end_date: str | None = None
    days: int | None = Field(default=None, ge=1, le=MAX_DAYS, strict=True)

    @model_validator(mode="after")
    def exactly_one_mode(self) -> Self:
        has_dates = self.start_date is not None or self.end_date is not None
        if has_dates and self.days is not None:
            raise ValueError("Provide either start_date/end_date or days, not both")
        if has_dates and (self.start_date is None or self.end_date is None):
            raise ValueError("start_date and end_date must be provided together")
        if not has_dates and self.days is None:
            raise ValueError("Provide either start_date/end_date or days")
        return self
