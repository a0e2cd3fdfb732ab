import datetime

from typing import Self

from pydantic import model_validator

from .base import BaseModel

DATE_FORMAT = "%Y-%m-%d"


class DateRange(BaseModel):
    """
    Range of calendar days, from 00:00 of `start` to 00:00 of `end` (UTC).

    """

    start: datetime.date
    end: datetime.date

    @model_validator(mode="after")
    def end_after_start(self) -> Self:
        if self.start > self.end:
            raise ValueError("End must be after start")
        return self

    @classmethod
    def trailing_days(
        cls,
        days: int,
        today: datetime.date | None = None,
    ) -> Self:
        """
        Build the range covering the last `days` days, today included.

        Parameters
        ----------
        days : int
            Number of days to cover.
        today : datetime.date | None, optional
            Reference day, by default the current UTC date.

        Returns
        -------
        DateRange
            Range ending at the start of tomorrow.

        """
        if today is None:
            today = datetime.datetime.now(datetime.UTC).date()
        end = today + datetime.timedelta(days=1)
        return cls(start=end - datetime.timedelta(days=days), end=end)

    @property
    def start_str(self) -> str:
        return self.start.strftime(DATE_FORMAT)

    @property
    def end_str(self) -> str:
        return self.end.strftime(DATE_FORMAT)
