"""
Write call records to JSON or CSV.

"""

import csv

from typing import IO, Any, Iterable

import orjson

from teams_calls.models import CallRecord


def _csv_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return orjson.dumps(value).decode("utf-8")
    if value is None:
        return ""
    return value


def write_json(records: Iterable[CallRecord], fp: IO[bytes]) -> int:
    """
    Write records to `fp` as an indented JSON array.

    Returns
    -------
    int
        Number of records written.

    """
    collected = list(records)
    fp.write(orjson.dumps(collected, option=orjson.OPT_INDENT_2))
    fp.write(b"\n")
    return len(collected)


def write_csv(records: Iterable[CallRecord], fp: IO[str]) -> int:
    """
    Write records to `fp` as CSV.

    Columns are the union of the records' keys, in the order they are first
    seen. Nested values are written as JSON.

    Returns
    -------
    int
        Number of records written.

    """
    collected = list(records)
    fieldnames: dict[str, None] = {}
    for record in collected:
        fieldnames.update(dict.fromkeys(record))
    writer = csv.DictWriter(fp, fieldnames=list(fieldnames), restval="")
    writer.writeheader()
    for record in collected:
        writer.writerow({key: _csv_value(value) for key, value in record.items()})
    return len(collected)
