from collections.abc import Container, Iterable
from datetime import timedelta
from urllib.parse import quote_plus

from diffbot.type import QueryTypes

_MILLISECOND = timedelta(milliseconds=1)


def build_query(parameters: Iterable[tuple[str, QueryTypes]], escaped: Container[str] = ()) -> str:
    query = []

    for key, value in parameters:
        if value is None or value == "" or value == timedelta(0):
            continue

        if isinstance(value, timedelta):
            value_ = str(_milliseconds(value))
        elif isinstance(value, bool):
            value_ = "true" if value else "false"
        else:
            value_ = str(value)

        if key in escaped:
            value_ = quote_plus(value_)

        query.append(f"&{key}={value_}")

    return "".join(query)


def _milliseconds(value: timedelta) -> int:
    """Whole milliseconds, truncated toward zero."""
    milliseconds = abs(value) // _MILLISECOND
    if value < timedelta(0):
        return -milliseconds
    return milliseconds
