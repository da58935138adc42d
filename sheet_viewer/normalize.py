from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal

BLANK = "blank"
TEXT = "text"
NUMBER = "number"
DATETIME = "datetime"
BOOLEAN = "boolean"
DURATION = "duration"
OTHER = "other"

# openpyxl marks #DIV/0!, #REF! and friends with this data type.
ERROR_DATA_TYPE = "e"

DATETIME_FORMAT = "%Y-%m-%d %H:%M"
NUMBER_DECIMALS = 8


def is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def classify_value(value, data_type: str | None = None) -> str:
    """Map a reader-delivered value onto one of the cell-type constants above."""
    if is_blank(value):
        return BLANK
    if data_type == ERROR_DATA_TYPE:
        return OTHER
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return NUMBER
    if isinstance(value, (datetime, date)):
        return DATETIME
    if isinstance(value, (time, timedelta)):
        return DURATION
    if isinstance(value, str):
        return TEXT
    return OTHER


def format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    text = f"{value:.{NUMBER_DECIMALS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def format_datetime(value: date) -> str:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.strftime(DATETIME_FORMAT)


def format_duration(value: time | timedelta) -> str:
    """
    Constant duration format ``[-][d.]hh:mm:ss[.fffffff]``.

    A bare ``time`` is treated as the span since midnight. The day component
    and the seven-digit fraction only appear when non-zero.
    """
    if isinstance(value, time):
        value = timedelta(
            hours=value.hour,
            minutes=value.minute,
            seconds=value.second,
            microseconds=value.microsecond,
        )
    sign = ""
    if value < timedelta(0):
        sign = "-"
        value = -value
    hours, remainder = divmod(value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text += f".{value.microseconds * 10:07d}"
    return sign + text


def cell_to_text(value, data_type: str | None = None) -> str:
    """Canonical display string for one cell; never raises for reader values."""
    cell_type = classify_value(value, data_type)
    if cell_type == BLANK:
        return ""
    if cell_type == TEXT:
        return value
    if cell_type == DATETIME:
        return format_datetime(value)
    if cell_type == NUMBER:
        return format_number(value)
    if cell_type == BOOLEAN:
        return "true" if value else "false"
    if cell_type == DURATION:
        return format_duration(value)
    return str(value)
