# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding of RFC 3339 style date/time literals into aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from strictoml.errors import InvalidDateFormatError

# ###############
# Public Interface
# ###############


def system_local_offset() -> timedelta:
    """Return the current UTC offset of the process's local time zone."""
    offset = datetime.now().astimezone().utcoffset()
    return offset if offset is not None else timedelta(0)


def decode_datetime(literal: str, local_offset: timedelta) -> datetime:
    """Decode one of the accepted date/time spellings.

    Accepted shapes, from most to least specific::

        1979-05-27T07:32:00.999999+07:00
        1979-05-27T07:32:00Z
        1979-05-27T07:32:00.5
        1979-05-27T07:32:00
        1979-05-27

    Literals without an offset are interpreted in *local_offset*; a date
    without a time means midnight. Fractional seconds beyond microsecond
    precision are truncated.

    Args:
        literal: The literal text as matched by the tokenizer.
        local_offset: Offset applied when the literal carries none.

    Returns:
        A timezone-aware datetime.

    Raises:
        InvalidDateFormatError: If the literal is not a real calendar instant.
    """
    match = _DATETIME_RE.fullmatch(literal)
    if match is None:
        raise InvalidDateFormatError(literal)
    try:
        tzinfo = _offset(match, local_offset)
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"] or 0),
            int(match["minute"] or 0),
            int(match["second"] or 0),
            _microseconds(match["fraction"]),
            tzinfo=tzinfo,
        )
    except ValueError:
        raise InvalidDateFormatError(literal) from None


# ################
# Implementation
# ################

_DATETIME_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|(?P<sign>[-+])(?P<off_hour>\d{2}):(?P<off_minute>\d{2}))?)?"
)


def _offset(match: re.Match[str], local_offset: timedelta) -> timezone:
    if match["offset"] is None:
        return timezone(local_offset)
    if match["sign"] is None:
        return timezone.utc
    hours = int(match["off_hour"])
    minutes = int(match["off_minute"])
    if hours > 23 or minutes > 59:
        raise ValueError("offset out of range")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if match["sign"] == "-" else delta)


def _microseconds(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int(fraction[:6].ljust(6, "0"))
