"""ISO 8601 UTC timestamp helpers shared by every response envelope.

Timestamps are always rendered as `YYYY-MM-DDTHH:mm:ss.SSSZ`. Parsing accepts
the same shape with optional milliseconds and rejects numeric UTC offsets so
that envelope timestamps stay unambiguous.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Final
from zoneinfo import ZoneInfo

from babel import Locale
from babel.dates import format_datetime, format_timedelta

Timestamp = str

_DOMAIN_TIMESTAMP_PATTERN: Final = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{3}))?Z$",
    re.ASCII,
)

# Largest to smallest; the first unit with a non-zero truncated quotient wins.
_DOMAIN_RELATIVE_TIME_UNITS: Final = (
    ("year", 31536000),
    ("month", 2592000),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)

_DOMAIN_UTC_ZONE: Final = ZoneInfo("UTC")


class InvalidTimestampError(ValueError):
    """Raised when a value is not a strict ISO 8601 UTC timestamp."""


def timestamp_now() -> Timestamp:
    """Return the current instant as an ISO 8601 UTC timestamp.

    Returns:
        Timestamp: Current UTC instant with millisecond precision and `Z` suffix.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return timestamp_from_datetime(datetime.now(timezone.utc))


def timestamp_from_datetime(value: datetime) -> Timestamp:
    """Render one instant as an ISO 8601 UTC timestamp.

    Args:
        value: Instant to render. Naive values are treated as UTC.

    Returns:
        Timestamp: UTC timestamp with millisecond precision and `Z` suffix.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    utc_value = _timestamp_to_utc(value)
    return utc_value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def timestamp_parse(value: str) -> datetime | None:
    """Parse one strict ISO 8601 UTC timestamp.

    Args:
        value: Candidate timestamp text.

    Returns:
        datetime | None: Aware UTC datetime, or None when the text does not
        match the UTC pattern or names an impossible calendar instant.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(value, str):
        return None

    match = _DOMAIN_TIMESTAMP_PATTERN.match(value)
    if match is None:
        return None

    year, month, day, hour, minute, second, milliseconds = match.groups()
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            int(milliseconds or 0) * 1000,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def timestamp_validate(value: str) -> bool:
    """Return whether a value is a strict ISO 8601 UTC timestamp."""

    return timestamp_parse(value) is not None


def timestamp_require(value: str) -> Timestamp:
    """Return the value unchanged when it is a strict ISO 8601 UTC timestamp.

    Args:
        value: Candidate timestamp text.

    Returns:
        Timestamp: The validated timestamp text.

    Raises:
        InvalidTimestampError: Raised when the value is not a valid timestamp.
    """

    if timestamp_parse(value) is None:
        raise InvalidTimestampError(f"Invalid ISO 8601 timestamp: {value!r}")
    return value


def timestamp_format_human(
    value: datetime | str,
    locale: str = "en-US",
    date_format: str = "long",
) -> str:
    """Render one instant as a locale-aware human-readable string in UTC.

    Args:
        value: Instant or ISO 8601 text. Offset forms are accepted here.
        locale: BCP 47 or POSIX locale identifier.
        date_format: Babel format name (`short`, `medium`, `long`, `full`) or pattern.

    Returns:
        str: Localized date-time text, or an empty string for unparseable input.

    Raises:
        babel.UnknownLocaleError: Raised when the locale is not known to Babel.
    """

    instant = _timestamp_coerce(value)
    if instant is None:
        return ""
    return format_datetime(
        instant,
        format=date_format,
        tzinfo=_DOMAIN_UTC_ZONE,
        locale=_timestamp_parse_locale(locale),
    )


def timestamp_format_relative(
    value: datetime | str,
    locale: str = "en-US",
    now: datetime | None = None,
) -> str:
    """Render the distance between an instant and now as a localized phrase.

    Args:
        value: Instant or ISO 8601 text to describe.
        locale: BCP 47 or POSIX locale identifier.
        now: Reference instant. Defaults to the current UTC instant.

    Returns:
        str: Phrase such as "in 3 days" or "2 hours ago", or an empty string
        for unparseable input.

    Raises:
        babel.UnknownLocaleError: Raised when the locale is not known to Babel.
    """

    instant = _timestamp_coerce(value)
    if instant is None:
        return ""

    reference = _timestamp_to_utc(now) if now is not None else datetime.now(timezone.utc)
    delta_seconds = math.floor((instant - reference).total_seconds() + 0.5)
    parsed_locale = _timestamp_parse_locale(locale)

    for unit_name, unit_seconds in _DOMAIN_RELATIVE_TIME_UNITS:
        unit_value = int(delta_seconds / unit_seconds)
        if unit_value != 0:
            return _timestamp_render_relative(unit_value * unit_seconds, unit_name, parsed_locale)
    return _timestamp_render_relative(0, "second", parsed_locale)


def _timestamp_render_relative(seconds: int, unit_name: str, locale: Locale) -> str:
    # An infinite threshold pins Babel to the requested unit.
    return format_timedelta(
        timedelta(seconds=seconds),
        granularity=unit_name,
        threshold=math.inf,
        add_direction=True,
        locale=locale,
    )


def _timestamp_to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _timestamp_coerce(value: datetime | str) -> datetime | None:
    if isinstance(value, datetime):
        return _timestamp_to_utc(value)
    if not isinstance(value, str):
        return None

    try:
        parsed_value = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    return _timestamp_to_utc(parsed_value)


def _timestamp_parse_locale(locale: str) -> Locale:
    return Locale.parse(locale.replace("-", "_"))
