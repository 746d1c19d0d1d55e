"""Tests for ISO 8601 UTC timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from api_template.domain import (
    InvalidTimestampError,
    timestamp_format_human,
    timestamp_format_relative,
    timestamp_from_datetime,
    timestamp_now,
    timestamp_parse,
    timestamp_require,
    timestamp_validate,
)

_REFERENCE_INSTANT = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_domain_timestamp_now_renders_utc_with_milliseconds() -> None:
    """Render the current instant with millisecond precision and `Z` suffix.

    Returns:
        None: Assertions validate timestamp shape and freshness.

    Raises:
        AssertionError: Raised when the timestamp is malformed or stale.
    """

    rendered_value = timestamp_now()
    parsed_value = timestamp_parse(rendered_value)

    assert rendered_value.endswith("Z")
    assert len(rendered_value) == len("2024-01-01T00:00:00.000Z")
    assert parsed_value is not None
    assert abs(datetime.now(timezone.utc) - parsed_value) < timedelta(seconds=5)


def test_domain_timestamp_parse_accepts_utc_with_and_without_milliseconds() -> None:
    """Parse both supported UTC timestamp shapes.

    Returns:
        None: Assertions validate parsed instants.

    Raises:
        AssertionError: Raised when supported values are rejected.
    """

    assert timestamp_parse("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert timestamp_parse("2024-02-29T23:59:59.999Z") == datetime(
        2024, 2, 29, 23, 59, 59, 999000, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "candidate",
    [
        "2024-01-01T00:00:00+02:00",
        "2024-01-01T00:00:00+00:00",
        "2024-01-01T00:00:00",
        "2024-01-01",
        "not-a-date",
        "",
        "2024-01-01T00:00:00.12Z",
        "2023-02-29T00:00:00Z",
        "2024-13-01T00:00:00Z",
        "2024-01-01T25:00:00Z",
        " 2024-01-01T00:00:00Z",
    ],
)
def test_domain_timestamp_parse_returns_none_for_invalid_values(candidate: str) -> None:
    """Return None for offset forms, malformed text and impossible instants.

    Args:
        candidate: Invalid timestamp text.

    Returns:
        None: Assertions validate rejection without raising.

    Raises:
        AssertionError: Raised when an invalid value is parsed.
    """

    assert timestamp_parse(candidate) is None
    assert timestamp_validate(candidate) is False


def test_domain_timestamp_parse_round_trips_to_millisecond_precision() -> None:
    """Parse a rendered instant back to the same millisecond.

    Returns:
        None: Assertions validate round-trip equality.

    Raises:
        AssertionError: Raised when precision is lost beyond milliseconds.
    """

    instant = datetime(2025, 3, 9, 7, 5, 3, 123456, tzinfo=timezone.utc)

    assert timestamp_parse(timestamp_from_datetime(instant)) == instant.replace(microsecond=123000)


def test_domain_timestamp_from_datetime_normalizes_offsets_and_naive_values() -> None:
    """Convert aware values to UTC and treat naive values as UTC.

    Returns:
        None: Assertions validate normalized rendering.

    Raises:
        AssertionError: Raised when conversion is incorrect.
    """

    offset_instant = datetime(2024, 1, 1, 2, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    assert timestamp_from_datetime(offset_instant) == "2024-01-01T00:00:00.000Z"
    assert timestamp_from_datetime(datetime(2024, 1, 1, 0, 0, 0)) == "2024-01-01T00:00:00.000Z"


def test_domain_timestamp_require_returns_value_or_raises() -> None:
    """Return valid timestamps unchanged and raise for invalid ones.

    Returns:
        None: Assertions validate strict timestamp enforcement.

    Raises:
        AssertionError: Raised when validation behavior is incorrect.
    """

    assert timestamp_require("2024-01-01T00:00:00.000Z") == "2024-01-01T00:00:00.000Z"
    with pytest.raises(InvalidTimestampError, match="Invalid ISO 8601 timestamp"):
        timestamp_require("2024-01-01T00:00:00+02:00")
    with pytest.raises(ValueError):
        timestamp_require("not-a-date")


def test_domain_timestamp_format_relative_selects_largest_non_zero_unit() -> None:
    """Pick the first non-zero unit from year down to second.

    Returns:
        None: Assertions validate unit selection and direction.

    Raises:
        AssertionError: Raised when a phrase uses the wrong unit or direction.
    """

    def _relative(seconds: int) -> str:
        return timestamp_format_relative(_REFERENCE_INSTANT + timedelta(seconds=seconds), now=_REFERENCE_INSTANT)

    assert _relative(90000) == "in 1 day"
    assert _relative(3 * 86400) == "in 3 days"
    assert _relative(-7200) == "2 hours ago"
    assert _relative(45 * 86400) == "in 1 month"
    assert _relative(400 * 86400) == "in 1 year"
    assert _relative(-59) == "59 seconds ago"


def test_domain_timestamp_format_relative_renders_zero_delta_as_seconds() -> None:
    """Render a zero delta with the zero-second phrase.

    Returns:
        None: Assertions validate zero-delta rendering.

    Raises:
        AssertionError: Raised when zero delta is not rendered in seconds.
    """

    assert timestamp_format_relative(_REFERENCE_INSTANT, now=_REFERENCE_INSTANT) == "in 0 seconds"
    assert timestamp_format_relative(
        _REFERENCE_INSTANT + timedelta(milliseconds=400),
        now=_REFERENCE_INSTANT,
    ) == "in 0 seconds"


def test_domain_timestamp_format_relative_honours_locale_and_invalid_input() -> None:
    """Localize phrases and return an empty string for unparseable input.

    Returns:
        None: Assertions validate localization and invalid-input handling.

    Raises:
        AssertionError: Raised when output is not localized or invalid input renders text.
    """

    german_phrase = timestamp_format_relative(
        "2024-06-01T14:00:00Z",
        locale="de-DE",
        now=_REFERENCE_INSTANT,
    )

    assert "2" in german_phrase
    assert "Stunden" in german_phrase
    assert timestamp_format_relative("not-a-date", now=_REFERENCE_INSTANT) == ""


def test_domain_timestamp_format_human_renders_locale_aware_text() -> None:
    """Render a human-readable UTC date-time string.

    Returns:
        None: Assertions validate localized date text.

    Raises:
        AssertionError: Raised when rendering is incorrect.
    """

    assert "January 1, 2024" in timestamp_format_human("2024-01-01T00:00:00Z")
    assert "January 1, 2024" in timestamp_format_human(datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert "2024" in timestamp_format_human("2024-01-01T00:00:00Z", locale="fr-FR")
    assert timestamp_format_human("not-a-date") == ""
