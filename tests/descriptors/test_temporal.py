# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the date descriptor and instant helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from jsonvalidator.descriptors import DateDescriptor
from jsonvalidator.descriptors.temporal import format_instant, parse_instant, to_instant
from jsonvalidator.errors import AllowListViolationError, ConfigurationError, RangeViolationError, TypeMismatchError

# ###############
# Helpers
# ###############

_NEW_YEAR = datetime(2024, 1, 1, tzinfo=timezone.utc)
_NEW_YEAR_MS = 1704067200000

# ###############
# Public Interface
# ###############


def test_to_instant_representations_agree():
    """Strings, epoch milliseconds and date objects describe the same instant."""
    assert to_instant("2024-01-01") == _NEW_YEAR
    assert to_instant("2024-01-01T00:00:00Z") == _NEW_YEAR
    assert to_instant("2024-01-01T01:00:00+01:00") == _NEW_YEAR
    assert to_instant(_NEW_YEAR_MS) == _NEW_YEAR
    assert to_instant(date(2024, 1, 1)) == _NEW_YEAR
    assert to_instant(datetime(2024, 1, 1)) == _NEW_YEAR


@pytest.mark.parametrize(
    "value", ["not a date", "2024-13-01", float("nan"), float("inf"), 1e300, 10**400, True, None, []]
)
def test_to_instant_rejects_invalid_values(value):
    assert to_instant(value) is None


def test_parse_and_format_instant():
    assert parse_instant("nope") is None
    assert format_instant(_NEW_YEAR) == "2024-01-01T00:00:00Z"
    assert format_instant(datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))) == "2024-01-01T00:00:00Z"


@pytest.mark.parametrize("value", ["2024-05-01", "2024-05-01T12:30:00Z", _NEW_YEAR_MS, date(2024, 5, 1), _NEW_YEAR])
def test_date_accepts_date_like_values(value):
    assert DateDescriptor().validate(value) is True


@pytest.mark.parametrize(
    "value", ["yesterday", True, [2024], {"y": 2024}, 10**400, pytest.param(10**5000, id="huge-int")]
)
def test_date_rejects_invalid_values(value):
    with pytest.raises(TypeMismatchError):
        DateDescriptor().validate(value, ("when",))
    assert DateDescriptor().validate(value, throw_on_failure=False) is False


def test_date_nullable():
    descriptor = DateDescriptor(nullable=True)
    assert descriptor.validate(None) is True
    with pytest.raises(TypeMismatchError):
        DateDescriptor().validate(None)


def test_date_bounds_compare_instants():
    """Bounds given in one representation constrain values given in another."""
    descriptor = DateDescriptor(minimum="2024-01-01", maximum=date(2024, 12, 31))
    assert descriptor.validate(_NEW_YEAR_MS) is True
    assert descriptor.validate("2024-12-31T00:00:00Z") is True
    with pytest.raises(RangeViolationError, match="2023-12-31T23:59:59Z"):
        descriptor.validate("2023-12-31T23:59:59Z")
    with pytest.raises(RangeViolationError):
        descriptor.validate("2025-01-01")


def test_date_allow_list():
    descriptor = DateDescriptor(allowed=["2024-01-01T00:00:00Z", "2024-06-01"])
    assert descriptor.validate(_NEW_YEAR_MS) is True
    assert descriptor.validate("2024-06-01T00:00:00+00:00") is True
    with pytest.raises(AllowListViolationError):
        descriptor.validate("2024-06-02")


def test_date_invalid_configuration():
    with pytest.raises(ConfigurationError):
        DateDescriptor(minimum="someday")
    with pytest.raises(ConfigurationError):
        DateDescriptor(minimum="2025-01-01", maximum="2024-01-01")
    with pytest.raises(ConfigurationError):
        DateDescriptor(allowed=[])


def test_date_examples():
    assert DateDescriptor(minimum=_NEW_YEAR).example() == "2024-01-01T00:00:00Z"
    assert DateDescriptor(allowed=["2024-06-01"]).example() == "2024-06-01T00:00:00Z"
    assert parse_instant(DateDescriptor().example()) is not None
    assert "Must be on or after 2024-01-01T00:00:00Z" in DateDescriptor(minimum=_NEW_YEAR).example_with_rules()
