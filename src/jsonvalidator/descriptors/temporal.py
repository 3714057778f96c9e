# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Date descriptor and helpers normalizing date-like values to UTC instants.

Three input representations are accepted and compared as instants:

* ISO-8601 strings (``2024-01-01``, ``2024-01-01T10:00:00Z``, offsets);
* numbers, interpreted as milliseconds since the Unix epoch;
* :class:`datetime.datetime` and :class:`datetime.date` objects.

Values without a timezone are taken to be UTC.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors.base import (
    BaseDescriptor,
    allow_list,
    check_bounds_order,
    check_range,
    is_number,
    rules_text,
    show_value,
    type_name,
)
from jsonvalidator.errors import AllowListViolationError, ConfigurationError, TypeMismatchError, fail

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

DateLike = str | int | float | date

# ###############
# Public Interface
# ###############


class DateDescriptor(BaseDescriptor):
    """A date or date-time with inclusive bounds and an allow-list of instants."""

    kind = "date"

    def __init__(
        self,
        *,
        nullable: bool = False,
        minimum: DateLike | None = None,
        maximum: DateLike | None = None,
        allowed: Iterable[DateLike] | None = None,
    ) -> None:
        super().__init__(nullable)
        self.minimum: datetime | None = None
        self.maximum: datetime | None = None
        self.allowed: list[datetime] | None = None
        self.set_min(minimum)
        self.set_max(maximum)
        self.set_enum(allowed)

    def set_min(self, value: DateLike | None) -> DateDescriptor:
        """Set the earliest accepted instant; ``None`` removes it."""
        bound = _bound_to_instant(value, "minimum")
        check_bounds_order(bound, self.maximum, "date")
        self.minimum = bound
        return self

    def set_max(self, value: DateLike | None) -> DateDescriptor:
        """Set the latest accepted instant; ``None`` removes it."""
        bound = _bound_to_instant(value, "maximum")
        check_bounds_order(self.minimum, bound, "date")
        self.maximum = bound
        return self

    def set_enum(self, values: Iterable[DateLike] | None) -> DateDescriptor:
        """Restrict the value to the given instants; ``None`` removes the restriction."""
        self.allowed = allow_list(values, to_instant, "date")
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not (isinstance(value, (str, date)) or is_number(value)):
            return fail(
                TypeMismatchError,
                f"Expected a date string, epoch milliseconds or date object, received {type_name(value)}.",
                path,
                throw,
            )
        instant = to_instant(value)
        if instant is None:
            return fail(TypeMismatchError, f"The value {show_value(value)} is not a valid date.", path, throw)
        if not check_range(instant, self.minimum, self.maximum, path, throw, "date", format_instant):
            return False
        if self.allowed is not None and instant not in self.allowed:
            return fail(
                AllowListViolationError,
                f"The date {format_instant(instant)} is not one of the allowed dates: "
                f"{', '.join(map(format_instant, self.allowed))}.",
                path,
                throw,
            )
        return True

    def example(self) -> str:
        for candidate in (self.allowed[0] if self.allowed else None, self.minimum, self.maximum):
            if candidate is not None:
                return format_instant(candidate)
        return format_instant(datetime.now(timezone.utc))

    def example_with_rules(self) -> str:
        return rules_text(
            "A date",
            self.nullable,
            f"Must be on or after {format_instant(self.minimum)}" if self.minimum is not None else "",
            f"Must be on or before {format_instant(self.maximum)}" if self.maximum is not None else "",
            f"Allowed values: {', '.join(map(format_instant, self.allowed))}" if self.allowed else "",
        )


def to_instant(value: Any) -> datetime | None:
    """Normalize a date-like value to an aware UTC datetime.

    Returns:
        The instant, or ``None`` if *value* is not a supported type or does
        not describe a valid, finite date.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_instant(value)
    if is_number(value):
        try:
            if not math.isfinite(value):
                return None
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def parse_instant(text: str) -> datetime | None:
    """Parse an ISO-8601 date or date-time string; ``None`` if it is not one."""
    try:
        return _as_utc(datetime.fromisoformat(text.strip()))
    except (OverflowError, ValueError):
        return None


def format_instant(instant: datetime) -> str:
    """Format an instant as ISO-8601 in UTC with a ``Z`` suffix."""
    return _as_utc(instant).isoformat().replace("+00:00", "Z")


# ################
# Implementation
# ################


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _bound_to_instant(value: DateLike | None, label: str) -> datetime | None:
    if value is None:
        return None
    instant = to_instant(value)
    if instant is None:
        raise ConfigurationError(
            f"The {label} must be a valid date string, epoch milliseconds or date object. Received {show_value(value)}."
        )
    return instant
