# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptors for primitive JSON values: strings, numbers, booleans and big integers."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable
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
from jsonvalidator.errors import (
    AllowListViolationError,
    ConfigurationError,
    PatternMismatchError,
    TypeMismatchError,
    fail,
)

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

# ###############
# Public Interface
# ###############


class StringDescriptor(BaseDescriptor):
    """A string, optionally matching a regular expression and an allow-list.

    The regular expression uses search semantics: it must match somewhere in
    the string unless it is anchored.
    """

    kind = "string"

    def __init__(
        self,
        regex: str | re.Pattern[str] | None = None,
        *,
        nullable: bool = False,
        allowed: Iterable[str] | None = None,
    ) -> None:
        super().__init__(nullable)
        self.regex: re.Pattern[str] | None = None
        self.allowed: list[str] | None = None
        self.set_regex(regex)
        self.set_enum(allowed)

    def set_regex(self, value: str | re.Pattern[str] | None) -> StringDescriptor:
        """Set the pattern strings must match; ``None`` removes it."""
        if value is None:
            self.regex = None
            return self
        if isinstance(value, str):
            try:
                value = re.compile(value)
            except re.error as exc:
                raise ConfigurationError(f"Invalid regular expression {value!r}: {exc}") from exc
        elif not isinstance(value, re.Pattern) or not isinstance(value.pattern, str):
            raise ConfigurationError(f"The regex must be a string or a compiled str pattern. Received {value!r}.")
        self.regex = value
        return self

    def set_enum(self, values: Iterable[str] | None) -> StringDescriptor:
        """Restrict the value to the given strings; ``None`` removes the restriction."""
        self.allowed = allow_list(values, lambda item: item if isinstance(item, str) else None, "string")
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not isinstance(value, str):
            return fail(TypeMismatchError, f"Expected a string, received {type_name(value)}.", path, throw)
        if self.regex is not None and self.regex.search(value) is None:
            return fail(
                PatternMismatchError,
                f"The value {value!r} does not match the pattern {self.regex.pattern!r}.",
                path,
                throw,
            )
        if self.allowed is not None and value not in self.allowed:
            return fail(
                AllowListViolationError,
                f"The value {value!r} is not one of the allowed values: {', '.join(self.allowed)}.",
                path,
                throw,
            )
        return True

    def example(self) -> str:
        return self.allowed[0] if self.allowed else "a string value"

    def example_with_rules(self) -> str:
        return rules_text(
            "A string",
            self.nullable,
            f"Must match {self.regex.pattern}" if self.regex is not None else "Has no specific regex",
            f"Allowed values: {', '.join(self.allowed)}" if self.allowed else "",
        )


class NumberDescriptor(BaseDescriptor):
    """An ``int`` or ``float`` (never ``bool``) with inclusive bounds and an allow-list."""

    kind = "number"

    def __init__(
        self,
        *,
        nullable: bool = False,
        minimum: float | None = None,
        maximum: float | None = None,
        allowed: Iterable[float] | None = None,
    ) -> None:
        super().__init__(nullable)
        self.minimum: float | None = None
        self.maximum: float | None = None
        self.allowed: list[float] | None = None
        self.set_min(minimum)
        self.set_max(maximum)
        self.set_enum(allowed)

    def set_min(self, value: float | None) -> NumberDescriptor:
        """Set the inclusive lower bound; ``None`` removes it."""
        if value is not None and not is_number(value):
            raise ConfigurationError(f"The minimum must be a number. Received {type_name(value)!r}.")
        check_bounds_order(value, self.maximum, "value")
        self.minimum = value
        return self

    def set_max(self, value: float | None) -> NumberDescriptor:
        """Set the inclusive upper bound; ``None`` removes it."""
        if value is not None and not is_number(value):
            raise ConfigurationError(f"The maximum must be a number. Received {type_name(value)!r}.")
        check_bounds_order(self.minimum, value, "value")
        self.maximum = value
        return self

    def set_enum(self, values: Iterable[float] | None) -> NumberDescriptor:
        """Restrict the value to the given numbers; ``None`` removes the restriction."""
        self.allowed = allow_list(values, lambda item: item if is_number(item) else None, "number")
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not is_number(value):
            return fail(TypeMismatchError, f"Expected a number, received {type_name(value)}.", path, throw)
        if not check_range(value, self.minimum, self.maximum, path, throw, "value"):
            return False
        if self.allowed is not None and value not in self.allowed:
            return fail(
                AllowListViolationError,
                f"The value {show_value(value)} is not one of the allowed values: {', '.join(map(str, self.allowed))}.",
                path,
                throw,
            )
        return True

    def example(self) -> float:
        if self.allowed:
            return self.allowed[0]
        if self.minimum is not None:
            return self.minimum
        if self.maximum is not None:
            return self.maximum
        return 2025

    def example_with_rules(self) -> str:
        return rules_text(
            "A number",
            self.nullable,
            f"Must be greater or equal to {self.minimum}" if self.minimum is not None else "",
            f"Must be less or equal to {self.maximum}" if self.maximum is not None else "",
            f"Allowed values: {', '.join(map(str, self.allowed))}" if self.allowed else "",
        )


class BigIntDescriptor(BaseDescriptor):
    """An arbitrary-precision integer.

    Accepts ``int`` values (not ``bool``) and decimal-integer strings, the
    usual transport form for integers beyond the float-safe range.
    """

    kind = "bigint"

    def __init__(
        self,
        *,
        nullable: bool = False,
        minimum: int | str | None = None,
        maximum: int | str | None = None,
        allowed: Iterable[int | str] | None = None,
    ) -> None:
        super().__init__(nullable)
        self.minimum: int | None = None
        self.maximum: int | None = None
        self.allowed: list[int] | None = None
        self.set_min(minimum)
        self.set_max(maximum)
        self.set_enum(allowed)

    def set_min(self, value: int | str | None) -> BigIntDescriptor:
        """Set the inclusive lower bound; ``None`` removes it."""
        bound = _bound_to_big_int(value, "minimum")
        check_bounds_order(bound, self.maximum, "value")
        self.minimum = bound
        return self

    def set_max(self, value: int | str | None) -> BigIntDescriptor:
        """Set the inclusive upper bound; ``None`` removes it."""
        bound = _bound_to_big_int(value, "maximum")
        check_bounds_order(self.minimum, bound, "value")
        self.maximum = bound
        return self

    def set_enum(self, values: Iterable[int | str] | None) -> BigIntDescriptor:
        """Restrict the value to the given integers; ``None`` removes the restriction."""
        self.allowed = allow_list(values, to_big_int, "big integer")
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        number = to_big_int(value)
        if number is None and _is_integer_shaped(value):
            return fail(TypeMismatchError, _digit_limit_message(value), path, throw)
        if number is None:
            return fail(
                TypeMismatchError, f"Expected a big integer, received {type_name(value)} {value!r}.", path, throw
            )
        if not check_range(number, self.minimum, self.maximum, path, throw, "value"):
            return False
        if self.allowed is not None and number not in self.allowed:
            return fail(
                AllowListViolationError,
                f"The value {number} is not one of the allowed values: {', '.join(map(str, self.allowed))}.",
                path,
                throw,
            )
        return True

    def example(self) -> int:
        if self.allowed:
            return self.allowed[0]
        if self.minimum is not None:
            return self.minimum
        if self.maximum is not None:
            return self.maximum
        return 123456789123456789

    def example_with_rules(self) -> str:
        return rules_text(
            "A big integer, may be passed as a decimal string",
            self.nullable,
            f"Must be greater or equal to {self.minimum}" if self.minimum is not None else "",
            f"Must be less or equal to {self.maximum}" if self.maximum is not None else "",
            f"Allowed values: {', '.join(map(str, self.allowed))}" if self.allowed else "",
        )


class BooleanDescriptor(BaseDescriptor):
    """A ``bool``."""

    kind = "boolean"

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not isinstance(value, bool):
            return fail(TypeMismatchError, f"Expected a boolean, received {type_name(value)}.", path, throw)
        return True

    def example(self) -> bool:
        return True

    def example_with_rules(self) -> str:
        return rules_text("A boolean", self.nullable)


class AnyDescriptor(BaseDescriptor):
    """Accepts every value, including ``None``."""

    kind = "any"
    fixed_nullable = True

    def __init__(self) -> None:
        super().__init__()

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        return True

    def example(self) -> str:
        return "Any serializable value, including null."

    def example_with_rules(self) -> str:
        return rules_text("Any serializable value", self.nullable)


def to_big_int(value: Any) -> int | None:
    """Convert an ``int`` or decimal-integer string to ``int``; ``None`` otherwise.

    Integers with more digits than ``sys.get_int_max_str_digits()`` allows
    cannot be converted to or from decimal text and yield ``None``.
    """
    if not _is_integer_shaped(value):
        return None
    try:
        if isinstance(value, str):
            return int(value)
        str(value)
    except ValueError:
        return None
    return value


# ################
# Implementation
# ################

_BIG_INT_TEXT = re.compile(r"[+-]?[0-9]+")


def _is_integer_shaped(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, str) and _BIG_INT_TEXT.fullmatch(value) is not None)


def _digit_limit_message(value: int | str) -> str:
    digits = len(value.lstrip("+-")) if isinstance(value, str) else f"over {sys.get_int_max_str_digits()}"
    return (
        f"The big integer has {digits} digits, exceeding the limit of "
        f"{sys.get_int_max_str_digits()} digits for decimal conversion."
    )


def _bound_to_big_int(value: int | str | None, label: str) -> int | None:
    if value is None:
        return None
    bound = to_big_int(value)
    if bound is None and _is_integer_shaped(value):
        raise ConfigurationError(f"The {label} is invalid. {_digit_limit_message(value)}")
    if bound is None:
        raise ConfigurationError(f"The {label} must be an integer or a decimal string. Received {value!r}.")
    return bound
