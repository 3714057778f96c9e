# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Capability set shared by every descriptor variant."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, ClassVar

from jsonvalidator.errors import ConfigurationError, RangeViolationError, fail, format_address

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class BaseDescriptor(ABC):
    """Validation rule for a single value.

    Subclasses set :attr:`kind` to their wire ``type`` discriminator and
    implement :meth:`_check`, which runs after the shared ``None`` handling.
    Variants whose nullability cannot be configured set
    :attr:`fixed_nullable`.
    """

    kind: ClassVar[str]
    fixed_nullable: ClassVar[bool | None] = None

    def __init__(self, nullable: bool = False) -> None:
        self.nullable = False if self.fixed_nullable is None else self.fixed_nullable
        if self.fixed_nullable is None:
            self.set_null(nullable)

    def set_null(self, value: bool = True) -> BaseDescriptor:
        """Allow or forbid ``None`` as a value."""
        if not isinstance(value, bool):
            raise ConfigurationError(f"The null flag must be a boolean. Received {type(value).__name__!r}.")
        if self.fixed_nullable is not None and value != self.fixed_nullable:
            raise ConfigurationError(f"The nullability of a {self.kind!r} descriptor cannot be changed.")
        self.nullable = value
        return self

    def validate(
        self,
        value: Any,
        path: tuple[str, ...] = (),
        throw_on_failure: bool = True,
        registry: Registry | None = None,
    ) -> bool:
        """Check *value* against this descriptor.

        Args:
            value: The decoded value to check.
            path: Field names and indices leading to *value*; used for error
                addresses.
            throw_on_failure: Raise a taxonomy error on the first failed
                check instead of returning ``False``.
            registry: Resolves registered class and custom names and supplies
                the accepted file class.

        Returns:
            ``True`` if the value is valid, ``False`` otherwise (only when
            *throw_on_failure* is false).

        Raises:
            ValidationFailure: If the value is invalid and
                *throw_on_failure* is true.
            ConfigurationError: If a registered name cannot be resolved and
                *throw_on_failure* is true.
        """
        path = tuple(path)
        logger.debug("Validating %s at %r", self.kind, format_address(path))
        if value is None and self.nullable:
            return True
        return self._check(value, path, throw_on_failure, registry)

    @abstractmethod
    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        """Variant-specific checks for a value that is not an accepted ``None``."""

    @abstractmethod
    def example(self) -> Any:
        """Return a representative value for this descriptor."""

    @abstractmethod
    def example_with_rules(self) -> Any:
        """Return a human-readable description of the accepted values."""

    def template(self) -> Any:
        """Return an empty placeholder mirroring the value's shape."""
        return ""

    def path(self, trace: Iterable[str] = ()) -> Any:
        """Return the address of this value, or a tree of addresses for containers."""
        return format_address(tuple(trace))

    def to_json(self) -> dict[str, Any]:
        """Return the wire representation of this descriptor."""
        from jsonvalidator.serialization import descriptor_to_json

        return descriptor_to_json(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nullable={self.nullable})"


# ################
# Implementation
# ################


def check_range(
    value: Any,
    minimum: Any,
    maximum: Any,
    path: tuple[str, ...],
    throw: bool,
    label: str,
    show: Callable[[Any], str] | None = None,
) -> bool:
    """Check the inclusive bounds ``minimum <= value <= maximum``."""
    show = show or show_value
    if minimum is not None and value < minimum:
        return fail(
            RangeViolationError, f"The {label} {show(value)} is less than the minimum {show(minimum)}.", path, throw
        )
    if maximum is not None and value > maximum:
        return fail(
            RangeViolationError, f"The {label} {show(value)} is greater than the maximum {show(maximum)}.", path, throw
        )
    return True


def check_bounds_order(minimum: Any, maximum: Any, label: str) -> None:
    """Reject a configuration whose minimum exceeds its maximum."""
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ConfigurationError(f"The minimum {label} {minimum} is greater than the maximum {label} {maximum}.")


def allow_list(values: Iterable[Any] | None, convert: Callable[[Any], Any], label: str) -> list[Any] | None:
    """Normalize an allow-list, converting every item with *convert*.

    *convert* returns ``None`` for items of the wrong type. ``None`` clears
    the allow-list.
    """
    if values is None:
        return None
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ConfigurationError(f"The allowed {label} values must be a list. Received {type(values).__name__!r}.")
    items = []
    for item in values:
        converted = convert(item)
        if converted is None:
            raise ConfigurationError(f"The allowed value {show_value(item)} is not a valid {label}.")
        items.append(converted)
    if not items:
        raise ConfigurationError(f"The allowed {label} values cannot be empty.")
    return items


def is_number(value: Any) -> bool:
    """Return True for ``int`` and ``float`` values, excluding ``bool``."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Describe the runtime type of *value* in JSON terms."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    return type(value).__name__


def show_value(value: Any) -> str:
    """Render *value* for an error message.

    Integers beyond the interpreter's decimal conversion limit are shown by
    their bit length, since ``repr`` refuses to render them.
    """
    try:
        return repr(value)
    except ValueError:
        if isinstance(value, int):
            return f"<integer of {value.bit_length()} bits>"
        raise


def rules_text(label: str, nullable: bool | None, *parts: str) -> str:
    """Assemble an ``example_with_rules`` sentence from optional rule fragments."""
    fragments = [part for part in parts if part]
    if nullable is not None:
        fragments.append("Can be null" if nullable else "Cannot be null")
    if not fragments:
        return f"{label}."
    return f"{label}, {', '.join(fragments)}."
