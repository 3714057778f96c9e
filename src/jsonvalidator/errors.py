# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for schema validation and schema configuration.

Every error carries a human-readable message and the path (a tuple of field
names and array indices) of the value that caused it. The slash-joined form
of the path is exposed as :attr:`JsonValidatorError.address`.
"""

from __future__ import annotations

from enum import Enum
from typing import NoReturn

# ###############
# Public Interface
# ###############


class ErrorKind(Enum):
    """Categories of failures reported by the validator."""

    REQUIRED_MISSING = "required_missing"
    TYPE_MISMATCH = "type_mismatch"
    RANGE_VIOLATION = "range_violation"
    PATTERN_MISMATCH = "pattern_mismatch"
    ALLOW_LIST_VIOLATION = "allow_list_violation"
    CONFIGURATION = "configuration"


class JsonValidatorError(Exception):
    """Base class for all errors raised by jsonvalidator.

    Attributes:
        message: Human-readable description of the failure.
        path: Field names and array indices from the schema root to the value.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = tuple(path)

    @property
    def address(self) -> str:
        """The slash-delimited form of :attr:`path`."""
        return format_address(self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} (at {self.address})"


class ConfigurationError(JsonValidatorError):
    """Raised for malformed schemas, unresolved registry names and builder misuse."""

    kind = ErrorKind.CONFIGURATION


class ValidationFailure(JsonValidatorError):
    """Base class for failures caused by the validated data itself."""


class RequiredMissingError(ValidationFailure):
    """A required field is absent from the data."""

    kind = ErrorKind.REQUIRED_MISSING


class TypeMismatchError(ValidationFailure):
    """A value has the wrong primitive type or shape."""

    kind = ErrorKind.TYPE_MISMATCH


class RangeViolationError(ValidationFailure):
    """A numeric, date, size or length bound is exceeded."""

    kind = ErrorKind.RANGE_VIOLATION


class PatternMismatchError(ValidationFailure):
    """A string does not match the configured regular expression."""

    kind = ErrorKind.PATTERN_MISMATCH


class AllowListViolationError(ValidationFailure):
    """A value is not one of the enumerated allowed values."""

    kind = ErrorKind.ALLOW_LIST_VIOLATION


class CustomRuleError(TypeMismatchError):
    """A custom predicate rejected the value or raised while checking it."""


def format_address(path: tuple[str, ...]) -> str:
    """Join a path into its slash-delimited address."""
    return "/".join(path)


def fail(error_type: type[JsonValidatorError], message: str, path: tuple[str, ...], throw: bool) -> bool:
    """Report a failed check in the mode the caller asked for.

    Args:
        error_type: The taxonomy class to raise in throwing mode.
        message: Human-readable description of the failure.
        path: Path of the offending value.
        throw: Whether to raise instead of returning ``False``.

    Returns:
        Always ``False`` when *throw* is false.

    Raises:
        JsonValidatorError: An instance of *error_type* when *throw* is true.
    """
    if throw:
        _raise(error_type, message, path)
    return False


def describe_error(error: BaseException | str) -> dict[str, str]:
    """Split an error into its message and address for display or logging.

    Errors not raised by this package have no address; the literal
    ``"no address found"`` is returned in that case.
    """
    if isinstance(error, JsonValidatorError):
        return {"message": error.message, "address": error.address}
    message = error if isinstance(error, str) else str(error)
    return {"message": message, "address": "no address found"}


# ################
# Implementation
# ################


def _raise(error_type: type[JsonValidatorError], message: str, path: tuple[str, ...]) -> NoReturn:
    raise error_type(message, path)
