# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build a schema from the shape of a sample object."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors import (
    AnyDescriptor,
    ArrayDescriptor,
    BaseDescriptor,
    BigIntDescriptor,
    BooleanDescriptor,
    DateDescriptor,
    FileDescriptor,
    NodeDescriptor,
    NumberDescriptor,
    StringDescriptor,
)
from jsonvalidator.descriptors.temporal import parse_instant
from jsonvalidator.errors import ConfigurationError, format_address
from jsonvalidator.files import FileLike
from jsonvalidator.schema import MISSING, Schema

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Largest integer a JSON number (IEEE-754 double) represents exactly.
MAX_SAFE_INTEGER = 2**53 - 1


def infer_schema(sample: Any, *, registry: Registry | None = None) -> Schema:
    """Infer a schema whose fields are all required from *sample*.

    Array descriptors take the shape of the first element only.

    The strings ``"true"`` and ``"false"`` are inferred as a boolean field.
    The resulting :class:`~jsonvalidator.descriptors.BooleanDescriptor`
    accepts only real booleans, so the schema rejects the sample it was
    inferred from when such a string is present; convert those values to
    booleans before validating.

    Args:
        sample: A non-empty mapping, typically a decoded JSON object.
        registry: Supplies the file class recognised as a file value; the
            :class:`~jsonvalidator.files.FileLike` protocol when omitted.

    Returns:
        The inferred schema, attached to *registry*.

    Raises:
        ConfigurationError: If *sample*, or any value inside it, has no JSON
            shape to infer from: an empty mapping or list, a callable, the
            :data:`~jsonvalidator.schema.MISSING` marker, or another object.
    """
    file_class = registry.file_class if registry is not None else FileLike
    schema = _infer_node(sample, (), file_class)
    schema.registry = registry
    return schema


# ################
# Implementation
# ################

_DIGITS = re.compile(r"[+-]?[0-9]+")


def _infer_node(sample: Any, path: tuple[str, ...], file_class: type) -> Schema:
    if not isinstance(sample, Mapping):
        raise ConfigurationError(f"Cannot infer a schema from {type(sample).__name__!r}; expected an object.", path)
    if not sample:
        raise ConfigurationError("Cannot infer a schema from an empty object.", path)
    schema = Schema()
    for key, value in sample.items():
        name = str(key)
        schema.require(name, _infer_value(value, (*path, name), file_class))
    logger.debug("Inferred %d field(s) at %r", len(schema), format_address(path))
    return schema


def _infer_value(value: Any, path: tuple[str, ...], file_class: type) -> BaseDescriptor:
    if value is MISSING:
        raise ConfigurationError("Cannot infer a descriptor for a missing value.", path)
    if value is None:
        return AnyDescriptor()
    if isinstance(value, bool):
        return BooleanDescriptor()
    if isinstance(value, str):
        return _infer_string(value)
    if isinstance(value, int):
        return BigIntDescriptor() if abs(value) > MAX_SAFE_INTEGER else NumberDescriptor()
    if isinstance(value, float):
        return NumberDescriptor()
    if isinstance(value, date):
        return DateDescriptor()
    if isinstance(value, (list, tuple)):
        if not value:
            raise ConfigurationError("Cannot infer the element type of an empty array.", path)
        return ArrayDescriptor(_infer_value(value[0], (*path, "0"), file_class))
    if isinstance(value, Mapping):
        return NodeDescriptor(_infer_node(value, path, file_class))
    if isinstance(value, file_class):
        return FileDescriptor()
    if callable(value):
        raise ConfigurationError("Cannot infer a descriptor for a function.", path)
    raise ConfigurationError(f"Cannot infer a descriptor for a value of type {type(value).__name__!r}.", path)


def _infer_string(value: str) -> BaseDescriptor:
    if value in ("true", "false"):
        return BooleanDescriptor()
    if not _DIGITS.fullmatch(value.strip()) and parse_instant(value) is not None:
        return DateDescriptor()
    return StringDescriptor()
