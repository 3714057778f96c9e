# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Name tables resolving class-instance and custom descriptors.

Class and custom descriptors cannot carry executable code through a JSON
round-trip, so they carry a registered name instead. A :class:`Registry` maps
those names back to classes and predicates at validation time. Create one
registry when the application starts, register everything it needs, and pass
it to :meth:`Schema.from_json <jsonvalidator.schema.Schema.from_json>` or to
``validate(..., registry=...)``.

Lookups and registrations are guarded by a lock, so threads may register and
resolve *different* names concurrently. Mutating a name while another thread
validates against that same name is the caller's responsibility.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from jsonvalidator.errors import ConfigurationError
from jsonvalidator.files import FileLike

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Predicate = Callable[[Any, tuple[str, ...], bool], Any]
"""A custom validation rule: ``predicate(value, path, throw_on_failure)``.

A truthy return value accepts the value. A falsy return value, or any
exception, rejects it.
"""


class Registry:
    """Process-level tables of named classes and custom predicates.

    Args:
        file_class: The type file descriptors accept. Defaults to the
            :class:`~jsonvalidator.files.FileLike` protocol, which matches any
            object exposing ``name``, ``type`` and ``size``.
    """

    def __init__(self, file_class: type = FileLike) -> None:
        self._lock = threading.RLock()
        self._classes: dict[str, type] = {}
        self._customs: dict[str, Predicate] = {}
        self.file_class = file_class

    @property
    def file_class(self) -> type:
        """The type file descriptors validate against."""
        return self._file_class

    @file_class.setter
    def file_class(self, value: type) -> None:
        if not isinstance(value, type):
            raise ConfigurationError(f"The file class must be a class. Received {type(value).__name__!r}.")
        self._file_class = value

    def register_class(self, name: str, cls: type) -> None:
        """Register *cls* under *name*.

        Raises:
            ConfigurationError: If *name* is empty, *cls* is not a class, or a
                different class is already registered under *name*.
        """
        _check_name(name, "class")
        if not isinstance(cls, type):
            raise ConfigurationError(f"The class reference for {name!r} must be a class.")
        _register(self._lock, self._classes, name, cls, "class")

    def remove_class(self, name: str) -> None:
        """Unregister the class stored under *name*; unknown names are ignored."""
        _check_name(name, "class")
        with self._lock:
            if self._classes.pop(name, None) is not None:
                logger.debug("Removed class %r", name)

    def get_class(self, name: str) -> type | None:
        """Return the class registered under *name*, or ``None``."""
        _check_name(name, "class")
        with self._lock:
            return self._classes.get(name)

    def register_custom(self, name: str, predicate: Predicate) -> None:
        """Register a custom validation predicate under *name*.

        Raises:
            ConfigurationError: If *name* is empty, *predicate* is not
                callable, or a different predicate is already registered.
        """
        _check_name(name, "custom")
        if not callable(predicate):
            raise ConfigurationError(f"The custom predicate for {name!r} must be callable.")
        _register(self._lock, self._customs, name, predicate, "custom")

    def remove_custom(self, name: str) -> None:
        """Unregister the predicate stored under *name*; unknown names are ignored."""
        _check_name(name, "custom")
        with self._lock:
            if self._customs.pop(name, None) is not None:
                logger.debug("Removed custom predicate %r", name)

    def get_custom(self, name: str) -> Predicate | None:
        """Return the predicate registered under *name*, or ``None``."""
        _check_name(name, "custom")
        with self._lock:
            return self._customs.get(name)


# ################
# Implementation
# ################

_T = TypeVar("_T")


def _check_name(name: object, what: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"The {what} name must be a non-empty string.")


def _register(lock: threading.RLock, table: dict[str, _T], name: str, value: _T, what: str) -> None:
    with lock:
        existing = table.get(name)
        if existing is value:
            return
        if existing is not None:
            raise ConfigurationError(f"The {what} name {name!r} is already registered.")
        table[name] = value
    logger.debug("Registered %s %r", what, name)
