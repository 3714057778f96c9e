# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""File descriptor: checks type, size, extension and MIME type of file-like values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors.base import (
    BaseDescriptor,
    allow_list,
    check_bounds_order,
    check_range,
    is_number,
    rules_text,
    type_name,
)
from jsonvalidator.errors import AllowListViolationError, ConfigurationError, TypeMismatchError, fail
from jsonvalidator.files import FileLike, file_extension

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

# ###############
# Public Interface
# ###############


class FileDescriptor(BaseDescriptor):
    """A file-like value exposing ``name``, ``type`` (MIME) and ``size``.

    The accepted class comes from the registry passed to :meth:`validate`
    (``Registry.file_class``) and defaults to the
    :class:`~jsonvalidator.files.FileLike` protocol.

    Extensions are compared case-insensitively and without the leading dot.
    A MIME entry ending in ``*`` (e.g. ``image/*``) matches every type with
    that prefix.
    """

    kind = "file"

    def __init__(
        self,
        *,
        nullable: bool = False,
        extensions: Iterable[str] | None = None,
        mime_types: Iterable[str] | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> None:
        super().__init__(nullable)
        self.extensions: list[str] | None = None
        self.mime_types: list[str] | None = None
        self.min_size: int | None = None
        self.max_size: int | None = None
        self.set_extensions(extensions)
        self.set_mime_types(mime_types)
        self.set_min_size(min_size)
        self.set_max_size(max_size)

    def set_extensions(self, values: Iterable[str] | None) -> FileDescriptor:
        """Restrict the file name extension; ``None`` removes the restriction."""
        self.extensions = allow_list(
            values, lambda item: item.lstrip(".").lower() if isinstance(item, str) else None, "extension"
        )
        return self

    def set_mime_types(self, values: Iterable[str] | None) -> FileDescriptor:
        """Restrict the MIME type, ``*`` suffixes acting as wildcards; ``None`` removes it."""
        self.mime_types = allow_list(
            values, lambda item: item.strip().lower() if isinstance(item, str) else None, "MIME type"
        )
        return self

    def set_min_size(self, value: int | None) -> FileDescriptor:
        """Set the minimum size in bytes; ``None`` removes it."""
        _check_size(value, "minimum")
        check_bounds_order(value, self.max_size, "size")
        self.min_size = value
        return self

    def set_max_size(self, value: int | None) -> FileDescriptor:
        """Set the maximum size in bytes; ``None`` removes it."""
        _check_size(value, "maximum")
        check_bounds_order(self.min_size, value, "size")
        self.max_size = value
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        file_class = registry.file_class if registry is not None else FileLike
        if not isinstance(value, file_class):
            return fail(
                TypeMismatchError,
                f"Expected a file ({file_class.__name__}), received {type_name(value)}.",
                path,
                throw,
            )
        if self.min_size is not None or self.max_size is not None:
            size = getattr(value, "size", None)
            if not is_number(size):
                return fail(TypeMismatchError, "The file does not report a numeric size.", path, throw)
            if not check_range(size, self.min_size, self.max_size, path, throw, "file size"):
                return False
        if self.extensions is not None:
            extension = file_extension(str(getattr(value, "name", ""))).lower()
            if extension not in self.extensions:
                return fail(
                    AllowListViolationError,
                    f"The file has extension {extension!r}. Expected one of: {', '.join(self.extensions)}.",
                    path,
                    throw,
                )
        if self.mime_types is not None:
            mime_type = str(getattr(value, "type", "")).lower()
            if not self._mime_allowed(mime_type):
                return fail(
                    AllowListViolationError,
                    f"The file has MIME type {mime_type!r}. Expected one of: {', '.join(self.mime_types)}.",
                    path,
                    throw,
                )
        return True

    def _mime_allowed(self, mime_type: str) -> bool:
        for allowed in self.mime_types or ():
            if allowed.endswith("*"):
                if mime_type.startswith(allowed[:-1]):
                    return True
            elif mime_type == allowed:
                return True
        return False

    def example(self) -> str:
        return self.example_with_rules()

    def example_with_rules(self) -> str:
        return rules_text(
            "A file",
            self.nullable,
            f"Allowed extensions: {', '.join(self.extensions)}" if self.extensions else "",
            f"Allowed mime types: {', '.join(self.mime_types)}" if self.mime_types else "",
            f"Minimum size: {self.min_size} bytes" if self.min_size is not None else "",
            f"Maximum size: {self.max_size} bytes" if self.max_size is not None else "",
        )


# ################
# Implementation
# ################


def _check_size(value: Any, label: str) -> None:
    if value is None:
        return
    if not is_number(value) or value < 0:
        raise ConfigurationError(f"The {label} size must be a non-negative number. Received {value!r}.")
