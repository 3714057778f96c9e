# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-like value abstraction used by file descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# ###############
# Public Interface
# ###############


@runtime_checkable
class FileLike(Protocol):
    """Structural type for uploaded or in-memory files.

    Hosts with their own file representation can either satisfy this protocol
    or inject their class through :class:`jsonvalidator.registry.Registry`.
    """

    name: str
    type: str
    size: int


@dataclass(frozen=True)
class FileInfo:
    """A minimal file description: file name, MIME type and size in bytes."""

    name: str
    type: str
    size: int

    @property
    def extension(self) -> str:
        """The text after the last dot of :attr:`name`, or ``""``."""
        return file_extension(self.name)


def file_extension(name: str) -> str:
    """Return the extension of *name* without the leading dot."""
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""
