# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema container: an ordered collection of named, required or optional fields.

Only fields declared in the schema are validated. Keys present in the data
but unknown to the schema are ignored, so a schema describes the minimum
shape of an object rather than its exact shape.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors.base import BaseDescriptor, type_name
from jsonvalidator.errors import ConfigurationError, RequiredMissingError, TypeMismatchError, fail, format_address

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class _Missing:
    """Marker for a field that is absent from the data."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class FieldEntry:
    """Binds a field name and its requiredness to one descriptor.

    Absence is decided here, for every descriptor variant alike: a missing
    optional field is valid, a missing required field fails with
    :class:`~jsonvalidator.errors.RequiredMissingError`. A present ``None``
    is not absence; it is checked by the descriptor's nullable flag.
    """

    def __init__(self, name: str, required: bool, descriptor: BaseDescriptor) -> None:
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"A field name must be a non-empty string. Received {name!r}.")
        if not isinstance(required, bool):
            raise ConfigurationError(f"The required flag of field {name!r} must be a boolean.")
        if not isinstance(descriptor, BaseDescriptor):
            raise ConfigurationError(
                f"The field {name!r} needs a descriptor. Received {type(descriptor).__name__!r}."
            )
        self.name = name
        self.required = required
        self.descriptor = descriptor

    def validate(
        self,
        value: Any,
        path: tuple[str, ...] = (),
        throw_on_failure: bool = True,
        registry: Registry | None = None,
    ) -> bool:
        """Validate the value of this field, :data:`MISSING` when absent."""
        field_path = (*path, self.name)
        if value is MISSING:
            if self.required:
                return fail(RequiredMissingError, f"The field {self.name!r} is required.", field_path, throw_on_failure)
            return True
        return self.descriptor.validate(value, field_path, throw_on_failure, registry)

    def path(self, trace: Iterable[str] = ()) -> Any:
        """Return the address tree of this field's value."""
        return self.descriptor.path((*trace, self.name))

    def path_name(self) -> str:
        """The key used for this field in :meth:`Schema.path`; arrays get a ``[]`` suffix."""
        return f"{self.name}[]" if self.descriptor.kind == "array" else self.name

    def __repr__(self) -> str:
        return f"FieldEntry({self.name!r}, required={self.required}, {self.descriptor!r})"


class Schema:
    """An object shape: named fields, each with a descriptor.

    Fields keep their insertion order, which is also the order of validation,
    serialization and example output.

    Args:
        entries: Initial field entries.
        registry: Registry used to resolve class and custom names when
            :meth:`validate` is called without one.

    Example::

        schema = (
            Schema()
            .require("name", StringDescriptor())
            .optional("age", NumberDescriptor(minimum=0))
        )
        schema.validate({"name": "Ada", "age": 36})
    """

    def __init__(self, entries: Iterable[FieldEntry] = (), *, registry: Registry | None = None) -> None:
        self._entries: dict[str, FieldEntry] = {}
        self.registry = registry
        for entry in entries:
            self.add(entry)

    # -------- building --------

    def add(self, entry: FieldEntry) -> Schema:
        """Append a field entry.

        Raises:
            ConfigurationError: If *entry* is not a FieldEntry or its name is
                already used in this schema.
        """
        if not isinstance(entry, FieldEntry):
            raise ConfigurationError(f"Expected a FieldEntry. Received {type(entry).__name__!r}.")
        if entry.name in self._entries:
            raise ConfigurationError(f"The field {entry.name!r} already exists.")
        self._entries[entry.name] = entry
        return self

    def require(self, name: str, descriptor: BaseDescriptor) -> Schema:
        """Append a required field."""
        return self.add(FieldEntry(name, True, descriptor))

    def optional(self, name: str, descriptor: BaseDescriptor) -> Schema:
        """Append an optional field."""
        return self.add(FieldEntry(name, False, descriptor))

    def remove(self, name: str) -> Schema:
        """Remove the field called *name*; unknown names are ignored."""
        self._entries.pop(name, None)
        return self

    # -------- lookup --------

    def get(self, name: str) -> FieldEntry | None:
        """Return the entry called *name*, or ``None``."""
        return self._entries.get(name)

    @property
    def names(self) -> list[str]:
        """Field names in insertion order."""
        return list(self._entries)

    @property
    def entries(self) -> list[FieldEntry]:
        """Field entries in insertion order."""
        return list(self._entries.values())

    def __iter__(self) -> Iterator[FieldEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __repr__(self) -> str:
        return f"Schema({self.entries!r})"

    # -------- validation --------

    def validate(
        self,
        data: Any,
        throw_on_failure: bool = True,
        path: tuple[str, ...] = (),
        registry: Registry | None = None,
    ) -> bool:
        """Validate *data* against every field of the schema.

        In throwing mode the first failing field raises and no further fields
        are checked. Otherwise every field is checked and the result is
        ``True`` only if all of them pass.

        Args:
            data: The decoded object to validate.
            throw_on_failure: Raise on the first failure instead of returning
                ``False``.
            path: Address of *data* within an enclosing value.
            registry: Overrides the registry given at construction.

        Returns:
            Whether *data* is valid.

        Raises:
            ValidationFailure: On invalid data, in throwing mode.
            ConfigurationError: On unresolvable class or custom names, in
                throwing mode.
        """
        path = tuple(path)
        registry = registry if registry is not None else self.registry
        if not isinstance(data, Mapping):
            return fail(TypeMismatchError, f"Expected an object, received {type_name(data)}.", path, throw_on_failure)
        logger.debug("Validating %d field(s) at %r", len(self._entries), format_address(path))
        results = [
            entry.validate(data.get(entry.name, MISSING), path, throw_on_failure, registry)
            for entry in self._entries.values()
        ]
        return all(results)

    def is_valid(self, data: Any, registry: Registry | None = None) -> bool:
        """Shorthand for ``validate(data, throw_on_failure=False)``."""
        return self.validate(data, False, (), registry)

    # -------- generated views --------

    def example(self) -> dict[str, Any]:
        """Return an example object built from each field's example value."""
        return {entry.name: entry.descriptor.example() for entry in self._entries.values()}

    def example_with_rules(self) -> dict[str, Any]:
        """Return an object describing the rules of each field."""
        return {entry.name: entry.descriptor.example_with_rules() for entry in self._entries.values()}

    def template(self) -> dict[str, Any]:
        """Return an object of empty placeholders mirroring the schema shape."""
        return {entry.name: entry.descriptor.template() for entry in self._entries.values()}

    def path(self, trace: Iterable[str] = ()) -> dict[str, Any]:
        """Return an object mirroring the schema shape whose leaves are value addresses.

        Array fields are keyed as ``name[]``.
        """
        trace = tuple(trace)
        return {entry.path_name(): entry.path(trace) for entry in self._entries.values()}

    # -------- serialization and inference --------

    def to_json(self) -> dict[str, Any]:
        """Return the wire representation ``{"type": "object", "keys": [...]}``.

        Raises:
            ConfigurationError: If a class or custom descriptor at any depth
                holds a direct reference instead of a registered name.
        """
        from jsonvalidator.serialization import schema_to_json

        return schema_to_json(self)

    @classmethod
    def from_json(cls, data: Any, registry: Registry | None = None) -> Schema:
        """Rebuild a schema from its wire representation.

        Raises:
            ConfigurationError: If *data* is not a valid schema document.
        """
        from jsonvalidator.serialization import schema_from_json

        return schema_from_json(data, registry=registry)

    @classmethod
    def infer_from_sample(cls, sample: Any, registry: Registry | None = None) -> Schema:
        """Build a schema with only required fields from the shape of *sample*."""
        from jsonvalidator.inference import infer_schema

        return infer_schema(sample, registry=registry)
