# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptors that own other descriptors: nested objects, arrays and unions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors.base import BaseDescriptor, check_bounds_order, check_range, type_name
from jsonvalidator.errors import ConfigurationError, TypeMismatchError, fail
from jsonvalidator.schema import Schema

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

# ###############
# Public Interface
# ###############


class NodeDescriptor(BaseDescriptor):
    """A nested object validated by its own :class:`~jsonvalidator.schema.Schema`."""

    kind = "node"

    def __init__(self, schema: Schema, *, nullable: bool = False) -> None:
        super().__init__(nullable)
        self.set_schema(schema)

    def set_schema(self, schema: Schema) -> NodeDescriptor:
        """Replace the nested schema."""
        if not isinstance(schema, Schema):
            raise ConfigurationError(f"A node descriptor needs a Schema. Received {type(schema).__name__!r}.")
        self.schema = schema
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not isinstance(value, Mapping):
            return fail(TypeMismatchError, f"Expected an object, received {type_name(value)}.", path, throw)
        return self.schema.validate(value, throw, path, registry)

    def example(self) -> dict[str, Any]:
        return self.schema.example()

    def example_with_rules(self) -> dict[str, Any]:
        return self.schema.example_with_rules()

    def template(self) -> dict[str, Any]:
        return self.schema.template()

    def path(self, trace: Iterable[str] = ()) -> dict[str, Any]:
        return self.schema.path(trace)


class ArrayDescriptor(BaseDescriptor):
    """A list (or tuple) whose elements all match one element descriptor.

    The array itself is never nullable; ``None`` elements are accepted only
    if the element descriptor is nullable. Length bounds are inclusive.
    """

    kind = "array"
    fixed_nullable = False

    def __init__(
        self,
        element: BaseDescriptor,
        *,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        super().__init__()
        self.min_length: int | None = None
        self.max_length: int | None = None
        self.set_element(element)
        self.set_min(min_length)
        self.set_max(max_length)

    def set_element(self, element: BaseDescriptor) -> ArrayDescriptor:
        """Replace the element descriptor."""
        if not isinstance(element, BaseDescriptor):
            raise ConfigurationError(
                f"The array element must be a descriptor. Received {type(element).__name__!r}."
            )
        self.element = element
        return self

    def set_min(self, value: int | None) -> ArrayDescriptor:
        """Set the minimum number of elements; ``None`` removes it."""
        _check_length(value, "minimum")
        check_bounds_order(value, self.max_length, "length")
        self.min_length = value
        return self

    def set_max(self, value: int | None) -> ArrayDescriptor:
        """Set the maximum number of elements; ``None`` removes it."""
        _check_length(value, "maximum")
        check_bounds_order(self.min_length, value, "length")
        self.max_length = value
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        if not isinstance(value, (list, tuple)):
            return fail(TypeMismatchError, f"Expected an array, received {type_name(value)}.", path, throw)
        if not check_range(len(value), self.min_length, self.max_length, path, throw, "array length"):
            return False
        results = [
            self.element.validate(item, (*path, str(index)), throw, registry) for index, item in enumerate(value)
        ]
        return all(results)

    def example(self) -> list[Any]:
        count = max(self.min_length or 0, 1)
        if self.max_length is not None:
            count = min(count, self.max_length)
        return [self.element.example() for _ in range(count)]

    def example_with_rules(self) -> list[Any]:
        return [self.element.example_with_rules()]

    def template(self) -> list[Any]:
        return [self.element.template()]

    def path(self, trace: Iterable[str] = ()) -> Any:
        return self.element.path(trace)

    def __repr__(self) -> str:
        return f"ArrayDescriptor({self.element!r}, min_length={self.min_length}, max_length={self.max_length})"


class SomeOfDescriptor(BaseDescriptor):
    """A union: the value must match at least one of the alternatives.

    Alternatives are always evaluated in non-throwing mode; a single
    aggregate error is raised at the union's own path when none matches.
    """

    kind = "some"
    fixed_nullable = False

    def __init__(self, alternatives: Iterable[BaseDescriptor]) -> None:
        super().__init__()
        self.alternatives: list[BaseDescriptor] = []
        self.set_alternatives(alternatives)

    def set_alternatives(self, alternatives: Iterable[BaseDescriptor]) -> SomeOfDescriptor:
        """Replace the list of alternatives."""
        if isinstance(alternatives, BaseDescriptor) or not isinstance(alternatives, Iterable):
            raise ConfigurationError("The alternatives of a some-of descriptor must be a list of descriptors.")
        items = list(alternatives)
        if not items:
            raise ConfigurationError("A some-of descriptor needs at least one alternative.")
        for item in items:
            if not isinstance(item, BaseDescriptor):
                raise ConfigurationError(
                    f"Every some-of alternative must be a descriptor. Received {type(item).__name__!r}."
                )
        self.alternatives = items
        return self

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        results = [alternative.validate(value, path, False, registry) for alternative in self.alternatives]
        if any(results):
            return True
        kinds = ", ".join(alternative.kind for alternative in self.alternatives)
        return fail(TypeMismatchError, f"The value does not match any of the alternatives: {kinds}.", path, throw)

    def example(self) -> Any:
        return self.alternatives[0].example()

    def example_with_rules(self) -> list[Any]:
        return [alternative.example_with_rules() for alternative in self.alternatives]

    def template(self) -> list[Any]:
        return [alternative.template() for alternative in self.alternatives]

    def path(self, trace: Iterable[str] = ()) -> list[Any]:
        trace = tuple(trace)
        return [alternative.path(trace) for alternative in self.alternatives]

    def __repr__(self) -> str:
        return f"SomeOfDescriptor({self.alternatives!r})"


# ################
# Implementation
# ################


def _check_length(value: Any, label: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"The {label} length must be a non-negative integer. Received {value!r}.")

