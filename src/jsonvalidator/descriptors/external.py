# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptors delegating to code supplied by the host application.

Both variants hold either a direct reference (a class or a predicate) or the
name under which the reference is registered in a
:class:`~jsonvalidator.registry.Registry`. Only name-based descriptors can be
serialized; names are resolved on every validation so that registration may
happen after the schema was built or loaded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jsonvalidator.descriptors.base import BaseDescriptor, rules_text, type_name
from jsonvalidator.errors import ConfigurationError, CustomRuleError, TypeMismatchError, fail, format_address

if TYPE_CHECKING:
    from jsonvalidator.registry import Predicate, Registry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ClassDescriptor(BaseDescriptor):
    """An instance of a given class, or of a class registered under a name."""

    kind = "class"

    def __init__(self, target: str | type, *, nullable: bool = False) -> None:
        super().__init__(nullable)
        self.class_name: str | None = None
        self.class_ref: type | None = None
        self.set_class(target)

    def set_class(self, target: str | type) -> ClassDescriptor:
        """Point the descriptor at a registered class name or a class."""
        if isinstance(target, str):
            if not target.strip():
                raise ConfigurationError("The class name must be a non-empty string.")
            self.class_name, self.class_ref = target, None
        elif isinstance(target, type):
            self.class_name, self.class_ref = None, target
        else:
            raise ConfigurationError(f"Expected a class or a registered class name. Received {target!r}.")
        return self

    @property
    def label(self) -> str:
        """The registered name, or the qualified name of the direct class."""
        if self.class_name is not None:
            return self.class_name
        assert self.class_ref is not None
        return self.class_ref.__qualname__

    def resolve(self, registry: Registry | None) -> type | None:
        """Return the class this descriptor checks against, or ``None`` if unregistered."""
        if self.class_ref is not None:
            return self.class_ref
        if registry is None:
            return None
        assert self.class_name is not None
        return registry.get_class(self.class_name)

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        cls = self.resolve(registry)
        if cls is None:
            return fail(ConfigurationError, f"The class {self.label!r} is not registered.", path, throw)
        if not isinstance(value, cls):
            return fail(
                TypeMismatchError,
                f"Expected an instance of {self.label!r}, received {type_name(value)}.",
                path,
                throw,
            )
        return True

    def example(self) -> Any:
        raise ConfigurationError(f"Cannot create an example for the class descriptor {self.label!r}.")

    def example_with_rules(self) -> str:
        return rules_text(f"An instance of {self.label}", self.nullable)


class CustomDescriptor(BaseDescriptor):
    """A value accepted by a host-supplied predicate.

    The predicate is called as ``predicate(value, path, throw_on_failure)``.
    A falsy return value rejects the value. Any exception raised by the
    predicate is caught here and reported as a rejection; in throwing mode
    the resulting :class:`~jsonvalidator.errors.CustomRuleError` is chained to
    the predicate's exception.

    Custom descriptors are never nullable: ``None`` is passed to the
    predicate like any other value.
    """

    kind = "custom"
    fixed_nullable = False

    def __init__(self, predicate: str | Predicate) -> None:
        super().__init__()
        self.predicate_name: str | None = None
        self.predicate: Predicate | None = None
        self.set_predicate(predicate)

    def set_predicate(self, predicate: str | Predicate) -> CustomDescriptor:
        """Point the descriptor at a registered predicate name or a callable."""
        if isinstance(predicate, str):
            if not predicate.strip():
                raise ConfigurationError("The custom predicate name must be a non-empty string.")
            self.predicate_name, self.predicate = predicate, None
        elif callable(predicate):
            self.predicate_name, self.predicate = None, predicate
        else:
            raise ConfigurationError(f"Expected a callable or a registered predicate name. Received {predicate!r}.")
        return self

    @property
    def label(self) -> str:
        """The registered name, or the name of the direct predicate."""
        if self.predicate_name is not None:
            return self.predicate_name
        return getattr(self.predicate, "__qualname__", repr(self.predicate))

    def resolve(self, registry: Registry | None) -> Predicate | None:
        """Return the predicate to call, or ``None`` if unregistered."""
        if self.predicate is not None:
            return self.predicate
        if registry is None:
            return None
        assert self.predicate_name is not None
        return registry.get_custom(self.predicate_name)

    def _check(self, value: Any, path: tuple[str, ...], throw: bool, registry: Registry | None) -> bool:
        predicate = self.resolve(registry)
        if predicate is None:
            return fail(ConfigurationError, f"The custom predicate {self.label!r} is not registered.", path, throw)
        try:
            accepted = bool(predicate(value, path, throw))
        except Exception as exc:
            logger.debug("Custom predicate %r raised at %r", self.label, format_address(path), exc_info=True)
            if throw:
                raise CustomRuleError(
                    f"The custom rule {self.label!r} failed: {type(exc).__name__}: {exc}", path
                ) from exc
            return False
        if not accepted:
            return fail(CustomRuleError, f"The value is not valid for the custom rule {self.label!r}.", path, throw)
        return True

    def example(self) -> str:
        return "Custom validation logic. You can define your own validation rules."

    def example_with_rules(self) -> str:
        return f"Custom validation logic ({self.label})."
