# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Wire format of descriptors and schemas, and schema document I/O.

A schema is stored as ``{"type": "object", "keys": [...]}`` where every key
entry is ``{"name", "required", "config"}`` and ``config`` is a descriptor
object tagged by its ``type``. Incoming documents are validated with pydantic
models before any descriptor is built, so a malformed document never yields a
half-configured schema.

Class and custom descriptors are stored by their registered names. Rebuilding
them needs a :class:`~jsonvalidator.registry.Registry` at validation time.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError

from jsonvalidator.descriptors import (
    AnyDescriptor,
    ArrayDescriptor,
    BaseDescriptor,
    BigIntDescriptor,
    BooleanDescriptor,
    ClassDescriptor,
    CustomDescriptor,
    DateDescriptor,
    FileDescriptor,
    NodeDescriptor,
    NumberDescriptor,
    SomeOfDescriptor,
    StringDescriptor,
)
from jsonvalidator.descriptors.temporal import format_instant
from jsonvalidator.errors import ConfigurationError
from jsonvalidator.schema import FieldEntry, Schema

if TYPE_CHECKING:
    from jsonvalidator.registry import Registry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

YAML_SUFFIXES = (".yaml", ".yml")

Number = StrictInt | StrictFloat
DateBound = StrictStr | StrictInt | StrictFloat | datetime | date


class SchemaFileError(ConfigurationError):
    """Raised when a schema or data document cannot be read, parsed or written."""


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class StringConfig(_WireModel):
    kind: Literal["string"] = Field(default="string", alias="type")
    null: StrictBool = False
    regex: StrictStr | None = None
    enum: list[StrictStr] | None = None


class NumberConfig(_WireModel):
    kind: Literal["number"] = Field(default="number", alias="type")
    null: StrictBool = False
    minimum: Number | None = Field(default=None, alias="min")
    maximum: Number | None = Field(default=None, alias="max")
    enum: list[Number] | None = None


class BigIntConfig(_WireModel):
    """Big integers travel as decimal strings; plain JSON integers are accepted on input."""

    kind: Literal["bigint"] = Field(default="bigint", alias="type")
    null: StrictBool = False
    minimum: StrictStr | StrictInt | None = Field(default=None, alias="min")
    maximum: StrictStr | StrictInt | None = Field(default=None, alias="max")
    enum: list[StrictStr | StrictInt] | None = None


class BooleanConfig(_WireModel):
    kind: Literal["boolean"] = Field(default="boolean", alias="type")
    null: StrictBool = False


class DateConfig(_WireModel):
    """Dates travel as ISO-8601 strings in UTC with a ``Z`` suffix."""

    kind: Literal["date"] = Field(default="date", alias="type")
    null: StrictBool = False
    minimum: DateBound | None = Field(default=None, alias="min")
    maximum: DateBound | None = Field(default=None, alias="max")
    enum: list[DateBound] | None = None


class FileConfig(_WireModel):
    kind: Literal["file"] = Field(default="file", alias="type")
    null: StrictBool = False
    extensions: list[StrictStr] | None = None
    mime_types: list[StrictStr] | None = Field(default=None, alias="mimeTypes")
    min_size: Number | None = Field(default=None, alias="minSize")
    max_size: Number | None = Field(default=None, alias="maxSize")


class AnyConfig(_WireModel):
    kind: Literal["any"] = Field(default="any", alias="type")
    null: StrictBool = True


class NodeConfig(_WireModel):
    kind: Literal["node"] = Field(default="node", alias="type")
    null: StrictBool = False
    nested: SchemaConfig = Field(alias="json")


class ArrayConfig(_WireModel):
    kind: Literal["array"] = Field(default="array", alias="type")
    null: StrictBool = False
    element: DescriptorConfig = Field(alias="config")
    minimum: StrictInt | None = Field(default=None, alias="min")
    maximum: StrictInt | None = Field(default=None, alias="max")


class SomeConfig(_WireModel):
    kind: Literal["some"] = Field(default="some", alias="type")
    null: StrictBool = False
    alternatives: list[DescriptorConfig] = Field(alias="config")


class ClassConfig(_WireModel):
    kind: Literal["class"] = Field(default="class", alias="type")
    null: StrictBool = False
    class_name: StrictStr = Field(alias="class")


class CustomConfig(_WireModel):
    kind: Literal["custom"] = Field(default="custom", alias="type")
    null: StrictBool = False
    custom_name: StrictStr = Field(alias="custom")


DescriptorConfig = Annotated[
    StringConfig
    | NumberConfig
    | BigIntConfig
    | BooleanConfig
    | DateConfig
    | FileConfig
    | AnyConfig
    | NodeConfig
    | ArrayConfig
    | SomeConfig
    | ClassConfig
    | CustomConfig,
    Field(discriminator="kind"),
]


class KeyConfig(_WireModel):
    """One field entry of a schema document."""

    name: StrictStr
    required: StrictBool = True
    config: DescriptorConfig


class SchemaConfig(_WireModel):
    """Top-level schema document."""

    kind: Literal["object"] = Field(alias="type")
    keys: list[KeyConfig]


NodeConfig.model_rebuild()
ArrayConfig.model_rebuild()
SomeConfig.model_rebuild()
KeyConfig.model_rebuild()
SchemaConfig.model_rebuild()


def descriptor_to_json(descriptor: BaseDescriptor) -> dict[str, Any]:
    """Return the wire representation of *descriptor*.

    Raises:
        ConfigurationError: If a class or custom descriptor at any depth
            holds a direct reference instead of a registered name.
    """
    return _dump(_descriptor_to_config(descriptor))


def descriptor_from_json(data: Any, registry: Registry | None = None) -> BaseDescriptor:
    """Build a descriptor from its wire representation.

    Raises:
        ConfigurationError: If *data* is not a valid descriptor object.
    """
    config = _validate_wire(_DescriptorEnvelope, {"config": data}, "descriptor").config
    return _descriptor_from_config(config, registry)


def schema_to_json(schema: Schema) -> dict[str, Any]:
    """Return the wire representation ``{"type": "object", "keys": [...]}`` of *schema*."""
    return _dump(_schema_to_config(schema))


def schema_from_json(data: Any, registry: Registry | None = None) -> Schema:
    """Build a schema from its wire representation.

    Args:
        data: A decoded schema document.
        registry: Attached to the rebuilt schema for resolving class and
            custom names during validation.

    Raises:
        ConfigurationError: If *data* is not a valid schema document or
            describes an inconsistent descriptor (e.g. minimum above maximum).
    """
    config = _validate_wire(SchemaConfig, data, "schema")
    return _schema_from_config(config, registry)


def dumps(schema: Schema, indent: int | None = 2) -> str:
    """Serialize *schema* to JSON text."""
    return json.dumps(schema_to_json(schema), indent=indent)


def loads(text: str, registry: Registry | None = None) -> Schema:
    """Build a schema from JSON text.

    Raises:
        ConfigurationError: If *text* is not JSON or not a valid schema document.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in schema text: {exc}") from exc
    return schema_from_json(data, registry=registry)


def read_document(path: Path) -> Any:
    """Read a JSON or YAML document; the format is chosen by the file suffix.

    Raises:
        SchemaFileError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaFileError(f"Cannot read '{path}': {exc}") from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SchemaFileError(f"Invalid YAML in '{path}': {exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaFileError(f"Invalid JSON in '{path}': {exc}") from exc


def read_schema(path: Path, registry: Registry | None = None) -> Schema:
    """Load a schema document from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        SchemaFileError: If the file cannot be read, parsed, or does not
            describe a valid schema.
    """
    data = read_document(path)
    logger.debug("Loading schema from %s", path)
    try:
        return schema_from_json(data, registry=registry)
    except ConfigurationError as exc:
        raise SchemaFileError(f"Invalid schema '{path}': {exc}") from exc


def write_schema(schema: Schema, path: Path) -> None:
    """Write *schema* to *path* as YAML or JSON, creating parent directories as needed.

    Raises:
        ConfigurationError: If the schema holds direct class or predicate
            references.
        SchemaFileError: If the file cannot be written.
    """
    path = Path(path)
    data = schema_to_json(schema)
    if path.suffix.lower() in YAML_SUFFIXES:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    else:
        text = json.dumps(data, indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SchemaFileError(f"Cannot write schema '{path}': {exc}") from exc


# ################
# Implementation
# ################

# Flags with an inline form; a pattern compiled with them is stored as "(?aims)<source>".
_INLINE_FLAGS = ((re.ASCII, "a"), (re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"), (re.VERBOSE, "x"))


class _DescriptorEnvelope(_WireModel):
    config: DescriptorConfig


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


def _validate_wire(model: type[BaseModel], data: Any, what: str) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid {what} document: {exc}") from exc


_LEADING_FLAGS = re.compile(r"\(\?([aiLmsux]+)\)")


def _regex_source(regex: re.Pattern[str]) -> str:
    leading = _LEADING_FLAGS.match(regex.pattern)
    present = leading.group(1) if leading else ""
    letters = "".join(letter for flag, letter in _INLINE_FLAGS if regex.flags & flag and letter not in present)
    return f"(?{letters}){regex.pattern}" if letters else regex.pattern


def _schema_to_config(schema: Schema) -> SchemaConfig:
    return SchemaConfig(
        kind="object",
        keys=[
            KeyConfig(name=entry.name, required=entry.required, config=_descriptor_to_config(entry.descriptor))
            for entry in schema
        ]
    )


def _schema_from_config(config: SchemaConfig, registry: Registry | None) -> Schema:
    schema = Schema(registry=registry)
    for key in config.keys:
        schema.add(FieldEntry(key.name, key.required, _descriptor_from_config(key.config, registry)))
    return schema


def _descriptor_to_config(descriptor: BaseDescriptor) -> Any:
    """Encode a descriptor as its wire model."""
    null = descriptor.nullable
    if isinstance(descriptor, StringDescriptor):
        regex = _regex_source(descriptor.regex) if descriptor.regex is not None else None
        return StringConfig(null=null, regex=regex, enum=descriptor.allowed)
    if isinstance(descriptor, NumberDescriptor):
        return NumberConfig(null=null, minimum=descriptor.minimum, maximum=descriptor.maximum, enum=descriptor.allowed)
    if isinstance(descriptor, BigIntDescriptor):
        return BigIntConfig(
            null=null,
            minimum=_decimal(descriptor.minimum),
            maximum=_decimal(descriptor.maximum),
            enum=[str(item) for item in descriptor.allowed] if descriptor.allowed is not None else None,
        )
    if isinstance(descriptor, BooleanDescriptor):
        return BooleanConfig(null=null)
    if isinstance(descriptor, DateDescriptor):
        return DateConfig(
            null=null,
            minimum=format_instant(descriptor.minimum) if descriptor.minimum is not None else None,
            maximum=format_instant(descriptor.maximum) if descriptor.maximum is not None else None,
            enum=[format_instant(item) for item in descriptor.allowed] if descriptor.allowed is not None else None,
        )
    if isinstance(descriptor, FileDescriptor):
        return FileConfig(
            null=null,
            extensions=descriptor.extensions,
            mime_types=descriptor.mime_types,
            min_size=descriptor.min_size,
            max_size=descriptor.max_size,
        )
    if isinstance(descriptor, AnyDescriptor):
        return AnyConfig(null=null)
    if isinstance(descriptor, NodeDescriptor):
        return NodeConfig(null=null, nested=_schema_to_config(descriptor.schema))
    if isinstance(descriptor, ArrayDescriptor):
        return ArrayConfig(
            null=null,
            element=_descriptor_to_config(descriptor.element),
            minimum=descriptor.min_length,
            maximum=descriptor.max_length,
        )
    if isinstance(descriptor, SomeOfDescriptor):
        return SomeConfig(null=null, alternatives=[_descriptor_to_config(item) for item in descriptor.alternatives])
    if isinstance(descriptor, ClassDescriptor):
        if descriptor.class_name is None:
            raise ConfigurationError(
                f"Cannot serialize a direct class reference ({descriptor.label}); register the class by name."
            )
        return ClassConfig(null=null, class_name=descriptor.class_name)
    if isinstance(descriptor, CustomDescriptor):
        if descriptor.predicate_name is None:
            raise ConfigurationError(
                f"Cannot serialize a direct predicate reference ({descriptor.label}); register the predicate by name."
            )
        return CustomConfig(null=null, custom_name=descriptor.predicate_name)
    raise ConfigurationError(f"Cannot serialize descriptor of type {type(descriptor).__name__!r}.")


def _descriptor_from_config(config: Any, registry: Registry | None) -> BaseDescriptor:
    """Build a descriptor from its validated wire model."""
    descriptor: BaseDescriptor
    if isinstance(config, StringConfig):
        descriptor = StringDescriptor(config.regex, allowed=config.enum)
    elif isinstance(config, NumberConfig):
        descriptor = NumberDescriptor(minimum=config.minimum, maximum=config.maximum, allowed=config.enum)
    elif isinstance(config, BigIntConfig):
        descriptor = BigIntDescriptor(minimum=config.minimum, maximum=config.maximum, allowed=config.enum)
    elif isinstance(config, BooleanConfig):
        descriptor = BooleanDescriptor()
    elif isinstance(config, DateConfig):
        descriptor = DateDescriptor(minimum=config.minimum, maximum=config.maximum, allowed=config.enum)
    elif isinstance(config, FileConfig):
        descriptor = FileDescriptor(
            extensions=config.extensions,
            mime_types=config.mime_types,
            min_size=config.min_size,
            max_size=config.max_size,
        )
    elif isinstance(config, AnyConfig):
        descriptor = AnyDescriptor()
    elif isinstance(config, NodeConfig):
        descriptor = NodeDescriptor(_schema_from_config(config.nested, registry))
    elif isinstance(config, ArrayConfig):
        descriptor = ArrayDescriptor(
            _descriptor_from_config(config.element, registry),
            min_length=config.minimum,
            max_length=config.maximum,
        )
    elif isinstance(config, SomeConfig):
        descriptor = SomeOfDescriptor([_descriptor_from_config(item, registry) for item in config.alternatives])
    elif isinstance(config, ClassConfig):
        descriptor = ClassDescriptor(config.class_name)
    else:
        assert isinstance(config, CustomConfig)
        descriptor = CustomDescriptor(config.custom_name)
    if config.null != descriptor.nullable:
        descriptor.set_null(config.null)
    return descriptor


def _decimal(value: int | None) -> str | None:
    return str(value) if value is not None else None
