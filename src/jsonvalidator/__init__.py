# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarative validation of JSON-like data against portable schemas."""

# descriptors must be imported before schema: the container descriptors import Schema.
from jsonvalidator.descriptors import (
    AnyDescriptor,
    ArrayDescriptor,
    BaseDescriptor,
    BigIntDescriptor,
    BooleanDescriptor,
    ClassDescriptor,
    CustomDescriptor,
    DateDescriptor,
    Descriptor,
    FileDescriptor,
    NodeDescriptor,
    NumberDescriptor,
    SomeOfDescriptor,
    StringDescriptor,
)
from jsonvalidator.errors import (
    AllowListViolationError,
    ConfigurationError,
    CustomRuleError,
    ErrorKind,
    JsonValidatorError,
    PatternMismatchError,
    RangeViolationError,
    RequiredMissingError,
    TypeMismatchError,
    ValidationFailure,
    describe_error,
)
from jsonvalidator.files import FileInfo, FileLike
from jsonvalidator.inference import infer_schema
from jsonvalidator.registry import Predicate, Registry
from jsonvalidator.schema import MISSING, FieldEntry, Schema
from jsonvalidator.serialization import (
    SchemaFileError,
    descriptor_from_json,
    descriptor_to_json,
    dumps,
    loads,
    read_document,
    read_schema,
    schema_from_json,
    schema_to_json,
    write_schema,
)

__all__ = [
    # Schema
    "MISSING",
    "FieldEntry",
    "Schema",
    "infer_schema",
    # Descriptors
    "AnyDescriptor",
    "ArrayDescriptor",
    "BaseDescriptor",
    "BigIntDescriptor",
    "BooleanDescriptor",
    "ClassDescriptor",
    "CustomDescriptor",
    "DateDescriptor",
    "Descriptor",
    "FileDescriptor",
    "NodeDescriptor",
    "NumberDescriptor",
    "SomeOfDescriptor",
    "StringDescriptor",
    # Registry and files
    "FileInfo",
    "FileLike",
    "Predicate",
    "Registry",
    # Errors
    "AllowListViolationError",
    "ConfigurationError",
    "CustomRuleError",
    "ErrorKind",
    "JsonValidatorError",
    "PatternMismatchError",
    "RangeViolationError",
    "RequiredMissingError",
    "SchemaFileError",
    "TypeMismatchError",
    "ValidationFailure",
    "describe_error",
    # Serialization
    "descriptor_from_json",
    "descriptor_to_json",
    "dumps",
    "loads",
    "read_document",
    "read_schema",
    "schema_from_json",
    "schema_to_json",
    "write_schema",
]
