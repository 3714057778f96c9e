# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor taxonomy: the validation rule for one value shape."""

from jsonvalidator.descriptors.base import BaseDescriptor
from jsonvalidator.descriptors.scalars import (
    AnyDescriptor,
    BigIntDescriptor,
    BooleanDescriptor,
    NumberDescriptor,
    StringDescriptor,
)
from jsonvalidator.descriptors.temporal import DateDescriptor
from jsonvalidator.descriptors.file import FileDescriptor
from jsonvalidator.descriptors.containers import ArrayDescriptor, NodeDescriptor, SomeOfDescriptor
from jsonvalidator.descriptors.external import ClassDescriptor, CustomDescriptor

# The closed set of descriptor variants. Serialization dispatches over it.
Descriptor = (
    StringDescriptor
    | NumberDescriptor
    | BigIntDescriptor
    | BooleanDescriptor
    | DateDescriptor
    | FileDescriptor
    | AnyDescriptor
    | NodeDescriptor
    | ArrayDescriptor
    | SomeOfDescriptor
    | ClassDescriptor
    | CustomDescriptor
)

__all__ = [
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
]
