# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for schema inference from sample objects."""

from datetime import date, datetime

import pytest

from jsonvalidator.descriptors import (
    AnyDescriptor,
    ArrayDescriptor,
    BigIntDescriptor,
    BooleanDescriptor,
    DateDescriptor,
    FileDescriptor,
    NodeDescriptor,
    NumberDescriptor,
    StringDescriptor,
)
from jsonvalidator.errors import ConfigurationError
from jsonvalidator.files import FileInfo
from jsonvalidator.inference import MAX_SAFE_INTEGER, infer_schema
from jsonvalidator.registry import Registry
from jsonvalidator.schema import MISSING, Schema

# ###############
# Helpers
# ###############


class _Upload:
    def __init__(self, filename: str) -> None:
        self.filename = filename


def _kinds(schema: Schema) -> dict:
    return {entry.name: type(entry.descriptor) for entry in schema}


# ###############
# Public Interface
# ###############


def test_infer_dates_numbers_and_arrays():
    schema = Schema.infer_from_sample({"a": "2024-01-01T00:00:00Z", "b": 5, "c": [1, 2]})
    assert _kinds(schema) == {"a": DateDescriptor, "b": NumberDescriptor, "c": ArrayDescriptor}
    assert isinstance(schema.get("c").descriptor.element, NumberDescriptor)
    assert all(entry.required for entry in schema)


def test_infer_scalars():
    schema = infer_schema(
        {
            "none": None,
            "flag": True,
            "flag_text": "false",
            "text": "hello",
            "digits": "2024",
            "ratio": 0.5,
            "safe": MAX_SAFE_INTEGER,
            "huge": MAX_SAFE_INTEGER + 1,
            "negative_huge": -(2**60),
            "day": date(2024, 1, 1),
            "moment": datetime(2024, 1, 1, 12),
        }
    )
    assert _kinds(schema) == {
        "none": AnyDescriptor,
        "flag": BooleanDescriptor,
        "flag_text": BooleanDescriptor,
        "text": StringDescriptor,
        "digits": StringDescriptor,
        "ratio": NumberDescriptor,
        "safe": NumberDescriptor,
        "huge": BigIntDescriptor,
        "negative_huge": BigIntDescriptor,
        "day": DateDescriptor,
        "moment": DateDescriptor,
    }


def test_infer_nested_objects_and_arrays_of_objects():
    schema = infer_schema({"user": {"name": "Ada", "roles": [{"id": 1}]}})
    user = schema.get("user").descriptor
    assert isinstance(user, NodeDescriptor)
    roles = user.schema.get("roles").descriptor
    assert isinstance(roles, ArrayDescriptor)
    assert isinstance(roles.element, NodeDescriptor)
    assert roles.element.schema.names == ["id"]


def test_array_takes_the_first_element_shape():
    schema = infer_schema({"mixed": [1, "two"]})
    assert isinstance(schema.get("mixed").descriptor.element, NumberDescriptor)


def test_inferred_schema_accepts_its_sample():
    sample = {"id": 7, "name": "x", "when": "2024-02-02", "tags": ["a"], "meta": {"ok": True}, "extra": None}
    assert infer_schema(sample).validate(sample) is True


def test_boolean_text_is_inferred_as_a_real_boolean():
    """A "true"/"false" string yields a boolean field that rejects the string itself."""
    schema = infer_schema({"flag": "false"})
    assert schema.validate({"flag": False}) is True
    assert schema.validate({"flag": "false"}, throw_on_failure=False) is False


def test_infer_files():
    schema = infer_schema({"doc": FileInfo("a.pdf", "application/pdf", 3)})
    assert isinstance(schema.get("doc").descriptor, FileDescriptor)


def test_infer_files_with_injected_class():
    registry = Registry(file_class=_Upload)
    schema = infer_schema({"doc": _Upload("a.pdf")}, registry=registry)
    assert isinstance(schema.get("doc").descriptor, FileDescriptor)
    assert schema.registry is registry
    with pytest.raises(ConfigurationError):
        infer_schema({"doc": _Upload("a.pdf")})


@pytest.mark.parametrize(
    "sample",
    [
        {},
        {"a": []},
        {"a": {}},
        {"a": {"b": []}},
        {"a": lambda: None},
        {"a": MISSING},
        {"a": object()},
        {"a": {1, 2}},
        [{"a": 1}],
        "text",
    ],
)
def test_infer_rejects_samples_without_shape(sample):
    with pytest.raises(ConfigurationError):
        infer_schema(sample)


def test_infer_error_carries_address():
    with pytest.raises(ConfigurationError) as exc_info:
        infer_schema({"a": {"b": []}})
    assert exc_info.value.address == "a/b"
