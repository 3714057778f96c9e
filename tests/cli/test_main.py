# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the jsonvalidator CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from jsonvalidator.cli.main import main
from jsonvalidator.descriptors import ArrayDescriptor, NodeDescriptor, NumberDescriptor, StringDescriptor
from jsonvalidator.schema import Schema
from jsonvalidator.serialization import read_schema, write_schema

# ###############
# Helpers
# ###############


def _write_schema(tmp_path: Path, name: str = "schema.json") -> Path:
    schema = (
        Schema()
        .require("name", StringDescriptor())
        .optional("age", NumberDescriptor(minimum=0))
        .optional("pets", ArrayDescriptor(NodeDescriptor(Schema().require("kind", StringDescriptor()))))
    )
    path = tmp_path / name
    write_schema(schema, path)
    return path


def _write_json(tmp_path: Path, name: str, data: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["jsonvalidator", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- check tests --------


def test_check_valid_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """check exits with code 0 for a valid document."""
    schema = _write_schema(tmp_path)
    data = _write_json(tmp_path, "data.json", {"name": "Ada", "pets": [{"kind": "cat"}]})
    assert _run(monkeypatch, "check", str(schema), str(data)) == 0
    assert "is valid against" in capsys.readouterr().out


def test_check_invalid_document_reports_address(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """check exits with code 1 and prints the failing address on stderr."""
    schema = _write_schema(tmp_path)
    data = _write_json(tmp_path, "data.json", {"name": "Ada", "pets": [{"kind": "cat"}, {}]})
    assert _run(monkeypatch, "check", str(schema), str(data)) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "(at pets/1/kind)" in err


def test_check_yaml_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """YAML schemas and documents are accepted."""
    schema = _write_schema(tmp_path, "schema.yaml")
    data = tmp_path / "data.yaml"
    data.write_text("name: Ada\nage: -1\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(schema), str(data)) == 1
    data.write_text("name: Ada\nage: 3\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(schema), str(data)) == 0


def test_check_missing_schema_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """check exits with code 1 when the schema file does not exist."""
    data = _write_json(tmp_path, "data.json", {})
    assert _run(monkeypatch, "check", str(tmp_path / "missing.json"), str(data)) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_check_rejects_empty_schema_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """An empty object is not a schema, so check fails instead of accepting every document."""
    schema = _write_json(tmp_path, "schema.json", {})
    data = _write_json(tmp_path, "data.json", {"name": "Ada"})
    assert _run(monkeypatch, "check", str(schema), str(data)) == 1
    assert "Invalid schema" in capsys.readouterr().err


def test_check_verbose_logs_traces(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """-v enables debug validation traces."""
    schema = _write_schema(tmp_path)
    data = _write_json(tmp_path, "data.json", {"name": "Ada"})
    caplog.set_level("DEBUG", logger="jsonvalidator")
    assert _run(monkeypatch, "-v", "check", str(schema), str(data)) == 0
    assert "Validating string at 'name'" in caplog.text


# -------- infer tests --------


def test_infer_prints_schema(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """infer prints the inferred schema as JSON."""
    sample = _write_json(tmp_path, "sample.json", {"when": "2024-01-01T00:00:00Z", "n": 5, "xs": [1, 2]})
    assert _run(monkeypatch, "infer", str(sample)) == 0
    document = json.loads(capsys.readouterr().out)
    assert [key["config"]["type"] for key in document["keys"]] == ["date", "number", "array"]
    assert all(key["required"] for key in document["keys"])


def test_infer_writes_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """infer -o writes a schema that read_schema can load."""
    sample = _write_json(tmp_path, "sample.json", {"name": "Ada"})
    output = tmp_path / "out" / "schema.yml"
    assert _run(monkeypatch, "infer", str(sample), "-o", str(output)) == 0
    assert read_schema(output).names == ["name"]


def test_infer_rejects_empty_sample(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """infer exits with code 1 when the sample has no shape."""
    sample = _write_json(tmp_path, "sample.json", {"a": []})
    assert _run(monkeypatch, "infer", str(sample)) == 1
    assert "(at a)" in capsys.readouterr().err


# -------- example and paths tests --------


def test_example(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    schema = _write_schema(tmp_path)
    assert _run(monkeypatch, "example", str(schema)) == 0
    assert json.loads(capsys.readouterr().out) == {
        "name": "a string value",
        "age": 0,
        "pets": [{"kind": "a string value"}],
    }


def test_example_template(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    schema = _write_schema(tmp_path)
    assert _run(monkeypatch, "example", str(schema), "--template") == 0
    assert json.loads(capsys.readouterr().out) == {"name": "", "age": "", "pets": [{"kind": ""}]}


def test_example_rules(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    schema = _write_schema(tmp_path)
    assert _run(monkeypatch, "example", str(schema), "--rules") == 0
    rules = json.loads(capsys.readouterr().out)
    assert rules["age"].startswith("A number")


def test_example_modes_are_exclusive(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    schema = _write_schema(tmp_path)
    assert _run(monkeypatch, "example", str(schema), "--rules", "--template") == 2


def test_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    schema = _write_schema(tmp_path)
    assert _run(monkeypatch, "paths", str(schema)) == 0
    assert json.loads(capsys.readouterr().out) == {"name": "name", "age": "age", "pets[]": {"kind": "pets/kind"}}
