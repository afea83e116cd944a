"""CLI tests for intersect and classify subcommands."""

import json
from pathlib import Path
import sys

import pytest

from commonprops import cli
from commonprops.kernel.descriptors import STRING, BooleanLiteral, NumberLiteral, StringLiteral


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["commonprops"] + args)
    return cli.main()


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("COMMONPROPS_POLICY", "COMMONPROPS_LOG_LEVEL", "COMMONPROPS_FAIL_ON_DROP"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def animal_files(tmp_path, schema_doc):
    cat = tmp_path / "cat.json"
    dog = tmp_path / "dog.json"
    _write_json(cat, schema_doc({"name": STRING, "type": StringLiteral(value="cat"), "active": BooleanLiteral(value=True)}, "Cat"))
    _write_json(dog, schema_doc({"name": STRING, "type": StringLiteral(value="dog"), "active": BooleanLiteral(value=False)}, "Dog"))
    return cat, dog


def test_intersect_prints_report(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    _run_cli(["intersect", str(cat), str(dog)], monkeypatch)
    report = json.loads(capsys.readouterr().out)
    assert report["policy"] == "upcast"
    assert report["kept"] == ["active", "name", "type"]
    assert report["fields"]["active"] == {"kind": "boolean"}


def test_intersect_strict_policy_flag(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    _run_cli(["intersect", "--policy", "strict", str(cat), str(dog)], monkeypatch)
    report = json.loads(capsys.readouterr().out)
    assert report["kept"] == ["name"]
    assert report["dropped"] == {"active": "INCOMPATIBLE", "type": "INCOMPATIBLE"}


def test_intersect_policy_from_env(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    monkeypatch.setenv("COMMONPROPS_POLICY", "strict")
    _run_cli(["intersect", str(cat), str(dog)], monkeypatch)
    assert json.loads(capsys.readouterr().out)["policy"] == "strict"


def test_intersect_output_dir(monkeypatch, capsys, animal_files, tmp_path):
    cat, dog = animal_files
    out_dir = tmp_path / "reports"
    _run_cli(["intersect", str(cat), str(dog), "--output-dir", str(out_dir)], monkeypatch)
    out = capsys.readouterr().out
    assert "[OK] Intersection complete" in out
    assert "Kept: 3" in out
    report = json.loads((out_dir / "intersection.json").read_text(encoding="utf-8"))
    assert report["schema_count"] == 2


def test_intersect_quiet(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    _run_cli(["intersect", "--quiet", str(cat), str(dog)], monkeypatch)
    assert capsys.readouterr().out == ""


def test_intersect_fail_on_drop(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["intersect", "--policy", "strict", "--fail-on-drop", str(cat), str(dog)], monkeypatch)
    assert excinfo.value.code == 2


def test_intersect_fail_on_drop_passes_when_nothing_dropped(monkeypatch, capsys, animal_files):
    cat, _ = animal_files
    _run_cli(["intersect", "--fail-on-drop", str(cat), str(cat)], monkeypatch)
    assert json.loads(capsys.readouterr().out)["dropped"] == {}


def test_intersect_default_document(monkeypatch, capsys, tmp_path, schema_doc):
    default = tmp_path / "default.json"
    _write_json(default, schema_doc({"n": NumberLiteral(value=1)}))
    _run_cli(["intersect", "--default", str(default)], monkeypatch)
    report = json.loads(capsys.readouterr().out)
    assert report["schema_count"] == 0
    assert report["kept"] == ["n"]


def test_intersect_missing_file(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["intersect", str(tmp_path / "missing.json")], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


@pytest.mark.parametrize("kind", ["non_utf8", "directory"])
def test_intersect_unreadable_file(monkeypatch, capsys, tmp_path, kind):
    if kind == "non_utf8":
        target = tmp_path / "bad.json"
        target.write_bytes(b"\xff\xfe{}")
    else:
        target = tmp_path
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["intersect", str(target)], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_invalid_env_policy(monkeypatch, capsys, animal_files):
    cat, dog = animal_files
    monkeypatch.setenv("COMMONPROPS_POLICY", "loose")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["intersect", str(cat), str(dog)], monkeypatch)
    assert excinfo.value.code == 1


def test_classify(monkeypatch, capsys):
    _run_cli(["classify", '{"kind": "string_literal", "value": "cat"}'], monkeypatch)
    out = capsys.readouterr().out
    assert 'Descriptor: "cat"' in out
    assert "Upcastable: yes" in out
    assert "Base kind: string" in out


def test_classify_opaque(monkeypatch, capsys):
    _run_cli(["classify", '{"kind": "opaque", "signature": "Date"}'], monkeypatch)
    out = capsys.readouterr().out
    assert "Upcastable: no" in out
    assert "Base kind: -" in out


def test_classify_invalid(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["classify", '{"kind": "date"}'], monkeypatch)
    assert excinfo.value.code == 1


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
