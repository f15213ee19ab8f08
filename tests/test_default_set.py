from __future__ import annotations

import io
import sys
from typing import Dict, List

import pytest

import tomlvar
from tomlvar import CONTINUE_ON_ERROR, EXIT_ON_ERROR, ConversionError, TomlVar, TomlVarSet


def declare_everything():
    tomlvar.boolean("test.bool", False)
    tomlvar.integer("test.int", 0)
    tomlvar.int64("test.int64", 0)
    tomlvar.uint("test.uint", 0)
    tomlvar.uint64("test.uint64", 0)
    tomlvar.string("test.string", "0")
    tomlvar.float64("test.float64", 0)
    tomlvar.duration("test.duration", 0)


def expected_text(tv: TomlVar, desired: str) -> bool:
    text = str(tv.value)
    if text == desired:
        return True
    if tv.path == "test.bool":
        return text == ("false" if desired == "0" else "true")
    if tv.path == "test.duration":
        return text == desired + "s"
    return False


def test_everything():
    declare_everything()

    seen: Dict[str, TomlVar] = {}

    def visitor(desired):
        def visit(tv: TomlVar) -> None:
            assert expected_text(tv, desired), f"bad value {tv.value} for {tv.path}"
            seen[tv.path] = tv

        return visit

    tomlvar.visit_all(visitor("0"))
    assert len(seen) == 8

    seen.clear()
    tomlvar.visit(visitor("0"))
    assert len(seen) == 0

    tomlvar.load(
        """
[test]
bool = true
int = 1
int64 = 1
uint = 1
uint64 = 1
string = "1"
float64 = 1.0
duration = "1s"
"""
    )
    for path in sorted(
        ["bool", "int", "int64", "uint", "uint64", "string", "float64", "duration"]
    ):
        tomlvar.set(f"test.{path}")

    tomlvar.visit(visitor("1"))
    assert len(seen) == 8
    assert tomlvar.n_var() == 8

    paths: List[str] = []
    tomlvar.visit(lambda tv: paths.append(tv.path))
    assert paths == sorted(paths)


def test_module_functions_forward_to_default_set():
    name = tomlvar.string("app.name", "demo")
    port = tomlvar.Ref(0)
    tomlvar.integer_var(port, "app.port", 8000)

    assert tomlvar.lookup("app.name") is tomlvar.default_set().lookup("app.name")
    assert not tomlvar.parsed()

    tomlvar.load_reader(io.StringIO('[app]\nname = "live"\nport = 9000\n'))
    tomlvar.parse()

    assert tomlvar.parsed()
    assert name.value == "live"
    assert port.value == 9000
    assert tomlvar.config().lookup("app.port") == 9000


def test_load_file_through_default_set(tmp_path):
    config_file = tmp_path / "settings.toml"
    config_file.write_text("[db]\nhost = \"db.local\"\n", encoding="utf-8")
    host = tomlvar.string("db.host", "localhost")

    tomlvar.load_file(config_file)
    tomlvar.parse()

    assert host.value == "db.local"


def test_reset_for_testing_gives_a_fresh_continue_on_error_set():
    tomlvar.boolean("flag")
    before = tomlvar.default_set()

    tomlvar.reset_for_testing()
    after = tomlvar.default_set()

    assert after is not before
    assert after.error_handling is CONTINUE_ON_ERROR
    assert tomlvar.lookup("flag") is None
    # redeclaring is fine on the new set
    tomlvar.boolean("flag")


def test_default_set_reports_errors_to_caller_after_reset():
    tomlvar.set_output(io.StringIO())
    tomlvar.uint("workers", 1)
    tomlvar.load("workers = -4\n")

    with pytest.raises(ConversionError):
        tomlvar.parse()


def test_fresh_default_set_exits_on_error(monkeypatch):
    import tomlvar.default as default

    fresh = TomlVarSet(sys.argv[0], EXIT_ON_ERROR)
    fresh.set_output(io.StringIO())
    monkeypatch.setattr(default, "_default_set", fresh)

    tomlvar.boolean("flag")
    tomlvar.load('flag = "nope"\n')

    with pytest.raises(SystemExit) as excinfo:
        tomlvar.parse()
    assert excinfo.value.code == 2


def test_var_with_custom_value():
    class Upper(tomlvar.Value):
        def __init__(self):
            self.text = ""

        def __str__(self):
            return self.text

        def set(self, path, document):
            raw = document.lookup(path) if document is not None else None
            if raw is not None:
                self.text = str(raw).upper()

    value = Upper()
    tomlvar.var(value, "greeting")
    tomlvar.load('greeting = "hi"\n')
    tomlvar.set("greeting")

    assert str(value) == "HI"
