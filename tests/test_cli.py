"""Tests for the ``apidocs`` command-line entry point."""

from __future__ import annotations

import typing as typ

import pytest

from apidocs.cli import generate, main
from apidocs.models import InputConfigurationError

if typ.TYPE_CHECKING:
    from pathlib import Path

SOURCE = """package v1

// Widget is a sample resource.
type Widget struct {
\t// Size of the widget.
\tSize int `json:"size"`
}
"""


@pytest.fixture(autouse=True)
def _clear_input_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``INPUT_*`` variables from the caller's environment out of tests."""
    for name in ("OWNER", "PATHS", "CONFIG", "OUTPUT", "TITLE", "VERBOSE"):
        monkeypatch.delenv(f"INPUT_{name}", raising=False)


@pytest.fixture
def widget_file(tmp_path: Path) -> Path:
    path = tmp_path / "widget.go"
    path.write_text(SOURCE, encoding="utf-8")
    return path


def test_generate_prints_document(
    widget_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    generate(owner="Widget Operator", paths=str(widget_file))
    out = capsys.readouterr().out
    assert out.startswith("# API Docs\n")
    assert "| size | Size of the widget. | int | true |" in out


def test_generate_writes_output_and_reports_path(
    widget_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "out" / "api.md"
    generate(
        owner="Widget Operator",
        paths=f"{widget_file}, ",
        output=output,
        title="Widgets",
    )
    assert capsys.readouterr().out.strip() == f"wrote {output}"
    assert output.read_text(encoding="utf-8").startswith("# Widgets\n")


def test_generate_uses_config_file(
    widget_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "apidocs.yaml"
    config.write_text("title: From Config\n", encoding="utf-8")
    generate(owner="Widget Operator", paths=str(widget_file), config=config)
    assert capsys.readouterr().out.startswith("# From Config\n")


@pytest.mark.parametrize(
    ("owner", "paths", "message"),
    [
        (None, "widget.go", "owner"),
        ("  ", "widget.go", "owner"),
        ("Widget Operator", None, "input path"),
        ("Widget Operator", " , ", "input path"),
    ],
)
def test_generate_requires_owner_and_paths(
    owner: str | None, paths: str | None, message: str
) -> None:
    with pytest.raises(InputConfigurationError, match=message):
        generate(owner=owner, paths=paths)


def test_main_exits_with_status_one_on_missing_owner(
    widget_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--paths", str(widget_file)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "owner" in captured.err


def test_main_reports_unresolved_inline(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = tmp_path / "broken.go"
    broken.write_text(
        "package v1\n\ntype Outer struct {\n\tMystery `json:\",inline\"`\n}\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as excinfo:
        main(["--owner", "Widget Operator", "--paths", str(broken)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Mystery" in captured.err


def test_main_rejects_missing_path(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--owner", "Widget Operator", "--paths", str(tmp_path / "nope.go")])
    assert excinfo.value.code == 1
    assert "does not exist" in capsys.readouterr().err
