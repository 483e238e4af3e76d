"""Behaviour tests for inlined structure expansion.

The scenarios cover the two outcomes of inlining: a known structure's fields
are spliced into the inlining table in declaration order, while an inlined
type that is neither declared locally nor in the well-known catalog aborts the
run before anything is written.

Usage:
    pytest tests/bdd/test_inline_embeds.py -v

Prerequisites:
    - The ``test`` extra (pytest-bdd).
    - The feature file at ``features/inline_embeds.feature``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from apidocs.config import default_config
from apidocs.generator import ApiDocGenerator, CompositionError

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "inline_embeds.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state(tmp_path: Path) -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"root": tmp_path}


def _write_source(state: dict[str, object], text: str) -> None:
    root: Path = state["root"]  # type: ignore[assignment]
    path = root / "types.go"
    path.write_text(text, encoding="utf-8")
    state["source"] = path


@given(parsers.parse('a Go file where "{outer}" inlines a pointer to "{inner}"'))
def given_inlining_file(
    scenario_state: dict[str, object], outer: str, inner: str
) -> None:
    """Write a file where ``outer`` inlines ``*inner``."""
    _write_source(
        scenario_state,
        f"package v1\n\n"
        f"type {outer} struct {{\n"
        f"\t// Name of the object.\n"
        f'\tName string `json:"name"`\n'
        f'\t{inner} *{inner} `json:",inline"`\n'
        f"}}\n\n"
        f"type {inner} struct {{\n"
        f"\t// Count of things.\n"
        f"\tCount int\n"
        f"}}\n",
    )


@given(parsers.parse('a Go file where "{outer}" inlines the unknown type "{name}"'))
def given_unknown_inline(
    scenario_state: dict[str, object], outer: str, name: str
) -> None:
    """Write a file inlining a type declared nowhere."""
    _write_source(
        scenario_state,
        f'package v1\n\ntype {outer} struct {{\n\t{name} `json:",inline"`\n}}\n',
    )


@when("I generate the API reference")
def when_generate(scenario_state: dict[str, object]) -> None:
    """Render the source and keep the Markdown text."""
    generator = ApiDocGenerator(default_config())
    scenario_state["text"] = generator.run(
        [scenario_state["source"]],  # type: ignore[list-item]
        owner="Example Operator",
    )


@when("I try to generate the API reference into a file")
def when_try_generate(scenario_state: dict[str, object]) -> None:
    """Attempt to write the document, recording the failure."""
    root: Path = scenario_state["root"]  # type: ignore[assignment]
    output = root / "api.md"
    scenario_state["output"] = output
    generator = ApiDocGenerator(default_config())
    with pytest.raises(CompositionError) as excinfo:
        generator.write(
            [scenario_state["source"]],  # type: ignore[list-item]
            owner="Example Operator",
            output=output,
        )
    scenario_state["error"] = excinfo.value


def _rows(state: dict[str, object], section: str) -> dict[str, list[str]]:
    text: str = state["text"]  # type: ignore[assignment]
    body = text.split(f"## {section}\n", 1)[1].split("[Back to TOC]", 1)[0]
    rows: dict[str, list[str]] = {}
    for line in body.splitlines():
        if not line.startswith("| ") or line.startswith(("| Field ", "| -")):
            continue
        cells = [cell.strip() for cell in line.strip("|").split(" | ")]
        rows[cells[0]] = cells
    return rows


@then(parsers.parse('the "{section}" table lists the fields "{names}"'))
def then_lists_fields(scenario_state: dict[str, object], section: str, names: str) -> None:
    """Verify the table rows appear in the given order and nothing else."""
    expected = [name.strip() for name in names.split(",")]
    assert list(_rows(scenario_state, section)) == expected


@then(
    parsers.parse(
        'the "{section}" row "{name}" has scheme "{scheme}" and required "{required}"'
    )
)
def then_row_matches(
    scenario_state: dict[str, object],
    section: str,
    name: str,
    scheme: str,
    required: str,
) -> None:
    """Verify the scheme and required cells of one row."""
    cells = _rows(scenario_state, section)[name]
    assert cells[2] == scheme
    assert cells[3] == required


@then(parsers.parse('generation fails naming "{name}"'))
def then_fails_naming(scenario_state: dict[str, object], name: str) -> None:
    """Verify the diagnostic names the missing type."""
    assert name in str(scenario_state["error"])


@then("no output file is written")
def then_no_output(scenario_state: dict[str, object]) -> None:
    """Verify the aborted run left nothing behind."""
    output: Path = scenario_state["output"]  # type: ignore[assignment]
    assert not output.exists()
