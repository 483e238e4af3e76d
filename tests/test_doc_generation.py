"""End-to-end tests for Markdown API reference generation.

The tests write small Go packages into ``tmp_path``, run
:class:`~apidocs.generator.ApiDocGenerator` over them and inspect both the raw
Markdown and its HTML rendering. Converting through Python-Markdown and
parsing with BeautifulSoup checks that the tables and cross-links survive a
real Markdown renderer, not just string comparison.

Usage
-----
Run ``pytest tests/test_doc_generation.py -v``. Requires the ``test`` extra
(``markdown`` and ``beautifulsoup4``).
"""

from __future__ import annotations

import typing as typ

import markdown
import pytest
from bs4 import BeautifulSoup

from apidocs.config import default_config
from apidocs.generator import ApiDocGenerator, UnresolvedEmbedError
from apidocs.generator.doc_generator import expand_paths
from apidocs.models import InputConfigurationError

if typ.TYPE_CHECKING:
    from pathlib import Path

OUTER_GO = """package v1

// Outer is the root object.
type Outer struct {
\t// Name of the thing.
\tName string `json:"name"`
\tInner *Inner `json:",inline"`
\t// Child points at a type declared in another file.
\tChild *Child `json:"child,omitempty"`
}

// Inner carries shared fields.
type Inner struct {
\t// Count of items | approximately.
\tCount int
}

// Empty has no fields and gets no section.
type Empty struct{}
"""

CHILD_GO = """package v1

// Child is declared after its first use.
type Child struct {
\tVolume v1.Volume `json:"volume"`
}
"""


@pytest.fixture
def api_dir(tmp_path: Path) -> Path:
    """Write a two-file Go package and return its directory."""
    root = tmp_path / "api"
    root.mkdir()
    (root / "a_outer.go").write_text(OUTER_GO, encoding="utf-8")
    (root / "b_child.go").write_text(CHILD_GO, encoding="utf-8")
    (root / "outer_test.go").write_text("package v1\n\ntype Ignored struct {\n\tX int\n}\n")
    return root


@pytest.fixture
def rendered(api_dir: Path) -> str:
    """Render the sample package with the default configuration."""
    return ApiDocGenerator(default_config()).run([api_dir], owner="Example Operator")


@pytest.fixture
def soup(rendered: str) -> BeautifulSoup:
    """Return the rendered Markdown converted to parsed HTML."""
    html = markdown.markdown(rendered, extensions=["tables"])
    return BeautifulSoup(html, "html.parser")


def test_expand_paths_sorts_and_skips_test_files(api_dir: Path) -> None:
    assert [path.name for path in expand_paths([api_dir])] == [
        "a_outer.go",
        "b_child.go",
    ]


def test_expand_paths_rejects_missing_input(tmp_path: Path) -> None:
    with pytest.raises(InputConfigurationError, match="does not exist"):
        expand_paths([tmp_path / "missing.go"])


def test_document_header_and_toc(rendered: str) -> None:
    lines = rendered.splitlines()
    assert lines[0] == "# API Docs"
    assert "Example Operator" in lines[2]
    toc_start = lines.index("## Table of Contents")
    assert lines[toc_start + 1 : toc_start + 4] == [
        "* [Outer](#outer)",
        "* [Inner](#inner)",
        "* [Child](#child)",
    ]
    assert "Empty" not in rendered
    assert "Ignored" not in rendered


def test_outer_rows_splice_inline_fields(rendered: str) -> None:
    section = rendered.split("## Outer\n", 1)[1].split("[Back to TOC]", 1)[0]
    rows = [
        line
        for line in section.splitlines()
        if line.startswith("| ") and not line.startswith("| -")
    ]
    assert rows == [
        "| Field | Description | Scheme | Required |",
        "| name | Name of the thing. | string | true |",
        "| Count | Count of items \\| approximately. | int | false |",
        "| child | Child points at a type declared in another file. "
        "| *[Child](#child) | false |",
    ]
    assert "Outer is the root object." in section


def test_sections_end_with_back_link(rendered: str) -> None:
    assert rendered.count("[Back to TOC](#table-of-contents)") == 3
    assert rendered.endswith("[Back to TOC](#table-of-contents)\n")


def test_html_tables_and_links(soup: BeautifulSoup) -> None:
    tables = soup.find_all("table")
    assert len(tables) == 3
    headers = [th.get_text(strip=True) for th in tables[0].find_all("th")]
    assert headers == ["Field", "Description", "Scheme", "Required"]

    child_link = tables[0].find("a", string="Child")
    assert child_link is not None, "expected forward link to Child section"
    assert child_link.get("href") == "#child"

    volume_link = tables[2].find("a", string="v1.Volume")
    assert volume_link is not None, "expected external link for v1.Volume"
    assert str(volume_link.get("href")).startswith("https://kubernetes.io/")

    toc_links = [a.get("href") for a in soup.select("ul li a")]
    assert toc_links == ["#outer", "#inner", "#child"]


def test_custom_title(api_dir: Path) -> None:
    config = default_config()
    config.title = "Widget API"
    text = ApiDocGenerator(config).run([api_dir], owner="Widgets")
    assert text.startswith("# Widget API\n")


def test_write_creates_output(api_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "docs" / "api.md"
    written = ApiDocGenerator(default_config()).write(
        [api_dir], owner="Example Operator", output=output
    )
    assert written == output
    assert output.read_text(encoding="utf-8").startswith("# API Docs\n")


def test_unresolved_inline_leaves_no_output(tmp_path: Path) -> None:
    source = tmp_path / "broken.go"
    source.write_text(
        "package v1\n\ntype Outer struct {\n\tMystery `json:\",inline\"`\n}\n",
        encoding="utf-8",
    )
    output = tmp_path / "api.md"
    with pytest.raises(UnresolvedEmbedError, match="Mystery"):
        ApiDocGenerator(default_config()).write(
            [source], owner="Example Operator", output=output
        )
    assert not output.exists()


def test_unparseable_file_is_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    good = tmp_path / "good.go"
    good.write_text("package v1\n\ntype Good struct {\n\tX int\n}\n", encoding="utf-8")
    bad = tmp_path / "bad.go"
    bad.write_text("package v1\n\ntype Bad struct {\n", encoding="utf-8")
    text = ApiDocGenerator(default_config()).run([bad, good], owner="Example Operator")
    assert "## Good" in text
    assert "Bad" not in text
    assert any("bad.go" in record.getMessage() for record in caplog.records)


def test_blank_owner_is_rejected(api_dir: Path) -> None:
    with pytest.raises(InputConfigurationError, match="owner"):
        ApiDocGenerator(default_config()).run([api_dir], owner="  ")


def test_invalid_utf8_file_is_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    bad = tmp_path / "bad.go"
    bad.write_bytes(b"package v1\n\n// caf\xe9\ntype Bad struct {\n\tX int\n}\n")
    good = tmp_path / "good.go"
    good.write_text("package v1\n\ntype Good struct {\n\tX int\n}\n", encoding="utf-8")
    text = ApiDocGenerator(default_config()).run([bad, good], owner="Example Operator")
    assert "## Good" in text
    assert "Bad" not in text
    assert any("illegal UTF-8" in record.getMessage() for record in caplog.records)


def test_byte_order_mark_file_is_documented(tmp_path: Path) -> None:
    source = tmp_path / "bom.go"
    source.write_bytes(b"\xef\xbb\xbfpackage v1\n\ntype Bom struct {\n\tX int\n}\n")
    text = ApiDocGenerator(default_config()).run([source], owner="Example Operator")
    assert "* [Bom](#bom)" in text
    assert "## Bom" in text
