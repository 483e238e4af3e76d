"""Render the extracted API documentation as a Markdown reference document."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from apidocs._constants import DOCUMENT_TEMPLATE, TOC_ANCHOR
from apidocs.generator.models import ApiDocument, DocSection
from apidocs.links import section_anchor

if typ.TYPE_CHECKING:
    from apidocs.generator.composition import CompositionResolver
    from apidocs.models import StructureDoc


def build_document(
    structures: cabc.Iterable[StructureDoc],
    resolver: CompositionResolver,
    *,
    owner: str,
    title: str,
) -> ApiDocument:
    """Resolve every renderable structure into an :class:`ApiDocument`.

    Structures without declared fields are left out of both the table of
    contents and the body. All sections are resolved before anything is
    rendered, so a composition error leaves no partial output behind.

    Parameters
    ----------
    structures : Iterable[StructureDoc]
        Extracted structures in input order.
    resolver : CompositionResolver
        Expands inlined structures into rows.
    owner : str
        Owner label quoted in the introduction.
    title : str
        Document heading.

    Returns
    -------
    ApiDocument
        Render model with one section per non-empty structure.
    """
    sections = [
        DocSection(
            name=structure.name,
            anchor=section_anchor(structure.name),
            doc=structure.doc,
            rows=resolver.resolve(structure),
        )
        for structure in structures
        if structure.has_fields
    ]
    return ApiDocument(title=title, owner=owner, sections=sections)


class MarkdownRenderer:
    """Render :class:`ApiDocument` models through the Markdown template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer and its Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing the document template; defaults to the
            package ``templates`` directory.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,  # noqa: S701 - Markdown output, cells escaped explicitly
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.template = self.env.get_template(DOCUMENT_TEMPLATE)

    def render(self, document: ApiDocument) -> str:
        """Return the Markdown text for ``document``, newline terminated."""
        text = self.template.render(document=document, toc_anchor=TOC_ANCHOR)
        if not text.endswith("\n"):
            text += "\n"
        return text


__all__ = ["MarkdownRenderer", "build_document"]
