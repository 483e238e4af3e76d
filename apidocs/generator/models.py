"""Shared dataclasses used by the document rendering pipeline."""

from __future__ import annotations

import dataclasses as dc

from apidocs.models import FieldRow  # noqa: TC001 - used for runtime type metadata


@dc.dataclass(slots=True)
class DocSection:
    """Structured data passed to the section part of the template.

    Attributes
    ----------
    name : str
        Structure name used as the section heading.
    anchor : str
        In-document anchor slug (without ``#``).
    doc : str
        Normalized structure doc rendered below the heading.
    rows : list[FieldRow]
        Flattened table rows in declaration order.
    """

    name: str
    anchor: str
    doc: str
    rows: list[FieldRow]


@dc.dataclass(slots=True)
class ApiDocument:
    """Complete render model for one generated document.

    Attributes
    ----------
    title : str
        Document heading.
    owner : str
        Owner label quoted in the introduction.
    sections : list[DocSection]
        Sections in input order; the table of contents mirrors this list.
    """

    title: str
    owner: str
    sections: list[DocSection]

    @property
    def toc(self) -> list[dict[str, str]]:
        """Return table-of-contents entries with ``label`` and ``anchor``."""
        return [
            {"label": section.name, "anchor": section.anchor}
            for section in self.sections
        ]


__all__ = ["ApiDocument", "DocSection"]
