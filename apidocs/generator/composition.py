"""Expand inlined structures into flat table rows.

An embed entry produced by the extractor references another structure by the
display text of its type. :class:`CompositionResolver` replaces each such
entry with the referenced structure's own rows, recursively, in declaration
order. References that cannot be explained by the extracted structures or the
well-known external catalog abort the run, since a table with a dangling
reference would be silently wrong.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from apidocs.comments import normalize_doc
from apidocs.links import unwrap_link
from apidocs.models import ApiDocsError, Field, FieldRow, StructureDoc

if typ.TYPE_CHECKING:
    from apidocs.config import WellKnownType
    from apidocs.extractor import DocumentSet
    from apidocs.links import LinkCatalog


class CompositionError(ApiDocsError):
    """Raised when inlined structures cannot be expanded."""


class UnresolvedEmbedError(CompositionError):
    """Raised when an inlined type is neither local nor well known."""

    def __init__(self, reference: str, *, parent: str | None = None) -> None:
        self.reference = reference
        self.parent = parent
        where = f" (inlined into {parent})" if parent else ""
        super().__init__(
            f"inlined type {reference!r}{where} is not defined in the sources "
            "nor in the well-known external catalog"
        )


class EmbedCycleError(CompositionError):
    """Raised when a structure inlines itself, directly or transitively."""

    def __init__(self, chain: cabc.Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"inline cycle detected: {' -> '.join(self.chain)}")


def build_well_known_catalog(
    well_known: cabc.Mapping[str, WellKnownType], catalog: LinkCatalog
) -> dict[str, StructureDoc]:
    """Return well-known field sets keyed by rendered link text and bare name.

    Each configured type becomes a :class:`StructureDoc` with a
    self-descriptor; field types are link-wrapped through ``catalog``.
    """
    result: dict[str, StructureDoc] = {}
    for name, entry in well_known.items():
        structure = StructureDoc.create(name, normalize_doc(entry.doc))
        for known in entry.fields:
            structure.append(
                Field(
                    name=known.name,
                    doc=normalize_doc(known.doc),
                    type_display=catalog.link(known.type),
                    mandatory=known.required,
                )
            )
        result[catalog.link(name)] = structure
        result.setdefault(name, structure)
    return result


class CompositionResolver:
    """Flatten a structure's fields, splicing inlined structures in place.

    Parameters
    ----------
    documents : DocumentSet
        Locally extracted structures keyed by name and link text.
    well_known : Mapping[str, StructureDoc]
        Fallback field sets for external types, see
        :func:`build_well_known_catalog`.
    skip_embeds : Iterable[str]
        Inlined type names dropped without rows (``metav1.TypeMeta``).
    """

    def __init__(
        self,
        documents: DocumentSet,
        well_known: cabc.Mapping[str, StructureDoc],
        skip_embeds: cabc.Iterable[str] = (),
    ) -> None:
        self.documents = documents
        self.well_known = well_known
        self.skip_embeds = frozenset(skip_embeds)

    def resolve(self, structure: StructureDoc) -> list[FieldRow]:
        """Return the flattened rows of ``structure`` (self-descriptor excluded).

        Raises
        ------
        UnresolvedEmbedError
            If an inlined reference is unknown.
        EmbedCycleError
            If expansion revisits a structure already being expanded.
        """
        return self._resolve(structure, (structure.name,))

    def _resolve(
        self, structure: StructureDoc, active: tuple[str, ...]
    ) -> list[FieldRow]:
        rows: list[FieldRow] = []
        for entry in structure.members:
            if entry.embed is None:
                rows.append(
                    FieldRow(
                        name=entry.name,
                        doc=entry.doc,
                        type_display=entry.type_display,
                        mandatory=entry.mandatory,
                    )
                )
                continue
            if self._is_skipped(entry.embed):
                continue
            target = self._lookup(entry.embed, parent=structure.name)
            if target.name in active:
                raise EmbedCycleError([*active, target.name])
            rows.extend(self._resolve(target, (*active, target.name)))
        return rows

    def _is_skipped(self, reference: str) -> bool:
        return reference in self.skip_embeds or unwrap_link(reference) in self.skip_embeds

    def _lookup(self, reference: str, *, parent: str) -> StructureDoc:
        bare = unwrap_link(reference)
        found = (
            self.documents.lookup(reference)
            or self.documents.lookup(bare)
            or self.well_known.get(reference)
            or self.well_known.get(bare)
        )
        if found is None:
            raise UnresolvedEmbedError(reference, parent=parent)
        return found


__all__ = [
    "CompositionError",
    "CompositionResolver",
    "EmbedCycleError",
    "UnresolvedEmbedError",
    "build_well_known_catalog",
]
