r"""Extract ordered field documentation from parsed Go sources.

Extraction runs in two phases over the same parsed files. A structure's
section anchor has to be known before other structures can link to it, so
:func:`discover_anchors` first collects every ``name -> #anchor`` pair and
:func:`extract_documents` then extracts again with the complete anchor table,
letting fields link to structures declared later in the input.

Example
-------
>>> from apidocs.go_parser import parse_source
>>> from apidocs.config import default_config
>>> source = parse_source(
...     "package v1\ntype A struct {\n\tB B `json:\"b\"`\n}\ntype B struct {\n\tC int\n}\n"
... )
>>> config = default_config()
>>> anchors = discover_anchors([source], config)
>>> anchors
{'A': '#a', 'B': '#b'}
>>> documents = extract_documents([source], anchors, config)
>>> documents.structures[0].members[0].type_display
'[B](#b)'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from apidocs.comments import normalize_doc
from apidocs.go_parser import StructType
from apidocs.links import LinkCatalog, wrap_in_link
from apidocs.models import Field, StructureDoc
from apidocs.tags import TAG_KEY, interpret_tag, lookup_tag
from apidocs.type_exprs import TypeExpressionResolver

if typ.TYPE_CHECKING:
    from apidocs.config import GeneratorConfig
    from apidocs.go_parser import FieldDecl, SourceFile, TypeSpec

logger = logging.getLogger(__name__)


def _is_exported(name: str) -> bool:
    return name[:1].isupper()


@dc.dataclass(slots=True)
class Extractor:
    """Build :class:`StructureDoc` lists from parsed source files.

    Parameters
    ----------
    resolver : TypeExpressionResolver
        Renders field types, consulting the link catalog.
    exported_only : bool, optional
        Skip unexported structs and unexported named fields (default).
    """

    resolver: TypeExpressionResolver
    exported_only: bool = True

    def extract(self, source: SourceFile) -> list[StructureDoc]:
        """Return one StructureDoc per struct type declared in ``source``."""
        structures: list[StructureDoc] = []
        for spec in source.types:
            if not isinstance(spec.type, StructType) or spec.alias:
                logger.debug("%s: skipping non-struct type %s", source.path, spec.name)
                continue
            if self.exported_only and not _is_exported(spec.name):
                continue
            structures.append(self._extract_struct(spec, spec.type))
        return structures

    def _extract_struct(self, spec: TypeSpec, struct: StructType) -> StructureDoc:
        structure = StructureDoc.create(spec.name, normalize_doc(spec.doc))
        for decl in struct.fields:
            for entry in self._field_entries(decl):
                structure.append(entry)
        return structure

    def _field_entries(self, decl: FieldDecl) -> list[Field]:
        type_display = self.resolver.display(decl.type)
        names: tuple[str | None, ...] = decl.names or (None,)
        info = interpret_tag(decl.tag, names[0], decl.type)
        if info.inline:
            return [Field.embedded(type_display.removeprefix("*"))]
        if info.excluded:
            return []

        tag_value = lookup_tag(decl.tag, TAG_KEY) if decl.tag is not None else None
        explicit_name = bool(tag_value and tag_value.split(",", 1)[0])
        if explicit_name or decl.embedded:
            declared = [info.serialized_name]
        else:
            declared = list(decl.names)
        if self.exported_only:
            declared = [
                name
                for name, ident in zip(declared, names, strict=False)
                if ident is None or _is_exported(ident)
            ]

        doc = normalize_doc(decl.doc)
        return [
            Field(
                name=name,
                doc=doc,
                type_display=type_display,
                mandatory=info.mandatory,
            )
            for name in declared
        ]


@dc.dataclass(slots=True)
class DocumentSet:
    """Result of the final extraction phase.

    Attributes
    ----------
    structures : list[StructureDoc]
        Every extracted structure in input order.
    by_name : dict[str, StructureDoc]
        Structures keyed by their declared name.
    by_link : dict[str, StructureDoc]
        Structures keyed by their rendered link text (``[Name](#name)``).
    catalog : LinkCatalog
        The fully populated link catalog used during extraction.
    """

    structures: list[StructureDoc]
    by_name: dict[str, StructureDoc] = dc.field(default_factory=dict)
    by_link: dict[str, StructureDoc] = dc.field(default_factory=dict)
    catalog: LinkCatalog = dc.field(default_factory=LinkCatalog)

    def lookup(self, reference: str) -> StructureDoc | None:
        """Return the structure referenced by link text or bare name."""
        return self.by_link.get(reference) or self.by_name.get(reference)


def _extract_all(
    sources: cabc.Iterable[SourceFile], extractor: Extractor
) -> list[StructureDoc]:
    structures: list[StructureDoc] = []
    for source in sources:
        structures.extend(extractor.extract(source))
    return structures


def discover_anchors(
    sources: cabc.Sequence[SourceFile], config: GeneratorConfig
) -> dict[str, str]:
    """Run the discovery phase and return ``structure name -> #anchor``.

    Field-level output of this phase is discarded; only the anchors of the
    discovered structures matter.
    """
    catalog = LinkCatalog(external_links=config.external_links)
    extractor = Extractor(
        TypeExpressionResolver(catalog, warn_unsupported=False),
        exported_only=config.exported_only,
    )
    anchors: dict[str, str] = {}
    for structure in _extract_all(sources, extractor):
        anchors.setdefault(structure.name, catalog.register(structure.name))
    logger.debug("discovered %d structure anchors", len(anchors))
    return anchors


def extract_documents(
    sources: cabc.Sequence[SourceFile],
    anchors: cabc.Mapping[str, str],
    config: GeneratorConfig,
) -> DocumentSet:
    """Run the final extraction phase with a fully populated anchor table.

    Parameters
    ----------
    sources : Sequence[SourceFile]
        The same parsed files handed to :func:`discover_anchors`.
    anchors : Mapping[str, str]
        Output of the discovery phase.
    config : GeneratorConfig
        Supplies the external link table and the exported-only switch.

    Returns
    -------
    DocumentSet
        Structures in input order plus the name and link-text catalogs used by
        composition resolution.
    """
    catalog = LinkCatalog(
        external_links=config.external_links, local_anchors=dict(anchors)
    )
    extractor = Extractor(
        TypeExpressionResolver(catalog), exported_only=config.exported_only
    )
    documents = DocumentSet(structures=_extract_all(sources, extractor), catalog=catalog)
    for structure in documents.structures:
        target = catalog.register(structure.name)
        documents.by_name[structure.name] = structure
        documents.by_link[wrap_in_link(structure.name, target)] = structure
    logger.debug("extracted %d structures", len(documents.structures))
    return documents


__all__ = ["DocumentSet", "Extractor", "discover_anchors", "extract_documents"]
