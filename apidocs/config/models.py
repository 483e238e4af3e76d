"""Typed dataclasses describing the documentation catalog configuration."""

from __future__ import annotations

import dataclasses as dc

from apidocs.models import ApiDocsError


class ConfigError(ApiDocsError, ValueError):
    """Raised when the catalog configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class WellKnownField:
    """A field of an external type that may be inlined into local structs."""

    name: str
    type: str
    doc: str = ""
    required: bool = False


@dc.dataclass(slots=True)
class WellKnownType:
    """Field set of an external type that is never defined locally."""

    name: str
    doc: str = ""
    fields: list[WellKnownField] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class GeneratorConfig:
    """Settings and catalogs consumed by a documentation run.

    Attributes
    ----------
    title : str
        Heading of the generated document.
    external_links : dict[str, str]
        Qualified external type names mapped to reference URLs.
    well_known : dict[str, WellKnownType]
        External types whose fields are spliced in when they are inlined.
    skip_embeds : list[str]
        Inlined types that are dropped without contributing rows.
    exported_only : bool
        Skip unexported structs and fields, as ``go doc`` does. Defaults to
        ``True``; set ``exported_only: false`` to document unexported types.
    """

    title: str
    external_links: dict[str, str]
    well_known: dict[str, WellKnownType]
    skip_embeds: list[str]
    exported_only: bool = True


__all__ = ["ConfigError", "GeneratorConfig", "WellKnownField", "WellKnownType"]
