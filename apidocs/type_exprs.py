"""Render Go type expressions as display strings for the ``Scheme`` column."""

from __future__ import annotations

import logging
import typing as typ

from apidocs.go_parser import (
    ArrayType,
    Ident,
    MapType,
    SelectorExpr,
    StarExpr,
    StructType,
    UnsupportedExpr,
)

if typ.TYPE_CHECKING:
    from apidocs.go_parser import TypeExpr
    from apidocs.links import LinkCatalog

logger = logging.getLogger(__name__)


class TypeExpressionResolver:
    """Turn type expressions into link-wrapped display strings.

    Parameters
    ----------
    catalog : LinkCatalog
        Lookup used to wrap terminal type names in links.
    warn_unsupported : bool, optional
        Log a warning for type shapes that render as an empty string. The
        discovery pass turns this off so each shape is reported once.
    """

    def __init__(self, catalog: LinkCatalog, *, warn_unsupported: bool = True) -> None:
        self.catalog = catalog
        self.warn_unsupported = warn_unsupported

    def display(self, type_expr: TypeExpr) -> str:
        """Return the display string for ``type_expr``.

        Unsupported shapes (functions, channels, interfaces, inline structs,
        generic instantiations) yield ``""`` rather than failing.
        """
        match type_expr:
            case Ident(name=name):
                return self.catalog.link(name)
            case SelectorExpr(package=package, name=name):
                return self.catalog.link(f"{package}.{name}")
            case StarExpr(x=inner):
                return "*" + self.display(inner)
            case ArrayType(elt=elt):
                return "[]" + self.display(elt)
            case MapType(key=key, value=value):
                return f"map[{self.display(key)}]{self.display(value)}"
            case StructType():
                self._unsupported("struct{...}")
            case UnsupportedExpr(text=text):
                self._unsupported(text)
            case _:
                self._unsupported(repr(type_expr))
        return ""

    def _unsupported(self, text: str) -> None:
        if self.warn_unsupported:
            logger.warning("unsupported type expression %r rendered as empty", text)


__all__ = ["TypeExpressionResolver"]
