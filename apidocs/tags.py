"""Interpret the ``json`` struct tag of a Go field.

The tag decides how a field shows up in the generated tables: its serialized
name, whether it is mandatory, whether it is dropped entirely (``json:"-"``),
and whether it flattens another struct into its parent (``json:",inline"``).
"""

from __future__ import annotations

import dataclasses as dc
import re

from apidocs.go_parser import (
    Ident,
    SelectorExpr,
    StarExpr,
    TypeExpr,
)

EXCLUDED = "-"
TAG_KEY = "json"
OMIT_EMPTY = "omitempty"
INLINE_PREFIX = ",inline"

_TAG_ENTRY_PATTERN = re.compile(r'\s*([^\s:"\x00-\x1f\x7f]+):"((?:\\.|[^"\\])*)"')


@dc.dataclass(slots=True, frozen=True)
class TagInfo:
    """Serialized name and flags derived from a field tag.

    Attributes
    ----------
    serialized_name : str
        Name shown in the ``Field`` column, or :data:`EXCLUDED`.
    mandatory : bool
        ``True`` when the tag exists and does not mark the field ``omitempty``.
    inline : bool
        ``True`` when the field's struct is flattened into its parent.
    """

    serialized_name: str
    mandatory: bool
    inline: bool

    @property
    def excluded(self) -> bool:
        """Return True when the field must not appear in the output."""
        return self.serialized_name == EXCLUDED


def lookup_tag(tag: str, key: str) -> str | None:
    """Return the value stored under ``key`` in a conventional struct tag.

    Mirrors ``reflect.StructTag.Lookup``: the tag is a space separated list of
    ``key:"value"`` pairs and parsing stops at the first malformed entry.

    >>> lookup_tag('json:"name,omitempty" protobuf:"bytes,1,opt"', "json")
    'name,omitempty'
    >>> lookup_tag('yaml:"x"', "json") is None
    True
    """
    pos = 0
    while pos < len(tag):
        match = _TAG_ENTRY_PATTERN.match(tag, pos)
        if match is None:
            return None
        if match.group(1) == key:
            return re.sub(r"\\(.)", r"\1", match.group(2))
        pos = match.end()
    return None


def base_type_name(type_expr: TypeExpr) -> str:
    """Return the bare name of an embedded field's type.

    Pointers and package qualifiers are stripped, so ``*metav1.ObjectMeta``
    yields ``ObjectMeta``.
    """
    match type_expr:
        case StarExpr(x=inner):
            return base_type_name(inner)
        case SelectorExpr(name=name) | Ident(name=name):
            return name
        case _:
            return ""


def interpret_tag(
    tag: str | None, field_name: str | None, type_expr: TypeExpr
) -> TagInfo:
    """Decide serialized name, mandatory and inline flags for a field.

    Parameters
    ----------
    tag : str or None
        Decoded struct tag, ``None`` when the field carries no tag.
    field_name : str or None
        Declared identifier; ``None`` for embedded fields.
    type_expr : TypeExpr
        Declared type, used to name embedded fields.

    Returns
    -------
    TagInfo
        Untagged fields are never mandatory. A ``json`` value starting with
        ``-`` yields the :data:`EXCLUDED` sentinel name.
    """
    fallback = field_name or base_type_name(type_expr)
    if tag is None:
        return TagInfo(serialized_name=fallback, mandatory=False, inline=False)

    value = lookup_tag(tag, TAG_KEY) or ""
    if value.startswith("-"):
        return TagInfo(serialized_name=EXCLUDED, mandatory=False, inline=False)
    name = value.split(",", 1)[0]
    return TagInfo(
        serialized_name=name or fallback,
        mandatory=OMIT_EMPTY not in value,
        inline=value.startswith(INLINE_PREFIX),
    )


__all__ = [
    "EXCLUDED",
    "INLINE_PREFIX",
    "OMIT_EMPTY",
    "TAG_KEY",
    "TagInfo",
    "base_type_name",
    "interpret_tag",
    "lookup_tag",
]
