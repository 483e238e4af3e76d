"""Field-level documentation model shared by extraction and rendering."""

from __future__ import annotations

import dataclasses as dc


class ApiDocsError(RuntimeError):
    """Base class for errors that abort a documentation run."""


class InputConfigurationError(ApiDocsError):
    """Raised when the owner label or input paths are missing or unusable."""


@dc.dataclass(slots=True, frozen=True)
class Field:
    """One entry of a structure's field list.

    Either the regular attributes or ``embed`` carry meaning: an embed entry
    only references another structure by the display text of its type.

    Attributes
    ----------
    name : str
        Serialized field name, or the structure name for a self-descriptor.
    doc : str
        Normalized doc comment.
    type_display : str
        Link-wrapped type string; empty for self-descriptors and embeds.
    mandatory : bool
        Whether the field is required in serialized form.
    embed : str or None
        Display text of an inlined structure, ``None`` for regular fields.
    """

    name: str = ""
    doc: str = ""
    type_display: str = ""
    mandatory: bool = False
    embed: str | None = None

    @classmethod
    def embedded(cls, reference: str) -> Field:
        """Build an embed entry referencing ``reference``."""
        return cls(embed=reference)

    @property
    def is_embed(self) -> bool:
        """Return True when this entry splices another structure in."""
        return self.embed is not None


@dc.dataclass(slots=True)
class StructureDoc:
    """Ordered field list of one structure; ``fields[0]`` describes itself."""

    fields: list[Field]

    @classmethod
    def create(cls, name: str, doc: str) -> StructureDoc:
        """Start a field list holding only the self-descriptor."""
        return cls(fields=[Field(name=name, doc=doc)])

    @property
    def self_descriptor(self) -> Field:
        """Return the entry describing the structure itself."""
        return self.fields[0]

    @property
    def name(self) -> str:
        """Return the structure name."""
        return self.fields[0].name

    @property
    def doc(self) -> str:
        """Return the normalized structure doc."""
        return self.fields[0].doc

    @property
    def members(self) -> list[Field]:
        """Return the declared fields, excluding the self-descriptor."""
        return self.fields[1:]

    @property
    def has_fields(self) -> bool:
        """Return True when at least one field follows the self-descriptor."""
        return len(self.fields) > 1

    def append(self, entry: Field) -> None:
        """Append a declared field, keeping declaration order."""
        self.fields.append(entry)


@dc.dataclass(slots=True, frozen=True)
class FieldRow:
    """Flattened table row produced by composition resolution."""

    name: str
    doc: str
    type_display: str
    mandatory: bool


__all__ = [
    "ApiDocsError",
    "Field",
    "FieldRow",
    "InputConfigurationError",
    "StructureDoc",
]
