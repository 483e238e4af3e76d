"""Resolve type names to Markdown links.

A :class:`LinkCatalog` combines two lookups: anchors of structures defined in
the documented sources (filled during discovery) and a fixed table of external
reference URLs for well-known library types such as ``metav1.ObjectMeta``.
Local anchors win over external links.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re

LINK_PATTERN = re.compile(r"^\[(?P<text>[^\]]*)\]\((?P<target>[^)]*)\)$")


def section_anchor(name: str) -> str:
    """Return the in-document anchor slug for a section titled ``name``.

    >>> section_anchor("PodTemplate Spec")
    'podtemplate-spec'
    """
    return name.lower().replace(" ", "-")


def wrap_in_link(text: str, target: str) -> str:
    """Return ``text`` as a Markdown link pointing at ``target``."""
    return f"[{text}]({target})"


def unwrap_link(text: str) -> str:
    """Return the link text of a Markdown link, or ``text`` when it is not one.

    >>> unwrap_link("[Foo](#foo)")
    'Foo'
    >>> unwrap_link("metav1.TypeMeta")
    'metav1.TypeMeta'
    """
    match = LINK_PATTERN.match(text)
    if match is None:
        return text
    return match.group("text")


@dc.dataclass(slots=True)
class LinkCatalog:
    """Lookup tables mapping type names to local anchors or external URLs.

    Attributes
    ----------
    external_links : Mapping[str, str]
        Qualified external type names (``v1.Volume``) to documentation URLs.
    local_anchors : dict[str, str]
        Locally defined structure names to ``#anchor`` targets.
    """

    external_links: cabc.Mapping[str, str] = dc.field(default_factory=dict)
    local_anchors: dict[str, str] = dc.field(default_factory=dict)

    def register(self, name: str) -> str:
        """Record the section anchor for ``name`` and return the link target."""
        target = f"#{section_anchor(name)}"
        self.local_anchors.setdefault(name, target)
        return self.local_anchors[name]

    def target_for(self, type_name: str) -> str | None:
        """Return the link target for ``type_name`` or ``None`` when unknown."""
        local = self.local_anchors.get(type_name)
        if local is not None:
            return local
        return self.external_links.get(type_name)

    def link(self, type_name: str) -> str:
        """Return ``type_name`` wrapped in a link when a target is known."""
        target = self.target_for(type_name)
        if target is None:
            return type_name
        return wrap_in_link(type_name, target)


__all__ = [
    "LINK_PATTERN",
    "LinkCatalog",
    "section_anchor",
    "unwrap_link",
    "wrap_in_link",
]
