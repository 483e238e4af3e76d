"""Unit tests for the link catalog and anchor helpers."""

from __future__ import annotations

from apidocs.links import LinkCatalog, section_anchor, unwrap_link, wrap_in_link


def test_section_anchor_lowercases_and_hyphenates() -> None:
    assert section_anchor("ClusterSpec") == "clusterspec"
    assert section_anchor("Pod Template") == "pod-template"


def test_local_anchor_wins_over_external_link() -> None:
    catalog = LinkCatalog(
        external_links={"Volume": "https://example.invalid/volume"},
        local_anchors={"Volume": "#volume"},
    )
    assert catalog.link("Volume") == "[Volume](#volume)"


def test_external_link_and_unknown_names() -> None:
    catalog = LinkCatalog(external_links={"v1.Volume": "https://example.invalid/v"})
    assert catalog.link("v1.Volume") == "[v1.Volume](https://example.invalid/v)"
    assert catalog.link("string") == "string"
    assert catalog.target_for("string") is None


def test_register_is_stable() -> None:
    catalog = LinkCatalog()
    assert catalog.register("Outer") == "#outer"
    assert catalog.register("Outer") == "#outer"
    assert catalog.local_anchors == {"Outer": "#outer"}


def test_unwrap_link_round_trips_wrapped_text() -> None:
    assert unwrap_link(wrap_in_link("Inner", "#inner")) == "Inner"
    assert unwrap_link("metav1.TypeMeta") == "metav1.TypeMeta"
