"""Load catalog configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .defaults import default_config
from .helpers import (
    _build_skip_embeds,
    _coerce_bool,
    _merge_links,
    _merge_well_known,
    _require_mapping,
    _require_str,
)
from .models import ConfigError, GeneratorConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

KNOWN_KEYS = frozenset(
    {"title", "links", "well_known", "skip_embeds", "exported_only"}
)


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load the catalog configuration, merging it over the built-in defaults.

    Parameters
    ----------
    path : Path or None, optional
        YAML file holding ``title``, ``links``, ``well_known``,
        ``skip_embeds`` and ``exported_only`` keys. When ``None`` the
        built-in defaults are returned unchanged.

    Returns
    -------
    GeneratorConfig
        Title, external link table, well-known field sets, skip list and the
        exported-only switch. ``links`` and ``well_known`` extend the built-in
        tables; ``skip_embeds`` replaces the built-in list.

    Raises
    ------
    ConfigError
        If the file is missing, is not valid YAML, or contains keys or values
        of the wrong shape.

    Examples
    --------
    >>> from apidocs.config import load_config
    >>> load_config().title
    'API Docs'
    """
    config = default_config()
    if path is None:
        return config
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise ConfigError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise ConfigError(msg) from exc
    raw = _require_mapping(loaded, "<top level>")

    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(map(str, unknown))}."
        raise ConfigError(msg)

    if "title" in raw:
        config.title = _require_str(raw["title"], "title")
    config.external_links = _merge_links(
        config.external_links, _require_mapping(raw.get("links"), "links")
    )
    config.well_known = _merge_well_known(
        config.well_known, _require_mapping(raw.get("well_known"), "well_known")
    )
    if "skip_embeds" in raw:
        config.skip_embeds = _build_skip_embeds(raw["skip_embeds"])
    if "exported_only" in raw:
        config.exported_only = _coerce_bool(raw["exported_only"], "exported_only")
    return config


__all__ = ["KNOWN_KEYS", "load_config"]
