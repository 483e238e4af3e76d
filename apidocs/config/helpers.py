"""Utility helpers shared by the catalog configuration loader."""

from __future__ import annotations

import typing as typ

from .models import ConfigError, WellKnownField, WellKnownType


def _require_mapping(value: object, key: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"'{key}' must be a mapping, got {type(value).__name__}."
            raise ConfigError(msg)


def _require_str(value: object, key: str) -> str:
    """Return a stripped, non-empty string or raise ConfigError."""
    if not isinstance(value, str) or not value.strip():
        msg = f"'{key}' must be a non-empty string."
        raise ConfigError(msg)
    return value.strip()


def _coerce_bool(value: object, key: str) -> bool:
    """Return ``value`` when it is a boolean, raising ConfigError otherwise."""
    if isinstance(value, bool):
        return value
    msg = f"'{key}' must be true or false."
    raise ConfigError(msg)


def _merge_links(
    base: typ.Mapping[str, str], override: typ.Mapping[str, typ.Any]
) -> dict[str, str]:
    """Merge an override link mapping into the base external link table."""
    merged = dict(base)
    for name, url in override.items():
        merged[_require_str(name, "links")] = _require_str(url, f"links.{name}")
    return merged


def _build_well_known_field(payload: object, key: str) -> WellKnownField:
    """Build a WellKnownField from a mapping entry."""
    data = _require_mapping(payload, key)
    required = data.get("required", False)
    return WellKnownField(
        name=_require_str(data.get("name"), f"{key}.name"),
        type=_require_str(data.get("type"), f"{key}.type"),
        doc=str(data.get("doc") or ""),
        required=_coerce_bool(required, f"{key}.required"),
    )


def _build_well_known_type(name: str, payload: object) -> WellKnownType:
    """Build a WellKnownType from its YAML mapping."""
    key = f"well_known.{name}"
    data = _require_mapping(payload, key)
    fields_raw = data.get("fields") or []
    if not isinstance(fields_raw, list):
        msg = f"'{key}.fields' must be a list."
        raise ConfigError(msg)
    fields = [
        _build_well_known_field(entry, f"{key}.fields[{idx}]")
        for idx, entry in enumerate(fields_raw)
    ]
    return WellKnownType(name=name, doc=str(data.get("doc") or ""), fields=fields)


def _merge_well_known(
    base: typ.Mapping[str, WellKnownType], override: typ.Mapping[str, typ.Any]
) -> dict[str, WellKnownType]:
    """Merge override well-known types over the built-in catalog."""
    merged = dict(base)
    for name, payload in override.items():
        type_name = _require_str(name, "well_known")
        merged[type_name] = _build_well_known_type(type_name, payload)
    return merged


def _build_skip_embeds(value: object) -> list[str]:
    """Return the list of inlined type names to skip."""
    if not isinstance(value, list):
        msg = "'skip_embeds' must be a list of type names."
        raise ConfigError(msg)
    return [_require_str(entry, "skip_embeds") for entry in value]


__all__ = [
    "_build_skip_embeds",
    "_build_well_known_field",
    "_build_well_known_type",
    "_coerce_bool",
    "_merge_links",
    "_merge_well_known",
    "_require_mapping",
    "_require_str",
]
