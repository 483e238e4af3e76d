"""Load and validate the catalog configuration for API doc builds.

This subpackage holds the built-in Kubernetes link catalog, parses the optional
YAML override file, and produces a :class:`GeneratorConfig` that the extractor,
composition resolver and renderer consume. The primary entry point is
:func:`load_config`.

Examples
--------
>>> from pathlib import Path
>>> from apidocs.config import load_config
>>> config = load_config(Path("apidocs.yaml"))  # doctest: +SKIP
>>> config.external_links["metav1.ObjectMeta"]  # doctest: +SKIP
'https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.27/#objectmeta-v1-meta'
"""

from .defaults import DEFAULT_TITLE, default_config
from .loader import load_config
from .models import ConfigError, GeneratorConfig, WellKnownField, WellKnownType

__all__ = [
    "DEFAULT_TITLE",
    "ConfigError",
    "GeneratorConfig",
    "WellKnownField",
    "WellKnownType",
    "default_config",
    "load_config",
]
