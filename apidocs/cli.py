"""Cyclopts CLI entrypoint for generating Markdown API reference documents.

The ``apidocs`` console script defined here parses Go API type declarations
and renders a single Markdown document describing every structure, with
cross-links between documented types and well-known external types. Typical
usage involves running ``apidocs`` locally or in CI to regenerate the API
reference whenever the Go types change.

Every option can also be supplied through an ``INPUT_``-prefixed environment
variable (for example ``INPUT_OWNER`` or ``INPUT_PATHS``), which lets the tool
run unchanged as a CI action step.

Examples
--------
Print the reference for two files to stdout:

>>> from apidocs.cli import main
>>> main(
...     ["--owner", "Example Operator", "--paths", "api/v1/a.go,api/v1/b.go"]
... )  # doctest: +SKIP

Write the reference for a package directory to a file:

>>> from apidocs.cli import app
>>> app(
...     ["--owner", "Example Operator", "--paths", "api/v1", "--output", "docs/api.md"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_config
from .generator import ApiDocGenerator
from .generator.doc_generator import split_paths
from .models import ApiDocsError, InputConfigurationError

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)

app = App(name="apidocs", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@app.default
def generate(
    *,
    owner: typ.Annotated[
        str | None,
        Parameter(help="Owner label quoted in the introduction", env_var="INPUT_OWNER"),
    ] = None,
    paths: typ.Annotated[
        str | None,
        Parameter(
            help="Comma-separated Go files or directories", env_var="INPUT_PATHS"
        ),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to generator config (YAML)", env_var="INPUT_CONFIG"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write the document here instead of stdout", env_var="INPUT_OUTPUT"),
    ] = None,
    title: typ.Annotated[
        str | None,
        Parameter(help="Override the document title", env_var="INPUT_TITLE"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate the Markdown API reference for the given Go sources.

    Parameters
    ----------
    owner : str or None, optional
        Owner label quoted in the document introduction. Required.
    paths : str or None, optional
        Comma-separated list of Go files or directories, processed in order.
        Required.
    config : Path or None, optional
        YAML file extending the built-in link and well-known type catalogs.
    output : Path or None, optional
        Destination file; when ``None`` the document is printed to stdout.
    title : str or None, optional
        Document heading; overrides the configured title.
    verbose : bool, optional
        Emit debug logging on stderr.

    Returns
    -------
    None
        Prints the document or the written path.

    Raises
    ------
    InputConfigurationError
        If the owner or the input paths are missing.
    ConfigError
        If the configuration file is invalid.
    CompositionError
        If an inlined structure cannot be expanded.
    """
    _configure_logging(verbose=verbose)
    if not owner or not owner.strip():
        msg = "An owner label is required (--owner or INPUT_OWNER)."
        raise InputConfigurationError(msg)
    input_paths = split_paths(paths or "")
    if not input_paths:
        msg = "At least one input path is required (--paths or INPUT_PATHS)."
        raise InputConfigurationError(msg)

    generator_config = load_config(config)
    if title:
        generator_config.title = title
    generator = ApiDocGenerator(generator_config)

    if output is None:
        sys.stdout.write(generator.run(input_paths, owner=owner))
        return
    written = generator.write(input_paths, owner=owner, output=output)
    print(f"wrote {_format_path(written)}")


def main(argv: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``apidocs`` command.

    Generator errors are reported on stderr and turned into exit status 1
    without emitting partial output.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse; defaults to ``sys.argv[1:]``.

    Raises
    ------
    SystemExit
        With status 1 when generation fails.
    """
    try:
        app(argv)
    except ApiDocsError as exc:
        logger.debug("generation failed", exc_info=exc)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
