"""High-level orchestration for API reference generation.

This module coordinates expanding input paths, parsing the Go sources once,
running the discovery and final extraction phases, expanding inlined
structures, and rendering the Markdown document. It exposes
:class:`ApiDocGenerator`, which consumes a
:class:`~apidocs.config.GeneratorConfig` and returns (or writes) the rendered
document.

Example
-------
>>> from pathlib import Path
>>> from apidocs.config import load_config
>>> from apidocs.generator import ApiDocGenerator
>>> generator = ApiDocGenerator(load_config())
>>> text = generator.run([Path("api/v1/types.go")], owner="Example Operator")  # doctest: +SKIP
>>> text.splitlines()[0]  # doctest: +SKIP
'# API Docs'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from apidocs._constants import GO_SOURCE_GLOB, GO_TEST_SUFFIX
from apidocs.extractor import discover_anchors, extract_documents
from apidocs.generator.composition import (
    CompositionResolver,
    build_well_known_catalog,
)
from apidocs.generator.renderer import MarkdownRenderer, build_document
from apidocs.go_parser import SourceParseError, parse_file
from apidocs.models import InputConfigurationError

if typ.TYPE_CHECKING:
    from apidocs.config import GeneratorConfig
    from apidocs.generator.models import ApiDocument
    from apidocs.go_parser import SourceFile

logger = logging.getLogger(__name__)


def split_paths(value: str) -> list[Path]:
    """Split a comma-separated path list, ignoring empty entries.

    >>> split_paths("api/v1/a.go, api/v1/b.go,")
    [PosixPath('api/v1/a.go'), PosixPath('api/v1/b.go')]
    """
    return [Path(entry.strip()) for entry in value.split(",") if entry.strip()]


def expand_paths(paths: cabc.Iterable[Path]) -> list[Path]:
    """Return Go files for ``paths``, expanding directories in sorted order.

    Directories contribute their ``*.go`` files except ``_test.go`` files.

    Raises
    ------
    InputConfigurationError
        If no path is given or a path does not exist.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(
                    candidate
                    for candidate in path.glob(GO_SOURCE_GLOB)
                    if candidate.is_file()
                    and not candidate.name.endswith(GO_TEST_SUFFIX)
                )
            )
        elif path.exists():
            files.append(path)
        else:
            msg = f"Input path '{path}' does not exist."
            raise InputConfigurationError(msg)
    if not files:
        msg = "No Go source files to document."
        raise InputConfigurationError(msg)
    return files


def load_sources(paths: cabc.Iterable[Path]) -> list[SourceFile]:
    """Parse every file in ``paths``, skipping files that fail to parse.

    Parse errors are logged and the offending file contributes nothing;
    the remaining files are still processed.

    Raises
    ------
    InputConfigurationError
        If a file cannot be read.
    """
    sources: list[SourceFile] = []
    for path in paths:
        try:
            sources.append(parse_file(path))
        except SourceParseError as exc:
            logger.error("skipping %s: %s", path, exc)  # noqa: TRY400
        except OSError as exc:
            msg = f"Cannot read '{path}': {exc}"
            raise InputConfigurationError(msg) from exc
        else:
            logger.debug("parsed %s (package %s)", path, sources[-1].package)
    return sources


class ApiDocGenerator:
    """Turn Go API type declarations into a cross-linked Markdown reference."""

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        config : GeneratorConfig
            Catalogs, title and extraction switches for the run.
        templates_dir : Path, optional
            Directory containing the Jinja template; defaults to the package
            templates.
        """
        self.config = config
        self.renderer = MarkdownRenderer(templates_dir=templates_dir)

    def build(self, sources: cabc.Sequence[SourceFile], *, owner: str) -> ApiDocument:
        """Run both extraction phases and resolve the render model.

        Raises
        ------
        CompositionError
            If an inlined structure cannot be resolved or inlines itself.
        """
        anchors = discover_anchors(sources, self.config)
        documents = extract_documents(sources, anchors, self.config)
        well_known = build_well_known_catalog(
            self.config.well_known, documents.catalog
        )
        resolver = CompositionResolver(
            documents, well_known, skip_embeds=self.config.skip_embeds
        )
        return build_document(
            documents.structures, resolver, owner=owner, title=self.config.title
        )

    def run(self, paths: cabc.Iterable[Path], *, owner: str) -> str:
        """Render the documentation for ``paths`` and return the Markdown.

        Parameters
        ----------
        paths : Iterable[Path]
            Go files or directories of Go files, in document order.
        owner : str
            Owner label quoted in the introduction.

        Returns
        -------
        str
            The complete Markdown document.

        Raises
        ------
        InputConfigurationError
            If the owner is blank, no inputs exist, or a file cannot be read.
        CompositionError
            If an inlined structure cannot be expanded.
        """
        if not owner.strip():
            msg = "An owner label is required."
            raise InputConfigurationError(msg)
        sources = load_sources(expand_paths(paths))
        document = self.build(sources, owner=owner.strip())
        return self.renderer.render(document)

    def write(self, paths: cabc.Iterable[Path], *, owner: str, output: Path) -> Path:
        """Render the documentation and write it to ``output``."""
        text = self.run(paths, owner=owner)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        return output


__all__ = [
    "ApiDocGenerator",
    "expand_paths",
    "load_sources",
    "split_paths",
]
