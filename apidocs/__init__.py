"""Generate Markdown API reference documents from Go type declarations.

This package exposes the CLI entry points used by the ``apidocs`` console
script to turn annotated Go structs into a cross-linked reference document.

Exports
-------
- ``app``: Cyclopts application entry for the generator command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from apidocs import main
>>> main(["--owner", "Example Operator", "--paths", "api/v1"])  # doctest: +SKIP
>>> from apidocs import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
