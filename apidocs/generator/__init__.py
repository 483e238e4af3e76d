"""Utilities for resolving, rendering, and generating API reference documents."""

from .composition import (
    CompositionError,
    CompositionResolver,
    EmbedCycleError,
    UnresolvedEmbedError,
)
from .doc_generator import ApiDocGenerator
from .models import ApiDocument, DocSection
from .renderer import MarkdownRenderer

__all__ = [
    "ApiDocGenerator",
    "ApiDocument",
    "CompositionError",
    "CompositionResolver",
    "DocSection",
    "EmbedCycleError",
    "MarkdownRenderer",
    "UnresolvedEmbedError",
]
