r"""Normalize Go doc comments into single-line Markdown table cells.

Doc comments span several lines, carry code-generator directives
(``+kubebuilder:...``), TODO notes and implementation details hidden below a
``---`` line. :func:`normalize_doc` drops all of that and escapes what remains
so it survives being embedded in one ``|``-delimited table cell.

Example
-------
>>> from apidocs.comments import normalize_doc
>>> normalize_doc("Replicas is the count.\n+optional\nTODO: drop\n")
'Replicas is the count.'
>>> normalize_doc('Use "a|b".\n\nSecond paragraph.\n')
'Use \\"a\\|b\\".\\n\\nSecond paragraph.'
"""

from __future__ import annotations

import re

HIDDEN_NOTES_PATTERN = re.compile(r"^[ \t]*---[ \t]*$", re.MULTILINE)
UNESCAPED_PIPE_PATTERN = re.compile(r"(?<!\\)\|")


def _strip_hidden_notes(raw_doc: str) -> str:
    """Drop everything from the first ``---`` line onwards."""
    match = HIDDEN_NOTES_PATTERN.search(raw_doc)
    if match is None:
        return raw_doc
    return raw_doc[: match.start()]


def _merge_lines(raw_doc: str) -> str:
    """Fold comment lines into paragraphs, keeping indented blocks apart."""
    buffer: list[str] = []

    def _drop_previous_char() -> None:
        if buffer:
            buffer[-1] = buffer[-1][:-1]

    for raw_line in raw_doc.split("\n"):
        line = raw_line.rstrip(" ")
        leading = line.lstrip(" ")
        if not line:
            _drop_previous_char()
            buffer.append("\n\n")
        elif leading.startswith(("TODO", "+")):
            continue
        elif line.startswith((" ", "\t")):
            _drop_previous_char()
            buffer.append(f"\n{line}\n")
        else:
            buffer.append(f"{line} ")
    return "".join(buffer)


def escape_cell(text: str) -> str:
    """Escape quotes, line breaks, tabs and pipes for a table cell."""
    text = text.replace('\\"', '"')
    text = text.replace('"', '\\"')
    text = text.replace("\n", "\\n")
    text = text.replace("\t", "\\t")
    return UNESCAPED_PIPE_PATTERN.sub(r"\\|", text)


def normalize_doc(raw_doc: str) -> str:
    """Return ``raw_doc`` as one escaped line suitable for a table cell.

    Parameters
    ----------
    raw_doc : str
        Comment text as reported by the parser, possibly multi-line or empty.

    Returns
    -------
    str
        Normalized text; ``""`` for empty input. Applying the function to its
        own output returns the output unchanged.
    """
    merged = _merge_lines(_strip_hidden_notes(raw_doc))
    return escape_cell(merged.rstrip("\n "))


__all__ = ["escape_cell", "normalize_doc"]
