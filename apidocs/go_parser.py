r"""Parse Go source files into the type declarations the docs generator needs.

Only a thin slice of Go is understood: the package clause, ``type``
declarations (single and grouped), struct bodies with their field tags, and
the doc comments attached to each of them. Every other top-level declaration
is skipped by bracket matching, so function bodies, imports and constants never
need to be parsed.

Example
-------
>>> from apidocs.go_parser import parse_source
>>> source = parse_source("package v1\n\n// Foo is a thing.\ntype Foo struct {\n\tName string\n}\n")
>>> source.types[0].name
'Foo'
>>> source.types[0].doc
'Foo is a thing.\n'
"""

from __future__ import annotations

import codecs
import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

TOKEN_PATTERN = re.compile(
    r"""
    (?P<newline>\n)
    | (?P<space>[ \t\r\f]+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<raw_string>`[^`]*`)
    | (?P<string>"(?:\\.|[^"\\\n])*")
    | (?P<rune>'(?:\\.|[^'\\\n])+')
    | (?P<ident>[^\W\d]\w*)
    | (?P<number>\.?\d(?:[eEpP][+-]|[\w.])*)
    | (?P<punct>\.\.\.|<-|:=|[{}()\[\];,.*:=+\-/%&|^<>!~])
    | (?P<unterminated>/\*|[`"'])
    """,
    re.VERBOSE | re.DOTALL,
)
DIRECTIVE_PATTERN = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")

# Token kinds after which a newline terminates the statement.
_SEMI_TRIGGERS = frozenset({"ident", "number", "string", "raw_string", "rune"})
_SEMI_PUNCT = frozenset({")", "]", "}"})
_KEYWORDS = frozenset(
    {
        "case", "chan", "const", "default", "defer", "else", "for", "func",
        "go", "goto", "if", "import", "interface", "map", "package", "range",
        "select", "struct", "switch", "type", "var",
    }
)  # fmt: skip
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


class SourceParseError(ValueError):
    """Raised when a Go source file cannot be parsed."""

    def __init__(self, message: str, *, path: str = "", line: int = 0, col: int = 0):
        self.message = message
        self.path = path
        self.line = line
        self.col = col
        location = f"{path or '<source>'}:{line}:{col}"
        super().__init__(f"{location}: {message}")


@dc.dataclass(slots=True, frozen=True)
class Token:
    """Lexical token with the lead doc comment attached, if any."""

    kind: str
    value: str
    line: int
    col: int
    doc: str | None = None


@dc.dataclass(slots=True, frozen=True)
class Ident:
    """Bare type name such as ``string`` or ``PodSpec``."""

    name: str


@dc.dataclass(slots=True, frozen=True)
class SelectorExpr:
    """Package-qualified type name such as ``metav1.ObjectMeta``."""

    package: str
    name: str


@dc.dataclass(slots=True, frozen=True)
class StarExpr:
    """Pointer to another type expression."""

    x: TypeExpr


@dc.dataclass(slots=True, frozen=True)
class ArrayType:
    """Slice (``length is None``) or fixed-size array of ``elt``."""

    elt: TypeExpr
    length: str | None = None


@dc.dataclass(slots=True, frozen=True)
class MapType:
    """Map from ``key`` to ``value``."""

    key: TypeExpr
    value: TypeExpr


@dc.dataclass(slots=True, frozen=True)
class UnsupportedExpr:
    """Type shape the generator does not render (func, chan, interface...)."""

    text: str


@dc.dataclass(slots=True, frozen=True)
class FieldDecl:
    """One field declaration inside a struct body.

    Attributes
    ----------
    names : tuple[str, ...]
        Declared identifiers; empty for embedded fields.
    type : TypeExpr
        Declared field type.
    tag : str or None
        Decoded struct tag contents, without the surrounding quotes.
    doc : str
        Lead doc comment text, ``""`` when absent.
    line : int
        1-based line of the declaration.
    """

    names: tuple[str, ...]
    type: TypeExpr
    tag: str | None = None
    doc: str = ""
    line: int = 0

    @property
    def embedded(self) -> bool:
        """Return True when the field is declared without an identifier."""
        return not self.names


@dc.dataclass(slots=True, frozen=True)
class StructType:
    """Struct literal with its ordered field declarations."""

    fields: tuple[FieldDecl, ...]


TypeExpr = Ident | SelectorExpr | StarExpr | ArrayType | MapType | StructType | UnsupportedExpr


@dc.dataclass(slots=True, frozen=True)
class TypeSpec:
    """A single ``type Name ...`` specification."""

    name: str
    type: TypeExpr
    doc: str = ""
    alias: bool = False
    line: int = 0


@dc.dataclass(slots=True)
class SourceFile:
    """Parsed contents of one Go file."""

    path: str
    package: str
    types: list[TypeSpec]


def comment_text(comments: list[str]) -> str:
    """Return the text of a comment group the way ``go/ast`` reports it.

    Comment markers, the first space of each line comment and compiler
    directives are removed; trailing whitespace is trimmed, leading and
    trailing blank lines dropped and runs of blank lines collapsed.
    """
    lines: list[str] = []
    for comment in comments:
        if comment.startswith("//"):
            body = comment[2:]
            if DIRECTIVE_PATTERN.match(body):
                continue
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)
        else:
            lines.extend(comment[2:-2].split("\n"))

    result: list[str] = []
    for line in (entry.rstrip() for entry in lines):
        if not line and (not result or not result[-1]):
            continue
        result.append(line)
    while result and not result[-1]:
        result.pop()
    if not result:
        return ""
    return "\n".join(result) + "\n"


def _unquote(literal: str) -> str:
    """Decode a Go interpreted string literal (without surrounding quotes)."""
    simple = {
        "a": "\a",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "v": "\v",
        "\\": "\\",
        '"': '"',
        "'": "'",
    }

    def _replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        head = escape[0]
        if head in simple:
            return simple[head]
        if head in "xuU" and len(escape) > 1:
            return chr(int(escape[1:], 16))
        if escape.isdigit():
            return chr(int(escape, 8))
        return escape

    return re.sub(
        r"\\(x[0-9A-Fa-f]{2}|u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8}|[0-7]{3}|.)",
        _replace,
        literal,
    )


def tokenize(text: str, *, path: str = "") -> list[Token]:
    """Split Go source into tokens, inserting semicolons and attaching docs.

    Parameters
    ----------
    text : str
        Go source code.
    path : str, optional
        File name used in error messages.

    Returns
    -------
    list[Token]
        Significant tokens terminated by an automatic ``;`` where Go would
        insert one. Comments are folded into the ``doc`` of the token they
        precede.

    Raises
    ------
    SourceParseError
        On unterminated literals or comments and unknown characters.
    """
    tokens: list[Token] = []
    pending: list[tuple[str, int, int]] = []
    line = 1
    line_start = 0
    last_line = 0
    insert_semi = False
    pos = 0

    def _emit_semi(at_line: int, col: int) -> None:
        nonlocal insert_semi
        if insert_semi:
            tokens.append(Token("punct", ";", at_line, col))
            insert_semi = False

    while pos < len(text):
        match = TOKEN_PATTERN.match(text, pos)
        col = pos - line_start + 1
        if match is None:
            msg = f"unexpected character {text[pos]!r}"
            raise SourceParseError(msg, path=path, line=line, col=col)
        kind = match.lastgroup or ""
        value = match.group()
        pos = match.end()

        if kind == "unterminated":
            msg = f"unterminated literal or comment starting with {value!r}"
            raise SourceParseError(msg, path=path, line=line, col=col)
        if kind == "newline":
            _emit_semi(line, col)
            line += 1
            line_start = pos
            continue
        if kind == "space":
            continue
        if kind in ("line_comment", "block_comment"):
            end_line = line + value.count("\n")
            if "\n" in value:
                _emit_semi(line, col)
                line_start = match.start() + value.rindex("\n") + 1
            if line == last_line and not pending:
                # Trailing comment on the previous token's line.
                line = end_line
                continue
            if pending and line > pending[-1][2] + 1:
                pending = []
            pending.append((value, line, end_line))
            line = end_line
            continue

        doc = None
        if pending and pending[-1][2] + 1 == line:
            doc = comment_text([entry[0] for entry in pending])
        pending = []
        tokens.append(Token(kind, value, line, col, doc))
        last_line = line + value.count("\n")
        if "\n" in value:
            line = last_line
            line_start = match.start() + value.rindex("\n") + 1
        if kind == "ident":
            insert_semi = value not in _KEYWORDS
        else:
            insert_semi = kind in _SEMI_TRIGGERS or (
                kind == "punct" and value in _SEMI_PUNCT
            )

    _emit_semi(line, pos - line_start + 1)
    return tokens


class _Parser:
    """Recursive-descent parser over the token stream of one file."""

    def __init__(self, tokens: list[Token], path: str) -> None:
        self.tokens = tokens
        self.path = path
        self.pos = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def peek(self, offset: int = 1) -> Token | None:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def error(self, message: str, token: Token | None = None) -> SourceParseError:
        token = token or self.current
        if token is None:
            last = self.tokens[-1] if self.tokens else None
            line = last.line if last else 1
            return SourceParseError(
                f"{message} (unexpected end of file)", path=self.path, line=line
            )
        return SourceParseError(
            message, path=self.path, line=token.line, col=token.col
        )

    def is_value(self, value: str) -> bool:
        token = self.current
        return token is not None and token.value == value and token.kind in (
            "punct",
            "ident",
        )

    def advance(self) -> Token:
        token = self.current
        if token is None:
            raise self.error("expected more input")
        self.pos += 1
        return token

    def expect(self, value: str) -> Token:
        token = self.current
        if token is None or token.value != value:
            found = token.value if token else "EOF"
            raise self.error(f"expected {value!r}, found {found!r}")
        return self.advance()

    def expect_ident(self) -> Token:
        token = self.current
        if token is None or token.kind != "ident":
            found = token.value if token else "EOF"
            raise self.error(f"expected identifier, found {found!r}")
        return self.advance()

    def skip_balanced(self) -> str:
        """Consume a bracketed run starting at an opener; return its text."""
        opener = self.advance()
        stack = [_OPENERS[opener.value]]
        parts = [opener.value]
        while stack:
            token = self.current
            if token is None:
                raise self.error(f"unclosed {opener.value!r}", opener)
            self.pos += 1
            if token.kind == "punct" and token.value in _OPENERS:
                stack.append(_OPENERS[token.value])
            elif token.kind == "punct" and token.value in _CLOSERS:
                expected = stack.pop()
                if token.value != expected:
                    raise self.error(
                        f"mismatched {token.value!r}, expected {expected!r}", token
                    )
            if token.value != ";":
                parts.append(token.value)
        return " ".join(parts)

    def skip_declaration(self) -> None:
        """Skip tokens up to the next top-level semicolon."""
        while (token := self.current) is not None:
            if token.kind == "punct" and token.value in _OPENERS:
                self.skip_balanced()
                continue
            if token.kind == "punct" and token.value in _CLOSERS:
                raise self.error(f"unexpected {token.value!r}")
            self.pos += 1
            if token.kind == "punct" and token.value == ";":
                return

    def end_statement(self, closer: str) -> None:
        """Consume a statement terminator, allowing ``closer`` to end a list."""
        if self.is_value(";"):
            self.advance()
            return
        if self.is_value(closer):
            return
        token = self.current
        found = token.value if token else "EOF"
        raise self.error(f"expected ';' or {closer!r}, found {found!r}")

    def parse_file(self) -> SourceFile:
        token = self.current
        if token is None or token.value != "package":
            raise self.error("expected package clause")
        self.advance()
        package = self.expect_ident().value
        self.end_statement("")
        types: list[TypeSpec] = []
        while self.current is not None:
            if self.is_value("type"):
                types.extend(self.parse_type_decl())
            else:
                self.skip_declaration()
        return SourceFile(path=self.path, package=package, types=types)

    def parse_type_decl(self) -> list[TypeSpec]:
        keyword = self.advance()
        decl_doc = keyword.doc or ""
        if not self.is_value("("):
            spec = self.parse_type_spec(fallback_doc=decl_doc)
            self.end_statement("")
            return [spec]

        self.advance()
        specs: list[TypeSpec] = []
        while not self.is_value(")"):
            if self.is_value(";"):
                self.advance()
                continue
            specs.append(self.parse_type_spec(fallback_doc=""))
            self.end_statement(")")
        self.expect(")")
        self.end_statement("")
        if len(specs) == 1 and not specs[0].doc and decl_doc:
            specs[0] = dc.replace(specs[0], doc=decl_doc)
        return specs

    def parse_type_spec(self, *, fallback_doc: str) -> TypeSpec:
        name = self.expect_ident()
        if self.is_value("[") and self._looks_like_type_params():
            self.skip_balanced()
        alias = False
        if self.is_value("="):
            self.advance()
            alias = True
        type_expr = self.parse_type()
        return TypeSpec(
            name=name.value,
            type=type_expr,
            doc=name.doc or fallback_doc,
            alias=alias,
            line=name.line,
        )

    def _looks_like_type_params(self) -> bool:
        first = self.peek(1)
        second = self.peek(2)
        if first is None or second is None or first.kind != "ident":
            return False
        return second.kind == "ident" or second.value in (",", "*", "~", "[")

    def parse_type(self) -> TypeExpr:
        token = self.current
        if token is None:
            raise self.error("expected type")
        start = self.pos
        match token.value:
            case "*":
                self.advance()
                return StarExpr(self.parse_type())
            case "[":
                return self.parse_array()
            case "(":
                self.skip_balanced()
                return UnsupportedExpr(self._text_since(start))
            case "<-":
                self.advance()
                self.expect("chan")
                self.parse_type()
                return UnsupportedExpr(self._text_since(start))
            case "struct" if token.kind == "ident":
                self.advance()
                return StructType(self.parse_struct_body())
            case "map" if token.kind == "ident":
                self.advance()
                self.expect("[")
                key = self.parse_type()
                self.expect("]")
                return MapType(key, self.parse_type())
            case "interface" if token.kind == "ident":
                self.advance()
                if not self.is_value("{"):
                    raise self.error("expected '{' after interface")
                self.skip_balanced()
                return UnsupportedExpr(self._text_since(start))
            case "chan" if token.kind == "ident":
                self.advance()
                if self.is_value("<-"):
                    self.advance()
                self.parse_type()
                return UnsupportedExpr(self._text_since(start))
            case "func" if token.kind == "ident":
                self.parse_func_type()
                return UnsupportedExpr(self._text_since(start))
        if token.kind != "ident":
            raise self.error(f"expected type, found {token.value!r}")
        return self.parse_type_name()

    def parse_type_name(self) -> TypeExpr:
        start = self.pos
        name = self.expect_ident().value
        expr: TypeExpr = Ident(name)
        if self.is_value("."):
            self.advance()
            expr = SelectorExpr(name, self.expect_ident().value)
        if self.is_value("["):
            self.skip_balanced()
            return UnsupportedExpr(self._text_since(start))
        return expr

    def parse_array(self) -> ArrayType:
        self.expect("[")
        length: str | None = None
        if not self.is_value("]"):
            parts: list[str] = []
            while not self.is_value("]"):
                token = self.current
                if token is None or token.value == ";":
                    raise self.error("unterminated array length")
                if token.value in _OPENERS:
                    parts.append(self.skip_balanced())
                else:
                    parts.append(self.advance().value)
            length = "".join(parts)
        self.expect("]")
        return ArrayType(self.parse_type(), length)

    def parse_func_type(self) -> None:
        self.advance()
        if not self.is_value("("):
            raise self.error("expected '(' after func")
        self.skip_balanced()
        if self.is_value("("):
            self.skip_balanced()
            return
        token = self.current
        if token is None:
            return
        if token.kind == "ident" or token.value in ("*", "[", "<-"):
            self.parse_type()

    def parse_struct_body(self) -> tuple[FieldDecl, ...]:
        if not self.is_value("{"):
            raise self.error("expected '{' after struct")
        self.advance()
        fields: list[FieldDecl] = []
        while not self.is_value("}"):
            if self.current is None:
                raise self.error("unclosed struct body")
            if self.is_value(";"):
                self.advance()
                continue
            fields.append(self.parse_field())
            self.end_statement("}")
        self.expect("}")
        return tuple(fields)

    def parse_field(self) -> FieldDecl:
        first = self.current
        if first is None:
            raise self.error("expected field")
        doc = first.doc or ""
        names: list[str] = []
        if first.kind == "ident" and not self._is_embedded_field():
            names.append(self.advance().value)
            while self.is_value(","):
                self.advance()
                names.append(self.expect_ident().value)
            type_expr = self.parse_type()
        else:
            type_expr = self.parse_embedded_type()
        tag = None
        token = self.current
        if token is not None and token.kind == "raw_string":
            tag = self.advance().value[1:-1]
        elif token is not None and token.kind == "string":
            tag = _unquote(self.advance().value[1:-1])
        return FieldDecl(
            names=tuple(names), type=type_expr, tag=tag, doc=doc, line=first.line
        )

    def _is_embedded_field(self) -> bool:
        following = self.peek(1)
        if following is None:
            return True
        if following.kind in ("string", "raw_string"):
            return True
        return following.kind == "punct" and following.value in (".", ";", "}")

    def parse_embedded_type(self) -> TypeExpr:
        if self.is_value("*"):
            self.advance()
            return StarExpr(self.parse_type_name())
        token = self.current
        if token is None or token.kind != "ident":
            found = token.value if token else "EOF"
            raise self.error(f"expected field name or embedded type, found {found!r}")
        return self.parse_type_name()

    def _text_since(self, start: int) -> str:
        return " ".join(
            token.value for token in self.tokens[start : self.pos] if token.value != ";"
        )


def parse_source(text: str, *, path: str = "") -> SourceFile:
    """Parse Go source text into a :class:`SourceFile`.

    Parameters
    ----------
    text : str
        Go source code.
    path : str, optional
        File name recorded on the result and used in error messages.

    Returns
    -------
    SourceFile
        Package name and every type specification in declaration order.

    Raises
    ------
    SourceParseError
        When the text is not a syntactically valid Go file as far as package
        clause, bracket balance and type declarations are concerned.
    """
    tokens = tokenize(text, path=path)
    return _Parser(tokens, path).parse_file()


def parse_file(path: Path) -> SourceFile:
    """Read and parse the Go file at ``path``.

    A leading byte-order mark is skipped. Content that is not valid UTF-8 is
    reported as a :class:`SourceParseError` at the offending byte; only
    failures to read the file propagate as :class:`OSError`.
    """
    data = path.read_bytes().removeprefix(codecs.BOM_UTF8)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line = data.count(b"\n", 0, exc.start) + 1
        col = exc.start - (data.rfind(b"\n", 0, exc.start) + 1) + 1
        msg = "illegal UTF-8 encoding"
        raise SourceParseError(msg, path=str(path), line=line, col=col) from exc
    return parse_source(text, path=str(path))


__all__ = [
    "ArrayType",
    "FieldDecl",
    "Ident",
    "MapType",
    "SelectorExpr",
    "SourceFile",
    "SourceParseError",
    "StarExpr",
    "StructType",
    "Token",
    "TypeExpr",
    "TypeSpec",
    "UnsupportedExpr",
    "comment_text",
    "parse_file",
    "parse_source",
    "tokenize",
]
