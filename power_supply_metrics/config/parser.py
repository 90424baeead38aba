"""
Tokenizer and recursive descent parser for nginx-like configuration.

Example:
    mqtt {
        host "localhost";
        port 1883;
    }

    power_supply {
        ignored_devices "^(BAT|AC)\\d+$";
        update_interval 15s;
    }

Supports:
- Identifiers, quoted strings, numbers, durations (10s, 5m, 1h, 30ms)
- Booleans (on, off, true, false)
- Single-line (#) and multi-line (/* */) comments

Unknown escape sequences in strings are kept verbatim, so regular
expressions can be written without doubling backslashes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Iterator


class TokenType(Enum):
    """Token types for the config syntax."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    DURATION = auto()
    BOOLEAN = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    EOF = auto()


@dataclass
class Token:
    """A single token."""

    type: TokenType
    value: str | int | float | bool
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class LexerError(Exception):
    """Exception raised for tokenizer errors."""

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, column {column}: {message}")


class ParseError(Exception):
    """Exception raised for parser errors."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token:
            super().__init__(f"Line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(message)


BOOLEAN_KEYWORDS = {"on": True, "off": False, "true": True, "false": False}

# Duration units in seconds
DURATION_UNITS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}

_TOKEN_RE = re.compile(
    r"""
    (?P<comment>\#[^\n]*|/\*.*?\*/)
    |(?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    |(?P<number>\d+(?:\.\d+)?)(?P<unit>[A-Za-z]+)?
    |(?P<identifier>[A-Za-z_][A-Za-z0-9_\-]*)
    |(?P<punct>[{};])
    |(?P<space>\s+)
    |(?P<unterminated>/\*|["'])
    """,
    re.VERBOSE | re.DOTALL,
)

_PUNCT_TYPES = {"{": TokenType.LBRACE, "}": TokenType.RBRACE, ";": TokenType.SEMICOLON}


def _unescape(body: str) -> str:
    """Translate known escapes; keep unknown ones (like \\d) as written."""
    return re.sub(r"\\(.)", lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


def tokenize(source: str) -> Iterator[Token]:
    """
    Generate tokens from source text.

    Raises:
        LexerError: On unexpected characters, unterminated strings or comments
    """
    pos = 0
    line = 1
    line_start = 0

    while pos < len(source):
        column = pos - line_start + 1
        match = _TOKEN_RE.match(source, pos)

        if match is None:
            raise LexerError(f"Unexpected character: {source[pos]!r}", line, column)

        kind = match.lastgroup
        text = match.group(0)

        if kind == "unterminated":
            what = "multi-line comment" if text == "/*" else "string literal"
            raise LexerError(f"Unterminated {what}", line, column)

        if kind == "string":
            yield Token(TokenType.STRING, _unescape(text[1:-1]), line, column)
        elif kind in ("number", "unit"):
            number = match.group("number")
            value: int | float = float(number) if "." in number else int(number)
            unit = (match.group("unit") or "").lower()
            if unit:
                if unit not in DURATION_UNITS:
                    raise LexerError(f"Unknown duration unit: {unit}", line, column)
                yield Token(TokenType.DURATION, value * DURATION_UNITS[unit], line, column)
            else:
                yield Token(TokenType.NUMBER, value, line, column)
        elif kind == "identifier":
            if text.lower() in BOOLEAN_KEYWORDS:
                yield Token(TokenType.BOOLEAN, BOOLEAN_KEYWORDS[text.lower()], line, column)
            else:
                yield Token(TokenType.IDENTIFIER, text, line, column)
        elif kind == "punct":
            yield Token(_PUNCT_TYPES[text], text, line, column)

        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = match.end()

    yield Token(TokenType.EOF, "", line, pos - line_start + 1)


@dataclass
class Directive:
    """
    A configuration directive with a name and values.

    Examples:
        host "localhost";   -> Directive(name="host", values=["localhost"])
        retain on;          -> Directive(name="retain", values=[True])
    """

    name: str
    values: list[Any] = field(default_factory=list)
    line: int = 0

    @property
    def value(self) -> Any:
        """Get single value (first) or None."""
        return self.values[0] if self.values else None


@dataclass
class Block:
    """A configuration block with a type, optional name, and contents."""

    type: str
    name: str | None = None
    directives: list[Directive] = field(default_factory=list)
    blocks: list["Block"] = field(default_factory=list)
    line: int = 0

    def get_directive(self, name: str) -> Directive | None:
        """Get first directive with given name."""
        for d in self.directives:
            if d.name == name:
                return d
        return None

    def get_value(self, name: str, default: Any = None) -> Any:
        """Get single value from directive."""
        directive = self.get_directive(name)
        if directive and directive.values:
            return directive.value
        return default


@dataclass
class ConfigDocument:
    """Root document containing all top-level blocks and directives."""

    blocks: list[Block] = field(default_factory=list)
    directives: list[Directive] = field(default_factory=list)
    filename: str = "<string>"

    def get_block(self, type_name: str) -> Block | None:
        """Get first block with given type."""
        for b in self.blocks:
            if b.type == type_name:
                return b
        return None


class ConfigParser:
    """
    Recursive descent parser.

    Grammar:
        document    := (block | directive)*
        block       := IDENTIFIER [STRING] '{' (block | directive)* '}'
        directive   := IDENTIFIER value* ';'
        value       := STRING | NUMBER | DURATION | BOOLEAN | IDENTIFIER
    """

    VALUE_TYPES = (
        TokenType.STRING,
        TokenType.NUMBER,
        TokenType.DURATION,
        TokenType.BOOLEAN,
        TokenType.IDENTIFIER,
    )

    def __init__(self, source: str, filename: str = "<string>"):
        self.filename = filename
        self._tokens = tokenize(source)
        self.current: Token = next(self._tokens)

    def _advance(self) -> Token:
        previous = self.current
        if previous.type != TokenType.EOF:
            self.current = next(self._tokens)
        return previous

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if self.current.type != token_type:
            raise ParseError(message, self.current)
        return self._advance()

    def parse(self) -> ConfigDocument:
        """Parse the entire configuration document."""
        doc = ConfigDocument(filename=self.filename)

        while self.current.type != TokenType.EOF:
            item = self._parse_item("document")
            if isinstance(item, Block):
                doc.blocks.append(item)
            else:
                doc.directives.append(item)

        return doc

    def _parse_item(self, context: str) -> Block | Directive:
        """Parse a block or a directive."""
        name_token = self._expect(
            TokenType.IDENTIFIER, f"Expected block or directive in {context}"
        )
        name = str(name_token.value)

        values: list[Any] = []
        while self.current.type in self.VALUE_TYPES:
            values.append(self._advance().value)

        if self.current.type == TokenType.SEMICOLON:
            self._advance()
            return Directive(name=name, values=values, line=name_token.line)

        if self.current.type != TokenType.LBRACE:
            raise ParseError(f"Expected '{{' or ';' after '{name}'", self.current)

        if len(values) > 1 or (values and not isinstance(values[0], str)):
            raise ParseError(f"Block '{name}' takes at most one string name", name_token)

        self._advance()
        block = Block(type=name, name=values[0] if values else None, line=name_token.line)

        while self.current.type not in (TokenType.RBRACE, TokenType.EOF):
            item = self._parse_item(f"'{name}' block")
            if isinstance(item, Block):
                block.blocks.append(item)
            else:
                block.directives.append(item)

        self._expect(TokenType.RBRACE, f"Expected '}}' to close '{name}' block")
        return block


def parse_config(source: str, filename: str = "<string>") -> ConfigDocument:
    """Parse a configuration string."""
    return ConfigParser(source, filename).parse()


def parse_config_file(path: str | Path) -> ConfigDocument:
    """Parse a configuration file."""
    path = Path(path)
    return parse_config(path.read_text(), str(path))
