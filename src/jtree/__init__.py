"""
Two-stage JSON-like document parser.

Scans a character sequence into a flat list of lexical tokens, then builds a
tree of immutable values from those tokens with a recursive-descent parser.
The lexical grammar is deliberately permissive: unknown characters are
skipped, strings are taken verbatim and numbers are plain decimal runs.
"""

import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import TypeAlias

from jtree._values import Array
from jtree._values import Bool
from jtree._values import JsonValue
from jtree._values import Null
from jtree._values import Number
from jtree._values import Object
from jtree._values import String
from jtree._values import to_python

__version__ = "0.1.0"

Position: TypeAlias = int

logger = logging.getLogger(__name__)

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JTREE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during tokenizing and parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    items_processed: int = 0

    def record_call(self, duration_ns: int, items: int = 0) -> None:
        """Records a function call with timing and item count."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.items_processed += items


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, items_to_process: int = 0):
            self.func_name = func_name
            self.items = items_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.items)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, items: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class JsonTreeError(ValueError):
    """
    Base class for tokenizing and parsing failures.

    Carries the offending offset together with line and column numbers
    computed from the source document when one is available.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")


class TokenizeError(JsonTreeError):
    """Lexical error raised while scanning characters into tokens."""


class UnexpectedCharacter(TokenizeError):
    """
    A character that cannot continue the current lexical rule.

    ``position`` is the 1-based count of characters consumed when the scan
    failed. Failures at end of input report ``char`` as ``"\\0"``. ``offset``
    is the 0-based index used for line and column, by default
    ``position - 1``.
    """

    def __init__(
        self,
        char: str,
        position: Position,
        doc: str = "",
        offset: Position | None = None,
    ) -> None:
        self.char = char
        self.position = position
        if offset is None:
            offset = max(position - 1, 0)
        super().__init__(f"Unexpected character {char!r}", doc, offset)


class ParseError(JsonTreeError):
    """Grammar error raised while assembling tokens into a value tree."""


class UnexpectedToken(ParseError):
    """A token that no grammar rule accepts at this point."""

    def __init__(
        self, token: "JsonToken", msg: str = "Unexpected token", doc: str = ""
    ) -> None:
        self.token = token
        super().__init__(msg, doc, token.start)


class UnexpectedEnd(ParseError):
    """The token sequence ran out before a grammar rule completed."""


class TokenKind(Enum):
    """Lexical token kinds."""

    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


@dataclass(frozen=True)
class JsonToken:
    """
    Represents a lexical token with its source span.

    ``value`` holds the structural character, the verbatim string payload,
    the parsed float or the keyword text. ``start`` and ``end`` are 0-based
    character offsets, end exclusive.
    """

    kind: TokenKind
    value: str | float
    start: Position
    end: Position


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures tokenizing and parsing behavior with immutable settings.

    Both flags default to the permissive behavior: unknown characters are
    skipped and tokens after the first complete value are ignored.
    """

    skip_unknown_characters: bool = True
    allow_trailing_tokens: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.skip_unknown_characters, bool):
            raise TypeError("skip_unknown_characters must be a boolean")
        if not isinstance(self.allow_trailing_tokens, bool):
            raise TypeError("allow_trailing_tokens must be a boolean")


_DEFAULT_CONFIG = ParseConfig()

_STRUCTURAL = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}
_KEYWORDS = {
    "t": ("true", TokenKind.TRUE),
    "f": ("false", TokenKind.FALSE),
    "n": ("null", TokenKind.NULL),
}
_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = _DIGITS | {"."}
_WHITESPACE = frozenset(" \t\n\r")
_END_OF_INPUT = "\0"


class JsonLexer:
    """
    Tokenizes a complete character sequence.

    Index-based scanner over an immutable string. Fails fast on the first
    lexical error; no partial token list is exposed.
    """

    def __init__(self, text: str, config: ParseConfig = _DEFAULT_CONFIG):
        self.text = text
        self.config = config
        self.pos = 0
        self.length = len(text)

    def scan_number(self) -> JsonToken:
        """Scans a maximal run of ASCII digits and dots as a float."""
        with ProfileContext("scan_number"):
            start = self.pos
            while (
                self.pos < self.length and self.text[self.pos] in _NUMBER_CHARS
            ):
                self.pos += 1

            run = self.text[start : self.pos]
            try:
                number = float(run)
            except ValueError as e:
                # the terminator is not consumed
                if self.pos < self.length:
                    raise UnexpectedCharacter(
                        self.text[self.pos], self.pos, self.text, self.pos
                    ) from e
                raise UnexpectedCharacter(
                    _END_OF_INPUT, self.length + 1, self.text
                ) from e

            return JsonToken(TokenKind.NUMBER, number, start, self.pos)

    def scan_string(self) -> JsonToken:
        """Scans a quoted string verbatim up to the next double quote."""
        with ProfileContext("scan_string"):
            start = self.pos
            close = self.text.find('"', start + 1)
            if close == -1:
                self.pos = self.length
                raise UnexpectedCharacter('"', self.length, self.text)

            self.pos = close + 1
            return JsonToken(
                TokenKind.STRING, self.text[start + 1 : close], start, self.pos
            )

    def scan_keyword(self, keyword: str, kind: TokenKind) -> JsonToken:
        """Matches a keyword literal character by character."""
        start = self.pos
        for expected in keyword:
            if self.pos >= self.length:
                raise UnexpectedCharacter(
                    _END_OF_INPUT, self.length + 1, self.text
                )
            char = self.text[self.pos]
            self.pos += 1
            if char != expected:
                raise UnexpectedCharacter(char, self.pos, self.text)

        return JsonToken(kind, keyword, start, self.pos)

    def next_token(self) -> JsonToken | None:
        """Returns the next token or None once the input is exhausted."""
        while self.pos < self.length:
            char = self.text[self.pos]

            if char in _STRUCTURAL:
                start = self.pos
                self.pos += 1
                return JsonToken(_STRUCTURAL[char], char, start, self.pos)
            elif char in _DIGITS:
                return self.scan_number()
            elif char == '"':
                return self.scan_string()
            elif char in _KEYWORDS:
                return self.scan_keyword(*_KEYWORDS[char])
            elif char in _WHITESPACE or self.config.skip_unknown_characters:
                self.pos += 1
            else:
                raise UnexpectedCharacter(char, self.pos + 1, self.text)

        return None

    def tokenize(self) -> list[JsonToken]:
        """Scans the whole input and returns its tokens in source order."""
        with ProfileContext("tokenize", self.length):
            tokens: list[JsonToken] = []
            token = self.next_token()
            while token is not None:
                tokens.append(token)
                token = self.next_token()
            return tokens


_EXPECT_VALUE = "Expecting value"
_EXPECT_KEY = "Expecting property name enclosed in double quotes"
_EXPECT_COLON = "Expecting ':' delimiter"
_EXPECT_COMMA = "Expecting ',' delimiter"

_SCALARS = {
    TokenKind.NULL: lambda token: Null(),
    TokenKind.TRUE: lambda token: Bool(True),
    TokenKind.FALSE: lambda token: Bool(False),
    TokenKind.NUMBER: lambda token: Number(token.value),
    TokenKind.STRING: lambda token: String(token.value),
}


class JsonParser:
    """
    Recursive-descent parser over a token sequence.

    The next token alone selects the grammar rule, so no backtracking is
    needed; the first error aborts the parse.
    """

    def __init__(
        self,
        tokens: Sequence[JsonToken],
        config: ParseConfig = _DEFAULT_CONFIG,
        doc: str = "",
    ):
        self.tokens = tokens
        self.config = config
        self.doc = doc
        self.pos = 0

    def peek(self) -> JsonToken | None:
        """Returns the current token without advancing."""
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def advance(self, expecting: str) -> JsonToken:
        """Returns the current token and advances past it."""
        token = self.peek()
        if token is None:
            end = self.tokens[-1].end if self.tokens else 0
            raise UnexpectedEnd(expecting, self.doc, end)
        self.pos += 1
        return token

    def parse(self) -> JsonValue:
        """Parses the first complete value in the token sequence."""
        try:
            value = self.parse_value()
        except RecursionError as e:
            token = self.tokens[self.pos - 1]
            raise ParseError(
                "Maximum nesting depth exceeded", self.doc, token.start
            ) from e

        trailing = self.peek()
        if trailing is not None and not self.config.allow_trailing_tokens:
            raise UnexpectedToken(trailing, "Extra data", self.doc)

        return value

    def parse_value(self) -> JsonValue:
        """Parses any value based on the next token."""
        token = self.advance(_EXPECT_VALUE)

        if token.kind in _SCALARS:
            return _SCALARS[token.kind](token)
        elif token.kind is TokenKind.LEFT_BRACE:
            return self.parse_object()
        elif token.kind is TokenKind.LEFT_BRACKET:
            return self.parse_array()
        else:
            raise UnexpectedToken(token, _EXPECT_VALUE, self.doc)

    def parse_object(self) -> Object:
        """Parses object members after the opening brace."""
        with ProfileContext("parse_object"):
            pairs: list[tuple[str, JsonValue]] = []

            while True:
                token = self.advance(_EXPECT_KEY)
                if token.kind is TokenKind.RIGHT_BRACE:
                    break
                if token.kind is not TokenKind.STRING:
                    raise UnexpectedToken(token, _EXPECT_KEY, self.doc)

                colon = self.advance(_EXPECT_COLON)
                if colon.kind is not TokenKind.COLON:
                    raise UnexpectedToken(colon, _EXPECT_COLON, self.doc)

                pairs.append((token.value, self.parse_value()))

                token = self.advance(_EXPECT_COMMA)
                if token.kind is TokenKind.RIGHT_BRACE:
                    break
                if token.kind is not TokenKind.COMMA:
                    raise UnexpectedToken(token, _EXPECT_COMMA, self.doc)

            return Object(tuple(pairs))

    def parse_array(self) -> Array:
        """Parses array elements after the opening bracket."""
        with ProfileContext("parse_array"):
            items: list[JsonValue] = []

            while True:
                token = self.peek()
                if token is not None and token.kind is TokenKind.RIGHT_BRACKET:
                    self.pos += 1
                    break

                items.append(self.parse_value())

                token = self.advance(_EXPECT_COMMA)
                if token.kind is TokenKind.RIGHT_BRACKET:
                    break
                if token.kind is not TokenKind.COMMA:
                    raise UnexpectedToken(token, _EXPECT_COMMA, self.doc)

            return Array(tuple(items))


def tokenize(text: str, config: ParseConfig | None = None) -> list[JsonToken]:
    """
    Scans a complete character sequence into tokens.

    Raises TokenizeError on the first lexical error.
    """
    lexer = JsonLexer(text, config or _DEFAULT_CONFIG)
    try:
        tokens = lexer.tokenize()
    except TokenizeError as e:
        logger.debug("Tokenizing failed: %s", e)
        raise

    logger.debug(
        "Tokenized %d characters into %d tokens", len(text), len(tokens)
    )
    return tokens


def parse(
    tokens: Sequence[JsonToken],
    config: ParseConfig | None = None,
    *,
    doc: str = "",
) -> JsonValue:
    """
    Builds a value tree from a token sequence.

    Pass the source text as ``doc`` to get line and column numbers on errors.
    Raises ParseError on the first grammar error.
    """
    parser = JsonParser(tokens, config or _DEFAULT_CONFIG, doc)
    try:
        value = parser.parse()
    except ParseError as e:
        logger.debug("Parsing failed: %s", e)
        raise

    logger.debug(
        "Parsed %s from %d of %d tokens",
        type(value).__name__,
        parser.pos,
        len(tokens),
    )
    return value


def loads(s: str, **kwargs: Any) -> JsonValue:
    """
    Tokenizes and parses a document into a value tree.

    Keyword arguments build the ParseConfig shared by both stages.
    """
    if not isinstance(s, str):
        raise TypeError(f"the document must be str, not {type(s).__name__}")

    config = ParseConfig(**kwargs)
    return parse(tokenize(s, config), config, doc=s)


__all__ = [
    "Array",
    "Bool",
    "HotPathStats",
    "JsonLexer",
    "JsonParser",
    "JsonToken",
    "JsonTreeError",
    "JsonValue",
    "Null",
    "Number",
    "Object",
    "ParseConfig",
    "ParseError",
    "String",
    "TokenKind",
    "TokenizeError",
    "UnexpectedCharacter",
    "UnexpectedEnd",
    "UnexpectedToken",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "loads",
    "parse",
    "to_python",
    "tokenize",
]
