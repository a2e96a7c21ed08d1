"""
SimpleLang Tokenizer
Comment stripping, whitespace-delimited tokenization and token classification
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass
import bisect
import enum
import re

from pyparsing import Char, CharsNotIn, Regex


@dataclass(frozen=True)
class SourceSpan:
    """Position of a token in the original (un-stripped) source"""
    filename: str
    line: int
    column: int
    text: str = ""

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


class TokenKind(enum.Enum):
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    UNKNOWN = "unknown"


OPERATORS = frozenset({"=", "+", "-", "*"})
PUNCTUATION = frozenset({"(", ")", ";"})

# `@` is the zero literal; no other literal may start with 0.
ZERO_LITERAL = "@"

_LITERAL_PATTERN = re.compile(r"@|[1-9]\d*")


def is_identifier(text: str) -> bool:
    """A letter followed by letters and decimal digits"""
    return (
        text[:1].isalpha()
        and all(c.isalpha() or c.isdecimal() for c in text[1:])
    )


def classify(text: str) -> TokenKind:
    """Classify raw token text; anything unrecognised is UNKNOWN"""
    if text in OPERATORS:
        return TokenKind.OPERATOR
    if text in PUNCTUATION:
        return TokenKind.PUNCTUATION
    if _LITERAL_PATTERN.fullmatch(text):
        return TokenKind.LITERAL
    if is_identifier(text):
        return TokenKind.IDENTIFIER
    return TokenKind.UNKNOWN


@dataclass(frozen=True)
class Token:
    """SimpleLang token; the kind is always derived from the text"""
    text: str
    span: Optional[SourceSpan] = None

    @property
    def kind(self) -> TokenKind:
        return classify(self.text)

    @property
    def literal_value(self) -> int:
        if self.kind is not TokenKind.LITERAL:
            raise ValueError(f"Not a literal: {self.text!r}")
        if self.text == ZERO_LITERAL:
            return 0
        return int(self.text)

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text})"


# Comments: `//` to end of line, `/* ... */` up to the first `*/`. Neither
# form crosses a line terminator; the line form is tried first at any position.
LINE_TERMINATORS = "\n\r\x85\u2028\u2029"
LINE_COMMENT = Regex(f"//[^{LINE_TERMINATORS}]*")
BLOCK_COMMENT = Regex(f"/\\*[^{LINE_TERMINATORS}]*?\\*/")
COMMENT = (LINE_COMMENT | BLOCK_COMMENT).leave_whitespace().parse_with_tabs()

# ASCII whitespace only, narrower than str.split()
WHITESPACE_CHARS = " \t\n\x0b\f\r"
_WORD_PATTERN = re.compile(f"[^{re.escape(WHITESPACE_CHARS)}]+")

BOUNDARY_CHARS = "=+-*();"
BOUNDARY_TOKEN = (
    Char(BOUNDARY_CHARS) | CharsNotIn(BOUNDARY_CHARS + WHITESPACE_CHARS)
).leave_whitespace().parse_with_tabs()

SPLIT_MODES = ("whitespace", "boundary")


def strip_comments(text: str) -> Tuple[str, List[int]]:
    """Remove comments from text

    Returns the stripped text and, for every character of it, the offset of
    that character in the original text.
    """
    pieces = []
    origin: List[int] = []
    kept_from = 0

    for _, start, end in COMMENT.scan_string(text):
        pieces.append(text[kept_from:start])
        origin.extend(range(kept_from, start))
        kept_from = end

    pieces.append(text[kept_from:])
    origin.extend(range(kept_from, len(text)))
    return ''.join(pieces), origin


class Tokenizer:
    """SimpleLang tokenizer

    The default split mode cuts the comment-free text on whitespace only, so
    operators glued to operands (``x=5;``) stay part of one token and fail
    classification later. The ``boundary`` mode also splits around every
    operator and punctuation character.
    """

    def __init__(self, filename: str = "<input>", split_mode: str = "whitespace"):
        if split_mode not in SPLIT_MODES:
            raise ValueError(
                f"Unknown split mode {split_mode!r}, expected one of {', '.join(SPLIT_MODES)}"
            )
        self.filename = filename
        self.split_mode = split_mode

    def tokenize(self, text: str) -> Tuple[Token, ...]:
        """Tokenize SimpleLang source code"""
        stripped, origin = strip_comments(text)
        line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

        tokens = []
        for word, start in self._split(stripped):
            offset = origin[start]
            line = bisect.bisect_right(line_starts, offset)
            column = offset - line_starts[line - 1] + 1
            span = SourceSpan(self.filename, line, column, word)
            tokens.append(Token(word, span))

        return tuple(tokens)

    def _split(self, stripped: str) -> List[Tuple[str, int]]:
        if self.split_mode == "boundary":
            return [
                (toks[0], start)
                for toks, start, _ in BOUNDARY_TOKEN.scan_string(stripped)
            ]
        return [(m.group(0), m.start()) for m in _WORD_PATTERN.finditer(stripped)]


class TokenCursor:
    """Single forward cursor over a token sequence with one token of lookahead"""

    def __init__(self, tokens: Tuple[Token, ...]):
        self._tokens = tuple(tokens)
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._tokens)

    @property
    def current(self) -> Optional[Token]:
        if self.at_end:
            return None
        return self._tokens[self._position]

    def peek(self) -> Optional[Token]:
        """Token after the current one"""
        if self._position + 1 >= len(self._tokens):
            return None
        return self._tokens[self._position + 1]

    def current_is(self, *texts: str) -> bool:
        return self.current is not None and self.current.text in texts

    def advance(self) -> Token:
        """Consume and return the current token"""
        assert not self.at_end, "advanced past end of input"
        token = self._tokens[self._position]
        self._position += 1
        return token


# Factory functions for creating tokenizers
def create_tokenizer(filename: str = "<input>", split_mode: str = "whitespace") -> Tokenizer:
    """Create a SimpleLang tokenizer"""
    return Tokenizer(filename, split_mode)


def create_boundary_tokenizer(filename: str = "<input>") -> Tokenizer:
    """Create a tokenizer that also splits around operators and punctuation"""
    return Tokenizer(filename, split_mode="boundary")


def pretty_print_tokens(tokens: Tuple[Token, ...]) -> str:
    """Render a token stream for debugging, one token per line"""
    lines = []
    for token in tokens:
        where = str(token.span) if token.span else "?"
        lines.append(f"{where:<20} {token.kind.name:<12} {token.text}")
    return '\n'.join(lines)
