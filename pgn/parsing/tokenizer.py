"""
Lexer for PGN text
---

Turns the raw text into a list of tokens, skipping whitespace and '%' escape lines.
Every token remembers where it came from (offset, line, column), so the grammar can report errors
and slice the exact source text of each game.

Key idea: at each offset every token pattern is tried, and the LONGEST match wins.
Ties go to the pattern listed first in TOKEN_PATTERNS. So '1-0' is a result and not move number '1',
and 'e4' is a move and not a tag name.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

from pgn.core.exceptions import LexicalError


class TokenKind(Enum):
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    TAG_NAME = auto()
    STRING = auto()
    SAN_MOVE = auto()
    MOVE_NUMBER = auto()
    NAG = auto()
    COMMENT = auto()
    TERMINATION = auto()
    END = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int  # 0-based index of the first character
    line: int  # 1-based
    column: int  # 1-based

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


SAN_MOVE_PATTERN = r"""
    (?:
        --                                  # null move (used in variations)
      | [O0]-[O0](?:-[O0])?                 # castling (O-O, O-O-O, 0-0, 0-0-0)
      | [KQRBN][a-h]?[1-8]?x?[a-h][1-8]     # piece moves w/ optional specifier and capture (Bd2, N4c3, Raxc1)
      | [a-h][1-8]?x[a-h][1-8]              # pawn captures (exd5)
      | [a-h][1-8]                          # pawn moves (e4, d7)
    )
    (?:=[QRBN])?                            # promotion (d8=Q)
    [+\#]?                                  # check / checkmate
"""

# Order matters only to break ties between matches of equal length
TOKEN_PATTERNS: list[tuple[TokenKind, re.Pattern[str]]] = [
    (TokenKind.TERMINATION, re.compile(r"1-0|0-1|1/2-1/2|\*")),
    (TokenKind.SAN_MOVE, re.compile(SAN_MOVE_PATTERN, re.VERBOSE)),
    (TokenKind.MOVE_NUMBER, re.compile(r"\d+\.*")),
    (TokenKind.NAG, re.compile(r"\$\d+|[?!][?!]?")),
    (TokenKind.STRING, re.compile(r'"(?:[^"\\\n]|\\.)*"')),
    (TokenKind.TAG_NAME, re.compile(r"[A-Za-z0-9_]+")),
    (TokenKind.LEFT_BRACKET, re.compile(r"\[")),
    (TokenKind.RIGHT_BRACKET, re.compile(r"\]")),
    (TokenKind.LEFT_PAREN, re.compile(r"\(")),
    (TokenKind.RIGHT_PAREN, re.compile(r"\)")),
]

WHITESPACE = re.compile(r"\s+")
ESCAPE_LINE = re.compile(r"%[^\n]*")
REST_OF_LINE_COMMENT = re.compile(r";[^\n]*")
COMMENT_ESCAPES = frozenset("\\{}")


class Tokenizer:
    """
    Holds the lexing state of ONE input buffer (offset and line bookkeeping).
    A fresh Tokenizer is made for every call of `tokenize()`, nothing is shared between buffers.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0
        self.line = 1
        self.line_start = 0

    def tokens(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_ignored()
            if self.offset >= len(self.text):
                break
            tokens.append(self._next_token())
        tokens.append(self._make_token(TokenKind.END, ""))
        return tokens

    def _skip_ignored(self) -> None:
        """Whitespace and '%' escape lines are insignificant"""
        while self.offset < len(self.text):
            match = WHITESPACE.match(self.text, self.offset) or ESCAPE_LINE.match(
                self.text, self.offset
            )
            if match is None:
                return
            self._advance(match.end())

    def _next_token(self) -> Token:
        character = self.text[self.offset]
        if character == "{":
            return self._consume(TokenKind.COMMENT, self._brace_comment_end())
        if character == ";":
            match = REST_OF_LINE_COMMENT.match(self.text, self.offset)
            return self._consume(TokenKind.COMMENT, match.end())

        best_kind, best_end = None, self.offset
        for kind, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.text, self.offset)
            if match is not None and match.end() > best_end:
                best_kind, best_end = kind, match.end()

        if best_kind is None:
            snippet = self.text[self.offset : self.offset + 20]
            raise LexicalError(
                f"Unmatched input {snippet!r}", self.line, self._column(), self.offset
            )
        return self._consume(best_kind, best_end)

    def _brace_comment_end(self) -> int:
        """
        Comments are balanced: '{ a { b } c }' is one comment.
        A backslash escapes a following brace or backslash. Newlines are part of the comment.
        """
        depth = 0
        index = self.offset
        while index < len(self.text):
            character = self.text[index]
            if character == "\\" and self.text[index + 1 : index + 2] in COMMENT_ESCAPES:
                index += 2
                continue
            if character == "{":
                depth += 1
            elif character == "}":
                depth -= 1
                if depth == 0:
                    return index + 1
            index += 1
        raise LexicalError(
            "Unterminated comment", self.line, self._column(), self.offset
        )

    def _consume(self, kind: TokenKind, end: int) -> Token:
        token = self._make_token(kind, self.text[self.offset : end])
        self._advance(end)
        return token

    def _make_token(self, kind: TokenKind, text: str) -> Token:
        return Token(kind, text, self.offset, self.line, self._column())

    def _advance(self, end: int) -> None:
        """Move to `end`, keeping track of the line we are on"""
        newlines = self.text.count("\n", self.offset, end)
        if newlines:
            self.line += newlines
            self.line_start = self.text.rfind("\n", self.offset, end) + 1
        self.offset = end

    def _column(self) -> int:
        return self.offset - self.line_start + 1


def tokenize(text: str) -> list[Token]:
    """All tokens of the text, always ending with a single END token"""
    return Tokenizer(text).tokens()
