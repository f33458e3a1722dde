"""
Parser for the PGN grammar
---

database      := game*
game          := tag_section movetext_section
tag_section   := tag_pair*
tag_pair      := '[' tag_name string ']'
movetext_section := element* termination
element       := move_number                               (discarded)
               | san_move annotation* comment? variation*
               | san_move comment annotation* variation*
               | comment                                   (discarded)
variation     := '(' element* ')'

Every call of `parse_database()` works on its own PgnGrammar instance: the token stream, the cursor
and the source buffer all live on the instance, so independent buffers can be parsed side by side.
Tags and moves are read by recursive descent, variations with an explicit stack of the ones still open.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import NoReturn, Optional

from pgn.chess.move_text import MoveText, Variation
from pgn.core.exceptions import PgnSyntaxError
from pgn.parsing.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

TAG_VALUE_ESCAPE = re.compile(r"\\([\\\"])")
TAG_NAME_KINDS = (TokenKind.TAG_NAME, TokenKind.SAN_MOVE)


@dataclass
class ParsedGame:
    """
    * tags: tag pairs in the order written. A repeated tag keeps its first position and its last value.
    * moves: main line of the game
    * result: the termination marker
    * pgn: exact source text of the game, from its first token up to and including the termination marker
    """

    tags: dict[str, str] = field(default_factory=dict)
    moves: list[MoveText] = field(default_factory=list)
    result: str = "*"
    pgn: str = ""


@dataclass
class _OpenVariation:
    """A variation whose closing ')' has not been read yet"""

    opening: Token
    owner: MoveText  # the move the variation is an alternative to
    parent_moves: Variation  # the line to continue once it closes


class PgnGrammar:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: list[Token] = tokenize(text)
        self.index = 0

    # --- CURSOR ---
    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _at(self, *kinds: TokenKind) -> bool:
        return self.current.kind in kinds

    def _advance(self) -> Token:
        token = self.current
        if token.kind != TokenKind.END:
            self.index += 1
        return token

    def _expect(self, kinds: tuple[TokenKind, ...], description: str) -> Token:
        if not self._at(*kinds):
            self._fail(f"Expected {description}")
        return self._advance()

    def _fail(self, message: str, token: Optional[Token] = None) -> NoReturn:
        token = token or self.current
        found = "end of input" if token.kind == TokenKind.END else repr(token.text)
        raise PgnSyntaxError(
            f"{message}, found {found}", token.line, token.column, token.offset
        )

    # --- PRODUCTIONS ---
    def parse_database(self) -> list[ParsedGame]:
        """Every game of the text, in order. The first malformed game aborts the whole parse."""
        games: list[ParsedGame] = []
        while True:
            # comments between games belong to no game
            while self._at(TokenKind.COMMENT):
                self._advance()
            if self._at(TokenKind.END):
                break
            games.append(self._parse_game())
        logger.debug("Parsed %d games", len(games))
        return games

    def _parse_game(self) -> ParsedGame:
        first = self.current
        tags = self._parse_tag_section()
        moves = self._parse_movetext()
        termination = self._expect(
            (TokenKind.TERMINATION,), "a move or a game termination marker"
        )
        game = ParsedGame(
            tags=tags,
            moves=moves,
            result=termination.text,
            pgn=self.text[first.offset : termination.end],
        )
        logger.debug(
            "Parsed game at line %d: %d tags, %d plies, result %s",
            first.line,
            len(tags),
            len(moves),
            game.result,
        )
        return game

    def _parse_tag_section(self) -> dict[str, str]:
        tags: dict[str, str] = {}
        while self._at(TokenKind.LEFT_BRACKET):
            self._advance()
            name = self._expect(TAG_NAME_KINDS, "a tag name")
            value = self._expect((TokenKind.STRING,), "a quoted tag value")
            self._expect((TokenKind.RIGHT_BRACKET,), "']' to close the tag pair")
            tags[name.text] = _unescape_tag_value(value.text)
        return tags

    def _parse_movetext(self) -> Variation:
        """
        element* of the main line, with every variation attached to the move it follows.
        Open variations are kept on an explicit stack, nesting depth is bounded only by the input.
        Stops at the first main line token that cannot start an element and leaves it to the caller.
        """
        moves: Variation = []
        open_variations: list[_OpenVariation] = []
        # the move a '(' would attach to: the last move read, or the one whose variation just closed
        attach_to: Optional[MoveText] = None
        while True:
            if self._at(TokenKind.MOVE_NUMBER, TokenKind.COMMENT):
                self._advance()
                attach_to = None
            elif self._at(TokenKind.SAN_MOVE):
                attach_to = self._parse_move()
                moves.append(attach_to)
            elif self._at(TokenKind.LEFT_PAREN) and attach_to is not None:
                variation: Variation = []
                attach_to.variations.append(variation)
                open_variations.append(_OpenVariation(self._advance(), attach_to, moves))
                moves, attach_to = variation, None
            elif not open_variations:
                return moves
            elif self._at(TokenKind.RIGHT_PAREN):
                self._advance()
                closed = open_variations.pop()
                moves, attach_to = closed.parent_moves, closed.owner
            elif self._at(TokenKind.TERMINATION):
                self._fail("Game termination marker inside a variation")
            else:
                opening = open_variations[-1].opening
                self._fail(
                    f"Expected ')' to close the variation opened at line {opening.line}, column {opening.column}"
                )

    def _parse_move(self) -> MoveText:
        """san_move, then its annotations and comment in either order"""
        move = MoveText(self._advance().text)
        if self._at(TokenKind.COMMENT):
            move.comment = _comment_text(self._advance())
            move.annotations = self._parse_annotations()
        else:
            move.annotations = self._parse_annotations()
            if self._at(TokenKind.COMMENT):
                move.comment = _comment_text(self._advance())
        return move

    def _parse_annotations(self) -> list[str]:
        annotations: list[str] = []
        while self._at(TokenKind.NAG):
            annotations.append(self._advance().text)
        return annotations


def _unescape_tag_value(token_text: str) -> str:
    return TAG_VALUE_ESCAPE.sub(r"\1", token_text[1:-1])


def _comment_text(token: Token) -> str:
    """Comment text without its delimiters: '{...}' or the leading ';'"""
    if token.text.startswith("{"):
        return token.text[1:-1]
    return token.text[1:]
