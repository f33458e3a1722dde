"""
The Game holds all of the information about a single game: tags, the moves of the main line and the result.
It is either the result of parsing PGN text, or created by hand from a list of moves.

Replaying the moves (`positions()`) is where the parsed movetext meets the move calculations.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from pgn.chess.fen import STARTING_FEN, position_from_fen, position_to_fen
from pgn.chess.move_text import MoveText, Variation
from pgn.chess.pieces import Color
from pgn.chess.position import Position
from pgn.core.exceptions import MoveError
from pgn.core.shared_types import GameResult

logger = logging.getLogger(__name__)

# Tags with a defined meaning: the Seven Tag Roster followed by the common optional tags
TAGS: dict[str, str] = {
    "event": "Event",
    "site": "Site",
    "date": "Date",
    "round": "Round",
    "white": "White",
    "black": "Black",
    "result": "Result",
    "annotator": "Annotator",
    "ply_count": "PlyCount",
    "time_control": "TimeControl",
    "time": "Time",
    "termination": "Termination",
    "mode": "Mode",
    "fen": "FEN",
    "setup": "SetUp",
}

ZERO_CASTLING = re.compile(r"\A0-0(-0)?(?=[+#]?\Z)")

MoveInput = str | MoveText


def _normalize_move(move: MoveInput) -> MoveText:
    """Accept SAN strings or MoveText. Castling written with zeros is standardized to use O's."""
    if isinstance(move, str):
        move = MoveText(move)
    notation = ZERO_CASTLING.sub(
        lambda match: match.group(0).replace("0", "O"), move.notation
    )
    return MoveText(notation, list(move.annotations), move.comment, move.variations)


def _tag_accessor(tag: str) -> property:
    def _get(self: "Game") -> Optional[str]:
        return self.tags.get(tag)

    _get.__doc__ = f"Value of the {tag!r} tag, if present"
    return property(_get)


@dataclass
class Game:
    """
    * moves: main line of the game. Variations hang off the move they replace.
    * tags: metadata about the game, in the order they were written
    * result: the game termination marker ('1-0', '0-1', '1/2-1/2' or '*')
    * pgn: the PGN source text this game was parsed from (None for games created by hand)

    NOTE: the moves are not changed after construction, so positions are only replayed once.
    """

    moves: list[MoveInput]
    tags: dict[str, str] = field(default_factory=dict)
    result: Optional[str] = None
    pgn: Optional[str] = None
    _positions: Optional[list[Position]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.moves = [_normalize_move(move) for move in self.moves]

    # --- TAG ROSTER ---
    event = _tag_accessor(TAGS["event"])
    site = _tag_accessor(TAGS["site"])
    date = _tag_accessor(TAGS["date"])
    round = _tag_accessor(TAGS["round"])
    white = _tag_accessor(TAGS["white"])
    black = _tag_accessor(TAGS["black"])
    annotator = _tag_accessor(TAGS["annotator"])
    ply_count = _tag_accessor(TAGS["ply_count"])
    time_control = _tag_accessor(TAGS["time_control"])
    time = _tag_accessor(TAGS["time"])
    termination = _tag_accessor(TAGS["termination"])
    mode = _tag_accessor(TAGS["mode"])
    setup = _tag_accessor(TAGS["setup"])

    @property
    def fen(self) -> str:
        """FEN of the starting position: the FEN tag, or the standard start"""
        return self.tags.get(TAGS["fen"], STARTING_FEN)

    # --- REPLAY ---
    @property
    def starting_position(self) -> Position:
        fen = self.tags.get(TAGS["fen"])
        return position_from_fen(fen) if fen else Position.start()

    def positions(self) -> list[Position]:
        """
        Every position of the game: the starting position, then one per move of the main line.
        ----

        Raises the MoveError of the first move that cannot be made, with its ply index attached.
        """
        if self._positions is None:
            position = self.starting_position
            positions = [position]
            for ply, move in enumerate(self.moves):
                try:
                    position = position.move(move.notation)
                except MoveError as exc:
                    raise exc.at_ply(ply) from exc
                positions.append(position)
            logger.debug("Replayed %d plies", len(self.moves))
            self._positions = positions
        return self._positions

    def fen_list(self) -> list[str]:
        """FEN of every position, starting position included"""
        return [position_to_fen(position) for position in self.positions()]

    # --- EXPORT ---
    @property
    def notations(self) -> list[str]:
        return [move.notation for move in self.moves]

    @property
    def movetext(self) -> str:
        """
        Numbered movetext of the game, including NAGs, comments and variations (without the result)

        ex) '1. e4 e5 (1... c5 2. Nf3) 2. Nf3 Nc6'
        """
        start = self.starting_position
        return _join_movetext(
            _movetext_tokens(self.moves, start.color_to_move, start.fullmove_number)
        )

    def to_pgn(self) -> str:
        """Regenerate the game as PGN: tag section, blank line, movetext and result"""
        lines = [f'[{name} "{_escape(value)}"]' for name, value in self.tags.items()]
        lines.append("")
        movetext = self.movetext
        result = self.result or GameResult.UNKNOWN.value
        lines.append(f"{movetext} {result}" if movetext else result)
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        """Plain data export. 'fens' holds the position after each move (starting position excluded)."""
        fens = self.fen_list()[1:]
        return {
            "pgn": self.pgn if self.pgn is not None else self.to_pgn(),
            "tags": dict(self.tags),
            "movetext": self.movetext,
            "result": self.result,
            "moves": self.notations,
            "fens": fens,
            "moves_fens": [list(pair) for pair in zip(self.notations, fens)],
        }


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True)
class _Line:
    """A sequence of moves still to be written, and the move number of its next move"""

    moves: Variation
    color: Color
    number: int
    index: int = 0
    needs_number: bool = True


def _movetext_tokens(moves: Variation, color: Color, number: int) -> list[str]:
    """
    Write a sequence of moves starting with `color` to move at fullmove `number`.
    A black move gets its own number ('12...') at the start, or after a comment or variation interrupted the line.

    Variations are walked with an explicit stack, so nesting depth is not limited by the interpreter.
    """
    tokens: list[str] = []
    pending: list[_Line | str] = [_Line(moves, color, number)]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            tokens.append(item)
            continue
        if item.index == len(item.moves):
            continue

        move = item.moves[item.index]
        if item.color == Color.WHITE:
            tokens.append(f"{item.number}.")
        elif item.needs_number:
            tokens.append(f"{item.number}...")
        tokens.append(move.notation)
        tokens.extend(move.annotations)
        if move.comment is not None:
            tokens.append(f"{{{move.comment}}}")

        # rest of the line comes after every variation of this move
        pending.append(
            _Line(
                item.moves,
                item.color.opponent,
                item.number + 1 if item.color == Color.BLACK else item.number,
                item.index + 1,
                needs_number=move.comment is not None or bool(move.variations),
            )
        )
        for variation in reversed(move.variations):
            pending.extend([")", _Line(variation, item.color, item.number), "("])
    return tokens


def _join_movetext(tokens: list[str]) -> str:
    """Space separated, except right after '(' and right before ')'"""
    parts: list[str] = []
    previous = None
    for token in tokens:
        if previous is not None and previous != "(" and token != ")":
            parts.append(" ")
        parts.append(token)
        previous = token
    return "".join(parts)
