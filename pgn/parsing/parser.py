"""
Entry points for reading PGN: text (or a file) in, Game objects out.
"""

import logging
from pathlib import Path

from pgn.chess.game import Game
from pgn.parsing.grammar import PgnGrammar

logger = logging.getLogger(__name__)

# PGN files in the wild are mostly Latin-1 (the standard asks for ISO 8859-1)
DEFAULT_ENCODING = "latin-1"


def parse(text: str) -> list[Game]:
    """
    Parse every game of a PGN database.
    ----

    Raises LexicalError / PgnSyntaxError for malformed text. Moves are NOT replayed here:
    move errors only surface when `Game.positions()` is called.
    """
    return [
        Game(
            moves=parsed.moves,
            tags=parsed.tags,
            result=parsed.result,
            pgn=parsed.pgn,
        )
        for parsed in PgnGrammar(text).parse_database()
    ]


def read_pgn_file(path: str | Path, encoding: str = DEFAULT_ENCODING) -> list[Game]:
    """Load and parse a PGN file"""
    text = Path(path).read_text(encoding=encoding)
    logger.debug("Read %d characters from %s", len(text), path)
    return parse(text)
