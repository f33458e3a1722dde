"""
One move of PGN movetext together with everything written around it.

Comments are stored without their delimiters: the text between the braces, or after the ';'.
Writing the game back out (`Game.movetext`) puts the braces back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

Variation = list["MoveText"]


@dataclass
class MoveText:
    """
    * notation: the SAN of the move, as written
    * annotations: NAGs in the order written ('$6', '!?', ...)
    * comment: text of the comment following the move, without its delimiters. Escapes and newlines are kept as written.
    * variations: alternatives to THIS move. Each variation is itself a sequence of MoveText (and can nest further).
    """

    notation: str
    annotations: list[str] = field(default_factory=list)
    comment: Optional[str] = None
    variations: list[Variation] = field(default_factory=list)

    def __str__(self) -> str:
        return self.notation
