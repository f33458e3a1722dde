"""
Errors raised across layers.

Every error in the package derives from PgnError so callers can choose how broad to catch.
None of them are recovered from inside the package: the first error aborts the whole parse / replay.
"""

from typing import Optional


class PgnError(Exception):
    """Root of all errors raised by the package"""


# --- BOARD / NOTATION ERRORS ---
class InvalidSquareError(PgnError, ValueError):
    """Text that does not name a square ('a1' - 'h8'), or an off-board square converted to text."""


class FenFormatError(PgnError):
    """FEN string with the wrong number of fields, malformed ranks or out of range counters."""


# --- PGN TEXT ERRORS ---
class PgnTextError(PgnError):
    """
    Error found while reading PGN text.
    ---

    Carries the locator of the offending input: line (1-based), column (1-based) and character offset (0-based).
    """

    def __init__(self, message: str, line: int, column: int, offset: int) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
        super().__init__(f"{message} (line {line}, column {column}, offset {offset})")


class LexicalError(PgnTextError):
    """Input that does not start any known token"""


class PgnSyntaxError(PgnTextError):
    """Token sequence that does not match the PGN grammar"""


# --- MOVE ERRORS ---
class MoveError(PgnError):
    """
    Error attached to a single SAN move.
    ---

    `ply` is the zero-based index of the move within the game's main line, when known.
    """

    def __init__(
        self, message: str, san: Optional[str] = None, ply: Optional[int] = None
    ) -> None:
        self.message = message
        self.san = san
        self.ply = ply
        super().__init__(self._describe())

    def _describe(self) -> str:
        context: list[str] = []
        if self.san is not None:
            context.append(f"move {self.san!r}")
        if self.ply is not None:
            context.append(f"ply {self.ply}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"

    def at_ply(self, ply: int) -> "MoveError":
        """Copy of this error that also records where in the game it happened."""
        return type(self)(self.message, san=self.san, ply=ply)


class MoveDecodeError(MoveError):
    """Text that does not match the SAN grammar"""


class MoveResolutionError(MoveError):
    """No piece, or more than one piece, could have made the move"""


# --- SERVICE ERRORS ---
class InvalidRequestError(PgnError):
    """
    Request data that failed validation at the service boundary.
    NOTE: must not derive from ValueError, pydantic would wrap it in a ValidationError.
    """


class RepositoryError(PgnError):
    """Persistence layer could not find / store the record"""
