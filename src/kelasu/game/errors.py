"""Error taxonomy for Kelasu moves.

There are two user-facing families, both recoverable and both leaving the
game untouched:

- InvalidMoveSyntax: the command text could not be parsed
- InvalidMove: the move parsed but breaks a rule

Their str() is written to be shown directly to players.
"""

from enum import Enum

from kelasu.game.polyomino import NonPolyomino

MOVE_SYNTAX = """Valid moves:
\tmove <yx> to <yx>
\tmerge <piece> at <yx> with <yx> <yx> ...
\tresign
\tdraw
\tdecline"""


class KelasuError(Exception):
    """Base class for all Kelasu errors."""


class MoveCommandError(KelasuError):
    """Base class for errors a front end should show to the player."""


# Syntax errors


class InvalidMoveSyntax(MoveCommandError):
    """The move text could not be parsed."""

    detail = "Invalid move."

    def __str__(self) -> str:
        return f"Invalid move syntax: {self.detail}\n{MOVE_SYNTAX}"


class UnknownMove(InvalidMoveSyntax):
    detail = "The only valid moves are `move`, `merge`, `resign`, `draw`, and `decline`."

    def __init__(self, verb: str = "") -> None:
        super().__init__(verb)
        self.verb = verb


class MissingParameter(InvalidMoveSyntax):
    def __init__(self, parameter: str) -> None:
        super().__init__(parameter)
        self.parameter = parameter
        self.detail = f"Expected another parameter: {parameter}"


class InvalidParameter(InvalidMoveSyntax):
    def __init__(self, explanation: str) -> None:
        super().__init__(explanation)
        self.explanation = explanation
        self.detail = f"That parameter is invalid. {explanation}"


# Legality errors


class PieceMoveReason(Enum):
    """Why a piece cannot make a particular relocation."""

    NON_COMPASS_MOVE = "Moves must be either orthogonal or diagonal."
    TOO_FAR = "The piece can't move that far in that direction."
    BLOCKED = "There is another piece in the way."
    MUST_CAPTURE = "That piece must capture something in that direction."
    FRIENDLY_FIRE = "You cannot capture or move into your own pieces."
    RUNNER_NO_MELEE = "Runners cannot capture within a range of 1."
    CANNOT_RECALL_HERE = "Warriors can only return if they are on the opposite row."
    NON_BLANK_MERGE = "Only Blanks can merge together."


class InvalidMove(MoveCommandError):
    """The move breaks a rule of the game."""

    message = "That move is illegal."

    def __str__(self) -> str:
        return self.message


class GameOver(InvalidMove):
    message = "You cannot move after the game is over."


class DrawNotOffered(InvalidMove):
    message = "Did you just try to decline without first being offered a draw?"


class DrawOffered(InvalidMove):
    message = "You must accept or decline the draw."


class EmptyTile(InvalidMove):
    message = "You cannot move an empty tile."


class NotYourPiece(InvalidMove):
    message = "You cannot move your opponent's pieces."


class InvalidPieceMove(InvalidMove):
    def __init__(self, reason: PieceMoveReason) -> None:
        super().__init__(reason)
        self.reason = reason
        self.message = f"That piece cannot move that way: {reason.value}"


class InvalidMergeCount(InvalidMove):
    def __init__(self, expected: int) -> None:
        super().__init__(expected)
        self.expected = expected
        self.message = (
            f"Merging that piece requires exactly {expected} blanks, "
            "including the destination piece."
        )


class InvalidMergeKind(InvalidMove):
    message = "You cannot merge into that piece."


class NonPolyominoMerge(InvalidMove):
    def __init__(self, reason: NonPolyomino) -> None:
        super().__init__(reason)
        self.reason = reason
        self.message = (
            "The merging blanks must be next to each other and have no duplicates.\n"
            f"In this case, {reason.value}."
        )


class HomeMerge(InvalidMove):
    message = "You cannot merge pieces in the first two rows of your field."
