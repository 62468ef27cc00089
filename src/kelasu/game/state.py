"""Game state types for Kelasu."""

from dataclasses import dataclass
from enum import Enum

from kelasu.game.pieces import Team


class Phase(Enum):
    """What an ongoing game is waiting for."""

    RELOCATING = "relocating"  # Normal play: moves and merges
    DRAW_PENDING = "draw_pending"  # A draw is on offer and must be answered


class WinReason(Enum):
    """Why a game ended."""

    RESIGNATION = "resignation"
    AGREEMENT = "agreement"  # Draw offer accepted
    OCCUPATION = "occupation"  # All four victory tiles held
    DOMINATION = "domination"  # Opponent out of mobile pieces or Stones
    REPETITION = "repetition"  # Same position and turn seen four times
    STAGNATION = "stagnation"  # Too long without moving or merging a Blank


@dataclass(frozen=True)
class Winner:
    """Outcome of a finished game.

    Attributes:
        team: Winning team, or None for a draw
    """

    team: Team | None

    @property
    def is_draw(self) -> bool:
        return self.team is None

    def __str__(self) -> str:
        if self.team is None:
            return "Draw."
        return f"Winner: {self.team}."


@dataclass(frozen=True)
class Ongoing:
    """The game is in progress.

    Attributes:
        draw_offered: Whether the side to move must answer a draw offer
    """

    draw_offered: bool = False

    def __str__(self) -> str:
        if self.draw_offered:
            return "The opponent is offering a draw."
        return "Ongoing match."


@dataclass(frozen=True)
class Finished:
    """The game is over. Terminal."""

    winner: Winner

    def __str__(self) -> str:
        return str(self.winner)


GameState = Ongoing | Finished
