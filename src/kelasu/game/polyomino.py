"""Connectivity check for merge groups."""

from enum import Enum

from kelasu.game.position import Pos


class NonPolyomino(Enum):
    """Why a set of positions is not a single polyomino."""

    DISCONNECTED = "not all positions were next to each other"
    DUPLICATED = "some positions were duplicated"


class PolyominoError(ValueError):
    """Raised when positions do not form one connected, duplicate-free group."""

    def __init__(self, reason: NonPolyomino) -> None:
        super().__init__(reason.value)
        self.reason = reason


def verify_polyomino(pieces: list[Pos]) -> None:
    """Check that positions form one orthogonally connected group.

    The list is reordered in place: pieces[:right] is always a connected
    frontier grown from pieces[0], and each scanned piece pulls its
    neighbors from the unvisited tail into the frontier.

    Raises:
        PolyominoError: DUPLICATED if a position repeats, DISCONNECTED if some
            position cannot be reached from the first one
    """
    if len(set(pieces)) != len(pieces):
        raise PolyominoError(NonPolyomino.DUPLICATED)
    if len(pieces) <= 1:
        return

    left, right = 0, 1
    while left < right:
        # Pos.neighbors() is bounds-checked, so no wraparound across rows
        adjacent = set(pieces[left].neighbors())
        for i in range(right, len(pieces)):
            if pieces[i] in adjacent:
                pieces[right], pieces[i] = pieces[i], pieces[right]
                right += 1
                if right == len(pieces):
                    return
        left += 1

    raise PolyominoError(NonPolyomino.DISCONNECTED)
