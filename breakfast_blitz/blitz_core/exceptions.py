"""
Exceptions
==========

Errors raised by the match core for caller mistakes. Ordinary rejected moves
(no match, no moves left, empty inventory) are reported through result
objects instead.
"""


class InvalidCoordinate(IndexError):
    """Coordinate outside the board, or a targeted power-up used without a target."""

    def __init__(self, row, col, size: int, message: str = ""):
        self.row = row
        self.col = col
        self.size = size
        super().__init__(message or f"Coordinate ({row}, {col}) outside board [0, {size})")


class NonAdjacentSwap(ValueError):
    """Swap between cells that do not share an edge."""
    pass


class UnknownPowerUp(KeyError):
    """Power-up key not recognised by the executor."""
    pass
