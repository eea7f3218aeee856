"""
Board
=====

Square grid of pieces, the board generator, and gravity/refill.

The engine treats boards as copy-on-write: operations clone the board they
are given, mutate the clone and hand it back.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple, Union

import numpy as np

from breakfast_blitz.blitz_core.exceptions import InvalidCoordinate
from breakfast_blitz.blitz_core.pieces import EMPTY_PIECE, Piece, PieceType
from breakfast_blitz.blitz_core.rng import PieceGenerator


class Coordinate(NamedTuple):
    """Zero-indexed board position."""
    row: int
    col: int


class Board:
    """
    Fixed-size square grid, indexed ``board[row, col]``.

    Every cell always holds a Piece; a cleared cell holds an ``empty`` piece.
    """

    def __init__(self, cells: Sequence[Sequence[Piece]]):
        size = len(cells)
        if size == 0:
            raise ValueError("Board must have at least one row")
        rows: List[List[Piece]] = []
        for r, row in enumerate(cells):
            if len(row) != size:
                raise ValueError(f"Board must be square: row {r} has {len(row)} cells, expected {size}")
            for c, piece in enumerate(row):
                if not isinstance(piece, Piece):
                    raise ValueError(f"Cell ({r}, {c}) holds {piece!r}, expected a Piece")
            rows.append(list(row))
        self._size = size
        self._cells = rows

    @classmethod
    def from_types(
        cls,
        grid: Sequence[Sequence[Union[str, PieceType]]],
        id_prefix: str = "p"
    ) -> "Board":
        """
        Build a board from piece-type names, one id per cell.

        Useful for fixtures: ``Board.from_types([["toast", "honey", ...], ...])``.
        """
        cells = [
            [
                Piece(type=PieceType(kind), id=f"{id_prefix}{r}_{c}")
                if PieceType(kind) is not PieceType.EMPTY else EMPTY_PIECE
                for c, kind in enumerate(row)
            ]
            for r, row in enumerate(grid)
        ]
        return cls(cells)

    @property
    def size(self) -> int:
        """Edge length of the grid."""
        return self._size

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._size, self._size)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def check_coordinate(self, row, col) -> Coordinate:
        """
        Validate a coordinate and return it as a Coordinate.

        Raises:
            InvalidCoordinate: If the coordinate is missing or off the board.
        """
        if row is None or col is None:
            raise InvalidCoordinate(row, col, self._size, "A target cell (row, col) is required")
        if isinstance(row, bool) or isinstance(col, bool):
            raise InvalidCoordinate(row, col, self._size)
        if not isinstance(row, (int, np.integer)) or not isinstance(col, (int, np.integer)):
            raise InvalidCoordinate(row, col, self._size)
        if not self.in_bounds(row, col):
            raise InvalidCoordinate(row, col, self._size)
        return Coordinate(int(row), int(col))

    def __getitem__(self, key: Tuple[int, int]) -> Piece:
        row, col = key
        coord = self.check_coordinate(row, col)
        return self._cells[coord.row][coord.col]

    def __setitem__(self, key: Tuple[int, int], piece: Piece) -> None:
        if not isinstance(piece, Piece):
            raise ValueError(f"Expected a Piece, got {piece!r}")
        row, col = key
        coord = self.check_coordinate(row, col)
        self._cells[coord.row][coord.col] = piece

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({self._size}x{self._size})"

    def __str__(self) -> str:
        width = max(len(t.value) for t in PieceType)
        return "\n".join(
            " ".join(piece.type.value.ljust(width) for piece in row)
            for row in self._cells
        )

    def clone(self) -> "Board":
        """Copy of the grid; pieces are immutable so rows are copied shallowly."""
        return Board(self._cells)

    def rows(self) -> Tuple[Tuple[Piece, ...], ...]:
        """Immutable view of all rows."""
        return tuple(tuple(row) for row in self._cells)

    def cells(self) -> Iterator[Tuple[Coordinate, Piece]]:
        """Iterate (coordinate, piece) in row-major order."""
        for r, row in enumerate(self._cells):
            for c, piece in enumerate(row):
                yield Coordinate(r, c), piece

    def coordinates_of(self, piece_type: PieceType) -> List[Coordinate]:
        """All cells holding the given type, row-major."""
        return [coord for coord, piece in self.cells() if piece.type is piece_type]

    def count(self, piece_type: PieceType) -> int:
        return len(self.coordinates_of(piece_type))

    def type_grid(self) -> List[List[PieceType]]:
        return [[piece.type for piece in row] for row in self._cells]

    def to_array(self) -> np.ndarray:
        """Piece-type codes as an int8 (size, size) array; empty is 0."""
        return np.array(
            [[piece.type.code for piece in row] for row in self._cells],
            dtype=np.int8
        )

    def is_complete(self) -> bool:
        """True when every cell holds a Piece (never None)."""
        return len(self._cells) == self._size and all(
            len(row) == self._size and all(isinstance(p, Piece) for p in row)
            for row in self._cells
        )

    def has_empty(self) -> bool:
        return any(piece.is_empty for _, piece in self.cells())

    def swap(self, a: Coordinate, b: Coordinate) -> None:
        """Exchange two cells in place."""
        a = self.check_coordinate(*a)
        b = self.check_coordinate(*b)
        self._cells[a.row][a.col], self._cells[b.row][b.col] = (
            self._cells[b.row][b.col],
            self._cells[a.row][a.col],
        )

    def clear(self, coords: Iterable[Coordinate]) -> int:
        """
        Empty the given cells in place.

        Returns:
            Number of cells that were non-empty before clearing.
        """
        cleared = 0
        for row, col in coords:
            if not self._cells[row][col].is_empty:
                cleared += 1
            self._cells[row][col] = EMPTY_PIECE
        return cleared

    def apply_gravity(self, generator: PieceGenerator) -> List[Coordinate]:
        """
        Compact non-empty pieces to the bottom of each column and refill the top.

        Relative order within a column is preserved. Vacated cells at the top
        of each column receive fresh pieces from ``generator``.

        Returns:
            Coordinates that were refilled.
        """
        refilled: List[Coordinate] = []
        size = self._size
        for col in range(size):
            write_row = size - 1
            for row in range(size - 1, -1, -1):
                piece = self._cells[row][col]
                if not piece.is_empty:
                    if write_row != row:
                        self._cells[write_row][col] = piece
                        self._cells[row][col] = EMPTY_PIECE
                    write_row -= 1
            for row in range(write_row, -1, -1):
                self._cells[row][col] = generator.refill_piece()
                refilled.append(Coordinate(row, col))
        return refilled


def generate_board(
    size: int,
    generator: PieceGenerator,
    with_obstacles: bool = False
) -> Board:
    """
    Fill a size x size board with freshly spawned pieces.

    Initial runs are left in place; no match removal is done here.

    Args:
        size: Edge length.
        generator: Source of pieces.
        with_obstacles: Roll the obstacle chance per cell.
    """
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    return Board([
        [generator.spawn(with_obstacles=with_obstacles) for _ in range(size)]
        for _ in range(size)
    ])


def are_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """True when the two cells share an edge."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def adjacent_swaps(size: int) -> List[Tuple[Coordinate, Coordinate]]:
    """
    Every adjacent swap on a size x size board.

    Horizontal pairs come first (row-major), then vertical pairs.
    """
    swaps: List[Tuple[Coordinate, Coordinate]] = []
    for row in range(size):
        for col in range(size - 1):
            swaps.append((Coordinate(row, col), Coordinate(row, col + 1)))
    for row in range(size - 1):
        for col in range(size):
            swaps.append((Coordinate(row, col), Coordinate(row + 1, col)))
    return swaps
