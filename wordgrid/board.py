"""Square letter grid with king-move adjacency."""

from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence

from wordgrid.errors import InvalidBoardError

BOARD_SIZE = 4
EMPTY = ""


class Cell(NamedTuple):
    """A board position, 1-based."""

    row: int
    column: int


class Board:
    """An N x N grid of letters, stored row-major.

    Cells start out EMPTY and are filled by a generator. Once full, a board is
    treated as read-only input to the solver.
    """

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size < 1:
            raise InvalidBoardError(f"Board size must be positive, got {size}")
        self.size = size
        self._letters: list[str] = [EMPTY] * (size * size)
        self._neighbors: dict[Cell, list[Cell]] = {}

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a full board from row strings, e.g. ["CATS", "REPO", ...]."""
        if not rows:
            raise InvalidBoardError("Board needs at least one row")
        board = cls(len(rows))
        for r, row in enumerate(rows, start=1):
            if len(row) != board.size:
                raise InvalidBoardError(
                    f"Row {r} has {len(row)} letters, expected {board.size}"
                )
            for c, letter in enumerate(row, start=1):
                board[Cell(r, c)] = letter.upper()
        return board

    def _index(self, cell: Cell) -> int:
        row, column = cell
        if not (1 <= row <= self.size and 1 <= column <= self.size):
            raise InvalidBoardError(f"Cell {tuple(cell)} is outside a {self.size}x{self.size} board")
        return (row - 1) * self.size + (column - 1)

    def __getitem__(self, cell: Cell | tuple[int, int]) -> str:
        return self._letters[self._index(cell)]

    def __setitem__(self, cell: Cell | tuple[int, int], letter: str) -> None:
        if len(letter) != 1 or not ("A" <= letter <= "Z"):
            raise InvalidBoardError(f"Cells hold a single letter A-Z, got {letter!r}")
        self._letters[self._index(cell)] = letter

    def letter(self, row: int, column: int) -> str:
        return self[Cell(row, column)]

    def set_letter(self, row: int, column: int, letter: str) -> None:
        self[Cell(row, column)] = letter

    def contains(self, cell: tuple[int, int]) -> bool:
        row, column = cell
        return 1 <= row <= self.size and 1 <= column <= self.size

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in range(1, self.size + 1):
            for column in range(1, self.size + 1):
                yield Cell(row, column)

    __iter__ = cells

    def empty_cells(self) -> list[Cell]:
        return [cell for cell in self.cells() if self[cell] == EMPTY]

    @property
    def is_full(self) -> bool:
        return EMPTY not in self._letters

    @property
    def is_empty(self) -> bool:
        return all(letter == EMPTY for letter in self._letters)

    def neighbors(self, cell: Cell | tuple[int, int]) -> list[Cell]:
        """Cells touching `cell`, scanning its 3x3 neighbourhood row by row."""
        cell = Cell(*cell)
        cached = self._neighbors.get(cell)
        if cached is not None:
            return cached

        self._index(cell)
        adj = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                n = Cell(cell.row + dr, cell.column + dc)
                if self.contains(n):
                    adj.append(n)
        self._neighbors[cell] = adj
        return adj

    @staticmethod
    def adjacent(a: tuple[int, int], b: tuple[int, int]) -> bool:
        return a != b and abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1

    def rows(self) -> list[str]:
        """Row-major serialization; empty cells render as '.'."""
        return [
            "".join(self._letters[r * self.size + c] or "." for c in range(self.size))
            for r in range(self.size)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._letters == other._letters

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __repr__(self) -> str:
        return f"Board({self.rows()!r})"
