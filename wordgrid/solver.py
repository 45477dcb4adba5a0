from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from wordgrid.board import Board, Cell
from wordgrid.errors import BoardIncompleteError, InvalidPathError
from wordgrid.lexicon import Lexicon, SearchCursor


@dataclass(frozen=True)
class Solution:
    word: str
    score: int
    path: tuple[Cell, ...]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "score": self.score,
            "path": [[cell.row, cell.column] for cell in self.path],
        }


def score_word(word: str) -> int:
    """1 point for 3 letters, doubling plus one for every extra letter."""
    if len(word) < 3:
        return 0
    return 2 ** (len(word) - 2) - 1


def solve(board: Board, lexicon: Lexicon) -> list[Solution]:
    """Find every distinct lexicon word traceable on the board.

    DFS from each cell in row-major order, pruned by the lexicon. A word is
    kept with the first path that spells it; the result is in discovery order.
    """
    if not board.is_full:
        raise BoardIncompleteError(
            f"Board still has {len(board.empty_cells())} empty cells"
        )

    found: dict[str, Solution] = {}

    def dfs(path: tuple[Cell, ...], cursor: SearchCursor):
        if cursor.is_word():
            word = cursor.prefix
            if word not in found:
                found[word] = Solution(word, score_word(word), path)

        if cursor.is_exhausted:  # no word continues this prefix
            return
        for n in board.neighbors(path[-1]):
            if n in path:
                continue
            branch = cursor.copy()
            if branch.advance(board[n]):
                dfs(path + (n,), branch)

    for start in board.cells():
        cursor = lexicon.start_cursor()
        if cursor.advance(board[start]):
            dfs((start,), cursor)

    return list(found.values())


def rank_solutions(solutions: Iterable[Solution], limit: int = 0) -> list[Solution]:
    """Longest words first, then alphabetical. `limit <= 0` keeps everything."""
    ranked = sorted(solutions, key=lambda s: (-len(s.word), s.word))
    return ranked[:limit] if limit > 0 else ranked


def trace_word(board: Board, path: Sequence[tuple[int, int]]) -> str:
    """Return the word spelled by a claimed path, rejecting illegal moves."""
    if not path:
        raise InvalidPathError("Path is empty")

    cells = [Cell(*p) for p in path]
    for i, cell in enumerate(cells):
        if not board.contains(cell):
            raise InvalidPathError(f"Cell {tuple(cell)} is off the board")
        if cell in cells[:i]:
            raise InvalidPathError(f"Cell {tuple(cell)} is used twice")
        if i and not Board.adjacent(cells[i - 1], cell):
            raise InvalidPathError(
                f"Cells {tuple(cells[i - 1])} and {tuple(cell)} are not adjacent"
            )
    return "".join(board[cell] for cell in cells)
