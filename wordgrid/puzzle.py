from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from wordgrid.board import BOARD_SIZE, Board
from wordgrid.errors import InvalidPathError
from wordgrid.generator import generate_board, random_board
from wordgrid.lexicon import Lexicon
from wordgrid.solver import Solution, rank_solutions, solve, trace_word

logger = logging.getLogger("wordgrid")

GENERATORS = ("quality", "random")


@dataclass
class Puzzle:
    """A finished board and the solutions recomputed from it."""

    board: Board
    solutions: list[Solution] = field(default_factory=list)

    def __post_init__(self):
        self._by_word = {s.word: s for s in self.solutions}

    def find(self, word: str) -> Solution | None:
        return self._by_word.get(word.upper())

    @property
    def total_points(self) -> int:
        return sum(s.score for s in self.solutions)

    def verify(self, word: str, path: Sequence[tuple[int, int]]) -> int:
        """Points earned by claiming `word` along `path`.

        Raises InvalidPathError when the path is illegal or spells something
        other than `word`. A legal path spelling a non-solution earns 0.
        """
        word = word.upper()
        traced = trace_word(self.board, path)
        if traced != word:
            raise InvalidPathError(f"Path spells {traced!r}, not {word!r}")
        solution = self.find(word)
        return solution.score if solution else 0

    def to_dict(self, limit: int = 0) -> dict:
        return {
            "size": self.board.size,
            "board": self.board.rows(),
            "solutions": [s.to_dict() for s in rank_solutions(self.solutions, limit)],
            "solution_count": len(self.solutions),
            "total_points": self.total_points,
        }


def make_puzzle(
    lexicon: Lexicon,
    method: str = "quality",
    size: int = BOARD_SIZE,
    rng: random.Random | None = None,
) -> Puzzle:
    if method == "quality":
        board = generate_board(lexicon, size, rng)
    elif method == "random":
        board = random_board(size, rng)
    else:
        raise ValueError(f"Unknown generator {method!r}, expected one of {GENERATORS}")

    solutions = solve(board, lexicon)
    logger.info("Puzzle %s: %d solutions (method=%s)", " / ".join(board.rows()), len(solutions), method)
    return Puzzle(board, solutions)
