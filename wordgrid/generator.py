from __future__ import annotations

import logging
import random
import string

from wordgrid.board import BOARD_SIZE, Board, Cell
from wordgrid.errors import BoardNotEmptyError
from wordgrid.lexicon import Lexicon

logger = logging.getLogger("wordgrid")


def generate_board(lexicon: Lexicon, size: int = BOARD_SIZE, rng: random.Random | None = None) -> Board:
    board = Board(size)
    fill_board(board, lexicon, rng)
    return board


def fill_board(board: Board, lexicon: Lexicon, rng: random.Random | None = None) -> Board:
    """Fill an empty board by laying random long words along random walks.

    Each word is written cell by cell, stepping to a random unused neighbour
    after every letter. When the current cell has no unused neighbour the rest
    of the word is dropped and the next word starts at a random empty cell.
    Every letter placed consumes an empty cell, so the loop terminates.

    Placed words are not guaranteed to survive: solutions must be recomputed
    from the finished board.
    """
    if not board.is_empty:
        raise BoardNotEmptyError("fill_board needs a board with no letters on it")
    rng = rng or random

    empty = board.empty_cells()
    used: set[Cell] = set()
    cell = rng.choice(empty)
    words_sampled = 0

    while empty:
        word = lexicon.random_long_word(rng)
        words_sampled += 1

        for letter in word:
            board[cell] = letter
            if cell not in used:
                used.add(cell)
                empty.remove(cell)

            neighbors = board.neighbors(cell)
            if any(n not in used for n in neighbors):
                while cell in used:
                    cell = rng.choice(neighbors)
            else:
                if empty:
                    cell = rng.choice(empty)
                break

    logger.debug("Filled %dx%d board from %d sampled words", board.size, board.size, words_sampled)
    return board


def random_board(size: int = BOARD_SIZE, rng: random.Random | None = None) -> Board:
    """A board of uniformly random letters, with no attempt to embed words."""
    rng = rng or random
    board = Board(size)
    for cell in board.cells():
        board[cell] = rng.choice(string.ascii_uppercase)
    return board
