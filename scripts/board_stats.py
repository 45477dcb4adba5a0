"""
Board quality report.

Usage:
    python -m scripts.board_stats <dictionary_path> [--boards N] [--seed S]

Examples:
    python -m scripts.board_stats dictionary.txt
    python -m scripts.board_stats dictionary.txt --boards 200 --size 5
    python -m scripts.board_stats dictionary.txt --method random --show

Generates N puzzles with each generator and prints solution counts and
points, so the word-embedding generator can be compared against purely
random letters.
"""
import argparse
import random
import statistics
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgrid.settings import settings
from wordgrid.lexicon import load_lexicon
from wordgrid.puzzle import GENERATORS, make_puzzle


def main():
    parser = argparse.ArgumentParser(description="Word Grid board quality report")
    parser.add_argument("dictionary", help="Path to a word list, one word per line")
    parser.add_argument("--boards", type=int, default=50, help="Puzzles per generator (default: 50)")
    parser.add_argument("--size", type=int, default=settings.BOARD_SIZE,
                        help=f"Board size (default: {settings.BOARD_SIZE})")
    parser.add_argument("--method", choices=GENERATORS, default=None,
                        help="Only report one generator")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible boards")
    parser.add_argument("--show", action="store_true", help="Print every board and its best words")
    args = parser.parse_args()

    dict_path = Path(args.dictionary)
    if not dict_path.exists():
        print(f"Error: {dict_path} does not exist")
        sys.exit(1)

    lexicon = load_lexicon(str(dict_path), settings.MIN_WORD_LENGTH, settings.MAX_WORD_LENGTH)
    if lexicon.is_empty:
        print(f"Error: no usable words in {dict_path}")
        sys.exit(1)
    print(f"Lexicon: {len(lexicon)} words")

    rng = random.Random(args.seed)
    methods = [args.method] if args.method else list(GENERATORS)

    for method in methods:
        counts = []
        points = []
        for _ in range(args.boards):
            puzzle = make_puzzle(lexicon, method, args.size, rng)
            counts.append(len(puzzle.solutions))
            points.append(puzzle.total_points)
            if args.show:
                print()
                print(puzzle.board)
                best = puzzle.to_dict(limit=5)["solutions"]
                print("  " + ", ".join(f"{s['word']}({s['score']})" for s in best))

        print()
        print(f"=== {method} ({args.boards} boards, {args.size}x{args.size}) ===")
        print(f"  solutions: mean={statistics.mean(counts):.1f} median={statistics.median(counts)} "
              f"min={min(counts)} max={max(counts)}")
        print(f"  points:    mean={statistics.mean(points):.1f} median={statistics.median(points)} "
              f"max={max(points)}")
        empty = sum(1 for c in counts if c == 0)
        if empty:
            print(f"  boards with no solutions: {empty}")


if __name__ == "__main__":
    main()
