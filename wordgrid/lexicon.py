from __future__ import annotations

import logging
import random
import re
from typing import Iterable, Iterator

from wordgrid.errors import EmptyLexiconError

logger = logging.getLogger("wordgrid")

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 16

# hunspell .dic lines look like "palavra/ABC"; only the head is a word
_WORD_STOP = re.compile(r"[/\s]")


class LexiconNode:
    __slots__ = ("children", "terminal")

    def __init__(self):
        self.children: dict[str, LexiconNode] = {}
        self.terminal: bool = False


class SearchCursor:
    """A walking position in a Lexicon.

    Cursors only ever hold a reference to a node, so copying one is cheap and
    the copies never interfere with each other.
    """

    __slots__ = ("_node", "_prefix")

    def __init__(self, node: LexiconNode, prefix: str = ""):
        self._node = node
        self._prefix = prefix

    def advance(self, letter: str) -> bool:
        """Move to the child for `letter`. Leaves the cursor untouched on failure."""
        child = self._node.children.get(letter)
        if child is None:
            return False
        self._node = child
        self._prefix += letter
        return True

    def is_word(self) -> bool:
        return self._node.terminal

    @property
    def is_exhausted(self) -> bool:
        return not self._node.children

    @property
    def prefix(self) -> str:
        return self._prefix

    def copy(self) -> SearchCursor:
        return SearchCursor(self._node, self._prefix)

    __copy__ = copy

    def __repr__(self) -> str:
        return f"SearchCursor(prefix={self._prefix!r}, word={self.is_word()})"


class Lexicon:
    """Prefix tree of the accepted vocabulary.

    Built once, then only read: every query walks the shared nodes without
    touching them.
    """

    def __init__(self):
        self.root = LexiconNode()
        self._size = 0

    def insert(self, word: str):
        if not word:
            return
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = LexiconNode()
            node = node.children[ch]
        if not node.terminal:
            node.terminal = True
            self._size += 1

    def start_cursor(self) -> SearchCursor:
        return SearchCursor(self.root)

    def random_long_word(self, rng: random.Random | None = None) -> str:
        """Walk uniformly random edges from the root until reaching a leaf.

        Every leaf terminates an inserted word, and since the walk does not
        stop at the first terminal node it favours the longer words of the
        branch it happens to take.
        """
        if self.is_empty:
            raise EmptyLexiconError("cannot sample a word from an empty lexicon")
        rng = rng or random
        node = self.root
        letters = []
        while node.children:
            letter = rng.choice(list(node.children))
            letters.append(letter)
            node = node.children[letter]
        return "".join(letters)

    def words(self) -> Iterator[str]:
        """Lazily yield every stored word, depth first in insertion order of letters."""
        def visit(node: LexiconNode, prefix: str) -> Iterator[str]:
            if node.terminal:
                yield prefix
            for letter, child in node.children.items():
                yield from visit(child, prefix + letter)

        return visit(self.root, "")

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        cursor = self.start_cursor()
        for ch in word:
            if not cursor.advance(ch):
                return False
        return cursor.is_word()

    def __iter__(self) -> Iterator[str]:
        return self.words()


def normalize_word(token: str, min_length: int = MIN_WORD_LENGTH, max_length: int = MAX_WORD_LENGTH) -> str | None:
    """Return the upper-cased word at the head of `token`, or None if it is unusable.

    Only plain A-Z words within the length limits are accepted; accented or
    hyphenated tokens are rejected rather than transliterated.
    """
    head = _WORD_STOP.split(token.strip(), maxsplit=1)[0]
    if not (min_length <= len(head) <= max_length):
        return None
    if not (head.isascii() and head.isalpha()):
        return None
    return head.upper()


def build_lexicon(tokens: Iterable[str], min_length: int = MIN_WORD_LENGTH, max_length: int = MAX_WORD_LENGTH) -> Lexicon:
    lexicon = Lexicon()
    skipped = 0
    for token in tokens:
        word = normalize_word(token, min_length, max_length)
        if word is None:
            skipped += 1
            continue
        lexicon.insert(word)

    if lexicon.is_empty:
        logger.warning("Lexicon built empty (%d tokens skipped)", skipped)
    else:
        logger.info("Lexicon built: %d words, %d tokens skipped", len(lexicon), skipped)
    return lexicon


def load_lexicon(path: str, min_length: int = MIN_WORD_LENGTH, max_length: int = MAX_WORD_LENGTH) -> Lexicon:
    """Build a Lexicon from a word list file, one token per line.

    A missing or unreadable file is logged and yields an empty Lexicon; callers
    must check `is_empty` before generating puzzles from it.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return build_lexicon(f, min_length, max_length)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read word list %s: %s", path, e)
        return Lexicon()
