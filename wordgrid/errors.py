class WordgridError(Exception):
    """Base class for every error raised by the puzzle core."""


class EmptyLexiconError(WordgridError):
    """The lexicon holds no words, so nothing can be sampled or found."""


class BoardIncompleteError(WordgridError):
    pass


class BoardNotEmptyError(WordgridError):
    pass


class InvalidBoardError(WordgridError):
    pass


class InvalidPathError(WordgridError):
    pass
