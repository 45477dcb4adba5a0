import os
from dataclasses import dataclass, field
from pathlib import Path

from wordgrid.lexicon import MAX_WORD_LENGTH, MIN_WORD_LENGTH
from wordgrid.puzzle import GENERATORS


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    BOARD_SIZE: int = 4
    MIN_WORD_LENGTH: int = 3
    MAX_WORD_LENGTH: int = 16
    GENERATOR: str = "quality"

    MAX_RESULTS: int = 50
    DEBUG: bool = False

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed while the service runs
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "MIN_WORD_LENGTH": int,
    "MAX_WORD_LENGTH": int,
    "GENERATOR": str,
    "DEBUG": bool,
}

# Changing any of these means the lexicon has to be rebuilt
LEXICON_FIELDS = ("MIN_WORD_LENGTH", "MAX_WORD_LENGTH")


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(name: str, value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {type(value).__name__}")
    if typ is int:
        if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected int, got {value!r}")
        value = int(value)
        if value < 0:
            raise ValueError("must not be negative")
        if name in LEXICON_FIELDS and not (MIN_WORD_LENGTH <= value <= MAX_WORD_LENGTH):
            raise ValueError(f"must be between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}")
        return value
    value = str(value)
    if name == "GENERATOR" and value not in GENERATORS:
        raise ValueError(f"must be one of {', '.join(GENERATORS)}")
    return value


def update_settings(cfg: Settings, values: dict) -> dict[str, str]:
    """Apply `values` to `cfg`, returning an error message per rejected field.

    Valid fields are applied even when others in the same call are rejected.
    """
    errors: dict[str, str] = {}
    previous = {name: getattr(cfg, name) for name in LEXICON_FIELDS}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            setattr(cfg, name, _coerce(name, value, EDITABLE_FIELDS[name]))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)

    if cfg.MIN_WORD_LENGTH > cfg.MAX_WORD_LENGTH:
        for name, value in previous.items():
            setattr(cfg, name, value)
        errors.setdefault("MIN_WORD_LENGTH", "must not exceed MAX_WORD_LENGTH")
    return errors


settings = Settings()
