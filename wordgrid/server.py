import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordgrid.errors import WordgridError
from wordgrid.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordgrid")

# Populated at startup
_lexicon = None


def _load_lexicon():
    global _lexicon
    from wordgrid.lexicon import load_lexicon

    logger.info(
        "Loading dictionary from %s (length %d-%d)",
        settings.DICTIONARY_PATH, settings.MIN_WORD_LENGTH, settings.MAX_WORD_LENGTH,
    )
    _lexicon = load_lexicon(str(settings.DICTIONARY_PATH), settings.MIN_WORD_LENGTH, settings.MAX_WORD_LENGTH)
    if _lexicon.is_empty:
        logger.error("Lexicon is empty, puzzles cannot be generated until the dictionary is fixed")
    else:
        logger.info("Lexicon loaded with %d words", len(_lexicon))


def _require_lexicon():
    if _lexicon is None or _lexicon.is_empty:
        raise HTTPException(503, "Lexicon is empty, check the dictionary file")
    return _lexicon


async def _read_board(request: Request):
    from wordgrid.board import Board
    from wordgrid.errors import InvalidBoardError

    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(400, "Request body must be JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")

    rows = body.get("board")
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise HTTPException(400, "'board' must be a list of row strings")
    try:
        return Board.from_rows(rows), body
    except InvalidBoardError as e:
        raise HTTPException(400, str(e))


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        _load_lexicon()
        yield

    application = FastAPI(title="Word Grid Puzzles", lifespan=lifespan)

    @application.exception_handler(WordgridError)
    async def wordgrid_error(request: Request, exc: WordgridError):
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "lexicon_words": len(_lexicon) if _lexicon is not None else 0,
            "lexicon_empty": _lexicon is None or _lexicon.is_empty,
        }

    @application.get("/puzzle")
    async def puzzle(method: str | None = None):
        from wordgrid.generator import generate_board, random_board
        from wordgrid.metrics import StageTimer
        from wordgrid.puzzle import GENERATORS, Puzzle
        from wordgrid.solver import solve

        lexicon = _require_lexicon()
        method = method or settings.GENERATOR
        if method not in GENERATORS:
            raise HTTPException(400, f"Unknown generator {method!r}, expected one of {', '.join(GENERATORS)}")

        timer = StageTimer()
        with timer.stage("generate"):
            if method == "quality":
                board = generate_board(lexicon, settings.BOARD_SIZE)
            else:
                board = random_board(settings.BOARD_SIZE)

        with timer.stage("solve"):
            solutions = solve(board, lexicon)

        result = Puzzle(board, solutions)
        logger.info("Board %s: %d solutions, %d points", " / ".join(board.rows()), len(solutions), result.total_points)

        if settings.DEBUG:
            _save_debug_artifacts(result, method, timer)

        return JSONResponse({
            **result.to_dict(settings.MAX_RESULTS),
            "method": method,
            "stage_timings": timer.summary(),
        })

    @application.post("/solve")
    async def solve_board(request: Request):
        from wordgrid.metrics import StageTimer
        from wordgrid.puzzle import Puzzle
        from wordgrid.solver import solve

        lexicon = _require_lexicon()
        board, _ = await _read_board(request)

        timer = StageTimer("solve")
        with timer.stage("solve"):
            solutions = solve(board, lexicon)

        return JSONResponse({
            **Puzzle(board, solutions).to_dict(settings.MAX_RESULTS),
            "stage_timings": timer.summary(),
        })

    @application.post("/verify")
    async def verify(request: Request):
        from wordgrid.errors import InvalidPathError
        from wordgrid.puzzle import Puzzle
        from wordgrid.solver import solve

        lexicon = _require_lexicon()
        board, body = await _read_board(request)

        word = body.get("word")
        path = body.get("path")
        if not isinstance(word, str) or not isinstance(path, list):
            raise HTTPException(400, "'word' must be a string and 'path' a list of [row, column] pairs")
        try:
            cells = [(int(r), int(c)) for r, c in path]
        except (TypeError, ValueError):
            raise HTTPException(400, "'path' must be a list of [row, column] pairs")

        result = Puzzle(board, solve(board, lexicon))
        try:
            points = result.verify(word, cells)
        except InvalidPathError as e:
            return JSONResponse({"valid": False, "points": 0, "error": str(e)})
        return JSONResponse({"valid": points > 0, "points": points})

    @application.get("/api/settings")
    async def api_get_settings():
        from wordgrid.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordgrid.settings import LEXICON_FIELDS, update_settings, get_editable_settings
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")

        before = {name: getattr(settings, name) for name in LEXICON_FIELDS}
        errors = update_settings(settings, body)
        if any(getattr(settings, name) != value for name, value in before.items()):
            _load_lexicon()

        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _save_debug_artifacts(result, method, timer):
    import json
    from datetime import datetime

    from wordgrid.settings import settings as _s
    debug_dir = _s.BASE_DIR / "debug"
    debug_dir.mkdir(exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    payload = {
        "timestamp": ts,
        "method": method,
        **result.to_dict(),
        "timings": timer.summary(),
    }
    with open(debug_dir / f"{ts}_puzzle.json", "w") as f:
        json.dump(payload, f, indent=2)

    logger.info("Saved debug puzzle to debug/%s_puzzle.json", ts)


app = create_app()
