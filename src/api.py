import logging
import random
import uuid
from collections import OrderedDict
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, Field
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

import core
from tile import Tile

logger = logging.getLogger(__name__)

RATE_LIMIT = "100/minute"
MAX_GAMES = 1000
MAX_BOARD_SIZE = 16

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="2048 Game API",
    description="A session API for playing 2048. "\
                "Each game lives on the server; clients send moves and render the returned tiles.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# --- Session Store ---

class GameStore:
    """
    Holds one GameEngine per game id, at most max_games of them.
    Creating a game beyond the cap evicts the least recently used one.
    """

    def __init__(self, max_games: int = MAX_GAMES):
        self.max_games = max_games
        self._games: "OrderedDict[str, core.GameEngine]" = OrderedDict()

    def create(self, size: int = core.DEFAULT_SIZE, best_score: int = 0,
               seed: Optional[int] = None) -> Tuple[str, core.GameEngine]:
        """
        Creates and starts a new game.
        Args:
            size (int): Dimension of the N x N board.
            best_score (int): Best score carried over from earlier games.
            seed (Optional[int]): Seed for a reproducible tile sequence.
        Returns:
            Tuple[str, core.GameEngine]: The new game id and its engine.
        Raises:
            ValueError: If the board size is invalid.
        """
        random_source = random.Random(seed).random if seed is not None else None
        engine = core.GameEngine(size=size, best_score=best_score, random_source=random_source)
        engine.reset()
        game_id = uuid.uuid4().hex
        self._games[game_id] = engine
        logger.info("Created game %s (%dx%d)", game_id, size, size)
        while len(self._games) > self.max_games:
            evicted_id, _ = self._games.popitem(last=False)
            logger.info("Evicted idle game %s", evicted_id)
        return game_id, engine

    def get(self, game_id: str) -> core.GameEngine:
        engine = self._games[game_id]
        self._games.move_to_end(game_id)
        return engine

    def discard(self, game_id: str) -> None:
        del self._games[game_id]
        logger.info("Discarded game %s", game_id)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._games

    def __len__(self) -> int:
        return len(self._games)


store = GameStore()


# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new game."""
    size: int = Field(
        default=core.DEFAULT_SIZE,
        gt=1, # Board size must be at least 2x2
        le=MAX_BOARD_SIZE,
        description="Size of the N x N game board (e.g., 4 for a 4x4 board)."
    )
    best_score: int = Field(
        default=0,
        ge=0,
        description="Best score to carry into this game (persisted by the client)."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Optional seed making the sequence of spawned tiles reproducible."
    )

class TileData(BaseModel):
    """A tile as seen by a renderer, including its animation metadata."""
    id: int
    value: int
    row: int
    col: int
    previous_row: Optional[int] = None
    previous_col: Optional[int] = None
    is_new: bool
    just_merged: bool
    pending_removal: bool

    @classmethod
    def from_tile(cls, tile: Tile) -> "TileData":
        return cls(
            id=tile.id,
            value=tile.value,
            row=tile.row,
            col=tile.col,
            previous_row=tile.previous_row,
            previous_col=tile.previous_col,
            is_new=tile.is_new,
            just_merged=tile.just_merged,
            pending_removal=tile.pending_removal,
        )

class GameStateData(BaseModel):
    """Represents the complete state of a game instance."""
    game_id: str = Field(..., description="Identifier of the game session.")
    board: List[List[int]] = Field(..., description="The N x N board as values, 0 for empty cells.")
    tiles: List[TileData] = Field(..., description="Live tiles plus tiles merged away on the last move.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    best_score: int = Field(..., ge=0, description="Best score including this game.")
    game_over: bool = Field(..., description="True once no move can change the board.")
    progress: core.GameProgressState = Field(
        ...,
        description="Current progress state of the game (IN_PROGRESS, GAME_OVER)."
    )
    board_size: int = Field(..., gt=1, description="The dimension N of the N x N board.")

    @classmethod
    def from_engine(cls, game_id: str, engine: core.GameEngine, **extra) -> "GameStateData":
        return cls(
            game_id=game_id,
            board=engine.get_grid_values(),
            tiles=[TileData.from_tile(tile) for tile in engine.tiles],
            score=engine.score,
            best_score=engine.best_score,
            game_over=engine.game_over,
            progress=engine.progress,
            board_size=engine.size,
            **extra
        )

class MoveRequestData(BaseModel):
    """Data required to make a move."""
    direction: core.DIRECTION = Field(
        ...,
        description="Direction of the move (up, down, left, right)."
    )

class MoveResponseData(GameStateData):
    """Response after a move, including the new game state and move effectiveness."""
    move_was_effective: bool = Field(
        ...,
        description="True if the move resulted in a change to the board state, False otherwise."
    )
    score_gained: int = Field(..., ge=0, description="Points earned by merges during this move.")
    added_tile: Optional[TileData] = Field(
        default=None,
        description="The tile spawned after the move, if any."
    )
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g., if a move was ineffective or the game ended."
    )

class GridLoadData(BaseModel):
    """An exact board to load, bypassing random spawns (debugging and tests)."""
    board: List[List[int]] = Field(..., description="N x N matrix of non-negative tile values.")


def _get_engine(game_id: str) -> core.GameEngine:
    try:
        return store.get(game_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found.")


# --- API Endpoints ---

@app.post("/game/new", response_model=GameStateData, summary="Start a New 2048 Game")
@limiter.limit(RATE_LIMIT)
async def start_new_game(request: Request, settings: NewGameSettings):
    """
    Creates a new game session based on the provided settings.

    - **size**: Dimension of the N x N board (e.g., 4 for 4x4). Default is 4.
    - **best_score**: Best score to seed the game with. Default is 0.
    - **seed**: Optional seed for reproducible tile spawns.

    Returns the initial game state with two random tiles and score 0.
    """
    try:
        game_id, engine = store.create(settings.size, settings.best_score, settings.seed)
        return GameStateData.from_engine(game_id, engine)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Unexpected error in /game/new: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during game creation: {str(e)}")


@app.get("/game/{game_id}", response_model=GameStateData, summary="Get the Current Game State")
@limiter.limit(RATE_LIMIT)
async def get_game(request: Request, game_id: str):
    """Returns the current board, tiles and scores of a game."""
    engine = _get_engine(game_id)
    return GameStateData.from_engine(game_id, engine)


@app.post("/game/{game_id}/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit(RATE_LIMIT)
async def make_move(request: Request, game_id: str, request_data: MoveRequestData):
    """
    Processes a player's move in the game.

    The server will:
    1. Drop tiles merged away on the previous move.
    2. Slide and merge tiles in the requested direction.
    3. If the board changed, add a new random tile (2 or 4).
    4. Re-evaluate whether any move remains.

    Tiles merged away during this move are still listed with
    `pending_removal` set, so the client can animate them into their target.
    """
    engine = _get_engine(game_id)
    try:
        engine.cleanup_merged_tiles()
        summary = engine.move(request_data.direction)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.error("Unexpected error in /game/%s/move: %s", game_id, e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")

    message_for_client: Optional[str] = None
    if not summary.moved:
        message_for_client = "Move was not effective; board state unchanged by slide."
    if engine.game_over:
        message_for_client = "Game Over. No more valid moves."

    added_tile = TileData.from_tile(summary.added_tile) if summary.added_tile else None
    return MoveResponseData.from_engine(
        game_id,
        engine,
        move_was_effective=summary.moved,
        score_gained=summary.score_gained,
        added_tile=added_tile,
        message=message_for_client,
    )


@app.post("/game/{game_id}/reset", response_model=GameStateData, summary="Restart a Game")
@limiter.limit(RATE_LIMIT)
async def reset_game(request: Request, game_id: str):
    """Starts the session over with two fresh tiles; the best score is kept."""
    engine = _get_engine(game_id)
    try:
        engine.reset()
    except Exception as e:
        logger.error("Unexpected error in /game/%s/reset: %s", game_id, e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while resetting the game: {str(e)}")
    return GameStateData.from_engine(game_id, engine)


@app.put("/game/{game_id}/grid", response_model=GameStateData, summary="Load an Exact Board")
@limiter.limit(RATE_LIMIT)
async def load_grid(request: Request, game_id: str, grid_data: GridLoadData):
    """Replaces the board with the given values and resets the score. For debugging."""
    engine = _get_engine(game_id)
    try:
        engine.set_grid(grid_data.board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board: {str(e)}")
    except Exception as e:
        logger.error("Unexpected error in /game/%s/grid: %s", game_id, e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while loading the board: {str(e)}")
    return GameStateData.from_engine(game_id, engine)


@app.delete("/game/{game_id}", status_code=204, summary="End a Game Session")
@limiter.limit(RATE_LIMIT)
async def delete_game(request: Request, game_id: str):
    """Ends a game session and frees its engine."""
    _get_engine(game_id)
    store.discard(game_id)
    return Response(status_code=204)
