# cli_driver.py
# This file is intended to be run to play or test the 2048 game on the CLI

import logging
from typing import List

from core import DIRECTION, GameEngine, GameProgressState

BOARD_SIZE = 4

DIRECTION_MAP = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}


def main():
    logging.basicConfig(level=logging.WARNING)

    # 1. Initialize game
    engine = GameEngine(size=BOARD_SIZE)
    engine.reset()
    display_board_state(engine.get_grid_values(), engine.score, engine.best_score, engine.progress)

    # 2. Game Loop
    while engine.progress == GameProgressState.IN_PROGRESS:
        move_input = input("Enter move (W/A/S/D for Up/Left/Down/Right, Q to quit): ").strip().upper()

        if move_input == 'Q':
            print("Quitting game.")
            break

        chosen_direction = DIRECTION_MAP.get(move_input)
        if not chosen_direction:
            print("Invalid input. Use W, A, S, D.")
            continue

        # 3. Drop tiles merged away last turn, then play the move
        engine.cleanup_merged_tiles()
        summary = engine.move(chosen_direction)

        if not summary.moved:
            print("Move did not change the board. Try a different direction.")
        elif summary.score_gained:
            print(f"+{summary.score_gained}")

        display_board_state(engine.get_grid_values(), engine.score, engine.best_score, engine.progress)

    # 4. Game Ended
    if engine.progress == GameProgressState.GAME_OVER:
        print("No more moves possible. Better luck next time!")
    print(f"Final score: {engine.score} (best {engine.best_score})")


# --- Display Function ---
def display_board_state(board: List[List[int]], score: int, best: int, progress: GameProgressState):
    """Prints the board, score, and game status to the console."""
    print(f"\nScore: {score}  Best: {best}")
    status_message = {
        GameProgressState.IN_PROGRESS: f"Status: {progress.name}",
        GameProgressState.GAME_OVER: "GAME OVER!"
    }
    print(status_message.get(progress, f"Status: {progress.name} (Unknown)"))

    for row in board:
        print("\t".join(str(value) if value else "." for value in row))
    print("-" * (len(board) * 6)) # Adjust width based on board size


if __name__ == "__main__":
    main()
