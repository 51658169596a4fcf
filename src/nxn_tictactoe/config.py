"""
Configuration for N x N tic-tac-toe play against the engine.
"""

from dataclasses import dataclass

from nxn_tictactoe.marks import PLAYER_O, PLAYER_X


# Board Configuration
BOARD_CONFIG = {
    'min_size': 3,                      # Smallest board the session accepts
    'max_size': 10,                     # Largest board the session accepts
    'default_size': 3,
}

# Search Configuration
SEARCH_CONFIG = {
    'time_limit_ms': 500,               # Wall-clock budget per hard-mode call
    'time_check_interval': 100,         # Check the clock every N nodes
    'win_score': 10,                    # Terminal score before depth shaping
}

# Depth caps per board size (hard mode)
# None = search to terminal states, (threshold, high, low) = `high` plies while
# more than `threshold` moves remain, else `low` plies.
DEPTH_CONFIG = {
    'full_depth_max_size': 3,
    'depth_limits': {
        4: (8, 2, 3),
        5: 2,
    },
    'heuristic_min_size': 6,            # Skip minimax entirely from here up
}

# Easy mode
EASY_CONFIG = {
    'random_move_probability': 0.7,     # Otherwise: center > corner > random
}

# Session / interactive play
SESSION_CONFIG = {
    'history_limit': 50,                # Finished games kept, newest first
    'ai_delay_ms': 300,                 # "Thinking" pause before the engine moves
}

DIFFICULTIES = ('easy', 'hard')


class InvalidBoardSizeError(ValueError):
    """Raised when a board size falls outside the supported range."""

    def __init__(self, size, min_size=BOARD_CONFIG['min_size'], max_size=BOARD_CONFIG['max_size']):
        super().__init__(f"Invalid board size: {size}. Must be between {min_size} and {max_size}.")
        self.size = size


def validate_board_size(size: int) -> int:
    if not BOARD_CONFIG['min_size'] <= size <= BOARD_CONFIG['max_size']:
        raise InvalidBoardSizeError(size)
    return size


def validate_difficulty(difficulty: str) -> str:
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {difficulty!r} (expected one of {DIFFICULTIES})")
    return difficulty


@dataclass
class GameSettings:
    """Settings the player picks before a game starts."""
    difficulty: str = 'easy'
    player_symbol: int = PLAYER_X
    ai_symbol: int = PLAYER_O
    board_size: int = BOARD_CONFIG['default_size']

    def __post_init__(self):
        validate_difficulty(self.difficulty)
        validate_board_size(self.board_size)
        if self.player_symbol not in (PLAYER_X, PLAYER_O) or self.ai_symbol != -self.player_symbol:
            raise ValueError("player_symbol and ai_symbol must be opposite marks")
