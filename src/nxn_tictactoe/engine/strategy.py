"""
Move-selection policy table.

Which strategy the engine runs is a pure function of difficulty, board size
and how many moves remain:

    easy                  -> WEIGHTED_RANDOM
    hard, size <= 3       -> FULL_MINIMAX       (search to terminal states)
    hard, size == 4       -> DEPTH_LIMITED      (2 plies if > 8 moves left, else 3)
    hard, size == 5       -> DEPTH_LIMITED      (2 plies)
    hard, size >= 6       -> HEURISTIC          (no tree search)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from nxn_tictactoe.config import DEPTH_CONFIG, validate_difficulty


class Strategy(str, Enum):
    WEIGHTED_RANDOM = 'weighted_random'
    FULL_MINIMAX = 'full_minimax'
    DEPTH_LIMITED = 'depth_limited_minimax'
    HEURISTIC = 'heuristic'


@dataclass(frozen=True)
class StrategyPlan:
    strategy: Strategy
    max_depth: Optional[int] = None  # None = unlimited

    @property
    def uses_search(self) -> bool:
        return self.strategy in (Strategy.FULL_MINIMAX, Strategy.DEPTH_LIMITED)


def depth_limit_for(size: int, moves_remaining: int) -> Optional[int]:
    """Depth cap for a depth-limited size, None when the size searches fully."""
    limit = DEPTH_CONFIG['depth_limits'].get(size)
    if isinstance(limit, tuple):
        threshold, high, low = limit
        return high if moves_remaining > threshold else low
    return limit


def select_strategy(difficulty: str, size: int, moves_remaining: int) -> StrategyPlan:
    validate_difficulty(difficulty)

    if difficulty == 'easy':
        return StrategyPlan(Strategy.WEIGHTED_RANDOM)

    if size <= DEPTH_CONFIG['full_depth_max_size']:
        return StrategyPlan(Strategy.FULL_MINIMAX)

    if size >= DEPTH_CONFIG['heuristic_min_size']:
        return StrategyPlan(Strategy.HEURISTIC)

    return StrategyPlan(Strategy.DEPTH_LIMITED, depth_limit_for(size, moves_remaining))
