"""
Move-selection engine for N x N tic-tac-toe.

This module contains:
- Minimax search with alpha-beta pruning, depth caps and a time budget
- A rule-based heuristic for boards too large to search
- The size/difficulty -> strategy policy table
- The computer player tying them together
"""

from nxn_tictactoe.engine.minimax import MinimaxEngine, SearchContext, SearchResult
from nxn_tictactoe.engine.heuristic import HeuristicPlayer
from nxn_tictactoe.engine.strategy import Strategy, StrategyPlan, depth_limit_for, select_strategy
from nxn_tictactoe.engine.ai import PositionAnalysis, TicTacToeAI, choose_move, describe_evaluation

__all__ = [
    'MinimaxEngine',
    'SearchContext',
    'SearchResult',
    'HeuristicPlayer',
    'Strategy',
    'StrategyPlan',
    'depth_limit_for',
    'select_strategy',
    'PositionAnalysis',
    'TicTacToeAI',
    'choose_move',
    'describe_evaluation',
]
