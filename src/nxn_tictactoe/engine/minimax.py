"""
Minimax search with alpha-beta pruning for N x N tic-tac-toe.

The searcher's mark is the maximizing side; the opponent minimizes. Scores
are from the searcher's point of view:

    win  at ply d  ->  10 - d     (faster wins rank higher)
    loss at ply d  -> -10 + d     (slower losses rank higher)
    draw           ->  0
    depth cap hit  ->  evaluate_board() of the unfinished position (0)

Algorithm overview:

    def minimax(board, depth, maximizing, alpha, beta):
        if time is up:               return 0, no move   # abort
        if terminal(board):          return depth-adjusted score
        if depth == max_depth:       return evaluate(board)
        for move in available_moves(board):              # row-major
            score = minimax(child, depth + 1, not maximizing, alpha, beta)
            keep the first move reaching the best score
            update alpha (max layer) or beta (min layer)
            if beta <= alpha:
                break  # prune remaining siblings
        return best score, best move

Every top-level call gets its own SearchContext (node counter, start time,
abort flag). Nothing is shared between calls, so concurrent searches cannot
see each other's counters.

Time management: every `check_interval` nodes the elapsed time is compared
with the budget. Once exceeded, the current node returns a neutral 0 and the
abort flag stops every active level from exploring further siblings. The
best move found so far is returned; it is not guaranteed optimal.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from nxn_tictactoe.config import SEARCH_CONFIG
from nxn_tictactoe.game.tictactoe import (
    Move,
    apply_move,
    available_moves,
    check_winner,
    evaluate_board,
    get_opponent,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of a move-selection call, with diagnostics."""
    move: Optional[Move]
    score: float
    nodes_searched: int
    time_ms: int
    strategy: str = ''
    max_depth: Optional[int] = None
    timed_out: bool = False

    @property
    def positions_evaluated(self) -> int:
        return self.nodes_searched

    def as_metrics(self) -> dict:
        """Metrics in the shape the UI panel displays."""
        return {
            'positions_evaluated': self.nodes_searched,
            'thinking_time': self.time_ms,
            'last_move_score': self.score,
        }


@dataclass
class SearchContext:
    """Per-call mutable search state. Create a new one for every search."""
    time_limit_ms: float = SEARCH_CONFIG['time_limit_ms']
    check_interval: int = SEARCH_CONFIG['time_check_interval']
    nodes: int = 0
    start_time: float = field(default_factory=lambda: time.perf_counter() * 1000)
    stopped: bool = False

    def elapsed_ms(self) -> float:
        return time.perf_counter() * 1000 - self.start_time

    def time_up(self) -> bool:
        if self.time_limit_ms is None or self.time_limit_ms <= 0:
            return False
        return self.elapsed_ms() > self.time_limit_ms


class _Node(NamedTuple):
    score: float
    move: Optional[Move]


class MinimaxEngine:
    """
    Stateless minimax/alpha-beta searcher.

    The engine only holds configuration; all counters live in the
    SearchContext created by `search()`.
    """

    def __init__(
        self,
        time_limit_ms: Optional[float] = None,
        check_interval: Optional[int] = None,
        win_score: Optional[int] = None
    ):
        """
        Args:
            time_limit_ms: Wall-clock budget per top-level call (None/0 = no limit)
            check_interval: Nodes between clock checks
            win_score: Terminal score before depth adjustment
        """
        self.time_limit_ms = SEARCH_CONFIG['time_limit_ms'] if time_limit_ms is None else time_limit_ms
        self.check_interval = check_interval or SEARCH_CONFIG['time_check_interval']
        self.win_score = win_score or SEARCH_CONFIG['win_score']

    def new_context(self, time_limit_ms: Optional[float] = None) -> SearchContext:
        return SearchContext(
            time_limit_ms=self.time_limit_ms if time_limit_ms is None else time_limit_ms,
            check_interval=self.check_interval,
        )

    def search(
        self,
        board: np.ndarray,
        player: int,
        max_depth: Optional[int] = None,
        root_moves: Optional[Sequence[Move]] = None,
        time_limit_ms: Optional[float] = None
    ) -> SearchResult:
        """
        Find the best move for `player`.

        Args:
            board: Current board
            player: Mark to maximize for
            max_depth: Ply cap (None = search to terminal states)
            root_moves: Restrict the root to these candidates (row-major order kept)
            time_limit_ms: Override the engine's budget for this call

        Returns:
            SearchResult; `move` is None when the position is terminal
        """
        ctx = self.new_context(time_limit_ms)
        node = self._minimax(
            ctx, board, 0, True, player, -math.inf, math.inf, max_depth, root_moves
        )

        move = None
        if node.move is not None:
            move = Move(node.move.row, node.move.col, score=node.score)

        return SearchResult(
            move=move,
            score=node.score,
            nodes_searched=ctx.nodes,
            time_ms=int(round(ctx.elapsed_ms())),
            max_depth=max_depth,
            timed_out=ctx.stopped,
        )

    def evaluate_moves(
        self,
        board: np.ndarray,
        player: int,
        max_depth: Optional[int] = None,
        time_limit_ms: Optional[float] = None
    ) -> Tuple[List[Move], SearchContext]:
        """
        Score every available move for `player` with a full window.

        All moves share one context (one budget). Moves are returned in
        row-major order, each carrying its score.
        """
        ctx = self.new_context(time_limit_ms)
        scored = []
        for move in available_moves(board):
            if ctx.stopped:
                break
            child = apply_move(board, move.row, move.col, player)
            node = self._minimax(ctx, child, 1, False, player, -math.inf, math.inf, max_depth)
            scored.append(Move(move.row, move.col, score=node.score))
        return scored, ctx

    def _terminal_score(self, winner: int, player: int, depth: int) -> float:
        if winner == player:
            return self.win_score - depth
        return -self.win_score + depth

    def _minimax(
        self,
        ctx: SearchContext,
        board: np.ndarray,
        depth: int,
        maximizing: bool,
        player: int,
        alpha: float,
        beta: float,
        max_depth: Optional[int],
        moves: Optional[Sequence[Move]] = None
    ) -> _Node:
        """
        Recursive minimax step.

        Args:
            ctx: Search context of the current top-level call
            board: Position to search
            depth: Plies from the root
            maximizing: True when `player` is to move
            player: The searcher's mark
            alpha: Best score the maximizer can already guarantee
            beta: Best score the minimizer can already guarantee
            max_depth: Ply cap, None for unlimited
            moves: Candidate moves (defaults to all available moves)

        Returns:
            (score, best move) from `player`'s point of view
        """
        ctx.nodes += 1

        if ctx.nodes % ctx.check_interval == 0 and ctx.time_up():
            if not ctx.stopped:
                logger.info("Search budget of %sms exceeded after %d nodes, aborting",
                            ctx.time_limit_ms, ctx.nodes)
            ctx.stopped = True
            return _Node(0, None)

        winner = check_winner(board).winner
        if winner is not None:
            return _Node(self._terminal_score(winner, player, depth), None)

        if max_depth is not None and depth >= max_depth:
            return _Node(evaluate_board(board, player), None)

        candidates = list(moves) if moves is not None else list(available_moves(board))
        if not candidates:
            return _Node(0, None)  # Draw

        mover = player if maximizing else get_opponent(player)
        best_score = -math.inf if maximizing else math.inf
        best_move = None

        for move in candidates:
            if ctx.stopped:
                break

            child = apply_move(board, move.row, move.col, mover)
            score = self._minimax(
                ctx, child, depth + 1, not maximizing, player, alpha, beta, max_depth
            ).score

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

            # Alpha-beta cutoff
            if beta <= alpha:
                break

        if best_move is None:
            return _Node(0, None)

        return _Node(best_score, best_move)
