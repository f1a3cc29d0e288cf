"""Material negamax with alpha-beta pruning over python-chess boards."""

from __future__ import annotations

from time import perf_counter

import chess

from chesstable.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000

_PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}


def _never_cancelled() -> bool:
    return False


class NegamaxEngine(IEngine):
    """Fixed-depth searcher: captures and promotions are tried first."""

    __slots__ = ("_cancel_check", "_deadline", "_nodes")

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        board = chess.Board(fen)
        depth = max(1, limits.max_depth)
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = (
            perf_counter() + limits.time_limit_ms / 1000.0
            if limits.time_limit_ms is not None
            else None
        )

        best_move: chess.Move | None = None
        best_score = -_INF_SCORE
        for move in self._ordered_moves(board):
            if best_move is not None and self._should_stop():
                break
            board.push(move)
            score = -self._negamax(board, depth - 1, -_INF_SCORE, -best_score)
            board.pop()
            if best_move is None or score > best_score:
                best_move, best_score = move, score

        if best_move is None:
            return SearchResult(None, self._terminal_score(board, depth), 0, self._nodes)
        return SearchResult(best_move.uci(), best_score, depth, self._nodes)

    # ── Search ───────────────────────────────────────────────────────────

    def _negamax(self, board: chess.Board, depth: int, alpha: int, beta: int) -> int:
        self._nodes += 1
        if board.is_checkmate() or board.is_stalemate() or board.is_insufficient_material():
            return self._terminal_score(board, depth)
        if depth <= 0 or self._should_stop():
            return self._evaluate(board)

        for move in self._ordered_moves(board):
            board.push(move)
            score = -self._negamax(board, depth - 1, -beta, -alpha)
            board.pop()
            if score >= beta:
                return score
            alpha = max(alpha, score)
        return alpha

    def _should_stop(self) -> bool:
        if self._deadline is not None and perf_counter() >= self._deadline:
            return True
        return self._cancel_check()

    # ── Evaluation ───────────────────────────────────────────────────────

    @staticmethod
    def _terminal_score(board: chess.Board, depth: int) -> int:
        """Score for the side to move when the game has ended."""
        if board.is_checkmate():
            return -_MATE_SCORE - depth  # sooner mates score further from zero
        return 0

    @staticmethod
    def _evaluate(board: chess.Board) -> int:
        """Material balance from the side to move's point of view."""
        score = 0
        for piece_type, value in _PIECE_VALUES.items():
            score += value * len(board.pieces(piece_type, board.turn))
            score -= value * len(board.pieces(piece_type, not board.turn))
        return score

    @staticmethod
    def _ordered_moves(board: chess.Board) -> list[chess.Move]:
        def priority(move: chess.Move) -> int:
            victim = board.piece_type_at(move.to_square)
            bonus = _PIECE_VALUES[victim] if victim is not None else 0
            if board.is_en_passant(move):
                bonus = _PIECE_VALUES[chess.PAWN]
            if move.promotion is not None:
                bonus += _PIECE_VALUES[move.promotion]
            return -bonus

        return sorted(board.legal_moves, key=priority)
