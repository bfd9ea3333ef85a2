"""
规则引擎模块

包含棋盘表示、棋子走法规则、走法验证等核心功能。
"""

from .pieces import (
    Color, PieceKind, Piece, Square, BOARD_SIZE, PROMOTION_KINDS, is_on_board
)
from .move import Move
from .chess_board import ChessBoard
from .movement_rules import MOVEMENT_RULES, movement_rule, can_move
from .rule_engine import RuleEngine

__all__ = [
    'Color', 'PieceKind', 'Piece', 'Square', 'BOARD_SIZE', 'PROMOTION_KINDS',
    'is_on_board', 'Move', 'ChessBoard', 'MOVEMENT_RULES', 'movement_rule',
    'can_move', 'RuleEngine'
]
