"""
规则引擎

在走法规则之上提供走法验证、走法生成、升变和王存活检测。
"""

from typing import List, Optional

from .chess_board import ChessBoard
from .move import Move
from .movement_rules import can_move
from .pieces import BOARD_SIZE, Color, Piece, PieceKind, Square, is_on_board


class RuleEngine:
    """
    规则引擎

    无状态，所有方法只读取传入的棋盘。
    """

    PROMOTION_ROWS = (0, BOARD_SIZE - 1)

    def is_legal_move(self, board: ChessBoard, move: Move) -> bool:
        """
        检查走法是否合法

        起点上的棋子必须与走法中的棋子一致，且符合该棋子的走法规则。

        Args:
            board: 当前棋盘
            move: 要检查的走法

        Returns:
            bool: 走法是否合法
        """
        if board.get_piece_at(move.from_pos) != move.piece:
            return False
        return can_move(board, move.from_pos, move.to_pos)

    def generate_piece_moves(self, board: ChessBoard, pos: Square) -> List[Move]:
        """
        生成指定位置棋子的所有合法走法

        Args:
            board: 当前棋盘
            pos: 棋子位置

        Returns:
            List[Move]: 走法列表，起点为空时返回空列表
        """
        piece = board.get_piece_at(pos) if is_on_board(pos) else None
        if piece is None:
            return []

        moves = []
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                target = (row, col)
                if can_move(board, pos, target):
                    moves.append(Move(
                        from_pos=tuple(pos),
                        to_pos=target,
                        piece=piece,
                        captured_piece=board.get_piece_at(target)
                    ))
        return moves

    def generate_legal_moves(self, board: ChessBoard, color: Color) -> List[Move]:
        """
        生成指定颜色的所有合法走法（不过滤被将军的走法）

        Args:
            board: 当前棋盘
            color: 颜色

        Returns:
            List[Move]: 走法列表
        """
        moves = []
        for pos, _ in board.get_all_pieces(color):
            moves.extend(self.generate_piece_moves(board, pos))
        return moves

    def is_promotion_square(self, piece: Optional[Piece], pos: Square) -> bool:
        """兵到达第0行或第7行即需要升变"""
        return (piece is not None and piece.kind == PieceKind.PAWN
                and pos[0] in self.PROMOTION_ROWS)

    def has_king(self, board: ChessBoard, color: Color) -> bool:
        """检查指定颜色的王是否还在棋盘上"""
        return board.has_king(color)
