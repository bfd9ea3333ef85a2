"""
走法数据结构

定义一步走法的表示。
"""

from dataclasses import dataclass
from typing import Optional

from .pieces import Piece, Square, is_on_board
from ..utils.exceptions import InvalidSquareError


@dataclass(frozen=True)
class Move:
    """
    走法类

    表示一个走法，包含起始位置、目标位置、移动的棋子和被吃掉的棋子。
    """
    from_pos: Square                       # 起始位置 (行, 列)
    to_pos: Square                         # 目标位置 (行, 列)
    piece: Piece                           # 移动的棋子
    captured_piece: Optional[Piece] = None # 被吃掉的棋子

    def __post_init__(self):
        """初始化后验证数据有效性"""
        for pos in (self.from_pos, self.to_pos):
            if not is_on_board(pos):
                raise InvalidSquareError(pos, "超出8x8棋盘")

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def __str__(self) -> str:
        return f"{self.piece} {self.from_pos} -> {self.to_pos}"

    def __eq__(self, other) -> bool:
        """相等性比较，不考虑被吃棋子"""
        if not isinstance(other, Move):
            return False
        return (self.from_pos == other.from_pos and
                self.to_pos == other.to_pos and
                self.piece == other.piece)

    def __hash__(self) -> int:
        return hash((self.from_pos, self.to_pos, self.piece))
