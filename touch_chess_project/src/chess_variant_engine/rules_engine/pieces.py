"""
棋子数据结构

定义颜色、棋子类型以及不可变的棋子值对象。
"""

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union

from ..utils.exceptions import InvalidPieceError


# 格子坐标 (行, 列)
Square = Tuple[int, int]

BOARD_SIZE = 8


class Color(IntEnum):
    """棋子颜色，数值即棋盘矩阵中的符号"""
    WHITE = 1
    BLACK = -1

    @property
    def opponent(self) -> 'Color':
        """对方颜色"""
        return Color(-self.value)

    @property
    def forward(self) -> int:
        """兵前进方向的行增量：白方朝第0行，黑方朝第7行"""
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_start_row(self) -> int:
        """兵的初始行"""
        return 6 if self is Color.WHITE else 1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class PieceKind(IntEnum):
    """棋子类型"""
    KING = 1
    QUEEN = 2
    ROOK = 3
    BISHOP = 4
    KNIGHT = 5
    PAWN = 6

    @classmethod
    def parse(cls, value: Union['PieceKind', str]) -> 'PieceKind':
        """
        从名称解析棋子类型

        Args:
            value: PieceKind或名称字符串（不区分大小写，如 "Queen"）

        Returns:
            PieceKind: 棋子类型
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise InvalidPieceError(value, "未知的棋子类型")

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


# 可供升变选择的棋子类型
PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)

# 显示符号映射
UNICODE_SYMBOLS = {
    Color.WHITE: {
        PieceKind.KING: '♔', PieceKind.QUEEN: '♕', PieceKind.ROOK: '♖',
        PieceKind.BISHOP: '♗', PieceKind.KNIGHT: '♘', PieceKind.PAWN: '♙',
    },
    Color.BLACK: {
        PieceKind.KING: '♚', PieceKind.QUEEN: '♛', PieceKind.ROOK: '♜',
        PieceKind.BISHOP: '♝', PieceKind.KNIGHT: '♞', PieceKind.PAWN: '♟',
    },
}

ASCII_LETTERS = {
    PieceKind.KING: 'K', PieceKind.QUEEN: 'Q', PieceKind.ROOK: 'R',
    PieceKind.BISHOP: 'B', PieceKind.KNIGHT: 'N', PieceKind.PAWN: 'P',
}

_LETTER_TO_KIND = {letter: kind for kind, letter in ASCII_LETTERS.items()}


@dataclass(frozen=True)
class Piece:
    """
    棋子

    颜色和类型在创建时确定且不可变，不记录任何走子计数。
    """
    kind: PieceKind
    color: Color

    @property
    def code(self) -> int:
        """棋盘矩阵中的编码：白方为正，黑方为负"""
        return int(self.kind) * int(self.color)

    @classmethod
    def from_code(cls, code: int) -> 'Piece':
        """
        从矩阵编码创建棋子

        Args:
            code: 非零的有符号编码

        Returns:
            Piece: 棋子
        """
        code = int(code)
        try:
            kind = PieceKind(abs(code))
        except ValueError:
            raise InvalidPieceError(code, "编码不对应任何棋子") from None
        color = Color.WHITE if code > 0 else Color.BLACK
        return cls(kind, color)

    @classmethod
    def from_letter(cls, letter: str) -> 'Piece':
        """从ASCII字母创建棋子，大写为白方，小写为黑方"""
        kind = _LETTER_TO_KIND.get(letter.upper())
        if kind is None:
            raise InvalidPieceError(letter, "未知的棋子字母")
        color = Color.WHITE if letter.isupper() else Color.BLACK
        return cls(kind, color)

    @property
    def symbol(self) -> str:
        """Unicode显示符号"""
        return UNICODE_SYMBOLS[self.color][self.kind]

    @property
    def letter(self) -> str:
        """ASCII显示符号"""
        letter = ASCII_LETTERS[self.kind]
        return letter if self.color is Color.WHITE else letter.lower()

    def glyph(self, style: str = 'unicode') -> str:
        return self.symbol if style == 'unicode' else self.letter

    def __str__(self) -> str:
        return f"{self.color.display_name} {self.kind.display_name}"


def _is_index(value) -> bool:
    # bool是int的子类，但不是合法坐标
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def is_on_board(pos: Square) -> bool:
    """检查坐标是否在棋盘内，非整数坐标视为不在棋盘内"""
    try:
        row, col = pos
    except (TypeError, ValueError):
        return False
    if not (_is_index(row) and _is_index(col)):
        return False
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE
