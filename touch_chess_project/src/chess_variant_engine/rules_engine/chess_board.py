"""
棋盘数据结构

定义8x8棋盘的表示、操作和显示格式转换功能。
棋盘对象是不可变快照：每次落子都会返回新的棋盘。
"""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .move import Move
from .pieces import BOARD_SIZE, Color, Piece, PieceKind, Square, is_on_board
from ..utils.exceptions import InvalidMoveError, InvalidSquareError


# 底线棋子排列 (a-h列)
BACK_RANK = (
    PieceKind.ROOK, PieceKind.KNIGHT, PieceKind.BISHOP, PieceKind.QUEEN,
    PieceKind.KING, PieceKind.BISHOP, PieceKind.KNIGHT, PieceKind.ROOK,
)

EMPTY = 0
EMPTY_LAYOUT_CHAR = '.'


def _freeze(matrix: np.ndarray) -> np.ndarray:
    matrix.flags.writeable = False
    return matrix


class ChessBoard:
    """
    棋盘类

    用8x8整数矩阵保存棋子编码（0为空，白方为正，黑方为负），
    矩阵只读，所有修改操作都返回新的棋盘对象。
    """

    def __init__(self, matrix: Optional[np.ndarray] = None):
        """
        初始化棋盘

        Args:
            matrix: 8x8的棋子编码矩阵，如果为None则创建初始局面
        """
        if matrix is None:
            matrix = self._initial_matrix()
        else:
            matrix = np.array(matrix, dtype=np.int8)
            if matrix.shape != (BOARD_SIZE, BOARD_SIZE):
                raise ValueError(f"棋盘尺寸错误: {matrix.shape}, 应为(8, 8)")
            for code in np.unique(matrix):
                if code != EMPTY:
                    Piece.from_code(code)
        self._board = _freeze(matrix)

    @staticmethod
    def _initial_matrix() -> np.ndarray:
        """生成标准初始局面"""
        matrix = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)

        # 黑方 (上方)
        matrix[0] = [Piece(kind, Color.BLACK).code for kind in BACK_RANK]
        matrix[1] = Piece(PieceKind.PAWN, Color.BLACK).code

        # 白方 (下方)
        matrix[6] = Piece(PieceKind.PAWN, Color.WHITE).code
        matrix[7] = [Piece(kind, Color.WHITE).code for kind in BACK_RANK]

        return matrix

    # ==================== 构造方法 ====================

    @classmethod
    def empty(cls) -> 'ChessBoard':
        """创建空棋盘"""
        return cls(np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8))

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'ChessBoard':
        """
        从矩阵创建棋盘对象

        Args:
            matrix: 8x8的棋子编码矩阵

        Returns:
            ChessBoard: 棋盘对象
        """
        return cls(matrix)

    @classmethod
    def from_layout(cls, rows: Iterable[str]) -> 'ChessBoard':
        """
        从文本布局创建棋盘

        每行8个字符，大写字母为白方，小写字母为黑方，'.'为空格，
        第一行对应第0行（黑方底线）。空白字符会被忽略。

        Args:
            rows: 8行文本

        Returns:
            ChessBoard: 棋盘对象
        """
        rows = [''.join(row.split()) for row in rows]
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"布局应包含8行，实际为{len(rows)}行")

        matrix = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for r, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise ValueError(f"第{r}行应包含8列: {row!r}")
            for c, char in enumerate(row):
                if char != EMPTY_LAYOUT_CHAR:
                    matrix[r, c] = Piece.from_letter(char).code
        return cls(matrix)

    # ==================== 格式转换 ====================

    def to_matrix(self) -> np.ndarray:
        """
        转换为矩阵格式

        Returns:
            np.ndarray: 可写的8x8矩阵副本
        """
        return self._board.copy()

    def to_layout(self) -> List[str]:
        """转换为文本布局，与from_layout互逆"""
        rows = []
        for r in range(BOARD_SIZE):
            row = ''
            for c in range(BOARD_SIZE):
                piece = self.get_piece_at((r, c))
                row += piece.letter if piece else EMPTY_LAYOUT_CHAR
            rows.append(row)
        return rows

    def snapshot(self) -> Tuple[Tuple[Optional[Piece], ...], ...]:
        """
        获取用于渲染的只读快照

        Returns:
            8x8的嵌套元组，每格为Piece或None
        """
        return tuple(
            tuple(self.get_piece_at((r, c)) for c in range(BOARD_SIZE))
            for r in range(BOARD_SIZE)
        )

    def to_visual_string(self, glyph_style: str = 'unicode') -> str:
        """
        转换为可视化字符串

        Args:
            glyph_style: 'unicode' 或 'ascii'

        Returns:
            str: 带行列标号的棋盘字符串
        """
        lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
        for r in range(BOARD_SIZE):
            cells = []
            for c in range(BOARD_SIZE):
                piece = self.get_piece_at((r, c))
                cells.append(piece.glyph(glyph_style) if piece else EMPTY_LAYOUT_CHAR)
            lines.append(f"{r} " + " ".join(cells))
        return "\n".join(lines)

    # ==================== 查询 ====================

    def get_piece_at(self, pos: Square) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (行, 列)

        Returns:
            Optional[Piece]: 棋子，空格或越界时返回None
        """
        if not is_on_board(pos):
            return None
        code = self._board[pos[0], pos[1]]
        if code == EMPTY:
            return None
        return Piece.from_code(code)

    def is_empty(self, pos: Square) -> bool:
        """检查指定位置是否为空"""
        return self.get_piece_at(pos) is None

    def is_enemy_piece(self, pos: Square, color: Color) -> bool:
        """
        检查指定位置是否为敌方棋子

        Args:
            pos: 位置坐标
            color: 己方颜色

        Returns:
            bool: 是否为敌方棋子
        """
        piece = self.get_piece_at(pos)
        return piece is not None and piece.color != color

    def is_own_piece(self, pos: Square, color: Color) -> bool:
        """检查指定位置是否为己方棋子"""
        piece = self.get_piece_at(pos)
        return piece is not None and piece.color == color

    def has_king(self, color: Color) -> bool:
        """
        检查指定颜色是否还有王

        逐格扫描，不要求王的数量恰好为1。

        Args:
            color: 颜色

        Returns:
            bool: 棋盘上是否存在该颜色的王
        """
        king_code = Piece(PieceKind.KING, color).code
        return bool(np.any(self._board == king_code))

    def get_all_pieces(self, color: Optional[Color] = None) -> List[Tuple[Square, Piece]]:
        """
        获取所有棋子的位置和类型

        Args:
            color: 指定颜色，None表示获取所有棋子

        Returns:
            List[Tuple[Square, Piece]]: [(位置, 棋子), ...]，按行列顺序
        """
        pieces = []
        for r, c in zip(*np.nonzero(self._board)):
            piece = Piece.from_code(self._board[r, c])
            if color is None or piece.color == color:
                pieces.append(((int(r), int(c)), piece))
        return pieces

    def count_pieces(self, color: Optional[Color] = None) -> Dict[Piece, int]:
        """
        统计棋子数量

        Args:
            color: 指定颜色，None表示统计所有棋子

        Returns:
            Dict[Piece, int]: {棋子: 数量}
        """
        counts: Dict[Piece, int] = {}
        for _, piece in self.get_all_pieces(color):
            counts[piece] = counts.get(piece, 0) + 1
        return counts

    # ==================== 修改（返回新棋盘） ====================

    def make_move(self, move: Move) -> 'ChessBoard':
        """
        执行走法，返回新的棋盘状态

        目标格上的敌方棋子被直接覆盖。本方法不做规则校验。

        Args:
            move: 要执行的走法

        Returns:
            ChessBoard: 新的棋盘状态
        """
        from_row, from_col = move.from_pos
        to_row, to_col = move.to_pos

        if self._board[from_row, from_col] == EMPTY:
            raise InvalidMoveError(str(move), "起始位置没有棋子")

        matrix = self._board.copy()
        matrix[to_row, to_col] = matrix[from_row, from_col]
        matrix[from_row, from_col] = EMPTY
        return ChessBoard(matrix)

    def place_piece(self, pos: Square, piece: Optional[Piece]) -> 'ChessBoard':
        """
        在指定位置放置（或清除）棋子，返回新的棋盘

        Args:
            pos: 位置坐标
            piece: 棋子，None表示清空该格

        Returns:
            ChessBoard: 新的棋盘状态
        """
        if not is_on_board(pos):
            raise InvalidSquareError(pos, "超出8x8棋盘")
        matrix = self._board.copy()
        matrix[pos[0], pos[1]] = piece.code if piece else EMPTY
        return ChessBoard(matrix)

    def copy(self) -> 'ChessBoard':
        """创建棋盘副本"""
        return ChessBoard(self._board.copy())

    # ==================== 特殊方法 ====================

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"ChessBoard({'/'.join(self.to_layout())})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChessBoard):
            return False
        return np.array_equal(self._board, other._board)

    def __hash__(self) -> int:
        return hash(self._board.tobytes())
