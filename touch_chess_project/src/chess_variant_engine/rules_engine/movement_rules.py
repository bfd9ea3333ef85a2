"""
棋子走法规则

每种棋子对应一个纯函数 rule(board, from_pos, to_pos) -> bool，
按棋子类型查表分派。规则只判断棋子自身的走法，不考虑轮次和将军。
"""

from typing import Callable, Dict

from .chess_board import ChessBoard
from .pieces import Color, PieceKind, Square, is_on_board


MovementRule = Callable[[ChessBoard, Square, Square], bool]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _mover_color(board: ChessBoard, from_pos: Square) -> Color:
    return board.get_piece_at(from_pos).color


def _can_land(board: ChessBoard, to_pos: Square, color: Color) -> bool:
    """目标格为空或为敌方棋子"""
    return not board.is_own_piece(to_pos, color)


def _path_is_clear(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """
    检查起点与终点之间（不含两端）的格子是否全部为空

    步长为 (Δ行, Δ列) 的符号，调用方保证两点在同一直线或斜线上。
    """
    step_r = _sign(to_pos[0] - from_pos[0])
    step_c = _sign(to_pos[1] - from_pos[1])
    r, c = from_pos[0] + step_r, from_pos[1] + step_c
    while (r, c) != tuple(to_pos):
        if not board.is_empty((r, c)):
            return False
        r += step_r
        c += step_c
    return True


def king_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """王：切比雪夫距离为1"""
    dr = abs(to_pos[0] - from_pos[0])
    dc = abs(to_pos[1] - from_pos[1])
    return max(dr, dc) == 1 and _can_land(board, to_pos, _mover_color(board, from_pos))


def knight_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """马：日字，不受阻挡"""
    dr = abs(to_pos[0] - from_pos[0])
    dc = abs(to_pos[1] - from_pos[1])
    return (dr, dc) in ((2, 1), (1, 2)) and _can_land(board, to_pos, _mover_color(board, from_pos))


def rook_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """车：同行或同列，路径无阻挡"""
    same_row = from_pos[0] == to_pos[0]
    same_col = from_pos[1] == to_pos[1]
    if same_row == same_col:  # 不在一条线上，或原地不动
        return False
    if not _path_is_clear(board, from_pos, to_pos):
        return False
    return _can_land(board, to_pos, _mover_color(board, from_pos))


def bishop_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """象：斜线，路径无阻挡"""
    dr = to_pos[0] - from_pos[0]
    dc = to_pos[1] - from_pos[1]
    if abs(dr) != abs(dc) or dr == 0:
        return False
    if not _path_is_clear(board, from_pos, to_pos):
        return False
    return _can_land(board, to_pos, _mover_color(board, from_pos))


def queen_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """后：车的走法或象的走法"""
    return rook_rule(board, from_pos, to_pos) or bishop_rule(board, from_pos, to_pos)


def pawn_rule(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """
    兵的走法

    - 直进一格到空格
    - 从初始行直进两格，途经格与目标格都为空
    - 斜进一格吃子（目标格必须是敌方棋子）
    不支持吃过路兵。
    """
    color = _mover_color(board, from_pos)
    direction = color.forward
    (r1, c1), (r2, c2) = from_pos, to_pos

    if c1 == c2:
        if r2 == r1 + direction:
            return board.is_empty(to_pos)
        if r1 == color.pawn_start_row and r2 == r1 + 2 * direction:
            return board.is_empty((r1 + direction, c1)) and board.is_empty(to_pos)
        return False

    if abs(c2 - c1) == 1 and r2 == r1 + direction:
        return board.is_enemy_piece(to_pos, color)

    return False


MOVEMENT_RULES: Dict[PieceKind, MovementRule] = {
    PieceKind.KING: king_rule,
    PieceKind.QUEEN: queen_rule,
    PieceKind.ROOK: rook_rule,
    PieceKind.BISHOP: bishop_rule,
    PieceKind.KNIGHT: knight_rule,
    PieceKind.PAWN: pawn_rule,
}


def movement_rule(kind: PieceKind) -> MovementRule:
    """
    按棋子类型获取走法规则

    Args:
        kind: 棋子类型

    Returns:
        MovementRule: 纯函数 (board, from_pos, to_pos) -> bool
    """
    return MOVEMENT_RULES[PieceKind(kind)]


def can_move(board: ChessBoard, from_pos: Square, to_pos: Square) -> bool:
    """
    判断起点上的棋子能否按自身走法到达终点

    起点为空或任一坐标越界时返回False，从不抛出异常。

    Args:
        board: 棋盘
        from_pos: 起点
        to_pos: 终点

    Returns:
        bool: 走法是否合法
    """
    if not (is_on_board(from_pos) and is_on_board(to_pos)):
        return False
    piece = board.get_piece_at(from_pos)
    if piece is None:
        return False
    return movement_rule(piece.kind)(board, tuple(from_pos), tuple(to_pos))
