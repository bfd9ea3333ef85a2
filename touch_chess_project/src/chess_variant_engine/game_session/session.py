"""
游戏会话

管理轮次、选中状态、兵的升变和胜负判定。
展示层只读取快照，并把点击事件和升变选择交给会话处理。
所有非法输入都被静默吸收，入口方法从不抛出异常。
"""

from enum import Enum
from typing import List, Optional, Tuple, Union

from ..config.game_config import GameConfig
from ..rules_engine import (
    ChessBoard, Color, Move, Piece, PieceKind, RuleEngine, Square, is_on_board
)
from ..utils.exceptions import InvalidPieceError
from ..utils.logger import LoggerMixin


class TouchResult(Enum):
    """一次点击的处理结果"""
    IGNORED = "ignored"                      # 无效点击，状态不变
    SELECTED = "selected"                    # 选中了己方棋子
    DESELECTED = "deselected"                # 目标非法，取消选中
    MOVED = "moved"                          # 走子完成，轮到对方
    PROMOTION_PENDING = "promotion_pending"  # 兵到达底线，等待升变选择
    GAME_OVER = "game_over"                  # 吃掉对方的王，游戏结束


class GameSession(LoggerMixin):
    """
    游戏会话

    两阶段点击走子：第一次点击选中己方棋子，第二次点击目标格。
    每次走子都生成新的棋盘，会话只持有当前棋盘。
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 rule_engine: Optional[RuleEngine] = None):
        """
        初始化会话

        Args:
            config: 游戏配置，None表示使用默认配置
            rule_engine: 规则引擎
        """
        self.config = config or GameConfig()
        self.config.validate()
        self.promotion_kinds = self.config.promotion_kinds()
        self.rule_engine = rule_engine or RuleEngine()
        self._start_new_game()

    def _start_new_game(self):
        self.board = ChessBoard()
        self.turn = Color.WHITE
        self.selected_square: Optional[Square] = None
        self.pending_promotion: Optional[Square] = None
        self.game_over = False
        self.winner: Optional[Color] = None

    # ==================== 查询接口 ====================

    def get_board_snapshot(self) -> ChessBoard:
        """当前棋盘（不可变）"""
        return self.board

    def get_turn(self) -> Color:
        return self.turn

    def get_selection(self) -> Optional[Square]:
        return self.selected_square

    def is_pending_promotion(self) -> Optional[Square]:
        """等待升变的格子，没有则返回None"""
        return self.pending_promotion

    def is_terminal(self) -> Tuple[bool, Optional[Color]]:
        """
        游戏是否结束

        Returns:
            Tuple[bool, Optional[Color]]: (是否结束, 胜方)
        """
        return self.game_over, self.winner

    def get_legal_destinations(self) -> List[Square]:
        """选中棋子的所有可达格，未选中时返回空列表"""
        if self.selected_square is None:
            return []
        moves = self.rule_engine.generate_piece_moves(self.board, self.selected_square)
        return [move.to_pos for move in moves]

    # ==================== 输入处理 ====================

    def handle_square_touch(self, row: int, col: int) -> TouchResult:
        """
        处理一次格子点击

        Args:
            row: 行 (0-7)
            col: 列 (0-7)

        Returns:
            TouchResult: 处理结果
        """
        if self.game_over or self.pending_promotion is not None:
            return TouchResult.IGNORED
        square = (row, col)
        if not is_on_board(square):
            return TouchResult.IGNORED

        if self.selected_square is None:
            return self._select(square)
        return self._move_selected_to(square)

    def _select(self, square: Square) -> TouchResult:
        if not self.board.is_own_piece(square, self.turn):
            return TouchResult.IGNORED
        self.selected_square = square
        self.log_debug(f"{self.turn.display_name} 选中 {square}")
        return TouchResult.SELECTED

    def _move_selected_to(self, square: Square) -> TouchResult:
        origin = self.selected_square
        self.selected_square = None

        move = Move(
            from_pos=origin,
            to_pos=square,
            piece=self.board.get_piece_at(origin),
            captured_piece=self.board.get_piece_at(square)
        )
        if not self.rule_engine.is_legal_move(self.board, move):
            self.log_debug(f"非法走法，取消选中: {move}")
            return TouchResult.DESELECTED

        self.board = self.board.make_move(move)
        self.log_info(f"走子: {move}" + (f"，吃掉 {move.captured_piece}" if move.is_capture else ""))

        if self.rule_engine.is_promotion_square(move.piece, square):
            self.pending_promotion = square
            self.log_info(f"{self.turn.display_name} 兵到达 {square}，等待升变")
            return TouchResult.PROMOTION_PENDING

        opponent = self.turn.opponent
        if not self.rule_engine.has_king(self.board, opponent):
            self.game_over = True
            self.winner = self.turn
            self.log_info(f"{opponent.display_name} 的王被吃掉，{self.turn.display_name} 获胜")
            return TouchResult.GAME_OVER

        self.turn = opponent
        return TouchResult.MOVED

    def choose_promotion(self, kind: Union[PieceKind, str]) -> bool:
        """
        选择升变棋子

        替换等待升变格上的兵并轮到对方。升变后不做胜负判定。

        Args:
            kind: 升变目标，PieceKind或名称（如 "queen"）

        Returns:
            bool: 是否完成升变；没有等待中的升变或选项无效时返回False
        """
        if self.pending_promotion is None:
            return False
        try:
            kind = PieceKind.parse(kind)
        except InvalidPieceError:
            self.log_debug(f"无效的升变选项: {kind!r}")
            return False
        if kind not in self.promotion_kinds:
            self.log_debug(f"不允许的升变选项: {kind.display_name}")
            return False

        square = self.pending_promotion
        pawn = self.board.get_piece_at(square)
        promoted = Piece(kind, pawn.color)
        self.board = self.board.place_piece(square, promoted)
        self.pending_promotion = None
        self.turn = self.turn.opponent
        self.log_info(f"{square} 升变为 {promoted}")
        return True

    def reset(self) -> None:
        """重新开始：恢复初始局面和所有状态"""
        self._start_new_game()
        self.log_info("新的一局")

    def __str__(self) -> str:
        return self.board.to_visual_string(self.config.glyph_style)
