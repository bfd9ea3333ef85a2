"""
游戏会话测试

测试两阶段点击走子、轮次切换、升变、吃王判负和重新开始。
"""

import logging

import pytest

from touch_chess_project.src.chess_variant_engine.config import GameConfig
from touch_chess_project.src.chess_variant_engine.game_session import GameSession, TouchResult
from touch_chess_project.src.chess_variant_engine.rules_engine import (
    ChessBoard, Color, Piece, PieceKind
)
from touch_chess_project.src.chess_variant_engine.utils import ConfigurationError


EMPTY_ROW = "........"

# 白兵在(1,4)，通往(0,4)的路径畅通
PROMOTION_LAYOUT = [
    "k....n..",
    "....P...",
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    "....K...",
]

# 白车可以直接吃掉(0,0)的黑王
KING_CAPTURE_LAYOUT = [
    "k.......",
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    EMPTY_ROW,
    "......p.",
    "R......K",
]


def play(session, *touches):
    """依次点击多个格子，返回最后一次的结果"""
    result = None
    for row, col in touches:
        result = session.handle_square_touch(row, col)
    return result


class TestGameSessionBasics:
    """会话初始状态和选中协议的测试"""

    def setup_method(self):
        self.session = GameSession()

    def test_initial_state(self):
        assert self.session.get_board_snapshot() == ChessBoard()
        assert self.session.get_turn() == Color.WHITE
        assert self.session.get_selection() is None
        assert self.session.is_pending_promotion() is None
        assert self.session.is_terminal() == (False, None)

    def test_select_own_piece(self):
        assert self.session.handle_square_touch(6, 4) == TouchResult.SELECTED
        assert self.session.get_selection() == (6, 4)

    @pytest.mark.parametrize("row,col", [(4, 4), (1, 4), (0, 0)])
    def test_touch_without_selection_ignored(self, row, col):
        """空格或对方棋子不能被选中"""
        assert self.session.handle_square_touch(row, col) == TouchResult.IGNORED
        assert self.session.get_selection() is None

    @pytest.mark.parametrize("row,col", [
        (8, 0), (-1, 3), (0, 8), ("a", 1), (None, 2), (6.7, 4.2), (6.0, 4), (True, 4),
    ])
    def test_invalid_coordinates_ignored(self, row, col):
        assert self.session.handle_square_touch(row, col) == TouchResult.IGNORED
        assert self.session.handle_square_touch(6, 4) == TouchResult.SELECTED
        assert self.session.handle_square_touch(row, col) == TouchResult.IGNORED
        assert self.session.get_selection() == (6, 4)

    def test_pawn_double_step(self):
        """白兵 (6,4) -> (4,4)"""
        assert play(self.session, (6, 4), (4, 4)) == TouchResult.MOVED

        board = self.session.get_board_snapshot()
        assert board.get_piece_at((4, 4)) == Piece(PieceKind.PAWN, Color.WHITE)
        assert board.is_empty((6, 4))
        assert self.session.get_selection() is None
        assert self.session.get_turn() == Color.BLACK

    def test_illegal_destination_deselects(self):
        """白兵 (6,4) -> (3,4) 三步非法，静默取消选中"""
        assert play(self.session, (6, 4), (3, 4)) == TouchResult.DESELECTED
        assert self.session.get_selection() is None
        assert self.session.get_turn() == Color.WHITE
        assert self.session.get_board_snapshot() == ChessBoard()

    def test_blocked_rook_deselects(self):
        assert play(self.session, (7, 0), (7, 3)) == TouchResult.DESELECTED
        assert self.session.get_board_snapshot() == ChessBoard()

    def test_touching_own_piece_while_selected_deselects(self):
        assert play(self.session, (6, 4), (6, 5)) == TouchResult.DESELECTED
        assert self.session.get_selection() is None

    def test_turns_alternate(self):
        play(self.session, (6, 4), (4, 4))
        # 轮到黑方时白方棋子不能被选中
        assert self.session.handle_square_touch(6, 3) == TouchResult.IGNORED

        assert play(self.session, (1, 3), (3, 3)) == TouchResult.MOVED
        assert self.session.get_turn() == Color.WHITE

        # 白兵斜吃黑兵
        assert play(self.session, (4, 4), (3, 3)) == TouchResult.MOVED
        board = self.session.get_board_snapshot()
        assert board.get_piece_at((3, 3)) == Piece(PieceKind.PAWN, Color.WHITE)
        assert len(board.get_all_pieces(Color.BLACK)) == 15
        assert self.session.get_turn() == Color.BLACK

    def test_snapshot_is_not_mutated_by_later_moves(self):
        before = self.session.get_board_snapshot()
        play(self.session, (6, 4), (4, 4))
        assert before == ChessBoard()
        assert self.session.get_board_snapshot() is not before

    def test_legal_destinations(self):
        assert self.session.get_legal_destinations() == []
        self.session.handle_square_touch(7, 6)
        assert set(self.session.get_legal_destinations()) == {(5, 5), (5, 7)}


class TestPromotion:
    """兵升变的测试"""

    def setup_method(self):
        self.session = GameSession()
        self.session.board = ChessBoard.from_layout(PROMOTION_LAYOUT)

    def test_promotion_pending_blocks_input(self):
        assert play(self.session, (1, 4), (0, 4)) == TouchResult.PROMOTION_PENDING
        assert self.session.is_pending_promotion() == (0, 4)
        assert self.session.get_turn() == Color.WHITE

        # 等待升变时忽略所有点击
        assert self.session.handle_square_touch(7, 4) == TouchResult.IGNORED
        assert self.session.handle_square_touch(0, 0) == TouchResult.IGNORED
        assert self.session.get_selection() is None

    def test_choose_queen(self):
        play(self.session, (1, 4), (0, 4))
        assert self.session.choose_promotion(PieceKind.QUEEN)

        board = self.session.get_board_snapshot()
        assert board.get_piece_at((0, 4)) == Piece(PieceKind.QUEEN, Color.WHITE)
        assert self.session.is_pending_promotion() is None
        assert self.session.get_turn() == Color.BLACK
        assert self.session.is_terminal() == (False, None)

    @pytest.mark.parametrize("name,kind", [
        ("rook", PieceKind.ROOK), ("Bishop", PieceKind.BISHOP), ("KNIGHT", PieceKind.KNIGHT)
    ])
    def test_choose_by_name(self, name, kind):
        play(self.session, (1, 4), (0, 4))
        assert self.session.choose_promotion(name)
        assert self.session.get_board_snapshot().get_piece_at((0, 4)) == Piece(kind, Color.WHITE)

    @pytest.mark.parametrize("choice", ["king", "pawn", "dragon", PieceKind.KING, None])
    def test_invalid_choice_keeps_pending(self, choice):
        play(self.session, (1, 4), (0, 4))
        assert not self.session.choose_promotion(choice)
        assert self.session.is_pending_promotion() == (0, 4)
        assert self.session.get_turn() == Color.WHITE

    def test_choose_without_pending_is_noop(self):
        board = self.session.get_board_snapshot()
        assert not self.session.choose_promotion(PieceKind.QUEEN)
        assert self.session.get_board_snapshot() == board
        assert self.session.get_turn() == Color.WHITE

    def test_promotion_with_capture(self):
        assert play(self.session, (1, 4), (0, 5)) == TouchResult.PROMOTION_PENDING
        assert self.session.choose_promotion("knight")
        assert self.session.get_board_snapshot().get_piece_at((0, 5)) == Piece(PieceKind.KNIGHT, Color.WHITE)

    def test_promotion_does_not_run_win_check(self):
        """兵升变时吃掉了王，也不判定胜负，只切换轮次"""
        self.session.board = ChessBoard.from_layout(
            ["...k...."] + PROMOTION_LAYOUT[1:]
        )
        assert play(self.session, (1, 4), (0, 3)) == TouchResult.PROMOTION_PENDING
        assert self.session.choose_promotion(PieceKind.QUEEN)
        assert self.session.is_terminal() == (False, None)
        assert self.session.get_turn() == Color.BLACK

    def test_black_promotion(self):
        self.session.board = ChessBoard.from_layout(
            ["....k..."] + [EMPTY_ROW] * 5 + ["p......."] + ["....K..."]
        )
        self.session.turn = Color.BLACK
        assert play(self.session, (6, 0), (7, 0)) == TouchResult.PROMOTION_PENDING
        assert self.session.choose_promotion("rook")
        assert self.session.get_board_snapshot().get_piece_at((7, 0)) == Piece(PieceKind.ROOK, Color.BLACK)
        assert self.session.get_turn() == Color.WHITE

    def test_restricted_choices(self):
        session = GameSession(GameConfig(promotion_choices=["queen"]))
        session.board = ChessBoard.from_layout(PROMOTION_LAYOUT)
        play(session, (1, 4), (0, 4))
        assert not session.choose_promotion("knight")
        assert session.choose_promotion("queen")

    def test_config_changed_after_start(self):
        """会话创建后修改配置不影响升变选项"""
        self.session.config.promotion_choices = ["dragon"]
        play(self.session, (1, 4), (0, 4))
        assert not self.session.choose_promotion("dragon")
        assert self.session.choose_promotion("queen")
        assert self.session.get_turn() == Color.BLACK


class TestGameOver:
    """吃王判负的测试"""

    def setup_method(self):
        self.session = GameSession()
        self.session.board = ChessBoard.from_layout(KING_CAPTURE_LAYOUT)

    def test_king_capture_ends_game(self):
        assert play(self.session, (7, 0), (0, 0)) == TouchResult.GAME_OVER
        assert self.session.is_terminal() == (True, Color.WHITE)
        assert self.session.get_turn() == Color.WHITE

    def test_no_input_after_game_over(self):
        play(self.session, (7, 0), (0, 0))
        board = self.session.get_board_snapshot()

        assert self.session.handle_square_touch(7, 7) == TouchResult.IGNORED
        assert self.session.handle_square_touch(6, 6) == TouchResult.IGNORED
        assert not self.session.choose_promotion(PieceKind.QUEEN)
        assert self.session.get_board_snapshot() == board
        assert self.session.get_turn() == Color.WHITE

    def test_black_wins(self):
        # 黑兵斜吃白王
        self.session.board = ChessBoard.from_layout(
            ["k......."] + [EMPTY_ROW] * 4 + ["......p."] + [".......K"] + [EMPTY_ROW]
        )
        self.session.turn = Color.BLACK
        assert play(self.session, (5, 6), (6, 7)) == TouchResult.GAME_OVER
        assert self.session.is_terminal() == (True, Color.BLACK)
        assert self.session.get_turn() == Color.BLACK

    def test_game_over_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="touch_chess")
        play(self.session, (7, 0), (0, 0))
        assert any("获胜" in record.getMessage() for record in caplog.records)

    def test_non_capture_with_no_kings_on_board(self):
        """对方本来就没有王时，任意合法走子都结束游戏"""
        self.session.board = ChessBoard.from_layout([EMPTY_ROW] * 7 + ["R......."])
        assert play(self.session, (7, 0), (6, 0)) == TouchResult.GAME_OVER
        assert self.session.is_terminal() == (True, Color.WHITE)


class TestReset:
    """重新开始的测试"""

    def test_reset_after_moves(self):
        session = GameSession()
        play(session, (6, 4), (4, 4), (1, 3), (3, 3), (7, 6))
        session.reset()

        assert session.get_board_snapshot() == ChessBoard()
        assert session.get_turn() == Color.WHITE
        assert session.get_selection() is None
        assert session.is_pending_promotion() is None
        assert session.is_terminal() == (False, None)

    def test_reset_clears_pending_promotion(self):
        session = GameSession()
        session.board = ChessBoard.from_layout(PROMOTION_LAYOUT)
        play(session, (1, 4), (0, 4))
        session.reset()

        assert session.is_pending_promotion() is None
        assert session.handle_square_touch(6, 0) == TouchResult.SELECTED

    def test_reset_after_game_over(self):
        session = GameSession()
        session.board = ChessBoard.from_layout(KING_CAPTURE_LAYOUT)
        play(session, (7, 0), (0, 0))
        session.reset()

        assert session.is_terminal() == (False, None)
        assert play(session, (6, 4), (4, 4)) == TouchResult.MOVED


class TestSessionConfig:

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            GameSession(GameConfig(glyph_style="emoji"))

    def test_ascii_rendering(self):
        session = GameSession(GameConfig(glyph_style="ascii"))
        assert "7 R N B Q K B N R" in str(session)
