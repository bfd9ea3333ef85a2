"""
象棋变体规则内核

8x8棋盘上的双人象棋变体：各棋子走法规则、路径阻挡、吃子、兵的升变，
以及以王被吃掉为准的简化胜负判定。
包括规则引擎、游戏会话、配置管理和日志工具。
"""

__version__ = "0.1.0"
__author__ = "Touch Chess Team"

from .rules_engine import ChessBoard, Move, Piece, PieceKind, Color, RuleEngine
from .game_session import GameSession, TouchResult
from .config import ConfigManager, GameConfig, SystemConfig
from .utils import setup_logger, get_logger, ChessVariantError

__all__ = [
    "__version__", "__author__",
    "ChessBoard", "Move", "Piece", "PieceKind", "Color", "RuleEngine",
    "GameSession", "TouchResult",
    "ConfigManager", "GameConfig", "SystemConfig",
    "setup_logger", "get_logger", "ChessVariantError"
]
