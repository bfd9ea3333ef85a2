"""
Touch Chess

触屏象棋变体的规则内核与终端前端。
"""

__version__ = "0.1.0"
__author__ = "Touch Chess Team"
__description__ = "触屏象棋变体 - 走法规则、升变与吃王判负的规则内核"

from touch_chess_project.src import chess_variant_engine

__all__ = [
    "chess_variant_engine",
    "__version__",
    "__author__",
    "__description__",
]
