"""
Touch Chess 源代码模块

- chess_variant_engine: 象棋变体规则内核
"""

from . import chess_variant_engine

__all__ = [
    "chess_variant_engine",
]
