"""
游戏会话模块

管理一局游戏的轮次、选中、升变和胜负状态。
"""

from .session import GameSession, TouchResult

__all__ = ['GameSession', 'TouchResult']
