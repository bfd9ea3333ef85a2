"""
配置数据结构

定义游戏配置、系统配置和默认参数。
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..rules_engine.pieces import PROMOTION_KINDS, PieceKind
from ..utils.exceptions import ConfigurationError, InvalidPieceError


GLYPH_STYLES = ('unicode', 'ascii')


@dataclass
class GameConfig:
    """游戏配置"""
    glyph_style: str = 'unicode'                # 棋子显示符号 ('unicode', 'ascii')
    promotion_choices: List[str] = field(       # 允许的升变棋子
        default_factory=lambda: [kind.name.lower() for kind in PROMOTION_KINDS]
    )
    highlight_legal_moves: bool = True          # 选中棋子后是否提示可走格子

    def validate(self) -> None:
        """
        验证配置

        Raises:
            ConfigurationError: 配置值无效
        """
        if self.glyph_style not in GLYPH_STYLES:
            raise ConfigurationError('glyph_style', f"应为 {GLYPH_STYLES} 之一，实际为 {self.glyph_style!r}")
        if not self.promotion_choices:
            raise ConfigurationError('promotion_choices', "至少需要一个升变选项")
        for name in self.promotion_choices:
            try:
                kind = PieceKind.parse(name)
            except InvalidPieceError:
                raise ConfigurationError('promotion_choices', f"未知的棋子类型 {name!r}") from None
            if kind not in PROMOTION_KINDS:
                raise ConfigurationError('promotion_choices', f"{kind.display_name} 不能作为升变选项")

    def promotion_kinds(self) -> List[PieceKind]:
        """升变选项对应的棋子类型，顺序与配置一致"""
        return [PieceKind.parse(name) for name in self.promotion_choices]


@dataclass
class SystemConfig:
    """系统配置"""
    # 日志配置
    log_level: str = 'INFO'                     # 日志级别
    log_file: Optional[str] = None              # 日志文件，None表示不写文件
    log_dir: str = 'logs'                       # 日志目录
    log_max_size: int = 10                      # 日志文件最大大小(MB)
    log_backup_count: int = 5                   # 日志备份数量
    console_output: bool = False                # 是否输出到控制台

    def validate(self) -> None:
        if (not isinstance(self.log_level, str)
                or not isinstance(logging.getLevelName(self.log_level.upper()), int)):
            raise ConfigurationError('log_level', f"未知的日志级别 {self.log_level!r}")
        if not isinstance(self.log_max_size, int) or self.log_max_size <= 0:
            raise ConfigurationError('log_max_size', "必须大于0")
        if not isinstance(self.log_backup_count, int) or self.log_backup_count < 0:
            raise ConfigurationError('log_backup_count', "不能为负数")


# 默认配置实例
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
