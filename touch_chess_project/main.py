#!/usr/bin/env python3
"""
Touch Chess 主入口文件

提供终端前端：渲染棋盘，把输入的坐标当作触屏点击交给游戏会话。
"""

from typing import Iterable, Optional

import click
from rich.console import Console
from rich.table import Table

from touch_chess_project import __version__
from touch_chess_project.src.chess_variant_engine.config import (
    ConfigManager, GameConfig, SystemConfig
)
from touch_chess_project.src.chess_variant_engine.game_session import GameSession, TouchResult
from touch_chess_project.src.chess_variant_engine.rules_engine import BOARD_SIZE, ChessBoard, Square
from touch_chess_project.src.chess_variant_engine.utils import ConfigurationError, setup_logger

console = Console()

QUIT_COMMANDS = ('quit', 'q', 'exit')

RESULT_MESSAGES = {
    TouchResult.IGNORED: "[dim]无效点击[/dim]",
    TouchResult.DESELECTED: "[yellow]不能走到该格，已取消选中[/yellow]",
    TouchResult.MOVED: "[green]走子完成[/green]",
}


def render_board(board: ChessBoard, glyph_style: str = 'unicode',
                 selection: Optional[Square] = None,
                 highlights: Iterable[Square] = ()) -> Table:
    """
    把棋盘渲染为rich表格

    Args:
        board: 棋盘
        glyph_style: 'unicode' 或 'ascii'
        selection: 选中的格子
        highlights: 需要提示的可走格子

    Returns:
        Table: 可直接打印的表格
    """
    highlights = set(highlights)
    table = Table(show_header=True, show_lines=False, box=None, padding=(0, 1))
    table.add_column("")
    for col in range(BOARD_SIZE):
        table.add_column(str(col), justify="center")

    for row, cells in enumerate(board.snapshot()):
        rendered = []
        for col, piece in enumerate(cells):
            text = piece.glyph(glyph_style) if piece else '·'
            if (row, col) == selection:
                text = f"[bold black on yellow]{text}[/]"
            elif (row, col) in highlights:
                text = f"[black on green]{text}[/]"
            rendered.append(text)
        table.add_row(str(row), *rendered)
    return table


def _load_configs(config_dir: Optional[str]):
    if config_dir is None:
        return GameConfig(), SystemConfig()
    manager = ConfigManager(config_dir)
    return manager.get_game_config(), manager.get_system_config()


@click.group()
@click.version_option(version=__version__, prog_name="Touch Chess")
@click.option('--debug', is_flag=True, help='启用调试日志')
@click.option('--config', 'config_dir', type=click.Path(file_okay=False), help='配置目录')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_dir: Optional[str]):
    """触屏象棋变体 - 终端版"""
    game_config, system_config = _load_configs(config_dir)
    if debug:
        system_config.log_level = 'DEBUG'
        system_config.console_output = True

    try:
        game_config.validate()
        system_config.validate()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    setup_logger(
        level=system_config.log_level,
        log_file=system_config.log_file,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        console_output=system_config.console_output
    )
    ctx.obj = {'game_config': game_config, 'system_config': system_config}


@cli.command()
@click.option('--ascii', 'use_ascii', is_flag=True, help='使用ASCII字母显示棋子')
@click.pass_obj
def board(obj: dict, use_ascii: bool):
    """显示初始局面"""
    glyph_style = 'ascii' if use_ascii else obj['game_config'].glyph_style
    console.print(render_board(ChessBoard(), glyph_style))


@cli.command()
@click.pass_obj
def play(obj: dict):
    """双人对弈：输入 "行 列" 点击格子，升变时输入棋子名称"""
    config: GameConfig = obj['game_config']
    session = GameSession(config)
    console.print("[blue]输入 '行 列' 点击格子，'reset' 重新开始，'quit' 退出[/blue]")

    while True:
        highlights = session.get_legal_destinations() if config.highlight_legal_moves else ()
        console.print(render_board(session.get_board_snapshot(), config.glyph_style,
                                   session.get_selection(), highlights))

        finished, winner = session.is_terminal()
        if finished:
            console.print(f"[bold red]游戏结束: {winner.display_name} 获胜[/bold red]")
        elif session.is_pending_promotion() is not None:
            choices = ", ".join(kind.display_name for kind in session.promotion_kinds)
            console.print(f"[magenta]兵需要升变，可选: {choices}[/magenta]")
        else:
            console.print(f"{session.get_turn().display_name} 走棋")

        text = click.prompt(">", default="", show_default=False).strip()
        command = text.lower()
        if command in QUIT_COMMANDS:
            break
        if command == 'reset':
            session.reset()
            continue

        if session.is_pending_promotion() is not None:
            if not session.choose_promotion(command):
                console.print("[yellow]无效的升变选项[/yellow]")
            continue

        parts = text.replace(',', ' ').split()
        if len(parts) != 2 or not all(part.lstrip('-').isdigit() for part in parts):
            console.print("[yellow]请输入 '行 列'，例如 '6 4'[/yellow]")
            continue

        result = session.handle_square_touch(int(parts[0]), int(parts[1]))
        message = RESULT_MESSAGES.get(result)
        if message:
            console.print(message)


if __name__ == "__main__":
    cli()
