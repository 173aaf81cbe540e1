"""
Install 命令实现

下载、校验并安装 SilliReminder。退出码对应失败类别，便于脚本调用。
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from ...config import DEFAULT_CONFIG_NAME, ConfigError, ConfigResolver, ConfigValidationError, load_config
from ...errors import ExitCode, SilliSetupError
from ...install.install_context import InstallOptions
from ...install.installer import Installer
from .common import setup_output


console = Console()


def install_command(
    config: str = typer.Option(DEFAULT_CONFIG_NAME, "--config", "-c", help="配置文件路径"),
    with_instructions: Optional[bool] = typer.Option(
        None, "--with-instructions/--no-instructions", help="是否下载说明文档（默认交互询问）"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="已安装时直接覆盖，不再询问"),
    silent: bool = typer.Option(False, "--silent", help="静默安装，不显示任何提示"),
    very_silent: bool = typer.Option(False, "--very-silent", help="完全静默，仅输出警告与错误"),
    parallel: bool = typer.Option(False, "--parallel", help="并行下载主程序与说明文档"),
    locale_name: Optional[str] = typer.Option(None, "--locale", help="说明文档语言（默认跟随系统）"),
    keep_staging: bool = typer.Option(False, "--keep-staging", help="安装后保留暂存文件"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="日志输出文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出详细调试日志"),
) -> None:
    """安装 SilliReminder

    示例:
        sillisetup install -c sillisetup.yaml
        sillisetup install -c sillisetup.yaml --silent --with-instructions
    """
    setup_output(verbose, very_silent, log_file)
    interactive = not (silent or very_silent)

    try:
        config_obj = load_config(config)
    except ConfigValidationError as e:
        console.print("[red]配置验证失败:[/red]")
        console.print(e.format_errors())
        raise typer.Exit(ExitCode.CONFIG_INVALID)
    except ConfigError as e:
        console.print(f"[red]配置错误[/red]: {e}")
        raise typer.Exit(ExitCode.CONFIG_INVALID)

    try:
        ConfigResolver().validate(config_obj)
    except SilliSetupError as e:
        console.print(f"[red]配置无效[/red]: {e}")
        raise typer.Exit(e.exit_code)

    if parallel:
        config_obj = config_obj.model_copy(update={"parallel_downloads": True})

    if with_instructions is None:
        with_instructions = (
            interactive
            and config_obj.has_secondary_asset()
            and Confirm.ask(f"是否下载说明文档 “{config_obj.secondary_asset_file_name}”?", default=False)
        )

    def confirm_overwrite(path: Path) -> bool:
        return Confirm.ask(f"已安装 {path}，是否覆盖?", default=True)

    options = InstallOptions(
        with_secondary=bool(with_instructions),
        force=force,
        locale=locale_name,
        confirm_overwrite=confirm_overwrite if interactive else None,
        keep_staging=keep_staging,
    )

    last_stage = {"name": None}

    def progress_callback(stage: str, current: int, total: int, message: str = "") -> None:
        """每个阶段只显示一次"""
        if interactive and stage != last_stage["name"]:
            last_stage["name"] = stage
            console.print(f"[blue]{stage}[/blue] {message}".rstrip())

    result = Installer().install(config_obj, options, progress_callback=progress_callback)

    if not result.success:
        console.print(f"[red]✗ 安装失败[/red]: {result.message}")
        raise typer.Exit(result.exit_code)

    console.print(f"[green]✓ 安装完成[/green]: {result.installed_path}")
    if result.secondary_path:
        console.print(f"[blue]说明文档[/blue]: {result.secondary_path}")
    for message in result.warnings:
        console.print(f"[yellow]警告[/yellow]: {message}")
