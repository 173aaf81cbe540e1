"""
Uninstall 命令实现

删除程序和自启动项，并按用户选择删除应用数据与设置。
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ...config import DEFAULT_CONFIG_NAME, ConfigError, load_config
from ...errors import ExitCode, OperationCancelled
from ...uninstall import ConsoleChoicePrompter, UninstallCoordinator, default_autostart_registry
from ...utils.logging import warning, LogStage
from ...utils.paths import APP_NAME, DEFAULT_EXE_FILE_NAME, DEFAULT_INSTALL_ROOT, AppDataPaths, expand_path
from .common import setup_output


console = Console()


def _resolve_targets(config: str) -> tuple[str, Path]:
    """从配置读取应用名和程序路径；没有可用配置时使用默认值"""
    config_path = Path(config)
    if config_path.exists():
        try:
            config_obj = load_config(config_path)
            return config_obj.app_name, config_obj.get_exe_path()
        except ConfigError as e:
            warning(f"无法读取配置，使用默认路径: {e}", stage=LogStage.UNINSTALL)
    return APP_NAME, expand_path(DEFAULT_INSTALL_ROOT) / DEFAULT_EXE_FILE_NAME


def uninstall_command(
    config: str = typer.Option(DEFAULT_CONFIG_NAME, "--config", "-c", help="配置文件路径（可选）"),
    silent: bool = typer.Option(False, "--silent", help="静默卸载：不提示，保留应用数据与设置"),
    very_silent: bool = typer.Option(False, "--very-silent", help="完全静默，仅输出警告与错误"),
    gui: bool = typer.Option(False, "--gui", help="使用图形对话框收集卸载选项"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="日志输出文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出详细调试日志"),
) -> None:
    """卸载 SilliReminder

    示例:
        sillisetup uninstall
        sillisetup uninstall --silent
    """
    setup_output(verbose, very_silent, log_file)
    non_interactive = silent or very_silent

    app_name, exe_path = _resolve_targets(config)

    prompter = None
    if not non_interactive:
        if gui:
            from ...gui.uninstall_dialog import DialogChoicePrompter
            prompter = DialogChoicePrompter(app_name)
        else:
            prompter = ConsoleChoicePrompter(console)

    coordinator = UninstallCoordinator(
        paths=AppDataPaths.default(app_name),
        autostart=default_autostart_registry(),
        prompter=prompter,
        silent=non_interactive,
        app_name=app_name,
        exe_path=exe_path,
    )

    try:
        report = coordinator.run()
    except OperationCancelled as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(ExitCode.CANCELLED)

    for message in report.warnings:
        console.print(f"[yellow]警告[/yellow]: {message}")
    console.print(f"[green]✓ {app_name} 已卸载[/green]")
