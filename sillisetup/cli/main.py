"""
SilliSetup CLI 主入口

提供 install/uninstall/validate/example/paths 等命令。
"""

import sys
import tempfile
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..config import DEFAULT_CONFIG_NAME, ConfigError, ConfigResolver, InstallConfig, load_config
from ..errors import SilliSetupError
from ..utils.paths import APP_NAME, STAGING_DIR_PREFIX, AppDataPaths
from .commands import install, uninstall, validate


# 创建主应用
app = typer.Typer(
    name="sillisetup",
    help="SilliSetup - SilliReminder 安装与卸载工具",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# 控制台输出
console = Console()

# Windows 安装器风格的开关
_SWITCH_ALIASES = {
    "/SILENT": "--silent",
    "/S": "--silent",
    "/VERYSILENT": "--very-silent",
}


def version_callback(value: bool) -> None:
    """显示版本信息"""
    if value:
        console.print(f"SilliSetup v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="显示版本信息"
    ),
) -> None:
    """SilliSetup - SilliReminder 安装与卸载工具

    使用 --help 查看可用命令的详细信息。
    """
    pass


# 注册子命令
app.command("install", help="下载、校验并安装 SilliReminder")(install.install_command)
app.command("uninstall", help="卸载 SilliReminder")(uninstall.uninstall_command)
app.command("validate", help="验证配置文件")(validate.validate_command)


@app.command("example")
def example_command(
    output: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--output", "-o",
        help="输出配置文件路径"
    )
) -> None:
    """生成带占位符的配置模板"""
    from ..config import save_config

    try:
        save_config(InstallConfig.template(), output)
    except ConfigError as e:
        console.print(f"[red]生成配置模板失败: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"✓ 配置模板已生成: [green]{output}[/green]")
    console.print("请将所有 CHANGE_ME 替换为实际值，然后运行:")
    console.print(f"  [cyan]sillisetup validate -c {output}[/cyan]")


@app.command("paths")
def paths_command(
    config: str = typer.Option(DEFAULT_CONFIG_NAME, "--config", "-c", help="配置文件路径（可选）"),
) -> None:
    """显示安装与应用数据路径"""
    config_obj = None
    try:
        config_obj = load_config(config)
    except ConfigError:
        pass

    app_name = config_obj.app_name if config_obj else APP_NAME
    data_paths = AppDataPaths.default(app_name)

    table = Table(title=f"{app_name} 路径")
    table.add_column("项目", style="cyan")
    table.add_column("路径", style="green")

    if config_obj:
        table.add_row("程序", str(config_obj.get_exe_path()))
        table.add_row("说明文档", str(config_obj.get_documents_dir() / config_obj.secondary_asset_file_name))
        if config_obj.has_secondary_asset():
            try:
                table.add_row("说明文档地址", ConfigResolver().resolve_secondary_url(config_obj))
            except SilliSetupError as e:
                table.add_row("说明文档地址", f"[red]{e}[/red]")
    table.add_row("应用数据目录", str(data_paths.root))
    table.add_row("数据库", str(data_paths.database))
    table.add_row("设置文件", str(data_paths.settings))
    table.add_row("暂存目录", str(Path(tempfile.gettempdir()) / f"{STAGING_DIR_PREFIX}*"))

    console.print(table)


def normalize_argv(argv: List[str]) -> List[str]:
    """将 /SILENT、/VERYSILENT、/S 转换为对应的长选项（不区分大小写）"""
    return [_SWITCH_ALIASES.get(arg.upper(), arg) for arg in argv]


def run() -> None:
    """控制台脚本入口"""
    sys.argv[1:] = normalize_argv(sys.argv[1:])
    app()


if __name__ == "__main__":
    run()
