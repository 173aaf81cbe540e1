"""
Validate 命令实现

先做结构验证，再做语义校验（占位符、HTTPS、指纹格式）。不发起任何网络请求。
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ...config import ConfigResolver, load_config, validate_config
from ...errors import ExitCode, SilliSetupError


console = Console()


def validate_command(
    config: str = typer.Option(..., "--config", "-c", help="配置文件路径"),
    json_output: bool = typer.Option(False, "--json", help="输出 JSON 格式的错误信息"),
) -> None:
    """验证配置文件

    示例:
        sillisetup validate -c sillisetup.yaml
        sillisetup validate -c sillisetup.yaml --json
    """
    config_path = Path(config)

    errors = validate_config(config_path)
    if errors:
        if json_output:
            typer.echo(json.dumps({
                "file": str(config_path),
                "errors": [
                    {"loc": [str(i) for i in e.get('loc', [])], "msg": e.get('msg', '')}
                    for e in errors
                ],
                "error_count": len(errors),
            }, ensure_ascii=False, indent=2))
        else:
            console.print(f"[red]配置文件验证失败 ({len(errors)} 个错误):[/red]")
            table = Table(title="验证错误")
            table.add_column("位置", style="cyan", no_wrap=True)
            table.add_column("错误信息", style="red")
            for error in errors:
                location = " -> ".join(str(item) for item in error.get('loc', []))
                table.add_row(location or "根级别", error.get('msg', '未知错误'))
            console.print(table)
        raise typer.Exit(ExitCode.CONFIG_INVALID)

    try:
        ConfigResolver().validate(load_config(config_path))
    except SilliSetupError as e:
        if json_output:
            typer.echo(json.dumps({
                "file": str(config_path),
                "error": str(e),
                "error_type": type(e).__name__,
            }, ensure_ascii=False, indent=2))
        else:
            console.print(f"[red]配置无效[/red]: {e}")
        raise typer.Exit(e.exit_code)

    console.print("[green]✓ 配置文件验证通过[/green]")
