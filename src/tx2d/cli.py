"""CLI entry point for tx2d."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from tx2d import __version__
from tx2d.config import ConfigError, Tx2DConfig, get_default_config, load_config
from tx2d.container import Tx2DReader
from tx2d.errors import Tx2DError
from tx2d.image import OutputFormat, Tx2DImageConverter
from tx2d.logger import DecodeLogger, LogConfig, VerboseLevel
from tx2d.types import ExitCode

app = typer.Typer(help="Tx2Dテクスチャをデコードする CLI ツール")
console = Console()


def _format_size(size_bytes: int) -> str:
    """バイト数を人間が読みやすい形式に変換する"""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def _load_config_or_exit(config_path: Path | None) -> Tx2DConfig:
    if config_path is None:
        return get_default_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from e


def _require_file(path: Path) -> None:
    if not path.is_file():
        console.print(f"[red]Error: ファイルが見つかりません: {path}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT)


@app.command()
def info(
    input_path: Annotated[Path, typer.Argument(help="Tx2Dファイルパス")],
) -> None:
    """テクスチャのヘッダー情報を表示する"""
    _require_file(input_path)

    try:
        texture = Tx2DReader().load(input_path)
    except Tx2DError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.ERROR) from e

    table = Table(title="Texture Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("File", input_path.name)
    table.add_row("Size", f"{texture.width}x{texture.height}")
    table.add_row("Color Mode", f"{texture.color_mode.name} ({int(texture.color_mode)})")
    table.add_row("Palette", f"{len(texture.palette)} colors" if texture.has_palette else "N/A")
    table.add_row("Pixels", str(texture.pixels))
    table.add_row("Data Size", _format_size(len(texture.data)))

    console.print(table)
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def decode(
    input_path: Annotated[Path, typer.Argument(help="Tx2Dファイルパス")],
    output: Annotated[Path | None, typer.Option("-o", "--output", help="出力画像パス")] = None,
    output_format: Annotated[
        str | None, typer.Option("--format", help="出力形式（png/webp）")
    ] = None,
    workers: Annotated[int | None, typer.Option(help="デコードのワーカー数")] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="設定ファイル")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
    log_file: Annotated[Path | None, typer.Option(help="ログファイル出力先")] = None,
) -> None:
    """テクスチャを画像ファイルに書き出す"""
    _require_file(input_path)
    config = _load_config_or_exit(config_path)

    format_name = (output_format or config.export.format).lower()
    try:
        fmt = OutputFormat(format_name)
    except ValueError as e:
        console.print(f"[red]Error: 未対応の出力形式です: {format_name}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from e

    log_config = LogConfig(
        verbose_level=VerboseLevel.from_count(verbose or config.log.verbose),
        log_file=log_file or config.log.log_file,
    )
    converter = Tx2DImageConverter(
        output_format=fmt,
        quality=config.export.quality,
        lossless_alpha=config.export.lossless_alpha,
        max_workers=workers or config.decode.max_workers,
    )
    dest = output or converter.get_output_path(input_path)

    with DecodeLogger(log_config) as logger:
        logger.debug(f"出力形式: {fmt.value}, ワーカー数: {converter.max_workers}")
        try:
            texture = converter.load(input_path)
            logger.log_texture(input_path, texture)
            result = converter.export_texture(texture, input_path, dest)
        except (Tx2DError, ValueError) as e:
            logger.error(str(e))
            raise typer.Exit(ExitCode.ERROR) from e

        if not result.is_success:
            logger.error(f"書き出しに失敗しました: {result.message}")
            raise typer.Exit(ExitCode.ERROR)

        logger.log_export(input_path, dest, _format_size(result.bytes_after))
        logger.info(f"書き出し完了: {dest}")
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def pixel(
    input_path: Annotated[Path, typer.Argument(help="Tx2Dファイルパス")],
    index: Annotated[int, typer.Argument(help="ピクセルのインデックス")],
) -> None:
    """1ピクセルをデコードしてRGBA値を表示する"""
    _require_file(input_path)

    try:
        color = Tx2DReader().load(input_path).get_pixel(index)
    except Tx2DError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.ERROR) from e

    typer.echo(f"{color.r} {color.g} {color.b} {color.a}")
    raise typer.Exit(ExitCode.SUCCESS)


def version_callback(value: bool) -> None:
    """バージョン表示コールバック"""
    if value:
        typer.echo(f"tx2d {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="バージョンを表示する",
        ),
    ] = False,
) -> None:
    """tx2d CLI - Tx2Dテクスチャデコーダー"""
    pass
