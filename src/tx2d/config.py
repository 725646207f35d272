"""Configuration module for tx2d."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_EXPORT_FORMATS = ("png", "webp")


class ConfigError(Exception):
    """設定ファイル読み込みエラー"""

    pass


@dataclass(frozen=True)
class DecodeConfig:
    """デコード設定"""

    max_workers: int = 1


@dataclass(frozen=True)
class ExportConfig:
    """画像書き出し設定

    quality はWebPの品質値（0-100）。lossless_alphaが有効な場合は
    ロスレス圧縮となり、quality は圧縮の労力として扱われる。
    """

    format: str = "png"
    quality: int = 95
    lossless_alpha: bool = True


@dataclass(frozen=True)
class LogSettings:
    """ログ設定"""

    verbose: int = 0
    log_file: Path | None = None


@dataclass(frozen=True)
class Tx2DConfig:
    """ルート設定"""

    decode: DecodeConfig = field(default_factory=DecodeConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    log: LogSettings = field(default_factory=LogSettings)


def load_config(path: Path) -> Tx2DConfig:
    """設定ファイルを読み込む

    Args:
        path: 設定ファイルパス

    Returns:
        Tx2DConfig: 読み込んだ設定（デフォルトとマージ済み）

    Raises:
        ConfigError: ファイル読み込みまたはパースエラー、不正な値
    """
    if not path.exists():
        raise ConfigError(f"設定ファイルが見つかりません: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML解析エラー: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("設定ファイルはYAMLのマッピング形式である必要があります")

    default = get_default_config()

    return Tx2DConfig(
        decode=_merge_decode_config(data.get("decode", {}), default.decode),
        export=_merge_export_config(data.get("export", {}), default.export),
        log=_merge_log_settings(data.get("log", {}), default.log),
    )


def get_default_config() -> Tx2DConfig:
    """デフォルト設定を取得する"""
    return Tx2DConfig()


def _merge_decode_config(data: dict[str, Any], default: DecodeConfig) -> DecodeConfig:
    """デコード設定をマージする"""
    if not isinstance(data, dict):
        return default
    max_workers = data.get("max_workers", default.max_workers)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigError(f"decode.max_workersは1以上の整数である必要があります: {max_workers}")
    return DecodeConfig(max_workers=max_workers)


def _merge_export_config(data: dict[str, Any], default: ExportConfig) -> ExportConfig:
    """画像書き出し設定をマージする"""
    if not isinstance(data, dict):
        return default
    export_format = str(data.get("format", default.format)).lower()
    if export_format not in SUPPORTED_EXPORT_FORMATS:
        raise ConfigError(f"未対応の出力形式です: {export_format}")
    quality = data.get("quality", default.quality)
    if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 100:
        raise ConfigError(f"export.qualityは0-100の整数である必要があります: {quality}")
    lossless_alpha = data.get("lossless_alpha", default.lossless_alpha)
    if not isinstance(lossless_alpha, bool):
        raise ConfigError(f"export.lossless_alphaは真偽値である必要があります: {lossless_alpha}")
    return ExportConfig(
        format=export_format,
        quality=quality,
        lossless_alpha=lossless_alpha,
    )


def _merge_log_settings(data: dict[str, Any], default: LogSettings) -> LogSettings:
    """ログ設定をマージする"""
    if not isinstance(data, dict):
        return default
    verbose = data.get("verbose", default.verbose)
    if isinstance(verbose, bool) or not isinstance(verbose, int) or not -1 <= verbose <= 2:
        raise ConfigError(f"log.verboseは-1から2の整数である必要があります: {verbose}")
    log_file = data.get("log_file")
    return LogSettings(
        verbose=verbose,
        log_file=Path(log_file) if log_file else default.log_file,
    )
