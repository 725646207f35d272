"""ログ出力モジュール

CLIおよび画像書き出し処理のログ出力を管理する。
VerboseLevel (詳細ログレベル)に応じて出力を制御する。
デコーダー本体は純粋関数のみで構成されるため、ここからはログを出力しない。
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from tx2d.texture import Texture2DData


class VerboseLevel(IntEnum):
    """詳細ログレベル

    QUIET: エラーのみ出力
    NORMAL: 結果のサマリを出力
    VERBOSE: テクスチャ情報と書き出しファイルも出力（-vオプション）
    DEBUG: デコード設定の詳細も出力（-vvオプション）
    """

    QUIET = -1
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2

    @classmethod
    def from_count(cls, count: int) -> VerboseLevel:
        """-vの指定回数からレベルを求める"""
        return cls(max(cls.QUIET, min(count, cls.DEBUG)))


@dataclass
class LogConfig:
    """ログ設定

    Attributes:
        verbose_level: ログの詳細度レベル
        log_file: ログ出力先ファイルパス（Noneの場合はファイル出力なし）
        use_color: カラー出力を使用するか
    """

    verbose_level: VerboseLevel = VerboseLevel.NORMAL
    log_file: Path | None = None
    use_color: bool = True


class DecodeLogger:
    """デコードログ出力クラス

    使用例:
        >>> config = LogConfig(verbose_level=VerboseLevel.VERBOSE)
        >>> with DecodeLogger(config) as logger:
        ...     logger.info("デコードを開始します")
    """

    _ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    def __init__(self, config: LogConfig) -> None:
        """ロガーを初期化する

        Args:
            config: ログ設定
        """
        self._config = config
        self._log_file: TextIO | None = None
        if config.log_file:
            # __exit__でファイルを閉じる
            self._log_file = open(config.log_file, "w", encoding="utf-8")  # noqa: SIM115

    def __enter__(self) -> DecodeLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """ログファイルを閉じる"""
        if self._log_file:
            self._log_file.close()
            self._log_file = None

    @property
    def config(self) -> LogConfig:
        """現在のログ設定を返す"""
        return self._config

    def _print(self, message: str, file: TextIO | None = None) -> None:
        if file is None:
            file = sys.stdout
        if not self._config.use_color:
            message = self._strip_ansi(message)
        print(message, file=file)

    def _log_to_file(self, level: str, message: str) -> None:
        if self._log_file:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            clean_message = self._strip_ansi(message)
            self._log_file.write(f"[{timestamp}] {level}: {clean_message}\n")
            self._log_file.flush()

    def _strip_ansi(self, text: str) -> str:
        return self._ANSI_ESCAPE_PATTERN.sub("", text)

    def info(self, message: str) -> None:
        """情報メッセージを出力する（NORMAL以上）"""
        if self._config.verbose_level >= VerboseLevel.NORMAL:
            self._print(message)
        self._log_to_file("INFO", message)

    def verbose(self, message: str) -> None:
        """詳細メッセージを出力する（VERBOSE以上）"""
        if self._config.verbose_level >= VerboseLevel.VERBOSE:
            self._print(message)
        self._log_to_file("VERBOSE", message)

    def debug(self, message: str) -> None:
        """デバッグメッセージを出力する（DEBUG以上）"""
        if self._config.verbose_level >= VerboseLevel.DEBUG:
            self._print(message)
        self._log_to_file("DEBUG", message)

    def error(self, message: str) -> None:
        """エラーメッセージを出力する（常に出力）"""
        self._print(f"エラー: {message}", file=sys.stderr)
        self._log_to_file("ERROR", message)

    def warning(self, message: str) -> None:
        """警告メッセージを出力する（QUIET以上）"""
        if self._config.verbose_level > VerboseLevel.QUIET:
            self._print(f"警告: {message}")
        self._log_to_file("WARNING", message)

    def log_texture(self, source: Path, texture: Texture2DData) -> None:
        """読み込んだテクスチャの情報をログする（VERBOSE以上）

        Args:
            source: 読み込んだファイルパス
            texture: 読み込まれたペイロード
        """
        palette = f", palette={len(texture.palette)}" if texture.palette is not None else ""
        self.verbose(
            f"読み込み: {source.name} {texture.width}x{texture.height} "
            f"{texture.color_mode.name} pixels={texture.pixels}{palette}"
        )
        if texture.color_mode.is_palette and texture.palette is None:
            self.warning(f"{source.name}: パレットが無いためグレースケールとしてデコードします")
        if texture.width * texture.height != texture.pixels:
            self.warning(
                f"{source.name}: 画像サイズ({texture.width * texture.height})と"
                f"ピクセル数({texture.pixels})が一致しません"
            )

    def log_export(self, source: Path, dest: Path, size: str) -> None:
        """画像の書き出しをログする（VERBOSE以上）"""
        self.verbose(f"書き出し: {source.name} -> {dest.name} ({size})")
