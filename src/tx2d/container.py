"""Tx2Dコンテナ読み込みモジュール

Tx2D形式のファイルまたはバイト列からヘッダー、パレット、ピクセルデータを取り出し、
Texture2DDataを構築する。

Tx2D形式の構造:
- ヘッダー: マジック(4) + width(4) + height(4) + カラーモード(4)（すべてリトルエンディアン）
- パレット（任意）: マーカー"plte"(4) + 2^bits個のパック済みRGBA(各4)
- 残り: ピクセルデータ
"""

from dataclasses import dataclass
from pathlib import Path

from tx2d.color import Color
from tx2d.decoder import ColorMode
from tx2d.errors import MalformedHeaderError
from tx2d.texture import Texture2DData


@dataclass(frozen=True)
class Tx2DHeader:
    """Tx2Dヘッダー情報

    Attributes:
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        color_mode: カラーモード
    """

    width: int
    height: int
    color_mode: ColorMode


class Tx2DReader:
    """Tx2Dコンテナリーダー

    Tx2D形式のバイト列を解析してTexture2DDataを作成する。
    マジックバイトとパレットマーカー以外の整合性は検証しない。
    """

    MAGIC: bytes = b"Tx2D"
    """Tx2D形式のマジックバイト"""

    PALETTE_MARKER: bytes = b"plte"
    """パレットブロックの開始マーカー"""

    HEADER_SIZE: int = 16
    """ヘッダーサイズ: マジック(4) + width(4) + height(4) + カラーモード(4)"""

    def is_valid(self, data: bytes) -> bool:
        """指定されたデータがTx2D形式かどうかを判定する"""
        return data.startswith(self.MAGIC)

    def is_tx2d_file(self, file_path: Path) -> bool:
        """ファイル先頭のマジックバイトでTx2D形式かを判定する"""
        if not file_path.is_file():
            return False

        try:
            with open(file_path, "rb") as f:
                return self.is_valid(f.read(len(self.MAGIC)))
        except OSError:
            return False

    def parse_header(self, data: bytes) -> Tx2DHeader:
        """Tx2Dヘッダーを解析する

        Args:
            data: Tx2D形式のバイト列

        Returns:
            解析されたヘッダー情報

        Raises:
            MalformedHeaderError: マジックバイト不一致、またはデータが短すぎる場合
            UnsupportedModeError: カラーモードタグが未知の場合
        """
        if not self.is_valid(data):
            raise MalformedHeaderError("Tx2D形式ではありません")

        if len(data) < self.HEADER_SIZE:
            raise MalformedHeaderError("データが短すぎます")

        offset = len(self.MAGIC)
        width = int.from_bytes(data[offset : offset + 4], "little")
        offset += 4
        height = int.from_bytes(data[offset : offset + 4], "little")
        offset += 4
        tag = int.from_bytes(data[offset : offset + 4], "little", signed=True)

        return Tx2DHeader(width=width, height=height, color_mode=ColorMode.parse(tag))

    def read(self, data: bytes) -> Texture2DData:
        """Tx2D形式のバイト列からペイロードを作成する

        Args:
            data: Tx2D形式のバイト列

        Returns:
            読み込まれたペイロード

        Raises:
            MalformedHeaderError: ヘッダーまたはパレットが不正な場合
            UnsupportedModeError: カラーモードタグが未知の場合
        """
        header = self.parse_header(data)
        offset = self.HEADER_SIZE

        palette: tuple[Color, ...] | None = None
        if data[offset : offset + len(self.PALETTE_MARKER)] == self.PALETTE_MARKER:
            if not header.color_mode.is_palette:
                raise MalformedHeaderError(
                    f"パレット形式でないカラーモードにパレットがあります: {header.color_mode.name}"
                )
            offset += len(self.PALETTE_MARKER)
            palette, offset = self._read_palette(data, offset, header.color_mode.palette_size)

        return Texture2DData(
            width=header.width,
            height=header.height,
            color_mode=header.color_mode,
            data=data[offset:],
            palette=palette,
        )

    def load(self, file_path: Path) -> Texture2DData:
        """Tx2Dファイルを読み込む

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            MalformedHeaderError: ヘッダーまたはパレットが不正な場合
            UnsupportedModeError: カラーモードタグが未知の場合
        """
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")

        data = file_path.read_bytes()
        try:
            return self.read(data)
        except MalformedHeaderError as e:
            raise MalformedHeaderError(f"{e}: {file_path}") from e

    def _read_palette(self, data: bytes, offset: int, colors: int) -> tuple[tuple[Color, ...], int]:
        end = offset + colors * 4
        if end > len(data):
            raise MalformedHeaderError("パレットデータが不完全です")

        palette = tuple(
            Color.from_packed(int.from_bytes(data[pos : pos + 4], "little"))
            for pos in range(offset, end, 4)
        )
        return palette, end


def load_texture(file_path: Path) -> Texture2DData:
    """Tx2Dファイルを読み込む"""
    return Tx2DReader().load(file_path)
