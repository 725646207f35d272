"""テクスチャペイロードモジュール

コンテナから読み込まれたTx2Dテクスチャの内容を保持する不変データクラスを提供する。
"""

from __future__ import annotations

from dataclasses import dataclass

from tx2d.color import Color
from tx2d.decoder import ColorMode, decode_all, decode_pixel, decode_to_rgba_bytes, pixel_count


@dataclass(frozen=True)
class Texture2DData:
    """Tx2Dテクスチャのペイロード

    構築後は変更されない。ピクセルデータはbytesに、パレットはタプルに
    コピーされるため、元のバッファを変更しても影響を受けない。

    Attributes:
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        color_mode: カラーモード
        data: ピクセルデータのバイト列
        palette: パレット（PALETTE系モードでのみ使用、無い場合はNone）
    """

    width: int
    height: int
    color_mode: ColorMode
    data: bytes
    palette: tuple[Color, ...] | None = None

    def __post_init__(self) -> None:
        # frozen dataclassのため__setattr__を迂回して正規化する
        object.__setattr__(self, "color_mode", ColorMode.parse(self.color_mode))
        object.__setattr__(self, "data", bytes(self.data))
        if self.palette is not None:
            object.__setattr__(self, "palette", tuple(self.palette))

    @property
    def pixels(self) -> int:
        """ピクセルデータから算出したピクセル数"""
        return pixel_count(self.color_mode, len(self.data))

    @property
    def has_palette(self) -> bool:
        """パレットを持つかどうかを返す"""
        return self.palette is not None

    def get_pixel(self, index: int) -> Color:
        """指定インデックスのピクセルをデコードする"""
        return decode_pixel(self, index)

    def get_pixels(self, max_workers: int | None = None) -> list[Color]:
        """全ピクセルをデコードする"""
        return decode_all(self, max_workers=max_workers)

    def get_color_data(self, max_workers: int | None = None) -> bytes:
        """全ピクセルをRGBAバイト列にデコードする"""
        return decode_to_rgba_bytes(self, max_workers=max_workers)
