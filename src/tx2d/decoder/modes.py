"""カラーモード定義モジュール

Tx2Dテクスチャのカラーモードと、パック形式のピクセル密度を定義する。
"""

from enum import IntEnum

from tx2d.errors import UnsupportedModeError


class PixelsPerByte(IntEnum):
    """1バイトあたりに詰め込まれるピクセル数"""

    PPB1 = 1
    PPB2 = 2
    PPB4 = 4
    PPB8 = 8

    @property
    def bits_per_pixel(self) -> int:
        """1ピクセルあたりのビット数を返す"""
        return 8 // self.value


class ColorMode(IntEnum):
    """カラーモード

    値はファイルヘッダーに格納されるカラーモードタグと一致する。
    """

    LUM1 = 0
    LUM2 = 1
    LUM4 = 2
    LUM8 = 3
    LUMA8 = 4
    PALETTE1 = 5
    PALETTE2 = 6
    PALETTE4 = 7
    PALETTE8 = 8
    RGB565 = 9
    RGB8 = 10
    RGBA8 = 11

    @classmethod
    def parse(cls, value: object) -> "ColorMode":
        """任意の値をカラーモードに変換する

        Args:
            value: ColorModeまたはカラーモードタグの整数値

        Returns:
            対応するカラーモード

        Raises:
            UnsupportedModeError: 既知のカラーモードでない場合
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedModeError(value)
        try:
            return cls(value)
        except ValueError as e:
            raise UnsupportedModeError(value) from e

    @property
    def is_palette(self) -> bool:
        """パレット参照形式のモードかどうか"""
        return ColorMode.PALETTE1 <= self <= ColorMode.PALETTE8

    @property
    def is_luminance(self) -> bool:
        """パック済みグレースケール形式のモードかどうか（LUMA8は含まない）"""
        return ColorMode.LUM1 <= self <= ColorMode.LUM8

    @property
    def pixels_per_byte(self) -> PixelsPerByte | None:
        """パック形式の場合は1バイトあたりのピクセル数、それ以外はNone"""
        return _PACKED_PPB.get(self)

    @property
    def palette_size(self) -> int:
        """パレットの色数（2^bits）を返す

        Raises:
            ValueError: パレット形式でないモードの場合
        """
        if not self.is_palette:
            raise ValueError(f"パレット形式のカラーモードではありません: {self.name}")
        return 1 << _PACKED_PPB[self].bits_per_pixel


_PACKED_PPB: dict[ColorMode, PixelsPerByte] = {
    ColorMode.LUM1: PixelsPerByte.PPB8,
    ColorMode.LUM2: PixelsPerByte.PPB4,
    ColorMode.LUM4: PixelsPerByte.PPB2,
    ColorMode.LUM8: PixelsPerByte.PPB1,
    ColorMode.PALETTE1: PixelsPerByte.PPB8,
    ColorMode.PALETTE2: PixelsPerByte.PPB4,
    ColorMode.PALETTE4: PixelsPerByte.PPB2,
    ColorMode.PALETTE8: PixelsPerByte.PPB1,
}
