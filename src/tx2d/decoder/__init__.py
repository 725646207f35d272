"""Tx2Dピクセルデコーダーパッケージ

カラーモードごとのピクセルデータをRGBA各8bitの色に変換する。
"""

from tx2d.decoder.modes import ColorMode, PixelsPerByte
from tx2d.decoder.packing import extract_packed_index, rescale_to_8bit
from tx2d.decoder.pixel import (
    PixelDecoder,
    PixelPayload,
    decode_all,
    decode_pixel,
    decode_to_rgba_bytes,
    pixel_count,
)

__all__ = [
    "ColorMode",
    "PixelDecoder",
    "PixelPayload",
    "PixelsPerByte",
    "decode_all",
    "decode_pixel",
    "decode_to_rgba_bytes",
    "extract_packed_index",
    "pixel_count",
    "rescale_to_8bit",
]
