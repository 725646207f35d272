"""tx2d - Tx2D texture container decoder."""

from tx2d.color import Color
from tx2d.container import Tx2DHeader, Tx2DReader, load_texture
from tx2d.decoder import (
    ColorMode,
    PixelDecoder,
    PixelsPerByte,
    decode_all,
    decode_pixel,
    decode_to_rgba_bytes,
    pixel_count,
)
from tx2d.errors import (
    IndexOutOfRangeError,
    MalformedHeaderError,
    PaletteIndexError,
    Tx2DError,
    UnsupportedModeError,
)
from tx2d.texture import Texture2DData

__version__ = "0.1.0"

__all__ = [
    "Color",
    "ColorMode",
    "IndexOutOfRangeError",
    "MalformedHeaderError",
    "PaletteIndexError",
    "PixelDecoder",
    "PixelsPerByte",
    "Texture2DData",
    "Tx2DError",
    "Tx2DHeader",
    "Tx2DReader",
    "UnsupportedModeError",
    "decode_all",
    "decode_pixel",
    "decode_to_rgba_bytes",
    "load_texture",
    "pixel_count",
]
