"""Texture2DDataのテスト"""

import pytest

from tx2d.color import Color
from tx2d.decoder import ColorMode
from tx2d.errors import UnsupportedModeError
from tx2d.texture import Texture2DData


class TestTexture2DData:
    """Texture2DDataのテスト"""

    def test_normalizes_inputs(self) -> None:
        """bytearrayとリストは不変型にコピーされる"""
        buffer = bytearray(b"\x01\x02")
        palette = [Color(0, 0, 0), Color(255, 255, 255)]
        texture = Texture2DData(2, 1, 5, buffer, palette)  # type: ignore[arg-type]

        buffer[0] = 0xFF
        palette.append(Color(1, 1, 1))

        assert texture.color_mode is ColorMode.PALETTE1
        assert texture.data == b"\x01\x02"
        assert isinstance(texture.data, bytes)
        assert texture.palette == (Color(0, 0, 0), Color(255, 255, 255))
        assert texture.has_palette

    def test_unsupported_mode(self) -> None:
        with pytest.raises(UnsupportedModeError):
            Texture2DData(1, 1, 12, b"\x00")  # type: ignore[arg-type]

    def test_pixels_derived_from_data(self) -> None:
        texture = Texture2DData(4, 2, ColorMode.LUM1, b"\x00")
        assert texture.pixels == 8
        assert not texture.has_palette

    def test_frozen(self) -> None:
        texture = Texture2DData(1, 1, ColorMode.LUM8, b"\x00")
        with pytest.raises(AttributeError):
            texture.data = b"\x01"  # type: ignore[misc]

    def test_convenience_methods(self) -> None:
        texture = Texture2DData(2, 1, ColorMode.RGB8, b"\x01\x02\x03\x04\x05\x06")
        assert texture.get_pixel(1) == Color(4, 5, 6)
        assert texture.get_pixels() == [Color(1, 2, 3), Color(4, 5, 6)]
        assert texture.get_color_data() == b"\x01\x02\x03\xff\x04\x05\x06\xff"
