"""カラーモード定義のテスト"""

import pytest

from tx2d.decoder import ColorMode, PixelsPerByte
from tx2d.errors import UnsupportedModeError


class TestColorModeParse:
    """ColorMode.parse()のテスト"""

    @pytest.mark.parametrize("tag", range(12))
    def test_known_tags(self, tag: int) -> None:
        """0-11のタグは対応するカラーモードになる"""
        assert ColorMode.parse(tag) == tag

    def test_color_mode_passthrough(self) -> None:
        assert ColorMode.parse(ColorMode.RGB565) is ColorMode.RGB565

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(12, id="異常系: 範囲外タグ"),
            pytest.param(-1, id="異常系: 負のタグ"),
            pytest.param("RGB8", id="異常系: 文字列"),
            pytest.param(None, id="異常系: None"),
            pytest.param(True, id="異常系: bool"),
        ],
    )
    def test_unknown_values(self, value: object) -> None:
        """未知の値はUnsupportedModeErrorになる"""
        with pytest.raises(UnsupportedModeError):
            ColorMode.parse(value)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="未対応のカラーモード"):
            ColorMode.parse(99)


class TestColorModeProperties:
    """ColorModeのプロパティのテスト"""

    @pytest.mark.parametrize(
        "mode, expected",
        [
            pytest.param(ColorMode.PALETTE1, 2, id="PALETTE1"),
            pytest.param(ColorMode.PALETTE2, 4, id="PALETTE2"),
            pytest.param(ColorMode.PALETTE4, 16, id="PALETTE4"),
            pytest.param(ColorMode.PALETTE8, 256, id="PALETTE8"),
        ],
    )
    def test_palette_size(self, mode: ColorMode, expected: int) -> None:
        assert mode.is_palette
        assert mode.palette_size == expected

    def test_palette_size_non_palette_mode(self) -> None:
        with pytest.raises(ValueError):
            _ = ColorMode.LUM4.palette_size

    @pytest.mark.parametrize(
        "mode, expected",
        [
            pytest.param(ColorMode.LUM1, PixelsPerByte.PPB8, id="LUM1"),
            pytest.param(ColorMode.LUM8, PixelsPerByte.PPB1, id="LUM8"),
            pytest.param(ColorMode.PALETTE2, PixelsPerByte.PPB4, id="PALETTE2"),
            pytest.param(ColorMode.LUMA8, None, id="LUMA8は非パック形式"),
            pytest.param(ColorMode.RGBA8, None, id="RGBA8は非パック形式"),
        ],
    )
    def test_pixels_per_byte(self, mode: ColorMode, expected: PixelsPerByte | None) -> None:
        assert mode.pixels_per_byte == expected

    def test_luminance_flags(self) -> None:
        assert ColorMode.LUM2.is_luminance
        assert not ColorMode.LUMA8.is_luminance
        assert not ColorMode.PALETTE8.is_luminance
        assert not ColorMode.RGB8.is_palette
