"""画像書き出しのテスト"""

import struct
from pathlib import Path

import pytest
from PIL import Image

from tx2d.decoder import ColorMode, PixelDecoder
from tx2d.image import ExportResult, ExportStatus, OutputFormat, Tx2DImageConverter, to_image
from tx2d.texture import Texture2DData


def write_tx2d(path: Path, width: int, height: int, mode: ColorMode, data: bytes) -> Path:
    path.write_bytes(b"Tx2D" + struct.pack("<IIi", width, height, mode) + data)
    return path


class TestToImage:
    """to_image()のテスト"""

    def test_rgba_image(self) -> None:
        texture = Texture2DData(2, 1, ColorMode.RGBA8, bytes([1, 2, 3, 4, 5, 6, 7, 8]))
        image = to_image(texture)

        assert image.mode == "RGBA"
        assert image.size == (2, 1)
        assert image.getpixel((0, 0)) == (1, 2, 3, 4)
        assert image.getpixel((1, 0)) == (5, 6, 7, 8)

    def test_packed_rows(self) -> None:
        """LUM1の8ピクセルが4x2の画像に行順で並ぶ"""
        texture = Texture2DData(4, 2, ColorMode.LUM1, b"\x81")
        image = to_image(texture, PixelDecoder())

        assert image.getpixel((0, 0)) == (255, 255, 255, 255)
        assert image.getpixel((1, 0)) == (0, 0, 0, 255)
        assert image.getpixel((3, 1)) == (255, 255, 255, 255)

    def test_pads_missing_pixels(self) -> None:
        texture = Texture2DData(2, 2, ColorMode.LUM8, b"\xff")
        image = to_image(texture)

        assert image.getpixel((0, 0)) == (255, 255, 255, 255)
        assert image.getpixel((1, 1)) == (0, 0, 0, 0)

    def test_truncates_extra_pixels(self) -> None:
        texture = Texture2DData(1, 1, ColorMode.LUM8, b"\x10\x20\x30")
        image = to_image(texture)

        assert image.size == (1, 1)
        assert image.getpixel((0, 0)) == (16, 16, 16, 255)

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0)])
    def test_zero_size(self, width: int, height: int) -> None:
        texture = Texture2DData(width, height, ColorMode.LUM8, b"\x00")
        with pytest.raises(ValueError, match="画像サイズが0です"):
            to_image(texture)


class TestTx2DImageConverter:
    """Tx2DImageConverterのテスト"""

    def test_defaults(self) -> None:
        converter = Tx2DImageConverter()
        assert converter.output_format == OutputFormat.PNG
        assert converter.quality == 95
        assert converter.lossless_alpha is True
        assert converter.max_workers is None
        assert converter.supported_extensions == (".tx2d",)

    def test_can_convert(self, tmp_path: Path) -> None:
        converter = Tx2DImageConverter()
        renamed = write_tx2d(tmp_path / "texture.bin", 1, 1, ColorMode.LUM8, b"\x00")
        other = tmp_path / "other.bin"
        other.write_bytes(b"not a texture")

        assert converter.can_convert(Path("a.TX2D"))
        assert converter.can_convert(renamed)
        assert not converter.can_convert(other)

    @pytest.mark.parametrize(
        "output_format, expected_suffix",
        [
            pytest.param(OutputFormat.PNG, ".png", id="PNG"),
            pytest.param(OutputFormat.WEBP, ".webp", id="WebP"),
        ],
    )
    def test_get_output_path(self, output_format: OutputFormat, expected_suffix: str) -> None:
        converter = Tx2DImageConverter(output_format=output_format)
        assert converter.get_output_path(Path("dir/tex.tx2d")) == Path(f"dir/tex{expected_suffix}")

    def test_convert_png(self, tmp_path: Path) -> None:
        source = write_tx2d(tmp_path / "red.tx2d", 2, 1, ColorMode.RGB565, b"\xf8\x00\x07\xe0")
        dest = tmp_path / "out" / "red.png"

        result = Tx2DImageConverter(max_workers=2).convert(source, dest)

        assert isinstance(result, ExportResult)
        assert result.status == ExportStatus.SUCCESS
        assert result.is_success
        assert result.message == ""
        assert result.dest_path == dest
        assert result.bytes_before == source.stat().st_size
        assert result.bytes_after == dest.stat().st_size
        with Image.open(dest) as image:
            assert image.mode == "RGBA"
            assert image.getpixel((0, 0)) == (255, 0, 0, 255)
            assert image.getpixel((1, 0)) == (0, 255, 0, 255)

    def test_convert_webp_is_lossless(self, tmp_path: Path) -> None:
        source = write_tx2d(tmp_path / "gray.tx2d", 2, 1, ColorMode.LUMA8, b"\x40\x80\xc0\xff")
        dest = tmp_path / "gray.webp"

        Tx2DImageConverter(output_format=OutputFormat.WEBP).convert(source, dest)

        with Image.open(dest) as image:
            assert image.convert("RGBA").getpixel((0, 0)) == (64, 64, 64, 128)

    @pytest.mark.parametrize(
        "lossless_alpha, expected_lossless",
        [
            pytest.param(True, True, id="正常系: アルファをロスレスで保存"),
            pytest.param(False, False, id="正常系: 品質指定の非可逆圧縮"),
        ],
    )
    def test_convert_webp_lossless_alpha(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        lossless_alpha: bool,
        expected_lossless: bool,
    ) -> None:
        """lossless_alphaに応じてWebPの保存パラメータが切り替わる"""
        calls: list[dict[str, object]] = []
        original_save = Image.Image.save

        def spy_save(image: Image.Image, fp: object, format: str | None = None, **params: object) -> None:
            calls.append({"format": format, **params})
            original_save(image, fp, format, **params)

        monkeypatch.setattr(Image.Image, "save", spy_save)
        source = write_tx2d(tmp_path / "tex.tx2d", 2, 1, ColorMode.RGBA8, bytes(range(8)))
        dest = tmp_path / "tex.webp"

        converter = Tx2DImageConverter(
            output_format=OutputFormat.WEBP, quality=70, lossless_alpha=lossless_alpha
        )
        result = converter.convert(source, dest)

        assert result.is_success
        assert dest.exists()
        assert calls[-1]["format"] == "WEBP"
        assert calls[-1]["quality"] == 70
        assert bool(calls[-1].get("lossless", False)) is expected_lossless

    def test_save_failure_returns_failed_result(self, tmp_path: Path) -> None:
        """書き込みに失敗した場合は例外ではなくFAILEDの結果を返す"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        source = write_tx2d(tmp_path / "tex.tx2d", 1, 1, ColorMode.LUM8, b"\x80")

        result = Tx2DImageConverter().convert(source, blocker / "tex.png")

        assert result.status == ExportStatus.FAILED
        assert not result.is_success
        assert result.dest_path is None
        assert result.message != ""
        assert result.bytes_before == source.stat().st_size
        assert result.bytes_after == 0

    def test_convert_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Tx2DImageConverter().convert(tmp_path / "missing.tx2d", tmp_path / "out.png")
