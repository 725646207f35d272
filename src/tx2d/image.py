"""画像書き出しモジュール

デコードしたTx2Dテクスチャを PIL.Image に変換し、
PNG/WebP 形式のファイルとして保存する機能を提供する。
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from PIL import Image

from tx2d.container import Tx2DReader
from tx2d.decoder import PixelDecoder
from tx2d.texture import Texture2DData


class OutputFormat(Enum):
    """画像出力形式"""

    PNG = "png"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class ExportStatus(Enum):
    """書き出しステータス"""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    """書き出し結果を表すデータクラス

    Attributes:
        source_path: 変換元ファイルのパス
        dest_path: 書き出し先ファイルのパス（書き出し失敗時はNone）
        status: 書き出しステータス
        message: 追加メッセージ（エラー詳細等）
        bytes_before: 変換前のファイルサイズ（バイト）
        bytes_after: 変換後のファイルサイズ（バイト）
    """

    source_path: Path
    dest_path: Path | None
    status: ExportStatus
    message: str = ""
    bytes_before: int = 0
    bytes_after: int = 0

    @property
    def is_success(self) -> bool:
        """書き出しが成功したかどうかを返す"""
        return self.status == ExportStatus.SUCCESS


def to_image(texture: Texture2DData, decoder: PixelDecoder | None = None) -> Image.Image:
    """テクスチャをRGBAのPIL.Imageに変換する

    width×heightとピクセル数が一致しない場合は、
    RGBAバイト列を切り詰めるか0で埋めて画像サイズに合わせる。

    Args:
        texture: 変換対象のテクスチャ
        decoder: 使用するデコーダー（Noneの場合は逐次デコード）

    Returns:
        RGBAモードのPIL.Imageオブジェクト

    Raises:
        ValueError: 画像の幅または高さが0の場合
    """
    if texture.width == 0 or texture.height == 0:
        raise ValueError(f"画像サイズが0です: {texture.width}x{texture.height}")

    decoder = decoder or PixelDecoder()
    rgba_data = decoder.decode_to_rgba_bytes(texture)

    expected = texture.width * texture.height * 4
    if len(rgba_data) < expected:
        rgba_data += bytes(expected - len(rgba_data))
    elif len(rgba_data) > expected:
        rgba_data = rgba_data[:expected]

    return Image.frombytes("RGBA", (texture.width, texture.height), rgba_data)


class Tx2DImageConverter:
    """Tx2D画像変換クラス

    Tx2Dファイルを読み込み、PNGまたはWebP形式で保存する。

    Attributes:
        output_format: 出力形式
        quality: WebP出力時の品質値（0-100）
        lossless_alpha: アルファ付き画像をWebPでロスレス保存するか
    """

    def __init__(
        self,
        output_format: OutputFormat = OutputFormat.PNG,
        quality: int = 95,
        lossless_alpha: bool = True,
        max_workers: int | None = None,
    ) -> None:
        """Tx2DImageConverterを初期化する

        Args:
            output_format: 出力形式
            quality: WebP品質（0-100の整数）
            lossless_alpha: Trueの場合、アルファ付き画像はロスレスで保存する
            max_workers: デコード時のワーカー数
        """
        self._output_format = output_format
        self._quality = quality
        self._lossless_alpha = lossless_alpha
        self._reader = Tx2DReader()
        self._decoder = PixelDecoder(max_workers=max_workers)

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    @property
    def quality(self) -> int:
        return self._quality

    @property
    def lossless_alpha(self) -> bool:
        return self._lossless_alpha

    @property
    def max_workers(self) -> int | None:
        return self._decoder.max_workers

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".tx2d",)

    def can_convert(self, file_path: Path) -> bool:
        """拡張子またはマジックバイトで変換可能かを判定する"""
        if file_path.suffix.lower() in self.supported_extensions:
            return True
        return self._reader.is_tx2d_file(file_path)

    def get_output_path(self, source: Path) -> Path:
        """変換元パスから既定の書き出し先パスを求める"""
        return source.with_suffix(self._output_format.extension)

    def convert(self, source: Path, dest: Path) -> ExportResult:
        """Tx2Dファイルを画像ファイルに変換する

        Args:
            source: 変換元ファイルのパス
            dest: 変換先ファイルのパス

        Returns:
            書き出し結果

        Raises:
            FileNotFoundError: 変換元ファイルが存在しない場合
            MalformedHeaderError: ヘッダーまたはパレットが不正な場合
            UnsupportedModeError: カラーモードタグが未知の場合
        """
        return self.export_texture(self.load(source), source, dest)

    def load(self, source: Path) -> Texture2DData:
        """Tx2Dファイルを読み込む"""
        return self._reader.load(source)

    def export_texture(self, texture: Texture2DData, source: Path, dest: Path) -> ExportResult:
        """読み込み済みのテクスチャを画像ファイルに書き出す

        Args:
            texture: 書き出すテクスチャ
            source: 変換元パス（結果記録用）
            dest: 変換先ファイルのパス

        Returns:
            書き出し結果
        """
        bytes_before = source.stat().st_size if source.exists() else 0

        image = to_image(texture, self._decoder)
        try:
            return self.save_image(image, source, dest, bytes_before)
        finally:
            image.close()

    def save_image(
        self,
        image: Image.Image,
        source: Path,
        dest: Path,
        bytes_before: int = 0,
    ) -> ExportResult:
        """PIL.Imageを設定された形式で保存する

        Args:
            image: 保存するPIL.Imageオブジェクト
            source: 変換元パス（結果記録用）
            dest: 保存先パス
            bytes_before: 変換前のファイルサイズ

        Returns:
            書き出し結果。書き込みに失敗した場合はFAILEDの結果を返す
        """
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            if self._output_format == OutputFormat.PNG:
                image.save(dest, "PNG")
            else:
                self._save_as_webp(image, dest)
        except OSError as e:
            return ExportResult(
                source_path=source,
                dest_path=None,
                status=ExportStatus.FAILED,
                message=str(e),
                bytes_before=bytes_before,
            )

        return ExportResult(
            source_path=source,
            dest_path=dest,
            status=ExportStatus.SUCCESS,
            bytes_before=bytes_before,
            bytes_after=dest.stat().st_size,
        )

    def _save_as_webp(self, image: Image.Image, dest: Path) -> None:
        """WebP形式で保存する

        アルファチャンネルを持つ画像はlossless_alphaに従って
        ロスレスまたは品質指定の非可逆圧縮で保存する。
        """
        has_alpha = image.mode in ("RGBA", "LA", "PA")
        if has_alpha and self._lossless_alpha:
            image.save(dest, "WEBP", quality=self._quality, lossless=True)
        elif has_alpha:
            image.save(dest, "WEBP", quality=self._quality)
        else:
            image.convert("RGB").save(dest, "WEBP", quality=self._quality)
