"""ピクセルデコーダーモジュール

カラーモードごとのデコード関数を振り分け、生のバイト列を
RGBA各8bitの色に変換する機能を提供する。
すべての関数は入力を変更しない純粋関数であり、
同一ペイロードに対して複数スレッドから同時に呼び出せる。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Protocol

from tx2d.color import Color
from tx2d.decoder.modes import ColorMode, PixelsPerByte
from tx2d.decoder.packing import extract_packed_index, rescale_to_8bit
from tx2d.errors import IndexOutOfRangeError, PaletteIndexError


class PixelPayload(Protocol):
    """デコード対象のペイロード

    Texture2DDataがこのプロトコルを満たす。
    """

    @property
    def color_mode(self) -> ColorMode: ...

    @property
    def data(self) -> bytes: ...

    @property
    def palette(self) -> Sequence[Color] | None: ...


PixelDecodeFunc = Callable[[bytes, Sequence[Color] | None, int], Color]

# 並列デコードに切り替える最小ピクセル数
MIN_PARALLEL_PIXELS = 4096

# (乗数, 除数): ピクセル数 = バイト長 * 乗数 // 除数
_PIXEL_RATIO: dict[ColorMode, tuple[int, int]] = {
    ColorMode.LUM1: (8, 1),
    ColorMode.LUM2: (4, 1),
    ColorMode.LUM4: (2, 1),
    ColorMode.LUM8: (1, 1),
    ColorMode.LUMA8: (1, 2),
    ColorMode.PALETTE1: (8, 1),
    ColorMode.PALETTE2: (4, 1),
    ColorMode.PALETTE4: (2, 1),
    ColorMode.PALETTE8: (1, 1),
    ColorMode.RGB565: (1, 2),
    ColorMode.RGB8: (1, 3),
    ColorMode.RGBA8: (1, 4),
}


def _decode_lum(
    ppb: PixelsPerByte, data: bytes, palette: Sequence[Color] | None, pixel: int
) -> Color:
    value = extract_packed_index(data, pixel, ppb)
    return Color.gray(rescale_to_8bit(value, ppb.bits_per_pixel))


def _decode_palette(
    ppb: PixelsPerByte, data: bytes, palette: Sequence[Color] | None, pixel: int
) -> Color:
    if palette is None:
        # パレットが無い場合はインデックスをグレースケールとして扱う
        return _decode_lum(ppb, data, None, pixel)

    index = extract_packed_index(data, pixel, ppb)
    if index >= len(palette):
        raise PaletteIndexError(index, len(palette))
    return palette[index]


def _decode_luma8(data: bytes, palette: Sequence[Color] | None, pixel: int) -> Color:
    i = pixel * 2
    return Color.gray(data[i], data[i + 1])


def _decode_rgb565(data: bytes, palette: Sequence[Color] | None, pixel: int) -> Color:
    i = pixel * 2
    # ビッグエンディアン
    value = data[i] << 8 | data[i + 1]

    r5 = value >> 11 & 0x1F
    g6 = value >> 5 & 0x3F
    b5 = value & 0x1F

    return Color(
        rescale_to_8bit(r5, 5),
        rescale_to_8bit(g6, 6),
        rescale_to_8bit(b5, 5),
    )


def _decode_rgb8(data: bytes, palette: Sequence[Color] | None, pixel: int) -> Color:
    i = pixel * 3
    return Color(data[i], data[i + 1], data[i + 2])


def _decode_rgba8(data: bytes, palette: Sequence[Color] | None, pixel: int) -> Color:
    i = pixel * 4
    return Color(data[i], data[i + 1], data[i + 2], data[i + 3])


_DECODERS: dict[ColorMode, PixelDecodeFunc] = {
    ColorMode.LUM1: partial(_decode_lum, PixelsPerByte.PPB8),
    ColorMode.LUM2: partial(_decode_lum, PixelsPerByte.PPB4),
    ColorMode.LUM4: partial(_decode_lum, PixelsPerByte.PPB2),
    ColorMode.LUM8: partial(_decode_lum, PixelsPerByte.PPB1),
    ColorMode.LUMA8: _decode_luma8,
    ColorMode.PALETTE1: partial(_decode_palette, PixelsPerByte.PPB8),
    ColorMode.PALETTE2: partial(_decode_palette, PixelsPerByte.PPB4),
    ColorMode.PALETTE4: partial(_decode_palette, PixelsPerByte.PPB2),
    ColorMode.PALETTE8: partial(_decode_palette, PixelsPerByte.PPB1),
    ColorMode.RGB565: _decode_rgb565,
    ColorMode.RGB8: _decode_rgb8,
    ColorMode.RGBA8: _decode_rgba8,
}

_unhandled = set(ColorMode) - _DECODERS.keys() | set(ColorMode) - _PIXEL_RATIO.keys()
if _unhandled:
    raise RuntimeError(f"デコード規則が定義されていないカラーモードがあります: {sorted(_unhandled)}")


def pixel_count(mode: ColorMode | int, byte_length: int) -> int:
    """バイト長とカラーモードからピクセル数を計算する

    Args:
        mode: カラーモード
        byte_length: ピクセルデータのバイト長

    Returns:
        ピクセル数

    Raises:
        UnsupportedModeError: 既知のカラーモードでない場合
    """
    multiplier, divisor = _PIXEL_RATIO[ColorMode.parse(mode)]
    return byte_length * multiplier // divisor


def _resolve(payload: PixelPayload) -> tuple[PixelDecodeFunc, int]:
    mode = ColorMode.parse(payload.color_mode)
    return _DECODERS[mode], pixel_count(mode, len(payload.data))


def _decode_range(payload: PixelPayload, start: int, stop: int) -> list[Color]:
    decode, _ = _resolve(payload)
    data = payload.data
    palette = payload.palette
    return [decode(data, palette, i) for i in range(start, stop)]


def decode_pixel(payload: PixelPayload, index: int) -> Color:
    """1ピクセルをデコードする

    Args:
        payload: デコード対象のペイロード
        index: ピクセルのインデックス

    Returns:
        デコードされた色

    Raises:
        UnsupportedModeError: 既知のカラーモードでない場合
        IndexOutOfRangeError: インデックスがピクセル数の範囲外の場合
        PaletteIndexError: パレットの色数を超えるインデックスの場合
    """
    decode, total = _resolve(payload)
    if not 0 <= index < total:
        raise IndexOutOfRangeError(index, total)
    return decode(payload.data, payload.palette, index)


def decode_all(payload: PixelPayload, max_workers: int | None = None) -> list[Color]:
    """全ピクセルをピクセル順にデコードする

    max_workersが2以上かつピクセル数が十分多い場合は、
    インデックス範囲を分割してスレッドプールで並列にデコードする。
    結果の順序は逐次デコードと同一。

    Args:
        payload: デコード対象のペイロード
        max_workers: 並列デコードのワーカー数（Noneまたは1以下で逐次処理）

    Returns:
        ピクセル数と同じ長さの色リスト

    Raises:
        UnsupportedModeError: 既知のカラーモードでない場合
        PaletteIndexError: パレットの色数を超えるインデックスがある場合
    """
    _, total = _resolve(payload)

    if max_workers is None or max_workers <= 1 or total < MIN_PARALLEL_PIXELS:
        return _decode_range(payload, 0, total)

    chunk_size = -(-total // max_workers)
    colors: list[Color] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_decode_range, payload, start, min(start + chunk_size, total))
            for start in range(0, total, chunk_size)
        ]
        for future in futures:
            colors.extend(future.result())
    return colors


def decode_to_rgba_bytes(payload: PixelPayload, max_workers: int | None = None) -> bytes:
    """全ピクセルをR,G,B,Aの順に並べたバイト列にデコードする

    Args:
        payload: デコード対象のペイロード
        max_workers: 並列デコードのワーカー数

    Returns:
        長さがピクセル数×4のバイト列
    """
    colors = decode_all(payload, max_workers=max_workers)
    rgba_data = bytearray(len(colors) * 4)
    for i, color in enumerate(colors):
        rgba_data[i * 4] = color.r
        rgba_data[i * 4 + 1] = color.g
        rgba_data[i * 4 + 2] = color.b
        rgba_data[i * 4 + 3] = color.a
    return bytes(rgba_data)


class PixelDecoder:
    """ピクセルデコーダー

    モジュール関数をまとめ、並列デコードのワーカー数を保持するクラス。
    内部状態を持たないため、1つのインスタンスを複数スレッドで共有できる。

    使用例:
        >>> decoder = PixelDecoder(max_workers=4)
        >>> rgba = decoder.decode_to_rgba_bytes(texture)
    """

    def __init__(self, max_workers: int | None = None) -> None:
        """PixelDecoderを初期化する

        Args:
            max_workers: 一括デコード時のワーカー数（Noneで逐次処理）
        """
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int | None:
        """一括デコード時のワーカー数を返す"""
        return self._max_workers

    def pixel_count(self, mode: ColorMode | int, byte_length: int) -> int:
        """データ長から格納されているピクセル数を求める

        Args:
            mode: カラーモード
            byte_length: ピクセルデータのバイト数

        Returns:
            ピクセル数
        """
        return pixel_count(mode, byte_length)

    def decode_pixel(self, payload: PixelPayload, index: int) -> Color:
        """指定インデックスのピクセルをデコードする

        Args:
            payload: デコード対象のペイロード
            index: ピクセルのインデックス

        Returns:
            デコードされた色
        """
        return decode_pixel(payload, index)

    def decode_all(self, payload: PixelPayload) -> list[Color]:
        """全ピクセルをインデックス順にデコードする

        Args:
            payload: デコード対象のペイロード

        Returns:
            ピクセル数と同じ長さの色リスト
        """
        return decode_all(payload, max_workers=self._max_workers)

    def decode_to_rgba_bytes(self, payload: PixelPayload) -> bytes:
        """全ピクセルをRGBAバイト列にデコードする

        Args:
            payload: デコード対象のペイロード

        Returns:
            ピクセル数×4バイトのRGBAバイト列
        """
        return decode_to_rgba_bytes(payload, max_workers=self._max_workers)
