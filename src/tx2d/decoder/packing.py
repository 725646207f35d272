"""ビットパック展開モジュール

LUM系およびPALETTE系のカラーモードで共有する、
1バイト未満の幅で詰め込まれたインデックスの取り出しと階調変換を提供する。
"""

from tx2d.decoder.modes import PixelsPerByte


def extract_packed_index(data: bytes, pixel: int, ppb: PixelsPerByte | int) -> int:
    """パック済みのピクセルインデックスを取り出す

    各バイト内のピクセルは上位ビットから順に並ぶ。
    ppb=1の場合もshift=0、mask=0xFFとなり同じ式で処理される。

    Args:
        data: ピクセルデータのバイト列
        pixel: ピクセルのインデックス
        ppb: 1バイトあたりのピクセル数（1, 2, 4, 8）

    Returns:
        取り出したインデックス値（0 〜 2^bpp-1）
    """
    ppb = int(ppb)
    i = pixel // ppb
    bpp = 8 // ppb
    shift = 8 - bpp * ((pixel % ppb) + 1)
    mask = (1 << bpp) - 1
    return (data[i] >> shift) & mask


def rescale_to_8bit(value: int, bits: int) -> int:
    """Nビットの値を四捨五入で0-255の範囲へ線形変換する

    Args:
        value: 変換元の値（0 〜 2^bits-1）
        bits: 変換元のビット数

    Returns:
        8bitに変換した値
    """
    max_value = (1 << bits) - 1
    return (value * 255 + max_value // 2) // max_value
