"""色データ型モジュール"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """RGBA各8bitの色を表す不変データクラス

    Attributes:
        r: 赤成分（0-255）
        g: 緑成分（0-255）
        b: 青成分（0-255）
        a: アルファ成分（0-255）
    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name, value in (("r", self.r), ("g", self.g), ("b", self.b), ("a", self.a)):
            if not 0 <= value <= 0xFF:
                raise ValueError(f"色成分 {name} は0-255の範囲である必要があります: {value}")

    @classmethod
    def gray(cls, value: int, alpha: int = 255) -> "Color":
        """グレースケール値から色を作成する

        Args:
            value: 輝度値（0-255）
            alpha: アルファ値（0-255）

        Returns:
            R=G=B=valueの色
        """
        return cls(value, value, value, alpha)

    @classmethod
    def from_packed(cls, value: int) -> "Color":
        """32bitにパックされたRGBA値から色を作成する

        最下位バイトがR、最上位バイトがAとなる。
        リトルエンディアンで読み込んだ場合、ファイル上のバイト順はR,G,B,Aとなる。

        Args:
            value: パック済みの32bit値

        Returns:
            展開された色
        """
        return cls(
            value & 0xFF,
            (value >> 8) & 0xFF,
            (value >> 16) & 0xFF,
            (value >> 24) & 0xFF,
        )

    def to_packed(self) -> int:
        """from_packed()と同じ並びの32bit値を返す"""
        return self.r | (self.g << 8) | (self.b << 16) | (self.a << 24)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """(R, G, B, A) のタプルを返す"""
        return (self.r, self.g, self.b, self.a)

    def to_bytes(self) -> bytes:
        """R, G, B, Aの順に並んだ4バイトを返す"""
        return bytes(self.to_tuple())

    def __bytes__(self) -> bytes:
        return self.to_bytes()
