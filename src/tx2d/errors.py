"""例外定義モジュール

Tx2Dテクスチャの読み込みおよびデコードで発生する例外を定義する。
いずれもリトライ不能なエラーであり、呼び出し元へそのまま伝播させる。
"""


class Tx2DError(Exception):
    """Tx2D関連エラーの基底クラス"""

    pass


class MalformedHeaderError(Tx2DError, ValueError):
    """ヘッダー不正エラー

    マジックバイトの不一致、ヘッダーやパレットの途中切れ、
    パレット以外のカラーモードでのパレットマーカー出現時に送出される。
    """

    pass


class UnsupportedModeError(Tx2DError, ValueError):
    """未対応カラーモードエラー

    カラーモードタグが既知の12種類のいずれにも該当しない場合に送出される。
    破損データまたは新しいバージョンのデータを示す。
    """

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f"未対応のカラーモードです: {mode!r}")


class IndexOutOfRangeError(Tx2DError, IndexError):
    """ピクセルインデックス範囲外エラー"""

    def __init__(self, index: int, pixel_count: int) -> None:
        self.index = index
        self.pixel_count = pixel_count
        super().__init__(f"ピクセルインデックスが範囲外です: {index} (ピクセル数: {pixel_count})")


class PaletteIndexError(Tx2DError, IndexError):
    """パレットインデックス範囲外エラー

    パック済みインデックスが渡されたパレットの色数を超えた場合に送出される。
    """

    def __init__(self, index: int, palette_size: int) -> None:
        self.index = index
        self.palette_size = palette_size
        super().__init__(f"パレットインデックスが範囲外です: {index} (色数: {palette_size})")
