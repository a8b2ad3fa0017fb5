"""
ico2img で使用する例外クラス
ICOコンテナの解析・フレーム解決・設定読み込みのエラーを型で区別する
"""


class Ico2ImgError(Exception):
    """ico2img の全エラーの基底クラス"""


# --- 解析エラー（ヘッダー・ディレクトリ） ---
class IcoParseError(Ico2ImgError):
    """ICOコンテナの構造が不正な場合の基底クラス"""


class TruncatedError(IcoParseError):
    """ヘッダーまたはディレクトリテーブルの途中でデータが終わっている"""


class InvalidHeaderError(IcoParseError):
    """予約フィールドが0でない、または画像種別が不明"""


class UnsupportedTypeError(IcoParseError):
    """カーソル(CUR)形式のファイル。構造は正しいがアイコンではない"""


# --- フレーム解決エラー ---
class IcoResolveError(Ico2ImgError):
    """要求されたフレームを取り出せない場合の基底クラス"""


class CorruptFrameError(IcoResolveError):
    """フレームのバイト範囲がファイル末尾を超えている"""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"フレーム {index} のデータ範囲がファイルサイズを超えています")


class IndexOutOfRangeError(IcoResolveError):
    """要求インデックスに対応するディレクトリエントリが存在しない"""

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        if available == 0:
            message = f"ICOファイルに画像がありません (要求インデックス: {requested})"
        else:
            message = f"無効な画像インデックスです: {requested} (有効範囲: 0-{available - 1})"
        super().__init__(message)


# --- 設定エラー ---
class ConfigError(Ico2ImgError):
    """設定ファイルまたは出力形式の指定が不正"""
