"""
ICOコンテナ解析モジュール
6バイトのヘッダーと16バイト単位のディレクトリテーブルを読み取り、
フレーム記述子のリストをファイル上の順序のまま返す
"""
import struct
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

import logger_config
from ico_errors import InvalidHeaderError, TruncatedError, UnsupportedTypeError

# ロガーの取得
logger = logger_config.get_logger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

# --- 定数 ---
HEADER_SIZE = 6
ENTRY_SIZE = 16
TYPE_ICON = 1
TYPE_CURSOR = 2

# 幅・高さ・パレット数・予約・プレーン数・ビット深度・サイズ・オフセット
_HEADER_STRUCT = struct.Struct("<3H")
_ENTRY_STRUCT = struct.Struct("<4B2H2I")


class FrameStatus(Enum):
    """ディレクトリエントリごとのバイト範囲チェック結果"""
    VALID = "valid"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class IcoHeader:
    """ICOファイル先頭の固定6バイト"""
    reserved: int
    image_type: int
    count: int


@dataclass(frozen=True)
class FrameDescriptor:
    """
    ディレクトリエントリ1件分のフレーム情報

    Fields:
        index: ディレクトリ上の位置（0始まり）
        width: 幅, px（生の値0は256）
        height: 高さ, px（生の値0は256）
        color_count: パレット色数
        reserved: 予約バイト
        planes: カラープレーン数
        bit_count: 1ピクセルあたりのビット数
        size: 画像データのバイト数
        offset: 画像データのファイル先頭からの位置
        status: バイト範囲がファイル内に収まっているか
    """
    index: int
    width: int
    height: int
    color_count: int
    reserved: int
    planes: int
    bit_count: int
    size: int
    offset: int
    status: FrameStatus = FrameStatus.VALID

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def is_valid(self) -> bool:
        return self.status is FrameStatus.VALID


def _read_header(data: BytesLike) -> IcoHeader:
    """ヘッダーを読み取り、予約フィールドと画像種別を検証する"""
    if len(data) < HEADER_SIZE:
        raise TruncatedError(
            f"ICOヘッダーが不完全です ({len(data)} バイト / 必要 {HEADER_SIZE} バイト)"
        )

    reserved, image_type, count = _HEADER_STRUCT.unpack_from(data, 0)
    if reserved != 0:
        raise InvalidHeaderError(f"予約フィールドが0ではありません: {reserved}")
    if image_type == TYPE_CURSOR:
        raise UnsupportedTypeError("カーソル(CUR)ファイルには対応していません。アイコン(ICO)ファイルを指定してください")
    if image_type != TYPE_ICON:
        raise InvalidHeaderError(f"不明な画像種別です: {image_type}")

    return IcoHeader(reserved=reserved, image_type=image_type, count=count)


def _read_entry(data: BytesLike, index: int) -> FrameDescriptor:
    """index 番目のディレクトリエントリを読み取る"""
    (
        width, height, color_count, reserved,
        planes, bit_count, size, offset,
    ) = _ENTRY_STRUCT.unpack_from(data, HEADER_SIZE + ENTRY_SIZE * index)

    # 範囲外のフレームは解析時には中断せず、解決時にエラーとする
    status = FrameStatus.VALID
    if offset + size > len(data):
        status = FrameStatus.OUT_OF_BOUNDS
        logger.info(
            f"フレーム {index} のデータ範囲 ({offset}+{size}) がファイルサイズ ({len(data)}) を超えています"
        )

    return FrameDescriptor(
        index=index,
        width=width or 256,
        height=height or 256,
        color_count=color_count,
        reserved=reserved,
        planes=planes,
        bit_count=bit_count,
        size=size,
        offset=offset,
        status=status,
    )


def parse(data: BytesLike) -> Tuple[IcoHeader, List[FrameDescriptor]]:
    """
    ICOファイル全体のバイト列を解析する

    Args:
        data: ICOファイルの内容

    Returns:
        ヘッダーと、ファイル上の順序どおりのフレーム記述子リスト

    Raises:
        TruncatedError: ヘッダーまたはディレクトリテーブルが途中で切れている
        InvalidHeaderError: 予約フィールドまたは画像種別が不正
        UnsupportedTypeError: カーソル形式のファイル
    """
    header = _read_header(data)

    directory_size = ENTRY_SIZE * header.count
    if len(data) - HEADER_SIZE < directory_size:
        raise TruncatedError(
            f"ディレクトリテーブルが不完全です ({header.count} エントリ, "
            f"必要 {directory_size} バイト / 残り {len(data) - HEADER_SIZE} バイト)"
        )

    descriptors = [_read_entry(data, i) for i in range(header.count)]
    logger.debug(f"ICOエントリ数: {len(descriptors)}")
    return header, descriptors
