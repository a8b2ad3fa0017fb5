"""
フレーム解決モジュール
インデックスを検証し、対象フレームの画像データをコピーせずに切り出して
PNG埋め込みか生ビットマップ(DIB)かを判定する
"""
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from ico_errors import CorruptFrameError, IndexOutOfRangeError
from ico_parser import FrameDescriptor

BytesLike = Union[bytes, bytearray, memoryview]

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FrameFormat(Enum):
    """フレームデータのエンコード形式"""
    RAW_BITMAP = "raw_bitmap"
    EMBEDDED_PNG = "embedded_png"


@dataclass(frozen=True)
class ResolvedFrame:
    """
    デコード処理へ渡すフレーム

    data は元バッファへの読み取り専用ビューのため、
    元のバッファが生きている間だけ有効。
    """
    tag: FrameFormat
    data: memoryview
    width: int
    height: int
    index: int
    bit_count: int


def detect_frame_format(payload: BytesLike) -> FrameFormat:
    """先頭8バイトのマジックナンバーからフレーム形式を判定する"""
    if bytes(payload[:len(PNG_SIGNATURE)]) == PNG_SIGNATURE:
        return FrameFormat.EMBEDDED_PNG
    return FrameFormat.RAW_BITMAP


def resolve(descriptors: Sequence[FrameDescriptor], data: BytesLike, index: int) -> ResolvedFrame:
    """
    指定インデックスのフレームを取り出す

    Args:
        descriptors: ico_parser.parse が返したフレーム記述子リスト
        data: 解析に使ったものと同じバッファ
        index: 取り出すフレームの位置（0始まり）

    Returns:
        形式タグ付きのフレーム

    Raises:
        IndexOutOfRangeError: index に対応するエントリがない（空のコンテナを含む）
        CorruptFrameError: 対象フレームのデータ範囲がファイル外を指している
    """
    if index < 0 or index >= len(descriptors):
        raise IndexOutOfRangeError(requested=index, available=len(descriptors))

    descriptor = descriptors[index]
    if not descriptor.is_valid:
        raise CorruptFrameError(index)

    view = memoryview(data).toreadonly()
    payload = view[descriptor.offset:descriptor.end]

    return ResolvedFrame(
        tag=detect_frame_format(payload),
        data=payload,
        width=descriptor.width,
        height=descriptor.height,
        index=index,
        bit_count=descriptor.bit_count,
    )
