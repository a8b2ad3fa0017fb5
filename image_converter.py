"""
ICOフレームを指定形式の画像に変換するモジュール
デコード・エンコードは Pillow に任せる
"""
import io
import struct

from PIL import Image

import config
import logger_config
from frame_resolver import FrameFormat, ResolvedFrame
from ico_parser import ENTRY_SIZE, HEADER_SIZE, TYPE_ICON

# ロガーの取得
logger = logger_config.get_logger(__name__)


def _wrap_bitmap_as_ico(frame: ResolvedFrame) -> bytes:
    """
    生ビットマップのフレームを1エントリだけのICOコンテナに包み直す

    Pillow のICOリーダーが2倍の高さとANDマスクを処理してくれるため、
    DIBを単体で読む代わりにこの形で渡す。
    """
    payload = bytes(frame.data)
    # ディレクトリのビット深度は0や誤った値のことがあるため、DIBヘッダーの biBitCount を優先する
    bit_count = frame.bit_count
    if len(payload) >= 16:
        (bit_count,) = struct.unpack_from("<H", payload, 14)
    header = struct.pack("<3H", 0, TYPE_ICON, 1)
    entry = struct.pack(
        "<4B2H2I",
        frame.width % 256,
        frame.height % 256,
        0,
        0,
        1,
        bit_count,
        len(payload),
        HEADER_SIZE + ENTRY_SIZE,
    )
    return header + entry + payload


def decode_frame(frame: ResolvedFrame) -> Image.Image:
    """
    フレームをデコードしてRGBA画像を返す

    Raises:
        PIL.UnidentifiedImageError: 画像データとして認識できない
        OSError: 画像データが壊れている
    """
    if frame.tag is FrameFormat.EMBEDDED_PNG:
        image = Image.open(io.BytesIO(bytes(frame.data)), formats=["PNG"])
    else:
        image = Image.open(io.BytesIO(_wrap_bitmap_as_ico(frame)), formats=["ICO"])
    image.load()
    logger.debug(f"フレーム {frame.index} をデコードしました: {image.size[0]}x{image.size[1]} ({image.mode})")
    return image.convert("RGBA")


def encode_image(image: Image.Image, fmt: str) -> bytes:
    """
    画像を指定形式でエンコードする

    Args:
        image: デコード済みの画像
        fmt: 出力形式 (png, jpg, jpeg, bmp, webp)

    Returns:
        エンコード済みのバイト列
    """
    fmt = config.normalize_format(fmt)
    pil_format = config.AppConstants.PIL_FORMATS[fmt]

    # JPEGはアルファチャンネルを持てない
    if pil_format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=pil_format)
    return buffer.getvalue()


def convert_frame(frame: ResolvedFrame, fmt: str) -> bytes:
    """フレームを出力形式のバイト列に変換する"""
    fmt = config.normalize_format(fmt)

    # PNG埋め込みフレームをPNGで出力する場合は再エンコードしない
    if frame.tag is FrameFormat.EMBEDDED_PNG and fmt == "png":
        logger.debug(f"フレーム {frame.index} はPNGのためそのまま出力します")
        return bytes(frame.data)

    image = decode_frame(frame)
    return encode_image(image, fmt)
