"""ICO → 画像変換の1回分の処理をまとめるコントローラー"""
from pathlib import Path
from typing import List, Tuple, Union

# 作成したモジュールをインポート
import config
import frame_resolver
import ico_parser
import image_converter
import logger_config
from ico_errors import CorruptFrameError
from ico_parser import FrameDescriptor, IcoHeader

# ロガーの取得
logger = logger_config.get_logger(__name__)

PathLike = Union[str, Path]


def resolve_output_path(output: PathLike, ico_path: PathLike, fmt: str) -> Path:
    """
    出力先のパスを決定する

    既存のディレクトリが指定された場合は「入力ファイル名 + 形式の拡張子」を、
    それ以外は指定されたパスを拡張子に関係なくそのまま使う。
    """
    output_path = Path(output)
    if output_path.is_dir():
        extension = config.AppConstants.EXTENSIONS[config.normalize_format(fmt)]
        return output_path / f"{Path(ico_path).stem}{extension}"
    return output_path


def load_icon(ico_path: PathLike) -> Tuple[bytes, IcoHeader, List[FrameDescriptor]]:
    """ICOファイルを読み込んで解析する"""
    data = Path(ico_path).read_bytes()
    header, descriptors = ico_parser.parse(data)
    logger.info(f"ICOファイルのエントリ数: {len(descriptors)}")
    return data, header, descriptors


def describe_frames(ico_path: PathLike) -> List[str]:
    """--list 用に各フレームの情報を1行ずつ整形する"""
    data, _, descriptors = load_icon(ico_path)
    lines: List[str] = []
    for d in descriptors:
        try:
            kind = frame_resolver.resolve(descriptors, data, d.index).tag.value
        except CorruptFrameError:
            kind = "corrupt"
        lines.append(
            f"{d.index}: {d.width}x{d.height} - {d.bit_count} bpp, "
            f"{d.size} bytes @ {d.offset} ({kind})"
        )
    return lines


def convert_ico(ico_path: PathLike, output: PathLike, index: int = 0, fmt: str = "png") -> Path:
    """
    ICOファイルから1フレームを取り出し、指定形式で保存する

    Args:
        ico_path: 入力ICOファイルのパス
        output: 出力ファイルまたは出力ディレクトリ
        index: 取り出すフレームの位置
        fmt: 出力形式

    Returns:
        書き込んだファイルのパス
    """
    fmt = config.normalize_format(fmt)
    data, _, descriptors = load_icon(ico_path)

    frame = frame_resolver.resolve(descriptors, data, index)
    logger.info(
        f"画像の詳細: {frame.width}x{frame.height} - {frame.bit_count} bits per pixel ({frame.tag.value})"
    )

    # 変換がすべて成功してから出力ファイルを開く
    payload = image_converter.convert_frame(frame, fmt)

    output_path = resolve_output_path(output, ico_path, fmt)
    with open(output_path, 'wb') as f:
        f.write(payload)

    logger.info(f"画像を保存しました: {output_path}")
    return output_path
