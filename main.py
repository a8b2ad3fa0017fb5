import argparse
import logging
import sys
from typing import List, Optional

import config
import logger_config
from controllers.convert_controller import convert_ico, describe_frames
from ico_errors import Ico2ImgError
from version import APP_NAME, APP_VERSION

# ロガーの取得
logger = logger_config.get_logger(__name__)


def _non_negative_int(value: str) -> int:
    """argparse用: 0以上の整数のみ受け付ける"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"整数を指定してください: {value}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"0以上の整数を指定してください: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを作成する"""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="ICOファイルから1枚の画像を取り出して PNG / JPEG / BMP / WebP に変換します。",
    )
    parser.add_argument("file", metavar="ICO_FILE", help="変換元のICOファイル")
    parser.add_argument("-o", dest="output", metavar="OUTPUT",
                        help="出力ファイル、または出力先ディレクトリ")
    parser.add_argument("-i", "--index", type=_non_negative_int, default=config.AppConstants.DEFAULT_INDEX,
                        help="変換する画像のインデックス (既定: 0)")
    parser.add_argument("-f", "--format", dest="format", default=None,
                        help="出力形式: png, jpg, jpeg, bmp, webp (既定: png)")
    parser.add_argument("-c", dest="config", metavar="CONFIG_FILE", default=None,
                        help="TOML設定ファイル。[ico2img] の format は -f より優先される")
    parser.add_argument("-v", "--verbose", action="store_true", help="詳細なログを出力する")
    parser.add_argument("-l", "--list", action="store_true",
                        help="ICOファイル内の画像一覧を表示して終了する")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数

    Returns:
        終了コード（成功: 0, 失敗: 1, 中断: 130）
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logger_config.set_level(logging.DEBUG if args.verbose else config.get_log_level())

    # 起動前に設定を検証
    is_valid, errors = config.validate_config()
    if not is_valid:
        for error in errors:
            logger.error(error)
        return 1

    if not args.list and not args.output:
        parser.error("出力先 (-o) を指定してください")

    try:
        if args.list:
            for line in describe_frames(args.file):
                print(line)
            return 0

        file_settings = config.load_config_file(args.config) if args.config else {}
        fmt = config.resolve_format(args.format, file_settings)
        output_path = convert_ico(args.file, args.output, index=args.index, fmt=fmt)
    except Ico2ImgError as e:
        logger.error(str(e))
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"変換に失敗しました: {e}", exc_info=args.verbose)
        return 1
    except KeyboardInterrupt:
        logger.error("中断されました")
        return 130

    logger.debug(f"完了: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
