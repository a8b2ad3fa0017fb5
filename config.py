import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from dotenv import load_dotenv

from ico_errors import ConfigError

# .envファイルがあれば読み込む（なければ環境変数のみ）
load_dotenv()

# --- 環境変数からの既定値 ---
DEFAULT_FORMAT: str = os.getenv("ICO2IMG_FORMAT", "png")
LOG_LEVEL: str = os.getenv("ICO2IMG_LOG_LEVEL", "WARNING")

# TOML設定ファイル内のテーブル名
CONFIG_SECTION = "ico2img"


# アプリケーション定数
class AppConstants:
    # 出力形式 → Pillowの形式名
    PIL_FORMATS: Dict[str, str] = {
        'png': 'PNG',
        'jpg': 'JPEG',
        'jpeg': 'JPEG',
        'bmp': 'BMP',
        'webp': 'WEBP',
    }

    # 出力形式 → 標準の拡張子
    EXTENSIONS: Dict[str, str] = {
        'png': '.png',
        'jpg': '.jpg',
        'jpeg': '.jpg',
        'bmp': '.bmp',
        'webp': '.webp',
    }

    DEFAULT_INDEX: int = 0


def normalize_format(fmt: str) -> str:
    """
    出力形式の指定を正規化する（小文字化・先頭のドット除去）

    Raises:
        ConfigError: 対応していない形式
    """
    normalized = fmt.strip().lower().lstrip(".")
    if normalized not in AppConstants.PIL_FORMATS:
        supported = ", ".join(AppConstants.PIL_FORMATS)
        raise ConfigError(f"対応していない出力形式です: {fmt} (対応形式: {supported})")
    return normalized


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    TOML設定ファイルを読み込み、[ico2img] テーブルの内容を返す

    Args:
        path: 設定ファイルのパス

    Returns:
        [ico2img] テーブルの辞書。テーブルがなければ空の辞書

    Raises:
        ConfigError: ファイルが読めない、TOMLとして不正、テーブルの型が不正
    """
    config_path = Path(path)
    try:
        with open(config_path, 'rb') as f:
            settings = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"設定ファイルが見つかりません: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"設定ファイルの書式が不正です: {config_path} - {e}") from e
    except OSError as e:
        raise ConfigError(f"設定ファイルを読み込めません: {config_path} - {e}") from e

    section = settings.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"設定ファイルの [{CONFIG_SECTION}] はテーブルである必要があります")
    return section


def resolve_format(cli_format: Optional[str], file_settings: Optional[Dict[str, Any]] = None) -> str:
    """
    出力形式を決定する

    優先順位: 設定ファイルの format > -f オプション > ICO2IMG_FORMAT > png
    """
    file_format = (file_settings or {}).get("format")
    if file_format is not None:
        if not isinstance(file_format, str):
            raise ConfigError(f"設定ファイルの format は文字列で指定してください: {file_format!r}")
        return normalize_format(file_format)
    if cli_format:
        return normalize_format(cli_format)
    return normalize_format(DEFAULT_FORMAT or "png")


def get_log_level() -> int:
    """ICO2IMG_LOG_LEVEL をloggingのレベル値に変換する"""
    level = logging.getLevelName(LOG_LEVEL.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def validate_config() -> Tuple[bool, List[str]]:
    """環境変数から読み込んだ設定値の妥当性を検証する"""
    errors: List[str] = []

    try:
        normalize_format(DEFAULT_FORMAT or "png")
    except ConfigError as e:
        errors.append(f"環境変数 ICO2IMG_FORMAT が不正です: {e}")

    if not isinstance(logging.getLevelName(LOG_LEVEL.strip().upper()), int):
        errors.append(f"環境変数 ICO2IMG_LOG_LEVEL が不正です: {LOG_LEVEL}")

    return len(errors) == 0, errors
