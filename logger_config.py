"""
ロギング設定モジュール
アプリケーション全体で使用するロガーを設定する
"""
import logging

# ログフォーマット
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ロガーのキャッシュ
_loggers: dict[str, logging.Logger] = {}

# set_level で指定された現在のレベル
_current_level: int = logging.WARNING


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    指定された名前のロガーを取得または作成する

    Args:
        name: ロガー名（通常は__name__）
        level: ログレベル（省略時は set_level で指定された値）

    Returns:
        設定済みのロガーインスタンス
    """
    if name in _loggers:
        return _loggers[name]

    if level is None:
        level = _current_level

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 既にハンドラーが設定されている場合はスキップ
    if logger.handlers:
        _loggers[name] = logger
        return logger

    # コンソールハンドラー（標準エラー出力）のみ
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    _loggers[name] = logger
    return logger


def set_level(level: int) -> None:
    """
    作成済みの全ロガーとそのハンドラーのログレベルを変更する

    Args:
        level: 新しいログレベル（-v 指定時は DEBUG）
    """
    global _current_level
    _current_level = level
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
