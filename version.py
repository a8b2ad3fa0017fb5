"""
アプリケーションのバージョン情報を一元管理するモジュール。

- バージョン形式: v{major}.{minor}.{patch}
- pyproject.toml の version と合わせて更新する
"""

APP_NAME = "ico2img"
APP_VERSION = "v0.1.0"
BUILD_DATE = "2026-10-19"
