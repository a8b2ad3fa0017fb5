import logging
from unittest.mock import patch

import pytest

import config
from ico_errors import ConfigError


@pytest.mark.parametrize("value, expected", [
    ("png", "png"),
    ("PNG", "png"),
    (" .Jpeg ", "jpeg"),
    ("jpg", "jpg"),
    ("bmp", "bmp"),
    ("WebP", "webp"),
])
def test_normalize_format(value, expected):
    assert config.normalize_format(value) == expected


def test_normalize_format_rejects_unknown():
    with pytest.raises(ConfigError):
        config.normalize_format("gif")


def test_load_config_file_reads_section(tmp_path):
    path = tmp_path / "ico2img.toml"
    path.write_text('[ico2img]\nformat = "webp"\n', encoding="utf-8")

    assert config.load_config_file(path) == {"format": "webp"}


def test_load_config_file_without_section(tmp_path):
    path = tmp_path / "other.toml"
    path.write_text('[other]\nkey = 1\n', encoding="utf-8")

    assert config.load_config_file(path) == {}


def test_load_config_file_errors(tmp_path):
    """存在しない・書式不正・型不正はすべて ConfigError"""
    with pytest.raises(ConfigError):
        config.load_config_file(tmp_path / "missing.toml")

    broken = tmp_path / "broken.toml"
    broken.write_text("[ico2img\nformat = ", encoding="utf-8")
    with pytest.raises(ConfigError):
        config.load_config_file(broken)

    not_table = tmp_path / "not_table.toml"
    not_table.write_text('ico2img = "png"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        config.load_config_file(not_table)


def test_resolve_format_precedence():
    """設定ファイル > -f > 環境変数 の順で優先される"""
    with patch.object(config, "DEFAULT_FORMAT", "bmp"):
        assert config.resolve_format("jpg", {"format": "webp"}) == "webp"
        assert config.resolve_format("jpg", {}) == "jpg"
        assert config.resolve_format(None, None) == "bmp"

    with patch.object(config, "DEFAULT_FORMAT", ""):
        assert config.resolve_format(None) == "png"


def test_resolve_format_rejects_non_string():
    with pytest.raises(ConfigError):
        config.resolve_format("png", {"format": 3})


def test_validate_config():
    with patch.object(config, "DEFAULT_FORMAT", "png"), patch.object(config, "LOG_LEVEL", "info"):
        assert config.validate_config() == (True, [])
        assert config.get_log_level() == logging.INFO

    with patch.object(config, "DEFAULT_FORMAT", "tiff"), patch.object(config, "LOG_LEVEL", "loud"):
        is_valid, errors = config.validate_config()
        assert not is_valid
        assert len(errors) == 2
        assert config.get_log_level() == logging.WARNING
