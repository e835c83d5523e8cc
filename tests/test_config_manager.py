"""
Tests for configuration loading and saving
"""

import json

import pytest

from config_manager import ConfigManager


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


def test_defaults_when_file_missing(config_path):
    config = ConfigManager(str(config_path))
    config.load()

    assert config.file_priority is True
    assert config.page_size == 25
    assert config.last_directory == ''


def test_loads_saved_values(config_path, tmp_path):
    config_path.write_text(json.dumps({
        'file_priority': False,
        'page_size': 50,
        'last_directory': str(tmp_path),
    }), encoding='utf-8')

    config = ConfigManager(str(config_path))
    config.load()

    assert config.file_priority is False
    assert config.page_size == 50
    assert config.last_directory == str(tmp_path)


def test_corrupt_file_falls_back_to_defaults(config_path):
    config_path.write_text("{not json", encoding='utf-8')
    config = ConfigManager(str(config_path))
    config.page_size = 10
    config.load()

    assert config.page_size == 25
    assert config.file_priority is True


@pytest.mark.parametrize("settings", [
    {'page_size': 0},
    {'page_size': -5},
    {'page_size': "25"},
    {'page_size': True},
    {'file_priority': "yes"},
    {'last_directory': 42},
    {'last_directory': "/does/not/exist/anywhere"},
])
def test_invalid_fields_use_defaults(config_path, settings):
    config_path.write_text(json.dumps(settings), encoding='utf-8')
    config = ConfigManager(str(config_path))
    config.load()

    assert config.page_size == 25
    assert config.file_priority is True
    assert config.last_directory == ''


def test_non_object_file(config_path):
    config_path.write_text("[1, 2, 3]", encoding='utf-8')
    config = ConfigManager(str(config_path))
    config.load()
    assert config.page_size == 25


def test_save_and_reload(config_path, tmp_path):
    config = ConfigManager(str(config_path))
    config.file_priority = False
    config.page_size = 10
    config.last_directory = str(tmp_path)
    config.save()

    reloaded = ConfigManager(str(config_path))
    reloaded.load()
    assert (reloaded.file_priority, reloaded.page_size, reloaded.last_directory) == (False, 10, str(tmp_path))


def test_save_failure_does_not_raise(tmp_path):
    config = ConfigManager(str(tmp_path / "missing" / "config.json"))
    config.save()
