import json
import logging
from pathlib import Path

import pytest

from mindmap import config


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    for key in config.DEFAULTS:
        monkeypatch.delenv(f"MINDMAP_{key.upper()}", raising=False)
    return tmp_path / "config.json"


def test_defaults_without_file(config_path):
    assert config.load_config(config_path) == {}
    assert config.get_canvas_size(config_path) == (800, 600)
    assert config.get_title(config_path) == 'My Mind Map'
    assert config.get_log_level(config_path) == logging.INFO
    assert config.get_port(config_path) == 8080


def test_file_values(config_path):
    config_path.write_text(json.dumps({'canvas_width': 1200, 'title': 'Biology', 'log_level': 'debug'}))
    assert config.get_canvas_size(config_path) == (1200, 600)
    assert config.get_title(config_path) == 'Biology'
    assert config.get_log_level(config_path) == logging.DEBUG


def test_env_overrides_file(config_path, monkeypatch):
    config_path.write_text(json.dumps({'canvas_height': 700}))
    monkeypatch.setenv('MINDMAP_CANVAS_HEIGHT', '900')
    assert config.get_canvas_size(config_path) == (800, 900)


def test_default_config_path_is_project_root():
    assert config.get_config_path() == Path(config.__file__).parent.parent / 'config.json'


@pytest.mark.parametrize('content', ['{broken', '[1, 2]'])
def test_unreadable_file_falls_back(config_path, content):
    config_path.write_text(content)
    assert config.load_config(config_path) == {}
    assert config.get_canvas_size(config_path) == (800, 600)


def test_invalid_values_fall_back(config_path):
    config_path.write_text(json.dumps({'canvas_width': 'wide', 'log_level': 'LOUD'}))
    assert config.get_canvas_size(config_path) == (800, 600)
    assert config.get_log_level(config_path) == logging.INFO
