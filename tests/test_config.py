from pathlib import Path

import pytest
from dotenv import dotenv_values

from core.config import Settings
from core.scroll import AutoScrollController

ENV_VARS = (
    'API_URL', 'CHAT_PATH', 'API_KEY', 'CONNECT_TIMEOUT',
    'SCROLL_FOLLOW_DISTANCE', 'SCROLL_RELEASE_DISTANCE', 'LOG_LEVEL', 'LOG_FILE',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        # set first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)


def test_defaults():
    settings = Settings.from_env()
    assert settings.api_url == 'http://localhost:8000'
    assert settings.chat_path == '/api/chat'
    assert settings.api_key == ''
    assert settings.follow_distance == 50
    assert settings.release_distance == 100


def test_reads_environment(monkeypatch):
    monkeypatch.setenv('API_URL', 'https://chat.example.com/')
    monkeypatch.setenv('API_KEY', ' key ')
    monkeypatch.setenv('CONNECT_TIMEOUT', '2.5')
    monkeypatch.setenv('SCROLL_FOLLOW_DISTANCE', '3')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    settings = Settings.from_env()
    assert settings.api_url == 'https://chat.example.com'
    assert settings.api_key == 'key'
    assert settings.connect_timeout == 2.5
    assert settings.follow_distance == 3
    assert settings.log_level == 'DEBUG'


def test_reads_dotenv_file(tmp_path):
    (tmp_path / '.env').write_text('API_KEY=from-dotenv\n')
    assert Settings.from_env().api_key == 'from-dotenv'


def test_bad_number_names_variable(monkeypatch):
    monkeypatch.setenv('SCROLL_RELEASE_DISTANCE', 'far')
    with pytest.raises(ValueError, match='SCROLL_RELEASE_DISTANCE'):
        Settings.from_env()


def test_example_env_uses_terminal_sized_scroll_distances():
    values = dotenv_values(Path(__file__).parents[1] / '.env.example')
    follow = float(values['SCROLL_FOLLOW_DISTANCE'])
    release = float(values['SCROLL_RELEASE_DISTANCE'])

    ctrl = AutoScrollController(follow, release)
    ctrl.observe(offset=90, extent=100)
    assert not ctrl.auto_follow
