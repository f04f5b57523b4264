from pathlib import Path

import pytest

from loa.config import ConfigurationError, GameConfig, load_config

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_shipped_defaults_match_dataclass():
    assert load_config(DEFAULT_CONFIG) == GameConfig()


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yaml") == GameConfig()
    assert load_config(None) == GameConfig()


def test_load_custom_values(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("move_limit: 12\nsearch_depth: 2\ntime_limit_sec: 0.5\nblack: ai\nwhite: random\n")
    config = load_config(path)
    assert config.move_limit == 12
    assert config.black == "ai"
    search = config.search_config()
    assert search.depth == 2
    assert search.time_limit_sec == 0.5


@pytest.mark.parametrize(
    "text",
    [
        "search_depth: 0\n",
        "move_limit: -3\n",
        "black: robot\n",
        "time_limit_sec: -1\n",
        "colour: red\n",
        "- just\n- a list\n",
        "move_limit: [unclosed\n",
    ],
)
def test_invalid_configuration_rejected(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_overrides_skip_none():
    config = GameConfig().with_overrides(search_depth=4, white=None)
    assert config.search_depth == 4
    assert config.white == "ai"
    with pytest.raises(ConfigurationError):
        GameConfig().with_overrides(move_limit=0)
