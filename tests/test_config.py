from pathlib import Path

import config


def _use_config_dir(tmp_path: Path, monkeypatch) -> Path:
    config_dir = tmp_path / ".phrasecoach"
    config_path = config_dir / "config.toml"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in ("PHRASECOACH_CARDS_CSV", "PHRASECOACH_DAILY_GOAL", "PHRASECOACH_HOST", "PHRASECOACH_PORT"):
        monkeypatch.delenv(name, raising=False)
    return config_path


def test_load_config_copies_example_on_first_run(tmp_path, monkeypatch):
    config_path = _use_config_dir(tmp_path, monkeypatch)

    loaded = config.load_config()

    assert config_path.exists()
    assert loaded["daily"]["goal"] == 10
    assert loaded["cards"]["csv_path"] == str(config.PROJECT_DIR / "data.csv")
    assert loaded["server"] == {"host": "127.0.0.1", "port": 8000}


def test_load_config_env_overrides_file(tmp_path, monkeypatch):
    config_path = _use_config_dir(tmp_path, monkeypatch)
    config_path.parent.mkdir()
    config_path.write_text(
        "[cards]\ncsv_path = \"/srv/cards.csv\"\n\n[daily]\ngoal = 20\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PHRASECOACH_DAILY_GOAL", "5")

    assert config.get_config_value("cards", "csv_path") == "/srv/cards.csv"
    assert config.get_config_value("daily", "goal") == 5


def test_load_config_replaces_non_positive_goal(tmp_path, monkeypatch):
    config_path = _use_config_dir(tmp_path, monkeypatch)
    config_path.parent.mkdir()
    config_path.write_text("[daily]\ngoal = 0\n", encoding="utf-8")

    assert config.get_config_value("daily", "goal") == config.DEFAULT_DAILY_GOAL
