from pathlib import Path

from fastapi.testclient import TestClient

import config
from db import database
from main import app

CSV_TEXT = "\n".join(
    [
        "no,jp,en,slots,video,lv,note,scene",
        "1,おはようございます,Good morning,,,1,Polite morning greeting,greetings",
        "2,こんにちは,Hello,,,1,,greetings",
        "3,いくらですか,How much is it?,,,1,,shopping",
    ]
)


def _setup(tmp_path: Path, monkeypatch, csv_text: str = CSV_TEXT) -> None:
    config_dir = tmp_path / ".phrasecoach"
    config_dir.mkdir()
    csv_path = tmp_path / "data.csv"
    csv_path.write_text(csv_text, encoding="utf-8")
    config_path = config_dir / "config.toml"
    config_path.write_text(
        f"[cards]\ncsv_path = \"{csv_path.as_posix()}\"\n\n[daily]\ngoal = 10\n",
        encoding="utf-8",
    )
    for name in ("PHRASECOACH_CARDS_CSV", "PHRASECOACH_DAILY_GOAL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    monkeypatch.setattr(database, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(database, "DB_PATH", config_dir / "phrasecoach.db")


def test_home_renders_first_card(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        response = client.get("/")
    assert response.status_code == 200
    body = response.text
    assert "おはようございます" in body
    assert "Tap to reveal" in body
    assert "1-30 0%" in body
    assert "Today: 0 / 10" in body


def test_toggle_reveals_answer_and_note(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        response = client.post("/trainer/toggle")
    assert response.status_code == 200
    assert "Good morning" in response.text
    assert "💡 Polite morning greeting" in response.text


def test_grade_good_updates_progress_and_persists(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        response = client.post("/trainer/good")
        assert response.status_code == 200
        assert "Today: 1 / 10" in response.text
        assert "Progress: 1 / 3" in response.text
        state = client.get("/trainer/state").json()
    assert state["card"]["id"] == 2

    # A fresh session restores review state from the database
    with TestClient(app) as client:
        state = client.get("/trainer/state").json()
    assert state["progress"]["learned"] == 1
    assert state["daily"]["good_count"] == 1


def test_due_review_with_nothing_due_shows_notice(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        response = client.post("/trainer/due")
        state = client.get("/trainer/state").json()
    assert "No cards are due for review." in response.text
    assert state["mode"] == "block"
    assert state["deck_size"] == 3


def test_again_then_due_review_shows_lapsed_card(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        client.post("/trainer/again")
        client.post("/trainer/due")
        state = client.get("/trainer/state").json()
    assert state["mode"] == "due"
    assert state["card"]["id"] == 1


def test_scene_and_chronological_switches(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        client.post("/trainer/scene/shopping")
        scene_state = client.get("/trainer/state").json()
        client.post("/trainer/scene/nowhere")
        kept_state = client.get("/trainer/state").json()
        client.post("/trainer/chronological")
        chrono_state = client.get("/trainer/state").json()
    assert scene_state["mode"] == "scene"
    assert scene_state["card"]["id"] == 3
    assert kept_state["mode"] == "scene"
    assert kept_state["notice"] == "No cards in that scene."
    assert chrono_state["mode"] == "chronological"
    assert chrono_state["deck_size"] == 3


def test_block_switch_and_goal_update(tmp_path, monkeypatch):
    _setup(tmp_path, monkeypatch)
    with TestClient(app) as client:
        client.post("/trainer/block/2")
        empty_state = client.get("/trainer/state").json()
        response = client.post("/trainer/goal", data={"goal": "25"})
        bad = client.post("/trainer/goal", data={"goal": "0"})
    assert empty_state["deck_size"] == 0
    assert empty_state["card"] is None
    assert "Today: 0 / 25" in response.text
    assert bad.status_code == 400


def test_scene_name_with_slash_is_selectable(tmp_path, monkeypatch):
    csv_text = "\n".join(
        [
            "no,jp,en,slots,video,lv,note,scene",
            "1,ただいま,I'm home,,,1,,home",
            "2,いただきます,Let's eat,,,1,,food/drink",
        ]
    )
    _setup(tmp_path, monkeypatch, csv_text)
    with TestClient(app) as client:
        page = client.get("/").text
        response = client.post("/trainer/scene/food/drink")
        state = client.get("/trainer/state").json()
    assert 'hx-post="/trainer/scene/food/drink"' in page
    assert response.status_code == 200
    assert state["mode"] == "scene"
    assert state["mode_arg"] == "food/drink"
    assert state["card"]["id"] == 2


def test_media_link_does_not_toggle_card(tmp_path, monkeypatch):
    csv_text = "\n".join(
        [
            "no,jp,en,slots,video,lv,note,scene",
            "1,おはよう,Morning,,https://example.com/clip1.mp4,1,,home",
        ]
    )
    _setup(tmp_path, monkeypatch, csv_text)
    with TestClient(app) as client:
        response = client.post("/trainer/toggle")
    assert 'href="https://example.com/clip1.mp4"' in response.text
    assert 'onclick="event.stopPropagation()"' in response.text
