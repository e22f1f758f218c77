import json

from genebattle.system.settings import Settings, SettingsData


def test_missing_file_gives_defaults(tmp_path):
    s = Settings.load(tmp_path / "settings.json")
    assert s.data == SettingsData()
    assert s.data.difficulty == "normal"


def test_update_normalizes_and_persists(tmp_path):
    path = tmp_path / "settings.json"
    s = Settings.load(path)
    seen = []
    s.on_change(seen.append)
    s.update(difficulty="HARD", ai_think_time=-3, seed=42, volume=7)
    assert s.data.difficulty == "hard"
    assert s.data.ai_think_time == 2.0
    assert seen == [s.data]
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["difficulty"] == "hard"
    assert "volume" not in raw
    reloaded = Settings.load(path)
    assert reloaded.data.seed == 42


def test_corrupt_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert Settings.load(path).data == SettingsData()


def test_unknown_values_are_replaced(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"difficulty": "nightmare", "log_level": "LOUD", "seed": "x"}),
                    encoding="utf-8")
    data = Settings.load(path).data
    assert (data.difficulty, data.log_level, data.seed) == ("normal", "INFO", None)
