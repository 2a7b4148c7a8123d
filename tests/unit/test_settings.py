import argparse
import json

import settings


def test_load_settings_returns_defaults_when_file_missing(tmp_path):
    loaded = settings.load_settings(path=tmp_path / "missing.json")

    assert loaded == settings.DEFAULTS


def test_load_settings_returns_defaults_for_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not valid json", encoding="utf-8")

    assert settings.load_settings(path=path) == settings.DEFAULTS


def test_load_settings_returns_defaults_for_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert settings.load_settings(path=path) == settings.DEFAULTS


def test_load_settings_merges_and_normalizes_values(tmp_path):
    path = tmp_path / "speedread_settings.json"
    path.write_text(
        json.dumps(
            {
                "wpm": "350",
                "pivot_strategy": " Weighted ",
                "enable_file_picker": "no",
                "reduced_clutter": 1,
                "enable_clutter_toggle": None,
                "UNRELATED": "ignored",
            }
        ),
        encoding="utf-8",
    )

    loaded = settings.load_settings(path=path)

    assert loaded["wpm"] == 350
    assert loaded["pivot_strategy"] == "weighted"
    assert loaded["enable_file_picker"] is False
    assert loaded["reduced_clutter"] is True
    assert loaded["enable_clutter_toggle"] is True
    assert "UNRELATED" not in loaded


def test_load_settings_skips_invalid_values(tmp_path):
    path = tmp_path / "speedread_settings.json"
    path.write_text(json.dumps({"wpm": 9000, "pivot_strategy": "sideways"}), encoding="utf-8")

    loaded = settings.load_settings(path=path)

    assert loaded["wpm"] == settings.DEFAULTS["wpm"]
    assert loaded["pivot_strategy"] == settings.DEFAULTS["pivot_strategy"]


def test_build_config_lets_flags_override_file_values():
    loaded = dict(settings.DEFAULTS, wpm=350, pivot_strategy="weighted")
    args = argparse.Namespace(wpm=800, pivot=None, zen=True, no_picker=True)

    config = settings.build_config(loaded, args)

    assert config.wpm == 800
    assert config.pivot_strategy == "weighted"
    assert config.reduced_clutter is True
    assert config.enable_file_picker is False
    assert config.enable_clutter_toggle is True
    assert config.poll_timeout_ms == 50
