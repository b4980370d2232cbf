import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))
from tweakmenu import features
from tweakmenu.features import (
    FEATURE_TABS,
    LANGUAGES,
    SLIDERS,
    MenuState,
    default_config,
    find_slider,
    find_toggle,
    language_for_locale,
)
from tweakmenu.utils.config_store import ConfigStore
from tweakmenu.utils.config_utils import RetryPolicy


def make_state(path: Path) -> MenuState:
    store = ConfigStore(path, defaults=default_config, retry=RetryPolicy(interval=0, max_attempts=1))
    return MenuState.load(store)


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_default_config_is_fresh_each_call():
    first = default_config()
    first["Regen"] = True
    assert default_config()["Regen"] is False


def test_catalogue_keys_exist_in_defaults():
    defaults = default_config()
    for toggles in FEATURE_TABS.values():
        for toggle in toggles:
            assert toggle.key in defaults
            if toggle.requires is not None:
                assert find_toggle(toggle.requires)
    for slider in SLIDERS:
        assert slider.minimum <= defaults[slider.key] <= slider.maximum


def test_find_toggle_unknown_key():
    with pytest.raises(KeyError):
        find_toggle("doesNotExist")


def test_load_creates_file_with_defaults(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    assert state.values == default_config()
    assert read_json(path) == default_config()


def test_load_keeps_stored_values(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"Regen": true, "custom": 1}', encoding="utf-8")
    state = make_state(path)
    assert state.get("Regen") is True
    assert state.get("custom") == 1
    assert state.get("lightSpeed") == 1
    assert read_json(path)["LANG"] == "en-US"


def test_load_falls_back_to_defaults_when_unwritable(tmp_path):
    state = make_state(tmp_path / "missing" / "settings.json")
    assert state.values == default_config()


def test_set_persists_value(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    state.set("driftMode", True)
    assert state.get("driftMode") is True
    assert read_json(path)["driftMode"] is True


def test_set_slider_clamps(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    assert state.set_slider("DriftIntensity", 9) == 3
    assert state.set_slider("lightSpeed", 0) == 1
    data = read_json(path)
    assert data["DriftIntensity"] == 3
    assert data["lightSpeed"] == 1


def test_drift_modes_exclude_each_other(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    assert state.set("driftMode", True) == "DriftTires"
    assert state.set("DriftTires", True) == "driftMode"
    data = read_json(path)
    assert (data["driftMode"], data["DriftTires"]) == (False, True)
    assert state.get("driftMode") is False

    assert state.set("DriftTires", False) is None
    assert read_json(path)["driftMode"] is False


def test_slider_clamp_ignores_non_numbers():
    slider = find_slider("DriftIntensity")
    assert slider.clamp("high") == 0
    assert slider.clamp(None) == 0
    assert slider.clamp(True) == 0
    assert slider.clamp(2.7) == 2


def test_mismatched_slider_value_is_kept_on_load(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"DriftIntensity": "high"}', encoding="utf-8")
    state = make_state(path)
    slider = find_slider("DriftIntensity")
    assert state.get("DriftIntensity") == "high"
    assert slider.clamp(state.get("DriftIntensity")) == slider.minimum
    assert read_json(path)["DriftIntensity"] == "high"


def test_sliders_follow_their_toggle(tmp_path):
    state = make_state(tmp_path / "settings.json")
    drift, rgb = find_slider("DriftIntensity"), find_slider("lightSpeed")
    assert (drift.requires, rgb.requires) == ("driftMode", "rgbLights")
    assert not state.is_available(drift)
    state.set("driftMode", True)
    assert state.is_available(drift)
    state.set("DriftTires", True)
    assert not state.is_available(drift)



def test_find_slider_unknown_key():
    with pytest.raises(KeyError):
        find_slider("Regen")


def test_select_language_persists_three_keys(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    language = state.select_language(2)
    assert language.name == "German"
    data = read_json(path)
    assert (data["lang_idx"], data["LANG"], data["current_lang"]) == (2, "de-DE", "German")
    assert state.language == language


@pytest.mark.parametrize("index", [-1, len(LANGUAGES)])
def test_select_language_out_of_range(tmp_path, index):
    state = make_state(tmp_path / "settings.json")
    with pytest.raises(IndexError):
        state.select_language(index)


def test_use_game_language(tmp_path):
    path = tmp_path / "settings.json"
    state = make_state(path)
    state.select_language(3)
    state.use_game_language(True, LANGUAGES[1])
    data = read_json(path)
    assert data["useGameLang"] is True
    assert (data["lang_idx"], data["LANG"], data["current_lang"]) == (0, "fr-FR", "French")

    state.use_game_language(False)
    data = read_json(path)
    assert data["useGameLang"] is False
    assert data["LANG"] == "fr-FR"


def test_reset_restores_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"legacy": 1}', encoding="utf-8")
    state = make_state(path)
    state.set("Regen", True)
    state.reset()
    assert state.values == default_config()
    assert read_json(path) == default_config()


def test_is_available_follows_prerequisite(tmp_path):
    state = make_state(tmp_path / "settings.json")
    aim_enemy = find_toggle("aimEnemy")
    assert state.is_available(find_toggle("Triggerbot"))
    assert not state.is_available(aim_enemy)
    state.set("Triggerbot", True)
    assert state.is_available(aim_enemy)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("de_DE.UTF-8", "German"),
        ("pt_PT", "Portuguese"),
        ("zh_CN", "Chinese (Simplified)"),
        ("fr", "French"),
        ("xx_YY", "English"),
        (None, "English"),
    ],
)
def test_language_for_locale(code, expected):
    assert language_for_locale(code).name == expected


def test_slider_tabs_exist():
    for slider in SLIDERS:
        assert slider.tab in features.FEATURE_TABS
