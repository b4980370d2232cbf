import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))
from tweakmenu.utils import config_utils
from tweakmenu.utils.config_utils import RetryPolicy


def test_config_path_precedence(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TWEAKMENU_CONFIG", raising=False)
    assert config_utils.config_path() == tmp_path / config_utils.CONFIG_FILENAME

    monkeypatch.setenv("TWEAKMENU_CONFIG", str(tmp_path / "env.json"))
    assert config_utils.config_path() == tmp_path / "env.json"
    assert config_utils.config_path(tmp_path / "explicit.json") == tmp_path / "explicit.json"


def test_retry_policy_defaults(monkeypatch):
    monkeypatch.delenv("TWEAKMENU_RETRY_INTERVAL", raising=False)
    monkeypatch.delenv("TWEAKMENU_RETRY_MAX", raising=False)
    assert config_utils.retry_policy_from_env() == RetryPolicy(interval=1.0, max_attempts=None)


def test_retry_policy_from_env(monkeypatch):
    monkeypatch.setenv("TWEAKMENU_RETRY_INTERVAL", "0.25")
    monkeypatch.setenv("TWEAKMENU_RETRY_MAX", "5")
    assert config_utils.retry_policy_from_env() == RetryPolicy(interval=0.25, max_attempts=5)


def test_retry_policy_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("TWEAKMENU_RETRY_INTERVAL", "soon")
    monkeypatch.setenv("TWEAKMENU_RETRY_MAX", "many")
    assert config_utils.retry_policy_from_env() == RetryPolicy()

    monkeypatch.setenv("TWEAKMENU_RETRY_MAX", "0")
    assert config_utils.retry_policy_from_env().max_attempts is None
