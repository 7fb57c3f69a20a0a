"""
Settings: YAML file, dotenv and HREVAL_* environment overrides.
"""

from pathlib import Path

import pytest

from hreval.infra.config import PROJECT_ROOT, Settings, load_settings, reset_settings
from hreval.infra.exceptions import ConfigError

ENV_VARS = ["HREVAL_API_BASE_URL", "HREVAL_API_TIMEOUT", "HREVAL_SESSION_DIR",
            "HREVAL_LOG_LEVEL", "HREVAL_LOG_FILE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "app.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSettings:
    def test_yaml_values(self, tmp_path):
        config = _write(tmp_path, (
            "api:\n"
            "  base_url: https://hr.example.com/api/\n"
            "  timeout: 12\n"
            "session:\n"
            "  dir: /tmp/hr-sessions\n"
            "logging:\n"
            "  level: debug\n"
        ))
        settings = load_settings(config, tmp_path / ".env.local")

        assert settings.api_base_url == "https://hr.example.com/api"
        assert settings.api_timeout == 12.0
        assert settings.session_dir == Path("/tmp/hr-sessions")
        assert settings.log_level == "DEBUG"
        assert settings.log_file is None

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml", tmp_path / ".env.local")
        assert settings == Settings.from_dict({})
        assert settings.session_dir == PROJECT_ROOT / "data" / "sessions"

    def test_environment_wins(self, tmp_path, monkeypatch):
        config = _write(tmp_path, "api:\n  base_url: http://yaml/api\n")
        monkeypatch.setenv("HREVAL_API_BASE_URL", "http://env/api")
        monkeypatch.setenv("HREVAL_API_TIMEOUT", "5")

        settings = load_settings(config, tmp_path / ".env.local")
        assert settings.api_base_url == "http://env/api"
        assert settings.api_timeout == 5.0

    def test_dotenv_file(self, tmp_path, monkeypatch):
        dotenv = tmp_path / ".env.local"
        dotenv.write_text("HREVAL_LOG_LEVEL=WARNING\n", encoding="utf-8")
        # load_dotenv writes into os.environ; let monkeypatch restore it
        monkeypatch.setenv("HREVAL_LOG_LEVEL", "")
        monkeypatch.delenv("HREVAL_LOG_LEVEL")

        settings = load_settings(tmp_path / "absent.yaml", dotenv)
        assert settings.log_level == "WARNING"

    def test_cached_until_reset(self, tmp_path):
        first = load_settings(tmp_path / "absent.yaml", tmp_path / ".env.local")
        assert load_settings() is first
        reset_settings()
        assert load_settings() is not first


class TestValidation:
    @pytest.mark.parametrize("text", [
        "api:\n  timeout: soon\n",
        "api:\n  timeout: 0\n",
        "logging:\n  level: LOUD\n",
        "- just\n- a list\n",
        "api: [unclosed\n",
    ])
    def test_rejected(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_settings(_write(tmp_path, text), tmp_path / ".env.local")
