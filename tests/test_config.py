"""
Configuration loading tests
"""
import pytest

from skin_in.config import Settings, load_settings
from skin_in.utils.exception import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SKIN_IN_CONFIG", "SKIN_IN_MODELS_DIR", "SKIN_IN_ADMIN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings == Settings()
        assert settings.max_upload_bytes == 5 * 1024 * 1024
        assert settings.admin_password is None

    def test_yaml_values(self, tmp_path):
        config = tmp_path / "skin_in.yaml"
        config.write_text(
            "models_dir: /srv/models\n"
            "artifacts:\n"
            "  RNN: rnn/v2.keras\n"
            "port: 9000\n"
        )
        settings = load_settings(str(config))

        assert settings.port == 9000
        assert settings.artifact_path("RNN") == "/srv/models/rnn/v2.keras"
        assert settings.artifact_path("CNN") == "/srv/models/cnn/skin_cnn.keras"

    def test_config_from_env(self, tmp_path, monkeypatch):
        config = tmp_path / "custom.yaml"
        config.write_text("log_level: DEBUG\n")
        monkeypatch.setenv("SKIN_IN_CONFIG", str(config))
        assert load_settings().log_level == "DEBUG"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config = tmp_path / "skin_in.yaml"
        config.write_text("models_dir: /from/file\nadmin_password: file-secret\n")
        monkeypatch.setenv("SKIN_IN_MODELS_DIR", "/from/env")
        monkeypatch.setenv("SKIN_IN_ADMIN_PASSWORD", "env-secret")

        settings = load_settings(str(config))
        assert settings.models_dir == "/from/env"
        assert settings.admin_password == "env-secret"

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / "broken.yaml"
        config.write_text("artifacts: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_settings(str(config))

    def test_yaml_must_be_mapping(self, tmp_path):
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(str(config))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(str(tmp_path / "nope.yaml"))

    def test_unknown_artifact_key(self, tmp_path):
        config = tmp_path / "skin_in.yaml"
        config.write_text("artifacts:\n  SVM: svm.pkl\n")
        with pytest.raises(ConfigurationError, match="SVM"):
            load_settings(str(config))

    def test_invalid_value(self, tmp_path):
        config = tmp_path / "skin_in.yaml"
        config.write_text("max_upload_bytes: 0\n")
        with pytest.raises(ConfigurationError):
            load_settings(str(config))
