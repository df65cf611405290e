import pytest

from camera_viewer.frameworks.config import AppConfig
from camera_viewer.frameworks.exceptions import ConfigurationError


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()

        assert config.camera.requested_fps == 10
        assert config.camera.max_devices == 10
        assert config.window.title == "cam"
        assert config.window.always_on_top is True
        assert config.window.title_refresh_frames == 10
        assert config.window.fps_average_window == 5
        assert config.exposure.target_lightness == 15.0
        assert config.exposure.lightness_range == 10.0

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "camera:\n  requested_fps: 30\nwindow:\n  mirrored: true\n"
        )

        config = AppConfig.from_yaml(str(path))

        assert config.camera.requested_fps == 30
        assert config.window.mirrored is True
        assert config.exposure.target_lightness == 15.0

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        config = AppConfig.from_yaml_or_default(str(tmp_path / "missing.yaml"))

        assert config == AppConfig()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("camera:\n  requested_fps: 0\n")

        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(str(path))
