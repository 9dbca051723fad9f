"""
Tests for Configuration
========================
"""

import dataclasses
import logging
import os

import pytest
import yaml

import reaction_mirror
from reaction_mirror.modules.utils.config import DEFAULT_CONFIG_PATH, Config, GestureThresholds


def write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestGestureThresholds:
    """Test suite for the immutable threshold set."""

    def test_defaults(self):
        t = GestureThresholds()
        assert t.mouth_open_ratio == 0.055
        assert t.index_near_lip_px == 50.0
        assert t.index_up_angle_deg == 60.0
        assert t.smooth_frames == 3
        assert t.up_cone_deg == 30.0

    def test_frozen(self):
        t = GestureThresholds()
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.smooth_frames = 5

    def test_from_dict_partial(self):
        t = GestureThresholds.from_dict({"index_near_lip_px": 30, "smooth_frames": 5})
        assert t.index_near_lip_px == 30.0
        assert t.smooth_frames == 5
        assert t.mouth_open_ratio == 0.055

    def test_from_empty(self):
        assert GestureThresholds.from_dict(None) == GestureThresholds()

    @pytest.mark.parametrize("kwargs", [
        {"smooth_frames": 0},
        {"smooth_frames": -2},
        {"smooth_frames": 2.0},
        {"mouth_open_ratio": -0.1},
        {"index_near_lip_px": -1},
        {"index_up_angle_deg": 120},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            GestureThresholds(**kwargs)


class TestConfig:
    """Test suite for the YAML-backed config singleton."""

    def test_singleton(self):
        assert Config() is Config()

    def test_reset_creates_new_instance(self):
        first = Config()
        Config.reset()
        assert Config() is not first

    def test_load_file(self, tmp_path):
        path = write_config(tmp_path, {
            "camera": {"device_id": 2, "width": 1280, "height": 720, "fps": 60},
            "recognition": {"mouth_open_ratio": 0.08, "smooth_frames": 5},
        })
        config = Config().load(path)
        assert config.get("camera.device_id") == 2
        assert config.camera["width"] == 1280
        assert config.thresholds.mouth_open_ratio == 0.08
        assert config.thresholds.smooth_frames == 5
        assert config.thresholds.index_near_lip_px == 50.0

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = Config().load(str(tmp_path / "absent.yaml"))
        assert "not found" in caplog.text
        assert config.thresholds == GestureThresholds()
        assert config.camera == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        config = Config().load(str(path))
        assert config.thresholds == GestureThresholds()

    def test_shipped_config_matches_defaults(self):
        config = Config().load()
        assert config.thresholds == GestureThresholds()
        assert config.get("presentation.mirror_video") is True
        assert config.get("face_mesh.max_num_faces") == 1
        assert config.get("hands.max_num_hands") == 2

    def test_type_mismatch_warns(self, tmp_path, caplog):
        path = write_config(tmp_path, {"camera": {"device_id": "zero"}})
        with caplog.at_level(logging.WARNING):
            Config().load(path)
        assert "camera.device_id" in caplog.text

    def test_int_accepted_for_float(self, tmp_path, caplog):
        path = write_config(tmp_path, {"recognition": {"index_near_lip_px": 40}})
        with caplog.at_level(logging.WARNING):
            Config().load(path)
        assert "index_near_lip_px" not in caplog.text

    def test_invalid_threshold_raises(self, tmp_path):
        path = write_config(tmp_path, {"recognition": {"smooth_frames": 0}})
        config = Config().load(path)
        with pytest.raises(ValueError):
            config.thresholds

    def test_get_default(self):
        config = Config().load()
        assert config.get("camera.nonexistent", 42) == 42
        assert config.get("nope.deeper.still") is None

    def test_set_override(self, tmp_path):
        config = Config().load(write_config(tmp_path, {}))
        config.set("camera.device_id", 3)
        config.set("presentation.mirror_video", False)
        assert config.camera == {"device_id": 3}
        assert config.get("presentation.mirror_video") is False

    def test_default_config_ships_in_package(self):
        package_dir = os.path.dirname(reaction_mirror.__file__)
        assert DEFAULT_CONFIG_PATH == os.path.join(package_dir, "config", "config.yaml")
        assert os.path.isfile(DEFAULT_CONFIG_PATH)

    def test_default_load_reads_packaged_file(self, caplog):
        with caplog.at_level(logging.INFO):
            Config().load()
        assert DEFAULT_CONFIG_PATH in caplog.text
        assert "not found" not in caplog.text

    def test_relative_paths_resolve_against_working_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert os.path.realpath(Config().base_dir) == os.path.realpath(tmp_path)
