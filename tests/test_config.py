import logging

import pytest

from core.config import RenderSettings
from core.errors import ConfigurationError, RayTracerError, SceneError, SceneFileError
from core.logging_config import setup_logging


@pytest.mark.parametrize("changes", [
    {"width": 0},
    {"height": -3},
    {"super_samples": 0},
    {"depth_complexity": 0},
    {"workers": 0},
    {"backend": "cuda"},
    {"tone_mapping": "filmic"},
])
def test_invalid_settings(changes):
    with pytest.raises(ConfigurationError):
        RenderSettings(**changes)


def test_override_skips_none():
    settings = RenderSettings(width=10, height=10, workers=1)
    changed = settings.override(width=20, height=None, seed=3)
    assert (changed.width, changed.height, changed.seed) == (20, 10, 3)
    assert settings.width == 10


def test_override_validates():
    with pytest.raises(ConfigurationError):
        RenderSettings(workers=1).override(super_samples=-1)


def test_error_hierarchy():
    assert issubclass(SceneError, ConfigurationError)
    assert issubclass(ConfigurationError, RayTracerError)
    assert issubclass(SceneFileError, RayTracerError)
    assert SceneError("Type not found: x", token="x").token == "x"


def test_setup_logging_does_not_duplicate_handlers():
    logger = setup_logging("raytracer-test", "DEBUG")
    setup_logging("raytracer-test", "DEBUG")
    ours = [h for h in logger.handlers if getattr(h, "_raytracer_handler", False)]
    assert len(ours) == 1
    assert logger.level == logging.DEBUG


def test_setup_logging_file(tmp_path):
    log_file = tmp_path / "logs" / "render.log"
    logger = setup_logging("raytracer-file-test", "INFO", log_file=log_file)
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()
