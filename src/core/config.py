"""Render defaults, overridable through environment variables."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from core.errors import ConfigurationError

# Image
WIDTH = int(os.getenv("RAYTRACER_WIDTH", "1024"))
HEIGHT = int(os.getenv("RAYTRACER_HEIGHT", "768"))

# Sampling
MAX_REFLECTIONS = int(os.getenv("RAYTRACER_MAX_REFLECTIONS", "10"))
SUPER_SAMPLES = int(os.getenv("RAYTRACER_SUPER_SAMPLES", "1"))
DEPTH_COMPLEXITY = int(os.getenv("RAYTRACER_DEPTH_COMPLEXITY", "1"))
DISPERSION = float(os.getenv("RAYTRACER_DISPERSION", "5.0"))
IMAGE_SCALE = float(os.getenv("RAYTRACER_IMAGE_SCALE", "1.0"))

# Execution
BACKENDS = ("python", "numba")
BACKEND = os.getenv("RAYTRACER_BACKEND", "python")
WORKERS = int(os.getenv("RAYTRACER_WORKERS", str(os.cpu_count() or 1)))
TONE_MAPPINGS = ("clamp", "reinhard")
TONE_MAPPING = os.getenv("RAYTRACER_TONE_MAPPING", "clamp")

# Output
DEFAULT_OUTPUT = os.getenv("RAYTRACER_OUTPUT", "out.tga")

# Logging
LOG_LEVEL = os.getenv("RAYTRACER_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("RAYTRACER_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@dataclass
class RenderSettings:
    """
    Settings for one render pass that are not part of the scene file.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        super_samples: Square root of the number of sub-samples per pixel
        depth_complexity: Rays per sub-sample when dispersion is enabled
        seed: Seed for the dispersion sampler, None for fresh entropy
        workers: Worker processes (python backend)
        backend: "python" or "numba"
        tone_mapping: "clamp" or "reinhard"
    """
    width: int = WIDTH
    height: int = HEIGHT
    super_samples: int = SUPER_SAMPLES
    depth_complexity: int = DEPTH_COMPLEXITY
    seed: Optional[int] = None
    workers: int = WORKERS
    backend: str = BACKEND
    tone_mapping: str = TONE_MAPPING

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        for name in ("width", "height", "super_samples", "depth_complexity", "workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.backend not in BACKENDS:
            raise ConfigurationError(f"Unknown backend: {self.backend}")
        if self.tone_mapping not in TONE_MAPPINGS:
            raise ConfigurationError(f"Unknown tone mapping: {self.tone_mapping}")

    @classmethod
    def from_env(cls) -> "RenderSettings":
        return cls()

    def override(self, **changes) -> "RenderSettings":
        """Copy with every non-None keyword applied."""
        changes = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **changes)


__all__ = [
    "WIDTH",
    "HEIGHT",
    "MAX_REFLECTIONS",
    "SUPER_SAMPLES",
    "DEPTH_COMPLEXITY",
    "DISPERSION",
    "IMAGE_SCALE",
    "BACKENDS",
    "BACKEND",
    "WORKERS",
    "TONE_MAPPINGS",
    "TONE_MAPPING",
    "DEFAULT_OUTPUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "RenderSettings",
]
