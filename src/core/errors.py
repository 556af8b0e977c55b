# core/errors.py
from typing import Optional


class RayTracerError(Exception):
    """Base class for every failure that aborts a render."""


class ConfigurationError(RayTracerError):
    """Invalid render settings."""


class SceneError(ConfigurationError):
    """
    The scene description could not be understood. ``token`` holds the
    offending word from the input when there is one.
    """

    def __init__(self, message: str, token: Optional[str] = None, line: Optional[int] = None):
        self.token = token
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class SceneFileError(RayTracerError):
    """The scene file could not be opened or read."""


class ImageFileError(RayTracerError):
    """The rendered image could not be written."""
