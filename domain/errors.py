"""
Exceptions shared across the pipeline.
"""
from __future__ import annotations


class SignSpellError(Exception):
    """Base class for all project errors."""


class ConfigError(SignSpellError, ValueError):
    """Invalid configuration value (raised at the configuration boundary)."""


class InvalidClassIdError(SignSpellError, ValueError):
    """Class id outside the label table."""

    def __init__(self, class_id: object) -> None:
        super().__init__(f"Invalid class id: {class_id!r}")
        self.class_id = class_id


class ModelLoadError(SignSpellError, RuntimeError):
    """The detection model could not be loaded. Fatal at startup."""
