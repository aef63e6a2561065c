"""Configuration module — exports the Settings class."""

from reelpick.config.settings import Settings

__all__ = ["Settings"]
