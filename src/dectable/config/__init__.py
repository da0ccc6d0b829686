"""Configuration for dectable."""

from dectable.config.settings import DecTableConfig, load_config

__all__ = ["DecTableConfig", "load_config"]
