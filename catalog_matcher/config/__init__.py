"""Matcher configuration"""

from .config_loader import format_config, load_config

__all__ = ["format_config", "load_config"]
