"""
Configuration Management for StarBind

Binding conventions (tag key, export prefix, handler suffix) and logging
settings. Configuration is read at registration time, so it must be set
before the first component is registered.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class BindingConfig:
    """Naming conventions used when a model is introspected"""
    tag_key: str = "bind"
    export_prefix: str = "on_"
    handler_suffix: str = "_changed"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class StarBindConfig:
    """Complete StarBind configuration"""
    binding: BindingConfig = field(default_factory=BindingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StarBindConfig':
        """Create configuration from dictionary, ignoring unknown keys"""
        config = cls()
        for section in ("binding", "logging"):
            target = getattr(config, section)
            for key, value in config_dict.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)
        return config

    @classmethod
    def from_environment(cls) -> 'StarBindConfig':
        """Create configuration from environment variables"""
        config = cls()

        if os.getenv('STARBIND_LOG_LEVEL'):
            config.logging.level = os.getenv('STARBIND_LOG_LEVEL').upper()

        if os.getenv('STARBIND_TAG_KEY'):
            config.binding.tag_key = os.getenv('STARBIND_TAG_KEY')

        if os.getenv('STARBIND_EXPORT_PREFIX'):
            config.binding.export_prefix = os.getenv('STARBIND_EXPORT_PREFIX')

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "binding": {f.name: getattr(self.binding, f.name) for f in fields(self.binding)},
            "logging": {f.name: getattr(self.logging, f.name) for f in fields(self.logging)},
        }


# Global configuration management
_current_config: Optional[StarBindConfig] = None


def set_config(config: StarBindConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> StarBindConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        _current_config = StarBindConfig.from_environment()

    return _current_config


def configure_logging(config: Optional[StarBindConfig] = None) -> logging.Logger:
    """Apply the logging section to the ``starbind`` logger."""
    config = config or get_config()
    logger = logging.getLogger("starbind")
    logger.setLevel(config.logging.level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.logging.format))
        logger.addHandler(handler)
    return logger


__all__ = [
    "BindingConfig", "LoggingConfig", "StarBindConfig",
    "set_config", "get_config", "configure_logging",
]
