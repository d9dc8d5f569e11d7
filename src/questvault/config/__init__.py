"""Versioned configuration files."""

from questvault.config.manager import ConfigManager
from questvault.config.models import AppSettings, ConfigEnvelope, LoggingConfig

__all__ = ["AppSettings", "ConfigEnvelope", "ConfigManager", "LoggingConfig"]
