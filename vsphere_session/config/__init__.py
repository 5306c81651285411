"""
Config Module - Black Box Interface

Purpose: Session configuration
Interface: Config, EnvConfigProvider, FileConfigProvider
Hidden: Config sources, validation logic, environment parsing
"""

from .provider import (
    Config,
    ConfigProvider,
    EnvConfigProvider,
    FileConfigProvider,
    SessionSettings,
)

__all__ = ["Config", "ConfigProvider", "EnvConfigProvider", "FileConfigProvider", "SessionSettings"]
