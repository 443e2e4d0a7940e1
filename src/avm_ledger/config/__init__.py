"""Configuration — codec and application settings."""

from avm_ledger.config.settings import AppConfig, CodecConfig

__all__ = ["AppConfig", "CodecConfig"]
